"""Hairstyle generation orchestration.

This module provides :class:`GenerationOrchestrator`, which turns one
:class:`~hairstudio.core.models.GenerationRequest` into one
:class:`~hairstudio.core.models.GenerationResult`:

1. Reject the request if the base image is missing.
2. Collect the visual inputs - base image first, then the reference image
   when reference mode is active and one was supplied.
3. Compile the instruction with :func:`~hairstudio.core.prompt_builder.build_prompt`.
4. Make a single provider call.
5. Extract the first image and all text from the response.

Any error aborts the whole request; nothing is retried.

Usage
-----
::

    from hairstudio.core.adapters import GeminiImageProvider
    from hairstudio.core.orchestrator import GenerationOrchestrator

    orchestrator = GenerationOrchestrator(GeminiImageProvider(api_key="..."))
    result = orchestrator.generate(request)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hairstudio.core.errors import ValidationError
from hairstudio.core.models import (
    GenerationRequest,
    GenerationResult,
    ImageInput,
    ProviderPart,
)
from hairstudio.core.prompt_builder import build_prompt
from hairstudio.core.provider import ImageProviderBase

logger = logging.getLogger(__name__)

MISSING_BASE_IMAGE = "No base image uploaded"


def to_data_uri(mime_type: str | None, data: str) -> str:
    """Build a ``data:`` URI from a MIME type and a base64 payload."""
    return f"data:{mime_type or 'image/png'};base64,{data}"


def extract_result(parts: Iterable[ProviderPart]) -> GenerationResult:
    """Reduce provider response parts to a single result.

    Parts are scanned in order.  The first part with inline image data
    becomes the result image; later image parts are dropped.  Every text
    part is concatenated, in order, into the result text.

    Args:
        parts: Provider response parts.

    Returns:
        The extracted :class:`GenerationResult`.  ``image`` is ``None``
        when no image part was returned.
    """
    image: str | None = None
    texts: list[str] = []

    for part in parts:
        if part.has_image:
            if image is None:
                image = to_data_uri(part.mime_type, part.data or "")
        elif part.text:
            texts.append(part.text)

    return GenerationResult(image=image, text="".join(texts))


class GenerationOrchestrator:
    """Runs hairstyle generations against an image provider.

    The orchestrator holds no per-request state, so one instance is shared
    by all concurrent requests.

    Attributes:
        provider (ImageProviderBase):
            The provider every generation is sent to.
        logger (logging.Logger):
            Logger that receives request and provider-call events.
    """

    def __init__(
        self,
        provider: ImageProviderBase,
        logger: logging.Logger | None = None,
    ) -> None:
        self.provider = provider
        self.logger = logger or logging.getLogger(__name__)

    def collect_images(self, req: GenerationRequest) -> list[ImageInput]:
        """Return the visual inputs for a request in provider order.

        Raises:
            ValidationError: If the base image is missing.
        """
        if req.base_image is None:
            raise ValidationError(MISSING_BASE_IMAGE)

        images = [req.base_image]
        if req.uses_reference():
            images.append(req.reference_image)
        return images

    def compile_prompt(self, req: GenerationRequest) -> str:
        """Compile the text instruction for a request."""
        return build_prompt(
            req.mode,
            req.description,
            req.style,
            req.color,
            has_reference=req.reference_image is not None,
        )

    def generate(self, req: GenerationRequest) -> GenerationResult:
        """Generate a restyled image for one request.

        Args:
            req: The generation request.

        Returns:
            The first returned image (as a data URI) and all returned text.

        Raises:
            ValidationError: If the base image is missing.
            ProviderError: If the provider call fails.
        """
        images = self.collect_images(req)

        self.logger.info(
            f"Received base image: {req.base_image.mime_type}, Size: {req.base_image.size} bytes"
        )
        if req.reference_image is not None:
            self.logger.info(
                f"Received reference image: {req.reference_image.mime_type}, "
                f"Size: {req.reference_image.size} bytes"
            )
            if not req.uses_reference():
                self.logger.debug(f"Reference image ignored in {req.mode} mode.")

        prompt = self.compile_prompt(req)

        self.logger.info(f"Sending request to {self.provider.name} ({len(images)} image(s))...")
        parts = self.provider.generate_content(images, prompt)
        self.logger.info(f"{self.provider.name} response received.")

        result = extract_result(parts)
        if result.image is None:
            self.logger.warning("Provider returned no image; text only.")
        return result
