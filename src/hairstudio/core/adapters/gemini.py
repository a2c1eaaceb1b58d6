"""Google Gemini provider.

Calls ``models.generate_content`` of the ``google-genai`` SDK with the
uploaded images as inline parts followed by the text instruction.

Gemini-Specific Notes
---------------------
- The SDK client is created lazily on the first call, so the server starts
  without an API key.  A missing key surfaces as a :class:`ProviderError`
  when a generation is attempted.
- Image parts come back with raw bytes in ``inline_data.data``; they are
  re-encoded to base64 here so the rest of the application deals with one
  representation.
- Only the first candidate is read.
"""

import base64
import logging
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from ..errors import ProviderError
from ..models import ImageInput, ProviderPart
from ..provider import ImageProviderBase

logger = logging.getLogger(__name__)


class GeminiImageProvider(ImageProviderBase):
    """Image generation through the Google Gemini API.

    Args:
        api_key: Gemini API key.  ``None`` or empty defers the failure to
            call time.
        model: Gemini model ID.
        client: Pre-built ``genai.Client``.  Mainly for tests.
    """

    name = "gemini"
    description = "Google Gemini multimodal image generation"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-3-pro-image-preview",
        client: Any = None,
    ) -> None:
        super().__init__(model=model)
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ProviderError("Gemini API key is not configured")
            self._client = genai.Client(api_key=self._api_key)
            logger.info(f"Created Gemini client for model {self.model}")
        return self._client

    def generate_content(
        self, images: Sequence[ImageInput], prompt: str
    ) -> list[ProviderPart]:
        client = self._get_client()

        contents: list[Any] = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            for image in images
        ]
        contents.append(prompt)

        try:
            response = client.models.generate_content(model=self.model, contents=contents)
        except Exception as e:
            raise ProviderError(str(e) or e.__class__.__name__) from e

        return self._parts_from_response(response)

    @staticmethod
    def _parts_from_response(response: Any) -> list[ProviderPart]:
        """Flatten the first candidate of a Gemini response into provider parts.

        A response with no candidates or no content yields an empty list.
        """
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []

        content = getattr(candidates[0], "content", None)
        raw_parts = getattr(content, "parts", None) or []

        parts: list[ProviderPart] = []
        for raw in raw_parts:
            inline = getattr(raw, "inline_data", None)
            if inline is not None and inline.data:
                data = inline.data
                if isinstance(data, bytes):
                    data = base64.b64encode(data).decode("ascii")
                parts.append(ProviderPart(mime_type=inline.mime_type, data=data))
            elif getattr(raw, "text", None):
                parts.append(ProviderPart(text=raw.text))
            else:
                parts.append(ProviderPart())
        return parts
