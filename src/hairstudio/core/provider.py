"""Base class for image-generation providers.

A provider is the remote multimodal capability that turns images plus a
text instruction into new images plus text.  The rest of the application
only talks to :class:`ImageProviderBase`, so the hosted Gemini API can be
swapped for another service (or for a fake in tests) without touching the
orchestrator or the HTTP layer.

Provider Contract
-----------------
- Inputs are an ordered list of images followed by one text prompt.
- Exactly one synchronous call is made per generation.  No retries, no
  streaming, no partial results.
- The response is an ordered list of :class:`ProviderPart`, each holding
  inline image data, text, or nothing.
- Any failure is raised as :class:`~hairstudio.core.errors.ProviderError`.

Usage Example
-------------
    >>> from hairstudio.core.adapters import GeminiImageProvider
    >>> provider = GeminiImageProvider(api_key="...", model="gemini-3-pro-image-preview")
    >>> parts = provider.generate_content([base_image], "Give this person a bob cut.")

See Also
--------
- GeminiImageProvider: Google Gemini implementation
- GenerationOrchestrator: The only caller
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .models import ImageInput, ProviderPart

logger = logging.getLogger(__name__)


class ImageProviderBase(ABC):
    """Abstract base class for image-generation providers.

    Attributes
    ----------
    name : str
        Short identifier of the provider (e.g., "gemini")
    description : str
        Brief description of the provider
    model : str
        Remote model identifier the provider calls

    Examples
    --------
    Creating a custom provider:

        >>> class EchoProvider(ImageProviderBase):
        ...     name = "echo"
        ...
        ...     def generate_content(self, images, prompt):
        ...         return [ProviderPart(text=prompt)]
    """

    name: str = "base"
    description: str = "Base class for image-generation providers"

    def __init__(self, model: str = "") -> None:
        self.model = model

    @abstractmethod
    def generate_content(
        self, images: Sequence[ImageInput], prompt: str
    ) -> list[ProviderPart]:
        """Send images and an instruction to the provider.

        Args:
            images: Visual inputs in the order the prompt refers to them.
            prompt: The text instruction, sent after the images.

        Returns
        -------
        list[ProviderPart]
            Response parts in the order the provider returned them

        Raises
        ------
        ProviderError
            If the call fails for any reason
        """
        pass

    def get_provider_info(self) -> dict[str, Any]:
        """Get information about this provider.

        Returns
        -------
        dict[str, Any]
            Dictionary containing provider metadata
        """
        return {
            "name": self.name,
            "description": self.description,
            "model": self.model,
        }
