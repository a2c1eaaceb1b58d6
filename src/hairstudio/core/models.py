"""Request-scoped data models for hairstyle generation.

Nothing here is persisted.  Each object is created when a request arrives
and discarded once the response has been sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

GenerationMode = Literal["preset", "reference"]

MODE_PRESET: GenerationMode = "preset"
MODE_REFERENCE: GenerationMode = "reference"


def normalize_mode(value: str | None) -> GenerationMode:
    """Map a submitted mode string onto a known mode.

    Only the exact value ``"reference"`` selects reference mode; anything
    else (including a missing value) is preset mode.
    """
    if value == MODE_REFERENCE:
        return MODE_REFERENCE
    return MODE_PRESET


@dataclass(frozen=True)
class ImageInput:
    """An uploaded image held in memory.

    Attributes:
        data: Raw image bytes.
        mime_type: Reported or detected MIME type (e.g. ``image/jpeg``).
    """

    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class GenerationRequest:
    """Everything the client submitted for one generation.

    ``base_image`` is typed optional so that a request with the file missing
    can still be represented; the orchestrator rejects it.
    ``reference_image`` only matters in reference mode and ``style`` /
    ``color`` only matter in preset mode.  Empty strings mean "keep the
    original".
    """

    base_image: ImageInput | None
    mode: GenerationMode = MODE_PRESET
    description: str = ""
    style: str = ""
    color: str = ""
    reference_image: ImageInput | None = None

    def uses_reference(self) -> bool:
        """Check whether the reference image takes part in this generation.

        Returns:
            True in reference mode with a reference image attached
        """
        return self.mode == MODE_REFERENCE and self.reference_image is not None


@dataclass
class GenerationResult:
    """What came back from the provider.

    Attributes:
        image: The first returned image as a ``data:`` URI, or ``None``.
        text: All returned text parts concatenated in order.
    """

    image: str | None = None
    text: str = ""


@dataclass(frozen=True)
class ProviderPart:
    """One content part of a provider response.

    A part carries inline image data (``mime_type`` plus base64 ``data``),
    text, or neither.
    """

    text: str | None = None
    mime_type: str | None = None
    data: str | None = None

    @property
    def has_image(self) -> bool:
        return bool(self.data)

