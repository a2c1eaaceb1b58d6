"""Prompt compilation for hairstyle generation.

The provider receives one natural-language instruction per request.  Two
templates exist and the choice between them depends on the mode and on
whether a reference image actually arrived.

Reference Structure (``mode="reference"`` with a reference image)::

    [Fixed: stylist role]

    [Fixed: two-image framing - Base Image, Reference Image]

    [Fixed: transfer task]

    [Fixed: transfer instructions]

    Additional Details: [description or "None"]

    Return ONLY the image.

Preset Structure (everything else)::

    [Fixed: stylist role]

    [Fixed: single-image framing]
    Style: [style or "Maintain the original hairstyle."]
    Color: [color or "Maintain the original hair color."]
    Additional Details: [description or "None"]

    [Fixed: preservation directive]

    Return ONLY the image.

Sections are separated by double newlines.  The description is inserted
verbatim; it is never trimmed or rewritten.

Usage
-----
::

    prompt = build_prompt(
        mode="preset",
        description="Slightly shorter at the back.",
        style="Bob Cut",
        color="",
        has_reference=False,
    )
"""

from __future__ import annotations

from hairstudio.core.models import MODE_PRESET, MODE_REFERENCE, GenerationMode

# ---------------------------------------------------------------------------
# Preset catalogue offered by the client.  The server accepts any free-text
# style or colour; these are only the suggested values.
# ---------------------------------------------------------------------------

HAIRSTYLE_PRESETS: tuple[str, ...] = (
    "Bob Cut",
    "Pixie Cut",
    "Long Layers",
    "Buzz Cut",
    "Curly Shag",
    "Afro",
    "Mohawk",
)

HAIR_COLOR_PRESETS: tuple[str, ...] = (
    "Blonde",
    "Brunette",
    "Black",
    "Red",
    "Silver/Grey",
    "Pastel Pink",
    "Blue",
)

GENERATION_MODES: tuple[GenerationMode, ...] = (MODE_PRESET, MODE_REFERENCE)

# ---------------------------------------------------------------------------
# Fixed sections.
# ---------------------------------------------------------------------------

_ROLE = "You are an expert hair stylist and image generator."

_OUTPUT_DIRECTIVE = "Return ONLY the image."

_KEEP_STYLE = "Maintain the original hairstyle."
_KEEP_COLOR = "Maintain the original hair color."

_REFERENCE_FRAMING = (
    "I have provided two images:\n"
    '1. The first image is the "Base Image" containing a person.\n'
    '2. The second image is a "Reference Image" containing a specific hairstyle.'
)

_REFERENCE_TASK = (
    "YOUR TASK:\n"
    "Generate a photorealistic image of the person from the Base Image wearing the "
    "hairstyle shown in the Reference Image."
)

_REFERENCE_INSTRUCTIONS = (
    "INSTRUCTIONS:\n"
    "- Transfer the hairstyle from the Reference Image onto the person in the Base Image.\n"
    "- Adapt the reference hairstyle to fit the head shape and angle of the person in "
    "the Base Image naturally.\n"
    "- Maintain the person's original facial features, expression, lighting, and "
    "background from the Base Image as much as possible.\n"
    "- Use the hair color from the Reference Image unless specified otherwise in the "
    "additional details."
)

_PRESET_FRAMING = (
    "I have uploaded an image of a person.\n"
    "Please generate a new photorealistic version of this image with the following "
    "specifications:"
)

_PRESERVATION_DIRECTIVE = (
    "Maintain the person's original facial features, expression, lighting, and "
    "background as much as possible.\n"
    "The goal is to visualize how this specific person would look with these "
    "specific changes."
)


def _additional_details(description: str) -> str:
    return f"Additional Details: {description or 'None'}"


def build_reference_prompt(description: str) -> str:
    """Compile the hairstyle-transfer instruction for two supplied images.

    Args:
        description: Free-text details from the user, inserted verbatim.
            An empty string becomes ``"None"``.

    Returns:
        The compiled instruction.
    """
    parts = [
        _ROLE,
        _REFERENCE_FRAMING,
        _REFERENCE_TASK,
        _REFERENCE_INSTRUCTIONS,
        _additional_details(description),
        _OUTPUT_DIRECTIVE,
    ]
    return "\n\n".join(parts)


def build_preset_prompt(style: str, color: str, description: str) -> str:
    """Compile the preset-attribute instruction for a single image.

    Args:
        style: Desired hairstyle.  Empty keeps the original hairstyle.
        color: Desired hair colour.  Empty keeps the original colour.
        description: Free-text details, inserted verbatim.

    Returns:
        The compiled instruction.
    """
    specification = "\n".join(
        [
            _PRESET_FRAMING,
            f"Style: {style or _KEEP_STYLE}",
            f"Color: {color or _KEEP_COLOR}",
            _additional_details(description),
        ]
    )
    parts = [
        _ROLE,
        specification,
        _PRESERVATION_DIRECTIVE,
        _OUTPUT_DIRECTIVE,
    ]
    return "\n\n".join(parts)


def build_prompt(
    mode: GenerationMode,
    description: str,
    style: str,
    color: str,
    *,
    has_reference: bool,
) -> str:
    """Pick the template for a request and compile it.

    The reference template is used only when the mode is ``"reference"``
    **and** a reference image is attached.  Reference mode without an
    image falls back to the preset template.  Style and colour are ignored
    by the reference template.

    Args:
        mode: ``"preset"`` or ``"reference"``.
        description: Free-text details.
        style: Desired hairstyle (preset template only).
        color: Desired hair colour (preset template only).
        has_reference: Whether a reference image was supplied.

    Returns:
        The compiled instruction string.
    """
    if mode == MODE_REFERENCE and has_reference:
        return build_reference_prompt(description)
    return build_preset_prompt(style, color, description)
