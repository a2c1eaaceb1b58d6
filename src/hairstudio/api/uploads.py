"""Multipart upload handling.

Uploaded files are read fully into memory and wrapped in
:class:`~hairstudio.core.models.ImageInput`.  They are never written to
disk and are discarded with the request.

The MIME type reported by the browser is trusted when it is an ``image/*``
type.  When it is missing or generic (``application/octet-stream``), the
bytes are sniffed with Pillow; bytes Pillow cannot identify are rejected as
a malformed upload.
"""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError
from starlette.datastructures import UploadFile

from hairstudio.core.errors import ValidationError
from hairstudio.core.models import ImageInput

logger = logging.getLogger(__name__)

INVALID_IMAGE = "Uploaded file is not a valid image"


def detect_mime_type(data: bytes) -> str:
    """Identify image bytes with Pillow and return their MIME type.

    Args:
        data: Raw file contents.

    Returns:
        MIME type of the detected format (``image/png`` if Pillow knows the
        format but has no MIME mapping for it).

    Raises:
        ValidationError: If the bytes are not a recognisable image.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ValidationError(INVALID_IMAGE) from e

    return Image.MIME.get(fmt or "", "image/png")


async def read_upload(upload: UploadFile | str | None) -> ImageInput | None:
    """Read an optional multipart file field into memory.

    Args:
        upload: The uploaded file.  ``None`` (field absent) and plain text
            values (field sent without a file) both count as no file.

    Returns:
        The image bytes and MIME type, or ``None`` when no file was sent.

    Raises:
        ValidationError: If the file has no image content type and is not a
            recognisable image.
    """
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None

    try:
        data = await upload.read()
    finally:
        await upload.close()

    mime_type = upload.content_type or ""
    if not mime_type.startswith("image/"):
        logger.debug(f"Sniffing type of upload '{upload.filename}' ({mime_type or 'none'})")
        mime_type = detect_mime_type(data)

    return ImageInput(data=data, mime_type=mime_type)
