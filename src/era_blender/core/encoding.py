"""Image payload helpers: data URLs, base64 decoding and MIME sniffing."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from era_blender.core.errors import InvalidImageEncodingError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"

_DATA_URL_PREFIX = re.compile(r"^data:(image/[a-z0-9.+-]+);base64,", re.IGNORECASE)


@dataclass(frozen=True)
class DecodedImage:
    """Raw image bytes together with the MIME type sent to the model."""

    data: bytes
    mime_type: str


def split_data_url(value: str) -> tuple[str | None, str]:
    """Strip an optional ``data:image/...;base64,`` prefix.

    Returns:
        Tuple of ``(declared_mime_type, base64_payload)``.  The MIME type is
        ``None`` when no prefix was present.
    """
    match = _DATA_URL_PREFIX.match(value)
    if match is None:
        return None, value
    return match.group(1).lower(), value[match.end() :]


def decode_base64_image(value: str) -> bytes:
    """Decode a base64 image payload, with or without a data-URL prefix.

    Raises:
        InvalidImageEncodingError: If the payload is empty or not valid base64.
    """
    _, payload = split_data_url(value.strip())
    # Data URLs produced by some clients wrap lines; whitespace is not data.
    payload = "".join(payload.split())
    if not payload:
        raise InvalidImageEncodingError()
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageEncodingError(details=str(e)) from e


def sniff_image_mime(data: bytes) -> str | None:
    """Identify an image's MIME type from its bytes using Pillow.

    Returns:
        The MIME type, or ``None`` if Pillow does not recognise the data.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError, ValueError):
        return None
    if not fmt:
        return None
    return Image.MIME.get(fmt)


def decode_image(value: str) -> DecodedImage:
    """Decode an image payload and work out its MIME type.

    The type is taken from the bytes themselves when Pillow recognises them,
    then from the data-URL prefix, and finally defaults to JPEG.
    """
    declared, _ = split_data_url(value.strip())
    data = decode_base64_image(value)
    mime_type = sniff_image_mime(data) or declared or DEFAULT_IMAGE_MIME
    return DecodedImage(data=data, mime_type=mime_type)


def encode_data_url(data: bytes, mime_type: str | None = None) -> str:
    """Encode raw bytes as a ``data:<mime>;base64,`` URL."""
    mime_type = mime_type or sniff_image_mime(data) or DEFAULT_IMAGE_MIME
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def looks_like_image(content: str) -> bool:
    """Decide whether a free-form ``content`` value carries an image.

    Values with a ``data:image/...;base64,`` prefix are images.  Otherwise
    the value counts as an image only if it is strictly valid base64 that
    Pillow recognises, so ordinary scene text (even text that happens to be
    valid base64, or that opens with "Data:") is treated as text.
    """
    stripped = content.strip()
    if _DATA_URL_PREFIX.match(stripped):
        return True
    if not stripped or any(ch.isspace() for ch in stripped):
        return False
    try:
        data = base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError):
        return False
    return sniff_image_mime(data) is not None
