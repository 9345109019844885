"""Image payload encoding for the showcase application.

Images are stored inline as ``data:<mime>;base64,<data>`` URLs. Raw uploads
are checked with Pillow before encoding so only decodable images reach the
gallery.
"""

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

from ..config import get_max_upload_bytes
from ..error_handling import ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)

SUPPORTED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP", "BMP"}

# Non-canonical MIME types browsers send for supported formats
MIME_ALIASES = {"image/jpg": "image/jpeg", "image/x-ms-bmp": "image/bmp"}


def detect_image_format(data: bytes) -> str:
    """
    Identify the image format of raw bytes.

    Args:
        data: Raw image bytes

    Returns:
        str: Pillow format name (e.g. ``PNG``)

    Raises:
        ValidationError: If the bytes are not a supported, decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(
            f"Uploaded file is not a readable image: {e}",
            code="invalid_image",
            user_message="Please choose an image file.",
        ) from e

    if image_format not in SUPPORTED_FORMATS:
        raise ValidationError(
            f"Unsupported image format: {image_format}",
            code="unsupported_format",
            user_message=f"Supported formats: {', '.join(sorted(SUPPORTED_FORMATS))}",
            details={"format": image_format},
        )

    return image_format


def check_image_bytes(data: bytes, max_bytes: int | None = None) -> str:
    """
    Check raw image bytes against the size limit and Pillow.

    Args:
        data: Raw image bytes
        max_bytes: Size limit (defaults to SHOWCASE_MAX_UPLOAD_BYTES)

    Returns:
        str: Pillow format name

    Raises:
        ValidationError: If the data is empty, too large or not an image
    """
    if not data:
        raise ValidationError("Image payload is empty", code="missing_payload", user_message="Please choose an image.")

    limit = max_bytes or get_max_upload_bytes()
    if len(data) > limit:
        raise ValidationError(
            f"Image is too large ({len(data)} bytes, limit {limit})",
            code="payload_too_large",
            user_message=f"Images must be smaller than {limit // (1024 * 1024) or 1} MB.",
            details={"size": len(data), "limit": limit},
        )

    return detect_image_format(data)


def mime_type_for(image_format: str) -> str:
    """MIME type stored for a Pillow format name."""
    return Image.MIME.get(image_format, f"image/{image_format.lower()}")


def encode_image_bytes(data: bytes, max_bytes: int | None = None) -> str:
    """
    Encode raw image bytes as a data URL.

    Args:
        data: Raw image bytes
        max_bytes: Size limit (defaults to SHOWCASE_MAX_UPLOAD_BYTES)

    Returns:
        str: ``data:image/...;base64,...`` URL

    Raises:
        ValidationError: If the data is empty, too large or not an image
    """
    image_format = check_image_bytes(data, max_bytes)
    encoded = base64.b64encode(data).decode("ascii")

    logger.debug("image_payload_encoded", format=image_format, size=len(data))
    return f"data:{mime_type_for(image_format)};base64,{encoded}"


def decode_data_url(payload: str) -> tuple[str, bytes]:
    """
    Split an image data URL into MIME type and raw bytes.

    Raises:
        ValidationError: If the URL is not a base64 image data URL
    """
    if not payload.startswith("data:") or "," not in payload:
        raise ValidationError("Payload is not a data URL", code="invalid_payload", user_message="Please choose an image.")

    header, encoded = payload[len("data:") :].split(",", 1)
    mime_type, _, encoding = header.partition(";")

    if not mime_type.startswith("image/") or encoding != "base64":
        raise ValidationError(
            f"Payload must be a base64 image data URL, got '{header}'",
            code="invalid_payload",
            user_message="Please choose an image.",
        )

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(
            f"Payload is not valid base64: {e}", code="invalid_payload", user_message="Please choose an image."
        ) from e

    if not data:
        raise ValidationError("Image payload is empty", code="missing_payload", user_message="Please choose an image.")

    return mime_type, data


def normalize_payload(payload: str | bytes | None, max_bytes: int | None = None) -> str:
    """
    Turn an upload payload into the stored data URL form.

    Raw bytes are verified with Pillow and encoded. Data URLs are decoded and
    put through the same checks; the declared MIME type must match the
    detected format.

    Raises:
        ValidationError: If the payload is missing, too large or not an image
    """
    if payload is None or len(payload) == 0:
        raise ValidationError("Image payload is missing", code="missing_payload", user_message="Please choose an image.")

    if isinstance(payload, (bytes, bytearray)):
        return encode_image_bytes(bytes(payload), max_bytes)

    declared, data = decode_data_url(payload)
    image_format = check_image_bytes(data, max_bytes)

    expected = mime_type_for(image_format)
    if MIME_ALIASES.get(declared, declared) != expected:
        raise ValidationError(
            f"Payload declares {declared} but contains {image_format}",
            code="mime_mismatch",
            user_message="Please choose an image file.",
            details={"declared": declared, "detected": expected},
        )

    return payload
