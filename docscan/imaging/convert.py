"""Image codec boundary - Encoded image bytes to and from PixelBuffer."""

import io

import numpy as np
import pillow_heif
from PIL import Image, UnidentifiedImageError

from docscan.imaging.buffer import PixelBuffer

# Register HEIF opener with Pillow
pillow_heif.register_heif_opener()

SUPPORTED_TYPES = ("png", "jpeg", "webp", "heic", "bmp", "tiff")


class ConversionError(Exception):
    """Exception raised when image bytes cannot be turned into pixels."""

    pass


def decode_image(content: bytes) -> PixelBuffer:
    """Decode an encoded image into an RGBA PixelBuffer.

    Handles PNG, JPEG, WEBP, BMP, TIFF and HEIC (from iOS devices).

    Args:
        content: Raw image file bytes

    Returns:
        PixelBuffer with the image's dimensions

    Raises:
        ConversionError: If the bytes are empty, of an unsupported type or undecodable
    """
    if not content:
        raise ConversionError("Empty image content provided")

    file_type = detect_image_type(content)
    if file_type not in SUPPORTED_TYPES:
        raise ConversionError(f"Unsupported image type: {file_type}")

    try:
        with Image.open(io.BytesIO(content)) as img:
            rgba = img.convert("RGBA")
    except Image.DecompressionBombError as e:
        raise ConversionError(f"Image too large to decode: {e}") from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise ConversionError(f"Failed to decode {file_type} image: {e}") from e

    return PixelBuffer.from_array(np.asarray(rgba, dtype=np.uint8))


def encode_png(buffer: PixelBuffer) -> bytes:
    """Encode a PixelBuffer as PNG bytes."""
    img = Image.fromarray(np.ascontiguousarray(buffer.data))
    output = io.BytesIO()
    img.save(output, format="PNG")
    return output.getvalue()


def detect_image_type(content: bytes) -> str:
    """Detect the image type from magic bytes.

    Args:
        content: File content bytes

    Returns:
        Detected type string, ``"unknown"`` when nothing matches
    """
    if content[:8] == b"\x89PNG\r\n\x1a\n":
        return "png"
    if content[:2] == b"\xff\xd8":
        return "jpeg"
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "webp"
    if b"ftypheic" in content[:20] or b"ftypmif1" in content[:20] or b"ftypheix" in content[:20]:
        return "heic"
    if content[:2] == b"BM":
        return "bmp"
    if content[:4] in (b"II*\x00", b"MM\x00*"):
        return "tiff"
    if content[:5] == b"%PDF-":
        return "pdf"
    return "unknown"
