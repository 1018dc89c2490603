"""
Image Codec for Halftone

Decodes arbitrary image bytes to RGBA arrays and encodes processed
arrays back to PNG. Everything Pillow can open is accepted as input.
"""

import io
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.errors import DecodeFailure, EncodeFailure

# DecompressionBombError is not an OSError
_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode image bytes to an RGBA array.

    Args:
        data: Encoded image (PNG, JPEG, GIF, WebP, ...)

    Returns:
        (height, width, 4) uint8 array

    Raises:
        DecodeFailure: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            # Always convert to RGBA for consistent processing
            if img.mode != "RGBA":
                img = img.convert("RGBA")
            return np.array(img, dtype=np.uint8)
    except _DECODE_ERRORS as e:
        raise DecodeFailure(f"Failed to decode image: {e}") from e


def read_size(data: bytes) -> Tuple[int, int]:
    """
    Read the native (width, height) without decoding pixel data.

    Raises:
        DecodeFailure: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except _DECODE_ERRORS as e:
        raise DecodeFailure(f"Failed to read image header: {e}") from e


def encode_png(image: np.ndarray) -> bytes:
    """
    Encode an RGBA (or single channel) uint8 array as PNG.

    Raises:
        EncodeFailure: If the array cannot be serialized
    """
    try:
        img = Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
    except (TypeError, ValueError, OSError) as e:
        raise EncodeFailure(f"Failed to encode PNG: {e}") from e
