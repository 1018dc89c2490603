"""
Resampling

Scales images to the pixel size implied by a printed width and output
resolution. Aspect ratio always comes from the source image.
"""

import math
from typing import Tuple

import numpy as np
from PIL import Image

from ..core.options import CM_PER_INCH


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def target_size(src_width: int, src_height: int,
                output_width_cm: float, dpi: float) -> Tuple[int, int]:
    """
    Pixel size for printing ``output_width_cm`` wide at ``dpi``.

    Returns:
        Tuple of (width, height) in pixels

    Raises:
        ValueError: If the source or resulting size is not positive
    """
    if src_width <= 0 or src_height <= 0:
        raise ValueError(f"Invalid source size {src_width}x{src_height}")

    dst_width = round_half_up(output_width_cm / CM_PER_INCH * dpi)
    dst_height = round_half_up(dst_width * src_height / src_width)

    if dst_width <= 0 or dst_height <= 0:
        raise ValueError(
            f"Target size {dst_width}x{dst_height} is empty "
            f"({output_width_cm}cm @ {dpi} DPI)"
        )
    return dst_width, dst_height


def resize(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize an RGBA (or single channel) uint8 array with bilinear filtering.

    Raises:
        ValueError: If the target dimensions are not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot resize to {width}x{height}")

    src_height, src_width = image.shape[:2]
    if (src_width, src_height) == (width, height):
        return image.copy()

    img = Image.fromarray(image)
    resized = img.resize((width, height), Image.Resampling.BILINEAR)
    return np.array(resized, dtype=np.uint8)
