"""
Image Dithering Module

Implements grayscale reduction, contrast adjustment and the two tone
mappers (Floyd-Steinberg error diffusion and flat threshold) used to turn
photographs into black and white halftones suitable for photocopying.
"""

import numpy as np

from ..core.options import DitherMode, ProcessingOptions, ToneMode

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)
MIDPOINT = 128.0


def to_luminance(image: np.ndarray) -> np.ndarray:
    """
    Convert an RGB(A) image to a float64 luminance buffer.

    Alpha is ignored. A single-channel image is returned as a float64 copy.
    """
    if image.ndim == 2:
        return image.astype(np.float64)
    return np.dot(image[..., :3].astype(np.float64), LUMA_WEIGHTS)


def apply_contrast(luminance: np.ndarray, factor: float) -> np.ndarray:
    """
    Stretch luminance about the midpoint, in place.

    factor = 1.0 leaves the image unchanged, > 1.0 increases contrast,
    < 1.0 reduces it. Output is clamped to [0, 255].
    """
    luminance -= MIDPOINT
    luminance *= factor
    luminance += MIDPOINT
    np.clip(luminance, 0, 255, out=luminance)
    return luminance


def threshold(luminance: np.ndarray, threshold_value: float) -> np.ndarray:
    """Flat threshold: 255 where luminance > threshold_value, 0 elsewhere."""
    return np.where(luminance > threshold_value, 255, 0).astype(np.uint8)


def floyd_steinberg(luminance: np.ndarray, threshold_value: float) -> np.ndarray:
    """
    Floyd-Steinberg error diffusion.

    Consumes ``luminance`` destructively: quantization error is pushed into
    the not yet visited neighbours of the same buffer, which may leave it
    outside [0, 255]. Pixels are visited strictly row by row, left to right.
    """
    height, width = luminance.shape
    out = np.zeros((height, width), dtype=np.uint8)

    for y in range(height):
        row = luminance[y]
        below = luminance[y + 1] if y + 1 < height else None
        for x in range(width):
            old_pixel = row[x]
            new_pixel = 255 if old_pixel > threshold_value else 0
            out[y, x] = new_pixel
            error = old_pixel - new_pixel

            if x + 1 < width:
                row[x + 1] += error * 7 / 16
            if below is not None:
                if x > 0:
                    below[x - 1] += error * 3 / 16
                below[x] += error * 5 / 16
                if x + 1 < width:
                    below[x + 1] += error * 1 / 16

    return out


def to_rgba(gray: np.ndarray) -> np.ndarray:
    """Broadcast a single-channel image to opaque RGBA."""
    height, width = gray.shape
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    rgba[..., :3] = gray[..., np.newaxis]
    rgba[..., 3] = 255
    return rgba


class ImageDitherer:
    """Reduce a luminance buffer to pure black and white."""

    def __init__(self, method: DitherMode = DitherMode.FLOYD_STEINBERG):
        self.method = method

    def dither(self, luminance: np.ndarray, threshold_value: float = 128) -> np.ndarray:
        """Apply the configured algorithm. Floyd-Steinberg mutates ``luminance``."""
        if self.method == DitherMode.FLOYD_STEINBERG:
            return floyd_steinberg(luminance, threshold_value)
        return threshold(luminance, threshold_value)


def halftone_process(rgba: np.ndarray, options: ProcessingOptions) -> np.ndarray:
    """
    Run the tone pipeline for one image.

    Args:
        rgba: Image as a (height, width, 4) uint8 array
        options: Batch processing options

    Returns:
        Processed image as (height, width, 4) uint8. In color mode the
        input array itself is returned.
    """
    if options.tone_mode == ToneMode.COLOR:
        return rgba

    gray = to_luminance(rgba)
    apply_contrast(gray, options.contrast)

    if options.tone_mode == ToneMode.GRAYSCALE:
        # Round half up
        return to_rgba(np.floor(gray + 0.5).astype(np.uint8))

    ditherer = ImageDitherer(options.mode)
    return to_rgba(ditherer.dither(gray, options.threshold))
