"""
Halftone Image Processing Module

Contains image processing tools:
- Grayscale reduction and contrast adjustment
- Dithering algorithms for black and white output
- Resampling to a physical print size
"""

from .dithering import (
    ImageDitherer, to_luminance, apply_contrast,
    threshold, floyd_steinberg, to_rgba, halftone_process
)
from .resample import target_size, resize, round_half_up

__all__ = [
    'ImageDitherer',
    'to_luminance',
    'apply_contrast',
    'threshold',
    'floyd_steinberg',
    'to_rgba',
    'halftone_process',
    'target_size',
    'resize',
    'round_half_up',
]
