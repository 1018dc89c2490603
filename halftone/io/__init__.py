"""
Halftone I/O Module

Handles image decoding/encoding, PNG resolution metadata,
result archives and option presets.
"""

from .image_codec import decode_image, encode_png, read_size
from .png_dpi import (
    embed_physical_resolution, read_physical_resolution,
    PhysicalResolution, crc32
)
from .archive import build_zip, write_zip, archive_name, batch_archive_name
from .preset_io import save_options, load_options

__all__ = [
    'decode_image', 'encode_png', 'read_size',
    'embed_physical_resolution', 'read_physical_resolution',
    'PhysicalResolution', 'crc32',
    'build_zip', 'write_zip', 'archive_name', 'batch_archive_name',
    'save_options', 'load_options',
]
