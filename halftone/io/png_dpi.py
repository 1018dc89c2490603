"""
PNG Physical Resolution

Embeds a pHYs chunk into PNG bytes so word processors and print tools
place the image at its intended physical size. Existing pHYs chunks are
never overwritten, and anything that is not a PNG passes through untouched.

Chunk layout (big-endian):
    [4B length][4B type][length bytes data][4B CRC32 over type + data]
"""

import math
import struct
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
METERS_PER_INCH = 0.0254
UNIT_METER = 1

PHYS_TYPE = b"pHYs"
IHDR_TYPE = b"IHDR"
IEND_TYPE = b"IEND"

_MAX_PIXELS_PER_UNIT = 0x7FFFFFFF


def _make_crc_table():
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (0xEDB88320 ^ (c >> 1)) if c & 1 else (c >> 1)
        table.append(c)
    return table


_CRC_TABLE = _make_crc_table()


def crc32(data: bytes) -> int:
    """CRC-32 (IEEE, reflected) as used by PNG chunks."""
    crc = 0xFFFFFFFF
    for byte in data:
        crc = _CRC_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def is_png(data: bytes) -> bool:
    return data[:8] == PNG_SIGNATURE


def iter_chunks(data: bytes) -> Iterator[Tuple[int, int, bytes]]:
    """
    Walk PNG chunks after the signature.

    Yields:
        (offset, length, type) for each chunk header that fits in ``data``.
        Iteration stops after IEND or when the stream runs out.
    """
    offset = 8
    while offset + 8 <= len(data):
        length, chunk_type = struct.unpack(">I4s", data[offset:offset + 8])
        yield offset, length, chunk_type
        if chunk_type == IEND_TYPE:
            return
        offset += 8 + length + 4


@dataclass(frozen=True)
class PhysicalResolution:
    """Contents of a pHYs chunk."""
    pixels_per_unit_x: int
    pixels_per_unit_y: int
    unit: int

    @property
    def dpi(self) -> Optional[float]:
        """Horizontal resolution in dots per inch, None if the unit is unknown."""
        if self.unit != UNIT_METER:
            return None
        return self.pixels_per_unit_x * METERS_PER_INCH


def dpi_to_pixels_per_meter(dpi: float) -> int:
    return int(math.floor(dpi / METERS_PER_INCH + 0.5))


def build_phys_chunk(pixels_per_meter: int) -> bytes:
    """Serialize a complete pHYs chunk, length and CRC included."""
    payload = struct.pack(">IIB", pixels_per_meter, pixels_per_meter, UNIT_METER)
    body = PHYS_TYPE + payload
    return struct.pack(">I", len(payload)) + body + struct.pack(">I", crc32(body))


def find_chunk(data: bytes, chunk_type: bytes) -> Optional[Tuple[int, int]]:
    """Return (offset, length) of the first chunk of ``chunk_type``, if any."""
    if not is_png(data):
        return None
    for offset, length, found in iter_chunks(data):
        if found == chunk_type:
            return offset, length
    return None


def read_physical_resolution(data: bytes) -> Optional[PhysicalResolution]:
    """Read the pHYs chunk of a PNG, or None if there is none."""
    found = find_chunk(data, PHYS_TYPE)
    if found is None:
        return None
    offset, length = found
    start = offset + 8
    if length != 9 or start + 9 > len(data):
        return None
    x, y, unit = struct.unpack(">IIB", data[start:start + 9])
    return PhysicalResolution(x, y, unit)


def embed_physical_resolution(data: bytes, dpi: float) -> bytes:
    """
    Insert a pHYs chunk declaring ``dpi`` right after IHDR.

    Returns ``data`` unchanged when it is not a PNG, already carries a pHYs
    chunk, or ``dpi`` does not map to a representable pixels-per-meter
    value. Never raises.
    """
    if not is_png(data):
        return data

    if find_chunk(data, PHYS_TYPE) is not None:
        return data

    try:
        if not math.isfinite(dpi) or dpi <= 0:
            return data
    except TypeError:
        return data

    pixels_per_meter = dpi_to_pixels_per_meter(dpi)
    if not 0 < pixels_per_meter <= _MAX_PIXELS_PER_UNIT:
        return data

    # IHDR is always the first chunk
    ihdr_length = struct.unpack(">I", data[8:12])[0] if len(data) >= 12 else 0
    ihdr_end = 8 + 8 + ihdr_length + 4

    return data[:ihdr_end] + build_phys_chunk(pixels_per_meter) + data[ihdr_end:]
