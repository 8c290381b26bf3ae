"""
Quick BMP probe.

Reads only the width, height and raw pixel array of a BMP, straight from
fixed byte offsets. No headers are modelled and no row padding is removed;
use BitmapCodec when full fidelity is needed.
"""

from typing import Tuple
import logging

from .errors import DataCorruptError, NotABitmapFileError
from .headers import FILE_HEADER_SIZE, HEIGHT_FIELD_OFFSET, WIDTH_FIELD_OFFSET
from .source import Source, read_source

logger = logging.getLogger(__name__)

PIXEL_OFFSET_FIELD = 10
WIDTH_FIELD = FILE_HEADER_SIZE + WIDTH_FIELD_OFFSET
HEIGHT_FIELD = FILE_HEADER_SIZE + HEIGHT_FIELD_OFFSET


def read_u32_le(data: bytes, offset: int) -> int:
    """Assemble an unsigned 32-bit little-endian value from four bytes."""
    return (
        data[offset]
        | data[offset + 1] << 8
        | data[offset + 2] << 16
        | data[offset + 3] << 24
    )


def probe(source: Source) -> Tuple[int, int, bytes]:
    """
    Extract dimensions and the raw pixel array of a BMP.

    Args:
        source: BMP bytes or a path to a BMP file

    Returns:
        Tuple of (width, height, pixel_bytes). pixel_bytes runs from the pixel
        array offset to the end of the file and still contains row padding.

    Raises:
        NotABitmapFileError: If either signature byte is wrong
        DataCorruptError: If the fixed fields or pixel offset are out of range
        BmpIoError: If a path cannot be read
    """
    data = read_source(source)

    if len(data) < 2 or data[0] != ord("B") or data[1] != ord("M"):
        raise NotABitmapFileError("Missing BMP signature")

    if len(data) < HEIGHT_FIELD + 4:
        raise DataCorruptError(
            f"BMP too small to contain dimensions ({len(data)} bytes)"
        )

    pixel_offset = read_u32_le(data, PIXEL_OFFSET_FIELD)
    width = read_u32_le(data, WIDTH_FIELD)
    height = read_u32_le(data, HEIGHT_FIELD)

    if pixel_offset > len(data):
        raise DataCorruptError(
            f"Pixel array offset {pixel_offset} beyond file length {len(data)}"
        )

    logger.debug(f"Probed BMP: {width}x{height}, pixels at {pixel_offset}")
    return width, height, data[pixel_offset:]
