"""
Color table sizing and pixel row translation.

On disk every pixel row is padded with zero bytes to a multiple of four.
In memory the pixel plane is kept unpadded: rows of exactly row_bytes bytes,
in the same order as the file stores them.
"""

from typing import Tuple
import logging

from .errors import DataCorruptError, NoPixelDataError
from .headers import FILE_HEADER_SIZE, FileHeader, InfoHeader

logger = logging.getLogger(__name__)

SUPPORTED_BIT_DEPTHS = (1, 4, 8, 24, 32)
MAX_INDEXED_BIT_DEPTH = 8

# Rows never need more than three padding bytes
ZERO_PADDING = bytes(3)


def row_stride(width: int, bits_per_pixel: int) -> Tuple[int, int]:
    """
    Compute the unpadded row size and the padding needed on disk.

    Sub-byte depths round the row up to a whole byte.

    Returns:
        Tuple of (row_bytes, padding_bytes), padding_bytes in 0..3
    """
    row_bytes = (width * bits_per_pixel + 7) // 8
    padding = (4 - row_bytes % 4) % 4
    return row_bytes, padding


def uses_color_table(bits_per_pixel: int) -> bool:
    return bits_per_pixel <= MAX_INDEXED_BIT_DEPTH


def color_table_span(file_header: FileHeader, info_header: InfoHeader) -> Tuple[int, int]:
    """
    Locate the color table between the info header and the pixel array.

    The table size is not stored; it is whatever lies between the end of the
    declared info header and the pixel array offset. The size can come out
    negative for corrupt files, callers must check.

    Returns:
        Tuple of (offset, size)
    """
    offset = FILE_HEADER_SIZE + info_header.dib_header_size
    return offset, file_header.pixel_array_offset - offset


def read_color_table(
    data: bytes,
    file_header: FileHeader,
    info_header: InfoHeader,
) -> bytes:
    """
    Copy the raw palette bytes out of a file buffer.

    Returns empty bytes for direct-color images (more than 8 bits per pixel).

    Raises:
        DataCorruptError: If the table size is negative or the table runs
            past the end of the buffer
    """
    if not uses_color_table(info_header.bits_per_pixel):
        return b""

    offset, size = color_table_span(file_header, info_header)
    if size < 0:
        raise DataCorruptError(
            f"Pixel array offset {file_header.pixel_array_offset} lies inside "
            f"the info header (ends at {offset})"
        )
    if offset + size > len(data):
        raise DataCorruptError(
            f"Color table [{offset}, {offset + size}) exceeds file length {len(data)}"
        )

    logger.debug(f"Color table: {size} bytes at offset {offset}")
    return bytes(data[offset:offset + size])


def unpad_rows(
    data: bytes,
    start: int,
    width: int,
    height: int,
    bits_per_pixel: int,
) -> bytes:
    """
    Strip row padding from the on-disk pixel array.

    Args:
        data: Whole file contents
        start: Offset of the first pixel row
        width: Width in pixels
        height: Number of rows
        bits_per_pixel: Pixel depth

    Returns:
        height * row_bytes bytes with the padding removed

    Raises:
        DataCorruptError: If any row extends past the end of the buffer
    """
    row_bytes, padding = row_stride(width, bits_per_pixel)
    stride = row_bytes + padding

    if height > 0:
        last_row_end = start + (height - 1) * stride + row_bytes
        if last_row_end > len(data):
            raise DataCorruptError(
                f"Pixel data needs {last_row_end} bytes, file holds {len(data)}"
            )

    logger.debug(
        f"Pixel rows: {height} x {row_bytes} bytes (+{padding} padding) "
        f"from offset {start}"
    )

    if padding == 0:
        return bytes(data[start:start + height * row_bytes])

    plane = bytearray(height * row_bytes)
    for i in range(height):
        src = start + i * stride
        plane[i * row_bytes:(i + 1) * row_bytes] = data[src:src + row_bytes]
    return bytes(plane)


def pad_rows(
    pixels: bytes,
    width: int,
    height: int,
    bits_per_pixel: int,
    add_padding: bool = True,
) -> bytes:
    """
    Lay out an unpadded pixel plane for writing.

    With add_padding every row is followed by zero bytes up to a multiple of
    four. Without it the plane is returned as one contiguous block, which is
    only a valid BMP when rows are already 4-byte aligned.

    Raises:
        NoPixelDataError: If pixels is empty
        DataCorruptError: If pixels is not exactly height * row_bytes long
    """
    if not pixels:
        raise NoPixelDataError()

    if not add_padding:
        return bytes(pixels)

    row_bytes, padding = row_stride(width, bits_per_pixel)
    expected = row_bytes * height
    if len(pixels) != expected:
        raise DataCorruptError(
            f"Pixel plane holds {len(pixels)} bytes, {width}x{height} at "
            f"{bits_per_pixel} bpp needs {expected}"
        )

    pad = ZERO_PADDING[:padding]
    out = bytearray()
    for i in range(height):
        out += pixels[i * row_bytes:(i + 1) * row_bytes]
        out += pad
    return bytes(out)
