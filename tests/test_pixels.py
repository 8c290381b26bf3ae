"""Tests for row stride math, padding and color table sizing."""

import pytest

from bmpcodec.errors import DataCorruptError, NoPixelDataError
from bmpcodec.headers import FileHeader, InfoHeader
from bmpcodec.pixels import (
    SUPPORTED_BIT_DEPTHS,
    color_table_span,
    pad_rows,
    read_color_table,
    row_stride,
    unpad_rows,
)


class TestRowStride:
    """Tests for row size and padding."""

    def test_padded_rows_are_4_byte_aligned(self):
        for bpp in SUPPORTED_BIT_DEPTHS:
            for width in range(1, 34):
                row_bytes, padding = row_stride(width, bpp)
                assert padding in (0, 1, 2, 3)
                assert (row_bytes + padding) % 4 == 0

    def test_byte_depths_use_whole_bytes_per_pixel(self):
        for bpp in (8, 24, 32):
            for width in range(1, 20):
                assert row_stride(width, bpp)[0] == width * (bpp // 8)

    def test_known_values(self):
        assert row_stride(2, 24) == (6, 2)
        assert row_stride(4, 24) == (12, 0)
        assert row_stride(1, 8) == (1, 3)
        assert row_stride(10, 1) == (2, 2)
        assert row_stride(3, 4) == (2, 2)
        assert row_stride(5, 32) == (20, 0)


class TestUnpadRows:
    """Tests for stripping on-disk padding."""

    def test_strips_padding_and_keeps_last_byte(self):
        # 2x2 at 24bpp: 6 pixel bytes + 2 padding per row
        disk = b"HDR" + bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9, 10, 11, 12, 0, 0])
        plane = unpad_rows(disk, 3, 2, 2, 24)
        assert plane == bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12])

    def test_no_padding_is_plain_copy(self):
        disk = bytes(range(24))
        assert unpad_rows(disk, 0, 4, 2, 24) == disk

    def test_missing_final_padding_is_accepted(self):
        disk = bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9, 10, 11, 12])
        assert len(unpad_rows(disk, 0, 2, 2, 24)) == 12

    def test_truncated_rows(self):
        disk = bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9])
        with pytest.raises(DataCorruptError):
            unpad_rows(disk, 0, 2, 2, 24)

    def test_zero_height(self):
        assert unpad_rows(b"", 0, 4, 0, 24) == b""


class TestPadRows:
    """Tests for laying out rows for writing."""

    def test_adds_zero_padding(self):
        plane = bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12])
        out = pad_rows(plane, 2, 2, 24, add_padding=True)
        assert out == bytes([1, 2, 3, 4, 5, 6, 0, 0, 7, 8, 9, 10, 11, 12, 0, 0])

    def test_without_padding_emits_plane_verbatim(self):
        plane = bytes(range(12))
        assert pad_rows(plane, 2, 2, 24, add_padding=False) == plane

    def test_empty_plane(self):
        with pytest.raises(NoPixelDataError):
            pad_rows(b"", 2, 2, 24)
        with pytest.raises(NoPixelDataError):
            pad_rows(b"", 2, 2, 24, add_padding=False)

    def test_short_plane(self):
        with pytest.raises(DataCorruptError):
            pad_rows(bytes(7), 2, 2, 24)

    def test_oversized_plane(self):
        with pytest.raises(DataCorruptError):
            pad_rows(bytes(range(1, 16)), 2, 2, 24)


class TestColorTable:
    """Tests for deriving the palette size from offsets."""

    def test_256_entry_palette(self):
        file_header = FileHeader(pixel_array_offset=14 + 40 + 1024)
        info_header = InfoHeader(dib_header_size=40, bits_per_pixel=8)
        assert color_table_span(file_header, info_header) == (54, 1024)

    def test_read_palette(self):
        palette = bytes(range(8))
        data = bytes(54) + palette + b"\x80\x00\x00\x00"
        file_header = FileHeader(pixel_array_offset=62)
        info_header = InfoHeader(dib_header_size=40, bits_per_pixel=1)
        assert read_color_table(data, file_header, info_header) == palette

    def test_direct_color_has_no_table(self):
        file_header = FileHeader(pixel_array_offset=100)
        info_header = InfoHeader(dib_header_size=40, bits_per_pixel=24)
        assert read_color_table(bytes(100), file_header, info_header) == b""

    def test_negative_size(self):
        file_header = FileHeader(pixel_array_offset=40)
        info_header = InfoHeader(dib_header_size=40, bits_per_pixel=8)
        with pytest.raises(DataCorruptError):
            read_color_table(bytes(100), file_header, info_header)

    def test_table_past_end(self):
        file_header = FileHeader(pixel_array_offset=14 + 40 + 1024)
        info_header = InfoHeader(dib_header_size=40, bits_per_pixel=8)
        with pytest.raises(DataCorruptError):
            read_color_table(bytes(500), file_header, info_header)
