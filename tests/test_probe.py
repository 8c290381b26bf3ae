"""Tests for the quick probe reader."""

import pytest

from bmpcodec import BitmapImage, BmpIoError, encode
from bmpcodec.errors import DataCorruptError, NotABitmapFileError
from bmpcodec.probe import probe, read_u32_le


def sample_bmp() -> bytes:
    pixels = bytes([255, 0, 0, 0, 255, 0, 0, 0, 255, 255, 255, 0])
    return encode(BitmapImage.create(2, 2, 24, pixels))


def test_read_u32_le() -> None:
    assert read_u32_le(b"\x36\x00\x00\x00", 0) == 54
    assert read_u32_le(b"\xff\x01\x02\x03\x04", 1) == 0x04030201
    assert read_u32_le(b"\xff\xff\xff\xff", 0) == 0xFFFFFFFF


def test_probe_returns_padded_pixel_array() -> None:
    width, height, raw = probe(sample_bmp())
    assert (width, height) == (2, 2)
    # Padding is kept: two 8-byte rows, final byte included
    assert raw == bytes([
        255, 0, 0, 0, 255, 0, 0, 0,
        0, 0, 255, 255, 255, 0, 0, 0,
    ])


def test_probe_path(tmp_path) -> None:
    target = tmp_path / "sample.bmp"
    target.write_bytes(sample_bmp())
    assert probe(target)[:2] == (2, 2)


@pytest.mark.parametrize("signature", [b"PK", b"BX", b"XM"])
def test_probe_rejects_either_bad_signature_byte(signature) -> None:
    data = signature + sample_bmp()[2:]
    with pytest.raises(NotABitmapFileError):
        probe(data)


def test_probe_truncated_header() -> None:
    with pytest.raises(DataCorruptError):
        probe(sample_bmp()[:20])


def test_probe_offset_past_end() -> None:
    data = bytearray(sample_bmp())
    data[10:14] = (1000).to_bytes(4, "little")
    with pytest.raises(DataCorruptError):
        probe(bytes(data))


def test_probe_offset_at_end_is_empty() -> None:
    data = bytearray(sample_bmp())
    data[10:14] = len(data).to_bytes(4, "little")
    assert probe(bytes(data))[2] == b""


def test_probe_missing_file(tmp_path) -> None:
    with pytest.raises(BmpIoError):
        probe(tmp_path / "missing.bmp")
