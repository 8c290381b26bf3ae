#!/usr/bin/env python3
"""
Inspect BMP files for header structure and pixel layout.

Prints a hex dump of the headers, what the quick probe sees, and the fully
decoded file header, info header, color table and row stride.

Usage:
    python tools/inspect_bmp.py path/to/image.bmp
    python tools/inspect_bmp.py image.bmp --lenient
"""

import sys
from pathlib import Path

from bmpcodec import BitmapCodec, BmpError, describe_error, probe, row_stride


def hex_dump(data: bytes, start: int, end: int) -> None:
    print("Offset  | Hex Dump                                         | ASCII")
    print("--------|--------------------------------------------------+-----------------")
    for offset in range(start, min(end, len(data)), 16):
        chunk = data[offset:offset + 16]
        hex_part = " ".join(f"{b:02X}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        print(f"0x{offset:04X}  | {hex_part:<48} | {ascii_part}")
    print()


def inspect_file(filepath: str, strict_offsets: bool = True) -> int:
    """Inspect a BMP file. Returns a process exit code."""
    path = Path(filepath)

    if not path.exists():
        print(f"ERROR: {filepath} not found", file=sys.stderr)
        return 1

    data = path.read_bytes()

    print(f"\n{'=' * 70}")
    print(f"BMP INSPECTION: {path.name}")
    print(f"{'=' * 70}\n")
    print(f"Size:     {len(data):,} bytes (0x{len(data):04X})")
    print()

    print("HEADER BYTES:")
    hex_dump(data, 0, 14 + 108)

    print("QUICK PROBE:")
    try:
        width, height, raw = probe(data)
        print(f"  {width} x {height}, {len(raw):,} raw pixel bytes (padding included)")
    except BmpError as e:
        print(f"  ❌ {describe_error(e)}")
    print()

    print("FULL DECODE:")
    try:
        image = BitmapCodec(strict_offsets=strict_offsets).decode(data)
    except BmpError as e:
        print(f"  ❌ [{e.code.value}] {describe_error(e)}")
        return 1

    for name, value in image.file_header.to_dict().items():
        print(f"  {name:<20} {value}")
    print()
    for name, value in image.info_header.to_dict().items():
        print(f"  {name:<20} {value}")
    print()

    row_bytes, padding = row_stride(image.width, image.bits_per_pixel)
    print("PIXEL LAYOUT:")
    print(f"  Row bytes:        {row_bytes} (+{padding} padding on disk)")
    print(f"  Row order:        {'top-down' if image.top_down else 'bottom-up'}")
    print(f"  Color table:      {len(image.color_table)} bytes "
          f"({len(image.color_table) // 4} entries)")
    print(f"  Pixel plane:      {len(image.pixels):,} bytes")
    print()
    print("=" * 70 + "\n")
    return 0


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    if len(args) != 1:
        print("Usage: python tools/inspect_bmp.py <image.bmp> [--lenient]", file=sys.stderr)
        sys.exit(1)

    sys.exit(inspect_file(args[0], strict_offsets="--lenient" not in sys.argv))
