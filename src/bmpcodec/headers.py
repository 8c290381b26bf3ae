"""
BMP file header and DIB info header structures.

The 14-byte file header is fixed. The DIB info header that follows comes in
several variants of different sizes which all share the same leading fields;
each variant declares its own on-disk size in its first four bytes.

Supported variants:
- STANDARD: BITMAPINFOHEADER, 40 bytes
- V4: BITMAPV4HEADER, 108 bytes (adds channel masks, color space, gamma)
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Type
import logging
import struct

from .errors import (
    DataCorruptError,
    InfoHeaderExceedsDeclaredSizeError,
    NotABitmapFileError,
)

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
BMP_SIGNATURE = b"BM"

# Field offsets inside every info header variant
DIB_SIZE_FIELD_OFFSET = 0
WIDTH_FIELD_OFFSET = 4
HEIGHT_FIELD_OFFSET = 8

# 'sRGB' as stored in bV4CSType
LCS_SRGB = 0x73524742


@dataclass(frozen=True)
class FileHeader:
    STRUCT: ClassVar[struct.Struct] = struct.Struct("<2sIHHI")

    signature: bytes = BMP_SIGNATURE
    file_size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    pixel_array_offset: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "FileHeader":
        """
        Parse the fixed file header from the start of a buffer.

        Raises:
            NotABitmapFileError: If the buffer does not start with 'BM'
            DataCorruptError: If the buffer is shorter than 14 bytes
        """
        if bytes(data[0:2]) != BMP_SIGNATURE:
            raise NotABitmapFileError("Missing BMP signature")
        if len(data) < FILE_HEADER_SIZE:
            raise DataCorruptError(
                f"BMP too small to contain file header ({len(data)} bytes)"
            )
        return cls(*cls.STRUCT.unpack_from(data, 0))

    def to_bytes(self) -> bytes:
        try:
            return self.STRUCT.pack(
                self.signature,
                self.file_size,
                self.reserved1,
                self.reserved2,
                self.pixel_array_offset,
            )
        except struct.error as e:
            raise DataCorruptError(f"File header field out of range: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["signature"] = self.signature.decode("latin-1")
        return result


@dataclass(frozen=True)
class InfoHeader:
    """
    BITMAPINFOHEADER (40 bytes).

    Width and height are signed on the wire. A negative height marks a
    top-down image; the magnitude is the row count either way.
    """

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IiiHHIIiiII")
    SIZE: ClassVar[int] = 40

    dib_header_size: int = 0
    width: int = 0
    height: int = 0
    planes: int = 0
    bits_per_pixel: int = 0
    compression: int = 0
    image_size: int = 0
    x_pixels_per_meter: int = 0
    y_pixels_per_meter: int = 0
    colors_used: int = 0
    colors_important: int = 0

    @classmethod
    def from_buffer(cls, buf: bytes) -> "InfoHeader":
        """Unpack exactly SIZE bytes into a header."""
        return cls(*cls.STRUCT.unpack(buf))

    def _values(self) -> Tuple[int, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def to_bytes(self) -> bytes:
        """
        Serialize the header to exactly SIZE bytes.

        Raises:
            InfoHeaderExceedsDeclaredSizeError: If SIZE is larger than the
                dib_header_size this header declares
        """
        if self.SIZE > self.dib_header_size:
            raise InfoHeaderExceedsDeclaredSizeError(
                f"{type(self).__name__} is {self.SIZE} bytes but declares "
                f"dib_header_size={self.dib_header_size}"
            )
        try:
            return self.STRUCT.pack(*self._values())
        except struct.error as e:
            raise DataCorruptError(f"Info header field out of range: {e}") from e

    @property
    def width_abs(self) -> int:
        return abs(self.width)

    @property
    def height_abs(self) -> int:
        return abs(self.height)

    @property
    def top_down(self) -> bool:
        return self.height < 0

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["variant"] = type(self).__name__
        return result


@dataclass(frozen=True)
class V4InfoHeader(InfoHeader):
    """BITMAPV4HEADER (108 bytes): InfoHeader plus masks, color space, gamma."""

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IiiHHIIiiII" "IIIII" "9I" "III")
    SIZE: ClassVar[int] = 108

    red_mask: int = 0
    green_mask: int = 0
    blue_mask: int = 0
    alpha_mask: int = 0
    color_space_type: int = 0
    endpoints: Tuple[int, ...] = (0,) * 9
    gamma_red: int = 0
    gamma_green: int = 0
    gamma_blue: int = 0

    @classmethod
    def from_buffer(cls, buf: bytes) -> "V4InfoHeader":
        values = cls.STRUCT.unpack(buf)
        return cls(*values[:16], tuple(values[16:25]), *values[25:])

    def _values(self) -> Tuple[int, ...]:
        values = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "endpoints":
                if len(value) != 9:
                    raise DataCorruptError("endpoints must hold 9 values")
                values.extend(value)
            else:
                values.append(value)
        return tuple(values)


class InfoHeaderVariant(Enum):
    """Info header layouts a caller can request, keyed by compiled size."""
    STANDARD = 40
    V4 = 108

    @property
    def size(self) -> int:
        return self.value

    @property
    def header_class(self) -> Type[InfoHeader]:
        return VARIANT_CLASSES[self]


VARIANT_CLASSES: Dict[InfoHeaderVariant, Type[InfoHeader]] = {
    InfoHeaderVariant.STANDARD: InfoHeader,
    InfoHeaderVariant.V4: V4InfoHeader,
}


def variant_for_size(declared_size: int) -> InfoHeaderVariant:
    """
    Pick the largest registered variant that fits in a declared header size.

    Declared sizes smaller than every variant fall back to STANDARD, which
    is then filled only as far as the declared size allows.
    """
    chosen = InfoHeaderVariant.STANDARD
    for variant in InfoHeaderVariant:
        if chosen.size < variant.size <= declared_size:
            chosen = variant
    return chosen


def read_declared_size(data: bytes, offset: int = FILE_HEADER_SIZE) -> int:
    """Read the little-endian dib_header_size field at offset."""
    if offset + 4 > len(data):
        raise DataCorruptError("BMP too small to contain info header size")
    return struct.unpack_from("<I", data, offset)[0]


def decode_info_header(
    data: bytes,
    offset: int = FILE_HEADER_SIZE,
    variant: InfoHeaderVariant = InfoHeaderVariant.STANDARD,
) -> Tuple[InfoHeader, int]:
    """
    Decode an info header into the requested variant's layout.

    The number of bytes copied is the smaller of the variant's size and the
    size the file declares. Fields beyond the copied bytes stay zero, so a
    40-byte header read as V4 has zero masks and gamma, and a 108-byte header
    read as STANDARD simply stops after the common fields.

    Args:
        data: Whole file contents
        offset: Position of the info header (normally 14)
        variant: Requested layout

    Returns:
        Tuple of (header, bytes_consumed)

    Raises:
        DataCorruptError: If the header extends past the buffer
    """
    declared = read_declared_size(data, offset)
    effective = min(variant.size, declared)

    if offset + effective > len(data):
        raise DataCorruptError(
            f"Info header needs {effective} bytes at offset {offset}, "
            f"buffer holds {len(data)}"
        )

    buf = bytes(data[offset:offset + effective]) + bytes(variant.size - effective)
    header = variant.header_class.from_buffer(buf)

    if effective < variant.size:
        logger.debug(
            f"Info header declares {declared} bytes; copied {effective} "
            f"of {variant.size} into {variant.name}"
        )
    return header, effective
