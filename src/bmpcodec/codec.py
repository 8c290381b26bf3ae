"""
BMP codec: bytes to structured image and back.

Decoding composes the pieces in file order: file header, info header,
color table (indexed images only), pixel rows. Encoding runs the same steps
in reverse and builds the whole file in memory before anything is written,
so a failed encode never leaves a partial file behind.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from .errors import DataCorruptError, UnsupportedFormatError
from .headers import (
    FILE_HEADER_SIZE,
    LCS_SRGB,
    FileHeader,
    InfoHeader,
    InfoHeaderVariant,
    decode_info_header,
    read_declared_size,
    variant_for_size,
)
from .pixels import (
    SUPPORTED_BIT_DEPTHS,
    pad_rows,
    read_color_table,
    row_stride,
    unpad_rows,
    uses_color_table,
)
from .source import Destination, Source, read_source, write_destination

logger = logging.getLogger(__name__)

# 72 DPI
DEFAULT_PIXELS_PER_METER = 2835

BI_RGB = 0


@dataclass
class BitmapImage:
    """
    A decoded bitmap.

    Attributes:
        file_header: The 14-byte file header
        info_header: The DIB info header in the variant it was read as
        color_table: Raw palette bytes (empty above 8 bits per pixel)
        pixels: Unpadded pixel rows in file order
    """
    file_header: FileHeader
    info_header: InfoHeader
    color_table: bytes = b""
    pixels: bytes = b""

    @property
    def width(self) -> int:
        return self.info_header.width_abs

    @property
    def height(self) -> int:
        return self.info_header.height_abs

    @property
    def bits_per_pixel(self) -> int:
        return self.info_header.bits_per_pixel

    @property
    def top_down(self) -> bool:
        return self.info_header.top_down

    @property
    def row_bytes(self) -> int:
        return row_stride(self.width, self.bits_per_pixel)[0]

    def row(self, index: int) -> bytes:
        """Return one unpadded row of the pixel plane."""
        if not 0 <= index < self.height:
            raise IndexError(f"Row {index} out of range for height {self.height}")
        size = self.row_bytes
        return self.pixels[index * size:(index + 1) * size]

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        bits_per_pixel: int,
        pixels: bytes,
        color_table: bytes = b"",
        variant: InfoHeaderVariant = InfoHeaderVariant.STANDARD,
        pixels_per_meter: int = DEFAULT_PIXELS_PER_METER,
    ) -> "BitmapImage":
        """
        Build an image with consistent headers around existing pixel bytes.

        Args:
            width: Width in pixels
            height: Row count; negative for a top-down image
            bits_per_pixel: One of 1, 4, 8, 24, 32
            pixels: Unpadded rows, row_bytes each, in file order
            color_table: Palette bytes for depths up to 8 bits
            variant: Info header layout to write
            pixels_per_meter: Horizontal and vertical resolution

        Raises:
            UnsupportedFormatError: If bits_per_pixel is not supported
            ValueError: If a color table is given for a direct-color depth
            DataCorruptError: If pixels is non-empty and not exactly
                abs(height) * row_bytes long
        """
        if bits_per_pixel not in SUPPORTED_BIT_DEPTHS:
            raise UnsupportedFormatError(f"{bits_per_pixel} bits per pixel")
        if color_table and not uses_color_table(bits_per_pixel):
            raise ValueError(
                f"Color table only applies to depths up to 8 bits, got {bits_per_pixel}"
            )

        header_class = variant.header_class
        row_bytes, padding = row_stride(width, bits_per_pixel)
        # Empty planes are left for encode to reject with NoPixelDataError
        if pixels and len(pixels) != row_bytes * abs(height):
            raise DataCorruptError(
                f"Pixel plane holds {len(pixels)} bytes, {width}x{abs(height)} at "
                f"{bits_per_pixel} bpp needs {row_bytes * abs(height)}"
            )
        image_size = (row_bytes + padding) * abs(height)
        pixel_array_offset = FILE_HEADER_SIZE + header_class.SIZE + len(color_table)

        extra = {}
        if variant is InfoHeaderVariant.V4:
            extra["color_space_type"] = LCS_SRGB

        info_header = header_class(
            dib_header_size=header_class.SIZE,
            width=width,
            height=height,
            planes=1,
            bits_per_pixel=bits_per_pixel,
            compression=BI_RGB,
            image_size=image_size,
            x_pixels_per_meter=pixels_per_meter,
            y_pixels_per_meter=pixels_per_meter,
            colors_used=len(color_table) // 4,
            colors_important=0,
            **extra,
        )
        file_header = FileHeader(
            file_size=pixel_array_offset + image_size,
            pixel_array_offset=pixel_array_offset,
        )
        return cls(file_header, info_header, bytes(color_table), bytes(pixels))


class BitmapCodec:
    """Decode and encode BMP files."""

    def __init__(
        self,
        variant: Optional[InfoHeaderVariant] = None,
        strict_offsets: bool = True,
    ):
        """
        Initialize codec.

        Args:
            variant: Info header layout to decode into. None picks the
                largest known layout that fits the size the file declares.
            strict_offsets: Reject files whose pixel array does not start
                right after the info header and color table
        """
        self.variant = variant
        self.strict_offsets = strict_offsets

    def decode(self, data: bytes) -> BitmapImage:
        """
        Parse a complete BMP file.

        Raises:
            NotABitmapFileError: If the signature is not 'BM'
            DataCorruptError: If any structure is truncated or inconsistent
            UnsupportedFormatError: For compressed data or unsupported depths
        """
        file_header = FileHeader.from_bytes(data)

        variant = self.variant
        if variant is None:
            variant = variant_for_size(read_declared_size(data, FILE_HEADER_SIZE))

        info_header, _ = decode_info_header(data, FILE_HEADER_SIZE, variant)
        self._check_format(info_header)

        color_table = read_color_table(data, file_header, info_header)

        start = file_header.pixel_array_offset
        expected_start = FILE_HEADER_SIZE + info_header.dib_header_size + len(color_table)
        if start < expected_start:
            raise DataCorruptError(
                f"Pixel array offset {start} overlaps headers ending at {expected_start}"
            )
        if start > expected_start:
            if self.strict_offsets:
                raise DataCorruptError(
                    f"Pixel array offset {start} does not match computed offset "
                    f"{expected_start}"
                )
            logger.warning(
                f"Skipping {start - expected_start} unexplained bytes before pixel array"
            )

        pixels = unpad_rows(
            data,
            start,
            info_header.width_abs,
            info_header.height_abs,
            info_header.bits_per_pixel,
        )

        logger.debug(
            f"Decoded BMP: {info_header.width_abs}x{info_header.height_abs} "
            f"{info_header.bits_per_pixel}bpp, {variant.name} header"
        )
        return BitmapImage(file_header, info_header, color_table, pixels)

    def encode(self, image: BitmapImage, add_padding: bool = True) -> bytes:
        """
        Serialize an image to BMP bytes.

        Headers are written verbatim; BitmapImage.create() produces
        consistent ones.

        Pixel rows start at file_header.pixel_array_offset; any gap after
        the color table is filled with zero bytes.

        Raises:
            InfoHeaderExceedsDeclaredSizeError: Checked before any output
            DataCorruptError: If pixel_array_offset lies inside the headers
                or color table, or the pixel plane has the wrong length
            NoPixelDataError: If the pixel plane is empty
        """
        info_bytes = image.info_header.to_bytes()
        header_bytes = image.file_header.to_bytes()

        color_table = b""
        if uses_color_table(image.bits_per_pixel):
            color_table = image.color_table

        written = len(header_bytes) + len(info_bytes) + len(color_table)
        gap = image.file_header.pixel_array_offset - written
        if gap < 0:
            raise DataCorruptError(
                f"Pixel array offset {image.file_header.pixel_array_offset} lies "
                f"inside headers and color table ending at {written}"
            )

        pixel_bytes = pad_rows(
            image.pixels,
            image.width,
            image.height,
            image.bits_per_pixel,
            add_padding,
        )
        return b"".join((header_bytes, info_bytes, color_table, bytes(gap), pixel_bytes))

    @staticmethod
    def _check_format(info_header: InfoHeader) -> None:
        if info_header.planes != 1:
            raise DataCorruptError(f"Invalid BMP planes value {info_header.planes}")
        if info_header.compression != BI_RGB:
            raise UnsupportedFormatError(
                f"Compression method {info_header.compression}"
            )
        if info_header.bits_per_pixel not in SUPPORTED_BIT_DEPTHS:
            raise UnsupportedFormatError(
                f"{info_header.bits_per_pixel} bits per pixel"
            )


def decode(
    source: Source,
    variant: Optional[InfoHeaderVariant] = None,
    strict_offsets: bool = True,
) -> BitmapImage:
    """Decode a BMP from a bytes-like object or a file path."""
    codec = BitmapCodec(variant=variant, strict_offsets=strict_offsets)
    return codec.decode(read_source(source))


def encode(image: BitmapImage, add_padding: bool = True) -> bytes:
    """Encode an image to BMP bytes."""
    return BitmapCodec().encode(image, add_padding)


def write(destination: Destination, image: BitmapImage, add_padding: bool = True) -> None:
    """
    Encode an image and write it to a path or binary stream.

    Nothing is opened until encoding has succeeded.
    """
    payload = encode(image, add_padding)
    write_destination(destination, payload)


def read_bmp(path, variant: Optional[InfoHeaderVariant] = None) -> BitmapImage:
    return decode(path, variant=variant)


def write_bmp(path, image: BitmapImage, add_padding: bool = True) -> None:
    write(path, image, add_padding)
