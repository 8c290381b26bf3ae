"""
bmpcodec - Uncompressed Windows Bitmap (BMP) reader and writer

Decodes BMP files into headers, color table and unpadded pixel rows, and
encodes the same structures back to valid files.
"""

__version__ = "0.1.0"

from bmpcodec.codec import (
    BitmapCodec,
    BitmapImage,
    decode,
    encode,
    write,
    read_bmp,
    write_bmp,
)
from bmpcodec.errors import (
    BmpError,
    BmpErrorCode,
    BmpIoError,
    NotABitmapFileError,
    DataCorruptError,
    InfoHeaderExceedsDeclaredSizeError,
    NoPixelDataError,
    UnsupportedFormatError,
    describe_error,
)
from bmpcodec.headers import (
    FileHeader,
    InfoHeader,
    V4InfoHeader,
    InfoHeaderVariant,
    decode_info_header,
)
from bmpcodec.pixels import row_stride
from bmpcodec.probe import probe

__all__ = [
    # Codec
    "BitmapCodec",
    "BitmapImage",
    "decode",
    "encode",
    "write",
    "read_bmp",
    "write_bmp",
    "probe",
    # Headers
    "FileHeader",
    "InfoHeader",
    "V4InfoHeader",
    "InfoHeaderVariant",
    "decode_info_header",
    "row_stride",
    # Errors
    "BmpError",
    "BmpErrorCode",
    "BmpIoError",
    "NotABitmapFileError",
    "DataCorruptError",
    "InfoHeaderExceedsDeclaredSizeError",
    "NoPixelDataError",
    "UnsupportedFormatError",
    "describe_error",
    "__version__",
]
