"""
Error taxonomy for BMP decoding and encoding.

Every failure raised by this package is a BmpError carrying a stable
BmpErrorCode, so callers can branch on the kind of failure and still show
a readable description.
"""

from enum import Enum
from typing import Dict, Union


class BmpErrorCode(Enum):
    """Stable error codes for known failure kinds."""
    IO_FAILURE = "E_IO_FAILURE"
    NOT_A_BITMAP_FILE = "E_NOT_A_BITMAP_FILE"
    DATA_CORRUPT = "E_DATA_CORRUPT"
    INFO_HEADER_EXCEEDS_DECLARED_SIZE = "E_INFO_HEADER_EXCEEDS_DECLARED_SIZE"
    NO_PIXEL_DATA = "E_NO_PIXEL_DATA"
    UNSUPPORTED_FORMAT = "E_UNSUPPORTED_FORMAT"


ERROR_DESCRIPTIONS: Dict[BmpErrorCode, str] = {
    BmpErrorCode.IO_FAILURE:
        "File failed to either open or be created",
    BmpErrorCode.NOT_A_BITMAP_FILE:
        "File requested is not a bmp",
    BmpErrorCode.DATA_CORRUPT:
        "Data stored in bmp is not valid",
    BmpErrorCode.INFO_HEADER_EXCEEDS_DECLARED_SIZE:
        "Info header is larger than the size it declares",
    BmpErrorCode.NO_PIXEL_DATA:
        "No pixel data passed to create bmp with",
    BmpErrorCode.UNSUPPORTED_FORMAT:
        "Bitmap uses a bit depth or compression that is not supported",
}


class BmpError(Exception):
    """Base class for all bmpcodec failures."""

    code: BmpErrorCode = BmpErrorCode.DATA_CORRUPT

    def __init__(self, detail: str = ""):
        super().__init__(detail or ERROR_DESCRIPTIONS[self.code])
        self.detail = detail


class BmpIoError(BmpError):
    """Opening, reading or writing a file failed."""
    code = BmpErrorCode.IO_FAILURE


class NotABitmapFileError(BmpError):
    """The 'BM' signature is missing."""
    code = BmpErrorCode.NOT_A_BITMAP_FILE


class DataCorruptError(BmpError):
    """A structure extends past the buffer or offsets are inconsistent."""
    code = BmpErrorCode.DATA_CORRUPT


class InfoHeaderExceedsDeclaredSizeError(BmpError):
    """The in-memory info header is larger than its dib_header_size field."""
    code = BmpErrorCode.INFO_HEADER_EXCEEDS_DECLARED_SIZE


class NoPixelDataError(BmpError):
    """Encode was requested with an empty pixel plane."""
    code = BmpErrorCode.NO_PIXEL_DATA


class UnsupportedFormatError(BmpError):
    """Compression or bit depth outside what this package handles."""
    code = BmpErrorCode.UNSUPPORTED_FORMAT


def describe_error(error: Union[BmpError, BmpErrorCode]) -> str:
    """
    Return a human-readable description of an error or error code.

    Args:
        error: A BmpError instance or a BmpErrorCode

    Returns:
        The standard description, followed by the exception detail when the
        exception carries one.
    """
    if isinstance(error, BmpErrorCode):
        return ERROR_DESCRIPTIONS.get(error, "Unknown error")

    if isinstance(error, BmpError):
        text = ERROR_DESCRIPTIONS.get(error.code, "Unknown error")
        if error.detail:
            return f"{text}: {error.detail}"
        return text

    return "Unknown error"
