"""Reading and writing BMP bytes from paths, buffers and streams."""

from pathlib import Path
from typing import BinaryIO, Union
import logging
import os

from .errors import BmpIoError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]
Source = Union[BytesLike, str, os.PathLike]
Destination = Union[str, os.PathLike, BinaryIO]


def read_source(source: Source) -> bytes:
    """
    Return the bytes of a buffer or of the file at a path.

    Raises:
        BmpIoError: If the file cannot be read or is empty
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    path = Path(source)
    try:
        with path.open("rb") as fh:
            data = fh.read()
    except OSError as e:
        raise BmpIoError(f"Failed to read {path}: {e}") from e

    if not data:
        raise BmpIoError(f"{path} is empty")

    logger.debug(f"Read {len(data)} bytes from {path}")
    return data


def write_destination(destination: Destination, payload: bytes) -> None:
    """
    Write payload to a binary stream or to the file at a path.

    Raises:
        BmpIoError: If the file cannot be created or written
    """
    if hasattr(destination, "write"):
        try:
            destination.write(payload)
        except OSError as e:
            raise BmpIoError(f"Failed to write BMP stream: {e}") from e
        return

    path = Path(destination)
    try:
        with path.open("wb") as fh:
            fh.write(payload)
    except OSError as e:
        raise BmpIoError(f"Failed to write {path}: {e}") from e

    logger.debug(f"Wrote {len(payload)} bytes to {path}")
