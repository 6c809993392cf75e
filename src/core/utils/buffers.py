"""Normalization of upload payloads into a single in-memory buffer."""

from collections.abc import Iterable
from typing import BinaryIO, Union

from core.utils.constants import READ_CHUNK_SIZE

FileData = Union[bytes, bytearray, memoryview, BinaryIO, Iterable[bytes]]


def read_all(file_data: FileData) -> bytes:
    """Collapse an upload source into one ``bytes`` object.

    Accepts a materialized buffer, a binary file-like object or an iterable
    of byte chunks. Chunks are concatenated in arrival order. Errors raised by
    the source while reading propagate to the caller and nothing is returned.
    """
    if isinstance(file_data, bytes):
        return file_data

    if isinstance(file_data, (bytearray, memoryview)):
        return bytes(file_data)

    read = getattr(file_data, "read", None)
    if callable(read):
        chunks: list[bytes] = []
        while True:
            chunk = read(READ_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(bytes(chunk))
        return b"".join(chunks)

    if isinstance(file_data, str):
        raise TypeError("file_data must be bytes or a byte stream, not str")

    return b"".join(bytes(chunk) for chunk in file_data)
