"""Compression formats of Kafka messages and gzip support."""

from __future__ import annotations

import enum
import gzip
import io
import zlib
from typing import BinaryIO, Union


class Compression(enum.IntEnum):
    """Compression codecs; the values match the message attribute bits."""

    NONE = 0
    GZIP = 1
    SNAPPY = 2


def compress_gzip(data: bytes) -> bytes:
    """Compress ``data`` into a gzip stream at the default level."""
    return gzip.compress(bytes(data))


def uncompress_gzip(src: Union[bytes, bytearray, memoryview, BinaryIO]) -> bytes:
    """Uncompress a gzip stream given as bytes or a readable binary stream.

    Raises OSError if the data is not valid gzip.
    """
    fileobj = src if hasattr(src, "read") else io.BytesIO(bytes(src))
    try:
        with gzip.GzipFile(fileobj=fileobj, mode="rb") as decoder:
            return decoder.read()
    except OSError:
        raise
    except (EOFError, zlib.error) as exc:
        raise OSError(f"invalid gzip data: {exc}") from exc