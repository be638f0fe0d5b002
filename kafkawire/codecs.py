"""Big-endian encoding and decoding of the primitive types of the Kafka wire protocol."""

from __future__ import annotations

import struct
from typing import BinaryIO, Callable, Iterable, TypeVar

from kafkawire.errors import CodecError, StringDecodeError, UnexpectedEOFError

T = TypeVar("T")

_I8 = struct.Struct(">b")
_I16 = struct.Struct(">h")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")

_MAX_STRING_LEN = 2**15 - 1
_MAX_ARRAY_LEN = 2**31 - 1


def _pack(fmt: struct.Struct, value: int) -> bytes:
    try:
        return fmt.pack(value)
    except struct.error as exc:
        raise CodecError(f"cannot encode {value!r}: {exc}") from exc


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream`` or raise UnexpectedEOFError."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise UnexpectedEOFError()
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _unpack(fmt: struct.Struct, stream: BinaryIO) -> int:
    return fmt.unpack(_read_exact(stream, fmt.size))[0]


def encode_i8(value: int) -> bytes:
    """Encode a signed 8-bit integer."""
    return _pack(_I8, value)


def encode_i16(value: int) -> bytes:
    """Encode a signed 16-bit big-endian integer."""
    return _pack(_I16, value)


def encode_i32(value: int) -> bytes:
    """Encode a signed 32-bit big-endian integer."""
    return _pack(_I32, value)


def encode_i64(value: int) -> bytes:
    """Encode a signed 64-bit big-endian integer."""
    return _pack(_I64, value)


def encode_string(value: str) -> bytes:
    """Encode a string as an i16 byte length followed by its UTF-8 bytes."""
    raw = value.encode("utf-8")
    if len(raw) > _MAX_STRING_LEN:
        raise CodecError(f"string of {len(raw)} bytes is too long")
    return _I16.pack(len(raw)) + raw


def encode_bytes(value: bytes) -> bytes:
    """Encode a byte string as an i32 length followed by the bytes themselves."""
    raw = bytes(value)
    if len(raw) > _MAX_ARRAY_LEN:
        raise CodecError(f"byte string of {len(raw)} bytes is too long")
    return _I32.pack(len(raw)) + raw


def encode_array(items: Iterable[T], encode_item: Callable[[T], bytes]) -> bytes:
    """Encode ``items`` as an i32 count followed by each item's encoding."""
    elements = list(items)
    if len(elements) > _MAX_ARRAY_LEN:
        raise CodecError(f"array of {len(elements)} elements is too long")
    return _I32.pack(len(elements)) + b"".join(encode_item(x) for x in elements)


def encode_strings(values: Iterable[str]) -> bytes:
    """Encode a sequence of strings as a protocol array of strings."""
    return encode_array(values, encode_string)


def decode_i8(stream: BinaryIO) -> int:
    """Decode a signed 8-bit integer."""
    return _unpack(_I8, stream)


def decode_i16(stream: BinaryIO) -> int:
    """Decode a signed 16-bit big-endian integer."""
    return _unpack(_I16, stream)


def decode_i32(stream: BinaryIO) -> int:
    """Decode a signed 32-bit big-endian integer."""
    return _unpack(_I32, stream)


def decode_i64(stream: BinaryIO) -> int:
    """Decode a signed 64-bit big-endian integer."""
    return _unpack(_I64, stream)


def decode_string(stream: BinaryIO) -> str:
    """Decode an i16-length-prefixed UTF-8 string; a non-positive length gives ``""``."""
    length = decode_i16(stream)
    if length <= 0:
        return ""
    raw = _read_exact(stream, length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StringDecodeError() from exc


def decode_bytes(stream: BinaryIO) -> bytes:
    """Decode an i32-length-prefixed byte string; a non-positive length gives ``b""``."""
    length = decode_i32(stream)
    if length <= 0:
        return b""
    return _read_exact(stream, length)


def decode_array(stream: BinaryIO, decode_item: Callable[[BinaryIO], T]) -> list[T]:
    """Decode an i32 count followed by that many items read with ``decode_item``."""
    length = decode_i32(stream)
    if length <= 0:
        return []
    return [decode_item(stream) for _ in range(length)]


def decode_strings(stream: BinaryIO) -> list[str]:
    """Decode a protocol array of strings."""
    return decode_array(stream, decode_string)