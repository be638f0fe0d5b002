"""Raw snappy compression and a reader for chunked snappy streams."""

from __future__ import annotations

import struct
from typing import Union

from kafkawire.errors import InvalidSnappyError, UnexpectedEOFError

BytesLike = Union[bytes, bytearray, memoryview]

MAGIC = b"\x82SNAPPY\x00"

_I32 = struct.Struct(">i")
_BLOCK_SIZE = 1 << 16
_MIN_NON_LITERAL_BLOCK_SIZE = 1 + 1 + 15
_MAX_UNCOMPRESSED_LEN = 0xFFFFFFFF

_TAG_LITERAL = 0
_TAG_COPY1 = 1
_TAG_COPY2 = 2
_TAG_COPY4 = 3


# --------------------------------------------------------------------
# encoding


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _emit_literal(out: bytearray, literal: bytes) -> None:
    n = len(literal) - 1
    if n < 60:
        out.append(n << 2 | _TAG_LITERAL)
    else:
        width = (n.bit_length() + 7) // 8
        out.append((59 + width) << 2 | _TAG_LITERAL)
        out += n.to_bytes(width, "little")
    out += literal


def _emit_copy2(out: bytearray, offset: int, length: int) -> None:
    out.append((length - 1) << 2 | _TAG_COPY2)
    out += offset.to_bytes(2, "little")


def _emit_copy(out: bytearray, offset: int, length: int) -> None:
    while length >= 68:
        _emit_copy2(out, offset, 64)
        length -= 64
    if length > 64:
        _emit_copy2(out, offset, 60)
        length -= 60
    if length >= 12 or offset >= 2048:
        _emit_copy2(out, offset, length)
    else:
        out.append((offset >> 8) << 5 | (length - 4) << 2 | _TAG_COPY1)
        out.append(offset & 0xFF)


def _compress_block(block: bytes, out: bytearray) -> None:
    size = len(block)
    if size < _MIN_NON_LITERAL_BLOCK_SIZE:
        _emit_literal(out, block)
        return
    table: dict[bytes, int] = {}
    literal_start = 0
    pos = 0
    last = size - 4
    while pos <= last:
        key = block[pos:pos + 4]
        candidate = table.get(key)
        table[key] = pos
        if candidate is None:
            pos += 1
            continue
        length = 4
        while pos + length < size and block[candidate + length] == block[pos + length]:
            length += 1
        if literal_start < pos:
            _emit_literal(out, block[literal_start:pos])
        _emit_copy(out, pos - candidate, length)
        pos += length
        literal_start = pos
    if literal_start < size:
        _emit_literal(out, block[literal_start:])


def compress(data: BytesLike) -> bytes:
    """Compress ``data`` into the raw snappy block format."""
    src = bytes(data)
    if len(src) > _MAX_UNCOMPRESSED_LEN:
        raise InvalidSnappyError(f"input of {len(src)} bytes is too big")
    out = bytearray(_encode_varint(len(src)))
    for start in range(0, len(src), _BLOCK_SIZE):
        _compress_block(src[start:start + _BLOCK_SIZE], out)
    return bytes(out)


# --------------------------------------------------------------------
# decoding


def _decode_varint(src: bytes) -> tuple[int, int]:
    """Return the declared uncompressed length and the header size."""
    value = 0
    for index, byte in enumerate(src[:5]):
        value |= (byte & 0x7F) << (7 * index)
        if byte < 0x80:
            if value > _MAX_UNCOMPRESSED_LEN:
                raise InvalidSnappyError("declared length too big")
            return value, index + 1
    raise InvalidSnappyError("invalid snappy header")


def decompress_len(data: BytesLike) -> int:
    """The uncompressed length declared by raw snappy ``data``; 0 for empty input."""
    src = bytes(data)
    if not src:
        return 0
    return _decode_varint(src)[0]


def _take(src: bytes, pos: int, count: int) -> int:
    if pos + count > len(src):
        raise InvalidSnappyError("truncated snappy data")
    return int.from_bytes(src[pos:pos + count], "little")


def _decompress(src: bytes) -> bytes:
    expected, pos = _decode_varint(src)
    dst = bytearray()
    end = len(src)
    while pos < end:
        tag = src[pos]
        pos += 1
        kind = tag & 0x03
        if kind == _TAG_LITERAL:
            length = tag >> 2
            if length >= 60:
                width = length - 59
                length = _take(src, pos, width)
                pos += width
            length += 1
            if pos + length > end:
                raise InvalidSnappyError("literal exceeds input")
            if len(dst) + length > expected:
                raise InvalidSnappyError("literal exceeds declared length")
            dst += src[pos:pos + length]
            pos += length
            continue
        if kind == _TAG_COPY1:
            length = ((tag >> 2) & 0x07) + 4
            offset = (tag >> 5) << 8 | _take(src, pos, 1)
            pos += 1
        elif kind == _TAG_COPY2:
            length = (tag >> 2) + 1
            offset = _take(src, pos, 2)
            pos += 2
        else:
            length = (tag >> 2) + 1
            offset = _take(src, pos, 4)
            pos += 4
        if offset == 0 or offset > len(dst):
            raise InvalidSnappyError(f"invalid copy offset {offset}")
        if len(dst) + length > expected:
            raise InvalidSnappyError("copy exceeds declared length")
        start = len(dst) - offset
        if offset >= length:
            dst += dst[start:start + length]
        else:
            for index in range(length):
                dst.append(dst[start + index])
    if len(dst) != expected:
        raise InvalidSnappyError(
            f"declared length {expected} but decoded {len(dst)} bytes"
        )
    return bytes(dst)


def uncompress(data: BytesLike) -> bytes:
    """Uncompress raw snappy ``data``; empty input yields empty output."""
    src = bytes(data)
    if decompress_len(src) == 0:
        return b""
    return _decompress(src)


# --------------------------------------------------------------------
# chunked streams


def _read_i32(data: bytes, pos: int) -> int:
    if len(data) - pos < 4:
        raise UnexpectedEOFError()
    return _I32.unpack_from(data, pos)[0]


def validate_stream(stream: BytesLike) -> bytes:
    """Check the header of a chunked snappy stream and return what follows it.

    Only version 1 with compatibility 1 is accepted.
    """
    data = bytes(stream)
    if len(data) < len(MAGIC):
        raise UnexpectedEOFError()
    if data[:len(MAGIC)] != MAGIC:
        raise InvalidSnappyError("invalid snappy stream header")
    pos = len(MAGIC)
    version = _read_i32(data, pos)
    if version != 1:
        raise InvalidSnappyError(f"unsupported snappy stream version {version}")
    compat = _read_i32(data, pos + 4)
    if compat != 1:
        raise InvalidSnappyError(f"unsupported snappy stream compatibility {compat}")
    return data[pos + 8:]


class SnappyReader:
    """Reads the uncompressed content of a stream of snappy compressed chunks.

    Each chunk is an i32 big-endian size followed by a raw snappy block.
    """

    def __init__(self, stream: BytesLike) -> None:
        self._data = validate_stream(stream)
        self._pos = 0
        self._chunk = b""
        self._chunk_pos = 0

    def _next_compressed(self) -> bytes | None:
        if self._pos >= len(self._data):
            return None
        size = _read_i32(self._data, self._pos)
        if size <= 0:
            raise InvalidSnappyError(f"unsupported chunk length {size}")
        start = self._pos + 4
        if start + size > len(self._data):
            raise UnexpectedEOFError()
        self._pos = start + size
        return self._data[start:start + size]

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` uncompressed bytes; ``b""`` at the end of the stream."""
        if size is None or size < 0:
            return self.read_to_end()
        if size == 0:
            return b""
        while self._chunk_pos >= len(self._chunk):
            compressed = self._next_compressed()
            if compressed is None:
                return b""
            self._chunk = uncompress(compressed)
            self._chunk_pos = 0
        piece = self._chunk[self._chunk_pos:self._chunk_pos + size]
        self._chunk_pos += len(piece)
        return piece

    def read_to_end(self) -> bytes:
        """Read all remaining uncompressed bytes."""
        pieces = [self._chunk[self._chunk_pos:]]
        self._chunk = b""
        self._chunk_pos = 0
        while (compressed := self._next_compressed()) is not None:
            pieces.append(uncompress(compressed))
        return b"".join(pieces)