"""Partitioners that pick a topic partition for messages about to be produced."""

from __future__ import annotations

import abc
import struct
from typing import Callable, Protocol

from kafkawire.records import ProduceMessage, Topics

_MASK32 = 0xFFFFFFFF

_PRIME1 = 2654435761
_PRIME2 = 2246822519
_PRIME3 = 3266489917
_PRIME4 = 668265263
_PRIME5 = 374761393

_STRIPE = struct.Struct("<IIII")
_WORD = struct.Struct("<I")


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (32 - bits))) & _MASK32


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * _PRIME2) & _MASK32
    return (_rotl(acc, 13) * _PRIME1) & _MASK32


def _xxh32(data: bytes, seed: int) -> int:
    length = len(data)
    stripes_end = length - length % 16
    if length >= 16:
        v1 = (seed + _PRIME1 + _PRIME2) & _MASK32
        v2 = (seed + _PRIME2) & _MASK32
        v3 = seed & _MASK32
        v4 = (seed - _PRIME1) & _MASK32
        for l1, l2, l3, l4 in _STRIPE.iter_unpack(data[:stripes_end]):
            v1 = _round(v1, l1)
            v2 = _round(v2, l2)
            v3 = _round(v3, l3)
            v4 = _round(v4, l4)
        acc = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _MASK32
    else:
        acc = (seed + _PRIME5) & _MASK32
    acc = (acc + length) & _MASK32

    tail = data[stripes_end:]
    words_end = len(tail) - len(tail) % 4
    for (word,) in _WORD.iter_unpack(tail[:words_end]):
        acc = (acc + word * _PRIME3) & _MASK32
        acc = (_rotl(acc, 17) * _PRIME4) & _MASK32
    for byte in tail[words_end:]:
        acc = (acc + byte * _PRIME5) & _MASK32
        acc = (_rotl(acc, 11) * _PRIME1) & _MASK32

    acc ^= acc >> 15
    acc = (acc * _PRIME2) & _MASK32
    acc ^= acc >> 13
    acc = (acc * _PRIME3) & _MASK32
    acc ^= acc >> 16
    return acc


class Hasher(Protocol):
    """A streaming hasher: bytes go in through ``write``, ``finish`` gives the hash."""

    def write(self, data: bytes) -> None: ...

    def finish(self) -> int: ...


class XxHash32:
    """The 32-bit xxHash of all bytes written so far."""

    __slots__ = ("_seed", "_buffer")

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & _MASK32
        self._buffer = bytearray()

    def write(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        self._buffer += data

    def finish(self) -> int:
        """The hash of everything written so far."""
        return _xxh32(bytes(self._buffer), self._seed)


class Partitioner(abc.ABC):
    """Chooses or redefines the partition of a message about to be sent.

    Implementations may keep state between calls.
    """

    @abc.abstractmethod
    def partition(self, topics: Topics, msg: ProduceMessage) -> None:
        """Inspect ``msg`` and, if desired, reassign ``msg.partition``."""


class DefaultPartitioner(Partitioner):
    """The producer's default partitioning strategy.

    - A message with a non-negative partition is left untouched.
    - A message with an unspecified partition and a key goes to
      ``hash(key) % num_all_partitions``, consistently per key.
    - A message with neither goes to the available partitions in
      round-robin order.
    """

    def __init__(self, hasher_factory: Callable[[], Hasher] = XxHash32) -> None:
        self._hasher_factory = hasher_factory
        self._counter = 0

    def partition(self, topics: Topics, msg: ProduceMessage) -> None:
        if msg.partition >= 0:
            return
        partitions = topics.partitions(msg.topic)
        if partitions is None:
            return
        if msg.key is not None:
            num_partitions = partitions.num_all()
            if num_partitions == 0:
                return
            hasher = self._hasher_factory()
            hasher.write(msg.key)
            # Dispatch regardless of availability to keep keys consistent.
            msg.partition = (hasher.finish() & _MASK32) % num_partitions
            return
        available = partitions.available_ids
        if available:
            msg.partition = available[self._counter % len(available)]
            self._counter = (self._counter + 1) & _MASK32