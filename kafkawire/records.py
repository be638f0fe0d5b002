"""Records to produce and the topic partition view handed to partitioners."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

BytesLike = Union[bytes, bytearray, memoryview]

#: The default maximum time in milliseconds brokers may await acknowledgements.
DEFAULT_ACK_TIMEOUT_MILLIS = 30 * 1000

#: The partition value meaning "let the producer choose".
UNSPECIFIED_PARTITION = -1


def _as_bytes(data: Any) -> bytes:
    """The bytes a record key or value stands for; None stands for no bytes."""
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(
        f"record data must be bytes, str or None, not {type(data).__name__}"
    )


def _to_option(data: bytes) -> bytes | None:
    return data or None


@dataclass(frozen=True)
class Record:
    """A message to send to Kafka: a key/value pair for a topic.

    A negative partition is "unspecified" and left to the producer's
    partitioner to decide.
    """

    topic: str
    key: Any = None
    value: Any = None
    partition: int = UNSPECIFIED_PARTITION

    @classmethod
    def from_key_value(cls, topic: str, key: Any, value: Any) -> "Record":
        """A key/value record with an unspecified partition."""
        return cls(topic=topic, key=key, value=value)

    @classmethod
    def from_value(cls, topic: str, value: Any) -> "Record":
        """A key-less, value-only record with an unspecified partition."""
        return cls(topic=topic, key=None, value=value)

    def with_partition(self, partition: int) -> "Record":
        """A copy of this record targeting ``partition``."""
        return dataclasses.replace(self, partition=partition)

    def __repr__(self) -> str:
        return (
            f"Record {{ topic: {self.topic}, partition: {self.partition}, "
            f"key: {self.key!r}, value: {self.value!r} }}"
        )


@dataclass
class ProduceMessage:
    """A message ready for sending; empty keys and values become None.

    A partitioner may reassign ``partition``.
    """

    topic: str
    key: bytes | None = None
    value: bytes | None = None
    partition: int = UNSPECIFIED_PARTITION

    @classmethod
    def from_record(cls, record: Record) -> "ProduceMessage":
        """Build the message for ``record``, turning key and value into bytes."""
        return cls(
            topic=record.topic,
            key=_to_option(_as_bytes(record.key)),
            value=_to_option(_as_bytes(record.value)),
            partition=record.partition,
        )


@dataclass(frozen=True)
class Partitions:
    """Partition information of one topic as relevant to a producer.

    ``available_ids`` excludes partitions without a leader broker;
    ``num_all_partitions`` counts all of them.
    """

    available_ids: tuple[int, ...] = field(default=())
    num_all_partitions: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "available_ids", tuple(self.available_ids))
        if self.num_all_partitions < 0:
            raise ValueError("number of partitions must not be negative")

    def num_available(self) -> int:
        """The number of partitions with a known leader."""
        return len(self.available_ids)

    def num_all(self) -> int:
        """The total number of partitions, available or not."""
        return self.num_all_partitions


class Topics:
    """A read-only description of known topics and their partitions."""

    __slots__ = ("_partitions",)

    def __init__(self, partitions: Mapping[str, Partitions]) -> None:
        self._partitions = dict(partitions)

    def partitions(self, topic: str) -> Partitions | None:
        """Partition information of ``topic``, or None if the topic is unknown."""
        return self._partitions.get(topic)

    def __contains__(self, topic: object) -> bool:
        return topic in self._partitions

    def __iter__(self) -> Iterable[str]:
        return iter(self._partitions)

    def __len__(self) -> int:
        return len(self._partitions)

    def __repr__(self) -> str:
        return f"Topics({self._partitions!r})"