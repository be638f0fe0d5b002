"""Read-only topic partition assignments of a consumer."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping


@dataclass(frozen=True)
class Assignment:
    """A topic to consume and its partitions, empty meaning all available ones.

    Partitions are kept in ascending order without duplicates.
    """

    topic: str
    partitions: tuple[int, ...] = ()


class Assignments:
    """An immutable set of assignments ordered by topic name.

    Assignments are referred to by integer references obtained from
    ``topic_ref``.
    """

    __slots__ = ("_items", "_topics")

    def __init__(self, items: Iterable[Assignment] = ()) -> None:
        self._items = tuple(sorted(items, key=lambda a: a.topic))
        self._topics = [a.topic for a in self._items]

    def topic_ref(self, topic: str) -> int | None:
        """The reference to the assignment of ``topic``, or None if unassigned."""
        index = bisect.bisect_left(self._topics, topic)
        if index < len(self._topics) and self._topics[index] == topic:
            return index
        return None

    def __getitem__(self, ref: int) -> Assignment:
        return self._items[ref]

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Assignments({list(self._items)!r})"


def from_map(src: Mapping[str, Iterable[int]]) -> Assignments:
    """Build assignments from a mapping of topic names to partition ids."""
    return Assignments(
        Assignment(topic, tuple(sorted(set(partitions))))
        for topic, partitions in src.items()
    )