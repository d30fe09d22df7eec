"""Indexed binary min-heap.

Every entry gets a stable id on insertion. The id keeps addressing the same
entry however the heap reorders, so callers can change an entry's priority
without searching for it.
"""

from __future__ import annotations

__all__ = ["IndexedPriorityQueue"]

from dataclasses import dataclass
from typing import Generic, TypeVar

from force_lab.errors import EmptyQueue, UnknownId

T = TypeVar("T")


@dataclass
class _Entry(Generic[T]):
    payload: T
    id: int
    priority: float


class IndexedPriorityQueue(Generic[T]):
    """Min-heap: the lowest priority value is served first."""

    def __init__(self) -> None:
        self._heap: list[_Entry[T]] = []
        # entry id -> position in self._heap
        self._position: dict[int, int] = {}
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._position

    def enqueue(self, payload: T, priority: float) -> int:
        """Insert ``payload`` and return its stable id."""
        entry = _Entry(payload, self._counter, priority)
        self._counter += 1
        self._heap.append(entry)
        self._position[entry.id] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)
        return entry.id

    def update_priority(self, entry_id: int, priority: float) -> None:
        """Change the priority of a queued entry and restore heap order."""
        try:
            idx = self._position[entry_id]
        except KeyError:
            raise UnknownId(f"no queued entry with id {entry_id}") from None
        entry = self._heap[idx]
        old = entry.priority
        entry.priority = priority
        if priority < old:
            self._sift_up(idx)
        else:
            self._sift_down(idx)

    def priority(self, entry_id: int) -> float:
        try:
            return self._heap[self._position[entry_id]].priority
        except KeyError:
            raise UnknownId(f"no queued entry with id {entry_id}") from None

    def dequeue(self) -> T:
        """Remove and return the payload with the lowest priority."""
        if not self._heap:
            raise EmptyQueue("dequeue from an empty queue")
        last = len(self._heap) - 1
        self._swap(0, last)
        entry = self._heap.pop()
        del self._position[entry.id]
        if self._heap:
            self._sift_down(0)
        return entry.payload

    def top(self) -> T:
        if not self._heap:
            raise EmptyQueue("top of an empty queue")
        return self._heap[0].payload

    def top_priority(self) -> float:
        if not self._heap:
            raise EmptyQueue("top of an empty queue")
        return self._heap[0].priority

    def _sift_up(self, idx: int) -> None:
        heap = self._heap
        while idx > 0:
            parent = (idx - 1) // 2
            if heap[idx].priority < heap[parent].priority:
                self._swap(idx, parent)
                idx = parent
            else:
                break

    def _sift_down(self, idx: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            smallest = idx
            for child in (2 * idx + 1, 2 * idx + 2):
                if child < size and heap[child].priority < heap[smallest].priority:
                    smallest = child
            if smallest == idx:
                return
            self._swap(idx, smallest)
            idx = smallest

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._position[heap[i].id] = i
        self._position[heap[j].id] = j
