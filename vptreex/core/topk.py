from __future__ import annotations

import heapq
import itertools
from typing import Generic, Iterator, List, Tuple, TypeVar

Item = TypeVar("Item")


class BoundedMaxHeap(Generic[Item]):
    """Keep the ``capacity`` closest candidates seen so far.

    Entries are stored as ``(-distance, order, item)`` on a ``heapq`` min-heap
    so the root is always the current worst (largest-distance) candidate. The
    insertion counter breaks distance ties, so items never need to be
    comparable. Callers evict before inserting once the heap is full.
    """

    __slots__ = ("_capacity", "_heap", "_counter")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("BoundedMaxHeap capacity must be positive.")
        self._capacity = int(capacity)
        self._heap: List[Tuple[float, int, Item]] = []
        self._counter = itertools.count()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._heap)

    def is_full(self) -> bool:
        return len(self._heap) >= self._capacity

    def push(self, item: Item, distance: float) -> None:
        if self.is_full():
            raise OverflowError("BoundedMaxHeap is at capacity; pop_max() first.")
        heapq.heappush(self._heap, (-distance, next(self._counter), item))

    def peek_max(self) -> Tuple[Item, float]:
        if not self._heap:
            raise IndexError("peek_max() on an empty heap.")
        neg_dist, _, item = self._heap[0]
        return item, -neg_dist

    def max_distance(self) -> float:
        return -self._heap[0][0]

    def pop_max(self) -> Tuple[Item, float]:
        if not self._heap:
            raise IndexError("pop_max() on an empty heap.")
        neg_dist, _, item = heapq.heappop(self._heap)
        return item, -neg_dist

    def drain(self) -> Iterator[Tuple[Item, float]]:
        """Yield and remove every entry, largest distance first."""

        while self._heap:
            yield self.pop_max()


__all__ = ["BoundedMaxHeap"]
