from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Dict, Hashable, List


@dataclass(eq=False)
class PriorityEntry:
    """A vertex and its tentative score.

    Identity is the vertex alone; the score is mutable state.
    """

    vertex: Hashable
    score: float
    seq: int = field(default=0, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriorityEntry):
            return NotImplemented
        return self.vertex == other.vertex

    def __hash__(self) -> int:
        return hash(self.vertex)

    def _key(self):
        return (self.score, self.seq)


class IndexedMinHeap:
    """Binary min-heap with a vertex -> position index for O(log n) decrease-key.

    Equal scores pop in insertion order.
    """

    def __init__(self) -> None:
        self._items: List[PriorityEntry] = []
        self._pos: Dict[Hashable, int] = {}
        self._counter = count()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._pos

    def score(self, vertex: Hashable) -> float:
        return self._items[self._pos[vertex]].score

    def push(self, vertex: Hashable, score: float) -> None:
        if vertex in self._pos:
            raise ValueError(f"vertex {vertex!r} already in heap")
        entry = PriorityEntry(vertex, score, next(self._counter))
        self._items.append(entry)
        self._pos[vertex] = len(self._items) - 1
        self._sift_up(len(self._items) - 1)

    def peek(self) -> PriorityEntry:
        if not self._items:
            raise IndexError("peek from empty heap")
        return self._items[0]

    def pop(self) -> PriorityEntry:
        if not self._items:
            raise IndexError("pop from empty heap")
        top = self._items[0]
        last = self._items.pop()
        del self._pos[top.vertex]
        if self._items:
            self._items[0] = last
            self._pos[last.vertex] = 0
            self._sift_down(0)
        return top

    def decrease_key(self, vertex: Hashable, score: float) -> None:
        """Lower ``vertex``'s score in place.

        Raises KeyError if the vertex is not queued and ValueError if ``score``
        is higher than its current score.
        """
        i = self._pos[vertex]
        entry = self._items[i]
        if score > entry.score:
            raise ValueError(f"new score {score!r} is higher than current score {entry.score!r}")
        entry.score = score
        self._sift_up(i)

    # ------------------------------------------------------------------ helpers

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        self._pos[items[i].vertex] = i
        self._pos[items[j].vertex] = j

    def _sift_up(self, i: int) -> None:
        items = self._items
        while i > 0:
            parent = (i - 1) // 2
            if items[i]._key() < items[parent]._key():
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        items = self._items
        n = len(items)
        while True:
            smallest = i
            for child in (2 * i + 1, 2 * i + 2):
                if child < n and items[child]._key() < items[smallest]._key():
                    smallest = child
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
