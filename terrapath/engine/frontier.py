"""Updatable priority queue for the open set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from terrapath.engine.grid import Coordinate


@dataclass
class _Entry:
    key: float
    seq: int
    coord: Coordinate

    def before(self, other: "_Entry") -> bool:
        return (self.key, self.seq) < (other.key, other.seq)


class Frontier:
    """Binary heap with a position index.

    Entries are ordered by ``(key, seq)`` where ``seq`` is the order in which
    the coordinate first entered the frontier. Reprioritizing keeps ``seq``, so
    among equal keys the earliest-discovered coordinate pops first.
    """

    def __init__(self) -> None:
        self._heap: list[_Entry] = []
        self._index: dict[Coordinate, int] = {}
        self._next_seq = 0

    def insert_or_reprioritize(self, coord: Coordinate, key: float) -> None:
        position = self._index.get(coord)
        if position is None:
            entry = _Entry(key=key, seq=self._next_seq, coord=coord)
            self._next_seq += 1
            self._heap.append(entry)
            self._index[coord] = len(self._heap) - 1
            self._sift_up(len(self._heap) - 1)
            return
        entry = self._heap[position]
        previous = entry.key
        entry.key = key
        if key < previous:
            self._sift_up(position)
        elif key > previous:
            self._sift_down(position)

    def pop_min(self) -> Coordinate:
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        top = self._heap[0]
        last = self._heap.pop()
        del self._index[top.coord]
        if self._heap:
            self._heap[0] = last
            self._index[last.coord] = 0
            self._sift_down(0)
        return top.coord

    def contains(self, coord: Coordinate) -> bool:
        return coord in self._index

    def is_empty(self) -> bool:
        return not self._heap

    def key_of(self, coord: Coordinate) -> float:
        return self._heap[self._index[coord]].key

    def coords(self) -> frozenset[Coordinate]:
        return frozenset(entry.coord for entry in self._heap)

    def __contains__(self, coord: object) -> bool:
        return coord in self._index

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.coords())

    def _sift_up(self, position: int) -> None:
        heap = self._heap
        entry = heap[position]
        while position > 0:
            parent = (position - 1) // 2
            if not entry.before(heap[parent]):
                break
            heap[position] = heap[parent]
            self._index[heap[position].coord] = position
            position = parent
        heap[position] = entry
        self._index[entry.coord] = position

    def _sift_down(self, position: int) -> None:
        heap = self._heap
        size = len(heap)
        entry = heap[position]
        while True:
            child = 2 * position + 1
            if child >= size:
                break
            right = child + 1
            if right < size and heap[right].before(heap[child]):
                child = right
            if not heap[child].before(entry):
                break
            heap[position] = heap[child]
            self._index[heap[position].coord] = position
            position = child
        heap[position] = entry
        self._index[entry.coord] = position
