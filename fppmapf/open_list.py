"""Search nodes and an indexed binary min-heap keyed on cost."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class SearchState:
    """A node of the heuristic search over (position, orientation)."""

    pos: int = -1
    orient: int = -1
    g: float = -1.0
    prev: SearchState | None = None
    closed: bool = False
    heap_index: int = -1

    def copy_from(self, other: SearchState) -> None:
        """Take over position, orientation, cost and predecessor."""
        self.pos = other.pos
        self.orient = other.orient
        self.g = other.g
        self.prev = other.prev


class OpenList:
    """Min-heap of states by ``g`` that supports decrease-key."""

    def __init__(self) -> None:
        self._heap: list[SearchState] = []

    def __len__(self) -> int:
        return len(self._heap)

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].heap_index = i
        heap[j].heap_index = j

    def _move_up(self, state: SearchState) -> None:
        index = state.heap_index
        while index > 0:
            parent = (index - 1) // 2
            if self._heap[parent].g < self._heap[index].g:
                break
            self._swap(index, parent)
            index = parent

    def _move_down(self, state: SearchState) -> None:
        heap = self._heap
        size = len(heap)
        index = state.heap_index
        while index * 2 + 1 < size:
            child = index * 2 + 1
            if child + 1 < size and heap[child + 1].g < heap[child].g:
                child += 1
            if heap[index].g < heap[child].g:
                break
            self._swap(index, child)
            index = child

    def push(self, state: SearchState) -> None:
        state.heap_index = len(self._heap)
        self._heap.append(state)
        self._move_up(state)

    def pop(self) -> SearchState:
        """Remove and return the state with the smallest ``g``."""
        if not self._heap:
            raise IndexError("pop from an empty open list")
        top = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            last.heap_index = 0
            self._move_down(last)
        return top

    def top(self) -> SearchState:
        if not self._heap:
            raise IndexError("top of an empty open list")
        return self._heap[0]

    def increase(self, state: SearchState) -> None:
        """Restore heap order after ``state.g`` was lowered."""
        self._move_up(state)

    def clear(self) -> None:
        self._heap.clear()