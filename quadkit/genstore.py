"""Slot storage whose handles go stale once their slot is freed and reused."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class GenerationalId:
    """Handle to a slot: its index and the generation it was issued for."""

    index: int
    generation: int


@dataclass
class _Cell(Generic[T]):
    generation: int
    state: T


class GenerationalStorage(Generic[T]):
    """Stores values in reusable slots; each reuse bumps the slot's generation."""

    def __init__(self) -> None:
        self._cells: list[_Cell[T] | None] = []
        self._free_indices: list[tuple[int, int]] = []

    def push(self, data: T) -> GenerationalId:
        """Store ``data``, reusing a freed slot when one is available."""
        if self._free_indices:
            index, old_generation = self._free_indices.pop()
            generation = old_generation + 1
            self._cells[index] = _Cell(generation, data)
        else:
            index = len(self._cells)
            generation = 0
            self._cells.append(_Cell(generation, data))
        return GenerationalId(index, generation)

    def _live_cell(self, id: GenerationalId) -> _Cell[T] | None:
        if not 0 <= id.index < len(self._cells):
            return None
        cell = self._cells[id.index]
        if cell is None or cell.generation != id.generation:
            return None
        return cell

    def __contains__(self, id: object) -> bool:
        return isinstance(id, GenerationalId) and self._live_cell(id) is not None

    def get(self, id: GenerationalId) -> T | None:
        """The value behind ``id``, or None if the handle is stale."""
        cell = self._live_cell(id)
        return None if cell is None else cell.state

    def replace(self, id: GenerationalId, data: T) -> None:
        """Overwrite the value behind a live handle."""
        cell = self._live_cell(id)
        if cell is None:
            raise KeyError(id)
        cell.state = data

    def retain(self, predicate: Callable[[T], bool]) -> None:
        """Free every value for which ``predicate`` returns False, in slot order."""
        for index, cell in enumerate(list(self._cells)):
            if cell is None:
                continue
            if predicate(cell.state):
                continue
            if index < len(self._cells) and self._cells[index] is cell:
                self._free_indices.append((index, cell.generation))
                self._cells[index] = None

    def count(self) -> int:
        """Number of occupied slots."""
        return sum(cell is not None for cell in self._cells)

    def clear(self) -> None:
        """Drop every value and forget all slots."""
        self._cells.clear()
        self._free_indices.clear()

    def free(self, id: GenerationalId) -> None:
        """Release the slot behind ``id``; stale handles are ignored."""
        cell = self._live_cell(id)
        if cell is None:
            return
        self._free_indices.append((id.index, id.generation))
        self._cells[id.index] = None