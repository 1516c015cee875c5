"""Snapshots of the cell state used for rollback and progress detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple
from uuid import UUID

from ..items import Cell, Position
from ..table import Table


@dataclass(frozen=True)
class CellState:
    """Value copy of a single cell."""

    position: Position
    value: Optional[int]
    candidates: Tuple[int, ...]
    group_id: Optional[UUID]

    @classmethod
    def of(cls, cell: Cell) -> "CellState":
        return cls(
            position=cell.cell_position,
            value=cell.value,
            candidates=cell.candidates,
            group_id=cell.group_id,
        )

    def same_as(self, other: "CellState") -> bool:
        """Compare two states, ignoring candidate order."""

        return (
            self.position == other.position
            and self.value == other.value
            and self.group_id == other.group_id
            and len(self.candidates) == len(other.candidates)
            and set(self.candidates) == set(other.candidates)
        )


@dataclass(frozen=True)
class StateCapsule:
    """Immutable, ordered copy of every cell of a table.

    The capsule has no reference back to the table it was captured from; it
    can be compared against live cells and restored onto any table of the
    same shape.
    """

    cells: Tuple[CellState, ...] = ()

    @classmethod
    def capture(cls, cells: Iterable[Cell]) -> "StateCapsule":
        return cls(cells=tuple(CellState.of(cell) for cell in cells))

    def is_empty(self) -> bool:
        return not self.cells

    def matches(self, other: "StateCapsule | Sequence[Cell]") -> bool:
        """Return ``True`` when ``other`` holds the same cell states, in order."""

        states = other.cells if isinstance(other, StateCapsule) else StateCapsule.capture(other).cells
        if len(states) != len(self.cells):
            return False
        return all(mine.same_as(theirs) for mine, theirs in zip(self.cells, states))

    def restore(self, table: Table) -> int:
        """Write every stored cell state back onto ``table``; return the count."""

        for state in self.cells:
            cell = table.cell(state.position)
            cell.set_value(state.value)
            cell.replace_candidates(state.candidates)
            cell.set_group_id(state.group_id)
        return len(self.cells)


Snapshot = StateCapsule


__all__ = ["CellState", "Snapshot", "StateCapsule"]
