"""Propagation phase: candidate elimination followed by single assignment."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence
from uuid import UUID

from ...items import Cell
from ...table import Table

Metrics = Mapping[str, Any]


def _dedupe(cells: Sequence[Cell]) -> List[Cell]:
    seen: set[int] = set()
    out: List[Cell] = []
    for cell in cells:
        if id(cell) in seen:
            continue
        seen.add(id(cell))
        out.append(cell)
    return out


def _remove_everywhere(cells: Sequence[Cell], value: int) -> int:
    return sum(cell.remove_candidates(value) for cell in cells)


def eliminate(table: Table) -> Metrics:
    """Phase 1: rebuild candidates group by group.

    For every cell the reach is its whole group plus its nearby cells.  A
    valued cell strikes its value from the reach and drops its own
    candidates; an empty cell gets ``{1..N}`` minus the values seen in its
    reach, replacing whatever it held before.
    """

    removed = 0
    rebuilt = 0
    for group in table.groups().values():
        domain = range(1, len(group) + 1)
        for cell in group:
            reach = _dedupe(group + table.nearby_cells(cell.cell_position))
            if cell.has_value():
                removed += _remove_everywhere(reach, cell.value)
                cell.reset_candidates()
                continue
            seen = {other.value for other in reach if other.has_value()}
            cell.replace_candidates(number for number in domain if number not in seen)
            rebuilt += 1
    return {"candidates_removed": removed, "cells_rebuilt": rebuilt}


def find_single(cell: Cell, group_mates: Sequence[Cell]) -> Optional[int]:
    """Return the naked or hidden single of ``cell``, if any.

    The hidden single only looks at the cell's own group-mates, not at the
    nearby cells outside the group.
    """

    naked = cell.only_candidate()
    if naked is not None:
        return naked
    for number in cell.candidates:
        if not any(mate.has_candidate(number) for mate in group_mates):
            return number
    return None


def assign(table: Table) -> Metrics:
    """Phase 2: place every naked or hidden single found in storage order."""

    placements = 0
    removed = 0
    groups: Dict[UUID, List[Cell]] = table.groups()

    for cell in table.cells():
        group_id = cell.require_group_id()
        mates = [other for other in groups[group_id] if other is not cell]
        reach = mates + table.nearby_cells(cell.cell_position)
        only_number = find_single(cell, mates)

        if cell.has_value():
            removed += _remove_everywhere(reach, cell.value)
            continue

        if only_number is not None:
            removed += _remove_everywhere(reach, only_number)
            cell.set_value(only_number)
            cell.reset_candidates()
            placements += 1

    return {"placements": placements, "candidates_removed": removed}


def step_propagate(table: Table) -> Metrics:
    """Run both phases and merge their metrics."""

    first = eliminate(table)
    second = assign(table)
    return {
        "placements": int(second["placements"]),
        "candidates_removed": int(first["candidates_removed"]) + int(second["candidates_removed"]),
        "cells_rebuilt": int(first["cells_rebuilt"]),
    }


__all__ = ["assign", "eliminate", "find_single", "step_propagate"]
