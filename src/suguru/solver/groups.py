"""Group formation: partition the table's cells into wall-bounded regions."""

from __future__ import annotations

import logging
from typing import Callable
from uuid import UUID, uuid4

from ..table import Table
from ..items import Direction

_LOGGER = logging.getLogger(__name__)

IdFactory = Callable[[], UUID]


def build_groups(table: Table, id_factory: IdFactory = uuid4) -> int:
    """Assign a group id to every cell and return the number of groups.

    The sweep visits cells in storage order.  A cell without an open left
    neighbour starts a fresh id; open neighbours either inherit the running id
    or, when they already carry another one, absorb every cell holding the
    running id, whose label is then adopted.  Merges relabel in O(group size).
    """

    group_id = id_factory()
    cells = table.cells()

    for cell in cells:
        neighbors = table.open_neighbors(cell.cell_position)
        if Direction.LEFT not in neighbors:
            group_id = id_factory()

        cell.group_id = group_id

        for neighbor in neighbors.values():
            neighbor_id = neighbor.group_id
            if neighbor_id is None:
                neighbor.group_id = group_id
                continue
            if neighbor_id == group_id:
                continue
            for other in cells:
                if other.group_id == group_id:
                    other.group_id = neighbor_id
            group_id = neighbor_id

    count = len(table.groups())
    _LOGGER.debug("formed %d groups over %d cells", count, len(cells))
    return count


__all__ = ["IdFactory", "build_groups"]
