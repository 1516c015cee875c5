"""Doubled-coordinate table holding every cell, wall and corner point."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple
from uuid import UUID

from .errors import (
    InvalidDimensionsError,
    InvalidValueError,
    NotFoundError,
    OutOfBoundsError,
    WrongItemTypeError,
)
from .items import (
    ALL_DIRECTIONS,
    Cell,
    Direction,
    Point,
    Position,
    TableItem,
    Wall,
    to_cell_position,
    to_grid_position,
)

MIN_SIZE = 3

# Grid-space offsets of the cells a cell "sees" besides its group.
_NEARBY_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (2, 0),
    (-2, 0),
    (2, 2),
    (2, -2),
    (-2, 2),
    (-2, -2),
    (0, 2),
    (0, -2),
)


def _valid_size(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= MIN_SIZE


def _integer_position(position: Tuple[int, int]) -> Position:
    """Reject non-integer coordinates; negative ones are left to the bounds checks."""

    x, y = position
    for code, value in (("invalidX", x), ("invalidY", y)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidValueError(code, repr(value), component="Table")
    return Position(x, y)


class Table:
    """Owns the grid items of a ``columns`` x ``lines`` puzzle.

    Storage is row-major with the rows reversed: storage row ``0`` holds the
    highest grid-space ``y``.  Cells are additionally indexed by their
    cell-space position so that the solver components can address them by key.
    """

    def __init__(self, columns: int, lines: int) -> None:
        if not _valid_size(columns):
            raise InvalidDimensionsError("invalidColumns", repr(columns), component="Table")
        if not _valid_size(lines):
            raise InvalidDimensionsError("invalidLines", repr(lines), component="Table")

        self.columns = columns
        self.lines = lines
        self._data: List[List[TableItem]] = []
        self._cells: Dict[Position, Cell] = {}
        self._prepare()

    # Dimensions ---------------------------------------------------------

    @property
    def column_length(self) -> int:
        return self.columns * 2 + 1

    @property
    def line_length(self) -> int:
        return self.lines * 2 + 1

    def storage_y(self, y: int) -> int:
        return self.line_length - 1 - y

    def is_border(self, x: int, y: int) -> bool:
        return x in (0, self.column_length - 1) or y in (0, self.line_length - 1)

    def is_object_out_of_table(self, position: Tuple[int, int]) -> bool:
        x, y = position
        return not (0 <= x < self.column_length and 0 <= y < self.line_length)

    def is_cell_out_of_table(self, cell_position: Tuple[int, int]) -> bool:
        x, y = cell_position
        return not (0 <= x < self.columns and 0 <= y < self.lines)

    # Lookups ------------------------------------------------------------

    def item(self, position: Tuple[int, int]) -> TableItem:
        x, y = _integer_position(position)
        if self.is_object_out_of_table((x, y)):
            raise NotFoundError("notFound", Position(x, y), component="Table")
        return self._data[self.storage_y(y)][x]

    def cell(self, cell_position: Tuple[int, int]) -> Cell:
        key = _integer_position(cell_position)
        if self.is_cell_out_of_table(key):
            raise OutOfBoundsError("cellOutOfBounds", key, component="Table")
        item = self.item(to_grid_position(key))
        if not isinstance(item, Cell):
            raise WrongItemTypeError("notCell", key, component="Table")
        return item

    def wall(self, position: Tuple[int, int]) -> Wall:
        key = _integer_position(position)
        if self.is_object_out_of_table(key):
            raise OutOfBoundsError("objectOutOfBounds", key, component="Table")
        item = self.item(key)
        if not isinstance(item, Wall):
            raise WrongItemTypeError("notWall", key, component="Table")
        return item

    def walls_around(self, cell_position: Tuple[int, int]) -> Dict[Direction, Wall]:
        key = _integer_position(cell_position)
        if self.is_cell_out_of_table(key):
            raise OutOfBoundsError("cellOutOfBounds", key, component="Table")
        x, y = to_grid_position(key)
        walls: Dict[Direction, Wall] = {}
        for direction in ALL_DIRECTIONS:
            dx, dy = direction.offset
            walls[direction] = self.wall((x + dx, y + dy))
        return walls

    def open_neighbors(self, cell_position: Tuple[int, int]) -> Dict[Direction, Cell]:
        """Return the cells reachable through walls that block nothing."""

        neighbors: Dict[Direction, Cell] = {}
        for direction, wall in self.walls_around(cell_position).items():
            if wall.blocks:
                continue
            dx, dy = direction.offset
            target = (wall.position.x + dx, wall.position.y + dy)
            if self.is_object_out_of_table(target):
                continue
            item = self.item(target)
            if isinstance(item, Cell):
                neighbors[direction] = item
        return neighbors

    def nearby_cells(self, cell_position: Tuple[int, int]) -> List[Cell]:
        """Orthogonal and diagonal neighbours, regardless of walls."""

        x, y = to_grid_position(self.cell(cell_position).cell_position)
        nearby: List[Cell] = []
        for dx, dy in _NEARBY_OFFSETS:
            target = (x + dx, y + dy)
            if self.is_object_out_of_table(target):
                continue
            item = self.item(target)
            if isinstance(item, Cell):
                nearby.append(item)
        return nearby

    # Collections --------------------------------------------------------

    def rows(self) -> List[List[TableItem]]:
        """Storage rows, top line first."""

        return [list(row) for row in self._data]

    def items(self) -> Iterator[TableItem]:
        for row in self._data:
            yield from row

    def cells(self) -> List[Cell]:
        return list(self._cells.values())

    def walls(self) -> List[Wall]:
        return [item for item in self.items() if isinstance(item, Wall)]

    def cells_of_group(self, group_id: Optional[UUID]) -> List[Cell]:
        return [cell for cell in self._cells.values() if cell.group_id == group_id]

    def groups(self) -> Dict[UUID, List[Cell]]:
        groups: Dict[UUID, List[Cell]] = {}
        for cell in self._cells.values():
            if cell.group_id is None:
                continue
            groups.setdefault(cell.group_id, []).append(cell)
        return groups

    def group_mates(self, cell: Cell) -> List[Cell]:
        group_id = cell.require_group_id()
        return [other for other in self.cells_of_group(group_id) if other is not cell]

    def reach(self, cell: Cell) -> List[Cell]:
        """Group-mates followed by nearby cells, without duplicates or ``cell``."""

        seen = {id(cell)}
        reached: List[Cell] = []
        for other in self.group_mates(cell) + self.nearby_cells(cell.cell_position):
            if id(other) in seen:
                continue
            seen.add(id(other))
            reached.append(other)
        return reached

    def is_complete(self) -> bool:
        return all(cell.has_value() for cell in self._cells.values())

    def filled_count(self) -> int:
        return sum(1 for cell in self._cells.values() if cell.has_value())

    # Construction -------------------------------------------------------

    def _make_item(self, x: int, y: int) -> TableItem:
        position = Position(x, y)
        x_odd, y_odd = x % 2 == 1, y % 2 == 1
        if x_odd and y_odd:
            return Cell(position)
        if not x_odd and not y_odd:
            return Point(position)
        return Wall(position, border=self.is_border(x, y))

    def _prepare(self) -> None:
        rows = [
            [self._make_item(x, y) for x in range(self.column_length)]
            for y in range(self.line_length)
        ]
        rows.reverse()
        self._data = rows
        self._cells = {
            to_cell_position(item.position): item
            for item in self.items()
            if isinstance(item, Cell)
        }

    def __repr__(self) -> str:
        return f"Table(columns={self.columns}, lines={self.lines})"


__all__ = ["MIN_SIZE", "Table"]
