"""Grid items living on the doubled-coordinate Suguru table.

Grid-space doubles every cell-space coordinate and interleaves walls and
corner points between the cells::

    grid = 2 * cell + 1        cell = (grid - 1) / 2

Cells therefore sit where both grid coordinates are odd, points where both are
even and walls everywhere else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, NamedTuple, Optional, Tuple
from uuid import UUID

from .errors import GroupIdUnsetError, InvalidDirectionError, InvalidValueError


class Position(NamedTuple):
    x: int
    y: int

    def __str__(self) -> str:
        return f"(x: {self.x}, y: {self.y})"


class ItemKind(str, Enum):
    """Closed set of item variants stored on the table."""

    CELL = "cell"
    WALL = "wall"
    POINT = "point"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    RIGHT = "right"
    LEFT = "left"

    @classmethod
    def from_value(cls, value: "Direction | str") -> "Direction":
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidDirectionError("invalidDirection", repr(value), component="Direction") from exc

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]


_OFFSETS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.LEFT: (-1, 0),
}

ALL_DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.RIGHT, Direction.LEFT)


def is_natural_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def to_grid_position(cell_position: Tuple[int, int]) -> Position:
    """Convert a cell-space position into grid-space."""

    x, y = cell_position
    return Position(x * 2 + 1, y * 2 + 1)


def to_cell_position(grid_position: Tuple[int, int]) -> Position:
    """Convert a grid-space cell address back into cell-space."""

    x, y = grid_position
    return Position((x - 1) // 2, (y - 1) // 2)


def _checked_position(x: object, y: object, component: str) -> Position:
    if not is_natural_integer(x):
        raise InvalidValueError("invalidX", repr(x), component=component)
    if not is_natural_integer(y):
        raise InvalidValueError("invalidY", repr(y), component=component)
    return Position(x, y)  # type: ignore[arg-type]


@dataclass(eq=False)
class GridItem:
    """Common base for everything stored on the table (grid-space position)."""

    position: Position
    kind = ItemKind.POINT

    def __post_init__(self) -> None:
        self.position = _checked_position(*self.position, component=type(self).__name__)

    def is_cell(self) -> bool:
        return self.kind is ItemKind.CELL

    def is_wall(self) -> bool:
        return self.kind is ItemKind.WALL

    def is_point(self) -> bool:
        return self.kind is ItemKind.POINT


@dataclass(eq=False)
class Point(GridItem):
    kind = ItemKind.POINT


@dataclass(eq=False)
class Wall(GridItem):
    """Separator between two cells; rim walls are fixed borders."""

    kind = ItemKind.WALL
    border: bool = False
    group_border: bool = False

    @property
    def is_border(self) -> bool:
        return self.border

    @property
    def is_group_border(self) -> bool:
        return self.group_border

    @property
    def blocks(self) -> bool:
        return self.border or self.group_border

    def set_group_border(self, flag: bool = True) -> "Wall":
        self.group_border = bool(flag)
        return self


@dataclass(eq=False)
class Cell(GridItem):
    """Playable cell carrying a value, candidates and a group identifier.

    Candidates keep insertion order so the hidden-single scan is deterministic.
    """

    kind = ItemKind.CELL
    value: Optional[int] = None
    group_id: Optional[UUID] = None
    _candidates: Dict[int, None] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.set_value(self.value)

    @property
    def cell_position(self) -> Position:
        return to_cell_position(self.position)

    # Values -------------------------------------------------------------

    def has_value(self) -> bool:
        return self.value is not None

    def set_value(self, value: Optional[int] = None) -> "Cell":
        if value is not None and not is_natural_integer(value):
            raise InvalidValueError("invalidNumberValue", repr(value), component="Cell")
        self.value = value
        return self

    # Candidates ---------------------------------------------------------

    @property
    def candidates(self) -> Tuple[int, ...]:
        return tuple(self._candidates)

    def add_candidates(self, *values: int) -> "Cell":
        for value in values:
            self._candidates[value] = None
        return self

    def replace_candidates(self, values: Iterable[int]) -> "Cell":
        self._candidates = dict.fromkeys(values)
        return self

    def remove_candidates(self, *values: int) -> int:
        """Drop ``values`` from the candidate set and return how many were present."""

        removed = 0
        for value in values:
            if value in self._candidates:
                del self._candidates[value]
                removed += 1
        return removed

    def has_candidate(self, value: int) -> bool:
        return value in self._candidates

    def only_candidate(self) -> Optional[int]:
        if len(self._candidates) == 1:
            return next(iter(self._candidates))
        return None

    def reset_candidates(self) -> "Cell":
        self._candidates = {}
        return self

    # Groups -------------------------------------------------------------

    def require_group_id(self) -> UUID:
        if self.group_id is None:
            raise GroupIdUnsetError("groupIdInvalid", str(self.cell_position), component="Cell")
        return self.group_id

    def set_group_id(self, group_id: Optional[UUID]) -> "Cell":
        if group_id is not None:
            self.group_id = group_id
        return self


TableItem = Cell | Wall | Point


__all__ = [
    "ALL_DIRECTIONS",
    "Cell",
    "Direction",
    "GridItem",
    "ItemKind",
    "Point",
    "Position",
    "TableItem",
    "Wall",
    "is_natural_integer",
    "to_cell_position",
    "to_grid_position",
]
