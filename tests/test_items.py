from __future__ import annotations

import pytest

from suguru.errors import GroupIdUnsetError, InvalidDirectionError, InvalidValueError
from suguru.items import (
    Cell,
    Direction,
    Position,
    Wall,
    is_natural_integer,
    to_cell_position,
    to_grid_position,
)


def test_grid_and_cell_positions_convert_both_ways() -> None:
    assert to_grid_position((0, 0)) == Position(1, 1)
    assert to_grid_position((2, 1)) == Position(5, 3)
    for x in range(4):
        for y in range(4):
            assert to_cell_position(to_grid_position((x, y))) == (x, y)


def test_position_str() -> None:
    assert str(Position(3, 5)) == "(x: 3, y: 5)"


def test_natural_integer_excludes_bool_and_negatives() -> None:
    assert is_natural_integer(0)
    assert is_natural_integer(12)
    assert not is_natural_integer(-1)
    assert not is_natural_integer(True)
    assert not is_natural_integer(1.0)
    assert not is_natural_integer("3")


def test_cell_value_validation() -> None:
    cell = Cell(Position(1, 1))
    assert not cell.has_value()
    cell.set_value(4)
    assert cell.value == 4
    cell.set_value(None)
    assert cell.value is None
    with pytest.raises(InvalidValueError):
        cell.set_value(-2)
    with pytest.raises(InvalidValueError):
        cell.set_value(2.5)
    with pytest.raises(InvalidValueError):
        Cell(Position(1, 1), value=True)


def test_grid_item_rejects_negative_coordinates() -> None:
    with pytest.raises(InvalidValueError):
        Wall(Position(-1, 2))


def test_candidates_keep_insertion_order() -> None:
    cell = Cell(Position(1, 1))
    cell.add_candidates(3, 1, 2, 1)
    assert cell.candidates == (3, 1, 2)
    assert cell.remove_candidates(1, 9) == 1
    assert cell.candidates == (3, 2)
    cell.replace_candidates([5])
    assert cell.only_candidate() == 5
    cell.reset_candidates()
    assert cell.candidates == ()
    assert cell.only_candidate() is None


def test_group_id_must_be_set_before_reading() -> None:
    cell = Cell(Position(1, 1))
    with pytest.raises(GroupIdUnsetError):
        cell.require_group_id()


def test_wall_blocks_on_border_or_group_border() -> None:
    wall = Wall(Position(2, 1))
    assert not wall.blocks
    wall.set_group_border()
    assert wall.is_group_border and wall.blocks
    wall.set_group_border(False)
    assert not wall.blocks
    assert Wall(Position(0, 1), border=True).blocks


def test_direction_from_value() -> None:
    assert Direction.from_value("up") is Direction.UP
    assert Direction.from_value(Direction.LEFT) is Direction.LEFT
    assert Direction.DOWN.offset == (0, -1)
    with pytest.raises(InvalidDirectionError):
        Direction.from_value("sideways")
