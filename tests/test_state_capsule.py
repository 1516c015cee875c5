from __future__ import annotations

from uuid import uuid4

from suguru.solver.groups import build_groups
from suguru.solver.phases.propagate import eliminate
from suguru.solver.state_capsule import StateCapsule
from suguru.table import Table


def _prepared_table() -> Table:
    table = Table(3, 3)
    build_groups(table)
    table.cell((0, 0)).set_value(1)
    table.cell((2, 2)).set_value(5)
    eliminate(table)
    return table


def test_capture_is_reflexive() -> None:
    table = _prepared_table()
    capsule = StateCapsule.capture(table.cells())
    assert capsule.matches(table.cells())
    assert capsule.matches(StateCapsule.capture(table.cells()))
    assert not capsule.is_empty()
    assert StateCapsule().is_empty()


def test_restore_writes_back_every_cell() -> None:
    table = _prepared_table()
    before = {
        cell.cell_position: (cell.value, set(cell.candidates), cell.group_id)
        for cell in table.cells()
    }
    capsule = StateCapsule.capture(table.cells())

    for cell in table.cells():
        cell.set_value(None)
        cell.replace_candidates([99])
        cell.group_id = uuid4()
    assert not capsule.matches(table.cells())

    assert capsule.restore(table) == 9
    after = {
        cell.cell_position: (cell.value, set(cell.candidates), cell.group_id)
        for cell in table.cells()
    }
    assert after == before
    assert capsule.matches(table.cells())


def test_capsule_is_detached_from_live_cells() -> None:
    table = _prepared_table()
    capsule = StateCapsule.capture(table.cells())
    table.cell((1, 1)).set_value(3)
    table.cell((1, 1)).reset_candidates()

    state = next(s for s in capsule.cells if s.position == (1, 1))
    assert state.value is None
    assert len(state.candidates) == 7


def test_candidate_order_does_not_matter() -> None:
    table = _prepared_table()
    capsule = StateCapsule.capture(table.cells())
    cell = table.cell((1, 1))
    cell.replace_candidates(reversed(cell.candidates))
    assert capsule.matches(table.cells())

    cell.replace_candidates(cell.candidates[:-1])
    assert not capsule.matches(table.cells())


def test_different_lengths_never_match() -> None:
    table = _prepared_table()
    capsule = StateCapsule.capture(table.cells())
    assert not capsule.matches(table.cells()[:-1])
