from __future__ import annotations

from suguru.solver.groups import build_groups
from suguru.solver.phases.propagate import assign, eliminate, find_single, step_propagate
from suguru.table import Table


def _single_group_table() -> Table:
    table = Table(3, 3)
    build_groups(table)
    return table


def test_eliminate_rebuilds_candidates_from_reach() -> None:
    table = _single_group_table()
    table.cell((0, 0)).set_value(1)

    metrics = eliminate(table)

    assert table.cell((0, 0)).candidates == ()
    assert table.cell((2, 2)).candidates == (2, 3, 4, 5, 6, 7, 8, 9)
    assert metrics["cells_rebuilt"] == 8


def test_eliminate_replaces_stale_candidates() -> None:
    table = _single_group_table()
    table.cell((1, 1)).add_candidates(42, 3)

    eliminate(table)

    assert not table.cell((1, 1)).has_candidate(42)
    assert table.cell((1, 1)).candidates == tuple(range(1, 10))


def test_eliminate_counts_values_of_nearby_cells_in_other_groups(make_solver) -> None:
    solver = make_solver(3, 3)
    solver.add_layout(["AAB", "BBB", "BBB"])
    build_groups(solver.table)
    solver.table.cell((0, 1)).set_value(2)

    eliminate(solver.table)

    # (0, 2) is in a group of two and touches (0, 1) from above.
    assert solver.table.cell((0, 2)).candidates == (1,)
    assert solver.table.cell((1, 2)).candidates == (1,)


def test_assign_places_naked_single() -> None:
    table = _single_group_table()
    values = iter(range(1, 9))
    for cell in table.cells()[:-1]:
        cell.set_value(next(values))

    eliminate(table)
    metrics = assign(table)

    last = table.cells()[-1]
    assert last.value == 9
    assert last.candidates == ()
    assert metrics["placements"] == 1


def test_find_single_prefers_naked_then_hidden() -> None:
    table = _single_group_table()
    cell, mate, other = table.cells()[:3]
    cell.replace_candidates([4])
    assert find_single(cell, [mate, other]) == 4

    cell.replace_candidates([1, 2, 3])
    mate.replace_candidates([1, 3])
    other.replace_candidates([3])
    assert find_single(cell, [mate, other]) == 2

    other.replace_candidates([2, 3])
    assert find_single(cell, [mate, other]) is None


def test_hidden_single_only_checks_group_mates(make_solver) -> None:
    solver = make_solver(3, 3)
    solver.add_layout(["AAB", "BBB", "BBB"])
    build_groups(solver.table)
    table = solver.table

    table.cell((0, 2)).replace_candidates([1, 2])
    table.cell((1, 2)).replace_candidates([1])
    # A nearby cell in the other group still offers 2.
    table.cell((0, 1)).replace_candidates([2, 3])

    assign(table)

    assert table.cell((0, 2)).value == 2
    assert table.cell((1, 2)).value == 1
    assert not table.cell((0, 1)).has_candidate(2)


def test_valued_cells_strike_their_value_from_reach() -> None:
    table = _single_group_table()
    for cell in table.cells():
        cell.replace_candidates([3, 5])
    table.cell((1, 1)).set_value(3)
    table.cell((1, 1)).reset_candidates()

    metrics = assign(table)

    assert metrics["candidates_removed"] >= 8
    assert all(
        not cell.has_candidate(3) for cell in table.cells() if cell is not table.cell((1, 1))
    )


def test_step_propagate_completes_the_last_cell() -> None:
    table = _single_group_table()
    for value, cell in enumerate(table.cells()[:8], start=1):
        cell.set_value(value)

    metrics = step_propagate(table)

    assert table.is_complete()
    assert sorted(cell.value for cell in table.cells()) == list(range(1, 10))
    assert metrics["placements"] == 1
    assert metrics["cells_rebuilt"] == 1
