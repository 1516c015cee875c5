from __future__ import annotations

import logging
import random

from suguru.solver.groups import build_groups
from suguru.solver.phases.branch import step_branch
from suguru.solver.phases.propagate import eliminate
from suguru.table import Table


def test_guess_places_a_candidate_and_clears_candidates() -> None:
    table = Table(3, 3)
    build_groups(table)
    eliminate(table)

    guess = step_branch(table, random.Random(11))

    assert guess is not None
    assert guess.attempts == 1
    cell = table.cell(guess.position)
    assert cell.value == guess.value
    assert 1 <= guess.value <= 9
    assert cell.candidates == ()


def test_guess_is_reproducible_with_a_seed() -> None:
    picks = []
    for _ in range(2):
        table = Table(3, 3)
        build_groups(table)
        eliminate(table)
        picks.append(step_branch(table, random.Random(5)))
    assert picks[0] == picks[1]


def test_picks_without_candidates_are_retried(caplog) -> None:
    table = Table(3, 3)
    build_groups(table)
    for cell in table.cells():
        cell.reset_candidates()

    with caplog.at_level(logging.WARNING):
        guess = step_branch(table, random.Random(0), max_attempts=4)

    assert guess is None
    assert table.filled_count() == 0
    assert sum("has no candidates" in record.getMessage() for record in caplog.records) == 4


def test_full_table_has_nothing_to_guess() -> None:
    table = Table(3, 3)
    for value, cell in enumerate(table.cells(), start=1):
        cell.set_value(value)
    assert step_branch(table, random.Random(0)) is None
