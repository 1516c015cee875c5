"""Stagnation detection and single-checkpoint rollback."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ..table import Table
from .phases.branch import DEFAULT_MAX_ATTEMPTS, Guess, step_branch
from .state_capsule import StateCapsule

_LOGGER = logging.getLogger(__name__)

DEFAULT_STAGNATION_THRESHOLD = 2


def is_consistent(table: Table) -> bool:
    """Return ``True`` when no cell shares its value with a cell in its reach."""

    for cell in table.cells():
        if any(other.value == cell.value for other in table.reach(cell)):
            return False
    return True


def has_deadlock(table: Table) -> bool:
    """Return ``True`` when some empty cell has run out of candidates."""

    return any(not cell.has_value() and not cell.candidates for cell in table.cells())


@dataclass(frozen=True)
class PassOutcome:
    """Signals produced by :meth:`CheckpointController.evaluate`."""

    solved: bool = False
    check_failed: bool = False
    cell_check_failed: bool = False
    restored: bool = False
    snapshot_taken: bool = False


class CheckpointController:
    """Keeps the single rollback slot and decides when to guess.

    Only one snapshot is ever captured, the first time the grid stops changing
    for ``stagnation_threshold`` passes without a failure.  Every later
    deadlock or inconsistent completion rewinds to that snapshot and schedules
    a fresh random guess.
    """

    def __init__(
        self,
        table: Table,
        rng: random.Random,
        *,
        stagnation_threshold: int = DEFAULT_STAGNATION_THRESHOLD,
        max_guess_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self.table = table
        self.rng = rng
        self.stagnation_threshold = stagnation_threshold
        self.max_guess_attempts = max_guess_attempts

        self.stagnation_count = 0
        self.snapshot: Optional[StateCapsule] = None
        self.snapshot_taken = False
        self.guess_pending = False
        self.previous_pass = StateCapsule()

        self.restores = 0
        self.guesses = 0

    def begin_pass(self) -> None:
        self.previous_pass = StateCapsule.capture(self.table.cells())

    def apply_pending_guess(self) -> Optional[Guess]:
        if not self.guess_pending:
            return None
        guess = step_branch(self.table, self.rng, max_attempts=self.max_guess_attempts)
        if guess is not None:
            self.guesses += 1
        self.guess_pending = False
        return guess

    def evaluate(self) -> PassOutcome:
        """Run the end-of-pass checks and update the controller state."""

        check_failed = False
        if self.table.is_complete():
            if is_consistent(self.table):
                return PassOutcome(solved=True)
            check_failed = True

        cell_check_failed = has_deadlock(self.table)

        restored = False
        if check_failed or cell_check_failed:
            if self.snapshot is not None:
                self.snapshot.restore(self.table)
                self.restores += 1
                restored = True
                _LOGGER.info("snapshot restored (restore #%d)", self.restores)
            self.guess_pending = True

        taken_now = False
        if self.stagnation_count >= self.stagnation_threshold:
            if not self.snapshot_taken and not check_failed and not cell_check_failed:
                self.snapshot = StateCapsule.capture(self.table.cells())
                self.snapshot_taken = True
                taken_now = True
                _LOGGER.info("snapshot taken")
            self.guess_pending = True

        if self.guess_pending:
            self.stagnation_count = 0
        elif self.previous_pass.matches(self.table.cells()):
            self.stagnation_count += 1
        else:
            self.stagnation_count = 0

        return PassOutcome(
            check_failed=check_failed,
            cell_check_failed=cell_check_failed,
            restored=restored,
            snapshot_taken=taken_now,
        )


__all__ = [
    "CheckpointController",
    "DEFAULT_STAGNATION_THRESHOLD",
    "PassOutcome",
    "has_deadlock",
    "is_consistent",
]
