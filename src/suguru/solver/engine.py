"""Solver loop and the public puzzle-authoring facade."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..errors import InvalidLayoutError, SolveInterrupted
from ..items import ALL_DIRECTIONS, Direction
from ..table import Table
from .checkpoint import CheckpointController, PassOutcome
from .groups import build_groups
from .phases.propagate import step_propagate
from .settings import SolverSettings, resolve_settings
from .trace import PassTrace, PassTraceEntry

_LOGGER = logging.getLogger(__name__)

PassCallback = Callable[["Solver", PassTraceEntry], None]


@dataclass(frozen=True)
class SolveReport:
    """Summary of a finished :meth:`Solver.solve` run."""

    passes: int
    guesses: int
    restores: int
    snapshot_taken: bool
    groups: int
    elapsed_ms: int

    def to_dict(self) -> dict:
        return {
            "passes": self.passes,
            "guesses": self.guesses,
            "restores": self.restores,
            "snapshot_taken": self.snapshot_taken,
            "groups": self.groups,
            "elapsed_ms": self.elapsed_ms,
        }


class Solver:
    """Author a Suguru layout, then drive it to a complete, valid grid.

    Parameters
    ----------
    columns, lines:
        Table size in cells; both must be integers ``>= 3``.
    settings:
        Resolved :class:`SolverSettings`.  Defaults to :func:`resolve_settings`
        which reads ``config.toml`` and ``SUGURU_*`` environment variables.
    rng:
        Random source for guesses.  When omitted a ``random.Random`` seeded
        with ``settings.seed`` is used.
    on_pass:
        Optional callback invoked after every unfinished pass, e.g. for live
        rendering.  It must not mutate the table.
    """

    def __init__(
        self,
        columns: int,
        lines: int,
        *,
        settings: SolverSettings | None = None,
        rng: random.Random | None = None,
        on_pass: PassCallback | None = None,
    ) -> None:
        self.table = Table(columns, lines)
        self.settings = settings or resolve_settings()
        self.rng = rng or random.Random(self.settings.seed)
        self.on_pass = on_pass
        self.trace = PassTrace(trace_level=self.settings.trace_level)

    # Authoring ----------------------------------------------------------

    def enable_log(self, wait_ms: int | None = None) -> "Solver":
        """Log every pass and optionally pause ``wait_ms`` between passes."""

        changes = {"log_passes": True}
        if wait_ms:
            changes["wait_ms"] = int(wait_ms)
        self.settings = replace(self.settings, **changes)
        return self

    def set_cell_value(self, cell_position: Tuple[int, int], value: Optional[int] = None) -> "Solver":
        self.table.cell(cell_position).set_value(value)
        return self

    def add_group_borders(
        self,
        cell_position: Tuple[int, int],
        directions: Iterable[Direction | str] | None = None,
    ) -> "Solver":
        """Mark walls around a cell as group borders (all four by default)."""

        walls = self.table.walls_around(cell_position)
        if directions is None:
            chosen: Tuple[Direction, ...] = ALL_DIRECTIONS
        else:
            chosen = tuple(dict.fromkeys(Direction.from_value(d) for d in directions))
        for direction in chosen:
            walls[direction].set_group_border(True)
        return self

    def add_layout(self, rows: Sequence[str]) -> "Solver":
        """Add group borders from a label map, top line first.

        ``rows`` holds one string per line with one label character per
        column; neighbouring cells with different labels are separated by a
        group border.  ``["AAB", "ACB", "CCB"]`` describes three groups.
        """

        columns, lines = self.table.columns, self.table.lines
        if len(rows) != lines or any(len(row) != columns for row in rows):
            raise InvalidLayoutError("invalidLayout", f"(expected {lines} rows of {columns})")

        def label(x: int, y: int) -> str:
            return rows[lines - 1 - y][x]

        for y in range(lines):
            for x in range(columns):
                if x + 1 < columns and label(x, y) != label(x + 1, y):
                    self.add_group_borders((x, y), [Direction.RIGHT])
                if y + 1 < lines and label(x, y) != label(x, y + 1):
                    self.add_group_borders((x, y), [Direction.UP])
        return self

    # Solving ------------------------------------------------------------

    def solve(self) -> SolveReport:
        """Run passes until every cell holds a value consistent with its reach.

        Each call starts a fresh pass trace, so a solved grid can be solved
        again and finishes after one pass.

        The loop is not guaranteed to terminate for every layout.  When
        ``max_passes`` or ``timeout_s`` is configured, exceeding it raises
        :class:`~suguru.errors.SolveInterrupted`.
        """

        self.trace.reset()
        settings = self.settings
        group_count = build_groups(self.table)
        controller = CheckpointController(
            self.table,
            self.rng,
            stagnation_threshold=settings.stagnation_threshold,
            max_guess_attempts=settings.max_guess_attempts,
        )

        started = time.monotonic()
        passes = 0
        _LOGGER.info(
            "solving %dx%d table with %d groups",
            self.table.columns,
            self.table.lines,
            group_count,
        )

        while True:
            self._check_limits(passes, started)
            passes += 1

            controller.begin_pass()
            metrics = step_propagate(self.table)
            guess = controller.apply_pending_guess()
            stagnation_before = controller.stagnation_count
            outcome = controller.evaluate()

            entry = self._entry(passes, metrics, guess is not None, outcome, stagnation_before)
            self.trace.record(entry)

            if outcome.solved:
                elapsed_ms = int((time.monotonic() - started) * 1000)
                _LOGGER.info("solved in %d passes (%d ms)", passes, elapsed_ms)
                return SolveReport(
                    passes=passes,
                    guesses=controller.guesses,
                    restores=controller.restores,
                    snapshot_taken=controller.snapshot_taken,
                    groups=group_count,
                    elapsed_ms=elapsed_ms,
                )

            if settings.log_passes:
                _LOGGER.debug(
                    "pass %d: placements=%d filled=%d/%d stagnation=%d",
                    passes,
                    entry.placements,
                    entry.filled,
                    len(self.table.cells()),
                    controller.stagnation_count,
                )
            if self.on_pass is not None:
                self.on_pass(self, entry)
            if settings.wait_ms:
                time.sleep(settings.wait_ms / 1000)

    # Internal helpers -------------------------------------------------

    def _check_limits(self, passes: int, started: float) -> None:
        settings = self.settings
        elapsed = time.monotonic() - started
        over_passes = settings.max_passes is not None and passes >= settings.max_passes
        over_time = settings.timeout_s is not None and elapsed >= settings.timeout_s
        if over_passes or over_time:
            raise SolveInterrupted(passes, int(elapsed * 1000))

    def _entry(
        self,
        step: int,
        metrics,
        guessed: bool,
        outcome: PassOutcome,
        stagnation: int,
    ) -> PassTraceEntry:
        note = None
        if outcome.solved:
            note = "solved"
        elif outcome.check_failed:
            note = "inconsistent"
        elif outcome.cell_check_failed:
            note = "deadlock"
        return PassTraceEntry(
            step=step,
            placements=int(metrics.get("placements", 0)),
            candidates_removed=int(metrics.get("candidates_removed", 0)),
            filled=self.table.filled_count(),
            stagnation=stagnation,
            guessed=guessed,
            restored=outcome.restored,
            snapshot_taken=outcome.snapshot_taken,
            note=note,
        )


__all__ = ["PassCallback", "SolveReport", "Solver"]
