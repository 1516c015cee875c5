"""Branching support: inject a random guess into a stalled grid."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ...items import Cell, Position
from ...table import Table

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


@dataclass(frozen=True)
class Guess:
    """A value placed on a cell without logical justification."""

    position: Position
    value: int
    attempts: int


def step_branch(
    table: Table,
    rng: random.Random,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Optional[Guess]:
    """Place a uniformly random candidate on a uniformly random empty cell.

    Picks that land on a cell without candidates are retried up to
    ``max_attempts`` times; every miss is only logged.  Returns ``None`` when
    nothing was placed.
    """

    empty_cells = [cell for cell in table.cells() if not cell.has_value()]
    if not empty_cells:
        _LOGGER.info("no empty cell left to guess on")
        return None

    for attempt in range(1, max_attempts + 1):
        cell: Cell = rng.choice(empty_cells)
        candidates = cell.candidates
        if not candidates:
            _LOGGER.warning(
                "random pick %s has no candidates (attempt %d/%d)",
                cell.cell_position,
                attempt,
                max_attempts,
            )
            continue
        value = rng.choice(candidates)
        cell.set_value(value)
        cell.reset_candidates()
        _LOGGER.debug("guessed %d at %s", value, cell.cell_position)
        return Guess(position=cell.cell_position, value=value, attempts=attempt)

    _LOGGER.warning("giving up on guessing after %d attempts", max_attempts)
    return None


__all__ = ["DEFAULT_MAX_ATTEMPTS", "Guess", "step_branch"]
