from __future__ import annotations

import random

import pytest

from suguru import Solver, SolverSettings


@pytest.fixture
def make_solver():
    """Build a solver with explicit settings so ``config.toml`` edits do not leak in."""

    def factory(columns: int = 3, lines: int = 3, *, seed: int = 7, **overrides) -> Solver:
        settings = SolverSettings(**overrides)
        return Solver(columns, lines, settings=settings, rng=random.Random(seed))

    return factory
