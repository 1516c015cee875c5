"""Solver phases executed once per pass."""

from __future__ import annotations

from .branch import DEFAULT_MAX_ATTEMPTS, Guess, step_branch
from .propagate import assign, eliminate, find_single, step_propagate

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "Guess",
    "assign",
    "eliminate",
    "find_single",
    "step_branch",
    "step_propagate",
]
