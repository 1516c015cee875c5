"""Suguru solver: group formation, propagation and checkpointed guessing."""

from __future__ import annotations

from .checkpoint import CheckpointController, PassOutcome, has_deadlock, is_consistent
from .engine import PassCallback, SolveReport, Solver
from .groups import build_groups
from .phases import Guess, assign, eliminate, find_single, step_branch, step_propagate
from .settings import SolverSettings, resolve_settings
from .state_capsule import CellState, Snapshot, StateCapsule
from .trace import PassTrace, PassTraceEntry, TraceValidationError

__all__ = [
    "CellState",
    "CheckpointController",
    "Guess",
    "PassCallback",
    "PassOutcome",
    "PassTrace",
    "PassTraceEntry",
    "Snapshot",
    "SolveReport",
    "Solver",
    "SolverSettings",
    "StateCapsule",
    "TraceValidationError",
    "assign",
    "build_groups",
    "eliminate",
    "find_single",
    "has_deadlock",
    "is_consistent",
    "resolve_settings",
    "step_branch",
    "step_propagate",
]
