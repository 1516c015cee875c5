"""Suguru puzzle package: doubled-coordinate table and checkpointed solver."""

from __future__ import annotations

from .errors import (
    GroupIdUnsetError,
    InvalidDimensionsError,
    InvalidDirectionError,
    InvalidLayoutError,
    InvalidValueError,
    NotFoundError,
    OutOfBoundsError,
    SolveInterrupted,
    SuguruError,
    WrongItemTypeError,
)
from .items import Cell, Direction, ItemKind, Point, Position, Wall
from .solver import SolveReport, Solver, SolverSettings, resolve_settings
from .table import Table

__version__ = "1.0.0"
__all__ = [
    "Cell",
    "Direction",
    "GroupIdUnsetError",
    "InvalidDimensionsError",
    "InvalidDirectionError",
    "InvalidLayoutError",
    "InvalidValueError",
    "ItemKind",
    "NotFoundError",
    "OutOfBoundsError",
    "Point",
    "Position",
    "SolveInterrupted",
    "SolveReport",
    "Solver",
    "SolverSettings",
    "SuguruError",
    "Table",
    "Wall",
    "WrongItemTypeError",
    "resolve_settings",
]
