"""Error types and the message catalogue shared by the Suguru core."""

from __future__ import annotations

from typing import Any, Dict, Mapping

MESSAGES: Dict[str, Dict[str, str]] = {
    "general": {
        "invalidX": "X coordinate must be a natural integer.",
        "invalidY": "Y coordinate must be a natural integer.",
        "invalidNumberValue": "Cell value must be a natural integer.",
        "groupIdInvalid": "Cell does not belong to a group yet.",
        "invalidDirection": "Unknown wall direction.",
    },
    "table": {
        "invalidColumns": "Column count must be an integer greater than or equal to 3.",
        "invalidLines": "Line count must be an integer greater than or equal to 3.",
        "notFound": "No grid item exists at the given position.",
        "cellOutOfBounds": "Cell position is outside of the table.",
        "objectOutOfBounds": "Grid position is outside of the table.",
        "notCell": "Grid item at the given position is not a cell.",
        "notWall": "Grid item at the given position is not a wall.",
    },
    "solver": {
        "invalidLayout": "Layout must provide one row per line and one label per column.",
        "interrupted": "Solving was interrupted before the grid was complete.",
    },
}


def get_message(category: str, code: str) -> str:
    """Return the catalogue entry for ``category``/``code``.

    Unknown categories or codes are programming mistakes and raise
    :class:`KeyError` with a descriptive message.
    """

    try:
        block: Mapping[str, str] = MESSAGES[category]
    except KeyError as exc:
        raise KeyError(f"Given category name '{category}' is invalid.") from exc
    try:
        return block[code]
    except KeyError as exc:
        raise KeyError(
            f"Given category '{category}' does not have a message named '{code}'."
        ) from exc


def format_error(component: str, message: str, *details: Any) -> str:
    parts = [message, *(str(detail) for detail in details)]
    return f"[{component}] " + " ".join(parts)


class SuguruError(Exception):
    """Base class for contract violations raised by the core."""

    category = "general"

    def __init__(self, code: str, *details: Any, component: str = "Suguru") -> None:
        self.code = code
        self.component = component
        self.details = details
        super().__init__(format_error(component, get_message(self.category, code), *details))


class InvalidDimensionsError(SuguruError, ValueError):
    category = "table"


class NotFoundError(SuguruError, LookupError):
    category = "table"


class OutOfBoundsError(SuguruError, LookupError):
    category = "table"


class WrongItemTypeError(SuguruError, TypeError):
    category = "table"


class GroupIdUnsetError(SuguruError, LookupError):
    """Raised when a mandatory group identifier is read before group formation."""


class InvalidValueError(SuguruError, ValueError):
    """Raised for coordinates or cell values that are not natural integers."""


class InvalidDirectionError(SuguruError, ValueError):
    pass


class InvalidLayoutError(SuguruError, ValueError):
    category = "solver"


class SolveInterrupted(RuntimeError):
    """Raised when an opt-in pass or time limit stops the solver loop."""

    def __init__(self, passes: int, elapsed_ms: int) -> None:
        self.passes = passes
        self.elapsed_ms = elapsed_ms
        super().__init__(
            format_error(
                "Solver",
                get_message("solver", "interrupted"),
                f"(passes: {passes}, elapsed: {elapsed_ms} ms)",
            )
        )


__all__ = [
    "MESSAGES",
    "GroupIdUnsetError",
    "InvalidDimensionsError",
    "InvalidDirectionError",
    "InvalidLayoutError",
    "InvalidValueError",
    "NotFoundError",
    "OutOfBoundsError",
    "SolveInterrupted",
    "SuguruError",
    "WrongItemTypeError",
    "format_error",
    "get_message",
]
