"""Per-pass trace records for the solver loop."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Mapping, MutableSequence, Tuple

TRACE_LEVELS = ("none", "pass")


class TraceValidationError(ValueError):
    """Raised when a trace entry carries impossible counters."""


@dataclass(frozen=True, slots=True)
class PassTraceEntry:
    """What happened during one pass of the solver loop."""

    step: int
    placements: int
    candidates_removed: int
    filled: int
    stagnation: int
    guessed: bool = False
    restored: bool = False
    snapshot_taken: bool = False
    note: str | None = None

    def __post_init__(self) -> None:
        if self.step < 1:
            raise TraceValidationError("step must be >= 1")
        if self.placements < 0:
            raise TraceValidationError("placements must be >= 0")
        if self.candidates_removed < 0:
            raise TraceValidationError("candidates_removed must be >= 0")
        if self.filled < 0:
            raise TraceValidationError("filled must be >= 0")
        if self.stagnation < 0:
            raise TraceValidationError("stagnation must be >= 0")

    def to_payload(self) -> dict:
        payload = asdict(self)
        if self.note is None:
            payload.pop("note")
        return payload


@dataclass
class PassTrace:
    """In-memory trace accumulator respecting ``trace_level`` semantics."""

    trace_level: str = "none"
    entries: MutableSequence[PassTraceEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise TraceValidationError(f"Unsupported trace level: {self.trace_level!r}")

    def record(self, entry: PassTraceEntry | Mapping[str, object]) -> None:
        if self.trace_level == "none":
            return
        if isinstance(entry, Mapping):
            entry = PassTraceEntry(**entry)
        if self.entries and entry.step <= self.entries[-1].step:
            raise TraceValidationError("trace steps must be strictly increasing")
        self.entries.append(entry)

    def extend(self, entries: Iterable[PassTraceEntry | Mapping[str, object]]) -> None:
        for entry in entries:
            self.record(entry)

    def snapshot(self) -> Tuple[PassTraceEntry, ...]:
        return tuple(self.entries)

    def reset(self) -> None:
        self.entries.clear()

    def to_json(self, *, indent: int | None = None) -> str:
        payload: List[dict] = [entry.to_payload() for entry in self.entries]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), indent=indent)


__all__ = ["PassTrace", "PassTraceEntry", "TRACE_LEVELS", "TraceValidationError"]
