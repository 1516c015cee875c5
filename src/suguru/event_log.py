"""JSONL history of finished solves.

Every record describes one :meth:`~suguru.solver.Solver.solve` run: the table
size, the :class:`~suguru.solver.SolveReport` counters and the solved grid.
Records go to ``<dir>/solves-<YYYYMMDD>-<NN>.jsonl``; a file that reached
``max_bytes`` is closed and the next index is opened.  Both settings default
to the ``[event_log]`` table of ``config.toml``.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from project_config import get_section

from .table import Table

if TYPE_CHECKING:  # pragma: no cover
    from .solver.engine import SolveReport

_DEFAULT_DIR = "logs/solves"
_DEFAULT_MAX_BYTES = 10 * 1024 * 1024
_LOCK = threading.Lock()


@dataclass
class _Destination:
    directory: Path
    max_bytes: int
    path: Optional[Path] = None


_destination: Optional[_Destination] = None


def _configured_max_bytes() -> int:
    value = get_section("event_log.max_bytes", _DEFAULT_MAX_BYTES)
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return _DEFAULT_MAX_BYTES


def configure(directory: str | Path | None = None, *, max_bytes: int | None = None) -> Path:
    """Select where solve records are written and return the directory.

    Arguments left as ``None`` fall back to ``[event_log].dir`` and
    ``[event_log].max_bytes``.
    """

    return _select(directory, max_bytes).directory


def _select(directory: str | Path | None, max_bytes: int | None) -> _Destination:
    global _destination
    if directory is None:
        directory = str(get_section("event_log.dir", _DEFAULT_DIR))
    limit = max_bytes if max_bytes is not None else _configured_max_bytes()
    _destination = _Destination(directory=Path(directory), max_bytes=limit)
    return _destination


def _active() -> _Destination:
    return _destination if _destination is not None else _select(None, None)


def _has_room(path: Path, max_bytes: int) -> bool:
    return not path.exists() or path.stat().st_size < max_bytes


def _target_file(destination: _Destination) -> Path:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    current = destination.path
    if current is not None and current.name.startswith(f"solves-{stamp}-"):
        if _has_room(current, destination.max_bytes):
            return current

    destination.directory.mkdir(parents=True, exist_ok=True)
    index = 0
    candidate = destination.directory / f"solves-{stamp}-00.jsonl"
    while not _has_room(candidate, destination.max_bytes):
        index += 1
        candidate = destination.directory / f"solves-{stamp}-{index:02d}.jsonl"
    destination.path = candidate
    return candidate


def grid_rows(table: Table) -> List[str]:
    """Cell values line by line, top line first; ``.`` marks an empty cell."""

    rows: List[str] = []
    for y in reversed(range(table.lines)):
        values = (table.cell((x, y)).value for x in range(table.columns))
        rows.append(" ".join("." if value is None else str(value) for value in values))
    return rows


def solve_record(table: Table, report: "SolveReport", **extra: Any) -> Dict[str, Any]:
    """Build the summary of one solve; ``extra`` keys are added verbatim."""

    record: Dict[str, Any] = {
        "event": "solve",
        "columns": table.columns,
        "lines": table.lines,
        **report.to_dict(),
        "grid": grid_rows(table),
    }
    record.update(extra)
    return record


def write_record(record: Dict[str, Any]) -> Path:
    """Append ``record`` with a UTC timestamp and return the file written to."""

    payload = dict(record)
    payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))
    line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _target_file(_active())
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def log_solve(table: Table, report: "SolveReport", **extra: Any) -> Path:
    return write_record(solve_record(table, report, **extra))


def current_log_path() -> Path | None:
    return None if _destination is None else _destination.path


__all__ = [
    "configure",
    "current_log_path",
    "grid_rows",
    "log_solve",
    "solve_record",
    "write_record",
]
