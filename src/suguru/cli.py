"""Command line helpers for authoring and solving Suguru layouts."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Tuple

from . import event_log, printer
from .errors import SuguruError
from .items import Direction
from .solver import Solver, resolve_settings
from .solver.groups import build_groups


def _parse_position(text: str) -> Tuple[int, int]:
    try:
        x_text, y_text = text.split(",", 1)
        return int(x_text), int(y_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}") from exc


def parse_value(text: str) -> Tuple[Tuple[int, int], int]:
    """Parse ``X,Y=V`` into a cell position and a value."""

    position, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected X,Y=V but got {text!r}")
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"value must be an integer in {text!r}") from exc
    return _parse_position(position), number


def parse_border(text: str) -> Tuple[Tuple[int, int], List[Direction] | None]:
    """Parse ``X,Y`` or ``X,Y:up+left`` into a cell position and directions."""

    position, sep, directions = text.partition(":")
    if not sep or not directions:
        return _parse_position(position), None
    try:
        parsed = [Direction.from_value(part) for part in directions.split("+") if part]
    except SuguruError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return _parse_position(position), parsed


def parse_layout(text: str) -> List[str]:
    """Parse ``AAB/ACB/CCB`` (top line first) into layout rows."""

    rows = [row for row in text.split("/") if row]
    if not rows:
        raise argparse.ArgumentTypeError("layout must contain at least one row")
    return rows


def _build_cli_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if getattr(args, "seed", None) is not None:
        env["CLI_SUGURU_SEED"] = str(args.seed)
    if getattr(args, "wait_ms", None) is not None:
        env["CLI_SUGURU_WAIT_MS"] = str(args.wait_ms)
    if getattr(args, "max_passes", None) is not None:
        env["CLI_SUGURU_MAX_PASSES"] = str(args.max_passes)
    if getattr(args, "timeout", None) is not None:
        env["CLI_SUGURU_TIMEOUT_S"] = str(args.timeout)
    if getattr(args, "trace", None):
        env["CLI_SUGURU_TRACE_LEVEL"] = "pass"
    if getattr(args, "verbose", False):
        env["CLI_SUGURU_LOG_PASSES"] = "1"
    return env


def build_solver(args: argparse.Namespace) -> Solver:
    env = dict(os.environ)
    env.update(_build_cli_env(args))
    settings = resolve_settings(env)

    on_pass = None
    if getattr(args, "live", False):
        def on_pass(solver: Solver, entry) -> None:
            print(f"pass {entry.step} (filled {entry.filled}/{len(solver.table.cells())})")
            print(printer.render_text(solver.table, color=args.color))

    solver = Solver(args.columns, args.lines, settings=settings, on_pass=on_pass)
    if getattr(args, "layout", None):
        solver.add_layout(args.layout)
    for position, directions in args.border or []:
        solver.add_group_borders(position, directions)
    for position, value in args.value or []:
        solver.set_cell_value(position, value)
    return solver


def cmd_solve(args: argparse.Namespace) -> int:
    solver = build_solver(args)
    report = solver.solve()

    print(printer.render_text(solver.table, color=args.color))
    summary = event_log.solve_record(solver.table, report, seed=solver.settings.seed)
    print(json.dumps(summary, indent=2, sort_keys=True))

    if args.png:
        printer.save_figure(solver.table, args.png, title=f"{args.columns}x{args.lines} Suguru")
    if args.trace:
        Path(args.trace).write_text(solver.trace.to_json(indent=2), encoding="utf-8")
    if args.events_dir:
        event_log.configure(args.events_dir)
        event_log.write_record(summary)
    return 0


def cmd_groups(args: argparse.Namespace) -> int:
    solver = build_solver(args)
    build_groups(solver.table)
    print(printer.render_text(solver.table, color=args.color))
    print(printer.describe_groups(solver.table))
    return 0


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--columns", type=int, required=True)
    parser.add_argument("--lines", type=int, required=True)
    parser.add_argument(
        "--layout",
        type=parse_layout,
        default=None,
        help="Group labels per line, top line first, e.g. AABB/AABB/CCDD",
    )
    parser.add_argument(
        "--border",
        type=parse_border,
        action="append",
        help="Group borders around a cell: X,Y for all four walls or X,Y:up+left",
    )
    parser.add_argument(
        "--value",
        type=parse_value,
        action="append",
        help="Pre-seeded cell value as X,Y=V",
    )
    parser.add_argument("--color", action="store_true", help="Use ANSI colours")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Suguru solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every pass")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Solve a layout and print the grid")
    _add_layout_arguments(solve)
    solve.add_argument("--seed", type=int, default=None)
    solve.add_argument("--wait-ms", type=int, default=None, help="Pause between passes")
    solve.add_argument("--max-passes", type=int, default=None)
    solve.add_argument("--timeout", type=float, default=None, help="Give up after N seconds")
    solve.add_argument("--live", action="store_true", help="Print the grid after every pass")
    solve.add_argument("--png", default=None, help="Also render the solved grid to this image")
    solve.add_argument("--trace", default=None, help="Write the per-pass trace as JSON")
    solve.add_argument("--events-dir", default=None, help="Append a JSONL solve event here")
    solve.set_defaults(func=cmd_solve)

    groups = sub.add_parser("groups", help="Print the group layout without solving")
    _add_layout_arguments(groups)
    groups.set_defaults(func=cmd_groups)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except SuguruError as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
