from __future__ import annotations

import argparse
import json

import pytest

from suguru import cli
from suguru.items import Direction


def _summary(output: str) -> dict:
    start = output.index("{")
    return json.loads(output[start:])


def test_parse_value_and_border() -> None:
    assert cli.parse_value("2,1=4") == ((2, 1), 4)
    assert cli.parse_border("1,2") == ((1, 2), None)
    assert cli.parse_border("1,2:up+left") == ((1, 2), [Direction.UP, Direction.LEFT])
    assert cli.parse_layout("AAB/ACB/CCB") == ["AAB", "ACB", "CCB"]


@pytest.mark.parametrize(
    "parser, text",
    [
        (cli.parse_value, "2,1"),
        (cli.parse_value, "2,1=x"),
        (cli.parse_value, "2=1"),
        (cli.parse_border, "1,2:north"),
        (cli.parse_layout, "/"),
    ],
)
def test_malformed_arguments_are_rejected(parser, text) -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        parser(text)


def test_solve_prints_grid_and_summary(capsys) -> None:
    exit_code = cli.main(["solve", "--columns", "3", "--lines", "3", "--seed", "4", "--max-passes", "5000"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert output.startswith("■═══■═══■═══■")
    summary = _summary(output)
    assert summary["columns"] == 3
    assert summary["groups"] == 1
    assert summary["passes"] >= 1


def test_solve_with_layout_and_outputs(tmp_path, capsys) -> None:
    trace_path = tmp_path / "trace.json"
    png_path = tmp_path / "grid.png"
    events_dir = tmp_path / "events"
    exit_code = cli.main(
        [
            "solve",
            "--columns", "4",
            "--lines", "3",
            "--layout", "AABB/AABB/CCDD",
            "--value", "0,0=1",
            "--seed", "2",
            "--max-passes", "20000",
            "--trace", str(trace_path),
            "--png", str(png_path),
            "--events-dir", str(events_dir),
        ]
    )
    output = capsys.readouterr().out

    assert exit_code == 0
    assert _summary(output)["groups"] == 4
    trace = json.loads(trace_path.read_text(encoding="utf-8"))
    assert trace[-1]["note"] == "solved"
    assert png_path.exists()
    events = list(events_dir.rglob("*.jsonl"))
    assert len(events) == 1
    assert json.loads(events[0].read_text(encoding="utf-8"))["event"] == "solve"


def test_groups_command_describes_layout(capsys) -> None:
    exit_code = cli.main(
        ["groups", "--columns", "3", "--lines", "3", "--border", "1,1", "--value", "1,1=1"]
    )
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "(8 cells" in output
    assert "(1 cells" in output
    assert "x: 1, y: 1 | value: 1" in output


@pytest.mark.parametrize(
    "extra",
    [
        ["--value", "0,0=-1"],
        ["--layout", "AAA/AAA"],
        ["--border", "7,7"],
    ],
)
def test_invalid_layout_input_is_reported_as_usage_error(extra, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["groups", "--columns", "3", "--lines", "3", *extra])
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "error:" in err
    assert "[" in err


def test_solve_summary_includes_grid(capsys) -> None:
    cli.main(["solve", "--columns", "3", "--lines", "3", "--seed", "1", "--max-passes", "5000"])
    summary = _summary(capsys.readouterr().out)
    assert summary["event"] == "solve"
    assert summary["seed"] == 1
    assert len(summary["grid"]) == 3
    assert "." not in "".join(summary["grid"])
