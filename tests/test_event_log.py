from __future__ import annotations

import json

import pytest

import project_config
from suguru import event_log
from suguru.solver.engine import SolveReport
from suguru.table import Table


@pytest.fixture(autouse=True)
def configure_log(tmp_path):
    event_log.configure(tmp_path)
    return tmp_path


def _report() -> SolveReport:
    return SolveReport(passes=12, guesses=2, restores=1, snapshot_taken=True, groups=1, elapsed_ms=3)


def _solved_table() -> Table:
    table = Table(3, 3)
    for value, cell in enumerate(table.cells(), start=1):
        cell.set_value(value)
    return table


def test_grid_rows_list_values_top_line_first() -> None:
    table = Table(3, 3)
    table.cell((0, 2)).set_value(4)
    table.cell((2, 0)).set_value(1)
    assert event_log.grid_rows(table) == ["4 . .", ". . .", ". . 1"]


def test_solve_record_carries_report_and_grid() -> None:
    record = event_log.solve_record(_solved_table(), _report(), seed=7)
    assert record["event"] == "solve"
    assert (record["columns"], record["lines"]) == (3, 3)
    assert record["passes"] == 12
    assert record["restores"] == 1
    assert record["grid"] == ["1 2 3", "4 5 6", "7 8 9"]
    assert record["seed"] == 7


def test_log_solve_appends_jsonl(tmp_path) -> None:
    first = event_log.log_solve(_solved_table(), _report())
    second = event_log.log_solve(_solved_table(), _report())

    assert first == second
    assert first.parent == tmp_path
    assert first.name.startswith("solves-") and first.name.endswith("-00.jsonl")
    assert event_log.current_log_path() == first

    lines = first.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    record = json.loads(lines[0])
    assert record["guesses"] == 2
    assert "ts" in record


def test_full_file_rolls_over_to_the_next_index(tmp_path) -> None:
    event_log.configure(tmp_path, max_bytes=10)
    first = event_log.write_record({"event": "solve"})
    second = event_log.write_record({"event": "solve"})
    assert first.name.endswith("-00.jsonl")
    assert second.name.endswith("-01.jsonl")


def test_limits_default_to_config(tmp_path, monkeypatch) -> None:
    config = tmp_path / "config.toml"
    config.write_text(
        f'[event_log]\ndir = "{(tmp_path / "from-config").as_posix()}"\nmax_bytes = 10\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("SUGURU_CONFIG", str(config))
    project_config.reload()
    try:
        directory = event_log.configure()
        first = event_log.write_record({"event": "solve"})
        second = event_log.write_record({"event": "solve"})
    finally:
        monkeypatch.delenv("SUGURU_CONFIG")
        project_config.reload()

    assert directory == tmp_path / "from-config"
    assert first.parent == directory
    assert second != first
