"""Tests for the interactive menu started by `todokeeper start`."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from todokeeper.cli.main import app
from todokeeper.cli.menu import parse_task_id, task_table
from todokeeper.config.models import AutosaveConfig
from todokeeper.config.settings import Settings
from todokeeper.tasks.models import Task

runner = CliRunner()


@pytest.fixture(autouse=True)
def patch_settings(test_settings: Settings):
    with (
        patch("todokeeper.cli.main.get_settings", return_value=test_settings),
        patch("todokeeper.cli.main.setup_logging"),
    ):
        yield


def _start(*lines: str, args: tuple[str, ...] = ("--no-autosave",)):
    return runner.invoke(app, ["start", *args], input="\n".join(lines) + "\n")


def _records(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))


class TestParseTaskId:
    def test_numeric(self):
        assert parse_task_id(" 12 ") == 12

    def test_non_numeric(self):
        assert parse_task_id("abc") is None

    def test_empty(self):
        assert parse_task_id("") is None


def test_task_table_rows():
    table = task_table([Task(id=1, title="Buy milk"), Task(id=2, title="Walk dog", completed=True)])
    assert table.row_count == 2


def test_create_and_exit_saves_on_exit(task_file: Path):
    result = _start("1", "Buy milk", "5")
    assert result.exit_code == 0
    assert "To-Do added (ID: 1)" in result.output
    assert "Exiting..." in result.output
    assert [r["title"] for r in _records(task_file)] == ["Buy milk"]


def test_empty_title_rejected(task_file: Path):
    result = _start("1", "   ", "5")
    assert "Title cannot be empty" in result.output
    assert not task_file.exists()


def test_list_empty():
    result = _start("2", "5")
    assert "No To-Dos found" in result.output


def test_full_scenario(task_file: Path):
    result = _start(
        "1", "Buy milk",
        "1", "Walk dog",
        "3", "1", "", "yes",
        "4", "2",
        "2",
        "5",
    )
    assert result.exit_code == 0
    assert "To-Do 1 updated" in result.output
    assert "To-Do 2 deleted" in result.output

    (record,) = _records(task_file)
    assert record["id"] == 1
    assert record["title"] == "Buy milk"
    assert record["completed"] is True


def test_update_invalid_id():
    result = _start("3", "abc", "5")
    assert "Invalid ID" in result.output


def test_update_not_found():
    result = _start("3", "7", "New", "no", "5")
    assert "To-Do 7 not found" in result.output


def test_delete_not_found():
    result = _start("4", "7", "5")
    assert "To-Do 7 not found" in result.output


def test_invalid_choice():
    result = _start("9", "5")
    assert "Invalid choice" in result.output


def test_save_now(task_file: Path):
    result = _start("1", "Buy milk", "6", "5")
    assert "Saved 1 to-dos" in result.output
    assert task_file.exists()


def test_end_of_input_exits(task_file: Path):
    """Running out of input behaves like choosing Exit."""
    result = runner.invoke(app, ["start", "--no-autosave"], input="1\nBuy milk\n")
    assert result.exit_code == 0
    assert "Exiting..." in result.output
    assert [r["title"] for r in _records(task_file)] == ["Buy milk"]


def test_loads_existing_file(task_file: Path):
    runner.invoke(app, ["add", "Existing"])
    result = _start("1", "New one", "5")
    assert "To-Do added (ID: 2)" in result.output
    assert [r["title"] for r in _records(task_file)] == ["Existing", "New one"]


def test_corrupted_file_starts_empty(task_file: Path):
    task_file.write_text("NOT VALID JSON{{{", encoding="utf-8")
    result = _start("2", "5")
    assert result.exit_code == 0
    assert "Error loading file" in result.output
    assert "No To-Dos found" in result.output


def test_load_error_stays_off_console_log(task_file: Path, caplog: pytest.LogCaptureFixture):
    """The load error is printed once; the log record sits below the console level."""
    task_file.write_text("NOT VALID JSON{{{", encoding="utf-8")
    with caplog.at_level(logging.DEBUG, logger="todokeeper.cli"):
        result = _start("5")

    assert result.output.count("Error loading file") == 1
    records = [r for r in caplog.records if r.name == "todokeeper.cli"]
    assert len(records) == 1
    assert records[0].levelno < logging.WARNING


def test_no_save_on_exit(test_settings: Settings, task_file: Path):
    test_settings.autosave = AutosaveConfig(save_on_exit=False)
    _start("1", "Buy milk", "5")
    assert not task_file.exists()


def test_autosave_started_and_stopped(task_file: Path):
    with patch("todokeeper.cli.main.AutosaveScheduler") as mock_cls:
        mock_cls.return_value.interval_seconds = 2.5
        result = _start("5", args=("--interval", "2.5"))

    assert result.exit_code == 0
    mock_cls.assert_called_once()
    assert mock_cls.call_args.args[2] == 2.5
    mock_cls.return_value.start.assert_called_once()
    mock_cls.return_value.stop.assert_called_once()


def test_autosave_uses_configured_interval(task_file: Path):
    with patch("todokeeper.cli.main.AutosaveScheduler") as mock_cls:
        mock_cls.return_value.interval_seconds = 60.0
        _start("5", args=())
    assert mock_cls.call_args.args[2] == 60.0


def test_invalid_interval():
    result = _start("5", args=("--interval", "0"))
    assert result.exit_code == 1
    assert "interval_seconds must be positive" in result.output


def test_real_autosave_run(task_file: Path):
    result = _start("1", "Buy milk", "5", args=())
    assert result.exit_code == 0
    assert [r["title"] for r in _records(task_file)] == ["Buy milk"]
