"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from todokeeper.config.models import AutosaveConfig, LoggingConfig
from todokeeper.config.settings import Settings
from todokeeper.tasks.store import TaskStore


@pytest.fixture
def task_file(tmp_path: Path) -> Path:
    return tmp_path / "todos.json"


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture
def test_settings(tmp_path: Path, task_file: Path) -> Settings:
    """Settings pointing every path into tmp_path."""
    return Settings(
        data_file=str(task_file),
        autosave=AutosaveConfig(interval_seconds=60.0),
        logging=LoggingConfig(level="DEBUG", log_dir=str(tmp_path / "logs")),
    )
