"""Paths and default values used across the project."""

from pathlib import Path

# Base directory for all todokeeper data
TODOKEEPER_HOME = Path.home() / ".todokeeper"

CONFIG_FILE = TODOKEEPER_HOME / "config.json"
TODO_FILE = TODOKEEPER_HOME / "todos.json"
LOGS_DIR = TODOKEEPER_HOME / "logs"
LOG_FILE_NAME = "todokeeper.log"

# Autosave
DEFAULT_AUTOSAVE_INTERVAL_SECONDS = 10.0
