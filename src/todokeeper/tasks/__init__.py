"""Task list subsystem — the in-memory store and its JSON file format."""

from todokeeper.tasks.models import Task
from todokeeper.tasks.persistence import TaskFileError
from todokeeper.tasks.store import TaskStore

__all__ = ["Task", "TaskFileError", "TaskStore"]
