"""Thread-safe in-memory task list with JSON file persistence."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from pathlib import Path

from todokeeper.tasks.models import Task
from todokeeper.tasks.persistence import decode_tasks, encode_tasks, write_atomic

logger = logging.getLogger("todokeeper.tasks.store")


class TaskStore:
    """Owns the task list, the id counter, and the dirty flag.

    Every operation (including save/load) runs under one lock, so the
    foreground command flow and the autosave thread can share a store freely.
    Tasks handed out by ``list_tasks``/``get``/``update`` are copies.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._counter = 0
        self._dirty = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # -- Queries ---------------------------------------------------------------

    def list_tasks(self) -> list[Task]:
        """Return a snapshot of all tasks in insertion order."""
        with self._lock:
            return [task.model_copy() for task in self._tasks]

    def get(self, task_id: int) -> Task | None:
        """Retrieve a copy of a task by ID."""
        with self._lock:
            index = self._find(task_id)
            if index is None:
                return None
            return self._tasks[index].model_copy()

    @property
    def is_dirty(self) -> bool:
        """True if anything changed since the last successful save."""
        with self._lock:
            return self._dirty

    @property
    def counter(self) -> int:
        """The last identifier handed out."""
        with self._lock:
            return self._counter

    # -- Mutations -------------------------------------------------------------

    def create(self, title: str) -> int:
        """Append a new incomplete task and return its ID."""
        title = title.strip()
        if not title:
            raise ValueError("title is required")

        with self._lock:
            self._counter += 1
            task = Task(
                id=self._counter,
                title=title,
                completed=False,
                created_at=datetime.now(UTC),
            )
            self._tasks.append(task)
            self._dirty = True
            logger.debug("Task created id=%s title=%r", task.id, title)
            return task.id

    def update(self, task_id: int, new_title: str, completed: bool) -> Task | None:
        """Set the completion flag, and the title when new_title is non-empty.

        Returns the updated task, or None if no task has this ID.
        """
        new_title = new_title.strip()
        with self._lock:
            index = self._find(task_id)
            if index is None:
                return None
            task = self._tasks[index]
            if new_title:
                task.title = new_title
            task.completed = completed
            self._dirty = True
            logger.debug("Task updated id=%s completed=%s", task_id, completed)
            return task.model_copy()

    def delete(self, task_id: int) -> bool:
        """Remove a task by ID. Returns True if it existed."""
        with self._lock:
            index = self._find(task_id)
            if index is None:
                return False
            del self._tasks[index]
            self._dirty = True
            logger.debug("Task deleted id=%s", task_id)
            return True

    def clear_dirty(self) -> None:
        with self._lock:
            self._dirty = False

    # -- Persistence -----------------------------------------------------------

    def save(self, path: Path) -> int:
        """Write all tasks to path and clear the dirty flag.

        The lock is held for encode + write so the file is a consistent
        snapshot. On OSError the dirty flag stays set. Returns the number of
        tasks written.
        """
        path = Path(path)
        with self._lock:
            write_atomic(path, encode_tasks(self._tasks))
            self._dirty = False
            count = len(self._tasks)
        logger.info("Saved %d tasks to %s", count, path)
        return count

    def load(self, path: Path) -> bool:
        """Replace the in-memory list with the tasks stored at path.

        Returns False, leaving the store untouched, if the file does not exist.
        Read and decode errors propagate with the store unchanged. The counter
        is raised to the highest loaded ID so new tasks never reuse one; the
        dirty flag is not touched.
        """
        path = Path(path)
        with self._lock:
            try:
                data = path.read_bytes()
            except FileNotFoundError:
                logger.debug("No task file at %s; starting empty", path)
                return False

            tasks = decode_tasks(data)
            self._tasks = tasks
            self._counter = max([self._counter, *(task.id for task in tasks)])
            logger.info("Loaded %d tasks from %s", len(tasks), path)
            return True

    # -- Internal helpers ------------------------------------------------------

    def _find(self, task_id: int) -> int | None:
        """Index of the first task with this ID (caller holds the lock)."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None
