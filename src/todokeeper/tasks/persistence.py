"""JSON codec and atomic file writes for the task list."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from todokeeper.tasks.models import Task

logger = logging.getLogger("todokeeper.tasks.persistence")

_TASK_LIST = TypeAdapter(list[Task])


class TaskFileError(ValueError):
    """The task file exists but does not hold a valid task list."""


def encode_tasks(tasks: Iterable[Task]) -> bytes:
    """Serialize tasks to a JSON array (insertion order kept)."""
    data = [task.model_dump(mode="json") for task in tasks]
    return json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")


def decode_tasks(data: bytes | str) -> list[Task]:
    """Parse a JSON array of task records.

    An empty document is an empty list. Anything else that is not a list of
    valid task records with distinct ids raises TaskFileError.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TaskFileError(f"Task file is not UTF-8: {exc}") from exc

    if not data.strip():
        return []

    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        raise TaskFileError(f"Task file is not valid JSON: {exc}") from exc

    # The original tool wrote `null` for a list that was never populated.
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise TaskFileError(f"Task file must hold a JSON array, got {type(raw).__name__}")

    try:
        tasks = _TASK_LIST.validate_python(raw)
    except ValidationError as exc:
        raise TaskFileError(f"Invalid task record: {exc}") from exc

    seen: set[int] = set()
    for task in tasks:
        if task.id in seen:
            raise TaskFileError(f"Duplicate task id {task.id}")
        seen.add(task.id)
    return tasks


def write_atomic(path: Path, data: bytes) -> None:
    """Write data to path via a .tmp sibling, then replace.

    Readers never see a half-written file. On failure the temporary file is
    removed and the OSError propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_bytes(data)
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
