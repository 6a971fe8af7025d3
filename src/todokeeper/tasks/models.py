"""Pydantic model for a single to-do task."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import AwareDatetime, BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Task(BaseModel):
    """One entry in the task list.

    ``id`` is assigned by the store's counter and ``created_at`` is set once
    at creation; neither changes afterwards.
    """

    id: int = Field(ge=1)
    title: str
    completed: bool = False
    created_at: AwareDatetime = Field(default_factory=_utcnow)

    @property
    def status_label(self) -> str:
        return "Completed" if self.completed else "Incomplete"
