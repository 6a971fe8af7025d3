"""Autosave — an APScheduler interval job that saves the task list when dirty."""

from __future__ import annotations

import logging
import threading
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from todokeeper.config.constants import DEFAULT_AUTOSAVE_INTERVAL_SECONDS

if TYPE_CHECKING:
    from todokeeper.tasks.store import TaskStore

logger = logging.getLogger("todokeeper.scheduler.autosave")

AUTOSAVE_JOB_ID = "__autosave__"


class AutosaveState(StrEnum):
    """Lifecycle states for the autosave scheduler."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class AutosaveScheduler:
    """Saves a TaskStore to a file every ``interval_seconds`` if it changed.

    The dirty check and the save are two separate lock acquisitions on the
    store. A mutation landing between them is written by that same save, so
    the race is accepted.

    Once stopped, a scheduler cannot be restarted; create a new one.
    """

    def __init__(
        self,
        store: TaskStore,
        path: Path,
        interval_seconds: float = DEFAULT_AUTOSAVE_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self._store = store
        self._path = Path(path)
        self._interval = float(interval_seconds)
        self._scheduler = BackgroundScheduler(daemon=True)
        self._state = AutosaveState.IDLE
        self._state_lock = threading.Lock()
        self._save_count = 0
        self._last_error: Exception | None = None

    # -- Introspection ---------------------------------------------------------

    @property
    def state(self) -> AutosaveState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == AutosaveState.RUNNING

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def save_count(self) -> int:
        """Number of successful saves performed by this scheduler."""
        return self._save_count

    @property
    def last_error(self) -> Exception | None:
        """The most recent save failure, cleared by the next successful save."""
        return self._last_error

    # -- Lifecycle -------------------------------------------------------------

    def start(self) -> None:
        """Begin ticking. No-op if already running."""
        with self._state_lock:
            if self._state == AutosaveState.RUNNING:
                return
            if self._state == AutosaveState.STOPPED:
                raise RuntimeError("Autosave scheduler was stopped; create a new one")

            self._scheduler.add_job(
                self.tick,
                trigger=IntervalTrigger(seconds=self._interval),
                id=AUTOSAVE_JOB_ID,
                name="Autosave",
                max_instances=1,
                coalesce=True,
                replace_existing=True,
            )
            self._scheduler.start()
            self._state = AutosaveState.RUNNING

        logger.info("Autosave started: every %.1fs to %s", self._interval, self._path)

    def stop(self, *, final_save: bool = False) -> None:
        """Stop ticking and wait for an in-flight save to finish.

        No tick runs after this returns. With ``final_save`` the store is
        saved once more, dirty or not; a failure there is logged, not raised.
        """
        with self._state_lock:
            if self._state == AutosaveState.STOPPED:
                return
            if self._scheduler.running:
                self._scheduler.shutdown(wait=True)
            self._state = AutosaveState.STOPPED

        logger.info("Autosave stopped.")

        if final_save:
            self._save()

    # -- Tick ------------------------------------------------------------------

    def tick(self) -> bool:
        """Save if the store is dirty. Returns True if a save happened.

        Save failures never propagate; the dirty flag stays set and the next
        tick retries.
        """
        if not self._store.is_dirty:
            return False
        return self._save()

    def _save(self) -> bool:
        try:
            self._store.save(self._path)
        except Exception as exc:
            self._last_error = exc
            logger.error("Autosave to %s failed: %s", self._path, exc)
            return False
        self._last_error = None
        self._save_count += 1
        return True
