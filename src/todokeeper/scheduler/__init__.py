"""Scheduler subsystem — periodic autosave of the task list."""

from todokeeper.scheduler.autosave import AutosaveScheduler, AutosaveState

__all__ = ["AutosaveScheduler", "AutosaveState"]
