"""todokeeper — a terminal task list with periodic autosave."""

__version__ = "0.1.0"
