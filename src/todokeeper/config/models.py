"""Pydantic models for configuration sub-sections."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from todokeeper.config.constants import DEFAULT_AUTOSAVE_INTERVAL_SECONDS, LOGS_DIR


class AutosaveConfig(BaseModel):
    """Background autosave settings."""

    enabled: bool = True
    interval_seconds: float = Field(default=DEFAULT_AUTOSAVE_INTERVAL_SECONDS, gt=0)
    save_on_exit: bool = True  # one final save when the menu exits


class LoggingConfig(BaseModel):
    """Console + file logging settings."""

    level: str = "INFO"
    log_dir: str = str(LOGS_DIR)

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value}")
        return name

    @property
    def level_no(self) -> int:
        return logging.getLevelName(self.level)
