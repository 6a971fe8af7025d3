"""Central settings — loads from ~/.todokeeper/config.json + environment variables."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from todokeeper.config.constants import CONFIG_FILE, TODO_FILE, TODOKEEPER_HOME
from todokeeper.config.models import AutosaveConfig, LoggingConfig


def _merge(base: dict, overrides: dict) -> dict:
    """Merge overrides into base key by key, descending into nested dicts."""
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Settings(BaseSettings):
    """All todokeeper configuration in one place.

    Priority (highest → lowest):
      1. Environment variables (TODOKEEPER_ prefix, ``__`` for nested fields)
      2. .env file
      3. ~/.todokeeper/config.json
      4. Defaults defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="TODOKEEPER_",
        env_nested_delimiter="__",
        env_file=(".env", str(TODOKEEPER_HOME / ".env")),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Sub-configs ---
    autosave: AutosaveConfig = Field(default_factory=AutosaveConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # --- Top-level settings ---
    data_file: str = str(TODO_FILE)

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values: dict) -> dict:
        """Merge config.json values as defaults (env vars still override)."""
        if CONFIG_FILE.exists():
            try:
                file_data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                return values
            if isinstance(file_data, dict):
                values = _merge(file_data, values)
        return values

    @property
    def data_path(self) -> Path:
        """Resolved path of the task file."""
        return Path(self.data_file).expanduser()

    def save(self) -> None:
        """Persist current settings to config.json."""
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json")
        CONFIG_FILE.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @classmethod
    def config_exists(cls) -> bool:
        return CONFIG_FILE.exists()


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
