"""Configuration models for taskpad."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from taskpad.jsonfile import read_json, write_json

# Default config directory
TASKPAD_DIR = Path(".taskpad")
CONFIG_FILE = TASKPAD_DIR / "config.json"
TASKS_FILE = TASKPAD_DIR / "tasks.json"
LOG_FILE = TASKPAD_DIR / "taskpad.log"


class StorageConfig(BaseModel):
    """Configuration for the task file."""

    path: str = str(TASKS_FILE)
    autosave: bool = True


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = str(LOG_FILE)


class SessionConfig(BaseModel):
    """Configuration for the interactive session."""

    prompt: str = "> "
    greeting: bool = True


class TaskpadConfig(BaseModel):
    """Main configuration for taskpad."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TaskpadConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        data = read_json(path)
        if data is None:
            return cls()

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        write_json(path, self.model_dump())
