"""Tests for taskpad.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskpad.config import (
    CONFIG_FILE,
    LOG_FILE,
    TASKPAD_DIR,
    TASKS_FILE,
    LoggingConfig,
    SessionConfig,
    StorageConfig,
    TaskpadConfig,
)


class TestSectionDefaults:
    """Tests for section model defaults."""

    def test_storage(self) -> None:
        config = StorageConfig()
        assert config.path == ".taskpad/tasks.json"
        assert config.autosave is True

    def test_logging(self) -> None:
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.file == ".taskpad/taskpad.log"

    def test_session(self) -> None:
        config = SessionConfig()
        assert config.prompt == "> "
        assert config.greeting is True

    def test_invalid_log_level(self) -> None:
        with pytest.raises(Exception):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestTaskpadConfig:
    """Tests for TaskpadConfig."""

    def test_load_missing_file(self, temp_project: Path) -> None:
        """Test loading returns defaults when the file doesn't exist."""
        config = TaskpadConfig.load()
        assert config.storage.path == ".taskpad/tasks.json"

    def test_load_existing_file(self, temp_taskpad_dir: Path) -> None:
        data = {
            "storage": {"path": "my-tasks.json", "autosave": False},
            "logging": {"level": "DEBUG", "file": None},
        }
        (temp_taskpad_dir / "config.json").write_text(json.dumps(data))

        config = TaskpadConfig.load()
        assert config.storage.path == "my-tasks.json"
        assert config.storage.autosave is False
        assert config.logging.level == "DEBUG"
        assert config.logging.file is None
        assert config.session.prompt == "> "

    def test_save_and_reload(self, temp_project: Path) -> None:
        config = TaskpadConfig()
        config.session.prompt = "taskpad> "
        path = temp_project / "custom" / "config.json"
        config.save(path)

        assert path.exists()
        assert TaskpadConfig.load(path).session.prompt == "taskpad> "

    def test_paths(self) -> None:
        assert TASKPAD_DIR == Path(".taskpad")
        assert CONFIG_FILE == TASKPAD_DIR / "config.json"
        assert TASKS_FILE == TASKPAD_DIR / "tasks.json"
        assert LOG_FILE == TASKPAD_DIR / "taskpad.log"
