"""Unit tests for settings stores, prompts and logging setup."""
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from replypredict.log import PACKAGE_LOGGER, LogLevel, configure_logging
from replypredict.prompts import (
    clear_cache,
    get_prediction_prompt,
    load_prompt,
    read_prompt_file,
)
from replypredict.settings import (
    EnvSettings,
    InMemorySettings,
    SettingsStore,
    create_settings_store,
)
from replypredict.settings.env import DEFAULT_AI_ENABLED_VAR, parse_bool


class TestSettingsStores:
    """Tests for settings backends."""

    def test_store_is_abstract(self):
        with pytest.raises(TypeError):
            SettingsStore()  # type: ignore

    def test_in_memory_toggle(self):
        """Test flipping the in-memory flag."""
        settings = InMemorySettings()
        assert settings.ai_enabled is True

        settings.ai_enabled = False
        assert settings.ai_enabled is False
        assert settings.backend_type == "memory"

    @pytest.mark.parametrize(
        "raw, expected",
        [("1", True), ("TRUE", True), (" on ", True), ("no", False), ("0", False), ("Off", False)],
    )
    def test_env_values(self, monkeypatch, raw, expected):
        """Test that common spellings are parsed."""
        monkeypatch.setenv(DEFAULT_AI_ENABLED_VAR, raw)
        assert EnvSettings(load_env_file=False).ai_enabled is expected

    def test_env_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv(DEFAULT_AI_ENABLED_VAR, raising=False)
        assert EnvSettings(default_ai_enabled=False, load_env_file=False).ai_enabled is False

    def test_env_read_on_every_access(self, monkeypatch):
        """Test that environment changes are picked up without a rebuild."""
        monkeypatch.setenv("CHAT_AI", "true")
        settings = EnvSettings(ai_enabled_var="CHAT_AI", load_env_file=False)
        assert settings.ai_enabled

        monkeypatch.setenv("CHAT_AI", "false")
        assert not settings.ai_enabled

    def test_parse_bool_garbage_falls_back(self):
        assert parse_bool("maybe", default=True) is True
        assert parse_bool(None, default=False) is False

    def test_factory(self):
        """Test creating stores through the factory."""
        assert isinstance(create_settings_store("memory", ai_enabled=False), InMemorySettings)
        assert create_settings_store("env", load_env_file=False).backend_type == "env"

        with pytest.raises(ValueError, match="Unsupported settings backend"):
            create_settings_store("redis")


class TestPrompts:
    """Tests for prompt loading."""

    def test_packaged_prediction_prompt(self):
        """Test that the bundled system instruction is available."""
        prompt = get_prediction_prompt()
        assert "predict the next message" in prompt
        assert "username prefixes" in prompt

    def test_working_directory_is_ignored(self, tmp_path, monkeypatch):
        """Test that a ./prompts folder in the working directory has no effect."""
        (tmp_path / "prompts" / "predict_next_message.txt").mkdir(parents=True)
        monkeypatch.chdir(tmp_path)
        clear_cache()
        try:
            assert "predict the next message" in get_prediction_prompt()
        finally:
            clear_cache()

    def test_read_prompt_file(self, tmp_path):
        """Test reading an explicit prompt file."""
        path = tmp_path / "persona.txt"
        path.write_text("  Reply as the user.\n", encoding="utf-8")
        assert read_prompt_file(path) == "Reply as the user."

    def test_read_prompt_file_errors(self, tmp_path):
        """Test that unusable prompt files are rejected."""
        empty = tmp_path / "empty.txt"
        empty.write_text("\n")
        with pytest.raises(ValueError, match="empty"):
            read_prompt_file(empty)

        with pytest.raises(OSError):
            read_prompt_file(tmp_path)

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_prompt("does_not_exist")


class TestLogging:
    """Tests for configure_logging."""

    def test_level_names(self):
        assert LogLevel.from_string("Warning") == logging.WARNING
        assert LogLevel.from_string("verbose") == logging.DEBUG

    def test_configure_replaces_handler(self):
        """Test that repeated configuration keeps a single rich handler."""
        console = Console(file=None, force_terminal=False)
        logger = configure_logging("debug", console=console)
        configure_logging(logging.ERROR, console=console)

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        try:
            assert logger.name == PACKAGE_LOGGER
            assert len(rich_handlers) == 1
            assert logger.level == logging.ERROR
            assert logger.propagate is False
        finally:
            for handler in rich_handlers:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
            logger.propagate = True
