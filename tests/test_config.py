"""Unit tests for centralized configuration parsing and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from infra.config import Settings, ValidationError, clear_settings_cache, get_settings


def test_settings_defaults() -> None:
    settings = Settings.from_env(env={}, env_file=".missing.env")

    assert settings.logging.level == "INFO"
    assert settings.logging.json_logs is False
    assert settings.report.output_dir == "."
    assert settings.report.encoding == "utf-8"
    assert settings.report.report_suffix == "_volumes"


def test_settings_reads_flat_env_keys() -> None:
    """Flat OPENHOLE_* keys should map to nested settings models."""
    env = {
        "OPENHOLE_LOG_LEVEL": "debug",
        "OPENHOLE_LOG_JSON": "1",
        "OPENHOLE_OUTPUT_DIR": " reports ",
        "OPENHOLE_ENCODING": "latin-1",
        "OPENHOLE_REPORT_SUFFIX": "_bbl",
    }
    settings = Settings.from_env(env=env, env_file=".missing.env")

    assert settings.logging.level == "DEBUG"
    assert settings.logging.json_logs is True
    assert settings.report.output_dir == "reports"
    assert settings.report.encoding == "iso8859-1"
    assert settings.report.report_suffix == "_bbl"


def test_settings_nested_keys_win_over_flat_keys() -> None:
    """Nested env keys should be supported with `__` delimiter and take precedence."""
    env = {
        "REPORT__OUTPUT_DIR": "nested",
        "OPENHOLE_OUTPUT_DIR": "flat",
        "LOGGING__LEVEL": "warning",
    }
    settings = Settings.from_env(env=env, env_file=".missing.env")

    assert settings.report.output_dir == "nested"
    assert settings.logging.level == "WARNING"


def test_settings_unknown_log_level_falls_back_to_info() -> None:
    settings = Settings.from_env(env={"OPENHOLE_LOG_LEVEL": "chatty"}, env_file=".missing.env")
    assert settings.logging.level == "INFO"


def test_settings_unknown_encoding_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        Settings.from_env(env={"OPENHOLE_ENCODING": "no-such-codec"}, env_file=".missing.env")


def test_settings_suffix_with_path_separator_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        Settings.from_env(env={"OPENHOLE_REPORT_SUFFIX": "../x"}, env_file=".missing.env")


def test_settings_read_dotenv_and_env_overrides_it(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local overrides\n"
        "OPENHOLE_OUTPUT_DIR='from-dotenv'\n"
        "OPENHOLE_REPORT_SUFFIX=\"_dotenv\"\n"
        "not a pair\n",
        encoding="utf-8",
    )
    settings = Settings.from_env(env={"OPENHOLE_REPORT_SUFFIX": "_env"}, env_file=str(env_file))

    assert settings.report.output_dir == "from-dotenv"
    assert settings.report.report_suffix == "_env"


def test_settings_are_frozen() -> None:
    settings = Settings.from_env(env={}, env_file=".missing.env")
    with pytest.raises(ValidationError):
        settings.report.output_dir = "elsewhere"  # type: ignore[misc]


def test_get_settings_reload_rebuilds_cache(monkeypatch: Any) -> None:
    """Reload should rebuild cached settings from current process env."""
    clear_settings_cache()
    monkeypatch.setenv("OPENHOLE_OUTPUT_DIR", "first")
    first = get_settings(reload=True)

    monkeypatch.setenv("OPENHOLE_OUTPUT_DIR", "second")
    cached = get_settings()
    second = get_settings(reload=True)

    assert first.report.output_dir == "first"
    assert cached is first
    assert second.report.output_dir == "second"
    clear_settings_cache()
