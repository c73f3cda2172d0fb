"""Centralized application configuration with schema validation.

Settings are read from a local ``.env`` file first, then from the process
environment (process values win). Both nested names (for example
``REPORT__OUTPUT_DIR``) and flat ``OPENHOLE_*`` names are accepted.

Nothing configured here changes how volumes are computed or how the report
is formatted; only logging and file defaults are configurable.
"""

from __future__ import annotations

import codecs
import os
from collections.abc import Mapping
from pathlib import Path
from threading import Lock

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingSettings(BaseModel):
    """Repository-wide logging settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)
    override_root_handlers: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        text = str(value or "").strip().upper()
        if text in _LOG_LEVELS:
            return text
        return "INFO"


class ReportConfig(BaseModel):
    """File defaults for reading interval CSVs and writing reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = Field(default=".")
    encoding: str = Field(default="utf-8")
    report_suffix: str = Field(default="_volumes", min_length=1)

    @field_validator("output_dir", mode="before")
    @classmethod
    def _normalize_output_dir(cls, value: object) -> str:
        return str(value or "").strip() or "."

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        text = str(value or "").strip()
        try:
            return codecs.lookup(text).name
        except LookupError as exc:
            raise ValueError(f"unknown text encoding: {value!r}") from exc

    @field_validator("report_suffix")
    @classmethod
    def _simple_suffix(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError(f"report_suffix must not contain path separators: {value!r}")
        return value


class Settings(BaseModel):
    """Top-level settings model."""

    model_config = ConfigDict(frozen=True)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def from_env(
        cls,
        *,
        env: Mapping[str, str] | None = None,
        env_file: str = ".env",
    ) -> Settings:
        """Build settings from `.env` then environment variables."""
        runtime_env = os.environ if env is None else env
        merged_env = _merge_env(_load_dotenv(Path(env_file)), runtime_env)
        payload = _build_payload(merged_env)
        return cls.model_validate(payload)


def _load_dotenv(path: Path) -> dict[str, str]:
    """Parse a minimal `.env` file format."""
    if not path.exists() or not path.is_file():
        return {}

    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, raw_value = line.split("=", 1)
        key_clean = key.strip()
        value = raw_value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        if key_clean:
            values[key_clean] = value
    return values


def _merge_env(dotenv_values: Mapping[str, str], runtime_env: Mapping[str, str]) -> dict[str, str]:
    """Return env map where process env overrides `.env` values."""
    merged = {str(k): str(v) for k, v in dotenv_values.items()}
    for key, value in runtime_env.items():
        merged[str(key)] = str(value)
    return merged


def _first_non_empty(env: Mapping[str, str], *keys: str) -> str | None:
    """Return the first non-empty value for the provided keys."""
    for key in keys:
        value = str(env.get(key, "")).strip()
        if value:
            return value
    return None


def _build_payload(env: Mapping[str, str]) -> dict[str, object]:
    """Build nested settings payload from env values."""
    logging_settings = {
        "level": _first_non_empty(env, "LOGGING__LEVEL", "OPENHOLE_LOG_LEVEL"),
        "json_logs": _first_non_empty(env, "LOGGING__JSON_LOGS", "OPENHOLE_LOG_JSON"),
        "override_root_handlers": _first_non_empty(
            env, "LOGGING__OVERRIDE_ROOT_HANDLERS", "OPENHOLE_LOG_OVERRIDE"
        ),
    }
    report = {
        "output_dir": _first_non_empty(env, "REPORT__OUTPUT_DIR", "OPENHOLE_OUTPUT_DIR"),
        "encoding": _first_non_empty(env, "REPORT__ENCODING", "OPENHOLE_ENCODING"),
        "report_suffix": _first_non_empty(env, "REPORT__SUFFIX", "OPENHOLE_REPORT_SUFFIX"),
    }
    return {
        "logging": {k: v for k, v in logging_settings.items() if v is not None},
        "report": {k: v for k, v in report.items() if v is not None},
    }


_SETTINGS_LOCK = Lock()
_SETTINGS_CACHE: Settings | None = None


def get_settings(*, reload: bool = False) -> Settings:
    """Return cached settings, optionally forcing reload from env."""
    global _SETTINGS_CACHE
    with _SETTINGS_LOCK:
        if reload or _SETTINGS_CACHE is None:
            _SETTINGS_CACHE = Settings.from_env()
        return _SETTINGS_CACHE


def clear_settings_cache() -> None:
    """Clear in-process settings cache."""
    global _SETTINGS_CACHE
    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = None


__all__ = [
    "LoggingSettings",
    "ReportConfig",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "ValidationError",
]
