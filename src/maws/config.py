"""Configuration management for maws."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)

APPLICATION_NAME = "maws"
DEFAULT_PROFILE = "default"
SESSION_TOKEN_FILE_NAME = "session-token.json"


class LoggingSettings(BaseModel):
    level: str = Field(default="WARNING", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"unknown log level: {value}")
        return normalized


class SessionSettings(BaseModel):
    """Where the cached session lives and which profile it belongs to."""

    profile: str = Field(default=DEFAULT_PROFILE, min_length=1)
    data_dir: str = Field(description="Per-application data directory")

    @field_validator("profile")
    @classmethod
    def _validate_profile(cls, value: str) -> str:
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError(f"profile name is not usable in a file name: {value!r}")
        return value

    @property
    def cache_file(self) -> Path:
        if self.profile == DEFAULT_PROFILE:
            name = SESSION_TOKEN_FILE_NAME
        else:
            stem, suffix = SESSION_TOKEN_FILE_NAME.rsplit(".", 1)
            name = f"{stem}-{self.profile}.{suffix}"
        return Path(self.data_dir) / name


class AWSCLISettings(BaseModel):
    command: str = Field(default="aws", min_length=1, description="AWS CLI executable")


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    session: SessionSettings
    aws: AWSCLISettings = Field(default_factory=AWSCLISettings)


ENV_KEYS = {
    "profile": "MAWS_PROFILE",
    "data_dir": "MAWS_DATA_DIR",
    "xdg_data_home": "XDG_DATA_HOME",
    "aws_command": "MAWS_AWS_CLI",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
}


def _env_str(key: str, default: str | None) -> str | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _default_data_dir() -> str:
    xdg_data_home = _env_str(ENV_KEYS["xdg_data_home"], None)
    # XDG Base Directory: relative values are invalid.
    if xdg_data_home and Path(xdg_data_home).is_absolute():
        base = Path(xdg_data_home)
    else:
        base = Path.home() / ".local" / "share"
    return str(base / APPLICATION_NAME)


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    data_dir_env = _env_str(ENV_KEYS["data_dir"], None)
    log_file_env = _env_str(ENV_KEYS["log_file"], None)

    settings_data: dict[str, object] = {
        "logging": {
            "level": _env_str(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": str(Path(log_file_env).expanduser()) if log_file_env else None,
        },
        "session": {
            "profile": _env_str(ENV_KEYS["profile"], DEFAULT_PROFILE),
            "data_dir": (
                str(Path(data_dir_env).expanduser()) if data_dir_env else _default_data_dir()
            ),
        },
        "aws": {
            "command": _env_str(ENV_KEYS["aws_command"], AWSCLISettings().command),
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    _config_logger.debug(
        "Settings loaded: profile=%s, cache_file=%s, aws=%s",
        settings.session.profile,
        settings.session.cache_file,
        settings.aws.command,
    )
    return settings
