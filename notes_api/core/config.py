"""
Configuration Management.

Two sources, resolved relative to the directory holding the
.project_root marker:

    config/settings/*.yaml   versioned settings, validated by config_schema
    config/.env              local overrides (DATABASE_URL, LOG_LEVEL)

Real environment variables win over config/.env, which wins over YAML.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notes_api.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    check_async_url,
)

PROJECT_MARKER = ".project_root"
SETTINGS_DIR = Path("config") / "settings"
ENV_FILE = Path("config") / ".env"


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) to the directory holding the marker file."""
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MARKER).exists():
            return candidate
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_MARKER} file exists.")


def validate_project_root() -> Path:
    """find_project_root() for entry scripts: exits with a message instead of raising."""
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one file from config/settings/. Empty files load as {}."""
    config_path = find_project_root() / SETTINGS_DIR / filename
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Overrides read from the environment or config/.env."""

    database_url: str | None = None
    log_level: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("database_url")
    @classmethod
    def _async_driver(cls, value: str | None) -> str | None:
        return value if value is None else check_async_url(value)


def _load_section(schema_cls: type, filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


@dataclass(frozen=True)
class AppConfig:
    """Validated YAML settings, one attribute per file."""

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema

    @classmethod
    def load(cls) -> "AppConfig":
        return cls(
            application=_load_section(ApplicationSchema, "application.yaml"),
            database=_load_section(DatabaseSchema, "database.yaml"),
            logging=_load_section(LoggingSchema, "logging.yaml"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=str(find_project_root() / ENV_FILE))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig.load()


def get_database_url() -> str:
    """DATABASE_URL override if set, else database.yaml url."""
    return get_settings().database_url or get_app_config().database.url


def get_log_level() -> str:
    """LOG_LEVEL override if set, else logging.yaml level."""
    override = get_settings().log_level
    return override.upper() if override else get_app_config().logging.level
