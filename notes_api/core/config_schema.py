"""
Configuration Schemas.

Typed models for the files under config/settings/. Unknown keys,
missing keys and out-of-range values fail at load time.

    ApplicationSchema  -> application.yaml
    DatabaseSchema     -> database.yaml
    LoggingSchema      -> logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Drivers usable with create_async_engine
ASYNC_DRIVERS = ("sqlite+aiosqlite", "postgresql+asyncpg")


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


# -- application.yaml ---------------------------------------------------------


class ServerSchema(_StrictBase):
    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_StrictBase):
    origins: list[str] = Field(default_factory=list)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str = ""
    environment: Literal["development", "test", "production"]
    api_prefix: str = ""
    docs_enabled: bool = True
    server: ServerSchema
    cors: CorsSchema

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        """Routers expect either no prefix or '/segment' without a trailing slash."""
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value


# -- database.yaml ------------------------------------------------------------


def check_async_url(url: str) -> str:
    """Reject URLs whose driver cannot run under asyncio."""
    scheme = url.split("://", 1)[0]
    if scheme not in ASYNC_DRIVERS:
        raise ValueError(
            f"Unsupported database driver '{scheme}', use one of: {', '.join(ASYNC_DRIVERS)}"
        )
    return url


class DatabaseSchema(_StrictBase):
    url: str
    echo: bool = False
    create_tables: bool = True

    _check_url = field_validator("url")(check_async_url)


# -- logging.yaml -------------------------------------------------------------

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool = True


class FileHandlerSchema(_StrictBase):
    enabled: bool = False
    path: str = "logs/notes.jsonl"
    max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    backup_count: int = Field(default=5, ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema = Field(default_factory=ConsoleHandlerSchema)
    file: FileHandlerSchema = Field(default_factory=FileHandlerSchema)


class LoggingSchema(_StrictBase):
    level: LogLevel = "INFO"
    format: Literal["console", "json"] = "console"
    handlers: HandlersSchema = Field(default_factory=HandlersSchema)

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
