"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
StorageBackend = Literal["diskcache", "file", "memory"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


def _alias(flat: str, section: str, key: str) -> AliasChoices:
    return AliasChoices(flat, AliasPath(section, key))


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (omdb/http/search/window/storage/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow
      strict precedence control (defaults < YAML < ENV < overrides) in load.py.
    """

    # General
    app_name: str = Field(default="popcorn", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # OMDb (YAML section: omdb.*)
    omdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=_alias("omdb_api_key", "omdb", "api_key"),
        description="OMDb API access key.",
    )
    omdb_base_url: str = Field(
        default="https://www.omdbapi.com/",
        validation_alias=_alias("omdb_base_url", "omdb", "base_url"),
        description="OMDb endpoint URL (search and detail share it).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=_alias("http_timeout_seconds", "http", "timeout_seconds"),
        description="HTTP timeout in seconds for catalog requests.",
    )
    http_user_agent: str = Field(
        default="popcorn/0.1.0",
        validation_alias=_alias("http_user_agent", "http", "user_agent"),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Search (YAML section: search.*)
    min_query_length: int = Field(
        default=3,
        validation_alias=_alias("min_query_length", "search", "min_query_length"),
        description="Queries shorter than this clear results without fetching.",
    )

    # Window title (YAML section: window.*)
    default_window_title: str = Field(
        default="usePopcorn",
        validation_alias=_alias("default_window_title", "window", "default_title"),
        description="Title shown while no movie detail is open.",
    )
    detail_title_format: str = Field(
        default="Movie | {title}",
        validation_alias=_alias(
            "detail_title_format", "window", "detail_title_format"
        ),
        description="Title template while a detail is open ({title} placeholder).",
    )

    # Watchlist storage (YAML section: storage.*)
    storage_backend: StorageBackend = Field(
        default="diskcache",
        validation_alias=_alias("storage_backend", "storage", "backend"),
        description="Watchlist storage: 'diskcache', 'file' or 'memory'.",
    )
    storage_path: Path = Field(
        default=Path("./.data/popcorn"),
        validation_alias=_alias("storage_path", "storage", "path"),
        description="Diskcache directory or directory of the JSON file.",
    )
    storage_key: str = Field(
        default="watched",
        validation_alias=_alias("storage_key", "storage", "key"),
        description="Key under which the watched list is stored.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=_alias("log_level", "logging", "level"),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=_alias("log_format", "logging", "format"),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("storage_path", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("min_query_length")
    @classmethod
    def _validate_min_query_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("min_query_length must be >= 1")
        return v

    @field_validator("detail_title_format")
    @classmethod
    def _validate_title_format(cls, v: str) -> str:
        if "{title}" not in v:
            raise ValueError("detail_title_format must contain '{title}'")
        return v

    @field_validator("storage_key")
    @classmethod
    def _validate_storage_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("storage_key must not be empty")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "omdb": {"api_key": self.omdb_api_key, "base_url": self.omdb_base_url},
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "search": {"min_query_length": self.min_query_length},
            "window": {
                "default_title": self.default_window_title,
                "detail_title_format": self.detail_title_format,
            },
            "storage": {
                "backend": self.storage_backend,
                "path": str(self.storage_path),
                "key": self.storage_key,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read POPCORN_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - POPCORN_OMDB_API_KEY
    - POPCORN_HTTP_TIMEOUT_SECONDS
    - POPCORN_STORAGE_BACKEND
    - POPCORN_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="POPCORN_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    omdb_api_key: Optional[str] = None
    omdb_base_url: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    min_query_length: Optional[int] = None

    storage_backend: Optional[StorageBackend] = None
    storage_path: Optional[Path] = None
    storage_key: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    @field_validator("storage_path", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
