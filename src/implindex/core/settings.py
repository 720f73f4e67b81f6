"""
Settings for implementor-index.

Configuration is environment-driven through pydantic-settings: every field
can be set with an ``IMPLINDEX_`` prefixed variable or a ``.env`` file.

Examples:
    >>> import os
    >>> os.environ["IMPLINDEX_LOG_LEVEL"] = "DEBUG"
    >>> get_settings(_force_reload=True).log_level
    'DEBUG'

Tags:
    settings, configuration, pydantic, environment, implindex-core

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImplIndexSettings(BaseSettings):
    """Process settings for loading and indexing implementor fragments."""

    model_config = SettingsConfigDict(
        env_prefix="IMPLINDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    fragments_dir: Path = Field(default=Path("implementors"), description="Root of the implementors/ tree")
    fragment_suffixes: list[str] = Field(default=[".js", ".json"])
    strict_fragments: bool = Field(default=False, description="Raise on unparsable fragment files")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"Unsupported log level: {value}")
        return value


_settings: ImplIndexSettings | None = None


def get_settings(*, _force_reload: bool = False) -> ImplIndexSettings:
    """Load and cache the process settings."""
    global _settings
    if _settings is None or _force_reload:
        _settings = ImplIndexSettings()
    return _settings


def clear_settings_cache() -> None:
    """Drop the cached settings (for testing)."""
    global _settings
    _settings = None


__all__ = ["ImplIndexSettings", "get_settings", "clear_settings_cache"]
