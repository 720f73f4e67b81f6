"""Core primitives shared by the registry, fragment and CLI layers."""

from implindex.core.errors import (
    ConfigError,
    ContributionError,
    ErrorCategory,
    ErrorContext,
    FragmentParseError,
    ImplIndexError,
    ParseError,
    ValidationError,
)
from implindex.core.logging import configure_logging, get_logger

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ImplIndexError",
    "ValidationError",
    "ContributionError",
    "ParseError",
    "FragmentParseError",
    "ConfigError",
    "configure_logging",
    "get_logger",
]
