"""
Structured error types for implementor-index.

Errors carry a category, a structured context and an optional chained cause
so that a rejected contribution or an unreadable fragment can be logged with
enough metadata to find the producer that emitted it.

Manifesto:
    - **Typed hierarchy:** Contribution problems and fragment problems are
      different failures and are caught at different seams
    - **Rich context:** Bucket key, fragment path and trait path travel with
      the error
    - **Error chaining:** The original exception is kept as ``cause``

Architecture:
    ::

        ImplIndexError (category, context, cause)
          ├── ValidationError   (VALIDATION)
          │     └── ContributionError
          ├── ParseError        (PARSE)
          │     └── FragmentParseError
          └── ConfigError       (CONFIG)

Examples:
    >>> error = ContributionError("bucket key must be a non-empty string")
    >>> error.with_context(bucket_key="", source="trait.From.js").category
    <ErrorCategory.VALIDATION: 'VALIDATION'>

Tags:
    error-handling, exception-hierarchy, error-context, implindex-core

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    VALIDATION = "VALIDATION"
    PARSE = "PARSE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"

    def __str__(self) -> str:
        return self.value


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        bucket_key: Bucket the failing contribution targeted
        source: Producer of record (usually a fragment file name)
        trait_path: Trait whose registry was being fed
        path: Filesystem path involved in the failure
        metadata: Additional free-form fields
    """

    bucket_key: str | None = None
    source: str | None = None
    trait_path: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        for key in ("bucket_key", "source", "trait_path", "path"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ImplIndexError(Exception):
    """Base class for all implementor-index errors.

    Args:
        message: Human-readable error message
        category: Error category (defaults to the subclass default)
        context: Structured error context
        cause: Underlying exception that caused this error
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ImplIndexError:
        """Add context fields to this error and return it for chaining.

        Known ``ErrorContext`` fields are set directly; anything else lands
        in ``metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "context": self.context.to_dict(),
        }
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


class ValidationError(ImplIndexError):
    """Data failed a shape or type check."""

    default_category = ErrorCategory.VALIDATION


class ContributionError(ValidationError):
    """A contribution was malformed and rejected by the coordinator."""


class ParseError(ImplIndexError):
    """Input text could not be parsed."""

    default_category = ErrorCategory.PARSE


class FragmentParseError(ParseError):
    """A fragment file does not contain a readable implementors payload."""


class ConfigError(ImplIndexError):
    """Invalid or missing configuration."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ImplIndexError",
    "ValidationError",
    "ContributionError",
    "ParseError",
    "FragmentParseError",
    "ConfigError",
]
