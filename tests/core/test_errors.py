"""Tests for implindex.core.errors."""

import pytest

from implindex.core.errors import (
    ConfigError,
    ContributionError,
    ErrorCategory,
    FragmentParseError,
    ImplIndexError,
    ParseError,
    ValidationError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error_cls, category, parent",
        [
            (ContributionError, ErrorCategory.VALIDATION, ValidationError),
            (FragmentParseError, ErrorCategory.PARSE, ParseError),
            (ConfigError, ErrorCategory.CONFIG, ImplIndexError),
        ],
    )
    def test_default_categories(self, error_cls, category, parent):
        error = error_cls("boom")

        assert error.category is category
        assert isinstance(error, parent)
        assert isinstance(error, ImplIndexError)

    def test_category_override(self):
        assert ImplIndexError("x", category=ErrorCategory.PARSE).category is ErrorCategory.PARSE


class TestErrorContext:
    def test_with_context_sets_known_fields_and_metadata(self):
        error = ContributionError("bad").with_context(bucket_key="pkgA", source="f.js", offset=3)

        assert error.context.bucket_key == "pkgA"
        assert error.context.source == "f.js"
        assert error.context.metadata == {"offset": 3}

    def test_to_dict(self):
        cause = ValueError("inner")
        error = FragmentParseError("outer", cause=cause).with_context(path="/x/trait.From.js")

        data = error.to_dict()
        assert data["error_type"] == "FragmentParseError"
        assert data["category"] == "PARSE"
        assert data["context"] == {"path": "/x/trait.From.js"}
        assert data["cause"] == "ValueError: inner"
        assert error.__cause__ is cause

    def test_repr(self):
        assert repr(ConfigError("nope")) == "ConfigError('nope', category=CONFIG)"
