"""
Shared pytest fixtures for implementor-index tests.

This module provides:
- Default registry and settings cache cleanup for test isolation
- Quiet logging (ERROR) so CLI output stays parseable
- A small on-disk implementors/ tree
"""

from pathlib import Path

import pytest

from implindex.core.settings import clear_settings_cache
from implindex.registry import reset_default_registry

FROM_FRAGMENT = """(function() {var implementors = {};
implementors['com_rs'] = ["impl&lt;'a, T, U&gt; <a class='trait' href='https://doc.rust-lang.org/nightly/core/convert/trait.From.html' title='core::convert::From'>From</a>&lt;&amp;'a <a class='struct' href='com_rs/struct.ComPtr.html' title='com_rs::ComPtr'>ComPtr</a>&lt;T&gt;&gt; for <a class='struct' href='com_rs/struct.ComPtr.html' title='com_rs::ComPtr'>ComPtr</a>&lt;U&gt;",];

            if (window.register_implementors) {
                window.register_implementors(implementors);
            } else {
                window.pending_implementors = implementors;
            }

})()
"""


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    """Fresh default registry and settings for every test."""
    monkeypatch.setenv("IMPLINDEX_LOG_LEVEL", "ERROR")
    reset_default_registry()
    clear_settings_cache()
    yield
    reset_default_registry()
    clear_settings_cache()


@pytest.fixture
def from_fragment() -> str:
    return FROM_FRAGMENT


@pytest.fixture
def fragment_tree(tmp_path: Path) -> Path:
    """implementors/ tree with two traits and three fragments."""
    root = tmp_path / "implementors"
    (root / "core" / "convert").mkdir(parents=True)
    (root / "core" / "ops").mkdir(parents=True)

    (root / "core" / "convert" / "trait.From.js").write_text(FROM_FRAGMENT, encoding="utf-8")
    (root / "core" / "ops" / "trait.Deref.js").write_text(
        '(function() {var implementors = {};\n'
        'implementors["com_rs"] = ["impl Deref for ComPtr&lt;T&gt;",];\n'
        'implementors["winapi"] = ["impl Deref for IUnknown","impl Deref for IClassFactory",];\n'
        "})()\n",
        encoding="utf-8",
    )
    (root / "core" / "ops" / "trait.Deref.json").write_text(
        '{"libc": ["impl Deref for c_void"]}',
        encoding="utf-8",
    )
    return root
