"""
Tests for implindex.fragments.loader.

Tests cover:
- Trait path derivation from fragment locations
- Loading a tree into a site before and after initialization
- Skipping or raising on unparsable fragments
"""

from pathlib import Path

import pytest

from implindex.core.errors import ConfigError, FragmentParseError
from implindex.fragments import FragmentLoader, trait_path_for
from implindex.registry import ImplementorSite


class TestTraitPath:
    @pytest.mark.parametrize(
        "relative, expected",
        [
            ("core/convert/trait.From.js", "core::convert::From"),
            ("std/io/trait.Read.json", "std::io::Read"),
            ("trait.Top.js", "Top"),
            ("com_rs/ComInterface.js", "com_rs::ComInterface"),
        ],
    )
    def test_trait_path_for(self, relative, expected):
        root = Path("/site/implementors")

        assert trait_path_for(root, root / relative) == expected


class TestFragmentLoader:
    def test_load_into_site(self, fragment_tree):
        site = ImplementorSite()
        report = FragmentLoader(fragment_tree).load_into(site)

        assert report.ok
        assert len(report.loaded) == 3
        assert report.traits == {"core::convert::From", "core::ops::Deref"}
        assert site.traits() == ["core::convert::From", "core::ops::Deref"]

        site.initialize_all()
        deref = site.snapshot()["core::ops::Deref"]
        assert deref["com_rs"] == ("impl Deref for ComPtr&lt;T&gt;",)
        assert deref["winapi"] == ("impl Deref for IUnknown", "impl Deref for IClassFactory")
        assert deref["libc"] == ("impl Deref for c_void",)

    def test_load_after_initialize_matches_load_before(self, fragment_tree):
        early = ImplementorSite()
        FragmentLoader(fragment_tree).load_into(early)
        early.initialize_all()

        late = ImplementorSite()
        for trait in ("core::convert::From", "core::ops::Deref"):
            late.initialize(trait)
        FragmentLoader(fragment_tree).load_into(late)

        assert {t: dict(i) for t, i in early.snapshot().items()} == {t: dict(i) for t, i in late.snapshot().items()}

    def test_suffix_filter(self, fragment_tree):
        site = ImplementorSite()
        report = FragmentLoader(fragment_tree, suffixes=(".json",)).load_into(site)

        assert [p.name for p in report.loaded] == ["trait.Deref.json"]

    def test_ignores_other_files(self, fragment_tree):
        (fragment_tree / "README.md").write_text("not a fragment", encoding="utf-8")

        report = FragmentLoader(fragment_tree).load_into(ImplementorSite())
        assert len(report.loaded) == 3

    def test_unparsable_fragment_skipped(self, fragment_tree):
        bad = fragment_tree / "core" / "trait.Broken.js"
        bad.write_text("console.log('no payload')", encoding="utf-8")

        site = ImplementorSite()
        report = FragmentLoader(fragment_tree).load_into(site)

        assert not report.ok
        ((path, error),) = report.skipped
        assert path == bad
        assert error.context.trait_path == "core::Broken"
        assert "core::Broken" not in site

    def test_unparsable_fragment_strict(self, fragment_tree):
        (fragment_tree / "trait.Broken.js").write_text("nope", encoding="utf-8")

        with pytest.raises(FragmentParseError):
            FragmentLoader(fragment_tree, strict=True).load_into(ImplementorSite())

    def test_missing_root(self, tmp_path):
        with pytest.raises(ConfigError):
            FragmentLoader(tmp_path / "missing").load_into(ImplementorSite())
