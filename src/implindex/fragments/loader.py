"""
Fragment loader: feed an on-disk ``implementors/`` tree into a site.

The generator lays fragments out by trait module path::

    implementors/
      core/convert/trait.From.js      →  core::convert::From
      core/ops/trait.Deref.js         →  core::ops::Deref

Each file is parsed and submitted to the registry of its trait. Submission
does not depend on whether that registry has been initialized yet.

Tags:
    implindex, fragments, loader, filesystem

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from implindex.core.errors import ConfigError, FragmentParseError
from implindex.core.logging import LogContext, get_logger
from implindex.fragments.codec import load_fragment_file
from implindex.registry.site import ImplementorSite

logger = get_logger(__name__)

TRAIT_PREFIX = "trait."


def trait_path_for(root: Path, path: Path) -> str:
    """Derive ``core::convert::From`` from ``<root>/core/convert/trait.From.js``."""
    relative = path.relative_to(root)
    name = relative.stem
    if name.startswith(TRAIT_PREFIX):
        name = name[len(TRAIT_PREFIX) :]
    return "::".join([*relative.parent.parts, name])


@dataclass
class LoadReport:
    """Outcome of one ``FragmentLoader.load_into`` pass."""

    loaded: list[Path] = field(default_factory=list)
    skipped: list[tuple[Path, FragmentParseError]] = field(default_factory=list)
    traits: set[str] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return not self.skipped


class FragmentLoader:
    """Walks a fragment tree and submits every fragment to an ``ImplementorSite``.

    Args:
        root: Root of the implementors tree
        suffixes: File suffixes treated as fragments
        strict: Raise on the first unparsable fragment instead of skipping it
    """

    def __init__(
        self,
        root: Path,
        suffixes: Iterable[str] = (".js", ".json"),
        strict: bool = False,
    ):
        self.root = Path(root)
        self.suffixes = tuple(suffixes)
        self.strict = strict

    def iter_fragment_files(self) -> Iterator[Path]:
        """Fragment files under the root, in a stable order."""
        if not self.root.is_dir():
            raise ConfigError(f"fragment root is not a directory: {self.root}").with_context(path=str(self.root))
        for path in sorted(self.root.rglob("*")):
            if path.is_file() and path.suffix in self.suffixes:
                yield path

    def load_into(self, site: ImplementorSite) -> LoadReport:
        """Parse every fragment and submit it to its trait's registry."""
        report = LoadReport()
        for path in self.iter_fragment_files():
            trait_path = trait_path_for(self.root, path)
            with LogContext(trait_path=trait_path, fragment=str(path)):
                try:
                    contribution = load_fragment_file(path)
                except FragmentParseError as e:
                    e.with_context(trait_path=trait_path)
                    if self.strict:
                        raise
                    logger.warning("fragment_skipped", **e.to_dict())
                    report.skipped.append((path, e))
                    continue

                site.submit(trait_path, contribution)
                report.loaded.append(path)
                report.traits.add(trait_path)
                logger.debug("fragment_submitted", buckets=contribution.bucket_keys)

        logger.info(
            "fragments_loaded",
            root=str(self.root),
            loaded=len(report.loaded),
            skipped=len(report.skipped),
            traits=len(report.traits),
        )
        return report


__all__ = ["FragmentLoader", "LoadReport", "trait_path_for", "TRAIT_PREFIX"]
