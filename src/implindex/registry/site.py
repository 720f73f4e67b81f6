"""
Implementor site: one deferred registry per documented trait.

A documentation site has an implementors list per trait, each fed by its own
fragments. ``ImplementorSite`` creates the registry for a trait path on first
use so fragments for a trait can arrive before anything else has touched it.

Tags:
    implindex, registry, site, trait-index

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from implindex.core.logging import get_logger
from implindex.registry.deferred import DeferredRegistry
from implindex.registry.models import Contribution, MergedIndex

logger = get_logger(__name__)


class ImplementorSite:
    """Trait path -> ``DeferredRegistry``, created lazily."""

    def __init__(self) -> None:
        self._registries: dict[str, DeferredRegistry] = {}
        self._lock = threading.Lock()

    def registry_for(self, trait_path: str) -> DeferredRegistry:
        """Return the registry for ``trait_path``, creating it if needed."""
        with self._lock:
            registry = self._registries.get(trait_path)
            if registry is None:
                registry = DeferredRegistry(name=trait_path)
                self._registries[trait_path] = registry
            return registry

    def submit(self, trait_path: str, contribution: Contribution) -> None:
        self.registry_for(trait_path).submit(contribution)

    def initialize(self, trait_path: str) -> bool:
        return self.registry_for(trait_path).initialize()

    def initialize_all(self) -> int:
        """Initialize every known registry.

        Returns:
            Number of registries that were initialized by this call
        """
        with self._lock:
            registries = list(self._registries.values())
        initialized = sum(1 for registry in registries if registry.initialize())
        logger.info("site_initialized", traits=len(registries), initialized=initialized)
        return initialized

    def traits(self) -> list[str]:
        with self._lock:
            return sorted(self._registries)

    def snapshot(self) -> Mapping[str, MergedIndex]:
        """Trait path -> merged index, for every known trait."""
        with self._lock:
            registries = dict(self._registries)
        return MappingProxyType(
            {trait: registry.get_merged_index() for trait, registry in sorted(registries.items())}
        )

    def __iter__(self) -> Iterator[str]:
        return iter(self.traits())

    def __len__(self) -> int:
        return len(self._registries)

    def __contains__(self, trait_path: object) -> bool:
        return trait_path in self._registries


__all__ = ["ImplementorSite"]
