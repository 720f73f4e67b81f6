"""
implementor-index: deferred registration of implementor fragments.

Documentation fragments, one per trait, may load before or after the
coordinator that consumes them. The deferred registry makes either order
produce the same merged index.

Example:
    >>> from implindex import DeferredRegistry
    >>> registry = DeferredRegistry()
    >>> registry.submit_entries("pkgA", ["impl1"])
    >>> registry.initialize()
    True
    >>> dict(registry.get_merged_index())
    {'pkgA': ('impl1',)}
"""

from implindex.registry import (
    Contribution,
    DeferredRegistry,
    ImplementorSite,
    RegistryCoordinator,
    RegistryState,
    get_default_registry,
    reset_default_registry,
)

__version__ = "0.1.0"

__all__ = [
    "Contribution",
    "DeferredRegistry",
    "ImplementorSite",
    "RegistryCoordinator",
    "RegistryState",
    "get_default_registry",
    "reset_default_registry",
    "__version__",
]
