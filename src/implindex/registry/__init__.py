"""
Deferred implementor registry.

Usage:
    from implindex.registry import DeferredRegistry, Contribution

    registry = DeferredRegistry()
    registry.submit(Contribution.single("com_rs", ["impl From<...> for ComPtr<U>"]))
    registry.initialize()
    index = registry.get_merged_index()
"""

from implindex.registry.coordinator import Listener, RegistryCoordinator
from implindex.registry.deferred import (
    DeferredRegistry,
    get_default_registry,
    reset_default_registry,
)
from implindex.registry.models import (
    Contribution,
    ImplementorEntry,
    MergedIndex,
    RegistryState,
    RegistryStats,
    RejectedContribution,
    snapshot_contribution,
    validate_contribution,
)
from implindex.registry.site import ImplementorSite

__all__ = [
    "Contribution",
    "ImplementorEntry",
    "MergedIndex",
    "RegistryState",
    "RegistryStats",
    "RejectedContribution",
    "validate_contribution",
    "snapshot_contribution",
    "RegistryCoordinator",
    "Listener",
    "DeferredRegistry",
    "get_default_registry",
    "reset_default_registry",
    "ImplementorSite",
]
