"""
Registry coordinator: the single owner of the merged implementor index.

Manifesto:
    Many fragments, loaded in any order, converge on one consumer. The
    coordinator is that consumer: it validates each contribution, appends
    its entries bucket by bucket, and hands renderers a read-only snapshot.
    It never deduplicates by content; entries are opaque, so the only thing
    it can count is deliveries.

ARCHITECTURE
────────────
::

    RegistryCoordinator
      ├── .register(contribution)   ─ validate, append, notify listeners
      ├── .get_merged_index()       ─ read-only snapshot for renderers
      ├── .bucket(key)              ─ entries for one bucket
      ├── .subscribe(listener)      ─ called after each accepted contribution
      ├── .rejected                 ─ contributions refused, with reasons
      └── .stats()                  ─ accepted/rejected/bucket/entry counts

Related modules:
    deferred.py: buffers contributions until the coordinator is ready
    models.py:   Contribution and validation

Tags:
    implindex, registry, coordinator, merged-index

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from implindex.core.errors import ContributionError
from implindex.core.logging import get_logger
from implindex.registry.models import (
    Contribution,
    ImplementorEntry,
    MergedIndex,
    RegistryStats,
    RejectedContribution,
    validate_contribution,
)

logger = get_logger(__name__)

Listener = Callable[[Contribution], None]


class RegistryCoordinator:
    """Owns the merged index and absorbs contributions one at a time.

    Example:
        >>> coordinator = RegistryCoordinator()
        >>> coordinator.register(Contribution.single("pkgA", ["impl1"]))
        True
        >>> dict(coordinator.get_merged_index())
        {'pkgA': ('impl1',)}
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self._index: dict[str, list[ImplementorEntry]] = {}
        self._listeners: list[Listener] = []
        self._rejected: list[RejectedContribution] = []
        self._accepted = 0

    def register(self, contribution: Contribution) -> bool:
        """Merge one contribution into the index.

        Entries are appended to their bucket in order, creating the bucket
        if absent. A malformed contribution is logged and skipped as a
        whole.

        Returns:
            True if the contribution was merged, False if it was rejected
        """
        try:
            validate_contribution(contribution)
        except ContributionError as e:
            self._rejected.append(RejectedContribution(contribution=contribution, error=e))
            logger.warning("contribution_rejected", registry=self.name, **e.to_dict())
            return False

        for key, entries in contribution.buckets.items():
            self._index.setdefault(key, []).extend(entries)
        self._accepted += 1

        logger.debug(
            "contribution_registered",
            registry=self.name,
            source=contribution.source,
            buckets=contribution.bucket_keys,
        )
        self._notify(contribution)
        return True

    def _notify(self, contribution: Contribution) -> None:
        for listener in list(self._listeners):
            try:
                listener(contribution)
            except Exception:
                logger.exception("listener_failed", registry=self.name, source=contribution.source)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after each accepted contribution.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_merged_index(self) -> MergedIndex:
        """Read-only snapshot of bucket key -> entries in arrival order."""
        return MappingProxyType({key: tuple(entries) for key, entries in self._index.items()})

    def bucket(self, key: str) -> tuple[ImplementorEntry, ...]:
        """Entries merged for ``key`` so far (empty if the bucket is absent)."""
        return tuple(self._index.get(key, ()))

    @property
    def rejected(self) -> list[RejectedContribution]:
        return list(self._rejected)

    def stats(self) -> RegistryStats:
        per_bucket = {key: len(entries) for key, entries in self._index.items()}
        return RegistryStats(
            accepted=self._accepted,
            rejected=len(self._rejected),
            buckets=len(per_bucket),
            entries=sum(per_bucket.values()),
            per_bucket=per_bucket,
        )

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: Any) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        return f"RegistryCoordinator(name={self.name!r}, buckets={len(self._index)})"


__all__ = ["RegistryCoordinator", "Listener"]
