"""
Deferred registry: load-order independent delivery to the coordinator.

Manifesto:
    A fragment cannot know whether the coordinator is ready when it runs.
    Instead of probing for a hook, every fragment calls ``submit`` on the
    registry it was given. Before ``initialize()`` contributions wait in a
    pending buffer; ``initialize()`` drains that buffer in arrival order and
    from then on ``submit`` delivers straight to ``register``. Either order
    of arrival produces the same merged index.

ARCHITECTURE
────────────
::

    UNINITIALIZED ──initialize()──▶ INITIALIZING ──drain done──▶ READY
         │                               │                        │
    submit → pending buffer      submit → tail of buffer    submit → register

    get_default_registry()     ─ module-level singleton
    reset_default_registry()   ─ discard it (testing)

Guardrails:
    - ``initialize()`` runs once; later calls return False
    - A submit that lands mid-drain is merged after the buffer it raced with
    - The pending buffer is discarded after the drain and never reused

Tags:
    implindex, registry, deferred-delivery, pending-buffer, exactly-once

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Sequence

from implindex.core.logging import get_logger
from implindex.registry.coordinator import RegistryCoordinator
from implindex.registry.models import (
    Contribution,
    ImplementorEntry,
    MergedIndex,
    RegistryState,
    snapshot_contribution,
)

logger = get_logger(__name__)


class DeferredRegistry:
    """Buffers contributions until its coordinator is initialized.

    Example:
        >>> registry = DeferredRegistry()
        >>> registry.submit_entries("pkgA", ["impl1"])
        >>> registry.initialize()
        True
        >>> registry.submit_entries("pkgA", ["impl2"])
        >>> registry.get_merged_index()["pkgA"]
        ('impl1', 'impl2')
    """

    def __init__(self, coordinator: RegistryCoordinator | None = None, name: str | None = None):
        self.name = name
        self._coordinator = coordinator if coordinator is not None else RegistryCoordinator(name=name)
        self._state = RegistryState.UNINITIALIZED
        self._pending: deque[Contribution] | None = None
        # Re-entrant so a listener may submit while a drain holds the lock.
        self._lock = threading.RLock()

    @property
    def coordinator(self) -> RegistryCoordinator:
        return self._coordinator

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is RegistryState.READY

    @property
    def pending_count(self) -> int:
        pending = self._pending
        return len(pending) if pending is not None else 0

    def submit(self, contribution: Contribution) -> None:
        """Hand a contribution to the coordinator now, or buffer it.

        Fire-and-forget: nothing is validated here and nothing is returned.
        """
        with self._lock:
            if self._state is RegistryState.READY:
                self._coordinator.register(contribution)
                return

            if self._pending is None:
                self._pending = deque()
            self._pending.append(snapshot_contribution(contribution))
            logger.debug(
                "contribution_buffered",
                registry=self.name,
                state=self._state.value,
                pending=len(self._pending),
            )

    def submit_entries(
        self,
        bucket_key: str,
        entries: Sequence[ImplementorEntry],
        source: str | None = None,
    ) -> None:
        """Submit one bucket's entries as a single contribution."""
        self.submit(Contribution.single(bucket_key, entries, source=source))

    def initialize(self) -> bool:
        """Mark the coordinator ready and drain the pending buffer.

        Returns:
            True on the first call, False for every later call (no-op)
        """
        with self._lock:
            if self._state is not RegistryState.UNINITIALIZED:
                logger.debug("initialize_skipped", registry=self.name, state=self._state.value)
                return False

            self._state = RegistryState.INITIALIZING
            drained = 0
            pending = self._pending
            # Reentrant submits append to this same deque while we drain it.
            while pending:
                self._coordinator.register(pending.popleft())
                drained += 1

            self._pending = None
            self._state = RegistryState.READY
            logger.info("pending_drained", registry=self.name, drained=drained)
            return True

    def get_merged_index(self) -> MergedIndex:
        """Read-only snapshot of the coordinator's merged index."""
        return self._coordinator.get_merged_index()

    def __repr__(self) -> str:
        return f"DeferredRegistry(name={self.name!r}, state={self._state.value}, pending={self.pending_count})"


# === GLOBAL DEFAULT REGISTRY ===

_default_registry: DeferredRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> DeferredRegistry:
    """Get the process-wide registry, creating it on first access."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = DeferredRegistry(name="default")
        return _default_registry


def reset_default_registry() -> None:
    """Discard the process-wide registry (for testing)."""
    global _default_registry
    with _default_lock:
        _default_registry = None


__all__ = ["DeferredRegistry", "get_default_registry", "reset_default_registry"]
