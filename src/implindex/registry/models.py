"""Data types shared by the deferred registry and the coordinator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from implindex.core.errors import ContributionError

# An implementor entry is a pre-rendered markup string; the registry never looks inside.
ImplementorEntry = str

# Read-only view handed to renderers.
MergedIndex = Mapping[str, tuple[ImplementorEntry, ...]]


class RegistryState(str, Enum):
    """Lifecycle of a deferred registry. READY is terminal."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass(frozen=True)
class Contribution:
    """Entries produced atomically by one fragment, grouped by bucket key.

    Construction performs no validation: a malformed contribution travels
    through ``submit`` untouched and is judged by the coordinator.

    Attributes:
        buckets: Bucket key -> ordered implementor entries
        source: Producer of record, e.g. the fragment file name
    """

    buckets: Mapping[str, Sequence[ImplementorEntry]]
    source: str | None = None

    @classmethod
    def single(
        cls,
        bucket_key: str,
        entries: Sequence[ImplementorEntry],
        source: str | None = None,
    ) -> Contribution:
        """Build a contribution for one bucket."""
        return cls(buckets={bucket_key: entries}, source=source)

    @property
    def bucket_keys(self) -> list[str]:
        return list(self.buckets)


def snapshot_contribution(contribution: Any) -> Any:
    """Copy list/tuple bucket values so later edits by the producer do not leak.

    Anything that is not a well-shaped ``Contribution`` is returned as is;
    judging it is the coordinator's job.
    """
    if not isinstance(contribution, Contribution) or not isinstance(contribution.buckets, Mapping):
        return contribution
    buckets = {
        key: tuple(entries) if isinstance(entries, list | tuple) else entries
        for key, entries in contribution.buckets.items()
    }
    return Contribution(buckets=buckets, source=contribution.source)


def validate_contribution(contribution: Any) -> None:
    """Raise ``ContributionError`` unless every bucket is well-formed.

    A contribution is accepted or rejected as a whole.
    """
    if not isinstance(contribution, Contribution):
        raise ContributionError(f"expected Contribution, got {type(contribution).__name__}")

    buckets = contribution.buckets
    if not isinstance(buckets, Mapping):
        raise ContributionError(
            f"buckets must be a mapping, got {type(buckets).__name__}"
        ).with_context(source=contribution.source)

    for key, entries in buckets.items():
        if not isinstance(key, str) or not key:
            raise ContributionError("bucket key must be a non-empty string").with_context(
                bucket_key=repr(key), source=contribution.source
            )
        if not isinstance(entries, list | tuple):
            raise ContributionError(
                f"entries must be a list or tuple, got {type(entries).__name__}"
            ).with_context(bucket_key=key, source=contribution.source)
        for position, entry in enumerate(entries):
            if not isinstance(entry, str):
                raise ContributionError(
                    f"entry {position} must be a string, got {type(entry).__name__}"
                ).with_context(bucket_key=key, source=contribution.source)


@dataclass(frozen=True)
class RejectedContribution:
    """A contribution the coordinator refused, with the reason."""

    contribution: Any
    error: ContributionError


@dataclass
class RegistryStats:
    """Counters describing what a coordinator has absorbed."""

    accepted: int = 0
    rejected: int = 0
    buckets: int = 0
    entries: int = 0
    per_bucket: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "accepted": self.accepted,
            "rejected": self.rejected,
            "buckets": self.buckets,
            "entries": self.entries,
            "per_bucket": dict(self.per_bucket),
        }


__all__ = [
    "ImplementorEntry",
    "MergedIndex",
    "RegistryState",
    "Contribution",
    "validate_contribution",
    "snapshot_contribution",
    "RejectedContribution",
    "RegistryStats",
]
