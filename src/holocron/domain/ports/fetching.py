"""Ports for fetching raw catalog records from an upstream source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from holocron.domain.model import Resource


class CatalogSourceError(RuntimeError):
    """Base class for fatal source failures; any of them aborts a bootstrap run."""

    def __init__(self, message: str, *, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource


class SourceUnavailable(CatalogSourceError):
    """Network failure or non-success HTTP status while fetching a page."""


class MalformedResponse(CatalogSourceError):
    """A page or snapshot file could not be decoded into the expected shape."""


class SnapshotMissing(CatalogSourceError):
    """The snapshot file for a resource does not exist."""


class IngestCancelled(RuntimeError):
    """Raised when a cancellation token is set while ingestion is in flight."""


@runtime_checkable
class CancellationToken(Protocol):
    """Cooperative cancellation signal; ``threading.Event`` satisfies it."""

    def is_set(self) -> bool: ...


@runtime_checkable
class RawRecord(Protocol):
    """Minimal shape of an upstream record: its canonical address."""

    @property
    def url(self) -> str: ...


@runtime_checkable
class CatalogSource(Protocol):
    """Fetch the complete, depaginated list of records for one resource."""

    def fetch_all(
        self,
        resource: Resource,
        *,
        cancel: CancellationToken | None = None,
    ) -> Sequence[RawRecord]: ...


def raise_if_cancelled(cancel: CancellationToken | None, *, stage: str) -> None:
    if cancel is not None and cancel.is_set():
        raise IngestCancelled(f"Ingestion cancelled before {stage}")


__all__ = [
    "CancellationToken",
    "CatalogSource",
    "CatalogSourceError",
    "IngestCancelled",
    "MalformedResponse",
    "RawRecord",
    "SnapshotMissing",
    "SourceUnavailable",
    "raise_if_cancelled",
]
