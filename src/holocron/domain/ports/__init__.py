"""Domain ports for fetching and persistence."""

from __future__ import annotations

from .fetching import (
    CancellationToken,
    CatalogSource,
    CatalogSourceError,
    IngestCancelled,
    MalformedResponse,
    RawRecord,
    SnapshotMissing,
    SourceUnavailable,
)
from .persistence import CatalogRepository, JoinEdgeRepository
from .unit_of_work import CatalogRepositories, CatalogUnitOfWork, UnitOfWork

__all__ = [
    "CancellationToken",
    "CatalogRepositories",
    "CatalogRepository",
    "CatalogSource",
    "CatalogSourceError",
    "CatalogUnitOfWork",
    "IngestCancelled",
    "JoinEdgeRepository",
    "MalformedResponse",
    "RawRecord",
    "SnapshotMissing",
    "SourceUnavailable",
    "UnitOfWork",
]
