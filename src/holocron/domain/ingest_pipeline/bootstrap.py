"""Bootstrap orchestrator: sequence ingestion across entity types.

A run walks ``INGESTION_ORDER``; for each entity type it fetches the complete
record list, normalizes it, resolves foreign-key style references against the
identity maps built so far, and commits that type in its own transaction.
Join edges are resolved and committed last, once every identity map exists.

A source failure aborts the run. Types committed before the failure stay
persisted; nothing is rolled back across types. Every run preloads the
identity maps from stored rows, so a later bootstrap keeps those rows and
inserts only what is missing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from holocron.domain.ingest_pipeline.identity import IdentityMaps
from holocron.domain.ingest_pipeline.normalization import normalize_record, scalar_attributes
from holocron.domain.ingest_pipeline.ordering import (
    INGESTION_ORDER,
    LEAD_RESOURCES,
    relationships_for,
    single_references_for,
)
from holocron.domain.ingest_pipeline.resolution import (
    UnresolvedReference,
    resolve_edges,
    resolve_single,
)
from holocron.domain.model import DataSource, EdgeType, Resource
from holocron.domain.ports.fetching import raise_if_cancelled

if TYPE_CHECKING:
    from collections.abc import Sequence

    from holocron.domain.ingest_pipeline.identity import IdentityMap
    from holocron.domain.ingest_pipeline.normalization import NormalizedRecord
    from holocron.domain.model import CatalogEntity, JoinEdge
    from holocron.domain.ports.fetching import CancellationToken, CatalogSource
    from holocron.domain.ports.unit_of_work import CatalogRepositories, CatalogUnitOfWork

log = getLogger(__name__)

type UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


class IngestMode(StrEnum):
    BOOTSTRAP = "bootstrap"
    RESEED = "reseed"
    SYNC = "sync"


@dataclass(slots=True)
class BootstrapResult:
    """Outcome of one ingestion run."""

    mode: IngestMode
    skipped: bool = False
    reason: str | None = None
    inserted: dict[Resource, int] = field(default_factory=dict)
    updated: dict[Resource, int] = field(default_factory=dict)
    kept: dict[Resource, int] = field(default_factory=dict)
    edges_inserted: int = 0
    duplicate_edges: int = 0
    unresolved: list[UnresolvedReference] = field(default_factory=list)

    @property
    def total_inserted(self) -> int:
        return sum(self.inserted.values())


@dataclass(slots=True)
class CatalogStatus:
    """Row counts per table. ``complete`` is informational and gates nothing."""

    counts: dict[Resource, int]
    edge_counts: dict[EdgeType, int]

    @property
    def seeded(self) -> bool:
        return any(self.counts.get(resource, 0) > 0 for resource in LEAD_RESOURCES)

    @property
    def complete(self) -> bool:
        return all(self.counts.get(resource, 0) > 0 for resource in INGESTION_ORDER)


def read_catalog_status(unit_of_work_factory: UnitOfWorkFactory) -> CatalogStatus:
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        return CatalogStatus(
            counts={
                resource: repositories.for_resource(resource).count()
                for resource in INGESTION_ORDER
            },
            edge_counts={edge_type: repositories.edges.count(edge_type) for edge_type in EdgeType},
        )


@dataclass(slots=True)
class CatalogBootstrapper:
    """Drives the source-to-sink ingestion of the catalog graph.

    ``source`` is any ``CatalogSource`` (live or snapshot); a fresh unit of work
    is opened per committed stage.
    """

    source: CatalogSource
    unit_of_work_factory: UnitOfWorkFactory

    def needs_bootstrap(self) -> bool:
        """Coarse existence check over the lead entity types."""

        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            return not any(
                repositories.for_resource(resource).exists_any() for resource in LEAD_RESOURCES
            )

    def bootstrap(self, *, cancel: CancellationToken | None = None) -> BootstrapResult:
        """Seed an empty catalog; a no-op when lead entity types already have rows."""

        if not self.needs_bootstrap():
            log.info("Catalog already seeded; skipping bootstrap")
            return BootstrapResult(
                mode=IngestMode.BOOTSTRAP,
                skipped=True,
                reason="Catalog already has data. Use force to reseed.",
            )
        return self._ingest(IngestMode.BOOTSTRAP, cancel=cancel)

    def reseed(
        self,
        *,
        force: bool = False,
        cancel: CancellationToken | None = None,
    ) -> BootstrapResult:
        """Wipe and re-ingest when ``force`` is set; otherwise behave like ``bootstrap``."""

        if not force:
            return self.bootstrap(cancel=cancel)
        raise_if_cancelled(cancel, stage="wiping the catalog")
        self.wipe()
        return self._ingest(IngestMode.RESEED, cancel=cancel)

    def sync(self, *, cancel: CancellationToken | None = None) -> BootstrapResult:
        """Upsert by ``(source, source_key)``; existing rows are updated, never deleted."""

        return self._ingest(IngestMode.SYNC, cancel=cancel)

    def wipe(self) -> None:
        """Delete join rows first, then entity rows in reverse dependency order."""

        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            removed_edges = repositories.edges.clear()
            removed = {
                resource: repositories.for_resource(resource).clear()
                for resource in reversed(INGESTION_ORDER)
            }
            uow.commit()
        log.info("Wiped catalog: edges=%s, entities=%s", removed_edges, removed)

    def status(self) -> CatalogStatus:
        return read_catalog_status(self.unit_of_work_factory)

    # Stages --------------------------------------------------------------------

    def _ingest(self, mode: IngestMode, *, cancel: CancellationToken | None) -> BootstrapResult:
        result = BootstrapResult(mode=mode)
        maps = IdentityMaps()
        ingested: list[NormalizedRecord] = []

        # rows left by an earlier partial run resolve like fresh ones
        self._preload_identity_maps(maps)

        for resource in INGESTION_ORDER:
            raise_if_cancelled(cancel, stage=f"fetching {resource}")
            log.info("Fetching %s", resource)
            raw_records = self.source.fetch_all(resource, cancel=cancel)
            records = _unique_by_source_key(
                [normalize_record(resource, raw) for raw in raw_records]
            )
            self._resolve_single_references(records, maps, result)

            raise_if_cancelled(cancel, stage=f"persisting {resource}")
            self._persist_stage(resource, records, maps, result, mode=mode)
            ingested.extend(records)

        raise_if_cancelled(cancel, stage="committing join edges")
        edges = self._resolve_join_edges(ingested, maps, result)
        with self.unit_of_work_factory() as uow:
            inserted, duplicates = uow.repositories.edges.add_edges(edges)
            uow.commit()
        result.edges_inserted = inserted
        result.duplicate_edges = duplicates

        log.info(
            "Finished %s: inserted=%s, updated=%s, edges=%s, duplicate_edges=%s, unresolved=%s",
            mode,
            dict(result.inserted),
            dict(result.updated),
            result.edges_inserted,
            result.duplicate_edges,
            len(result.unresolved),
        )
        return result

    def _preload_identity_maps(self, maps: IdentityMaps) -> None:
        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            for resource in INGESTION_ORDER:
                index = repositories.for_resource(resource).source_key_index(DataSource.SWAPI)
                maps.for_resource(resource).update(index)

    def _resolve_single_references(
        self,
        records: Sequence[NormalizedRecord],
        maps: IdentityMaps,
        result: BootstrapResult,
    ) -> None:
        for record in records:
            for ref in single_references_for(record.resource):
                target_id, unresolved = resolve_single(
                    record.single_references.get(ref.attribute),
                    owner=record.resource,
                    owner_key=record.source_key,
                    identity_map=maps.for_resource(ref.target),
                )
                setattr(record.entity, ref.attribute, target_id)
                if unresolved is not None:
                    result.unresolved.append(unresolved)

    def _persist_stage(
        self,
        resource: Resource,
        records: Sequence[NormalizedRecord],
        maps: IdentityMaps,
        result: BootstrapResult,
        *,
        mode: IngestMode,
    ) -> None:
        identity_map = maps.for_resource(resource)
        with self.unit_of_work_factory() as uow:
            if mode is IngestMode.SYNC:
                fresh = _apply_updates(uow.repositories, resource, records, result)
            else:
                fresh = _skip_stored(resource, records, identity_map, result)
            ids = uow.repositories.for_resource(resource).add_all(fresh)
            uow.commit()

        for entity, local_id in zip(fresh, ids, strict=True):
            identity_map.record(entity.source_key, local_id)
        result.inserted[resource] = len(fresh)
        log.info("Committed %s: %s new rows", resource, len(fresh))

    def _resolve_join_edges(
        self,
        records: Sequence[NormalizedRecord],
        maps: IdentityMaps,
        result: BootstrapResult,
    ) -> list[JoinEdge]:
        edges: list[JoinEdge] = []
        for record in records:
            owner_id = maps.for_resource(record.resource).lookup(record.source_key)
            if owner_id is None:
                continue
            for rel in relationships_for(record.resource):
                resolution = resolve_edges(
                    rel.edge_type,
                    owner_id=owner_id,
                    owner_key=record.source_key,
                    references=record.references.get(rel.edge_type, ()),
                    identity_map=maps.for_resource(rel.target),
                )
                edges.extend(resolution.edges)
                result.unresolved.extend(resolution.unresolved)
        return edges


def _unique_by_source_key(records: list[NormalizedRecord]) -> list[NormalizedRecord]:
    seen: set[str] = set()
    unique: list[NormalizedRecord] = []
    for record in records:
        key = record.source_key.casefold()
        if not key:
            log.warning("Dropping %s record without a source key", record.resource)
            continue
        if key in seen:
            log.warning("Dropping duplicate %s record %s", record.resource, record.source_key)
            continue
        seen.add(key)
        unique.append(record)
    return unique


def _apply_updates(
    repositories: CatalogRepositories,
    resource: Resource,
    records: Sequence[NormalizedRecord],
    result: BootstrapResult,
) -> list[CatalogEntity]:
    """Copy scalar fields onto stored rows and return the records that are new."""

    repository = repositories.for_resource(resource)
    attributes = scalar_attributes(resource)
    fresh: list[CatalogEntity] = []
    updated = 0
    for record in records:
        stored = repository.get_by_source_key(DataSource.SWAPI, record.source_key)
        if stored is None:
            fresh.append(record.entity)
            continue
        for attribute in attributes:
            setattr(stored, attribute, getattr(record.entity, attribute))
        # edges resolve against the stored row's id
        record.entity.id = stored.id
        updated += 1
    result.updated[resource] = updated
    return fresh


def _skip_stored(
    resource: Resource,
    records: Sequence[NormalizedRecord],
    identity_map: IdentityMap,
    result: BootstrapResult,
) -> list[CatalogEntity]:
    """Leave rows already stored under the same Source Key untouched."""

    fresh: list[CatalogEntity] = []
    kept = 0
    for record in records:
        if record.source_key in identity_map:
            kept += 1
            continue
        fresh.append(record.entity)
    if kept:
        log.info("Keeping %s stored %s rows from an earlier run", kept, resource)
    result.kept[resource] = kept
    return fresh
