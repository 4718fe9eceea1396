"""Application orchestration entry points."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from holocron.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from holocron.adapters.swapi import build_catalog_source
from holocron.config import get_bootstrap_config, get_swapi_config
from holocron.domain.ingest_pipeline import CatalogBootstrapper, read_catalog_status

if TYPE_CHECKING:
    from holocron.config import BootstrapConfig
    from holocron.domain.ingest_pipeline import BootstrapResult, CatalogStatus, UnitOfWorkFactory
    from holocron.domain.ports.fetching import CancellationToken, CatalogSource

log = getLogger(__name__)

# one ingestion at a time per process
_INGEST_LOCK = threading.Lock()


class BootstrapInProgressError(RuntimeError):
    """Raised when an ingestion is requested while another one is still running."""


@contextmanager
def _exclusive(operation: str) -> Iterator[None]:
    if not _INGEST_LOCK.acquire(blocking=False):
        raise BootstrapInProgressError(
            f"Cannot start {operation}: another catalog ingestion is in progress"
        )
    try:
        yield
    finally:
        _INGEST_LOCK.release()


def _build_bootstrapper(
    source: CatalogSource | None,
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> CatalogBootstrapper:
    if unit_of_work_factory is None and not is_started():
        startup()
    return CatalogBootstrapper(
        source=source or build_catalog_source(get_swapi_config()),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyCatalogUnitOfWork,
    )


def bootstrap_catalog(
    *,
    source: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    cancel: CancellationToken | None = None,
) -> BootstrapResult:
    """Seed the catalog from the configured source unless it already holds data."""

    with _exclusive("bootstrap"):
        bootstrapper = _build_bootstrapper(source, unit_of_work_factory)
        log.info("Starting catalog bootstrap from %s", type(bootstrapper.source).__name__)
        return bootstrapper.bootstrap(cancel=cancel)


def reseed_catalog(
    *,
    force: bool = False,
    source: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    cancel: CancellationToken | None = None,
) -> BootstrapResult:
    """Seed the catalog; with ``force`` existing rows are wiped first."""

    with _exclusive("reseed"):
        bootstrapper = _build_bootstrapper(source, unit_of_work_factory)
        log.info("Starting catalog reseed: force=%s", force)
        return bootstrapper.reseed(force=force, cancel=cancel)


def sync_catalog(
    *,
    source: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    cancel: CancellationToken | None = None,
) -> BootstrapResult:
    """Upsert the catalog from the configured source without deleting rows."""

    with _exclusive("sync"):
        bootstrapper = _build_bootstrapper(source, unit_of_work_factory)
        log.info("Starting catalog sync")
        return bootstrapper.sync(cancel=cancel)


def catalog_status(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> CatalogStatus:
    if unit_of_work_factory is None and not is_started():
        startup()
    return read_catalog_status(unit_of_work_factory or SqlAlchemyCatalogUnitOfWork)


def bootstrap_on_startup(
    *,
    config: BootstrapConfig | None = None,
    source: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    cancel: CancellationToken | None = None,
) -> BootstrapResult | None:
    """Run ``bootstrap_catalog`` when auto-bootstrap is enabled; ``None`` otherwise."""

    effective_config = config or get_bootstrap_config()
    if not effective_config.auto_bootstrap:
        log.info("Auto-bootstrap disabled; leaving the catalog untouched")
        return None
    return bootstrap_catalog(
        source=source,
        unit_of_work_factory=unit_of_work_factory,
        cancel=cancel,
    )
