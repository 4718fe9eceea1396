"""Public interface for the SWAPI adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .client import SwapiClient, relative_next_path
from .schema import (
    PAYLOAD_BY_RESOURCE,
    FilmPayload,
    PersonPayload,
    PlanetPayload,
    RecordPayload,
    SpeciesPayload,
    StarshipPayload,
    SwapiPage,
    VehiclePayload,
)
from .snapshot import SnapshotSource, snapshot_path

if TYPE_CHECKING:
    from holocron.config.swapi import SwapiConfig
    from holocron.domain.ports.fetching import CatalogSource


def build_catalog_source(config: SwapiConfig) -> CatalogSource:
    """Pick the snapshot or the live source from configuration."""

    if config.use_snapshot:
        return SnapshotSource(config.snapshot_dir)
    return SwapiClient(config=config)


__all__ = [
    "PAYLOAD_BY_RESOURCE",
    "FilmPayload",
    "PersonPayload",
    "PlanetPayload",
    "RecordPayload",
    "SnapshotSource",
    "SpeciesPayload",
    "StarshipPayload",
    "SwapiClient",
    "SwapiPage",
    "VehiclePayload",
    "build_catalog_source",
    "relative_next_path",
    "snapshot_path",
]
