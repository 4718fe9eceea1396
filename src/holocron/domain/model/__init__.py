"""Pure domain model for the ingested catalog."""

from __future__ import annotations

from .associations import EDGE_SPECS, EdgeSpec, JoinEdge
from .catalog import (
    ENTITY_CLASS_BY_RESOURCE,
    AnyCatalogEntity,
    Film,
    Person,
    Planet,
    Species,
    Starship,
    Vehicle,
)
from .entity import CatalogEntity
from .enums import DataSource, EdgeType, Resource

__all__ = [
    "EDGE_SPECS",
    "ENTITY_CLASS_BY_RESOURCE",
    "AnyCatalogEntity",
    "CatalogEntity",
    "DataSource",
    "EdgeSpec",
    "EdgeType",
    "Film",
    "JoinEdge",
    "Person",
    "Planet",
    "Resource",
    "Species",
    "Starship",
    "Vehicle",
]
