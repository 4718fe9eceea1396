"""Ingestion pipeline: normalize, resolve and sequence catalog records."""

from __future__ import annotations

from .bootstrap import (
    BootstrapResult,
    CatalogBootstrapper,
    CatalogStatus,
    IngestMode,
    UnitOfWorkFactory,
    read_catalog_status,
)
from .identity import IdentityMap, IdentityMaps
from .normalization import (
    NormalizedRecord,
    normalize_record,
    parse_date,
    parse_decimal,
    parse_int,
    parse_reference_list,
    parse_text,
)
from .ordering import (
    DEPENDENCIES,
    INGESTION_ORDER,
    LEAD_RESOURCES,
    RELATIONSHIPS,
    SINGLE_REFERENCES,
    validate_order,
)
from .resolution import EdgeResolution, UnresolvedReference, resolve_edges, resolve_single

__all__ = [
    "DEPENDENCIES",
    "INGESTION_ORDER",
    "LEAD_RESOURCES",
    "RELATIONSHIPS",
    "SINGLE_REFERENCES",
    "BootstrapResult",
    "CatalogBootstrapper",
    "CatalogStatus",
    "EdgeResolution",
    "IdentityMap",
    "IdentityMaps",
    "IngestMode",
    "NormalizedRecord",
    "UnitOfWorkFactory",
    "UnresolvedReference",
    "normalize_record",
    "parse_date",
    "parse_decimal",
    "parse_int",
    "parse_reference_list",
    "parse_text",
    "read_catalog_status",
    "resolve_edges",
    "resolve_single",
    "validate_order",
]
