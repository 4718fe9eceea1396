"""SQLAlchemy adapter package for Holocron."""

from __future__ import annotations

from .mappings import (
    CLASS_BY_RESOURCE,
    EDGE_TABLES,
    TABLE_BY_RESOURCE,
    create_all_tables,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyCatalogRepository,
    SqlAlchemyFilmRepository,
    SqlAlchemyJoinEdgeRepository,
    SqlAlchemyPersonRepository,
    SqlAlchemyPlanetRepository,
    SqlAlchemySpeciesRepository,
    SqlAlchemyStarshipRepository,
    SqlAlchemyVehicleRepository,
)
from .unit_of_work import SqlAlchemyCatalogUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "CLASS_BY_RESOURCE",
    "EDGE_TABLES",
    "TABLE_BY_RESOURCE",
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyFilmRepository",
    "SqlAlchemyJoinEdgeRepository",
    "SqlAlchemyPersonRepository",
    "SqlAlchemyPlanetRepository",
    "SqlAlchemySpeciesRepository",
    "SqlAlchemyStarshipRepository",
    "SqlAlchemyVehicleRepository",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "start_mappers",
    "shutdown",
    "startup",
]
