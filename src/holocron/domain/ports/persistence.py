"""Ports for persisting catalog entities and join edges."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from holocron.domain.model import (
    CatalogEntity,
    Film,
    Person,
    Planet,
    Species,
    Starship,
    Vehicle,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from holocron.domain.model import DataSource, EdgeType, JoinEdge


@runtime_checkable
class CatalogRepository[TEntity: CatalogEntity](Protocol):
    """Sink contract for one entity table."""

    def add_all(self, entities: Sequence[TEntity]) -> list[int]:
        """Insert a batch and return the locally assigned ids in input order."""
        ...

    def exists_any(self) -> bool: ...

    def count(self) -> int: ...

    def get_by_source_key(self, source: DataSource, source_key: str) -> TEntity | None:
        """Look up a row by Source Key, ignoring case."""
        ...

    def source_key_index(self, source: DataSource) -> dict[str, int]:
        """Return ``source_key -> id`` for every stored row of ``source``."""
        ...

    def clear(self) -> int: ...


@runtime_checkable
class PlanetRepository(CatalogRepository[Planet], Protocol):
    """Repository contract for planets."""


@runtime_checkable
class PersonRepository(CatalogRepository[Person], Protocol):
    """Repository contract for people."""


@runtime_checkable
class SpeciesRepository(CatalogRepository[Species], Protocol):
    """Repository contract for species."""


@runtime_checkable
class StarshipRepository(CatalogRepository[Starship], Protocol):
    """Repository contract for starships."""


@runtime_checkable
class VehicleRepository(CatalogRepository[Vehicle], Protocol):
    """Repository contract for vehicles."""


@runtime_checkable
class FilmRepository(CatalogRepository[Film], Protocol):
    """Repository contract for films."""


@runtime_checkable
class JoinEdgeRepository(Protocol):
    """Sink contract for all join tables."""

    def add_edges(self, edges: Iterable[JoinEdge]) -> tuple[int, int]:
        """Insert edges, skipping composite-key duplicates.

        Returns ``(inserted, duplicates_skipped)``.
        """
        ...

    def count(self, edge_type: EdgeType) -> int: ...

    def clear(self) -> int: ...
