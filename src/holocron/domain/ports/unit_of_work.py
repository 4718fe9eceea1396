"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from holocron.domain.model import Resource

if TYPE_CHECKING:
    from types import TracebackType

    from holocron.domain.ports.persistence import (
        CatalogRepository,
        FilmRepository,
        JoinEdgeRepository,
        PersonRepository,
        PlanetRepository,
        SpeciesRepository,
        StarshipRepository,
        VehicleRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Repositories required to ingest the catalog graph."""

    planets: PlanetRepository
    people: PersonRepository
    species: SpeciesRepository
    starships: StarshipRepository
    vehicles: VehicleRepository
    films: FilmRepository
    edges: JoinEdgeRepository

    def for_resource(self, resource: Resource) -> CatalogRepository:
        match resource:
            case Resource.PLANETS:
                return self.planets
            case Resource.PEOPLE:
                return self.people
            case Resource.SPECIES:
                return self.species
            case Resource.STARSHIPS:
                return self.starships
            case Resource.VEHICLES:
                return self.vehicles
            case Resource.FILMS:
                return self.films


type CatalogUnitOfWork = UnitOfWork[CatalogRepositories]
