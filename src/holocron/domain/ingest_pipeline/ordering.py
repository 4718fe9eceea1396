"""Static ingestion order and relationship tables.

Entity types are ingested strictly in ``INGESTION_ORDER``. A type may only
resolve single-valued references (foreign keys) against identity maps of the
types listed in its ``DEPENDENCIES`` entry, all of which precede it. Join edges
are resolved after every type is committed, so ``RELATIONSHIPS`` may point in
either direction.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from holocron.domain.model import EDGE_SPECS, EdgeType, Resource


@dataclass(frozen=True, slots=True)
class Relationship:
    """A multi-valued raw field on ``owner`` records that yields join edges."""

    owner: Resource
    field: str
    edge_type: EdgeType

    @property
    def target(self) -> Resource:
        return EDGE_SPECS[self.edge_type].right


@dataclass(frozen=True, slots=True)
class SingleReference:
    """A single-valued raw field resolved into a nullable foreign-key attribute."""

    owner: Resource
    field: str
    attribute: str
    target: Resource


INGESTION_ORDER: Final[tuple[Resource, ...]] = (
    Resource.PLANETS,
    Resource.PEOPLE,
    Resource.SPECIES,
    Resource.STARSHIPS,
    Resource.VEHICLES,
    Resource.FILMS,
)

DEPENDENCIES: Final[Mapping[Resource, frozenset[Resource]]] = {
    Resource.PLANETS: frozenset(),
    Resource.PEOPLE: frozenset({Resource.PLANETS}),
    Resource.SPECIES: frozenset({Resource.PLANETS, Resource.PEOPLE}),
    Resource.STARSHIPS: frozenset({Resource.PLANETS, Resource.PEOPLE}),
    Resource.VEHICLES: frozenset({Resource.PLANETS, Resource.PEOPLE}),
    Resource.FILMS: frozenset(
        {
            Resource.PLANETS,
            Resource.PEOPLE,
            Resource.SPECIES,
            Resource.STARSHIPS,
            Resource.VEHICLES,
        }
    ),
}

# checked for existence to decide whether the catalog is already seeded
LEAD_RESOURCES: Final[tuple[Resource, ...]] = (Resource.FILMS, Resource.PEOPLE)

SINGLE_REFERENCES: Final[tuple[SingleReference, ...]] = (
    SingleReference(Resource.PEOPLE, "homeworld", "homeworld_id", Resource.PLANETS),
    SingleReference(Resource.SPECIES, "homeworld", "homeworld_id", Resource.PLANETS),
)

RELATIONSHIPS: Final[tuple[Relationship, ...]] = (
    Relationship(Resource.FILMS, "characters", EdgeType.FILM_CHARACTER),
    Relationship(Resource.FILMS, "planets", EdgeType.FILM_PLANET),
    Relationship(Resource.FILMS, "starships", EdgeType.FILM_STARSHIP),
    Relationship(Resource.FILMS, "vehicles", EdgeType.FILM_VEHICLE),
    Relationship(Resource.FILMS, "species", EdgeType.FILM_SPECIES),
    Relationship(Resource.PLANETS, "residents", EdgeType.PLANET_RESIDENT),
    Relationship(Resource.SPECIES, "people", EdgeType.SPECIES_PERSON),
    Relationship(Resource.STARSHIPS, "pilots", EdgeType.STARSHIP_PILOT),
    Relationship(Resource.VEHICLES, "pilots", EdgeType.VEHICLE_PILOT),
)


def relationships_for(resource: Resource) -> tuple[Relationship, ...]:
    return tuple(rel for rel in RELATIONSHIPS if rel.owner is resource)


def single_references_for(resource: Resource) -> tuple[SingleReference, ...]:
    return tuple(ref for ref in SINGLE_REFERENCES if ref.owner is resource)


def validate_order(
    order: Sequence[Resource],
    dependencies: Mapping[Resource, frozenset[Resource]],
    single_references: Sequence[SingleReference] = SINGLE_REFERENCES,
) -> None:
    """Raise ``ValueError`` unless ``order`` is a valid ingestion sequence."""

    if len(set(order)) != len(order):
        raise ValueError(f"Ingestion order lists a resource twice: {list(order)}")
    missing = set(Resource).difference(order)
    if missing:
        raise ValueError(f"Ingestion order is missing: {sorted(missing)}")

    position = {resource: index for index, resource in enumerate(order)}
    for resource, required in dependencies.items():
        for dependency in required:
            if position[dependency] >= position[resource]:
                raise ValueError(f"{resource} is ingested before its dependency {dependency}")

    for ref in single_references:
        if ref.target not in dependencies.get(ref.owner, frozenset()):
            raise ValueError(
                f"{ref.owner}.{ref.field} references {ref.target}, "
                "which is not declared as a dependency"
            )


validate_order(INGESTION_ORDER, DEPENDENCIES)
