"""Join edges between catalog entities."""

from __future__ import annotations

from dataclasses import dataclass

from holocron.domain.model.enums import EdgeType, Resource


@dataclass(frozen=True, slots=True)
class EdgeSpec:
    """Which two entity types an edge type connects, in column order."""

    edge_type: EdgeType
    left: Resource
    right: Resource


@dataclass(frozen=True, slots=True)
class JoinEdge:
    """One resolved many-to-many row; equality is the composite key."""

    edge_type: EdgeType
    left_id: int
    right_id: int

    @property
    def key(self) -> tuple[int, int]:
        return (self.left_id, self.right_id)


EDGE_SPECS: dict[EdgeType, EdgeSpec] = {
    spec.edge_type: spec
    for spec in (
        EdgeSpec(EdgeType.FILM_CHARACTER, Resource.FILMS, Resource.PEOPLE),
        EdgeSpec(EdgeType.FILM_PLANET, Resource.FILMS, Resource.PLANETS),
        EdgeSpec(EdgeType.FILM_STARSHIP, Resource.FILMS, Resource.STARSHIPS),
        EdgeSpec(EdgeType.FILM_VEHICLE, Resource.FILMS, Resource.VEHICLES),
        EdgeSpec(EdgeType.FILM_SPECIES, Resource.FILMS, Resource.SPECIES),
        EdgeSpec(EdgeType.PLANET_RESIDENT, Resource.PLANETS, Resource.PEOPLE),
        EdgeSpec(EdgeType.SPECIES_PERSON, Resource.SPECIES, Resource.PEOPLE),
        EdgeSpec(EdgeType.STARSHIP_PILOT, Resource.STARSHIPS, Resource.PEOPLE),
        EdgeSpec(EdgeType.VEHICLE_PILOT, Resource.VEHICLES, Resource.PEOPLE),
    )
}
