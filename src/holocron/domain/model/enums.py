"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class DataSource(StrEnum):
    """Origin of a catalog row; ``(source, source_key)`` is unique per entity table."""

    SWAPI = "swapi"


class Resource(StrEnum):
    """Upstream resource collections, one per entity type."""

    PLANETS = "planets"
    PEOPLE = "people"
    SPECIES = "species"
    STARSHIPS = "starships"
    VEHICLES = "vehicles"
    FILMS = "films"


class EdgeType(StrEnum):
    """Many-to-many relationship tables populated during ingestion."""

    FILM_CHARACTER = "film_character"
    FILM_PLANET = "film_planet"
    FILM_STARSHIP = "film_starship"
    FILM_VEHICLE = "film_vehicle"
    FILM_SPECIES = "film_species"
    PLANET_RESIDENT = "planet_resident"
    SPECIES_PERSON = "species_person"
    STARSHIP_PILOT = "starship_pilot"
    VEHICLE_PILOT = "vehicle_pilot"
