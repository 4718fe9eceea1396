"""Pydantic models describing SWAPI list pages and records.

Records keep the upstream string typing; coercion happens in the domain
normalizer. Field names are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, model_validator

from holocron.domain.model import Resource

type RawScalar = str | int | float | None


class SwapiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _lowercase_keys(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[object, object], value)
            return {
                (key.lower() if isinstance(key, str) else key): item
                for key, item in mapping_value.items()
            }
        return value


class RecordPayload(SwapiBaseModel):
    url: str = ""
    created: str | None = None
    edited: str | None = None


class PlanetPayload(RecordPayload):
    name: str | None = None
    rotation_period: RawScalar = None
    orbital_period: RawScalar = None
    diameter: RawScalar = None
    climate: str | None = None
    gravity: str | None = None
    terrain: str | None = None
    surface_water: RawScalar = None
    population: RawScalar = None
    residents: list[str] = Field(default_factory=list)
    films: list[str] = Field(default_factory=list)


class PersonPayload(RecordPayload):
    name: str | None = None
    height: RawScalar = None
    mass: RawScalar = None
    hair_color: str | None = None
    skin_color: str | None = None
    eye_color: str | None = None
    birth_year: str | None = None
    gender: str | None = None
    homeworld: str | None = None
    films: list[str] = Field(default_factory=list)
    species: list[str] = Field(default_factory=list)
    vehicles: list[str] = Field(default_factory=list)
    starships: list[str] = Field(default_factory=list)


class SpeciesPayload(RecordPayload):
    name: str | None = None
    classification: str | None = None
    designation: str | None = None
    average_height: str | None = None
    skin_colors: str | None = None
    hair_colors: str | None = None
    eye_colors: str | None = None
    average_lifespan: str | None = None
    homeworld: str | None = None
    language: str | None = None
    people: list[str] = Field(default_factory=list)
    films: list[str] = Field(default_factory=list)


class _CraftPayload(RecordPayload):
    name: str | None = None
    model: str | None = None
    manufacturer: str | None = None
    cost_in_credits: RawScalar = None
    length: RawScalar = None
    max_atmosphering_speed: str | None = None
    crew: RawScalar = None
    passengers: RawScalar = None
    cargo_capacity: RawScalar = None
    consumables: str | None = None
    pilots: list[str] = Field(default_factory=list)
    films: list[str] = Field(default_factory=list)


class StarshipPayload(_CraftPayload):
    hyperdrive_rating: RawScalar = None
    mglt: RawScalar = None
    starship_class: str | None = None


class VehiclePayload(_CraftPayload):
    vehicle_class: str | None = None


class FilmPayload(RecordPayload):
    title: str | None = None
    episode_id: RawScalar = None
    opening_crawl: str | None = None
    director: str | None = None
    producer: str | None = None
    release_date: str | None = None
    characters: list[str] = Field(default_factory=list)
    planets: list[str] = Field(default_factory=list)
    starships: list[str] = Field(default_factory=list)
    vehicles: list[str] = Field(default_factory=list)
    species: list[str] = Field(default_factory=list)


type AnyRecordPayload = (
    PlanetPayload | PersonPayload | SpeciesPayload | StarshipPayload | VehiclePayload | FilmPayload
)

PAYLOAD_BY_RESOURCE: Mapping[Resource, type[RecordPayload]] = {
    Resource.PLANETS: PlanetPayload,
    Resource.PEOPLE: PersonPayload,
    Resource.SPECIES: SpeciesPayload,
    Resource.STARSHIPS: StarshipPayload,
    Resource.VEHICLES: VehiclePayload,
    Resource.FILMS: FilmPayload,
}


class SwapiPage(SwapiBaseModel):
    """One page of a SWAPI list endpoint; ``results`` stay undecoded until typed."""

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[dict[str, object]] = Field(default_factory=list)
