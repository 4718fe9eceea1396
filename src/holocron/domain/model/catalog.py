"""Catalog entities ingested from SWAPI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from holocron.domain.model.entity import CatalogEntity
from holocron.domain.model.enums import Resource

if TYPE_CHECKING:
    from datetime import date
    from decimal import Decimal


@dataclass(eq=False, kw_only=True)
class Planet(CatalogEntity):
    RESOURCE: ClassVar[Resource] = Resource.PLANETS

    name: str = ""
    rotation_period: int | None = None
    orbital_period: int | None = None
    diameter: int | None = None
    climate: str | None = None
    gravity: str | None = None
    terrain: str | None = None
    surface_water: int | None = None
    population: int | None = None


@dataclass(eq=False, kw_only=True)
class Person(CatalogEntity):
    RESOURCE: ClassVar[Resource] = Resource.PEOPLE

    name: str = ""
    height: int | None = None  # cm
    mass: int | None = None  # kg
    hair_color: str | None = None
    skin_color: str | None = None
    eye_color: str | None = None
    birth_year: str | None = None  # e.g. "19BBY"
    gender: str | None = None
    homeworld_id: int | None = None


@dataclass(eq=False, kw_only=True)
class Species(CatalogEntity):
    RESOURCE: ClassVar[Resource] = Resource.SPECIES

    name: str = ""
    classification: str | None = None
    designation: str | None = None
    average_height: str | None = None
    skin_colors: str | None = None
    hair_colors: str | None = None
    eye_colors: str | None = None
    average_lifespan: str | None = None
    language: str | None = None
    homeworld_id: int | None = None


@dataclass(eq=False, kw_only=True)
class Starship(CatalogEntity):
    RESOURCE: ClassVar[Resource] = Resource.STARSHIPS

    name: str = ""
    model: str | None = None
    manufacturer: str | None = None
    starship_class: str | None = None
    cost_in_credits: Decimal | None = None
    length: Decimal | None = None
    crew: int | None = None
    passengers: int | None = None
    cargo_capacity: int | None = None
    hyperdrive_rating: Decimal | None = None
    mglt: int | None = None
    # mixed values like "1000km" upstream, kept as text
    max_atmosphering_speed: str | None = None
    consumables: str | None = None


@dataclass(eq=False, kw_only=True)
class Vehicle(CatalogEntity):
    RESOURCE: ClassVar[Resource] = Resource.VEHICLES

    name: str = ""
    model: str | None = None
    manufacturer: str | None = None
    vehicle_class: str | None = None
    cost_in_credits: Decimal | None = None
    length: Decimal | None = None
    crew: int | None = None
    passengers: int | None = None
    cargo_capacity: int | None = None
    max_atmosphering_speed: str | None = None
    consumables: str | None = None


@dataclass(eq=False, kw_only=True)
class Film(CatalogEntity):
    RESOURCE: ClassVar[Resource] = Resource.FILMS

    title: str = ""
    episode_id: int | None = None
    opening_crawl: str | None = None
    director: str | None = None
    producer: str | None = None
    release_date: date | None = None


type AnyCatalogEntity = Planet | Person | Species | Starship | Vehicle | Film

ENTITY_CLASS_BY_RESOURCE: dict[Resource, type[CatalogEntity]] = {
    Resource.PLANETS: Planet,
    Resource.PEOPLE: Person,
    Resource.SPECIES: Species,
    Resource.STARSHIPS: Starship,
    Resource.VEHICLES: Vehicle,
    Resource.FILMS: Film,
}
