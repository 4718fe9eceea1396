"""SQLAlchemy mapping metadata for the catalog model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    orm,
)

from holocron.domain.model import (
    EDGE_SPECS,
    CatalogEntity,
    DataSource,
    EdgeType,
    Film,
    Person,
    Planet,
    Resource,
    Species,
    Starship,
    Vehicle,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class DecimalText(TypeDecorator[Decimal]):
    """Store decimals as text so SQLite keeps every digit."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Decimal | None:
        _ = dialect
        if value is None:
            return None
        try:
            return Decimal(value)
        except InvalidOperation:
            log.warning("Discarding undecodable decimal column value %r", value)
            return None


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _source_columns() -> tuple[Column[object], ...]:
    return (
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("source", Enum(DataSource, native_enum=False), nullable=False),
        Column("source_key", String, nullable=False),
    )


# Entity tables ---------------------------------------------------------------

planet_table = Table(
    "planet",
    mapper_registry.metadata,
    *_source_columns(),
    Column("name", String, nullable=False),
    Column("rotation_period", Integer, nullable=True),
    Column("orbital_period", Integer, nullable=True),
    Column("diameter", Integer, nullable=True),
    Column("climate", String, nullable=True),
    Column("gravity", String, nullable=True),
    Column("terrain", String, nullable=True),
    Column("surface_water", Integer, nullable=True),
    Column("population", BigInteger, nullable=True),
    UniqueConstraint("source", "source_key"),
)

person_table = Table(
    "person",
    mapper_registry.metadata,
    *_source_columns(),
    Column("name", String, nullable=False),
    Column("height", Integer, nullable=True),
    Column("mass", Integer, nullable=True),
    Column("hair_color", String, nullable=True),
    Column("skin_color", String, nullable=True),
    Column("eye_color", String, nullable=True),
    Column("birth_year", String, nullable=True),
    Column("gender", String, nullable=True),
    Column(
        "homeworld_id",
        Integer,
        ForeignKey("planet.id", ondelete="SET NULL"),
        nullable=True,
    ),
    UniqueConstraint("source", "source_key"),
)

species_table = Table(
    "species",
    mapper_registry.metadata,
    *_source_columns(),
    Column("name", String, nullable=False),
    Column("classification", String, nullable=True),
    Column("designation", String, nullable=True),
    Column("average_height", String, nullable=True),
    Column("skin_colors", String, nullable=True),
    Column("hair_colors", String, nullable=True),
    Column("eye_colors", String, nullable=True),
    Column("average_lifespan", String, nullable=True),
    Column("language", String, nullable=True),
    Column(
        "homeworld_id",
        Integer,
        ForeignKey("planet.id", ondelete="SET NULL"),
        nullable=True,
    ),
    UniqueConstraint("source", "source_key"),
)

starship_table = Table(
    "starship",
    mapper_registry.metadata,
    *_source_columns(),
    Column("name", String, nullable=False),
    Column("model", String, nullable=True),
    Column("manufacturer", String, nullable=True),
    Column("starship_class", String, nullable=True),
    Column("cost_in_credits", DecimalText, nullable=True),
    Column("length", DecimalText, nullable=True),
    Column("crew", Integer, nullable=True),
    Column("passengers", Integer, nullable=True),
    Column("cargo_capacity", BigInteger, nullable=True),
    Column("hyperdrive_rating", DecimalText, nullable=True),
    Column("mglt", Integer, nullable=True),
    Column("max_atmosphering_speed", String, nullable=True),
    Column("consumables", String, nullable=True),
    UniqueConstraint("source", "source_key"),
)

vehicle_table = Table(
    "vehicle",
    mapper_registry.metadata,
    *_source_columns(),
    Column("name", String, nullable=False),
    Column("model", String, nullable=True),
    Column("manufacturer", String, nullable=True),
    Column("vehicle_class", String, nullable=True),
    Column("cost_in_credits", DecimalText, nullable=True),
    Column("length", DecimalText, nullable=True),
    Column("crew", Integer, nullable=True),
    Column("passengers", Integer, nullable=True),
    Column("cargo_capacity", BigInteger, nullable=True),
    Column("max_atmosphering_speed", String, nullable=True),
    Column("consumables", String, nullable=True),
    UniqueConstraint("source", "source_key"),
)

film_table = Table(
    "film",
    mapper_registry.metadata,
    *_source_columns(),
    Column("title", String, nullable=False),
    Column("episode_id", Integer, nullable=True),
    Column("opening_crawl", Text, nullable=True),
    Column("director", String, nullable=True),
    Column("producer", String, nullable=True),
    Column("release_date", Date, nullable=True),
    UniqueConstraint("source", "source_key"),
)

TABLE_BY_RESOURCE: Final[dict[Resource, Table]] = {
    Resource.PLANETS: planet_table,
    Resource.PEOPLE: person_table,
    Resource.SPECIES: species_table,
    Resource.STARSHIPS: starship_table,
    Resource.VEHICLES: vehicle_table,
    Resource.FILMS: film_table,
}

CLASS_BY_RESOURCE: Final[dict[Resource, type[CatalogEntity]]] = {
    Resource.PLANETS: Planet,
    Resource.PEOPLE: Person,
    Resource.SPECIES: Species,
    Resource.STARSHIPS: Starship,
    Resource.VEHICLES: Vehicle,
    Resource.FILMS: Film,
}


# Join tables -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EdgeTable:
    """A join table plus the names of its two composite-key columns."""

    table: Table
    left_column: str
    right_column: str


def _edge_table(edge_type: EdgeType) -> EdgeTable:
    spec = EDGE_SPECS[edge_type]
    left = TABLE_BY_RESOURCE[spec.left]
    right = TABLE_BY_RESOURCE[spec.right]
    left_column = f"{left.name}_id"
    right_column = f"{right.name}_id"
    table = Table(
        edge_type.value,
        mapper_registry.metadata,
        Column(
            left_column,
            Integer,
            ForeignKey(f"{left.name}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            right_column,
            Integer,
            ForeignKey(f"{right.name}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    return EdgeTable(table=table, left_column=left_column, right_column=right_column)


EDGE_TABLES: Final[dict[EdgeType, EdgeTable]] = {
    edge_type: _edge_table(edge_type) for edge_type in EdgeType
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the catalog model."""

    log.info("Starting SQLAlchemy mappers")
    for resource, entity_cls in CLASS_BY_RESOURCE.items():
        mapper_registry.map_imperatively(entity_cls, TABLE_BY_RESOURCE[resource])
    orm.configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
