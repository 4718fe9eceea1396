"""Field normalization: raw, string-typed upstream records to typed entities.

Upstream values are strings with inconsistent placeholders ("unknown", "n/a",
"indefinite") and thousands separators. Every coercer here degrades malformed
input to ``None`` instead of raising. Thousands separators are stripped before
numeric parsing, so ``"1,000,000"`` becomes ``1000000``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Final

from holocron.domain.ingest_pipeline.ordering import relationships_for, single_references_for
from holocron.domain.model import ENTITY_CLASS_BY_RESOURCE, DataSource, EdgeType, Resource

if TYPE_CHECKING:
    from holocron.domain.model import CatalogEntity
    from holocron.domain.ports.fetching import RawRecord

type Coercer = Callable[[object], object]

SENTINELS: Final[frozenset[str]] = frozenset({"", "unknown", "n/a", "na", "none", "indefinite"})

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def _numeric_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.replace(",", "").strip()
    if cleaned.lower() in SENTINELS:
        return None
    return cleaned


def parse_int(value: object) -> int | None:
    """Exact integer parse; fractional input is rejected, not truncated."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = _numeric_text(value)
    if text is None or not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def parse_decimal(value: object) -> Decimal | None:
    """Full-precision decimal parse for money and physical measurements."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        value = str(value)
    text = _numeric_text(value)
    if text is None:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return parsed


def parse_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def parse_required_text(value: object) -> str:
    return parse_text(value) or ""


def parse_date(value: object) -> date | None:
    text = parse_text(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_reference(value: object) -> str | None:
    return parse_text(value)


def parse_reference_list(value: object) -> list[str]:
    """Keep raw identifiers in order, duplicates included; drop blanks."""

    if not isinstance(value, list | tuple):
        return []
    references: list[str] = []
    for item in value:
        text = parse_text(item)
        if text is not None:
            references.append(text)
    return references


FIELD_SPECS: Final[Mapping[Resource, tuple[tuple[str, Coercer], ...]]] = {
    Resource.PLANETS: (
        ("name", parse_required_text),
        ("rotation_period", parse_int),
        ("orbital_period", parse_int),
        ("diameter", parse_int),
        ("climate", parse_text),
        ("gravity", parse_text),
        ("terrain", parse_text),
        ("surface_water", parse_int),
        ("population", parse_int),
    ),
    Resource.PEOPLE: (
        ("name", parse_required_text),
        ("height", parse_int),
        ("mass", parse_int),
        ("hair_color", parse_text),
        ("skin_color", parse_text),
        ("eye_color", parse_text),
        ("birth_year", parse_text),
        ("gender", parse_text),
    ),
    Resource.SPECIES: (
        ("name", parse_required_text),
        ("classification", parse_text),
        ("designation", parse_text),
        ("average_height", parse_text),
        ("skin_colors", parse_text),
        ("hair_colors", parse_text),
        ("eye_colors", parse_text),
        ("average_lifespan", parse_text),
        ("language", parse_text),
    ),
    Resource.STARSHIPS: (
        ("name", parse_required_text),
        ("model", parse_text),
        ("manufacturer", parse_text),
        ("starship_class", parse_text),
        ("cost_in_credits", parse_decimal),
        ("length", parse_decimal),
        ("crew", parse_int),
        ("passengers", parse_int),
        ("cargo_capacity", parse_int),
        ("hyperdrive_rating", parse_decimal),
        ("mglt", parse_int),
        ("max_atmosphering_speed", parse_text),
        ("consumables", parse_text),
    ),
    Resource.VEHICLES: (
        ("name", parse_required_text),
        ("model", parse_text),
        ("manufacturer", parse_text),
        ("vehicle_class", parse_text),
        ("cost_in_credits", parse_decimal),
        ("length", parse_decimal),
        ("crew", parse_int),
        ("passengers", parse_int),
        ("cargo_capacity", parse_int),
        ("max_atmosphering_speed", parse_text),
        ("consumables", parse_text),
    ),
    Resource.FILMS: (
        ("title", parse_required_text),
        ("episode_id", parse_int),
        ("opening_crawl", parse_text),
        ("director", parse_text),
        ("producer", parse_text),
        ("release_date", parse_date),
    ),
}


@dataclass(slots=True)
class NormalizedRecord:
    """A typed entity plus the raw reference identifiers it still has to resolve."""

    resource: Resource
    entity: CatalogEntity
    references: dict[EdgeType, list[str]] = field(default_factory=dict)
    single_references: dict[str, str | None] = field(default_factory=dict)

    @property
    def source_key(self) -> str:
        return self.entity.source_key


def scalar_attributes(resource: Resource) -> tuple[str, ...]:
    """Attributes copied onto an existing row when a record is re-synced."""

    names = [name for name, _ in FIELD_SPECS[resource]]
    names.extend(ref.attribute for ref in single_references_for(resource))
    return tuple(names)


def normalize_record(resource: Resource, raw: RawRecord) -> NormalizedRecord:
    """Convert one raw record into a typed entity; never raises on bad scalars."""

    values = {name: coerce(getattr(raw, name, None)) for name, coerce in FIELD_SPECS[resource]}
    entity_cls = ENTITY_CLASS_BY_RESOURCE[resource]
    entity = entity_cls(source=DataSource.SWAPI, source_key=raw.url.strip(), **values)

    return NormalizedRecord(
        resource=resource,
        entity=entity,
        references={
            rel.edge_type: parse_reference_list(getattr(raw, rel.field, None))
            for rel in relationships_for(resource)
        },
        single_references={
            ref.attribute: parse_reference(getattr(raw, ref.field, None))
            for ref in single_references_for(resource)
        },
    )
