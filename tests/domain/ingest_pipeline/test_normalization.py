from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from holocron.adapters.swapi.schema import FilmPayload, PersonPayload, StarshipPayload
from holocron.domain.ingest_pipeline.normalization import (
    normalize_record,
    parse_date,
    parse_decimal,
    parse_int,
    parse_reference_list,
    parse_text,
    scalar_attributes,
)
from holocron.domain.model import DataSource, EdgeType, Film, Person, Resource, Starship


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("172", 172),
        (" 42 ", 42),
        ("-3", -3),
        ("1,000,000", 1_000_000),
        ("342,953", 342_953),
        ("unknown", None),
        ("UNKNOWN", None),
        ("n/a", None),
        ("none", None),
        ("indefinite", None),
        ("", None),
        ("1.5", None),
        ("30-165", None),
        ("abc", None),
        (None, None),
        (7, 7),
        (True, None),
    ],
)
def test_parse_int(raw: object, expected: int | None) -> None:
    assert parse_int(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12.5", Decimal("12.5")),
        ("1000000000000", Decimal("1000000000000")),
        ("1,000,000.25", Decimal("1000000.25")),
        ("0.0000001", Decimal("0.0000001")),
        ("unknown", None),
        ("n/a", None),
        ("NaN", None),
        ("Infinity", None),
        ("fast", None),
        (None, None),
    ],
)
def test_parse_decimal(raw: object, expected: Decimal | None) -> None:
    assert parse_decimal(raw) == expected


def test_parse_decimal_keeps_full_precision() -> None:
    parsed = parse_decimal("123456789012345678901234567890.123456789")

    assert parsed is not None
    assert str(parsed) == "123456789012345678901234567890.123456789"


def test_parse_date_accepts_iso_and_rejects_garbage() -> None:
    assert parse_date("1977-05-25") == date(1977, 5, 25)
    assert parse_date("2014-12-10T16:36:50.509000Z") == date(2014, 12, 10)
    assert parse_date("unknown") is None
    assert parse_date("1977-13-01") is None


def test_parse_text_trims_and_blanks_to_none() -> None:
    assert parse_text("  arid ") == "arid"
    assert parse_text("   ") is None
    assert parse_text(12) is None


def test_parse_reference_list_keeps_order_and_duplicates() -> None:
    raw = ["https://x/people/2/", " ", "https://x/people/1/", "https://x/people/2/", 5]

    assert parse_reference_list(raw) == [
        "https://x/people/2/",
        "https://x/people/1/",
        "https://x/people/2/",
    ]
    assert parse_reference_list(None) == []


def test_normalize_person_record() -> None:
    raw = PersonPayload.model_validate(
        {
            "name": " Luke Skywalker ",
            "height": "172",
            "mass": "unknown",
            "birth_year": "19BBY",
            "homeworld": "https://swapi.dev/api/planets/1/",
            "url": "https://swapi.dev/api/people/1/",
        }
    )

    record = normalize_record(Resource.PEOPLE, raw)

    person = record.entity
    assert isinstance(person, Person)
    assert person.name == "Luke Skywalker"
    assert person.height == 172
    assert person.mass is None
    assert person.birth_year == "19BBY"
    assert person.homeworld_id is None
    assert person.source is DataSource.SWAPI
    assert record.source_key == "https://swapi.dev/api/people/1/"
    assert record.single_references == {"homeworld_id": "https://swapi.dev/api/planets/1/"}
    assert record.references == {}


def test_normalize_starship_record_types_numbers() -> None:
    raw = StarshipPayload.model_validate(
        {
            "name": "Death Star",
            "cost_in_credits": "1000000000000",
            "length": "120000",
            "crew": "342,953",
            "passengers": "843,342",
            "hyperdrive_rating": "4.0",
            "MGLT": "10",
            "max_atmosphering_speed": "n/a",
            "pilots": [],
            "url": "https://swapi.dev/api/starships/9/",
        }
    )

    record = normalize_record(Resource.STARSHIPS, raw)

    starship = record.entity
    assert isinstance(starship, Starship)
    assert starship.cost_in_credits == Decimal("1000000000000")
    assert starship.crew == 342_953
    assert starship.passengers == 843_342
    assert starship.hyperdrive_rating == Decimal("4.0")
    assert starship.mglt == 10
    assert record.references == {EdgeType.STARSHIP_PILOT: []}


def test_normalize_film_record_keeps_reference_lists() -> None:
    characters = [
        "https://swapi.dev/api/people/1/",
        "https://swapi.dev/api/people/2/",
        "https://swapi.dev/api/people/1/",
    ]
    raw = FilmPayload.model_validate(
        {
            "title": "A New Hope",
            "episode_id": 4,
            "release_date": "1977-05-25",
            "characters": characters,
            "url": "https://swapi.dev/api/films/1/",
        }
    )

    record = normalize_record(Resource.FILMS, raw)

    film = record.entity
    assert isinstance(film, Film)
    assert film.episode_id == 4
    assert film.release_date == date(1977, 5, 25)
    assert record.references[EdgeType.FILM_CHARACTER] == characters
    assert record.references[EdgeType.FILM_SPECIES] == []


def test_normalize_never_raises_on_malformed_scalars() -> None:
    raw = StarshipPayload.model_validate(
        {
            "name": "",
            "cost_in_credits": "priceless",
            "length": "1.2.3",
            "crew": "30-165",
            "hyperdrive_rating": "",
            "url": "https://swapi.dev/api/starships/99/",
        }
    )

    starship = normalize_record(Resource.STARSHIPS, raw).entity

    assert isinstance(starship, Starship)
    assert starship.name == ""
    assert starship.cost_in_credits is None
    assert starship.length is None
    assert starship.crew is None
    assert starship.hyperdrive_rating is None


def test_scalar_attributes_include_foreign_keys() -> None:
    attributes = scalar_attributes(Resource.PEOPLE)

    assert "name" in attributes
    assert "homeworld_id" in attributes
    assert "id" not in attributes
    assert "source_key" not in attributes
