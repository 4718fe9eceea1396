from __future__ import annotations

import logging

import pytest

from holocron.domain.ingest_pipeline.identity import IdentityMap, IdentityMaps
from holocron.domain.ingest_pipeline.resolution import (
    UnresolvedReference,
    resolve_edges,
    resolve_single,
)
from holocron.domain.model import EdgeType, JoinEdge, Resource

PERSON_A = "https://swapi.dev/api/people/1/"
PERSON_B = "https://swapi.dev/api/people/2/"
PERSON_C = "https://swapi.dev/api/people/3/"


@pytest.fixture
def people_map() -> IdentityMap:
    identity_map = IdentityMap(Resource.PEOPLE)
    identity_map.record(PERSON_A, 10)
    identity_map.record(PERSON_B, 11)
    return identity_map


def test_identity_map_lookup_ignores_case_and_whitespace(people_map: IdentityMap) -> None:
    assert people_map.lookup(PERSON_A.upper()) == 10
    assert people_map.lookup(f" {PERSON_B} ") == 11
    assert PERSON_A in people_map
    assert PERSON_C not in people_map
    assert len(people_map) == 2


def test_identity_maps_are_created_per_resource() -> None:
    maps = IdentityMaps()

    people = maps.for_resource(Resource.PEOPLE)

    assert maps.for_resource(Resource.PEOPLE) is people
    assert maps.for_resource(Resource.PLANETS) is not people
    assert {identity_map.resource for identity_map in maps} == {Resource.PEOPLE, Resource.PLANETS}


def test_repeated_reference_resolves_to_same_edges(people_map: IdentityMap) -> None:
    repeated = resolve_edges(
        EdgeType.FILM_CHARACTER,
        owner_id=1,
        owner_key="https://swapi.dev/api/films/1/",
        references=[PERSON_A, PERSON_B, PERSON_A],
        identity_map=people_map,
    )
    distinct = resolve_edges(
        EdgeType.FILM_CHARACTER,
        owner_id=1,
        owner_key="https://swapi.dev/api/films/1/",
        references=[PERSON_A, PERSON_B],
        identity_map=people_map,
    )

    assert repeated.edges == distinct.edges
    assert repeated.edges == [
        JoinEdge(EdgeType.FILM_CHARACTER, 1, 10),
        JoinEdge(EdgeType.FILM_CHARACTER, 1, 11),
    ]


def test_unresolved_reference_is_skipped_and_reported(
    people_map: IdentityMap,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        resolution = resolve_edges(
            EdgeType.PLANET_RESIDENT,
            owner_id=5,
            owner_key="https://swapi.dev/api/planets/1/",
            references=[PERSON_C, PERSON_A],
            identity_map=people_map,
        )

    assert resolution.edges == [JoinEdge(EdgeType.PLANET_RESIDENT, 5, 10)]
    assert resolution.unresolved == [
        UnresolvedReference(
            owner=Resource.PLANETS,
            owner_key="https://swapi.dev/api/planets/1/",
            target=Resource.PEOPLE,
            reference=PERSON_C,
            edge_type=EdgeType.PLANET_RESIDENT,
        )
    ]
    assert PERSON_C in caplog.text


def test_resolve_edges_rejects_map_of_wrong_type() -> None:
    with pytest.raises(ValueError, match="resolves against"):
        resolve_edges(
            EdgeType.FILM_PLANET,
            owner_id=1,
            owner_key="https://swapi.dev/api/films/1/",
            references=[],
            identity_map=IdentityMap(Resource.PEOPLE),
        )


def test_resolve_single() -> None:
    planets = IdentityMap(Resource.PLANETS)
    planets.record("https://swapi.dev/api/planets/1/", 3)

    resolved = resolve_single(
        "https://swapi.dev/api/planets/1/",
        owner=Resource.PEOPLE,
        owner_key=PERSON_A,
        identity_map=planets,
    )
    blank = resolve_single(None, owner=Resource.PEOPLE, owner_key=PERSON_A, identity_map=planets)
    missing_id, unresolved = resolve_single(
        "https://swapi.dev/api/planets/404/",
        owner=Resource.PEOPLE,
        owner_key=PERSON_A,
        identity_map=planets,
    )

    assert resolved == (3, None)
    assert blank == (None, None)
    assert missing_id is None
    assert unresolved is not None
    assert unresolved.target is Resource.PLANETS
    assert unresolved.edge_type is None


def test_fresh_identity_maps_do_not_share_state() -> None:
    first = IdentityMaps()
    second = IdentityMaps()

    first.for_resource(Resource.PEOPLE).record(PERSON_A, 1)

    assert PERSON_A not in second.for_resource(Resource.PEOPLE)
    assert list(second) == [second.for_resource(Resource.PEOPLE)]
