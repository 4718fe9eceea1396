from __future__ import annotations

import pytest

from holocron.domain.ingest_pipeline.ordering import (
    DEPENDENCIES,
    INGESTION_ORDER,
    RELATIONSHIPS,
    SINGLE_REFERENCES,
    SingleReference,
    relationships_for,
    validate_order,
)
from holocron.domain.model import EDGE_SPECS, EdgeType, Resource


def test_ingestion_order_respects_dependencies() -> None:
    validate_order(INGESTION_ORDER, DEPENDENCIES)

    position = {resource: index for index, resource in enumerate(INGESTION_ORDER)}
    for resource, required in DEPENDENCIES.items():
        assert all(position[dependency] < position[resource] for dependency in required)


def test_ingestion_order_starts_with_planets_and_ends_with_films() -> None:
    assert INGESTION_ORDER[0] is Resource.PLANETS
    assert INGESTION_ORDER[-1] is Resource.FILMS
    assert set(INGESTION_ORDER) == set(Resource)


def test_validate_order_rejects_dependency_after_dependent() -> None:
    swapped = (Resource.PEOPLE, Resource.PLANETS, *INGESTION_ORDER[2:])

    with pytest.raises(ValueError, match="before its dependency"):
        validate_order(swapped, DEPENDENCIES)


def test_validate_order_rejects_missing_and_repeated_types() -> None:
    with pytest.raises(ValueError, match="missing"):
        validate_order(INGESTION_ORDER[:-1], DEPENDENCIES)

    with pytest.raises(ValueError, match="twice"):
        validate_order((*INGESTION_ORDER, Resource.PLANETS), DEPENDENCIES)


def test_validate_order_rejects_undeclared_single_reference() -> None:
    stray = SingleReference(Resource.PLANETS, "capital", "capital_id", Resource.PEOPLE)

    with pytest.raises(ValueError, match="not declared"):
        validate_order(INGESTION_ORDER, DEPENDENCIES, (*SINGLE_REFERENCES, stray))


def test_every_edge_type_has_exactly_one_relationship() -> None:
    assert sorted(rel.edge_type for rel in RELATIONSHIPS) == sorted(EdgeType)
    for rel in RELATIONSHIPS:
        assert EDGE_SPECS[rel.edge_type].left is rel.owner


def test_relationships_for_films() -> None:
    fields = {rel.field for rel in relationships_for(Resource.FILMS)}

    assert fields == {"characters", "planets", "starships", "vehicles", "species"}
    assert relationships_for(Resource.PEOPLE) == ()
