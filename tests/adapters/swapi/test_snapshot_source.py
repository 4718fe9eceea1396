from __future__ import annotations

from pathlib import Path

import pytest

from holocron.adapters.swapi import (
    PersonPayload,
    SnapshotSource,
    SwapiClient,
    build_catalog_source,
    snapshot_path,
)
from holocron.config import SwapiConfig
from holocron.domain.model import Resource
from holocron.domain.ports.fetching import IngestCancelled, MalformedResponse, SnapshotMissing


def test_snapshot_source_loads_records(snapshot_dir: Path) -> None:
    records = SnapshotSource(snapshot_dir).fetch_all(Resource.PEOPLE)

    assert [record.url for record in records] == [
        "https://swapi.dev/api/people/1/",
        "https://swapi.dev/api/people/2/",
        "https://swapi.dev/api/people/3/",
    ]


def test_snapshot_field_names_match_case_insensitively(snapshot_dir: Path) -> None:
    leia = SnapshotSource(snapshot_dir).fetch_all(Resource.PEOPLE)[1]

    assert isinstance(leia, PersonPayload)
    assert leia.name == "Leia Organa"
    assert leia.mass == "49"
    assert leia.homeworld == "https://swapi.dev/api/planets/2/"


def test_snapshot_path_normalizes_resource_name() -> None:
    base = Path("snapshots")

    assert snapshot_path(base, "People/") == base / "people.json"
    assert snapshot_path(base, Resource.STARSHIPS) == base / "starships.json"


def test_missing_snapshot_file(tmp_path: Path) -> None:
    with pytest.raises(SnapshotMissing) as excinfo:
        SnapshotSource(tmp_path).fetch_all(Resource.FILMS)

    assert excinfo.value.resource == Resource.FILMS


@pytest.mark.parametrize("content", ["{not json", '{"results": []}', '[{"url": ["x"]}]'])
def test_undecodable_snapshot_file(tmp_path: Path, content: str) -> None:
    (tmp_path / "planets.json").write_text(content, encoding="utf-8")

    with pytest.raises(MalformedResponse):
        SnapshotSource(tmp_path).fetch_all(Resource.PLANETS)


def test_snapshot_source_checks_cancellation(snapshot_dir: Path) -> None:
    class AlwaysCancelled:
        def is_set(self) -> bool:
            return True

    with pytest.raises(IngestCancelled):
        SnapshotSource(snapshot_dir).fetch_all(Resource.PEOPLE, cancel=AlwaysCancelled())


def test_build_catalog_source_selects_by_config(tmp_path: Path) -> None:
    snapshot = build_catalog_source(SwapiConfig(use_snapshot=True, snapshot_dir=tmp_path))
    live = build_catalog_source(SwapiConfig(use_snapshot=False))

    assert isinstance(snapshot, SnapshotSource)
    assert snapshot.base_dir == tmp_path
    assert isinstance(live, SwapiClient)
