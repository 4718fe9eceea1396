from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable  # noqa: TC003
from pathlib import Path  # noqa: TC003

import httpx
import pytest

from holocron.adapters.http_resilience import ResilientClient
from holocron.adapters.swapi import PersonPayload, SwapiClient, relative_next_path
from holocron.config import ResilienceConfig, SwapiConfig
from holocron.domain.model import Resource
from holocron.domain.ports.fetching import IngestCancelled, MalformedResponse, SourceUnavailable

BASE_URL = "https://swapi.dev/api/"

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


def _make_client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return factory


def _person(index: int) -> dict[str, object]:
    return {"name": f"Person {index}", "url": f"{BASE_URL}people/{index}/"}


def _paged_handler(
    pages: dict[str, dict[str, object]],
    requested: list[str],
) -> Handler:
    async def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.raw_path.decode("ascii")
        requested.append(path)
        if path not in pages:
            return httpx.Response(404, json={"detail": "Not found"})
        return httpx.Response(200, json=pages[path])

    return handler


def _client(
    handler: Handler,
    *,
    base_url: str = BASE_URL,
    retries: int = 0,
    cache: bool = False,
) -> SwapiClient:
    return SwapiClient(
        config=SwapiConfig(base_url=base_url, retries=retries, cache=cache),
        client_factory=_make_client_factory(handler),
    )


def test_fetch_all_follows_next_links() -> None:
    requested: list[str] = []
    pages = {
        "/api/people/": {
            "count": 6,
            "next": f"{BASE_URL}people/?page=2",
            "results": [_person(1), _person(2)],
        },
        "/api/people/?page=2": {
            "count": 6,
            "next": f"{BASE_URL}people/?page=3",
            "results": [_person(3), _person(4)],
        },
        "/api/people/?page=3": {
            "count": 6,
            "next": None,
            "results": [_person(5), _person(6)],
        },
    }

    records = _client(_paged_handler(pages, requested)).fetch_all(Resource.PEOPLE)

    assert requested == ["/api/people/", "/api/people/?page=2", "/api/people/?page=3"]
    assert [record.url for record in records] == [f"{BASE_URL}people/{i}/" for i in range(1, 7)]
    assert all(isinstance(record, PersonPayload) for record in records)


def test_absolute_next_stays_on_configured_host() -> None:
    hosts: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(f"{request.url.scheme}://{request.url.host}{request.url.raw_path.decode()}")
        if request.url.params.get("page") == "2":
            return httpx.Response(200, json={"next": None, "results": [_person(2)]})
        return httpx.Response(
            200,
            json={"next": "http://swapi.dev/api/people/?page=2", "results": [_person(1)]},
        )

    records = _client(handler, base_url="https://mirror.test/api").fetch_all(Resource.PEOPLE)

    assert len(records) == 2
    assert hosts == [
        "https://mirror.test/api/people/",
        "https://mirror.test/api/people/?page=2",
    ]


@pytest.mark.parametrize(
    ("next_url", "base_url", "expected"),
    [
        ("https://swapi.dev/api/people/?page=2", BASE_URL, "people/?page=2"),
        ("/api/planets/?page=3", BASE_URL, "planets/?page=3"),
        ("films/?page=2", BASE_URL, "films/?page=2"),
        ("http://localhost:8000/people/?page=2", "http://localhost:8000/", "people/?page=2"),
        (None, BASE_URL, None),
        ("  ", BASE_URL, None),
    ],
)
def test_relative_next_path(next_url: str | None, base_url: str, expected: str | None) -> None:
    assert relative_next_path(next_url, base_url=base_url) == expected


def test_http_error_status_raises_source_unavailable() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, request=request)

    with pytest.raises(SourceUnavailable) as excinfo:
        _client(handler).fetch_all(Resource.PLANETS)

    assert excinfo.value.resource == Resource.PLANETS
    assert "503" in str(excinfo.value)


def test_network_error_raises_source_unavailable() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceUnavailable):
        _client(handler).fetch_all(Resource.FILMS)


def test_undecodable_page_raises_malformed_response() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>teapot</html>", request=request)

    with pytest.raises(MalformedResponse):
        _client(handler).fetch_all(Resource.SPECIES)


def test_self_referencing_next_raises_malformed_response() -> None:
    requested: list[str] = []
    pages = {
        "/api/vehicles/": {"next": f"{BASE_URL}vehicles/", "results": []},
    }

    with pytest.raises(MalformedResponse, match="loops"):
        _client(_paged_handler(pages, requested)).fetch_all(Resource.VEHICLES)

    assert requested == ["/api/vehicles/"]


def test_cancel_before_first_request_sends_nothing() -> None:
    requested: list[str] = []
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(IngestCancelled):
        _client(_paged_handler({}, requested)).fetch_all(Resource.PEOPLE, cancel=cancel)

    assert requested == []


def test_cancel_aborts_in_flight_request() -> None:
    cancel = threading.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        cancel.set()
        await asyncio.sleep(30)
        return httpx.Response(200, json={"next": None, "results": []}, request=request)

    with pytest.raises(IngestCancelled):
        _client(handler).fetch_all(Resource.STARSHIPS, cancel=cancel)


def test_retry_transport_recovers_from_transient_status() -> None:
    statuses = iter([503, 200])
    attempts: list[int] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        status = next(statuses)
        attempts.append(status)
        if status != 200:
            return httpx.Response(status, request=request)
        return httpx.Response(200, json={"next": None, "results": [_person(1)]}, request=request)

    records = _client(handler, retries=1).fetch_all(Resource.PEOPLE)

    assert attempts == [503, 200]
    assert [record.name for record in records] == ["Person 1"]


def test_http_cache_is_stored_under_data_dir(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("HOLOCRON_DATA_DIR", str(tmp_path))

    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"next": None, "results": [_person(1), _person(2)]},
            headers={"Cache-Control": "max-age=60"},
            request=request,
        )

    client = _client(handler, cache=True)
    records = client.fetch_all(Resource.PEOPLE)

    assert len(records) == 2
    assert (tmp_path / "http_cache.db").exists()


def test_cache_is_off_by_default() -> None:
    assert not ResilientClient(SwapiConfig().resilience()).caches_responses
