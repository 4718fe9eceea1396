"""HTTP client for the paginated SWAPI list endpoints."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from holocron.adapters.http_resilience import ResilientClient
from holocron.config.swapi import SwapiConfig
from holocron.domain.ports.fetching import (
    CatalogSource,
    IngestCancelled,
    MalformedResponse,
    SourceUnavailable,
    raise_if_cancelled,
)

from .schema import PAYLOAD_BY_RESOURCE, RecordPayload, SwapiPage

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from holocron.config.http_resilience import ResilienceConfig
    from holocron.domain.model import Resource
    from holocron.domain.ports.fetching import CancellationToken

log = getLogger(__name__)

# how often an in-flight request checks the cancellation token
CANCEL_POLL_SECONDS: Final[float] = 0.1


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def relative_next_path(next_url: str | None, *, base_url: str) -> str | None:
    """Rewrite a page's ``next`` link to a path relative to the API root.

    ``https://swapi.dev/api/people/?page=2`` and ``/api/people/?page=2`` both
    become ``people/?page=2`` for a base URL of ``https://swapi.dev/api/``, so
    the configured base address stays authoritative.
    """

    if next_url is None or not next_url.strip():
        return None
    candidate = next_url.strip()
    url = httpx.URL(candidate)
    path = url.raw_path.decode("ascii") if url.is_absolute_url else candidate

    path = path.lstrip("/")
    root = httpx.URL(base_url).path.strip("/")
    if root and path.startswith(f"{root}/"):
        path = path[len(root) + 1 :]
    return path


@dataclass(slots=True)
class SwapiClient:
    """Live catalog source: follows ``next`` links until the list is exhausted."""

    config: SwapiConfig = field(default_factory=SwapiConfig)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def resilience(self) -> ResilienceConfig:
        return self.config.resilience()

    def fetch_all(
        self,
        resource: Resource,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[RecordPayload]:
        return asyncio.run(self._fetch_all_async(resource, cancel=cancel))

    async def _fetch_all_async(
        self,
        resource: Resource,
        *,
        cancel: CancellationToken | None,
    ) -> list[RecordPayload]:
        resilience = self.resilience
        base_url = resilience.base_url or self.config.base_url
        payload_cls = PAYLOAD_BY_RESOURCE[resource]

        records: list[RecordPayload] = []
        path: str | None = f"{resource.value}/"
        visited: set[str] = set()
        pages = 0

        async with self.client_factory(resilience) as client:
            while path is not None:
                raise_if_cancelled(cancel, stage=f"requesting {resource} page {pages + 1}")
                if path in visited:
                    raise MalformedResponse(
                        f"SWAPI pagination for {resource} loops back to {path}",
                        resource=resource,
                    )
                visited.add(path)

                page = await self._request_page(client, path, resource=resource, cancel=cancel)
                pages += 1
                for item in page.results:
                    try:
                        records.append(payload_cls.model_validate(item))
                    except ValidationError as exc:
                        raise MalformedResponse(
                            f"Malformed {resource} record on {path}: {exc}",
                            resource=resource,
                        ) from exc
                path = relative_next_path(page.next, base_url=base_url)

        log.info("Fetched %s %s records in %s pages", len(records), resource, pages)
        return records

    async def _request_page(
        self,
        client: ResilientClient,
        path: str,
        *,
        resource: Resource,
        cancel: CancellationToken | None,
    ) -> SwapiPage:
        log.debug("GET %s", path)
        try:
            response = await _cancellable(client.get(path), cancel, resource=resource)
        except httpx.HTTPError as exc:
            raise SourceUnavailable(
                f"SWAPI request for {path} failed: {exc}", resource=resource
            ) from exc

        if not response.is_success:
            raise SourceUnavailable(
                f"SWAPI returned HTTP {response.status_code} for {path}", resource=resource
            )

        try:
            return SwapiPage.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise MalformedResponse(
                f"Malformed SWAPI page for {path}: {exc}", resource=resource
            ) from exc


async def _cancellable[T](
    awaitable: Awaitable[T],
    cancel: CancellationToken | None,
    *,
    resource: Resource,
) -> T:
    """Await ``awaitable`` while polling ``cancel``; abort the request once it is set."""

    task = asyncio.ensure_future(awaitable)
    if cancel is None:
        return await task
    while True:
        done, _ = await asyncio.wait({task}, timeout=CANCEL_POLL_SECONDS)
        if done:
            return task.result()
        if cancel.is_set():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            raise IngestCancelled(f"Ingestion cancelled while requesting {resource}")


if TYPE_CHECKING:
    _source_check: CatalogSource = SwapiClient()
