"""Run-scoped identity maps from Source Key to locally assigned id."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from holocron.domain.model import Resource


def _normalize_key(source_key: str) -> str:
    # upstream URLs are compared case-insensitively
    return source_key.strip().casefold()


@dataclass(slots=True)
class IdentityMap:
    """Source Key -> local id for one entity type."""

    resource: Resource
    _ids: dict[str, int] = field(default_factory=dict)

    def record(self, source_key: str, local_id: int) -> None:
        self._ids[_normalize_key(source_key)] = local_id

    def lookup(self, source_key: str) -> int | None:
        return self._ids.get(_normalize_key(source_key))

    def update(self, index: Mapping[str, int]) -> None:
        for source_key, local_id in index.items():
            self.record(source_key, local_id)

    def __contains__(self, source_key: object) -> bool:
        return isinstance(source_key, str) and _normalize_key(source_key) in self._ids

    def __len__(self) -> int:
        return len(self._ids)


@dataclass(slots=True)
class IdentityMaps:
    """All identity maps of one bootstrap run; never shared across runs."""

    _maps: dict[Resource, IdentityMap] = field(default_factory=dict)

    def for_resource(self, resource: Resource) -> IdentityMap:
        if resource not in self._maps:
            self._maps[resource] = IdentityMap(resource)
        return self._maps[resource]

    def __iter__(self) -> Iterator[IdentityMap]:
        return iter(self._maps.values())
