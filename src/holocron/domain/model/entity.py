"""
Base building blocks:
local integer identity plus the upstream source identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from holocron.domain.model.enums import DataSource

if TYPE_CHECKING:
    from holocron.domain.model.enums import Resource


@dataclass(eq=False, kw_only=True)
class CatalogEntity:
    """A catalog row.

    ``id`` stays ``None`` until the sink assigns it. ``source_key`` is the
    upstream canonical URL and is only meaningful during ingestion.
    """

    id: int | None = None
    source: DataSource = DataSource.SWAPI
    source_key: str = ""

    # class-level discriminator; subclasses must override
    RESOURCE: ClassVar[Resource]

    @property
    def resource(self) -> Resource:
        return self.RESOURCE

    def require_id(self) -> int:
        if self.id is None:
            raise ValueError(f"{type(self).__name__} {self.source_key!r} has no local id yet")
        return self.id
