"""Offline catalog source backed by one JSON array per resource."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from holocron.domain.ports.fetching import (
    CatalogSource,
    MalformedResponse,
    SnapshotMissing,
    raise_if_cancelled,
)

from .schema import PAYLOAD_BY_RESOURCE, RecordPayload

if TYPE_CHECKING:
    from holocron.domain.model import Resource
    from holocron.domain.ports.fetching import CancellationToken

log = getLogger(__name__)


def snapshot_path(base_dir: Path, resource: Resource | str) -> Path:
    name = str(resource).strip().rstrip("/").lower()
    return base_dir / f"{name}.json"


@dataclass(slots=True)
class SnapshotSource:
    """Reads ``<base_dir>/<resource>.json`` instead of calling the network."""

    base_dir: Path

    def fetch_all(
        self,
        resource: Resource,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[RecordPayload]:
        raise_if_cancelled(cancel, stage=f"reading the {resource} snapshot")
        path = snapshot_path(Path(self.base_dir), resource)
        if not path.is_file():
            raise SnapshotMissing(f"Snapshot file not found: {path}", resource=resource)

        adapter = TypeAdapter(list[PAYLOAD_BY_RESOURCE[resource]])
        try:
            records = adapter.validate_python(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
            raise MalformedResponse(
                f"Snapshot file {path} is not a JSON array of {resource} records: {exc}",
                resource=resource,
            ) from exc

        log.info("Loaded %s %s records from %s", len(records), resource, path)
        return list(records)


if TYPE_CHECKING:
    _source_check: CatalogSource = SnapshotSource(Path())
