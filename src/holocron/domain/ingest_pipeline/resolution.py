"""Reference resolution against already-populated identity maps.

Pure lookups: nothing here touches the network or the sink. Identifiers that
do not resolve are skipped and reported, since the fetched universe may be a
subset of everything upstream records point at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from holocron.domain.model import EDGE_SPECS, JoinEdge

if TYPE_CHECKING:
    from collections.abc import Iterable

    from holocron.domain.ingest_pipeline.identity import IdentityMap
    from holocron.domain.model import EdgeType, Resource

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnresolvedReference:
    """A reference that had no match in the target identity map."""

    owner: Resource
    owner_key: str
    target: Resource
    reference: str
    edge_type: EdgeType | None = None


@dataclass(slots=True)
class EdgeResolution:
    edges: list[JoinEdge] = field(default_factory=list)
    unresolved: list[UnresolvedReference] = field(default_factory=list)


def resolve_edges(
    edge_type: EdgeType,
    *,
    owner_id: int,
    owner_key: str,
    references: Iterable[str],
    identity_map: IdentityMap,
) -> EdgeResolution:
    """Resolve one record's reference list into join edges.

    The result is ordered by first occurrence and contains each pair once, so
    ``[A, B, A]`` and ``[A, B]`` produce the same edges.
    """

    spec = EDGE_SPECS[edge_type]
    if identity_map.resource is not spec.right:
        raise ValueError(
            f"{edge_type} resolves against {spec.right}, got a {identity_map.resource} map"
        )

    resolution = EdgeResolution()
    seen: set[int] = set()
    for reference in references:
        target_id = identity_map.lookup(reference)
        if target_id is None:
            log.warning(
                "Unresolved %s reference %s on %s %s", edge_type, reference, spec.left, owner_key
            )
            resolution.unresolved.append(
                UnresolvedReference(
                    owner=spec.left,
                    owner_key=owner_key,
                    target=spec.right,
                    reference=reference,
                    edge_type=edge_type,
                )
            )
            continue
        if target_id in seen:
            continue
        seen.add(target_id)
        resolution.edges.append(JoinEdge(edge_type, owner_id, target_id))
    return resolution


def resolve_single(
    reference: str | None,
    *,
    owner: Resource,
    owner_key: str,
    identity_map: IdentityMap,
) -> tuple[int | None, UnresolvedReference | None]:
    """Resolve a single-valued reference; blank or unknown references yield ``None``."""

    if reference is None:
        return None, None
    target_id = identity_map.lookup(reference)
    if target_id is not None:
        return target_id, None
    log.warning(
        "Unresolved %s reference %s on %s %s",
        identity_map.resource,
        reference,
        owner,
        owner_key,
    )
    return None, UnresolvedReference(
        owner=owner,
        owner_key=owner_key,
        target=identity_map.resource,
        reference=reference,
    )
