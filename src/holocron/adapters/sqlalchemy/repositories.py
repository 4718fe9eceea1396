"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, func, insert, select

from holocron.adapters.sqlalchemy.mappings import EDGE_TABLES, TABLE_BY_RESOURCE
from holocron.domain.model import (
    CatalogEntity,
    Film,
    Person,
    Planet,
    Species,
    Starship,
    Vehicle,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import CursorResult, Executable
    from sqlalchemy.orm import Session

    from holocron.domain.model import DataSource, EdgeType, JoinEdge


def _rowcount(session: Session, statement: Executable) -> int:
    result = cast("CursorResult[object]", session.execute(statement))
    return max(result.rowcount, 0)


class SqlAlchemyCatalogRepository[TEntity: CatalogEntity]:
    """Shared helpers for repositories managing one catalog entity table."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = TABLE_BY_RESOURCE[entity_cls.RESOURCE]

    def add_all(self, entities: Sequence[TEntity]) -> list[int]:
        self.session.add_all(entities)
        # flush assigns primary keys without ending the transaction
        self.session.flush()
        return [entity.require_id() for entity in entities]

    def exists_any(self) -> bool:
        stmt = select(self._table.c.id).limit(1)
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return int(self.session.execute(stmt).scalar_one())

    def get_by_source_key(self, source: DataSource, source_key: str) -> TEntity | None:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.source == source)
            .where(func.lower(self._table.c.source_key) == source_key.strip().lower())
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def source_key_index(self, source: DataSource) -> dict[str, int]:
        stmt = select(self._table.c.source_key, self._table.c.id).where(
            self._table.c.source == source
        )
        return {source_key: entity_id for source_key, entity_id in self.session.execute(stmt)}

    def clear(self) -> int:
        removed = _rowcount(self.session, delete(self._table))
        self.session.expunge_all()
        return removed


class SqlAlchemyPlanetRepository(SqlAlchemyCatalogRepository[Planet]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Planet)


class SqlAlchemyPersonRepository(SqlAlchemyCatalogRepository[Person]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Person)


class SqlAlchemySpeciesRepository(SqlAlchemyCatalogRepository[Species]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Species)


class SqlAlchemyStarshipRepository(SqlAlchemyCatalogRepository[Starship]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Starship)


class SqlAlchemyVehicleRepository(SqlAlchemyCatalogRepository[Vehicle]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Vehicle)


class SqlAlchemyFilmRepository(SqlAlchemyCatalogRepository[Film]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Film)


class SqlAlchemyJoinEdgeRepository:
    """Writes join rows through Core inserts; composite-key duplicates are skipped."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add_edges(self, edges: Iterable[JoinEdge]) -> tuple[int, int]:
        by_type: dict[EdgeType, list[JoinEdge]] = {}
        for edge in edges:
            by_type.setdefault(edge.edge_type, []).append(edge)

        inserted = 0
        duplicates = 0
        for edge_type, batch in by_type.items():
            edge_table = EDGE_TABLES[edge_type]
            table = edge_table.table
            left = table.c[edge_table.left_column]
            right = table.c[edge_table.right_column]

            seen: set[tuple[int, int]] = {
                (left_id, right_id) for left_id, right_id in self.session.execute(select(left, right))
            }
            rows: list[dict[str, int]] = []
            for edge in batch:
                if edge.key in seen:
                    duplicates += 1
                    continue
                seen.add(edge.key)
                rows.append(
                    {
                        edge_table.left_column: edge.left_id,
                        edge_table.right_column: edge.right_id,
                    }
                )
            if rows:
                self.session.execute(insert(table), rows)
                inserted += len(rows)
        return inserted, duplicates

    def count(self, edge_type: EdgeType) -> int:
        stmt = select(func.count()).select_from(EDGE_TABLES[edge_type].table)
        return int(self.session.execute(stmt).scalar_one())

    def clear(self) -> int:
        return sum(
            _rowcount(self.session, delete(edge_table.table)) for edge_table in EDGE_TABLES.values()
        )
