from __future__ import annotations

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from holocron.adapters.sqlalchemy.mappings import TABLE_BY_RESOURCE
from holocron.domain.model import Resource


@pytest.mark.parametrize(
    ("resource", "column"),
    [
        (Resource.PLANETS, "population"),
        (Resource.STARSHIPS, "cargo_capacity"),
        (Resource.VEHICLES, "cargo_capacity"),
    ],
)
def test_large_counts_use_64_bit_columns(resource: Resource, column: str) -> None:
    ddl = str(CreateTable(TABLE_BY_RESOURCE[resource]).compile(dialect=postgresql.dialect()))

    assert f"{column} BIGINT" in ddl


def test_decimal_columns_are_stored_as_text() -> None:
    ddl = str(
        CreateTable(TABLE_BY_RESOURCE[Resource.STARSHIPS]).compile(dialect=postgresql.dialect())
    )

    assert "cost_in_credits VARCHAR" in ddl
