"""
Unit tests for `SchemaReader`.

A mocked connector stands in for the database so failures can be injected at
every step of the read.
"""

import pytest
from unittest.mock import MagicMock

from quality_scribe.core.exceptions import (
    ConnectorError,
    QueryError,
    SampleFetchError,
)
from quality_scribe.core.interfaces import BaseConnector
from quality_scribe.core.models import ConnectionParams
from quality_scribe.services.schema_reader import SchemaReader

PARAMS = ConnectionParams(
    host="db", user="app", password="secret", database="shop"
)

COLUMNS = {
    "users": [
        {"name": "id", "data_type": "int", "is_nullable": False, "default_value": None},
        {"name": "email", "data_type": "varchar", "is_nullable": True, "default_value": None},
    ],
    "orders": [
        {"name": "id", "data_type": "int", "is_nullable": False, "default_value": None},
    ],
}


@pytest.fixture
def connector():
    connector = MagicMock(spec=BaseConnector)
    connector.get_tables.return_value = ["users", "orders"]
    connector.get_columns.side_effect = lambda table: COLUMNS[table]
    connector.get_sample_rows.return_value = [{"id": 1}]
    return connector


@pytest.fixture
def reader(connector):
    return SchemaReader(connector_factory=lambda db_type: connector)


def test_snapshot_keys_match_catalog_tables(reader, connector):
    snapshot = reader.read_schema(PARAMS)

    assert snapshot.table_names() == ["users", "orders"]
    assert [c.name for c in snapshot.tables["users"].columns] == ["id", "email"]
    assert snapshot.tables["users"].columns[0].is_nullable is False
    connector.connect.assert_called_once_with(
        {"host": "db", "user": "app", "password": "secret", "dbname": "shop"}
    )
    connector.close.assert_called_once()


def test_sample_rows_are_capped_at_five(reader, connector):
    reader.read_schema(PARAMS)
    connector.get_sample_rows.assert_any_call("users", 5)


def test_sample_failure_degrades_to_empty_rows(reader, connector):
    def sample(table, limit):
        if table == "users":
            raise SampleFetchError("permission denied")
        return [{"id": 7}]

    connector.get_sample_rows.side_effect = sample

    snapshot = reader.read_schema(PARAMS)

    assert snapshot.table_names() == ["users", "orders"]
    assert snapshot.tables["users"].sample_rows == []
    assert len(snapshot.tables["users"].columns) == 2
    assert snapshot.tables["orders"].sample_rows == [{"id": 7}]


def test_column_failure_is_fatal_and_closes_connection(reader, connector):
    connector.get_columns.side_effect = QueryError("columns unavailable")

    with pytest.raises(QueryError, match="columns unavailable"):
        reader.read_schema(PARAMS)
    connector.close.assert_called_once()


def test_table_listing_failure_is_fatal_and_closes_connection(reader, connector):
    connector.get_tables.side_effect = QueryError("no catalog access")

    with pytest.raises(QueryError):
        reader.read_schema(PARAMS)
    connector.close.assert_called_once()


def test_connect_failure_propagates_and_closes(reader, connector):
    connector.connect.side_effect = ConnectorError("Access denied for user")

    with pytest.raises(ConnectorError, match="Access denied"):
        reader.read_schema(PARAMS)
    connector.get_tables.assert_not_called()
    connector.close.assert_called_once()


def test_factory_receives_db_type(connector):
    factory = MagicMock(return_value=connector)
    SchemaReader(connector_factory=factory).read_schema(
        ConnectionParams(database="shop", db_type="postgres")
    )
    factory.assert_called_once_with("postgres")


def test_read_against_sqlite_is_repeatable(sqlite_db):
    params = ConnectionParams(database=sqlite_db, db_type="sqlite")
    reader = SchemaReader()

    first = reader.read_schema(params)
    second = reader.read_schema(params)

    assert first.table_names() == ["orders", "products", "user_orders", "users"]
    assert first.table_names() == second.table_names()
    for name in first.tables:
        assert first.tables[name].columns == second.tables[name].columns
    assert len(first.tables["users"].sample_rows) == 5
