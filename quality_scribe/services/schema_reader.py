"""
This module provides `SchemaReader`, which turns connection parameters into a
`SchemaSnapshot` of a live database.

Each `read_schema()` call owns its own connector: it is created, connected,
used and closed within the call, and closed on every exit path. Snapshots are
never cached; every call re-reads the catalog.
"""

from typing import Callable, Optional

from quality_scribe.core.interfaces import BaseConnector
from quality_scribe.core.exceptions import SampleFetchError
from quality_scribe.core.factory import create_db_connector
from quality_scribe.core.models import (
    SAMPLE_ROW_LIMIT,
    ColumnDescriptor,
    ConnectionParams,
    SchemaSnapshot,
    TableSnapshot,
)
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class SchemaReader:
    """
    Reads tables, ordered column metadata and sample rows from a database.

    Catalog failures (connecting, listing tables, reading columns) abort the
    read. A failed sample-row query only degrades that table's
    `sample_rows` to an empty list.
    """

    def __init__(
        self,
        connector_factory: Optional[Callable[[str], BaseConnector]] = None,
        sample_limit: int = SAMPLE_ROW_LIMIT,
    ):
        """
        Args:
            connector_factory: Builds an unconnected connector for a db type.
                               Defaults to `create_db_connector`.
            sample_limit: Maximum number of sample rows per table.
        """
        self.connector_factory = connector_factory or create_db_connector
        self.sample_limit = sample_limit

    def read_schema(self, params: ConnectionParams) -> SchemaSnapshot:
        """
        Builds a snapshot of every table visible in `params.database`.

        Raises:
            ConnectorError: If the connection cannot be established.
            QueryError: If listing tables or reading columns fails.
        """
        connector = self.connector_factory(params.db_type)
        try:
            connector.connect(params.to_db_params())
            snapshot = SchemaSnapshot()
            for table_name in connector.get_tables():
                columns = [
                    ColumnDescriptor(**column)
                    for column in connector.get_columns(table_name)
                ]
                snapshot.tables[table_name] = TableSnapshot(
                    table_name=table_name,
                    columns=columns,
                    sample_rows=self._sample_rows(connector, table_name),
                )
            logger.info(
                f"Read schema of '{params.database}': "
                f"{len(snapshot.tables)} tables."
            )
            return snapshot
        finally:
            connector.close()

    def _sample_rows(self, connector: BaseConnector, table_name: str):
        try:
            return connector.get_sample_rows(table_name, self.sample_limit)
        except SampleFetchError as e:
            logger.warning(f"Using empty sample for '{table_name}': {e}")
            return []
