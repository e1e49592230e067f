"""
This module provides `SqlBaseConnector`, a shared base for connectors whose
databases expose the standard `information_schema` catalog.

Design Rationale:
MariaDB/MySQL and PostgreSQL answer the same catalog queries, and both
drivers use the `%s` paramstyle. Putting the queries here means a concrete
connector only implements `connect()` (and, where the dialect differs,
`_quote_identifier()`); listing tables, reading ordered column metadata,
sampling rows and closing the connection are inherited.
"""

from typing import List, Dict, Any, Optional

from quality_scribe.core.interfaces import BaseConnector
from quality_scribe.core.exceptions import (
    ConnectorError,
    QueryError,
    SampleFetchError,
)
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class SqlBaseConnector(BaseConnector):
    """
    A base connector implementing catalog introspection via `information_schema`.

    Subclasses must set `self.connection`, `self.cursor`, `self.dbname` and
    `self.schema_name` in their `connect()` implementation.
    """

    def __init__(self):
        self.connection: Optional[Any] = None
        self.cursor: Optional[Any] = None
        self.dbname: Optional[str] = None
        self.schema_name: Optional[str] = None

    def _require_cursor(self):
        if not self.cursor:
            raise ConnectorError("Database connection not established.")
        return self.cursor

    def _quote_identifier(self, name: str) -> str:
        """Quotes an identifier using ANSI double quotes."""
        return '"' + name.replace('"', '""') + '"'

    def get_tables(self) -> List[str]:
        """
        Lists the tables and views of `self.schema_name`.

        Raises:
            QueryError: If the catalog query fails.
        """
        cursor = self._require_cursor()
        logger.info(f"Fetching tables from schema: '{self.schema_name}'")
        try:
            cursor.execute(
                "SELECT table_name FROM information_schema.tables "
                "WHERE table_schema = %s "
                "ORDER BY table_name",
                (self.schema_name,),
            )
            tables = [row[0] for row in cursor.fetchall()]
        except Exception as e:
            logger.error(f"Failed to list tables: {e}", exc_info=True)
            raise QueryError(
                f"Failed to list tables in '{self.schema_name}': {e}"
            ) from e
        logger.info(f"Found {len(tables)} tables.")
        return tables

    def get_columns(self, table_name: str) -> List[Dict[str, Any]]:
        """
        Reads column metadata for `table_name` in declared column order.

        Raises:
            QueryError: If the catalog query fails.
        """
        cursor = self._require_cursor()
        try:
            cursor.execute(
                "SELECT column_name, data_type, is_nullable, column_default "
                "FROM information_schema.columns "
                "WHERE table_name = %s AND table_schema = %s "
                "ORDER BY ordinal_position",
                (table_name, self.schema_name),
            )
            columns = [
                {
                    "name": row[0],
                    "data_type": row[1],
                    "is_nullable": row[2] == "YES",
                    "default_value": row[3],
                }
                for row in cursor.fetchall()
            ]
        except Exception as e:
            logger.error(
                f"Failed to fetch columns for '{table_name}': {e}",
                exc_info=True,
            )
            raise QueryError(
                f"Failed to fetch columns for '{table_name}': {e}"
            ) from e
        logger.debug(f"Fetched {len(columns)} columns for '{table_name}'.")
        return columns

    def get_sample_rows(
        self, table_name: str, limit: int
    ) -> List[Dict[str, Any]]:
        """
        Fetches up to `limit` rows from `table_name`.

        On failure the current transaction is rolled back, so that later
        catalog queries on the same connection are not rejected by an aborted
        transaction (PostgreSQL), and `SampleFetchError` is raised.
        """
        cursor = self._require_cursor()
        query = (
            f"SELECT * FROM {self._quote_identifier(table_name)} LIMIT %s"
        )
        try:
            cursor.execute(query, (limit,))
            names = [desc[0] for desc in cursor.description]
            return [dict(zip(names, row)) for row in cursor.fetchall()]
        except Exception as e:
            try:
                self.connection.rollback()
            except Exception as rollback_error:
                logger.warning(
                    f"Rollback after failed sample query failed: {rollback_error}"
                )
            raise SampleFetchError(
                f"Failed to fetch sample rows for '{table_name}': {e}"
            ) from e

    def close(self):
        """Closes the cursor and connection if they are open."""
        if self.cursor:
            try:
                self.cursor.close()
            except Exception as e:
                logger.warning(f"Error closing cursor: {e}")
            self.cursor = None
        if self.connection:
            try:
                self.connection.close()
                logger.info("Database connection closed.")
            except Exception as e:
                logger.warning(f"Error closing connection: {e}")
            self.connection = None
