"""
This module provides a connector for SQLite database files.

SQLite has no `information_schema`, so the catalog methods of
`SqlBaseConnector` are overridden with `sqlite_master` and
`PRAGMA table_info` queries. The file is opened read-only through a URI, which
also means a missing file is reported as a connection failure instead of
silently creating an empty database.
"""

import sqlite3
from pathlib import Path
from typing import List, Dict, Any

from .sql_base_connector import SqlBaseConnector
from quality_scribe.core.exceptions import (
    ConnectorError,
    QueryError,
    SampleFetchError,
)
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class SQLiteConnector(SqlBaseConnector):
    """A read-only connector for a local SQLite database file."""

    def connect(self, db_params: Dict[str, Any]):
        """
        Opens the SQLite file at `db_params["path"]` in read-only mode.

        Raises:
            ConnectorError: If `path` is missing or the file cannot be opened.
        """
        path = db_params.get("path")
        if not path:
            raise ConnectorError("Missing 'path' parameter for SQLiteConnector.")

        logger.info(f"Connecting to SQLite database: '{path}'")
        try:
            uri = f"{Path(path).resolve().as_uri()}?mode=ro"
            self.connection = sqlite3.connect(uri, uri=True)
            self.cursor = self.connection.cursor()
        except sqlite3.Error as e:
            logger.error(f"Failed to open SQLite database: {e}", exc_info=True)
            raise ConnectorError(
                f"Failed to open SQLite database '{path}': {e}"
            ) from e
        self.dbname = path
        self.schema_name = "main"
        logger.info("Successfully connected to SQLite database.")

    def get_tables(self) -> List[str]:
        cursor = self._require_cursor()
        try:
            cursor.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%' "
                "ORDER BY name"
            )
            return [row[0] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"Failed to list SQLite tables: {e}", exc_info=True)
            raise QueryError(f"Failed to list tables: {e}") from e

    def get_columns(self, table_name: str) -> List[Dict[str, Any]]:
        cursor = self._require_cursor()
        try:
            cursor.execute(
                f"PRAGMA table_info({self._quote_identifier(table_name)})"
            )
            # Row format: (cid, name, type, notnull, dflt_value, pk)
            return [
                {
                    "name": row[1],
                    "data_type": row[2],
                    "is_nullable": not row[3],
                    "default_value": row[4],
                }
                for row in cursor.fetchall()
            ]
        except sqlite3.Error as e:
            logger.error(
                f"Failed to fetch columns for '{table_name}': {e}",
                exc_info=True,
            )
            raise QueryError(
                f"Failed to fetch columns for '{table_name}': {e}"
            ) from e

    def get_sample_rows(
        self, table_name: str, limit: int
    ) -> List[Dict[str, Any]]:
        cursor = self._require_cursor()
        try:
            cursor.execute(
                f"SELECT * FROM {self._quote_identifier(table_name)} LIMIT ?",
                (limit,),
            )
            names = [desc[0] for desc in cursor.description]
            return [dict(zip(names, row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise SampleFetchError(
                f"Failed to fetch sample rows for '{table_name}': {e}"
            ) from e
