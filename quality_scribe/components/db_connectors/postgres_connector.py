"""
This module provides the `SqlBaseConnector` implementation for PostgreSQL.

PostgreSQL supports the standard `information_schema`, so the connector only
implements `connect()` with `psycopg2`; introspection is inherited.
"""

import psycopg2
from typing import Dict, Any

from .sql_base_connector import SqlBaseConnector
from quality_scribe.core.exceptions import ConnectorError
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class PostgresConnector(SqlBaseConnector):
    """A connector for PostgreSQL databases."""

    def connect(self, db_params: Dict[str, Any]):
        """
        Connects to a PostgreSQL database.

        Args:
            db_params: Connection parameters: `user`, `password`, `dbname`, and
                       optionally `host` (default 'localhost'), `port`
                       (default 5432) and `schema` (default 'public').

        Raises:
            ConnectorError: If the connection fails.
        """
        logger.info("Connecting to PostgreSQL database...")
        self.schema_name = db_params.get("schema", "public")
        self.dbname = db_params.get("dbname")
        try:
            self.connection = psycopg2.connect(
                host=db_params.get("host", "localhost"),
                port=db_params.get("port", 5432),
                user=db_params.get("user"),
                password=db_params.get("password"),
                dbname=self.dbname,
            )
            self.cursor = self.connection.cursor()
        except psycopg2.Error as e:
            logger.error(
                f"Failed to connect to PostgreSQL database: {e}", exc_info=True
            )
            raise ConnectorError(
                f"Failed to connect to PostgreSQL database: {e}"
            ) from e
        logger.info("Successfully connected to PostgreSQL database.")
