"""
This module provides the `SqlBaseConnector` implementation for MariaDB and
MySQL, the databases the quality pipeline targets by default.

Only `connect()` and identifier quoting are dialect specific; every catalog
query is inherited from `SqlBaseConnector`. For MySQL/MariaDB the catalog's
`table_schema` is the database itself, so `dbname` doubles as `schema_name`.
"""

import mysql.connector
from typing import Dict, Any

from .sql_base_connector import SqlBaseConnector
from quality_scribe.core.exceptions import ConnectorError
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class MariaDBConnector(SqlBaseConnector):
    """A connector for MariaDB and MySQL built on `mysql-connector-python`."""

    def connect(self, db_params: Dict[str, Any]):
        """
        Connects to a MariaDB/MySQL database.

        Args:
            db_params: Connection parameters. `dbname` is required; `user`,
                       `password`, `host` (default 'localhost') and `port`
                       (default 3306) are optional.

        Raises:
            ConnectorError: If `dbname` is missing or the connection fails.
        """
        self.dbname = db_params.get("dbname")
        self.schema_name = self.dbname
        if not self.dbname:
            raise ConnectorError(
                "'dbname' (database name) parameter is required for MariaDB/MySQL."
            )

        logger.info(f"Connecting to MariaDB/MySQL database '{self.dbname}'...")
        try:
            self.connection = mysql.connector.connect(
                host=db_params.get("host", "localhost"),
                port=db_params.get("port", 3306),
                user=db_params.get("user"),
                password=db_params.get("password"),
                database=self.dbname,
            )
            self.cursor = self.connection.cursor()
        except mysql.connector.Error as e:
            logger.error(f"MariaDB/MySQL connection failed: {e}", exc_info=True)
            raise ConnectorError(f"MariaDB/MySQL connection failed: {e}") from e
        logger.info(f"Successfully connected to MariaDB/MySQL DB '{self.dbname}'.")

    def _quote_identifier(self, name: str) -> str:
        return "`" + name.replace("`", "``") + "`"
