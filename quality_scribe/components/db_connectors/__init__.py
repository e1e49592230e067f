from .sql_base_connector import SqlBaseConnector
from .mariadb_connector import MariaDBConnector
from .postgres_connector import PostgresConnector
from .sqlite_connector import SQLiteConnector

__all__ = [
    "SqlBaseConnector",
    "MariaDBConnector",
    "PostgresConnector",
    "SQLiteConnector",
]
