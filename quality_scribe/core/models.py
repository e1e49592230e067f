"""
Pydantic models for the data flowing through the quality pipeline.

Python attributes use snake_case; JSON output produced with
`model_dump(by_alias=True)` uses the camelCase keys of the HTTP contract
(`sampleRows`, `totalTables`, `exitCode`, ...).
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

# Maximum number of sample rows fetched per table.
SAMPLE_ROW_LIMIT = 5


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConnectionParams(_CamelModel):
    """
    Per-request database credentials. Never persisted.

    For `db_type="sqlite"`, `database` is the path to the database file.
    """

    host: str = "localhost"
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    database: str
    port: Optional[int] = None
    db_type: str = "mysql"

    def to_db_params(self) -> Dict[str, Any]:
        """Translates the request fields into the connector `db_params` dict."""
        if self.db_type == "sqlite":
            return {"path": self.database}
        params: Dict[str, Any] = {
            "host": self.host,
            "user": self.user,
            "password": self.password,
            "dbname": self.database,
        }
        if self.port is not None:
            params["port"] = self.port
        return params


class ColumnDescriptor(_CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str
    data_type: str
    is_nullable: bool = True
    default_value: Optional[Any] = None


class TableSnapshot(_CamelModel):
    table_name: str
    columns: List[ColumnDescriptor]
    sample_rows: List[Dict[str, Any]] = Field(default_factory=list)

    @field_serializer("sample_rows", when_used="json")
    def serialize_sample_rows(self, rows: List[Dict[str, Any]]):
        # Binary column values (BLOB, bytea) are rendered as hex strings.
        return [
            {
                key: bytes(value).hex()
                if isinstance(value, (bytes, bytearray, memoryview))
                else value
                for key, value in row.items()
            }
            for row in rows
        ]


class SchemaSnapshot(BaseModel):
    """A point-in-time view of every table in a database, in catalog order."""

    tables: Dict[str, TableSnapshot] = Field(default_factory=dict)

    def table_names(self) -> List[str]:
        return list(self.tables)

    def to_response(self) -> Dict[str, Any]:
        """Renders the snapshot as JSON-safe `table -> {columns, sampleRows}`."""
        return {
            name: table.model_dump(
                mode="json", by_alias=True, include={"columns", "sample_rows"}
            )
            for name, table in self.tables.items()
        }


class GeneratedTests(BaseModel):
    status: Literal["success"] = "success"
    tests: str


class GenerationFailure(BaseModel):
    status: Literal["error"] = "error"
    error: str


TableOutcome = Union[GeneratedTests, GenerationFailure]


class GenerationResult(BaseModel):
    """
    The per-table outcome of a suite generation run.

    Holds exactly one entry per table of the snapshot it was derived from.
    Entries are independent: a failure recorded for one table says nothing
    about the others.
    """

    entries: Dict[str, TableOutcome] = Field(default_factory=dict)

    @property
    def total_tables(self) -> int:
        return len(self.entries)

    @property
    def failed_tables(self) -> List[str]:
        return [
            name
            for name, outcome in self.entries.items()
            if isinstance(outcome, GenerationFailure)
        ]

    def to_response(self) -> Dict[str, Any]:
        """Renders the result as `{"testSuite": ..., "totalTables": n}`."""
        suite: Dict[str, Any] = {}
        for name, outcome in self.entries.items():
            if isinstance(outcome, GeneratedTests):
                suite[name] = outcome.tests
            else:
                suite[name] = {"error": outcome.error}
        return {"testSuite": suite, "totalTables": self.total_tables}


class AnomalyReport(_CamelModel):
    sql_query: str
    schema_context: Optional[Any] = None
    analysis: str


class RunOutcome(_CamelModel):
    """One completed invocation of the external test runner."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
