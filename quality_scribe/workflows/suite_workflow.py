"""
This module defines `SuiteWorkflow`, the orchestrator behind "generate a full
test suite".

Design Rationale:
Like the other workflows, this class receives its collaborators (a
`SchemaReader` and a `DbtTestGenerator`) fully built, so it contains nothing
but orchestration: read the schema once, then generate tests table by table.
It is the one place in the application where an error is turned into data.
A failure for one table is recorded as a `GenerationFailure` entry and the
remaining tables are still processed, so a single bad table never costs the
whole suite.
"""

from quality_scribe.core.models import (
    ConnectionParams,
    GeneratedTests,
    GenerationFailure,
    GenerationResult,
)
from quality_scribe.services.dbt_test_generator import DbtTestGenerator
from quality_scribe.services.schema_reader import SchemaReader
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class SuiteWorkflow:
    """Generates dbt tests for every table of a database."""

    def __init__(
        self, schema_reader: SchemaReader, test_generator: DbtTestGenerator
    ):
        self.schema_reader = schema_reader
        self.test_generator = test_generator

    def generate_suite(self, params: ConnectionParams) -> GenerationResult:
        """
        Reads the schema behind `params` and generates tests for each table.

        Tables are processed sequentially in snapshot order; the next request
        is only sent after the previous one has settled.

        Returns:
            A `GenerationResult` with exactly one entry per table.

        Raises:
            ConnectorError, QueryError: If the schema cannot be read. No partial
                                        result is produced in that case.
        """
        snapshot = self.schema_reader.read_schema(params)
        result = GenerationResult()

        for table_name, table in snapshot.tables.items():
            try:
                tests = self.test_generator.generate_tests(
                    table_name, table.columns, table.sample_rows
                )
                result.entries[table_name] = GeneratedTests(tests=tests)
            except Exception as e:
                logger.error(
                    f"Test generation failed for '{table_name}': {e}",
                    exc_info=True,
                )
                result.entries[table_name] = GenerationFailure(error=str(e))

        failed = len(result.failed_tables)
        logger.info(
            f"Generated tests for {result.total_tables - failed} of "
            f"{result.total_tables} tables."
        )
        return result
