"""
This module defines the FastAPI application that exposes the quality pipeline
over HTTP.

Design Rationale:
The server is a thin transport. Components are built per request through
FastAPI dependencies (backed by `ConfigManager`), injected into the same
services and workflows the CLI uses, and domain errors are translated into
HTTP status codes at this boundary:

- `ValidationError` -> 400
- `ConnectorError`, `CompletionError` (upstream failures) -> 502
- any other `QualityScribeError` -> 500
- unexpected exceptions -> 500
"""

import os
from fastapi import Depends, FastAPI, HTTPException
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from quality_scribe import __version__
from quality_scribe.components.runners import DbtTestRunner
from quality_scribe.config.manager import ConfigManager
from quality_scribe.core.exceptions import (
    CompletionError,
    ConnectorError,
    QualityScribeError,
    ValidationError,
)
from quality_scribe.core.interfaces import BaseLLMClient
from quality_scribe.core.models import ColumnDescriptor, ConnectionParams
from quality_scribe.services.anomaly_detector import AnomalyDetector
from quality_scribe.services.dbt_test_generator import DbtTestGenerator
from quality_scribe.services.schema_reader import SchemaReader
from quality_scribe.utils.config import settings
from quality_scribe.workflows.suite_workflow import SuiteWorkflow
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


app = FastAPI(
    title="Quality Scribe Server",
    description="API for schema inspection, AI test generation and SQL anomaly detection.",
    version=__version__,
)

# --- Request Models ---


class GenerateTestsRequest(BaseModel):
    """Request body for generating tests for a single table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    table_name: Optional[str] = None
    columns: List[ColumnDescriptor] = Field(default_factory=list)
    sample_rows: List[Dict[str, Any]] = Field(default_factory=list)


class DetectAnomaliesRequest(BaseModel):
    """
    Request body for SQL anomaly detection.

    The schema context is accepted as `schemaContext` or, as older clients
    send it, `tableSchema`.
    """

    sql_query: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("sqlQuery", "sql_query")
    )
    schema_context: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices(
            "schemaContext", "tableSchema", "schema_context"
        ),
    )


class RunTestsRequest(BaseModel):
    """Request body for running the external test tool."""

    project_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("projectPath", "project_path"),
    )


# --- Dependencies ---


def get_config_manager() -> ConfigManager:
    try:
        return ConfigManager(settings.config_path)
    except QualityScribeError as e:
        raise _to_http_exception(e)


def get_llm_client(
    cfg_manager: ConfigManager = Depends(get_config_manager),
) -> BaseLLMClient:
    try:
        client, _ = cfg_manager.get_llm_client()
        return client
    except QualityScribeError as e:
        raise _to_http_exception(e)


def get_schema_reader() -> SchemaReader:
    return SchemaReader()


def get_test_runner() -> DbtTestRunner:
    if not os.path.exists(settings.config_path):
        return DbtTestRunner()
    return get_config_manager().get_test_runner()


def _to_http_exception(e: Exception) -> HTTPException:
    """Maps an exception to the HTTP status that describes it."""
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, (ConnectorError, CompletionError)):
        logger.error(f"Upstream failure: {e}")
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, QualityScribeError):
        logger.error(f"Quality Scribe error: {e}")
        return HTTPException(status_code=500, detail=str(e))
    logger.error(f"Unexpected error: {e}", exc_info=True)
    return HTTPException(
        status_code=500, detail=f"An unexpected error occurred: {e}"
    )


# --- API Endpoints ---


@app.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok", "version": __version__}


@app.post("/schema")
def fetch_schema(
    params: ConnectionParams,
    schema_reader: SchemaReader = Depends(get_schema_reader),
):
    """Returns the live schema snapshot as `table -> {columns, sampleRows}`."""
    logger.info(f"Received schema request for database '{params.database}'")
    try:
        return schema_reader.read_schema(params).to_response()
    except Exception as e:
        raise _to_http_exception(e)


@app.post("/generate-tests")
def generate_tests(
    request: GenerateTestsRequest,
    llm_client: BaseLLMClient = Depends(get_llm_client),
):
    """Generates dbt tests for one table described in the request body."""
    try:
        tests = DbtTestGenerator(llm_client).generate_tests(
            request.table_name, request.columns, request.sample_rows
        )
        return {"tableName": request.table_name, "tests": tests}
    except Exception as e:
        raise _to_http_exception(e)


@app.post("/detect-anomalies")
def detect_anomalies(
    request: DetectAnomaliesRequest,
    cfg_manager: ConfigManager = Depends(get_config_manager),
):
    """
    Analyzes a SQL query for anomalies.

    An empty query is rejected with 400 before any LLM client is created.
    """
    if not request.sql_query or not request.sql_query.strip():
        raise _to_http_exception(ValidationError("SQL query is required"))
    try:
        llm_client, _ = cfg_manager.get_llm_client()
        report = AnomalyDetector(llm_client).detect_anomalies(
            request.sql_query, request.schema_context
        )
        return report.model_dump(by_alias=True)
    except Exception as e:
        raise _to_http_exception(e)


@app.post("/run-tests")
def run_tests(
    request: RunTestsRequest,
    runner: DbtTestRunner = Depends(get_test_runner),
):
    """Runs the external test tool and returns its exit code and output."""
    try:
        return runner.run_tests(request.project_path).model_dump(by_alias=True)
    except Exception as e:
        raise _to_http_exception(e)


@app.post("/generate-test-suite")
def generate_test_suite(
    params: ConnectionParams,
    schema_reader: SchemaReader = Depends(get_schema_reader),
    llm_client: BaseLLMClient = Depends(get_llm_client),
):
    """
    Generates tests for every table of the database.

    Per-table failures are reported inside `testSuite` as `{"error": ...}`;
    only a failure to read the schema fails the request.
    """
    logger.info(f"Received suite request for database '{params.database}'")
    try:
        workflow = SuiteWorkflow(schema_reader, DbtTestGenerator(llm_client))
        return workflow.generate_suite(params).to_response()
    except Exception as e:
        raise _to_http_exception(e)
