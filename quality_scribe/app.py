"""
This module defines the Typer command-line interface for Quality Scribe.

Each command builds its components the same way the server does (through
`ConfigManager`), runs one pipeline operation and prints the JSON result to
stdout. Domain errors are logged and turned into exit code 1.
"""

import json
import os
import typer
from typing import Any, Optional

from quality_scribe.components.runners import DbtTestRunner
from quality_scribe.config.manager import ConfigManager
from quality_scribe.core.exceptions import QualityScribeError, ValidationError
from quality_scribe.core.models import ConnectionParams
from quality_scribe.services.anomaly_detector import AnomalyDetector
from quality_scribe.services.dbt_test_generator import DbtTestGenerator
from quality_scribe.services.schema_reader import SchemaReader
from quality_scribe.utils.config import settings
from quality_scribe.workflows.suite_workflow import SuiteWorkflow
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(
    help="Inspect database schemas, generate AI data-quality tests and review SQL."
)

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Path to config.yaml (default: $QUALITY_SCRIBE_CONFIG)."
)


def _echo_json(payload: Any):
    typer.echo(json.dumps(payload, indent=2, default=str))


def _connection_params(
    database: str,
    host: str,
    user: Optional[str],
    password: Optional[str],
    port: Optional[int],
    db_type: str,
) -> ConnectionParams:
    return ConnectionParams(
        host=host,
        user=user,
        password=password,
        database=database,
        port=port,
        db_type=db_type,
    )


def _fail(e: QualityScribeError):
    logger.error(str(e))
    raise typer.Exit(code=1)


@app.command()
def schema(
    database: str = typer.Argument(..., help="Database name (file path for sqlite)."),
    host: str = typer.Option("localhost", help="Database host."),
    user: Optional[str] = typer.Option(None, help="Database user."),
    password: Optional[str] = typer.Option(
        None, envvar="QUALITY_SCRIBE_DB_PASSWORD", help="Database password."
    ),
    port: Optional[int] = typer.Option(None, help="Database port."),
    db_type: str = typer.Option("mysql", "--type", help="mysql, mariadb, postgres or sqlite."),
):
    """Print the schema snapshot of a database."""
    params = _connection_params(database, host, user, password, port, db_type)
    try:
        _echo_json(SchemaReader().read_schema(params).to_response())
    except QualityScribeError as e:
        _fail(e)


@app.command()
def suite(
    database: str = typer.Argument(..., help="Database name (file path for sqlite)."),
    host: str = typer.Option("localhost", help="Database host."),
    user: Optional[str] = typer.Option(None, help="Database user."),
    password: Optional[str] = typer.Option(
        None, envvar="QUALITY_SCRIBE_DB_PASSWORD", help="Database password."
    ),
    port: Optional[int] = typer.Option(None, help="Database port."),
    db_type: str = typer.Option("mysql", "--type", help="mysql, mariadb, postgres or sqlite."),
    llm: Optional[str] = typer.Option(None, help="LLM profile from config.yaml."),
    config: Optional[str] = CONFIG_OPTION,
):
    """Generate dbt tests for every table of a database."""
    params = _connection_params(database, host, user, password, port, db_type)
    try:
        llm_client, _ = ConfigManager(config or settings.config_path).get_llm_client(llm)
        workflow = SuiteWorkflow(SchemaReader(), DbtTestGenerator(llm_client))
        _echo_json(workflow.generate_suite(params).to_response())
    except QualityScribeError as e:
        _fail(e)


@app.command()
def detect(
    sql_query: str = typer.Argument(..., help="The SQL statement to analyze."),
    schema_file: Optional[typer.FileText] = typer.Option(
        None, "--schema", help="JSON file with schema context (e.g. `schema` output)."
    ),
    llm: Optional[str] = typer.Option(None, help="LLM profile from config.yaml."),
    config: Optional[str] = CONFIG_OPTION,
):
    """Review a SQL statement for anomalies."""
    try:
        schema_context = json.load(schema_file) if schema_file else None
    except json.JSONDecodeError as e:
        logger.error(f"Schema file is not valid JSON: {e}")
        raise typer.Exit(code=1)

    try:
        if not sql_query.strip():
            raise ValidationError("SQL query is required")
        llm_client, _ = ConfigManager(config or settings.config_path).get_llm_client(llm)
        report = AnomalyDetector(llm_client).detect_anomalies(sql_query, schema_context)
        _echo_json(report.model_dump(by_alias=True))
    except QualityScribeError as e:
        _fail(e)


@app.command("run-tests")
def run_tests(
    project_path: str = typer.Argument(..., help="Path to the dbt project."),
    config: Optional[str] = CONFIG_OPTION,
):
    """Run the external test tool against a project and report its outcome."""
    try:
        config_path = config or settings.config_path
        if os.path.exists(config_path):
            runner = ConfigManager(config_path).get_test_runner()
        else:
            runner = DbtTestRunner()
        outcome = runner.run_tests(project_path)
    except QualityScribeError as e:
        _fail(e)
    _echo_json(outcome.model_dump(by_alias=True))
    if not outcome.succeeded:
        logger.warning(f"Test run failed with exit code {outcome.exit_code}.")
    raise typer.Exit(code=outcome.exit_code)
