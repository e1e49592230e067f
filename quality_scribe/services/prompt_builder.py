"""
Prompt templates for the two analysis kinds and the pure functions that fill
them in.

Schema data and sample rows are rendered as indented JSON; values JSON cannot
encode natively (dates, decimals, bytes) fall back to `str()`. The builders
never interpret the SQL or the schema, they only place them in the template.
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Union

from quality_scribe.core.models import ColumnDescriptor

NO_SCHEMA_CONTEXT = "No schema context provided."

TEST_GENERATION_TEMPLATE = """You are a senior data-quality engineer writing dbt tests.

Table: {table_name}

Columns:
{columns}

Sample rows:
{sample_rows}

Propose data-quality tests for this table. Consider each of these categories
and include every test that is justified by the columns or the sample data:
1. Uniqueness (unique, unique combinations of columns)
2. Not null
3. Accepted values for low-cardinality or enum-like columns
4. Relationships to other tables, inferred from column names such as *_id
5. Custom SQL tests for business rules visible in the data
6. Freshness checks for timestamp columns
7. Volume checks (expected row counts, no empty loads)
8. Statistical checks (ranges, distributions, outliers) for numeric columns

Respond with a dbt `schema.yml` model definition for `{table_name}` in YAML,
followed by any custom SQL tests as separate SQL blocks. Give each test a
one-line comment explaining what it protects against.
"""

ANOMALY_DETECTION_TEMPLATE = """You are an expert SQL reviewer.

Analyze the following SQL query for problems.

SQL query:
{sql_query}

Schema context:
{schema_context}

Check for:
1. Syntax errors and likely runtime errors
2. Logic errors (wrong joins, filters, grouping or aggregation)
3. Performance concerns (full scans, missing indexes, N+1 patterns, SELECT *)
4. Data-quality concerns (NULL handling, type mismatches, duplicates)
5. SQL injection risks
6. Violations of SQL best practices

Report every finding in this format:
SEVERITY: CRITICAL | HIGH | MEDIUM | LOW
ISSUE: <short title>
DESCRIPTION: <what is wrong and why>
RECOMMENDATION: <how to fix it>

If no problems are found, say so explicitly.
"""

ColumnLike = Union[ColumnDescriptor, Dict[str, Any]]


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def _column_payload(columns: Sequence[ColumnLike]) -> List[Any]:
    return [
        col.model_dump() if isinstance(col, ColumnDescriptor) else col
        for col in columns
    ]


def build_test_generation_prompt(
    table_name: str,
    columns: Sequence[ColumnLike],
    sample_rows: Sequence[Dict[str, Any]],
) -> str:
    """Renders the dbt test-generation prompt for one table."""
    return TEST_GENERATION_TEMPLATE.format(
        table_name=table_name,
        columns=_to_json(_column_payload(columns)),
        sample_rows=_to_json(list(sample_rows)),
    )


def build_anomaly_detection_prompt(
    sql_query: str, schema_context: Optional[Any] = None
) -> str:
    """
    Renders the anomaly-detection prompt.

    `schema_context` may be a string (used verbatim), any JSON-serialisable
    structure, or empty, in which case a placeholder is inserted.
    """
    if not schema_context:
        context = NO_SCHEMA_CONTEXT
    elif isinstance(schema_context, str):
        context = schema_context
    else:
        context = _to_json(schema_context)
    return ANOMALY_DETECTION_TEMPLATE.format(
        sql_query=sql_query, schema_context=context
    )
