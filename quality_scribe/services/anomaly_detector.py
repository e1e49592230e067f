"""
This module provides `AnomalyDetector`, which asks the LLM to review an ad-hoc
SQL statement, optionally with schema context, and returns the analysis.
"""

from typing import Any, Optional

from quality_scribe.core.interfaces import BaseLLMClient
from quality_scribe.core.exceptions import ValidationError
from quality_scribe.core.models import AnomalyReport
from quality_scribe.services.prompt_builder import (
    build_anomaly_detection_prompt,
)
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class AnomalyDetector:
    """Flags syntax, logic, performance, data-quality and security issues in SQL."""

    def __init__(self, llm_client: BaseLLMClient):
        self.llm_client = llm_client

    def detect_anomalies(
        self, sql_query: str, schema_context: Optional[Any] = None
    ) -> AnomalyReport:
        """
        Analyzes `sql_query` and returns an `AnomalyReport`.

        Args:
            sql_query: The SQL statement to review. Must not be blank.
            schema_context: Optional schema information (text or a structure
                            such as a schema snapshot response).

        Raises:
            ValidationError: If `sql_query` is empty or blank. Raised before
                             any prompt is built or request is sent.
            CompletionError: If the LLM call fails.
        """
        if not sql_query or not sql_query.strip():
            raise ValidationError("SQL query is required")

        prompt = build_anomaly_detection_prompt(sql_query, schema_context)
        logger.info("Requesting anomaly analysis for SQL query...")
        analysis = self.llm_client.complete(prompt)
        return AnomalyReport(
            sql_query=sql_query,
            schema_context=schema_context,
            analysis=analysis,
        )
