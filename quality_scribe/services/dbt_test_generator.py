"""
This module provides `DbtTestGenerator`, the per-table test-generation step of
the pipeline: build the prompt for one table, send it to the LLM, return the
generated test definitions.
"""

from typing import Any, Dict, Sequence

from quality_scribe.core.interfaces import BaseLLMClient
from quality_scribe.core.exceptions import ValidationError
from quality_scribe.services.prompt_builder import (
    ColumnLike,
    build_test_generation_prompt,
)
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class DbtTestGenerator:
    """Generates dbt data-quality tests for a single table."""

    def __init__(self, llm_client: BaseLLMClient):
        self.llm_client = llm_client

    def generate_tests(
        self,
        table_name: str,
        columns: Sequence[ColumnLike],
        sample_rows: Sequence[Dict[str, Any]] = (),
    ) -> str:
        """
        Returns the LLM-generated test definitions for `table_name`.

        Raises:
            ValidationError: If the table name or the column list is empty.
            CompletionError: If the LLM call fails. Not caught here; callers
                             decide whether a failure is fatal.
        """
        if not table_name:
            raise ValidationError("Table name is required")
        if not columns:
            raise ValidationError(
                f"At least one column is required for table '{table_name}'"
            )

        prompt = build_test_generation_prompt(table_name, columns, sample_rows)
        logger.info(f"Generating tests for table '{table_name}'...")
        return self.llm_client.complete(prompt)
