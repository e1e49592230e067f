"""
Unit tests for `DbtTestGenerator`.
"""

import pytest

from quality_scribe.core.exceptions import CompletionError, ValidationError
from quality_scribe.core.models import ColumnDescriptor
from quality_scribe.services.dbt_test_generator import DbtTestGenerator

USERS_COLUMNS = [
    ColumnDescriptor(name="id", data_type="int", is_nullable=False),
    ColumnDescriptor(name="email", data_type="varchar", is_nullable=True),
]


def test_generate_tests_for_users_table(mock_llm_client):
    generator = DbtTestGenerator(mock_llm_client)

    text = generator.generate_tests("users", USERS_COLUMNS, [])

    assert text == "version: 2\nmodels: []"
    prompt = mock_llm_client.complete.call_args.args[0]
    assert "users" in prompt
    assert "id" in prompt
    assert "email" in prompt


def test_generate_tests_requires_table_name(mock_llm_client):
    with pytest.raises(ValidationError, match="Table name is required"):
        DbtTestGenerator(mock_llm_client).generate_tests("", USERS_COLUMNS)
    mock_llm_client.complete.assert_not_called()


def test_generate_tests_requires_columns(mock_llm_client):
    with pytest.raises(ValidationError, match="users"):
        DbtTestGenerator(mock_llm_client).generate_tests("users", [])
    mock_llm_client.complete.assert_not_called()


def test_completion_errors_propagate(mock_llm_client):
    mock_llm_client.complete.side_effect = CompletionError("rate limited")

    with pytest.raises(CompletionError, match="rate limited"):
        DbtTestGenerator(mock_llm_client).generate_tests("users", USERS_COLUMNS)
