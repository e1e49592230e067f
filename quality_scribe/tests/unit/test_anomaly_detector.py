"""
Unit tests for `AnomalyDetector`.
"""

import pytest

from quality_scribe.core.exceptions import CompletionError, ValidationError
from quality_scribe.services import anomaly_detector
from quality_scribe.services.anomaly_detector import AnomalyDetector
from quality_scribe.services.prompt_builder import NO_SCHEMA_CONTEXT


@pytest.mark.parametrize("sql", ["", "   \n\t"])
def test_empty_query_is_rejected_before_any_work(mock_llm_client, mocker, sql):
    build_prompt = mocker.spy(anomaly_detector, "build_anomaly_detection_prompt")

    with pytest.raises(ValidationError, match="SQL query is required"):
        AnomalyDetector(mock_llm_client).detect_anomalies(sql)

    build_prompt.assert_not_called()
    mock_llm_client.complete.assert_not_called()


def test_detect_anomalies_without_schema_context(mock_llm_client):
    mock_llm_client.complete.return_value = "SEVERITY: HIGH\nISSUE: SELECT *"

    report = AnomalyDetector(mock_llm_client).detect_anomalies(
        "SELECT * FROM users"
    )

    assert report.sql_query == "SELECT * FROM users"
    assert report.schema_context is None
    assert report.analysis.startswith("SEVERITY: HIGH")
    prompt = mock_llm_client.complete.call_args.args[0]
    assert NO_SCHEMA_CONTEXT in prompt


def test_detect_anomalies_echoes_schema_context(mock_llm_client):
    context = {"users": {"columns": [{"name": "id"}]}}

    report = AnomalyDetector(mock_llm_client).detect_anomalies(
        "SELECT id FROM users", context
    )

    assert report.schema_context == context
    assert report.model_dump(by_alias=True)["sqlQuery"] == "SELECT id FROM users"


def test_completion_errors_propagate(mock_llm_client):
    mock_llm_client.complete.side_effect = CompletionError("service down")

    with pytest.raises(CompletionError):
        AnomalyDetector(mock_llm_client).detect_anomalies("SELECT 1")
