"""
Integration tests for the FastAPI server.

Components are swapped through `app.dependency_overrides`; the schema is read
from a real SQLite database.
"""

import sqlite3
import sys

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from quality_scribe.components.runners import DbtTestRunner
from quality_scribe.core.exceptions import CompletionError
from quality_scribe.server.main import (
    app,
    get_config_manager,
    get_llm_client,
    get_test_runner,
)


@pytest.fixture
def client(mock_llm_client):
    cfg_manager = MagicMock()
    cfg_manager.get_llm_client.return_value = (mock_llm_client, "test")

    app.dependency_overrides[get_llm_client] = lambda: mock_llm_client
    app.dependency_overrides[get_config_manager] = lambda: cfg_manager
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_fetch_schema(client, sqlite_db):
    response = client.post(
        "/schema", json={"database": sqlite_db, "dbType": "sqlite"}
    )

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"orders", "products", "user_orders", "users"}
    assert [c["name"] for c in body["users"]["columns"]] == ["id", "name", "email"]
    assert len(body["users"]["sampleRows"]) == 5


def test_fetch_schema_connection_failure(client, tmp_path):
    response = client.post(
        "/schema",
        json={"database": str(tmp_path / "missing.db"), "dbType": "sqlite"},
    )

    assert response.status_code == 502
    assert "Failed to open SQLite database" in response.json()["detail"]


def test_fetch_schema_with_binary_column(client, tmp_path):
    db_path = tmp_path / "files.db"
    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE files (id INTEGER PRIMARY KEY, data BLOB)")
    conn.execute("INSERT INTO files (id, data) VALUES (1, ?)", (b"\xff\xfe\x00",))
    conn.commit()
    conn.close()

    response = client.post(
        "/schema", json={"database": str(db_path), "dbType": "sqlite"}
    )

    assert response.status_code == 200
    assert response.json()["files"]["sampleRows"] == [{"id": 1, "data": "fffe00"}]


def test_generate_tests_for_one_table(client, mock_llm_client):
    response = client.post(
        "/generate-tests",
        json={
            "tableName": "users",
            "columns": [
                {"name": "id", "dataType": "int", "isNullable": False},
                {"name": "email", "dataType": "varchar", "isNullable": True},
            ],
            "sampleRows": [],
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "tableName": "users",
        "tests": "version: 2\nmodels: []",
    }


def test_generate_tests_requires_table_name(client, mock_llm_client):
    response = client.post("/generate-tests", json={"columns": []})

    assert response.status_code == 400
    mock_llm_client.complete.assert_not_called()


def test_detect_anomalies(client, mock_llm_client):
    mock_llm_client.complete.return_value = "SEVERITY: LOW"

    response = client.post(
        "/detect-anomalies",
        json={"sqlQuery": "SELECT * FROM users", "tableSchema": {"users": {}}},
    )

    assert response.status_code == 200
    assert response.json() == {
        "sqlQuery": "SELECT * FROM users",
        "schemaContext": {"users": {}},
        "analysis": "SEVERITY: LOW",
    }


def test_detect_anomalies_empty_query(client, mock_llm_client):
    response = client.post("/detect-anomalies", json={"sqlQuery": "  "})

    assert response.status_code == 400
    assert response.json()["detail"] == "SQL query is required"
    mock_llm_client.complete.assert_not_called()


def test_detect_anomalies_upstream_failure(client, mock_llm_client):
    mock_llm_client.complete.side_effect = CompletionError("service unavailable")

    response = client.post("/detect-anomalies", json={"sqlQuery": "SELECT 1"})

    assert response.status_code == 502


def test_run_tests_reports_failing_exit_code(client, tmp_path):
    app.dependency_overrides[get_test_runner] = lambda: DbtTestRunner(
        command=[sys.executable, "-c", "import sys; print('fail'); sys.exit(1)"],
        pass_project_dir=False,
    )

    response = client.post("/run-tests", json={"projectPath": str(tmp_path)})

    assert response.status_code == 200
    body = response.json()
    assert body["exitCode"] == 1
    assert body["stdout"].strip() == "fail"


def test_run_tests_launch_failure(client, tmp_path):
    app.dependency_overrides[get_test_runner] = lambda: DbtTestRunner(
        command=["definitely-not-a-real-test-tool-xyz"]
    )

    response = client.post("/run-tests", json={"projectPath": str(tmp_path)})

    assert response.status_code == 500
    assert "Failed to launch" in response.json()["detail"]


def test_generate_test_suite(client, sqlite_db, mock_llm_client):
    def complete(prompt):
        if "Table: orders" in prompt:
            raise CompletionError("model overloaded")
        return "tests"

    mock_llm_client.complete.side_effect = complete

    response = client.post(
        "/generate-test-suite", json={"database": sqlite_db, "dbType": "sqlite"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["totalTables"] == 4
    assert body["testSuite"]["orders"] == {"error": "model overloaded"}
    assert body["testSuite"]["users"] == "tests"
