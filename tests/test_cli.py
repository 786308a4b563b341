import json

import pytest

from snowrest.cli import main


@pytest.fixture
def env(monkeypatch, server: dict) -> None:
    monkeypatch.setenv("SNOWFLAKE_ACCOUNT", "snowrest")
    monkeypatch.setenv("SNOWFLAKE_USER", "smow")
    monkeypatch.setenv("SNOWFLAKE_PASSWORD", "duck")
    monkeypatch.setenv("SNOWFLAKE_WAREHOUSE", "wh")
    monkeypatch.setenv("SNOWFLAKE_ROLE", "role")
    monkeypatch.setenv("SNOWFLAKE_DATABASE", "db")
    monkeypatch.setenv("SNOWFLAKE_SCHEMA", "schema")
    monkeypatch.setenv("SNOWFLAKE_HOST", server["host"])


def test_cli_prints_rows_as_json_lines(env, capsys) -> None:
    assert main(["SELECT 1"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in lines] == [["1", "hello world"]]


def test_cli_missing_configuration(monkeypatch, capsys) -> None:
    monkeypatch.delenv("SNOWFLAKE_ACCOUNT", raising=False)

    assert main(["SELECT 1"]) == 2
    assert capsys.readouterr().out == ""


def test_cli_reports_transport_failure(env, monkeypatch) -> None:
    # Nothing listens on port 9
    monkeypatch.setenv("SNOWFLAKE_HOST", "http://127.0.0.1:9")

    assert main(["SELECT 1"]) == 1
