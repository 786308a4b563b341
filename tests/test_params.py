import pytest

from snowrest import ConfigurationError, ConnectionParams

ENV = {
    "SNOWFLAKE_ACCOUNT": "acct",
    "SNOWFLAKE_USER": "user",
    "SNOWFLAKE_PASSWORD": "secret",
    "SNOWFLAKE_WAREHOUSE": "wh",
    "SNOWFLAKE_ROLE": "role",
    "SNOWFLAKE_DATABASE": "db",
    "SNOWFLAKE_SCHEMA": "schema",
}


def test_all_fields_are_required():
    with pytest.raises(TypeError):
        ConnectionParams(account="acct", user="user", password="secret")  # type: ignore[call-arg]


def test_fields_are_keyword_only():
    with pytest.raises(TypeError):
        ConnectionParams("acct", "user", "secret", "wh", "role", "db", "schema")  # type: ignore[misc]


def test_params_are_immutable(params):
    with pytest.raises(AttributeError):
        params.account = "other"  # type: ignore[misc]


def test_password_not_in_repr(params):
    assert "duck" not in repr(params)
    assert "smow" in repr(params)


def test_base_url_from_account(params):
    assert params.base_url == "https://snowrest.snowflakecomputing.com"


def test_from_env():
    params = ConnectionParams.from_env(ENV)

    assert params == ConnectionParams(
        account="acct",
        user="user",
        password="secret",
        warehouse="wh",
        role="role",
        database="db",
        schema="schema",
    )
    assert params.host is None


def test_from_env_reads_os_environ(monkeypatch):
    for name, value in ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("SNOWFLAKE_HOST", "http://localhost:8000")

    params = ConnectionParams.from_env()

    assert params.account == "acct"
    assert params.base_url == "http://localhost:8000"


def test_from_env_accepts_empty_values():
    params = ConnectionParams.from_env({**ENV, "SNOWFLAKE_ROLE": ""})

    assert params.role == ""


def test_from_env_reports_all_missing_variables():
    env = {k: v for k, v in ENV.items() if k not in ("SNOWFLAKE_USER", "SNOWFLAKE_SCHEMA")}

    with pytest.raises(ConfigurationError, match="SNOWFLAKE_USER, SNOWFLAKE_SCHEMA"):
        ConnectionParams.from_env(env)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        ConnectionParams.from_env({})
