"""Request construction for the connector login and query endpoints.

Endpoints:
    POST /session/v1/login-request - Authenticate and create session
    POST /queries/v1/query-request - Execute SQL queries
    POST /session?delete=true - Close session
"""

from __future__ import annotations

import uuid
from typing import Any
from urllib.parse import urlencode

from .params import ConnectionParams

LOGIN_PATH = "/session/v1/login-request"
QUERY_PATH = "/queries/v1/query-request"
SESSION_PATH = "/session"

LOGIN_TIMEOUT = 120.0

CLIENT_APP_ID = "JavaScript"
CLIENT_APP_VERSION = "1.5.3"
SESSION_PARAMETERS = {
    "VALIDATE_DEFAULT_PARAMETERS": True,
    "QUOTED_IDENTIFIERS_IGNORE_CASE": True,
}
CLIENT_RESULT_CHUNK_SIZE = 48

LOGIN_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def login_url(params: ConnectionParams) -> str:
    query = urlencode(
        [
            ("warehouse", params.warehouse),
            ("roleName", params.role),
            ("databaseName", params.database),
            ("schemaName", params.schema),
        ]
    )
    return f"{params.base_url}{LOGIN_PATH}?{query}"


def login_body(params: ConnectionParams) -> dict[str, Any]:
    """Build the login request body.

    Client identification and session flags are fixed; only the account,
    credentials and context values come from ``params``.
    """
    return {
        "data": {
            "ACCOUNT_NAME": params.account,
            "PASSWORD": params.password,
            "CLIENT_APP_ID": CLIENT_APP_ID,
            "CLIENT_APP_VERSION": CLIENT_APP_VERSION,
            "LOGIN_NAME": params.user,
            "SESSION_PARAMETERS": dict(SESSION_PARAMETERS),
            "CLIENT_ENVIRONMENT": {
                "APPLICATION": "SnowflakeEx",
                "OCSP_MODE": "FAIL_OPEN",
                "OS": "Linux",
                "tracing": "DEBUG",
                "account": params.account,
                "user": params.user,
                "warehouse": params.warehouse,
                "database": params.database,
                "schema": params.schema,
            },
        }
    }


def new_request_id() -> str:
    return str(uuid.uuid4())


def query_url(host: str, request_id: str | None = None) -> str:
    """Build the query endpoint URL with a per-call request id."""
    return f"{host}{QUERY_PATH}?{urlencode({'requestId': request_id or new_request_id()})}"


def query_body(sql_text: str) -> dict[str, Any]:
    # Single synchronous statement, no bindings
    return {
        "sqlText": sql_text,
        "sequenceId": 0,
        "bindings": None,
        "bindStage": None,
        "describeOnly": False,
        "parameters": {"CLIENT_RESULT_CHUNK_SIZE": CLIENT_RESULT_CHUNK_SIZE},
        "describedJobId": None,
        "isInternal": False,
        "asyncExec": False,
    }


def auth_header(token: str) -> str:
    return f'Snowflake Token="{token}"'


def query_headers(token: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/snowflake",
        "Authorization": auth_header(token),
    }


def logout_url(host: str) -> str:
    return f"{host}{SESSION_PATH}?delete=true"
