"""Connection parameters and their environment configuration.

Required variables: SNOWFLAKE_ACCOUNT, SNOWFLAKE_USER, SNOWFLAKE_PASSWORD,
SNOWFLAKE_WAREHOUSE, SNOWFLAKE_ROLE, SNOWFLAKE_DATABASE, SNOWFLAKE_SCHEMA.
Optional: SNOWFLAKE_HOST (base URL override).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import ConfigurationError

# Environment variable -> ConnectionParams field
ENV_VARS = {
    "SNOWFLAKE_ACCOUNT": "account",
    "SNOWFLAKE_USER": "user",
    "SNOWFLAKE_PASSWORD": "password",
    "SNOWFLAKE_WAREHOUSE": "warehouse",
    "SNOWFLAKE_ROLE": "role",
    "SNOWFLAKE_DATABASE": "database",
    "SNOWFLAKE_SCHEMA": "schema",
}


@dataclass(frozen=True, kw_only=True)
class ConnectionParams:
    """Credentials and session context used to log in.

    All fields except ``host`` are required. Values are sent as given, empty
    strings included.

    Args:
        account: Account identifier, e.g. ``xy12345.eu-central-1``.
        host: Base URL override. Defaults to
              ``https://{account}.snowflakecomputing.com``.
    """

    account: str
    user: str
    password: str = field(repr=False)
    warehouse: str
    role: str
    database: str
    schema: str
    host: str | None = None

    @property
    def base_url(self) -> str:
        if self.host:
            return self.host.rstrip("/")
        return f"https://{self.account}.snowflakecomputing.com"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConnectionParams":
        """Build parameters from ``SNOWFLAKE_*`` environment variables.

        ``SNOWFLAKE_HOST`` is optional, every other variable must be set
        (an empty value counts as set).

        Raises:
            ConfigurationError: If any required variable is missing.
        """
        env = os.environ if environ is None else environ

        missing = [name for name in ENV_VARS if name not in env]
        if missing:
            raise ConfigurationError(
                f"Missing environment variables: {', '.join(missing)}"
            )

        values = {attr: env[name] for name, attr in ENV_VARS.items()}
        return cls(host=env.get("SNOWFLAKE_HOST") or None, **values)
