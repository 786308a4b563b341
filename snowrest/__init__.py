"""snowrest - minimal async client for Snowflake's HTTP SQL interface.

Modules:
    client: Login and query round trips (SnowflakeClient, Session)
    params: Connection parameters and environment configuration
    payloads: Request URLs, bodies and headers
    envelope: Response envelope parsing
    rows: Rowset deserialization into caller-supplied row types
    rowtype: Result column metadata
    errors: Exception hierarchy
"""

from .client import QueryResult, Session, SnowflakeClient
from .errors import (
    ApplicationError,
    ConfigurationError,
    DeserializationError,
    IncompleteResultError,
    ProtocolError,
    SnowrestError,
    TransportError,
)
from .params import ConnectionParams
from .rows import deserialize_rowset
from .rowtype import ColumnInfo, parse_rowtype

__all__ = [
    # Client
    "SnowflakeClient",
    "Session",
    "QueryResult",
    "ConnectionParams",
    # Rows
    "ColumnInfo",
    "deserialize_rowset",
    "parse_rowtype",
    # Errors
    "SnowrestError",
    "ConfigurationError",
    "TransportError",
    "ProtocolError",
    "IncompleteResultError",
    "ApplicationError",
    "DeserializationError",
]
