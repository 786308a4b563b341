"""Exception types raised by the snowrest client.

Every failure reaches the caller of ``login``/``query`` as one of these:

- TransportError: the HTTP exchange itself failed (network, timeout, TLS,
  or a non-2xx answer that is not a Snowflake envelope)
- ProtocolError: a 2xx answer that is not the expected envelope
- ApplicationError: a well-formed envelope with ``success: false``
- DeserializationError: the rowset does not fit the requested row type
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class SnowrestError(Exception):
    """Base class for all snowrest errors."""


class ConfigurationError(SnowrestError, ValueError):
    """Raised when connection parameters cannot be assembled from config."""


class TransportError(SnowrestError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProtocolError(SnowrestError):
    """Raised when a response body does not have the expected shape."""


class IncompleteResultError(ProtocolError):
    """Raised when the server returned only the first chunk of a result."""

    def __init__(self, total: int | None, returned: int | None) -> None:
        super().__init__(
            f"Result is split into chunks ({returned} of {total} rows returned); "
            "chunk download is not supported"
        )
        self.total = total
        self.returned = returned

    def __reduce__(self):
        return (self.__class__, (self.total, self.returned))


@dataclass
class ApplicationError(SnowrestError):
    """Raised when Snowflake answers with ``success: false``.

    ``code``, ``message`` and ``data`` are passed through from the response
    exactly as received.
    """

    operation: str
    code: str | None = None
    message: str | None = None
    data: Any = None
    status_code: int | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.operation} failed: [{self.code}] {self.message}"

    def __reduce__(self):
        # Dataclass __init__ leaves Exception.args empty
        return (
            self.__class__,
            (self.operation, self.code, self.message, self.data, self.status_code),
        )


class DeserializationError(SnowrestError):
    """Raised when the rowset cannot be validated into the requested row type."""

    def __init__(self, message: str, row_type: Any = None) -> None:
        super().__init__(message)
        self.row_type = row_type
