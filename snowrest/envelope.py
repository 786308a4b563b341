"""Parsing of the ``{success, data, code, message}`` response envelope."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import ApplicationError, ProtocolError, TransportError

logger = logging.getLogger(__name__)


def _load_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def parse_envelope(
    response: httpx.Response, operation: str, require_data: bool = True
) -> dict[str, Any] | None:
    """Return the ``data`` object of a Snowflake response.

    Args:
        response: Response from a connector endpoint
        operation: Name used in error messages (e.g. ``"login"``)
        require_data: If False, a successful envelope without a data
            object returns None instead of raising

    Raises:
        TransportError: Non-2xx response without a Snowflake envelope
        ProtocolError: 2xx response that is not a valid envelope
        ApplicationError: Envelope with ``success: false``
    """
    body = _load_json(response)
    is_envelope = isinstance(body, dict) and isinstance(body.get("success"), bool)

    if not is_envelope:
        if not response.is_success:
            raise TransportError(
                f"{operation} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        raise ProtocolError(
            f"{operation} response is not a Snowflake envelope "
            f"(content-type {response.headers.get('content-type')!r})"
        )

    if not body["success"]:
        logger.debug(
            "%s rejected: code=%s status=%s",
            operation,
            body.get("code"),
            response.status_code,
        )
        raise ApplicationError(
            operation=operation,
            code=body.get("code"),
            message=body.get("message"),
            data=body.get("data"),
            status_code=response.status_code,
        )

    data = body.get("data")
    if not isinstance(data, dict):
        if not require_data:
            return None
        raise ProtocolError(f"{operation} response has no data object")
    return data
