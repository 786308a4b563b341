"""Async client for the Snowflake connector login and query endpoints.

Example::

    params = ConnectionParams.from_env()
    async with await SnowflakeClient.login(params) as client:
        rows = await client.query("SELECT 1, 'a'", tuple[str, str])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import TYPE_CHECKING, Any, Generic, Self

import httpx

from . import payloads
from .envelope import parse_envelope
from .errors import IncompleteResultError, ProtocolError, TransportError
from .params import ConnectionParams
from .rows import Row, deserialize_rowset
from .rowtype import ColumnInfo, parse_rowtype

if TYPE_CHECKING:
    import pandas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """Authenticated context: base host URL and session token."""

    host: str
    token: str = field(repr=False)


@dataclass
class QueryResult(Generic[Row]):
    """Rows of a query together with the metadata Snowflake sent with them."""

    rows: list[Row]
    columns: list[ColumnInfo]
    query_id: str | None = None
    total: int | None = None
    returned: int | None = None

    def column_names(self) -> list[str]:
        return [c["name"] for c in self.columns]

    def to_pandas(self) -> "pandas.DataFrame":
        """Return the rows as a DataFrame with the result column names."""
        try:
            import pandas as pd
        except ImportError as e:
            raise ImportError(
                "pandas is required for to_pandas(). "
                "Install it with: 'pip install snowrest[pandas]'"
            ) from e

        names = self.column_names()
        return pd.DataFrame.from_records(self.rows, columns=names or None)


def _is_incomplete(data: dict[str, Any]) -> bool:
    if data.get("chunks"):
        return True
    total, returned = data.get("total"), data.get("returned")
    return isinstance(total, int) and isinstance(returned, int) and total > returned


async def _post(
    http: httpx.AsyncClient,
    operation: str,
    url: str,
    *,
    json: Any,
    headers: dict[str, str],
    timeout: float | None,
) -> httpx.Response:
    try:
        return await http.post(url, json=json, headers=headers, timeout=timeout)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        # RequestError covers network, timeout, decoding and redirect failures
        raise TransportError(f"{operation} request failed: {e!r}") from e


class SnowflakeClient:
    """Handle bound to an authenticated Snowflake session.

    Instances are created by :meth:`login`. One ``httpx.AsyncClient`` is
    shared by all requests; the session is read-only, so concurrent queries
    on one client are safe.
    """

    def __init__(
        self,
        session: Session,
        http_client: httpx.AsyncClient,
        owns_http_client: bool = False,
    ) -> None:
        self._session = session
        self._http = http_client
        self._owns_http = owns_http_client

    @classmethod
    async def login(
        cls,
        params: ConnectionParams,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> Self:
        """Authenticate and return a client bound to the new session.

        Args:
            params: Account, credentials and session context
            http_client: Transport to use. If given, the caller keeps
                ownership and must close it.

        Raises:
            TransportError: Network failure, timeout (120 seconds), undecodable
                response or an account httpx cannot build a URL from
            ApplicationError: Snowflake rejected the login
            ProtocolError: Response has no token
        """
        owns_http = http_client is None
        http = httpx.AsyncClient() if owns_http else http_client

        try:
            logger.debug("Logging in to %s as %s", params.base_url, params.user)
            response = await _post(
                http,
                "login",
                payloads.login_url(params),
                json=payloads.login_body(params),
                headers=payloads.LOGIN_HEADERS,
                timeout=payloads.LOGIN_TIMEOUT,
            )
            data = parse_envelope(response, "login")
            token = data.get("token")
            if not isinstance(token, str):
                raise ProtocolError("login response has no token")
        except BaseException:
            if owns_http:
                await http.aclose()
            raise

        logger.info("Logged in to %s", params.base_url)
        return cls(
            Session(host=params.base_url, token=token),
            http,
            owns_http_client=owns_http,
        )

    @property
    def session(self) -> Session:
        return self._session

    async def execute(
        self,
        sql_text: str,
        row_type: type[Row] | Any = Any,
        *,
        allow_partial: bool = False,
    ) -> QueryResult[Row]:
        """Run a SQL statement and return its rows with result metadata.

        Only the first result chunk is ever read. A chunked result raises
        :class:`IncompleteResultError` unless ``allow_partial`` is set.

        Raises:
            TransportError, ProtocolError, ApplicationError,
            DeserializationError
        """
        request_id = payloads.new_request_id()
        logger.debug("Submitting query requestId=%s", request_id)

        response = await _post(
            self._http,
            "query",
            payloads.query_url(self._session.host, request_id),
            json=payloads.query_body(sql_text),
            headers=payloads.query_headers(self._session.token),
            timeout=None,
        )
        data = parse_envelope(response, "query")

        if "rowset" not in data:
            raise ProtocolError("query response has no rowset")

        total, returned = data.get("total"), data.get("returned")
        if _is_incomplete(data):
            if not allow_partial:
                raise IncompleteResultError(total=total, returned=returned)
            logger.warning(
                "Query %s returned %s of %s rows; remaining chunks are not fetched",
                data.get("queryId"),
                returned,
                total,
            )

        rows = deserialize_rowset(data["rowset"], row_type)
        logger.debug("Query requestId=%s returned %d rows", request_id, len(rows))

        return QueryResult(
            rows=rows,
            columns=parse_rowtype(data.get("rowtype")),
            query_id=data.get("queryId"),
            total=total,
            returned=returned,
        )

    async def query(
        self,
        sql_text: str,
        row_type: type[Row] | Any = Any,
        *,
        allow_partial: bool = False,
    ) -> list[Row]:
        """Run a SQL statement and return its rows as ``row_type`` values."""
        result = await self.execute(sql_text, row_type, allow_partial=allow_partial)
        return result.rows

    async def logout(self) -> None:
        """Delete the session on the server."""
        response = await _post(
            self._http,
            "logout",
            payloads.logout_url(self._session.host),
            json={},
            headers=payloads.query_headers(self._session.token),
            timeout=None,
        )
        # Logout answers with "data": null
        parse_envelope(response, "logout", require_data=False)
        logger.info("Logged out of %s", self._session.host)

    async def aclose(self) -> None:
        """Close the HTTP transport if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()
