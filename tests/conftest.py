import threading
from time import sleep
from typing import AsyncIterator, Callable, Iterator

import httpx
import pytest
import pytest_asyncio
from fake_snowflake import FakeSnowflake

from snowrest import ConnectionParams, SnowflakeClient

# Conditional import for the live server test (optional dependency)
try:
    import uvicorn

    HAS_SERVER_DEPS = True
except ImportError:
    HAS_SERVER_DEPS = False


@pytest.fixture
def params() -> ConnectionParams:
    return ConnectionParams(
        account="snowrest",
        user="smow",
        password="duck",
        warehouse="test_warehouse",
        role="test_role",
        database="test_db",
        schema="test_schema",
    )


@pytest.fixture
def fake() -> FakeSnowflake:
    """A fresh fake Snowflake per test."""
    return FakeSnowflake()


@pytest_asyncio.fixture
async def http_client(fake: FakeSnowflake) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client routed to the fake app in-process."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=fake.app)) as client:
        yield client


@pytest_asyncio.fixture
async def client(
    params: ConnectionParams, http_client: httpx.AsyncClient
) -> AsyncIterator[SnowflakeClient]:
    async with await SnowflakeClient.login(params, http_client=http_client) as client:
        yield client


@pytest.fixture(scope="session")
def server(unused_tcp_port_factory: Callable[[], int]) -> Iterator[dict]:
    """Serve a fake Snowflake over HTTP for the session and provide its details."""
    if not HAS_SERVER_DEPS:
        pytest.skip("Server dependency (uvicorn) not installed")

    fake = FakeSnowflake(rowset=[["1", "hello world"]])
    port = unused_tcp_port_factory()
    config = uvicorn.Config(fake.app, port=port, log_level="error")
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="Server", daemon=True)

    thread.start()

    # Wait until the server is fully started
    while not server.started:
        sleep(0.1)

    yield {"host": f"http://127.0.0.1:{port}", "fake": fake}

    # Graceful shutdown
    server.should_exit = True
    thread.join()
