import argparse
import asyncio
import json
import logging
import sys

from .client import SnowflakeClient
from .errors import ConfigurationError, IncompleteResultError, SnowrestError
from .params import ConnectionParams

logger = logging.getLogger("snowrest.cli")


async def run_query(params: ConnectionParams, sql_text: str, allow_partial: bool) -> list:
    async with await SnowflakeClient.login(params) as client:
        return await client.query(sql_text, allow_partial=allow_partial)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run a SQL statement against Snowflake and print rows as JSON lines. "
        "Connection settings are read from SNOWFLAKE_* environment variables."
    )

    parser.add_argument("sql", type=str, help="SQL statement to execute")

    parser.add_argument(
        "--allow-partial",
        action="store_true",
        help="Print the first chunk of a chunked result instead of failing (default: False)",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (default: False)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        params = ConnectionParams.from_env()
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2

    try:
        rows = asyncio.run(run_query(params, args.sql, args.allow_partial))
    except IncompleteResultError as e:
        logger.error("%s (rerun with --allow-partial to print the first chunk)", e)
        return 1
    except SnowrestError as e:
        logger.error("%s", e)
        return 1

    for row in rows:
        sys.stdout.write(json.dumps(row, default=str) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
