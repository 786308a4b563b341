from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import DeserializationError

Row = TypeVar("Row")


@lru_cache(maxsize=128)
def _adapter(row_type: Any) -> TypeAdapter:
    return TypeAdapter(list[row_type])


def deserialize_rowset(rowset: Any, row_type: type[Row] | Any = Any) -> list[Row]:
    """
    Validates a JSON rowset into a list of ``row_type`` values.

    Any type pydantic understands can be used: ``tuple[int, str]`` or a
    NamedTuple for array rows, a TypedDict, dataclass or model for object
    rows, ``Any`` to keep raw JSON values.

    Validation is strict and runs in JSON mode: arrays still become tuples,
    but values are never converted between JSON types. Snowflake's
    string-encoded numbers stay strings, so ``"1"`` does not fit an ``int``
    field.

    Raises:
        DeserializationError: If the rowset does not match ``row_type``.
    """
    try:
        adapter = _adapter(row_type)
    except TypeError:
        # Unhashable row type (e.g. built with typing.Annotated metadata)
        adapter = TypeAdapter(list[row_type])

    try:
        payload = json.dumps(rowset)
    except (TypeError, ValueError) as e:
        raise DeserializationError(
            f"Rowset is not JSON data: {e}", row_type=row_type
        ) from e

    try:
        return adapter.validate_json(payload, strict=True)
    except ValidationError as e:
        raise DeserializationError(
            f"Rowset does not match row type {row_type!r}: "
            f"{e.error_count()} error(s), first: {e.errors()[0]['msg']}",
            row_type=row_type,
        ) from e
