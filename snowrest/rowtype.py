from typing import Any, Optional, TypedDict

from .errors import ProtocolError


class ColumnInfo(TypedDict):
    """Represents metadata for a result column as returned by Snowflake."""

    name: str
    database: str
    schema: str
    table: str
    nullable: bool
    type: str
    byteLength: Optional[int]
    length: Optional[int]
    scale: Optional[int]
    precision: Optional[int]
    collation: Optional[str]


def parse_rowtype(raw: Any) -> list[ColumnInfo]:
    """
    Convert the ``rowtype`` array of a query response to column metadata.

    Args:
        raw: Value of ``data.rowtype``. ``None`` means no metadata was sent.

    Returns:
        list[ColumnInfo]: One entry per result column, in result order.

    Raises:
        ProtocolError: If ``raw`` is not a list of objects.
    """
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(c, dict) for c in raw):
        raise ProtocolError("Query response rowtype is not a list of objects")

    def as_column_info(column: dict[str, Any]) -> ColumnInfo:
        nullable = column.get("nullable")
        return {
            "name": str(column.get("name", "")),
            "database": column.get("database") or "",
            "schema": column.get("schema") or "",
            "table": column.get("table") or "",
            "nullable": True if nullable is None else bool(nullable),
            "type": str(column.get("type", "")).lower(),
            "byteLength": column.get("byteLength"),
            "length": column.get("length"),
            "scale": column.get("scale"),
            "precision": column.get("precision"),
            "collation": column.get("collation"),
        }

    return [as_column_info(column) for column in raw]
