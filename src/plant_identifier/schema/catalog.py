from __future__ import annotations

import logging
from typing import Any, Iterable

import databricks.sql

from ..auth import TokenProvider
from ..config import ConnectionConfig
from ..logging_utils import log_extra
from .models import ColumnInfo, Relationship, TableInfo

log = logging.getLogger(__name__)

COLUMNS_SQL = (
    "SELECT table_name, column_name, data_type, character_maximum_length, "
    "is_nullable, column_default "
    "FROM information_schema.columns "
    "WHERE table_schema = ? "
    "ORDER BY table_name, ordinal_position"
)

FOREIGN_KEYS_SQL = (
    "SELECT tc.table_name AS from_table, kcu.column_name AS from_column, "
    "ccu.table_name AS to_table, ccu.column_name AS to_column "
    "FROM information_schema.table_constraints AS tc "
    "JOIN information_schema.key_column_usage AS kcu "
    "ON tc.constraint_name = kcu.constraint_name AND tc.table_schema = kcu.table_schema "
    "JOIN information_schema.constraint_column_usage AS ccu "
    "ON ccu.constraint_name = tc.constraint_name AND ccu.table_schema = tc.table_schema "
    "WHERE tc.constraint_type = 'FOREIGN KEY' AND tc.table_schema = ?"
)


def connect(connection: ConnectionConfig, token_provider: TokenProvider) -> Any:
    """Open a DB-API connection to the configured warehouse."""
    return databricks.sql.connect(
        server_hostname=connection.host,
        http_path=connection.http_path,
        access_token=token_provider.get_token(),
        catalog=connection.catalog,
        schema=connection.schema,
    )


def _query(connection: Any, sql: str, params: Iterable[Any]) -> list[dict[str, Any]]:
    with connection.cursor() as cursor:
        cursor.execute(sql, list(params))
        rows_raw = cursor.fetchall()
        description = cursor.description or []
    columns = [col[0] for col in description]
    return [dict(zip(columns, row)) for row in rows_raw]


def format_column_type(row: dict[str, Any]) -> str:
    column_type = str(row.get("data_type") or "")
    length = row.get("character_maximum_length")
    if length:
        column_type += f"({length})"
    return column_type


def read_tables(connection: Any, schema: str) -> dict[str, TableInfo]:
    """Read every table of a schema with its columns in ordinal order.

    Tables keep the order in which the catalog returns them.
    """
    tables: dict[str, TableInfo] = {}
    for row in _query(connection, COLUMNS_SQL, (schema,)):
        table_name = row["table_name"]
        table = tables.setdefault(table_name, TableInfo(name=table_name))
        table.columns.append(
            ColumnInfo(
                name=row["column_name"],
                type=format_column_type(row),
                nullable=row.get("is_nullable") == "YES",
                default=row.get("column_default"),
            )
        )
    log.info("Read catalog columns", extra=log_extra(schema=schema, tables=len(tables)))
    return tables


def read_relationships(connection: Any, schema: str) -> list[Relationship]:
    relationships = [
        Relationship(
            from_table=row["from_table"],
            from_column=row["from_column"],
            to_table=row["to_table"],
            to_column=row["to_column"],
        )
        for row in _query(connection, FOREIGN_KEYS_SQL, (schema,))
    ]
    log.info(
        "Read catalog foreign keys",
        extra=log_extra(schema=schema, relationships=len(relationships)),
    )
    return relationships
