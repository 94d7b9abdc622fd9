"""Catalog structures used to lay out the schema diagram."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ColumnInfo:
    name: str
    type: str
    nullable: bool = False
    default: Any = None


@dataclass
class TableInfo:
    name: str
    columns: list[ColumnInfo] = field(default_factory=list)


@dataclass
class Relationship:
    from_table: str
    from_column: str
    to_table: str
    to_column: str

    @property
    def label(self) -> str:
        return f"{self.from_table}.{self.from_column} → {self.to_table}.{self.to_column}"


@dataclass
class TablePosition:
    x: int
    y: int
    height: int
