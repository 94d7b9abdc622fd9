"""Database schema introspection and SVG diagram rendering."""

from .catalog import read_relationships, read_tables
from .models import ColumnInfo, Relationship, TableInfo, TablePosition
from .svg import layout_tables, render_svg

__all__ = [
    "ColumnInfo",
    "Relationship",
    "TableInfo",
    "TablePosition",
    "layout_tables",
    "read_relationships",
    "read_tables",
    "render_svg",
]
