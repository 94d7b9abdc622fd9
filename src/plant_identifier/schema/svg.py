"""Grid layout and SVG rendering of a database schema.

Tables are placed left to right in fixed-width cells, wrapping to a new row
once the next cell would not fit on the canvas. Foreign keys are drawn as
straight lines from the right edge of the source table to the left edge of
the target table; lines are not routed around other tables.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping
from xml.sax.saxutils import escape

from ..logging_utils import log_extra
from .models import Relationship, TableInfo, TablePosition

log = logging.getLogger(__name__)

CANVAS_WIDTH = 3000
CANVAS_HEIGHT = 2000
ORIGIN_X = 50
ORIGIN_Y = 50
COLUMN_STEP = 300
ROW_MARGIN = 50
TABLE_WIDTH = 250
HEADER_HEIGHT = 30
ROW_HEIGHT = 20
LINK_OFFSET = 15

HEADER_FILL = "#4a69bd"
ROW_FILLS = ("#f1f2f6", "#dfe4ea")
LINK_COLOR = "#2c3e50"


def format_coordinate(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)


def table_height(table: TableInfo) -> int:
    return HEADER_HEIGHT + ROW_HEIGHT * len(table.columns)


def layout_tables(
    tables: Mapping[str, TableInfo], canvas_width: int = CANVAS_WIDTH
) -> dict[str, TablePosition]:
    positions: dict[str, TablePosition] = {}
    x, y = ORIGIN_X, ORIGIN_Y
    max_height = 0

    for name, table in tables.items():
        height = table_height(table)
        positions[name] = TablePosition(x=x, y=y, height=height)
        max_height = max(max_height, height)

        x += COLUMN_STEP
        if x > canvas_width - COLUMN_STEP:
            x = ORIGIN_X
            y += max_height + ROW_MARGIN
            max_height = 0

    return positions


def _table_elements(table: TableInfo, pos: TablePosition) -> list[str]:
    elements = [
        f"<rect x='{pos.x}' y='{pos.y}' width='{TABLE_WIDTH}' height='{HEADER_HEIGHT}' "
        f"fill='{HEADER_FILL}' />",
        f"<text x='{pos.x + 5}' y='{pos.y + 20}' fill='white' font-weight='bold'>"
        f"{escape(table.name)}</text>",
    ]
    for index, column in enumerate(table.columns):
        y = pos.y + HEADER_HEIGHT + index * ROW_HEIGHT
        label = f"{column.name}: {column.type}"
        if column.nullable:
            label += " (nullable)"
        elements.append(
            f"<rect x='{pos.x}' y='{y}' width='{TABLE_WIDTH}' height='{ROW_HEIGHT}' "
            f"fill='{ROW_FILLS[index % 2]}' />"
        )
        elements.append(
            f"<text x='{pos.x + 5}' y='{y + 15}' font-size='12'>{escape(label)}</text>"
        )
    return elements


def _relationship_elements(
    rel: Relationship, source: TablePosition, target: TablePosition
) -> list[str]:
    start_x = source.x + TABLE_WIDTH
    start_y = source.y + LINK_OFFSET
    end_x = target.x
    end_y = target.y + LINK_OFFSET
    label_x = format_coordinate((start_x + end_x) / 2)
    label_y = format_coordinate((start_y + end_y) / 2 - 5)
    return [
        f"<line x1='{start_x}' y1='{start_y}' x2='{end_x}' y2='{end_y}' "
        f"stroke='{LINK_COLOR}' stroke-width='2' />",
        f"<text x='{label_x}' y='{label_y}' "
        f"font-size='10' fill='{LINK_COLOR}'>{escape(rel.label)}</text>",
    ]


def render_svg(
    tables: Mapping[str, TableInfo],
    relationships: Iterable[Relationship],
    canvas_width: int = CANVAS_WIDTH,
    canvas_height: int = CANVAS_HEIGHT,
) -> str:
    positions = layout_tables(tables, canvas_width)
    parts = [
        f"<svg xmlns='http://www.w3.org/2000/svg' width='{canvas_width}' height='{canvas_height}'>"
    ]

    for name, table in tables.items():
        parts.extend(_table_elements(table, positions[name]))

    for rel in relationships:
        source = positions.get(rel.from_table)
        target = positions.get(rel.to_table)
        if source is None or target is None:
            log.warning(
                "Skipping relationship to unknown table",
                extra=log_extra(relationship=rel.label),
            )
            continue
        parts.extend(_relationship_elements(rel, source, target))

    parts.append("</svg>")
    return "".join(parts)
