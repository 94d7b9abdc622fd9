import xml.etree.ElementTree as ET

from plant_identifier.schema.models import ColumnInfo, Relationship, TableInfo, TablePosition
from plant_identifier.schema.svg import format_coordinate, layout_tables, render_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def make_table(name: str, column_count: int) -> TableInfo:
    return TableInfo(
        name=name,
        columns=[ColumnInfo(name=f"col{i}", type="integer") for i in range(column_count)],
    )


def test_empty_schema_renders_empty_canvas() -> None:
    svg = render_svg({}, [])

    root = ET.fromstring(svg)
    assert root.tag == f"{SVG_NS}svg"
    assert root.attrib["width"] == "3000"
    assert root.attrib["height"] == "2000"
    assert list(root) == []


def test_two_tables_with_foreign_key() -> None:
    tables = {
        "A": TableInfo(
            name="A",
            columns=[
                ColumnInfo(name="id", type="integer"),
                ColumnInfo(name="b_id", type="integer"),
                ColumnInfo(name="title", type="character varying(255)", nullable=True),
            ],
        ),
        "B": TableInfo(name="B", columns=[ColumnInfo(name="id", type="integer")]),
    }
    relationships = [Relationship("A", "b_id", "B", "id")]

    positions = layout_tables(tables)
    assert positions == {
        "A": TablePosition(x=50, y=50, height=90),
        "B": TablePosition(x=350, y=50, height=50),
    }

    svg = render_svg(tables, relationships)
    root = ET.fromstring(svg)
    lines = root.findall(f"{SVG_NS}line")
    assert len(lines) == 1
    assert lines[0].attrib == {
        "x1": "300",
        "y1": "65",
        "x2": "350",
        "y2": "65",
        "stroke": "#2c3e50",
        "stroke-width": "2",
    }

    texts = [t.text for t in root.findall(f"{SVG_NS}text")]
    assert "A.b_id → B.id" in texts
    assert "title: character varying(255) (nullable)" in texts
    assert "id: integer" in texts

    label = root.findall(f"{SVG_NS}text")[-1]
    assert label.attrib["x"] == "325"
    assert label.attrib["y"] == "60"

    # one header plus one row rect per column
    assert len(root.findall(f"{SVG_NS}rect")) == (1 + 3) + (1 + 1)


def test_rows_alternate_fill() -> None:
    root = ET.fromstring(render_svg({"t": make_table("t", 3)}, []))
    fills = [r.attrib["fill"] for r in root.findall(f"{SVG_NS}rect")]
    assert fills == ["#4a69bd", "#f1f2f6", "#dfe4ea", "#f1f2f6"]


def test_layout_wraps_after_row_is_full() -> None:
    tables = {f"t{i}": make_table(f"t{i}", 1) for i in range(10)}
    tables["t4"] = make_table("t4", 5)

    positions = layout_tables(tables)

    assert [positions[f"t{i}"].x for i in range(9)] == [50 + 300 * i for i in range(9)]
    assert all(positions[f"t{i}"].y == 50 for i in range(9))
    # tallest table in the first row is 30 + 5 * 20 = 130
    assert positions["t9"] == TablePosition(x=50, y=50 + 130 + 50, height=50)


def test_relationship_to_unknown_table_is_skipped() -> None:
    svg = render_svg({"a": make_table("a", 1)}, [Relationship("a", "x_id", "x", "id")])
    assert "<line" not in svg


def test_names_are_escaped() -> None:
    svg = render_svg({"a&b": make_table("a&b", 1)}, [])
    root = ET.fromstring(svg)
    assert root.findall(f"{SVG_NS}text")[0].text == "a&b"
    assert "a&amp;b" in svg


def test_format_coordinate_keeps_full_precision() -> None:
    assert format_coordinate(325.0) == "325"
    assert format_coordinate(123456.5) == "123456.5"
    assert format_coordinate(1234567.0) == "1234567"


def test_label_position_on_deep_rows() -> None:
    source = TableInfo(name="a", columns=[])
    target = TableInfo(name="b", columns=[])
    rel = Relationship("a", "b_id", "b", "id")
    tables = {"a": source, "b": target}

    svg = render_svg(tables, [rel], canvas_width=400)

    # narrow canvas: one table per row, rows 30 + 50 apart
    label = ET.fromstring(svg).findall(f"{SVG_NS}text")[-1]
    assert label.attrib == {"x": "175", "y": "100", "font-size": "10", "fill": "#2c3e50"}
