from __future__ import annotations

import logging
import math
from pathlib import Path

from jwwsvg.bounds import DEFAULT_BOUNDS
from jwwsvg.drawing import render_drawing
from jwwsvg.entity import BaseAttributes, Line
from jwwsvg.style import get_theme
from tests._jww_helpers import (
    arc_record,
    block_record,
    line_record,
    parse_svg,
    point_record,
    solid_record,
    svg_children,
    svg_layer_groups,
    text_record,
    wrap,
)


def test_single_line_round_trip() -> None:
    entities = [
        {
            "_0": {
                "start_x": 0,
                "start_y": 0,
                "end_x": 10,
                "end_y": 0,
                "base": {"layer": 0, "pen_color": 2, "pen_width": 2},
            }
        }
    ]
    result = render_drawing(entities)

    groups = svg_layer_groups(result.document)
    assert len(groups) == 1
    assert groups[0].get("id") == "layer-0"
    assert groups[0].get("data-layer") == "0"
    assert groups[0].get("class") == "jww-layer"

    lines = svg_children(groups[0], "line")
    assert len(lines) == 1
    line = lines[0]
    assert line.get("stroke") == "#ff0000"
    assert line.get("stroke-width") == "1"
    assert line.get("y1") == line.get("y2")

    assert [layer.id for layer in result.layers] == [0]
    assert result.layer_counts() == {0: 1}


def test_document_header_and_view_window() -> None:
    result = render_drawing([line_record(0, 0, 10, 0)])
    document = result.document

    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    assert document.endswith("</svg>")
    root = parse_svg(document)
    assert root.get("viewBox") == "-20 -20 50 40"

    rect = root[0]
    assert rect.tag.endswith("rect")
    assert rect.get("x") == "-20"
    assert rect.get("y") == "-20"
    assert rect.get("width") == "50"
    assert rect.get("height") == "40"
    assert rect.get("fill") == "white"


def test_empty_drawing_uses_default_window() -> None:
    result = render_drawing({"entities": []})

    assert result.bounds == DEFAULT_BOUNDS
    assert result.layers == []
    assert result.entity_count == 0
    assert parse_svg(result.document).get("viewBox") == "-20 -20 440 340"
    assert svg_layer_groups(result.document) == []


def test_mapping_without_entities_renders_empty_document() -> None:
    result = render_drawing({"entity_counts": {"lines": 3}})
    assert result.entity_count == 0
    assert result.bounds == DEFAULT_BOUNDS


def test_vertical_flip_puts_high_y_on_top() -> None:
    result = render_drawing([line_record(0, 0, 0, 100)])
    line = svg_children(svg_layer_groups(result.document)[0], "line")[0]
    assert line.get("y1") == "100"
    assert line.get("y2") == "0"
    assert parse_svg(result.document).get("viewBox") == "-20 -20 40 140"


def test_layers_are_emitted_in_id_order() -> None:
    result = render_drawing(
        [
            line_record(0, 0, 1, 1, layer=3),
            point_record(5, 5, layer=1),
            line_record(2, 2, 3, 3, layer=3),
        ]
    )
    groups = svg_layer_groups(result.document)
    assert [group.get("id") for group in groups] == ["layer-1", "layer-3"]
    assert len(svg_children(groups[1], "line")) == 2
    assert result.layer_counts() == {1: 1, 3: 2}


def test_out_of_range_layer_is_excluded_but_counted() -> None:
    result = render_drawing(
        [
            line_record(0, 0, 10, 10),
            line_record(500, 500, 600, 600, layer=20),
        ]
    )
    assert result.entity_count == 2
    assert result.layer_counts() == {0: 1}
    for group in svg_layer_groups(result.document):
        for line in svg_children(group, "line"):
            assert line.get("x1") != "500"
    # Bounds are computed before grouping, so the dropped line still widens them.
    assert result.bounds.max_x == 600


def test_unknown_record_renders_comment_only() -> None:
    result = render_drawing([wrap({"image_path": "a.bmp"})])
    groups = svg_layer_groups(result.document)
    assert len(groups) == 1
    assert list(groups[0]) == []
    assert "<!-- Unhandled entity type: Unknown tag=_0 -->" in result.document


def test_every_entity_type_renders_into_well_formed_document() -> None:
    result = render_drawing(
        [
            line_record(0, 0, 10, 0),
            arc_record(100, 100, 50, full=True),
            arc_record(50, 50, 10, start_angle=0.0, arc_angle=1.0),
            point_record(3, 4),
            text_record(5, 5, "R&D <draft>", size=-14, angle=15),
            solid_record([(0, 0), (10, 0), (10, 10), (0, 10)]),
            block_record(4),
            wrap({"mystery": True}),
        ]
    )
    group = svg_layer_groups(result.document)[0]
    tags = [child.tag.rsplit("}", 1)[-1] for child in group]
    assert tags == ["line", "circle", "path", "circle", "text", "polygon"]
    text = svg_children(group, "text")[0]
    assert text.text == "R&D <draft>"
    assert text.get("font-size") == "14"
    assert "<!-- Block entity: def_number=4 -->" in result.document


def test_render_accepts_decoded_entities() -> None:
    line = Line(start=(0.0, 0.0), end=(10.0, 0.0), base=BaseAttributes(pen_color=2, pen_width=2))
    record = line_record(0, 0, 10, 0, pen_color=2, pen_width=2)
    assert render_drawing([line]).document == render_drawing([record]).document


def test_render_is_idempotent() -> None:
    data = {
        "entities": [
            line_record(0, 0, 10, 5, layer=2),
            arc_record(3, 3, 1.5, start_angle=0.2, arc_angle=-2.0),
            text_record(1, 1, "A", size=3),
        ]
    }
    first = render_drawing(data).document
    second = render_drawing(data).document
    assert first == second


def test_theme_sets_background() -> None:
    result = render_drawing([line_record(0, 0, 1, 1)], style=get_theme("system"))
    assert parse_svg(result.document)[0].get("fill") == "#000000"


def test_custom_padding_changes_view_window() -> None:
    result = render_drawing([line_record(0, 0, 10, 0)], padding=5)
    assert parse_svg(result.document).get("viewBox") == "-5 -5 20 10"


def test_solids_can_be_folded_into_bounds() -> None:
    records = [solid_record([(0, 0), (1000, 0), (1000, 500), (0, 500)])]
    assert render_drawing(records).bounds == DEFAULT_BOUNDS
    bounds = render_drawing(records, include_solids_in_bounds=True).bounds
    assert (bounds.max_x, bounds.max_y) == (1000.0, 500.0)


def test_render_logs_entity_count(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="jwwsvg.drawing"):
        render_drawing([line_record(0, 0, 1, 1, layer=4)])
    assert "rendering drawing: 1 entities" in caplog.text
    assert "layers: 4:1" in caplog.text


def test_write_saves_document(tmp_path: Path) -> None:
    result = render_drawing([line_record(0, 0, 1, 1)])
    out = result.write(tmp_path / "out" / "drawing.svg")
    assert out.read_text(encoding="utf-8") == result.document


def test_text_control_characters_keep_document_well_formed() -> None:
    result = render_drawing([text_record(0, 0, "A\x0cB\x00C\x1f")])
    group = svg_layer_groups(result.document)[0]
    assert svg_children(group, "text")[0].text == "ABC"


def test_non_finite_entity_renders_comment_only() -> None:
    result = render_drawing([line_record(0, 0, 10, 10), line_record(0, math.inf, 1, 1)])
    group = svg_layer_groups(result.document)[0]
    assert len(svg_children(group, "line")) == 1
    assert "<!-- Skipped Line entity: non-finite geometry -->" in result.document
    assert "=\"inf\"" not in result.document
