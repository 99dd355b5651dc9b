from __future__ import annotations

import math
import re

from .entity import Arc, Block, Entity, Line, Point, Solid, Text, Unknown
from .style import DEFAULT_STYLE, RenderStyle
from .transform import CoordinateTransform

POINT_MARKER_RADIUS = 2
DEFAULT_FONT_SIZE = 10.0
# Characters XML 1.0 does not allow in documents, even escaped.
_XML_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def render_entity(
    entity: Entity,
    transform: CoordinateTransform,
    style: RenderStyle = DEFAULT_STYLE,
) -> str:
    base = entity.base
    color = style.stroke_color(base.pen_color)
    stroke_width = _num(style.stroke_width(base.pen_width))

    if not all(math.isfinite(value) for value in _geometry_values(entity)):
        return f"<!-- Skipped {entity.kind} entity: non-finite geometry -->\n"

    if isinstance(entity, Line):
        x1, y1 = transform.transform_point(entity.start)
        x2, y2 = transform.transform_point(entity.end)
        return (
            f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
            f'stroke="{color}" stroke-width="{stroke_width}"/>\n'
        )

    if isinstance(entity, Arc):
        return _render_arc(entity, transform, color, stroke_width)

    if isinstance(entity, Point):
        x, y = transform.transform_point(entity.position)
        return f'<circle cx="{_num(x)}" cy="{_num(y)}" r="{POINT_MARKER_RADIUS}" fill="{color}"/>\n'

    if isinstance(entity, Text):
        x, y = transform.transform_point(entity.start)
        font_size = abs(entity.size or DEFAULT_FONT_SIZE)
        # Rotation sense is reversed by the Y flip.
        svg_angle = -entity.angle
        return (
            f'<text x="{_num(x)}" y="{_num(y)}" font-size="{_num(font_size)}" '
            f'fill="{style.fill_for_text(base.pen_color)}" '
            f'transform="rotate({_num(svg_angle)}, {_num(x)}, {_num(y)})" '
            f'style="font-family: {style.font_family};">{escape_text(entity.content)}</text>\n'
        )

    if isinstance(entity, Solid):
        points = " ".join(
            f"{_num(x)},{_num(y)}" for x, y in (transform.transform_point(p) for p in entity.corners)
        )
        return f'<polygon points="{points}" fill="{color}" stroke="none"/>\n'

    if isinstance(entity, Block):
        return f"<!-- Block entity: def_number={entity.def_number} -->\n"

    label = entity.kind
    if isinstance(entity, Unknown) and entity.tag:
        label = f"{label} tag={_comment_safe(entity.tag)}"
    return f"<!-- Unhandled entity type: {label} -->\n"


def _render_arc(
    arc: Arc,
    transform: CoordinateTransform,
    color: str,
    stroke_width: str,
) -> str:
    cx, cy = transform.transform_point(arc.center)
    r = abs(arc.radius or 0.0)
    if arc.is_full_circle:
        return (
            f'<circle cx="{_num(cx)}" cy="{_num(cy)}" r="{_num(r)}" fill="none" '
            f'stroke="{color}" stroke-width="{stroke_width}"/>\n'
        )

    # Endpoints are taken around the already flipped center, so sine is negated.
    start = arc.start_angle
    end = arc.end_angle
    x1 = cx + r * math.cos(start)
    y1 = cy - r * math.sin(start)
    x2 = cx + r * math.cos(end)
    y2 = cy - r * math.sin(end)

    large_arc = 1 if abs(math.degrees(arc.arc_angle)) > 180 else 0
    sweep = 0 if arc.arc_angle > 0 else 1
    return (
        f'<path d="M {_num(x1)} {_num(y1)} A {_num(r)} {_num(r)} 0 {large_arc} {sweep} '
        f'{_num(x2)} {_num(y2)}" fill="none" stroke="{color}" stroke-width="{stroke_width}"/>\n'
    )


def escape_text(value: str) -> str:
    value = _XML_INVALID_CHARS.sub("", value)
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _comment_safe(value: str) -> str:
    value = _XML_INVALID_CHARS.sub("", value)
    while "--" in value:
        value = value.replace("--", "- -")
    return value


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(float(value))


_num = format_number


def _geometry_values(entity: Entity) -> list[float]:
    if isinstance(entity, Line):
        return [*entity.start, *entity.end]
    if isinstance(entity, Arc):
        return [*entity.center, entity.radius, entity.start_angle, entity.arc_angle]
    if isinstance(entity, Point):
        return list(entity.position)
    if isinstance(entity, Text):
        return [*entity.start, entity.size, entity.angle]
    if isinstance(entity, Solid):
        return [value for corner in entity.corners for value in corner]
    return []
