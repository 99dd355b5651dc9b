from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from .entity import Arc, BaseAttributes, Block, Entity, Line, Point, Solid, Text, Unknown

_WRAPPER_PREFIX = "_"
INVALID_LAYER = -1


def unwrap_entity(record: Any) -> Any:
    """Return the payload of a parser enum wrapper such as ``{"_0": {...}}``.

    Records without a ``_``-prefixed key are returned unchanged so that
    already-unwrapped payloads decode the same way.
    """
    if not isinstance(record, Mapping):
        return record
    for key in record:
        if isinstance(key, str) and key.startswith(_WRAPPER_PREFIX):
            return record[key]
    return record


def _wrapper_tag(record: Any) -> str | None:
    if not isinstance(record, Mapping):
        return None
    for key in record:
        if isinstance(key, str) and key.startswith(_WRAPPER_PREFIX):
            return key
    return None


def classify(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return "Unknown"
    # Text payloads can carry start/end fields too, so the order matters.
    if "start_x" in payload and "end_x" in payload and "center_x" not in payload:
        return "Line"
    if "center_x" in payload and "radius" in payload:
        return "Arc"
    if "x" in payload and "y" in payload and "start_x" not in payload and "content" not in payload:
        return "Point"
    if "content" in payload:
        return "Text"
    if "point1_x" in payload:
        return "Solid"
    if "def_number" in payload:
        return "Block"
    return "Unknown"


def decode_entity(record: Any) -> Entity:
    payload = unwrap_entity(record)
    kind = classify(payload)
    if kind == "Unknown":
        fields: tuple[str, ...] = ()
        if isinstance(payload, Mapping):
            fields = tuple(sorted(str(key) for key in payload))
        return Unknown(
            tag=_wrapper_tag(record),
            fields=fields,
            base=_base_attributes(payload),
        )

    base = _base_attributes(payload)
    if kind == "Line":
        return Line(
            start=_point(payload, "start_x", "start_y"),
            end=_point(payload, "end_x", "end_y"),
            base=base,
        )
    if kind == "Arc":
        return Arc(
            center=_point(payload, "center_x", "center_y"),
            radius=_float(payload.get("radius")),
            start_angle=_float(payload.get("start_angle")),
            arc_angle=_float(payload.get("arc_angle")),
            is_full_circle=bool(payload.get("is_full_circle", False)),
            base=base,
        )
    if kind == "Point":
        return Point(position=_point(payload, "x", "y"), base=base)
    if kind == "Text":
        end = None
        if "end_x" in payload or "end_y" in payload:
            end = _point(payload, "end_x", "end_y")
        content = payload.get("content")
        return Text(
            start=_point(payload, "start_x", "start_y"),
            content="" if content is None else str(content),
            size=_float(payload.get("size_y")),
            angle=_float(payload.get("angle")),
            end=end,
            base=base,
        )
    if kind == "Solid":
        return Solid(
            corners=(
                _point(payload, "point1_x", "point1_y"),
                _point(payload, "point2_x", "point2_y"),
                _point(payload, "point3_x", "point3_y"),
                _point(payload, "point4_x", "point4_y"),
            ),
            base=base,
        )
    return Block(def_number=_int(payload.get("def_number"), 0), base=base)


def decode_entities(records: Iterable[Any]) -> list[Entity]:
    return [decode_entity(record) for record in records]


def _base_attributes(payload: Any) -> BaseAttributes:
    if not isinstance(payload, Mapping):
        return BaseAttributes()
    base = payload.get("base")
    if not isinstance(base, Mapping):
        return BaseAttributes()
    return BaseAttributes(
        layer=_layer(base.get("layer")),
        pen_color=_int(base.get("pen_color"), 1),
        pen_width=_float(base.get("pen_width"), 1.0),
    )


def _point(payload: Mapping[str, Any], x_key: str, y_key: str) -> tuple[float, float]:
    return (_float(payload.get(x_key)), _float(payload.get(y_key)))


def _float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result):
        return default
    return result


def _layer(value: Any) -> int:
    if value is None:
        return 0
    # Layer indices that name no bucket are kept out of range.
    if isinstance(value, bool):
        return INVALID_LAYER
    try:
        number = float(value)
    except (TypeError, ValueError):
        return INVALID_LAYER
    if not math.isfinite(number) or not number.is_integer():
        return INVALID_LAYER
    return int(number)


def _int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default
