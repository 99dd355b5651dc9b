from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from .document import JwwDrawing, load
from .drawing import coerce_entities
from .entity import Arc, Entity, Line, Point, Solid, Text
from .style import DEFAULT_STYLE, RenderStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertResult:
    source_path: str
    output_path: str
    total_entities: int
    written_entities: int
    skipped_entities: int
    skipped_by_type: dict[str, int]


def to_dxf(
    source: str | Path | JwwDrawing | Mapping[str, Any] | Iterable[Any],
    output_path: str,
    *,
    dxf_version: str = "R2010",
    strict: bool = False,
    style: RenderStyle = DEFAULT_STYLE,
) -> ConvertResult:
    ezdxf = _require_ezdxf()
    source_path, entities = _resolve_entities(source)

    dxf_doc = ezdxf.new(dxfversion=dxf_version)
    modelspace = dxf_doc.modelspace()

    total = 0
    written = 0
    skipped_by_type: dict[str, int] = {}

    for entity in entities:
        total += 1
        layer_name = str(entity.base.layer)
        if layer_name not in dxf_doc.layers:
            dxf_doc.layers.add(layer_name)
        if _write_entity_to_modelspace(modelspace, entity, style, layer_name):
            written += 1
            continue
        skipped_by_type[entity.kind] = skipped_by_type.get(entity.kind, 0) + 1

    skipped = total - written
    if strict and skipped > 0:
        summary = ", ".join(f"{kind}:{count}" for kind, count in sorted(skipped_by_type.items()))
        raise ValueError(f"failed to convert {skipped} entities ({summary})")

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    dxf_doc.saveas(str(out_path))
    logger.debug("wrote %d of %d entities to %s", written, total, out_path)

    return ConvertResult(
        source_path=source_path,
        output_path=str(out_path),
        total_entities=total,
        written_entities=written,
        skipped_entities=skipped,
        skipped_by_type=dict(sorted(skipped_by_type.items())),
    )


def _require_ezdxf():
    try:
        import ezdxf
    except Exception as exc:
        raise ImportError(
            "ezdxf is required for JWW->DXF conversion. "
            'Install it with `pip install "jwwsvg[dxf]"`.'
        ) from exc
    return ezdxf


def _resolve_entities(
    source: str | Path | JwwDrawing | Mapping[str, Any] | Iterable[Any],
) -> tuple[str, list[Entity]]:
    if isinstance(source, JwwDrawing):
        return source.path or "<memory>", source.decoded_entities()
    if isinstance(source, (str, Path)):
        drawing = load(source)
        return str(source), drawing.decoded_entities()
    return "<memory>", coerce_entities(source)


def _write_entity_to_modelspace(
    modelspace: Any,
    entity: Entity,
    style: RenderStyle,
    layer_name: str,
) -> bool:
    try:
        return _write_entity_to_modelspace_unsafe(modelspace, entity, style, layer_name)
    except Exception:
        logger.debug("failed to write %s entity", entity.kind, exc_info=True)
        return False


def _write_entity_to_modelspace_unsafe(
    modelspace: Any,
    entity: Entity,
    style: RenderStyle,
    layer_name: str,
) -> bool:
    dxfattribs = _entity_dxfattribs(entity, style, layer_name)

    if isinstance(entity, Line):
        modelspace.add_line(_point3(entity.start), _point3(entity.end), dxfattribs=dxfattribs)
        return True

    if isinstance(entity, Point):
        modelspace.add_point(_point3(entity.position), dxfattribs=dxfattribs)
        return True

    if isinstance(entity, Arc):
        if entity.is_full_circle:
            modelspace.add_circle(
                _point3(entity.center),
                abs(float(entity.radius)),
                dxfattribs=dxfattribs,
            )
            return True
        start_deg = math.degrees(entity.start_angle)
        end_deg = math.degrees(entity.end_angle)
        # DXF arcs always run counter-clockwise.
        if entity.arc_angle < 0:
            start_deg, end_deg = end_deg, start_deg
        modelspace.add_arc(
            _point3(entity.center),
            abs(float(entity.radius)),
            start_deg,
            end_deg,
            dxfattribs=dxfattribs,
        )
        return True

    if isinstance(entity, Text):
        return _write_text(modelspace, entity, dxfattribs)

    if isinstance(entity, Solid):
        p1, p2, p3, p4 = (_point3(corner) for corner in entity.corners)
        # DXF SOLID vertices are stored in 1-2-4-3 drawing order.
        modelspace.add_solid([p1, p2, p4, p3], dxfattribs=dxfattribs)
        return True

    return False


def _write_text(modelspace: Any, entity: Text, dxfattribs: dict[str, Any]) -> bool:
    if entity.content == "":
        return False
    height = abs(entity.size) if entity.size else None
    text_entity = modelspace.add_text(
        entity.content,
        height=height,
        rotation=float(entity.angle),
        dxfattribs=dxfattribs,
    )
    text_entity.dxf.insert = _point3(entity.start)
    return True


def _entity_dxfattribs(entity: Entity, style: RenderStyle, layer_name: str) -> dict[str, Any]:
    attribs: dict[str, Any] = {"layer": layer_name}
    true_color = _hex_to_true_color(style.stroke_color(entity.base.pen_color))
    if true_color is not None:
        attribs["true_color"] = true_color
    return attribs


def _hex_to_true_color(value: str) -> int | None:
    text = value.strip().lstrip("#")
    if len(text) != 6:
        return None
    try:
        return int(text, 16) & 0xFFFFFF
    except ValueError:
        return None


def _point3(value: tuple[float, float]) -> tuple[float, float, float]:
    return (float(value[0]), float(value[1]), 0.0)
