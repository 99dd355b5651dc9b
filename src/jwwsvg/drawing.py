from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from .bounds import Bounds, drawing_bounds
from .decode import decode_entity
from .entity import Arc, Block, Entity, Line, Point, Solid, Text, Unknown
from .layers import Layer, group_by_layer
from .render import format_number, render_entity
from .style import DEFAULT_STYLE, RenderStyle
from .transform import CoordinateTransform

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 20.0
SVG_NAMESPACE = "http://www.w3.org/2000/svg"

_ENTITY_TYPES = (Line, Arc, Point, Text, Solid, Block, Unknown)


@dataclass(frozen=True)
class RenderResult:
    document: str
    layers: list[Layer]
    bounds: Bounds
    entity_count: int

    def layer_counts(self) -> dict[int, int]:
        return {layer.id: len(layer.entities) for layer in self.layers}

    def write(self, output_path: str | Path) -> Path:
        out_path = Path(output_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(self.document, encoding="utf-8")
        return out_path


def render_drawing(
    data: Mapping[str, Any] | Iterable[Any],
    *,
    style: RenderStyle = DEFAULT_STYLE,
    padding: float = DEFAULT_PADDING,
    on_invalid_layer: str = "drop",
    include_solids_in_bounds: bool = False,
) -> RenderResult:
    """Render parsed drawing data to an SVG document grouped by layer.

    ``data`` is either the parser output mapping (only its ``entities`` list
    is used) or a sequence of raw records or decoded entities.
    """
    entities = coerce_entities(data)
    logger.debug("rendering drawing: %d entities", len(entities))

    bounds = drawing_bounds(entities, include_solids=include_solids_in_bounds)
    width = bounds.width + padding * 2
    height = bounds.height + padding * 2

    transform = CoordinateTransform.from_bounds(bounds)
    layers = group_by_layer(entities, on_invalid_layer=on_invalid_layer)

    # The flip swaps which extent ends up on top.
    transformed_min_y = transform.transform_y(bounds.max_y)
    view_x = format_number(bounds.min_x - padding)
    view_y = format_number(transformed_min_y - padding)
    view_w = format_number(width)
    view_h = format_number(height)

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<svg xmlns="{SVG_NAMESPACE}" viewBox="{view_x} {view_y} {view_w} {view_h}">\n',
        f'  <rect x="{view_x}" y="{view_y}" width="{view_w}" height="{view_h}" '
        f'fill="{style.background}"/>\n',
    ]
    for layer in layers:
        parts.append(f'<g id="layer-{layer.id}" class="jww-layer" data-layer="{layer.id}">\n')
        for entity in layer.entities:
            parts.append(render_entity(entity, transform, style))
        parts.append("</g>\n")
    parts.append("</svg>")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "layers: %s",
            ", ".join(f"{layer.id}:{len(layer.entities)}" for layer in layers) or "(none)",
        )

    return RenderResult(
        document="".join(parts),
        layers=layers,
        bounds=bounds,
        entity_count=len(entities),
    )


def coerce_entities(data: Mapping[str, Any] | Iterable[Any]) -> list[Entity]:
    if isinstance(data, Mapping):
        records = data.get("entities")
        if records is None:
            return []
    else:
        records = data
    return [
        record if isinstance(record, _ENTITY_TYPES) else decode_entity(record)
        for record in records
    ]
