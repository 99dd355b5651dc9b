from typing import Sequence

from .bounds import DEFAULT_BOUNDS, Bounds, drawing_bounds, entity_bounds
from .convert import ConvertResult, to_dxf
from .decode import classify, decode_entities, decode_entity, unwrap_entity
from .document import JwwDrawing, load
from .drawing import RenderResult, render_drawing
from .entity import Arc, BaseAttributes, Block, Entity, Line, Point, Solid, Text, Unknown
from .layers import Layer, group_by_layer
from .render import render_entity
from .style import DEFAULT_STYLE, THEMES, RenderStyle, get_theme
from .transform import CoordinateTransform

__all__ = [
    "load",
    "JwwDrawing",
    "render_drawing",
    "RenderResult",
    "render_entity",
    "to_dxf",
    "ConvertResult",
    "unwrap_entity",
    "classify",
    "decode_entity",
    "decode_entities",
    "Entity",
    "BaseAttributes",
    "Line",
    "Arc",
    "Point",
    "Text",
    "Solid",
    "Block",
    "Unknown",
    "Bounds",
    "DEFAULT_BOUNDS",
    "entity_bounds",
    "drawing_bounds",
    "CoordinateTransform",
    "Layer",
    "group_by_layer",
    "RenderStyle",
    "DEFAULT_STYLE",
    "THEMES",
    "get_theme",
]


def main(argv: Sequence[str] | None = None) -> int:
    from jwwsvg.cli import main as cli_main

    return cli_main(argv)
