from __future__ import annotations

import json
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from .decode import decode_entities
from .entity import ENTITY_KINDS, Entity

PAPER_SIZE_NAMES = {0: "A0", 1: "A1", 2: "A2", 3: "A3", 4: "A4", 8: "2A", 9: "3A"}


def load(source: str | Path | Mapping[str, Any]) -> "JwwDrawing":
    """Load parser output from a JSON dump or an in-memory mapping."""
    path: str | None = None
    if isinstance(source, Mapping):
        data = source
    else:
        path = str(source)
        with open(path, encoding="utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object in {path}")

    entities = data.get("entities")
    if not isinstance(entities, list):
        raise ValueError("parsed drawing has no 'entities' list")

    layers = data.get("layers")
    return JwwDrawing(
        entities=list(entities),
        entity_counts=dict(data.get("entity_counts") or {}),
        bounds=dict(data.get("bounds") or {}),
        layers=list(layers) if isinstance(layers, list) else [],
        paper_size=data.get("paper_size"),
        path=path,
    )


@dataclass(frozen=True)
class JwwDrawing:
    entities: list[Any]
    entity_counts: dict[str, Any] = field(default_factory=dict)
    bounds: dict[str, Any] = field(default_factory=dict)
    layers: list[Any] = field(default_factory=list)
    paper_size: int | None = None
    path: str | None = None

    def decoded_entities(self) -> list[Entity]:
        return decode_entities(self.entities)

    def render(self, **kwargs):
        from .drawing import render_drawing

        return render_drawing(self.decoded_entities(), **kwargs)

    def export_dxf(self, output_path: str, **kwargs):
        from .convert import to_dxf

        return to_dxf(self, output_path, **kwargs)


def paper_size_name(paper_size: Any) -> str:
    try:
        return PAPER_SIZE_NAMES[int(paper_size)]
    except (KeyError, TypeError, ValueError):
        return "Unknown"


def entity_type_counts(entities: Iterable[Entity]) -> OrderedDict[str, int]:
    counts: OrderedDict[str, int] = OrderedDict((kind, 0) for kind in ENTITY_KINDS)
    for entity in entities:
        counts[entity.kind] += 1
    return counts
