from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from .entity import Entity

logger = logging.getLogger(__name__)

LAYER_COUNT = 16
INVALID_LAYER_POLICIES = ("drop", "warn", "raise")


@dataclass
class Layer:
    id: int
    name: str
    entities: list[Entity] = field(default_factory=list)
    visible: bool = True


def group_by_layer(
    entities: Iterable[Entity],
    *,
    on_invalid_layer: str = "drop",
) -> list[Layer]:
    if on_invalid_layer not in INVALID_LAYER_POLICIES:
        raise ValueError(
            f"invalid layer policy: {on_invalid_layer!r} "
            f"(expected one of {', '.join(INVALID_LAYER_POLICIES)})"
        )

    layers = [Layer(id=i, name=f"Layer {i}") for i in range(LAYER_COUNT)]
    dropped: Counter[int] = Counter()
    for entity in entities:
        layer_id = entity.base.layer
        if 0 <= layer_id < LAYER_COUNT:
            layers[layer_id].entities.append(entity)
            continue
        if on_invalid_layer == "raise":
            raise ValueError(f"layer index out of range 0-{LAYER_COUNT - 1}: {layer_id}")
        dropped[layer_id] += 1

    if dropped and on_invalid_layer == "warn":
        summary = ", ".join(f"{layer_id}:{count}" for layer_id, count in sorted(dropped.items()))
        logger.warning(
            "dropped %d entities with out-of-range layer index (%s)",
            sum(dropped.values()),
            summary,
        )

    return [layer for layer in layers if layer.entities]
