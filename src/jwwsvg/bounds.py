from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .entity import Arc, Entity, Line, Point, Solid, Text

POINT_MARGIN = 5.0


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y))

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )

    def padded(self, amount: float) -> "Bounds":
        return Bounds(
            min_x=self.min_x - amount,
            min_y=self.min_y - amount,
            max_x=self.max_x + amount,
            max_y=self.max_y + amount,
        )


DEFAULT_BOUNDS = Bounds(0.0, 0.0, 400.0, 300.0)


def entity_bounds(entity: Entity, *, include_solids: bool = False) -> Bounds | None:
    if isinstance(entity, Line):
        return _points_bounds([entity.start, entity.end])
    if isinstance(entity, Arc):
        # Full-circle box even for partial arcs.
        cx, cy = entity.center
        r = abs(entity.radius)
        return Bounds(cx - r, cy - r, cx + r, cy + r)
    if isinstance(entity, Point):
        x, y = entity.position
        return Bounds(x - POINT_MARGIN, y - POINT_MARGIN, x + POINT_MARGIN, y + POINT_MARGIN)
    if isinstance(entity, Text):
        sx, sy = entity.start
        if entity.end is None:
            return Bounds(sx, sy, sx, sy)
        # Zero end coordinates are treated as unset by the parser.
        ex = entity.end[0] or sx
        ey = entity.end[1] or sy
        return _points_bounds([(sx, sy), (ex, ey)])
    if isinstance(entity, Solid) and include_solids:
        return _points_bounds(list(entity.corners))
    return None


def drawing_bounds(entities: Iterable[Entity], *, include_solids: bool = False) -> Bounds:
    result: Bounds | None = None
    for entity in entities:
        box = entity_bounds(entity, include_solids=include_solids)
        if box is None or not box.is_finite():
            continue
        result = box if result is None else result.union(box)
    if result is None:
        return DEFAULT_BOUNDS
    return result


def _points_bounds(points: list[tuple[float, float]]) -> Bounds:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return Bounds(min(xs), min(ys), max(xs), max(ys))
