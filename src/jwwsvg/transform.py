from __future__ import annotations

from dataclasses import dataclass

from .bounds import Bounds


@dataclass(frozen=True)
class CoordinateTransform:
    """Vertical mirror from the drawing's Y-up space to SVG's Y-down space.

    Built once per render from the drawing extents; X passes through.
    ``transform_y(min_y) == max_y`` and ``transform_y(max_y) == min_y``.
    """

    min_y: float
    max_y: float

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> "CoordinateTransform":
        return cls(min_y=bounds.min_y, max_y=bounds.max_y)

    def transform_x(self, x: float) -> float:
        return x

    def transform_y(self, y: float) -> float:
        return self.max_y - (y - self.min_y)

    def transform_point(self, point: tuple[float, float]) -> tuple[float, float]:
        return (self.transform_x(point[0]), self.transform_y(point[1]))
