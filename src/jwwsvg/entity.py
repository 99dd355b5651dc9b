from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

Point2D = tuple[float, float]


@dataclass(frozen=True)
class BaseAttributes:
    layer: int = 0
    pen_color: int = 1
    pen_width: float = 1.0


@dataclass(frozen=True)
class Line:
    kind: ClassVar[str] = "Line"

    start: Point2D
    end: Point2D
    base: BaseAttributes = field(default_factory=BaseAttributes)


@dataclass(frozen=True)
class Arc:
    kind: ClassVar[str] = "Arc"

    center: Point2D
    radius: float
    start_angle: float = 0.0
    arc_angle: float = 0.0
    is_full_circle: bool = False
    base: BaseAttributes = field(default_factory=BaseAttributes)

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.arc_angle


@dataclass(frozen=True)
class Point:
    kind: ClassVar[str] = "Point"

    position: Point2D
    base: BaseAttributes = field(default_factory=BaseAttributes)


@dataclass(frozen=True)
class Text:
    kind: ClassVar[str] = "Text"

    start: Point2D
    content: str
    size: float = 0.0
    angle: float = 0.0
    end: Point2D | None = None
    base: BaseAttributes = field(default_factory=BaseAttributes)


@dataclass(frozen=True)
class Solid:
    kind: ClassVar[str] = "Solid"

    corners: tuple[Point2D, Point2D, Point2D, Point2D]
    base: BaseAttributes = field(default_factory=BaseAttributes)


@dataclass(frozen=True)
class Block:
    kind: ClassVar[str] = "Block"

    def_number: int
    base: BaseAttributes = field(default_factory=BaseAttributes)


@dataclass(frozen=True)
class Unknown:
    """A record none of the shape discriminators matched.

    ``tag`` is the parser's wrapper key when the record had one and ``fields``
    the sorted payload keys; both are only kept for diagnostics.
    """

    kind: ClassVar[str] = "Unknown"

    tag: str | None = None
    fields: tuple[str, ...] = ()
    base: BaseAttributes = field(default_factory=BaseAttributes)


Entity = Union[Line, Arc, Point, Text, Solid, Block, Unknown]

ENTITY_KINDS: tuple[str, ...] = ("Line", "Arc", "Point", "Text", "Solid", "Block", "Unknown")
