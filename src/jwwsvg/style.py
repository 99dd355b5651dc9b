from __future__ import annotations

from dataclasses import dataclass, replace

PEN_COLORS: tuple[str, ...] = (
    "#ffffff",  # 0: white
    "#000000",  # 1: black
    "#ff0000",  # 2: red
    "#00ff00",  # 3: green
    "#0000ff",  # 4: blue
    "#ffff00",  # 5: yellow
    "#ff00ff",  # 6: magenta
    "#00ffff",  # 7: cyan
    "#ff8000",  # 8: orange
    "#808080",  # 9: gray
)

MIN_STROKE_WIDTH = 0.5


@dataclass(frozen=True)
class RenderStyle:
    """Colors and fonts used when emitting SVG.

    ``text_color`` overrides the pen color of text entities when set.
    """

    name: str = "default"
    palette: tuple[str, ...] = PEN_COLORS
    background: str = "white"
    text_color: str | None = None
    font_family: str = "sans-serif"

    def stroke_color(self, pen_color: int | None) -> str:
        # Pen 0 resolves like a missing pen.
        index = pen_color or 1
        index = max(0, min(index, len(self.palette) - 1))
        return self.palette[index]

    def stroke_width(self, pen_width: float | None) -> float:
        return max((pen_width or 1) * 0.5, MIN_STROKE_WIDTH)

    def fill_for_text(self, pen_color: int | None) -> str:
        if self.text_color is not None:
            return self.text_color
        return self.stroke_color(pen_color)


DEFAULT_STYLE = RenderStyle()

THEMES: dict[str, RenderStyle] = {
    "default": DEFAULT_STYLE,
    "system": replace(DEFAULT_STYLE, name="system", background="#000000", text_color="#ffffff"),
    "solarizedLight": replace(
        DEFAULT_STYLE, name="solarizedLight", background="#fdf6e3", text_color="#657b83"
    ),
    "solarizedDark": replace(
        DEFAULT_STYLE, name="solarizedDark", background="#002b36", text_color="#839496"
    ),
}


def get_theme(name: str) -> RenderStyle:
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(
            f"unknown theme: {name!r} (expected one of {', '.join(THEMES)})"
        ) from None
