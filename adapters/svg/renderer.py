from __future__ import annotations

import html
import math
from dataclasses import dataclass

from domain.glyphs import (
    GRAY_CHARACTERS,
    HEXAGON_CHARACTERS,
    HIDDEN_O,
    POINT_STYLES,
    TRI_CHARACTERS,
    is_gray,
    is_jump,
    is_point,
    is_tri,
)
from domain.grid import Grid
from domain.models import AlignmentHint, Decoration, ParsedDiagram, Path, Vec2
from domain.ports.rendering import DiagramRenderer

ALIGNMENT_STYLES = {
    "floatleft": "float:left;margin:15px 30px 15px 0;",
    "floatright": "float:right;margin:15px 0 15px 30px;",
    "center": "margin:0 auto 0 auto;",
}

# Used only for standalone files; inline diagrams inherit the page stylesheet.
DIAGRAM_STYLE = (
    "svg.diagram{display:block;font-family:Menlo,Consolas,monospace;font-size:13px;"
    "text-align:center;stroke-linecap:round;stroke-width:2px;stroke:#000;fill:#000}"
    "svg.diagram .opendot{fill:#fff}"
    "svg.diagram .shadeddot{fill:#ccc}"
    "svg.diagram .dotteddot{stroke:#000;stroke-dasharray:4;fill:none}"
    "svg.diagram text{stroke:none}"
)


@dataclass(frozen=True)
class RenderConfig:
    scale: float = 8.0
    aspect: float = 2.0
    stroke_width: float = 2.0
    debug_show_grid: bool = False
    debug_show_source: bool = False
    debug_hide_passthrough: bool | None = None
    standalone: bool = False

    @property
    def hide_passthrough(self) -> bool:
        if self.debug_hide_passthrough is None:
            return self.debug_show_source
        return self.debug_hide_passthrough


class SvgDiagramRenderer(DiagramRenderer):
    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def render(self, parsed: ParsedDiagram, alignment_hint: AlignmentHint = "") -> str:
        grid = parsed.grid
        scale = self.config.scale
        aspect = self.config.aspect

        parts: list[str] = [
            '<svg class="diagram" xmlns="http://www.w3.org/2000/svg" version="1.1" '
            f'height="{_num((grid.height + 1) * scale * aspect)}" '
            f'width="{_num((grid.width + 1) * scale)}"'
        ]
        style = ALIGNMENT_STYLES.get(alignment_hint)
        if style:
            parts.append(f' style="{style}"')
        parts.append(">")
        if self.config.standalone:
            parts.append(f"<style>{DIAGRAM_STYLE}</style>")
        parts.append(f'<g transform="translate({self._point(Vec2(1, 1))})">\n')

        if self.config.debug_show_grid:
            parts.append(self._grid_overlay(grid))

        parts.extend(self.path_element(path) + "\n" for path in parsed.paths)
        parts.extend(self.decoration_element(decoration) for decoration in parsed.decorations)

        if not self.config.hide_passthrough:
            parts.append(self._labels(grid))
        if self.config.debug_show_source:
            parts.append(self._source_overlay(grid))

        parts.append("</g></svg>")
        return "".join(parts)

    def path_element(self, path: Path) -> str:
        if path.is_curved() and path.control1 is not None and path.control2 is not None:
            d = (
                f"M {self._point(path.start)} C {self._point(path.control1)} "
                f"{self._point(path.control2)} {self._point(path.end)}"
            )
        else:
            d = f"M {self._point(path.start)} L {self._point(path.end)}"
        dash = ' stroke-dasharray="3,6"' if path.dashed else ""
        return f'<path d="{d}" style="fill:none;"{dash}/>'

    def decoration_element(self, decoration: Decoration) -> str:
        c = decoration.position
        scale = self.config.scale
        aspect = self.config.aspect

        if is_jump(decoration.kind):
            dx = 0.75 if decoration.kind == ")" else -0.75
            up = Vec2(c.x, c.y - 0.5)
            dn = Vec2(c.x, c.y + 0.5)
            cup = Vec2(c.x + dx, c.y - 0.5)
            cdn = Vec2(c.x + dx, c.y + 0.5)
            return (
                f'<path d="M {self._point(dn)} C {self._point(cdn)} {self._point(cup)} '
                f'{self._point(up)}" style="fill:none;"/>\n'
            )

        if is_point(decoration.kind):
            style = POINT_STYLES[decoration.kind]
            return (
                f'<circle cx="{_num(c.x * scale)}" cy="{_num(c.y * scale * aspect)}" '
                f'r="{_num(scale - self.config.stroke_width)}" class="{style}dot"/>\n'
            )

        if is_gray(decoration.kind):
            shade = math.floor((3 - GRAY_CHARACTERS.index(decoration.kind)) * 63.75 + 0.5)
            return (
                f'<rect x="{_num((c.x - 0.5) * scale)}" y="{_num((c.y - 0.5) * scale * aspect)}" '
                f'width="{_num(scale)}" height="{_num(scale * aspect)}" stroke="none" '
                f'fill="rgb({shade},{shade},{shade})"/>\n'
            )

        if is_tri(decoration.kind):
            index = TRI_CHARACTERS.index(decoration.kind)
            xs = 0.5 - (index & 1)
            ys = 0.5 - (index >> 1)
            xs *= math.copysign(1.0, ys)
            tip = Vec2(c.x + xs, c.y - ys)
            up = Vec2(c.x + xs, c.y + ys)
            dn = Vec2(c.x - xs, c.y + ys)
            return (
                f'<polygon points="{self._point(tip)} {self._point(up)} {self._point(dn)}" '
                'style="stroke:none"/>\n'
            )

        tip = Vec2(c.x + 1, c.y)
        up = Vec2(c.x - 0.5, c.y - 0.35)
        dn = Vec2(c.x - 0.5, c.y + 0.35)
        return (
            f'<polygon points="{self._point(tip)} {self._point(up)} {self._point(dn)}" '
            f'style="stroke:none" transform="rotate({_num(decoration.angle)},{self._point(c)})"/>\n'
        )

    def _point(self, vec: Vec2) -> str:
        x = vec.x * self.config.scale
        y = vec.y * self.config.scale * self.config.aspect
        return f"{_num(x)},{_num(y)}"

    def _text_position(self, x: int, y: int) -> str:
        scale = self.config.scale
        return f'x="{_num(x * scale)}" y="{_num(4 + y * scale * self.config.aspect)}"'

    def _labels(self, grid: Grid) -> str:
        parts = ['<g transform="translate(0,0)">']
        for y in range(grid.height):
            for x in range(grid.width):
                c = grid.get(x, y)
                if c in HEXAGON_CHARACTERS:
                    # Enlarged so that hexagons tile the grid
                    parts.append(
                        f'<text text-anchor="middle" {self._text_position(x, y)} '
                        f'style="font-size:20.5px">{_escape(c)}</text>'
                    )
                elif c != " " and not grid.is_used(x, y):
                    parts.append(
                        f'<text text-anchor="middle" {self._text_position(x, y)}>'
                        f"{_escape(c)}</text>"
                    )
        parts.append("</g>")
        return "".join(parts)

    def _grid_overlay(self, grid: Grid) -> str:
        scale = self.config.scale
        aspect = self.config.aspect
        parts = ['<g style="opacity:0.1">\n']
        for x in range(grid.width):
            for y in range(grid.height):
                if grid.is_used(x, y):
                    fill = "red;"
                elif grid.get(x, y) == " ":
                    fill = "gray;opacity:0.05"
                else:
                    fill = "blue;"
                parts.append(
                    f'<rect x="{_num((x - 0.5) * scale + 1)}" '
                    f'y="{_num((y - 0.5) * scale * aspect + 2)}" '
                    f'width="{_num(scale - 2)}" height="{_num(scale * aspect - 2)}" '
                    f'style="fill:{fill}"/>\n'
                )
        parts.append("</g>\n")
        return "".join(parts)

    def _source_overlay(self, grid: Grid) -> str:
        parts = ['<g transform="translate(2,2)">\n']
        for x in range(grid.width):
            for y in range(grid.height):
                c = grid.get(x, y)
                if c != " ":
                    parts.append(
                        f'<text text-anchor="middle" {self._text_position(x, y)} '
                        'style="fill:#F00;font-family:Menlo,monospace;font-size:12px;'
                        f'text-align:center">{_escape(c)}</text>'
                    )
        parts.append("</g>")
        return "".join(parts)


def _escape(c: str) -> str:
    return html.escape(c.replace(HIDDEN_O, "o"))


def _num(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
