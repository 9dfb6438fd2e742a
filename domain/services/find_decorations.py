from __future__ import annotations

import logging
import math

from domain.glyphs import (
    is_empty,
    is_empty_or_vertex,
    is_gray,
    is_jump,
    is_point,
    is_tri,
)
from domain.grid import Grid
from domain.models import (
    DIAGNOSTIC_UNANCHORED_GLYPH,
    DecorationSet,
    Diagnostic,
    PathSet,
    Vec2,
)

logger = logging.getLogger(__name__)

ASPECT = 2
DIAGONAL_ANGLE = math.degrees(math.atan(1.0 / ASPECT))

# (query, dx, dy, angle) candidates for "^" and "v", tried in order
_UP_ARROW_ENDS = (
    ("up_ends_at", 0.0, -0.5, 270.0),
    ("up_ends_at", 0.0, 0.0, 270.0),
    ("diagonal_up_ends_at", 0.5, -0.5, 270.0 + DIAGONAL_ANGLE),
    ("diagonal_up_ends_at", 0.25, -0.25, 270.0 + DIAGONAL_ANGLE),
    ("diagonal_up_ends_at", 0.0, 0.0, 270.0 + DIAGONAL_ANGLE),
    ("back_diagonal_up_ends_at", 0.0, 0.0, 270.0 - DIAGONAL_ANGLE),
    ("back_diagonal_up_ends_at", -0.5, -0.5, 270.0 - DIAGONAL_ANGLE),
    ("back_diagonal_up_ends_at", -0.25, -0.25, 270.0 - DIAGONAL_ANGLE),
)
_DOWN_ARROW_ENDS = (
    ("down_ends_at", 0.0, 0.5, 90.0),
    ("down_ends_at", 0.0, 0.0, 90.0),
    ("diagonal_down_ends_at", 0.0, 0.0, 90.0 + DIAGONAL_ANGLE),
    ("diagonal_down_ends_at", -0.5, 0.5, 90.0 + DIAGONAL_ANGLE),
    ("diagonal_down_ends_at", -0.25, 0.25, 90.0 + DIAGONAL_ANGLE),
    ("back_diagonal_down_ends_at", 0.0, 0.0, 90.0 - DIAGONAL_ANGLE),
    ("back_diagonal_down_ends_at", 0.5, 0.5, 90.0 - DIAGONAL_ANGLE),
    ("back_diagonal_down_ends_at", 0.25, 0.25, 90.0 - DIAGONAL_ANGLE),
)

_ANCHORED_KINDS = frozenset("()o*◌○◍●><^v")


def find_decorations(
    grid: Grid,
    paths: PathSet,
    decorations: DecorationSet | None = None,
    allow_isolated_points: bool = False,
) -> tuple[DecorationSet, list[Diagnostic]]:
    """Classify the glyphs that decorate traced paths.

    ``paths`` is only read. A candidate glyph that no path justifies is left
    as text and reported as an ``unanchored_glyph`` diagnostic. Points with
    nothing but blanks around them are text too, unless
    ``allow_isolated_points`` is set.
    """
    decorations = decorations if decorations is not None else DecorationSet()
    diagnostics: list[Diagnostic] = []

    for x in range(grid.width):
        for y in range(grid.height):
            c = grid.get(x, y)
            if c not in _ANCHORED_KINDS:
                if is_gray(c) or is_tri(c):
                    decorations.insert(Vec2(x, y), c)
                    grid.set_used(x, y)
                continue

            anchored = _insert_anchored(grid, paths, decorations, x, y, c, allow_isolated_points)
            if anchored:
                grid.set_used(x, y)
            else:
                logger.debug("Unanchored %r at column %s, row %s", c, x, y)
                diagnostics.append(
                    Diagnostic(
                        kind=DIAGNOSTIC_UNANCHORED_GLYPH,
                        line=y,
                        column=x,
                        detail=c,
                    )
                )

    return decorations, diagnostics


def _insert_anchored(
    grid: Grid,
    paths: PathSet,
    decorations: DecorationSet,
    x: int,
    y: int,
    c: str,
    allow_isolated_points: bool,
) -> bool:
    if is_jump(c):
        if paths.down_ends_at(x, y - 0.5) and paths.up_ends_at(x, y + 0.5):
            decorations.insert(Vec2(x, y), c)
            return True
        return False

    if is_point(c):
        if (
            paths.right_ends_at(x - 1, y)
            or paths.left_ends_at(x + 1, y)
            or paths.down_ends_at(x, y - 1)
            or paths.up_ends_at(x, y + 1)
            or paths.up_ends_at(x, y)
            or paths.down_ends_at(x, y)
            or _diagonal_ends_at(paths, x, y)
            or _on_line(grid, x, y, allow_isolated_points)
        ):
            decorations.insert(Vec2(x, y), c)
            return True
        return False

    if c == ">":
        if paths.right_ends_at(x, y) or paths.horizontal_passes_through(x, y):
            # Back off so the head does not overlap a point
            dx = -0.5 if is_point(grid.get(x + 1, y)) else 0.0
            decorations.insert(Vec2(x + dx, y), ">", 0.0)
            return True
        return False

    if c == "<":
        if paths.left_ends_at(x, y) or paths.horizontal_passes_through(x, y):
            dx = 0.5 if is_point(grid.get(x - 1, y)) else 0.0
            decorations.insert(Vec2(x + dx, y), ">", 180.0)
            return True
        return False

    # Because of the aspect ratio the previous line may end in one of two slots
    candidates = _UP_ARROW_ENDS if c == "^" else _DOWN_ARROW_ENDS
    for query, dx, dy, angle in candidates:
        if getattr(paths, query)(x + dx, y + dy):
            decorations.insert(Vec2(x + dx, y + dy), ">", angle)
            return True

    if paths.vertical_passes_through(x, y):
        dy = -0.5 if c == "^" else 0.5
        decorations.insert(Vec2(x, y + dy), ">", 270.0 if c == "^" else 90.0)
        return True
    return False


def _on_line(grid: Grid, x: int, y: int, allow_isolated_points: bool) -> bool:
    # Vertically adjacent points are allowed; horizontally adjacent ones would
    # not fit and are probably text.
    up = grid.get(x, y - 1)
    dn = grid.get(x, y + 1)
    lt = grid.get(x - 1, y)
    rt = grid.get(x + 1, y)
    if not (
        (is_empty_or_vertex(dn) or is_point(dn))
        and (is_empty_or_vertex(up) or is_point(up))
        and is_empty_or_vertex(rt)
        and is_empty_or_vertex(lt)
    ):
        return False
    return allow_isolated_points or not all(is_empty(n) for n in (up, dn, lt, rt))


def _diagonal_ends_at(paths: PathSet, x: int, y: int) -> bool:
    # The diagonal passes run through points, so the point is the path's end
    return (
        paths.diagonal_up_ends_at(x, y)
        or paths.diagonal_down_ends_at(x, y)
        or paths.back_diagonal_up_ends_at(x, y)
        or paths.back_diagonal_down_ends_at(x, y)
    )
