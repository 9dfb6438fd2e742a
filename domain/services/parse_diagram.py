from __future__ import annotations

import re

from domain.glyphs import HIDDEN_O
from domain.grid import Grid
from domain.models import DecorationSet, ParsedDiagram, PathSet
from domain.services.find_decorations import find_decorations
from domain.services.trace_paths import trace_paths

_LETTERS_BEFORE_O = re.compile(r"([a-zA-Z]{2})o")
_LETTERS_AFTER_O = re.compile(r"o([a-zA-Z]{2})")
_O_BETWEEN_LETTERS = re.compile(f"([a-zA-Z{HIDDEN_O}])o([a-zA-Z{HIDDEN_O}])")


def hide_word_letters(diagram: str) -> str:
    diagram = _LETTERS_BEFORE_O.sub(rf"\1{HIDDEN_O}", diagram)
    diagram = _LETTERS_AFTER_O.sub(rf"{HIDDEN_O}\1", diagram)
    return _O_BETWEEN_LETTERS.sub(rf"\1{HIDDEN_O}\2", diagram)


def parse_diagram(diagram: str, allow_isolated_points: bool = False) -> ParsedDiagram:
    grid = Grid(hide_word_letters(diagram))
    paths = trace_paths(grid, PathSet())
    decorations, diagnostics = find_decorations(
        grid, paths, DecorationSet(), allow_isolated_points=allow_isolated_points
    )
    return ParsedDiagram(grid=grid, paths=paths, decorations=decorations, diagnostics=diagnostics)
