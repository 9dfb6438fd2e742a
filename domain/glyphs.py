from __future__ import annotations

# Order matters: arrowheads follow rotation angles, gray levels run light to
# full, triangles are rotated by 90 degrees per index.
ARROW_HEAD_CHARACTERS = ">v<^"
POINT_CHARACTERS = "o*◌○◍●"
JUMP_CHARACTERS = "()"
UNDIRECTED_VERTEX_CHARACTERS = "+"
VERTEX_CHARACTERS = UNDIRECTED_VERTEX_CHARACTERS + ".'"
GRAY_CHARACTERS = "░▒▓█"
TRI_CHARACTERS = "◢◣◤◥"
HEXAGON_CHARACTERS = "⬢⬡"

# Stands in for an "o" that belongs to a word so it is never read as a point.
HIDDEN_O = "\ue004"

POINT_STYLES = {
    "*": "closed",
    "o": "open",
    "◌": "dotted",
    "○": "open",
    "◍": "shaded",
    "●": "closed",
}

_ARROW_HEADS = frozenset(ARROW_HEAD_CHARACTERS)
_POINTS = frozenset(POINT_CHARACTERS)
_JUMPS = frozenset(JUMP_CHARACTERS)
_UNDIRECTED_VERTICES = frozenset(UNDIRECTED_VERTEX_CHARACTERS)
_VERTICES = frozenset(VERTEX_CHARACTERS)
_GRAYS = frozenset(GRAY_CHARACTERS)
_TRIS = frozenset(TRI_CHARACTERS)
_DECORATIONS = _ARROW_HEADS | _POINTS | _JUMPS | _GRAYS | _TRIS


def is_undirected_vertex(c: str) -> bool:
    return c in _UNDIRECTED_VERTICES


def is_vertex(c: str) -> bool:
    return c in _VERTICES


def is_top_vertex(c: str) -> bool:
    return is_undirected_vertex(c) or c == "."


def is_bottom_vertex(c: str) -> bool:
    return is_undirected_vertex(c) or c == "'"


def is_arrow_head(c: str) -> bool:
    return c in _ARROW_HEADS


def is_point(c: str) -> bool:
    return c in _POINTS


def is_jump(c: str) -> bool:
    return c in _JUMPS


def is_gray(c: str) -> bool:
    return c in _GRAYS


def is_tri(c: str) -> bool:
    return c in _TRIS


def is_decoration(c: str) -> bool:
    return c in _DECORATIONS


def is_vertex_or_left_decoration(c: str) -> bool:
    return is_vertex(c) or c == "<" or is_point(c)


def is_vertex_or_right_decoration(c: str) -> bool:
    return is_vertex(c) or c == ">" or is_point(c)


def is_solid_hline(c: str) -> bool:
    return c == "-" or is_undirected_vertex(c) or is_jump(c)


def is_solid_vline(c: str) -> bool:
    return c == "|" or is_undirected_vertex(c)


def is_solid_dline(c: str) -> bool:
    return c == "/" or is_undirected_vertex(c)


def is_solid_bline(c: str) -> bool:
    return c == "\\" or is_undirected_vertex(c)


def is_solid_vline_or_jump_or_point(c: str) -> bool:
    return is_solid_vline(c) or is_jump(c) or is_point(c)


def is_empty(c: str) -> bool:
    return c == " "


def is_ascii_letter(c: str) -> bool:
    return len(c) == 1 and ("A" <= c <= "Z" or "a" <= c <= "z")


def is_empty_or_vertex(c: str) -> bool:
    # Anything that is not alphanumeric counts, as do the letters that double
    # as glyphs ("o" points and "v" arrowheads).
    if c == " " or c in {"o", "v"}:
        return True
    return not (is_ascii_letter(c) or "0" <= c <= "9")
