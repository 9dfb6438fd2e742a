from __future__ import annotations

import pytest

from domain.glyphs import (
    HIDDEN_O,
    POINT_CHARACTERS,
    POINT_STYLES,
    is_arrow_head,
    is_bottom_vertex,
    is_decoration,
    is_empty_or_vertex,
    is_jump,
    is_point,
    is_solid_hline,
    is_solid_vline,
    is_top_vertex,
    is_vertex,
)


def test_plus_is_both_top_and_bottom_vertex() -> None:
    assert is_top_vertex("+")
    assert is_bottom_vertex("+")
    assert is_top_vertex(".")
    assert not is_bottom_vertex(".")
    assert is_bottom_vertex("'")
    assert not is_top_vertex("'")


def test_undirected_vertex_counts_as_solid_line() -> None:
    assert is_solid_hline("+")
    assert is_solid_vline("+")
    assert not is_solid_vline(".")


def test_jumps_continue_horizontal_lines() -> None:
    assert is_jump("(")
    assert is_solid_hline(")")
    assert not is_solid_vline("(")


@pytest.mark.parametrize("char", [">", "<", "^", "v", "o", "*", "(", "░", "◢"])
def test_decoration_alphabet(char: str) -> None:
    assert is_decoration(char)


@pytest.mark.parametrize("char", ["-", "|", "+", "a", " ", HIDDEN_O])
def test_non_decorations(char: str) -> None:
    assert not is_decoration(char)


def test_every_point_has_a_style() -> None:
    assert set(POINT_STYLES) == set(POINT_CHARACTERS)
    assert all(is_point(c) for c in POINT_CHARACTERS)


def test_hidden_o_is_not_a_point() -> None:
    assert not is_point(HIDDEN_O)
    assert not is_vertex(HIDDEN_O)
    assert not is_arrow_head(HIDDEN_O)


@pytest.mark.parametrize(
    ("char", "expected"),
    [(" ", True), ("o", True), ("v", True), ("-", True), ("a", False), ("7", False)],
)
def test_is_empty_or_vertex(char: str, expected: bool) -> None:
    assert is_empty_or_vertex(char) is expected
