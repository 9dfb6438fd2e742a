from __future__ import annotations

from domain.glyphs import HIDDEN_O
from domain.services.parse_diagram import hide_word_letters, parse_diagram


def test_o_inside_words_is_hidden() -> None:
    hidden = hide_word_letters("foo bar\n")

    assert "o" not in hidden
    assert hidden.replace(HIDDEN_O, "o") == "foo bar\n"


def test_o_between_letters_is_hidden() -> None:
    assert hide_word_letters("xox") == f"x{HIDDEN_O}x"


def test_standalone_o_is_kept() -> None:
    assert hide_word_letters("o---o\n") == "o---o\n"
    assert hide_word_letters("to o") == "to o"


def test_box_with_arrow_has_no_leftover_text() -> None:
    parsed = parse_diagram("+-->+\n|   |\n+---+\n")

    assert parsed.grid.width == 5
    assert parsed.grid.height == 3
    assert len(parsed.paths) == 4
    assert [d.kind for d in parsed.decorations] == [">"]
    assert list(parsed.grid.unused_cells()) == []
    assert parsed.diagnostics == []


def test_blank_interior_with_lone_point() -> None:
    parsed = parse_diagram("   \n * \n   \n")

    assert len(parsed.paths) == 0
    assert len(parsed.decorations) == 0
    assert [d.detail for d in parsed.diagnostics] == ["*"]


def test_word_containing_o_is_left_as_text() -> None:
    parsed = parse_diagram("boot --->\n")

    assert [d.kind for d in parsed.decorations] == [">"]
    assert "".join(c for _, _, c in parsed.grid.unused_cells()) == f"b{HIDDEN_O}{HIDDEN_O}t"
    assert parsed.diagnostics == []
