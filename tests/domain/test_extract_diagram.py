from __future__ import annotations

from domain.models import DIAGNOSTIC_UNTERMINATED_BORDER
from domain.services.extract_diagram import extract_diagram
from tests.helpers.diagram_fixtures import bordered

UNTERMINATED_THEN_VALID = "**********\n*a\n*****\n*-->*\n*****"


def test_centered_diagram_splits_document() -> None:
    extraction = extract_diagram("Intro\n*****\n*-->*\n*****\nOutro\n")

    assert extraction.found
    assert extraction.before == "Intro\n"
    assert extraction.diagram == "-->\n"
    assert extraction.alignment_hint == "center"
    assert extraction.after == "\n\n\nOutro\n"
    assert extraction.diagnostics == ()


def test_interior_rows_lose_their_borders() -> None:
    extraction = extract_diagram(bordered("+--+", "|  |", "+--+"))

    assert extraction.diagram == "+--+\n|  |\n+--+\n"
    assert extraction.before == ""


def test_row_may_stop_short_of_right_border() -> None:
    extraction = extract_diagram("*****\n*-->\n*****\n")

    assert extraction.diagram == "-->\n"


def test_text_on_right_floats_diagram_left() -> None:
    extraction = extract_diagram("*****\n*-->* note\n*****\n")

    assert extraction.alignment_hint == "floatleft"
    assert extraction.diagram == "-->\n"
    assert extraction.after == "\n note\n\n"


def test_text_on_both_sides_floats_diagram_right() -> None:
    extraction = extract_diagram("   *****\nab *-->* cd\n   *****\n")

    assert extraction.alignment_hint == "floatright"
    assert extraction.diagram == "-->\n"
    assert extraction.after == " \nab  cd\n \n"


def test_text_without_border_has_no_diagram() -> None:
    source = "Plain *emphasis* and **** stars.\n"

    extraction = extract_diagram(source)

    assert not extraction.found
    assert extraction.before == source
    assert extraction.alignment_hint == ""
    assert extraction.diagnostics == ()


def test_empty_interior_is_no_diagram() -> None:
    extraction = extract_diagram("*****\n*****\n")

    assert not extraction.found
    assert extraction.diagram == ""


def test_unterminated_border_abandons_rest_of_text() -> None:
    extraction = extract_diagram(UNTERMINATED_THEN_VALID)

    assert not extraction.found
    assert extraction.before == UNTERMINATED_THEN_VALID
    assert extraction.after == ""
    assert [(d.kind, d.line, d.column) for d in extraction.diagnostics] == [
        (DIAGNOSTIC_UNTERMINATED_BORDER, 0, 0)
    ]


def test_unterminated_border_can_resume_at_next_border() -> None:
    extraction = extract_diagram(UNTERMINATED_THEN_VALID, resume_after_unterminated=True)

    assert extraction.diagram == "-->\n"
    assert extraction.before == "**********\n*a\n"
    assert [d.kind for d in extraction.diagnostics] == [DIAGNOSTIC_UNTERMINATED_BORDER]


def test_custom_marker() -> None:
    text = bordered("-->", marker="#")

    assert not extract_diagram(text).found
    assert extract_diagram(text, marker="#").diagram == "-->\n"

