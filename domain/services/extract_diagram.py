from __future__ import annotations

import re
from dataclasses import dataclass

from domain.models import (
    DIAGNOSTIC_UNTERMINATED_BORDER,
    AlignmentHint,
    Diagnostic,
    DiagramExtraction,
)

DEFAULT_MARKER = "*"
MIN_BORDER_WIDTH = 5

_NON_SPACE = re.compile(r"\S")
_LEADING_BLANKS = re.compile(r"\A[ \t]*[ \t]")
_TRAILING_BLANKS = re.compile(r"[ \t][ \t]*\Z")


@dataclass
class _BorderScan:
    source: str
    marker: str
    x_min: int
    x_max: int
    line_beginning: int
    next_line_beginning: int = 0
    text_on_left: bool = False
    text_on_right: bool = False
    no_right_border: bool = False

    def char_at(self, index: int) -> str:
        if 0 <= index < len(self.source):
            return self.source[index]
        return ""

    def advance(self) -> None:
        source = self.source
        begin = self.line_beginning
        self.next_line_beginning = source.find("\n", begin) + 1
        line_end = self.next_line_beginning or len(source)
        if not self.text_on_left:
            self.text_on_left = bool(_NON_SPACE.search(source[begin : begin + self.x_min]))
        if self.char_at(begin + self.x_max) != self.marker:
            self.no_right_border = True
        if self.no_right_border:
            self.text_on_right = False
        elif not self.text_on_right:
            right = source[begin + self.x_max + 1 : line_end]
            self.text_on_right = any(c not in f" \t\n\r{self.marker}" for c in right)

    def alignment_hint(self) -> AlignmentHint:
        if self.text_on_left:
            return "floatright"
        if self.text_on_right:
            return "floatleft"
        return "center"


def extract_diagram(
    source: str,
    marker: str = DEFAULT_MARKER,
    resume_after_unterminated: bool = False,
) -> DiagramExtraction:
    """Split ``source`` around its first bordered diagram.

    The returned interior has the border markers stripped. Text found beside the
    border is moved into ``after`` so it can be re-inserted once the diagram has
    been replaced. If a border opens but the text ends before it closes, no
    diagram is reported for the entire buffer unless
    ``resume_after_unterminated`` is set, in which case scanning continues at the
    next run of markers.
    """
    border_start = marker * MIN_BORDER_WIDTH
    diagnostics: list[Diagnostic] = []

    i = source.find(border_start)
    while i >= 0:
        line_beginning = source.rfind("\n", 0, i) + 1
        x_min = i - line_beginning
        j = i + len(border_start)
        while j < len(source) and source[j] == marker:
            j += 1
        x_max = j - line_beginning - 1

        before = source[:line_beginning]
        after = re.sub(r"[ \t]+\Z", " ", source[line_beginning:i])
        interior: list[str] = []
        hint: AlignmentHint = "center"

        scan = _BorderScan(source, marker, x_min, x_max, line_beginning)
        scan.advance()

        previous_ending = j
        while True:
            scan.line_beginning = scan.next_line_beginning
            scan.advance()
            line_beginning = scan.line_beginning
            if line_beginning == 0:
                diagnostics.append(
                    Diagnostic(
                        kind=DIAGNOSTIC_UNTERMINATED_BORDER,
                        line=source.count("\n", 0, i),
                        column=x_min,
                        detail="diagram border is not closed before the end of the text",
                    )
                )
                if resume_after_unterminated:
                    break
                return _no_diagram(source, diagnostics)

            hint = scan.alignment_hint()

            left_ok = scan.char_at(line_beginning + x_min) == marker
            right_ok = not scan.text_on_left or scan.char_at(line_beginning + x_max) == marker
            if not (left_ok and right_ok):
                break

            x = x_min
            while x < x_max and scan.char_at(line_beginning + x) == marker:
                x += 1

            begin = line_beginning + x_min
            end = line_beginning + x_max
            if not scan.text_on_left:
                # A line may stop short of the right border
                newline_location = source.find("\n", begin)
                if newline_location != -1:
                    end = min(end, newline_location)

            between = source[previous_ending:begin]
            after += _TRAILING_BLANKS.sub(" ", _LEADING_BLANKS.sub(" ", between))

            if x == x_max:
                after += source[line_beginning + x_max + 1 :]
                return DiagramExtraction(
                    before=before,
                    diagram="".join(interior),
                    alignment_hint=hint,
                    after=after,
                    diagnostics=tuple(diagnostics),
                )

            interior.append(source[begin + 1 : end] + "\n")
            previous_ending = end + 1

        i = source.find(border_start, i + len(border_start))

    return _no_diagram(source, diagnostics)


def _no_diagram(source: str, diagnostics: list[Diagnostic]) -> DiagramExtraction:
    return DiagramExtraction(
        before=source,
        diagram="",
        alignment_hint="",
        after="",
        diagnostics=tuple(diagnostics),
    )
