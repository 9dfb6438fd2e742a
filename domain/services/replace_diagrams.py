from __future__ import annotations

import logging
import re

from domain.models import (
    DIAGNOSTIC_UNTERMINATED_BORDER,
    Diagnostic,
    DiagramReplacement,
)
from domain.ports.rendering import DiagramRenderer
from domain.services.extract_diagram import DEFAULT_MARKER, extract_diagram
from domain.services.parse_diagram import parse_diagram

logger = logging.getLogger(__name__)

CAPTION_PATTERN = re.compile(r"\n*[ \t]*\[[^\n]+\][ \t]*(?=\n)")


def caption_markup(caption: str) -> str:
    return f'<center><div class="imagecaption">{caption}</div></center>'


def split_caption(after: str) -> tuple[str | None, str]:
    match = CAPTION_PATTERN.match(after)
    if not match:
        return None, after
    caption = match.group(0).strip()[1:-1]
    return caption, after[match.end() :]


class DiagramReplacer:
    def __init__(
        self,
        renderer: DiagramRenderer,
        marker: str = DEFAULT_MARKER,
        caption_above: bool = True,
        resume_after_unterminated: bool = False,
        allow_isolated_points: bool = False,
    ) -> None:
        self.renderer = renderer
        self.marker = marker
        self.caption_above = caption_above
        self.resume_after_unterminated = resume_after_unterminated
        self.allow_isolated_points = allow_isolated_points

    def replace(self, text: str) -> DiagramReplacement:
        parts: list[str] = []
        diagnostics: list[Diagnostic] = []
        count = 0
        remaining = text

        while True:
            extraction = extract_diagram(
                remaining,
                marker=self.marker,
                resume_after_unterminated=self.resume_after_unterminated,
            )
            diagnostics.extend(extraction.diagnostics)
            for diagnostic in extraction.diagnostics:
                if diagnostic.kind == DIAGNOSTIC_UNTERMINATED_BORDER:
                    logger.warning(
                        "Diagram border opened at line %s, column %s is never closed",
                        diagnostic.line,
                        diagnostic.column,
                    )
            if not extraction.found:
                parts.append(remaining)
                break

            caption, after = split_caption(extraction.after)
            parsed = parse_diagram(
                extraction.diagram, allow_isolated_points=self.allow_isolated_points
            )
            diagnostics.extend(parsed.diagnostics)
            svg = self.renderer.render(parsed, extraction.alignment_hint)
            count += 1
            logger.debug(
                "Converted diagram %s: %sx%s cells, %s paths, %s decorations",
                count,
                parsed.grid.width,
                parsed.grid.height,
                len(parsed.paths),
                len(parsed.decorations),
            )

            parts.append(extraction.before)
            if caption is not None and self.caption_above:
                parts.append(caption_markup(caption))
            parts.append(svg)
            if caption is not None and not self.caption_above:
                parts.append(caption_markup(caption))
            parts.append("\n")
            remaining = after

        return DiagramReplacement(text="".join(parts), diagram_count=count, diagnostics=diagnostics)
