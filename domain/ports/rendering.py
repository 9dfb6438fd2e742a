from __future__ import annotations

from typing import Protocol

from domain.models import AlignmentHint, ParsedDiagram


class DiagramRenderer(Protocol):
    def render(self, parsed: ParsedDiagram, alignment_hint: AlignmentHint = "") -> str:
        ...
