from __future__ import annotations

from adapters.svg.renderer import RenderConfig, SvgDiagramRenderer
from app.config import AppSettings
from domain.services.replace_diagrams import DiagramReplacer


def build_renderer(settings: AppSettings, standalone: bool = False) -> SvgDiagramRenderer:
    diagrams = settings.diagrams
    return SvgDiagramRenderer(
        RenderConfig(
            scale=diagrams.scale,
            aspect=diagrams.aspect,
            stroke_width=diagrams.stroke_width,
            debug_show_grid=diagrams.debug_show_grid,
            debug_show_source=diagrams.debug_show_source,
            debug_hide_passthrough=diagrams.debug_hide_passthrough,
            standalone=standalone,
        )
    )


def build_replacer(settings: AppSettings) -> DiagramReplacer:
    diagrams = settings.diagrams
    return DiagramReplacer(
        build_renderer(settings),
        marker=diagrams.marker,
        caption_above=diagrams.caption_above,
        resume_after_unterminated=diagrams.resume_after_unterminated,
        allow_isolated_points=diagrams.allow_isolated_points,
    )
