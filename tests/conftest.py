from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from adapters.svg.renderer import RenderConfig, SvgDiagramRenderer
from app.config import AppSettings, DiagramSettings


def _clear_adc_env() -> None:
    for key in list(os.environ):
        if key.startswith("ADC_"):
            os.environ.pop(key, None)


_clear_adc_env()


@pytest.fixture(autouse=True)
def clear_adc_env() -> Generator[None, None, None]:
    _clear_adc_env()
    yield
    _clear_adc_env()


@pytest.fixture
def diagram_settings() -> DiagramSettings:
    return DiagramSettings(
        marker="*",
        scale=8.0,
        aspect=2.0,
        stroke_width=2.0,
        caption_above=True,
        resume_after_unterminated=False,
        allow_isolated_points=False,
        debug_show_grid=False,
        debug_show_source=False,
    )


@pytest.fixture
def diagram_settings_factory(
    diagram_settings: DiagramSettings,
) -> Callable[..., DiagramSettings]:
    def _factory(**overrides: object) -> DiagramSettings:
        return diagram_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(diagram_settings: DiagramSettings) -> AppSettings:
    return AppSettings(diagrams=diagram_settings)


@pytest.fixture
def app_settings_factory(
    diagram_settings_factory: Callable[..., DiagramSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(diagrams=diagram_settings_factory(**overrides))

    return _factory


@pytest.fixture
def svg_renderer() -> SvgDiagramRenderer:
    return SvgDiagramRenderer(RenderConfig())
