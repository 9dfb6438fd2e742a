from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from adapters.svg.renderer import SvgDiagramRenderer
from app.config import AppSettings, DiagramSettings, load_settings, resolve_config_path
from app.diagram_wiring import build_renderer, build_replacer


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.diagrams.marker == "*"
    assert settings.diagrams.scale == 8
    assert settings.diagrams.caption_above is True
    assert settings.diagrams.resume_after_unterminated is False
    assert settings.diagrams.debug_hide_passthrough is False


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADC_DIAGRAMS__SCALE", "10")
    monkeypatch.setenv("ADC_DIAGRAMS__CAPTION_ABOVE", "false")

    settings = load_settings()

    assert settings.diagrams.scale == 10
    assert settings.diagrams.caption_above is False


def test_yaml_file(tmp_path: Path) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("diagrams:\n  marker: '#'\n  allow_isolated_points: true\n", encoding="utf-8")

    settings = load_settings(config)

    assert settings.diagrams.marker == "#"
    assert settings.diagrams.allow_isolated_points is True


def test_default_yaml_location_is_used(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "diagrams.yaml").write_text(
        "diagrams:\n  stroke_width: 1\n", encoding="utf-8"
    )

    assert load_settings().diagrams.stroke_width == 1


def test_env_beats_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("diagrams:\n  scale: 4\n", encoding="utf-8")
    monkeypatch.setenv("ADC_CONFIG_PATH", str(config))
    monkeypatch.setenv("ADC_DIAGRAMS__SCALE", "12")

    assert load_settings().diagrams.scale == 12


def test_explicit_config_beats_env_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    explicit = tmp_path / "explicit.yaml"
    monkeypatch.setenv("ADC_CONFIG_PATH", str(tmp_path / "env.yaml"))

    assert resolve_config_path(explicit) == explicit
    assert resolve_config_path() == tmp_path / "env.yaml"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml")


@pytest.mark.parametrize("marker", ["", "**", " "])
def test_marker_must_be_single_glyph(marker: str) -> None:
    with pytest.raises(ValidationError):
        DiagramSettings(marker=marker)


def test_scale_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        DiagramSettings(scale=0)


def test_hide_passthrough_follows_show_source() -> None:
    assert DiagramSettings(debug_show_source=True).debug_hide_passthrough is True
    assert (
        DiagramSettings(debug_show_source=True, debug_hide_passthrough=False).debug_hide_passthrough
        is False
    )


def test_wiring_passes_settings_through(
    app_settings_factory: Callable[..., AppSettings],
) -> None:
    settings = app_settings_factory(marker="#", scale=10, caption_above=False)

    renderer = build_renderer(settings, standalone=True)
    replacer = build_replacer(settings)

    assert renderer.config.scale == 10
    assert renderer.config.standalone is True
    assert replacer.marker == "#"
    assert replacer.caption_above is False
    assert isinstance(replacer.renderer, SvgDiagramRenderer)
    assert replacer.renderer.config.standalone is False
