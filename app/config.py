from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

DEFAULT_CONFIG_PATH = Path("config/diagrams.yaml")


class DiagramSettings(BaseModel):
    marker: str = "*"
    scale: float = Field(default=8.0, gt=0)
    aspect: float = Field(default=2.0, gt=0)
    stroke_width: float = Field(default=2.0, ge=0)
    caption_above: bool = True
    resume_after_unterminated: bool = False
    allow_isolated_points: bool = False
    debug_show_grid: bool = False
    debug_show_source: bool = False
    debug_hide_passthrough: bool | None = None

    @field_validator("marker", mode="before")
    @classmethod
    def ensure_single_marker(cls, value: object) -> str:
        marker = str(value) if value is not None else ""
        if len(marker) != 1 or marker.isspace():
            msg = "diagrams.marker must be exactly one non-blank character"
            raise ValueError(msg)
        return marker

    @model_validator(mode="after")
    def resolve_hide_passthrough(self) -> DiagramSettings:
        if self.debug_hide_passthrough is None:
            self.debug_hide_passthrough = self.debug_show_source
        return self


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ADC_", env_nested_delimiter="__")

    diagrams: DiagramSettings = DiagramSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No .env or secrets directory: the YAML file is the only file source
        if cls._yaml_path is None:
            return init_settings, env_settings
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path)
        return init_settings, env_settings, yaml_settings


def resolve_config_path(config_path: Path | None = None) -> Path | None:
    """Pick the YAML file: explicit path, then ``ADC_CONFIG_PATH``, then the default."""
    if config_path is not None:
        return config_path
    env_path = os.getenv("ADC_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None


def load_settings(config_path: Path | None = None) -> AppSettings:
    resolved_path = resolve_config_path(config_path)
    if resolved_path is not None and not resolved_path.exists():
        msg = f"Config file not found: {resolved_path}"
        raise FileNotFoundError(msg)

    AppSettings._yaml_path = resolved_path
    try:
        return AppSettings()
    finally:
        AppSettings._yaml_path = None
