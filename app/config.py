from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.jitter import JitterConfig
from domain.models import AxisKey
from domain.services.projection import PlotArea
from domain.theme import Theme

DEFAULT_CONFIG_PATH = Path("config/landscape.yaml")


class LandscapeSettings(BaseModel):
    title: str = "AI Agent Frameworks Landscape"
    dataset_source: Literal["filesystem", "http"] = "filesystem"
    dataset_path: Path = Path("data/agent_frameworks.json")
    dataset_url: str | None = None
    default_axis_x: AxisKey = AxisKey.CODE_LEVEL
    default_axis_y: AxisKey = AxisKey.COMPLEXITY
    jitter_amount: float = Field(default=0.02, gt=0)
    collision_precision: int = Field(default=2, ge=0)
    point_radius_px: float = Field(default=8.0, ge=0)
    plot_width: float = Field(default=960.0, gt=0)
    plot_height: float = Field(default=640.0, gt=0)
    plot_margin: float = Field(default=48.0, ge=0)
    theme: Theme = Theme.LIGHT
    preload_logos: bool = False
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def check_sources(self) -> LandscapeSettings:
        if self.dataset_source == "http" and not self.dataset_url:
            msg = "landscape.dataset_url is required when dataset_source is http"
            raise ValueError(msg)
        if self.plot_width <= 2 * self.plot_margin or self.plot_height <= 2 * self.plot_margin:
            msg = "landscape.plot_margin leaves no room inside the plot area"
            raise ValueError(msg)
        return self

    def to_jitter_config(self) -> JitterConfig:
        return JitterConfig(amount=self.jitter_amount, precision=self.collision_precision)

    def to_plot_area(self) -> PlotArea:
        return PlotArea(width=self.plot_width, height=self.plot_height, margin=self.plot_margin)

    def dataset_location(self) -> str:
        if self.dataset_source == "http":
            return str(self.dataset_url)
        return str(self.dataset_path)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LANDSCAPE_", env_nested_delimiter="__")

    landscape: LandscapeSettings = LandscapeSettings()

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
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("LANDSCAPE_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
