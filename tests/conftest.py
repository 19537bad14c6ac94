from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, LandscapeSettings
from domain.models import Framework
from tests.helpers.dataset_fixtures import SAMPLE_RECORDS, write_dataset


def _clear_landscape_env() -> None:
    for key in list(os.environ):
        if key.startswith("LANDSCAPE_"):
            os.environ.pop(key, None)


_clear_landscape_env()


@pytest.fixture(autouse=True)
def clear_landscape_env() -> Generator[None, None, None]:
    _clear_landscape_env()
    yield
    _clear_landscape_env()


@pytest.fixture
def sample_frameworks() -> list[Framework]:
    return [Framework.model_validate(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def dataset_path(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "data" / "agent_frameworks.json", SAMPLE_RECORDS)


@pytest.fixture
def landscape_settings(dataset_path: Path) -> LandscapeSettings:
    return LandscapeSettings(
        title="Test Landscape",
        dataset_source="filesystem",
        dataset_path=dataset_path,
        point_radius_px=8.0,
        plot_width=960.0,
        plot_height=640.0,
        plot_margin=48.0,
    )


@pytest.fixture
def landscape_settings_factory(
    landscape_settings: LandscapeSettings,
) -> Callable[..., LandscapeSettings]:
    def _factory(**overrides: object) -> LandscapeSettings:
        return landscape_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(landscape_settings: LandscapeSettings) -> AppSettings:
    return AppSettings(landscape=landscape_settings)


@pytest.fixture
def app_settings_factory(
    landscape_settings_factory: Callable[..., LandscapeSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(landscape=landscape_settings_factory(**overrides))

    return _factory
