from __future__ import annotations

from adapters.filesystem.framework_repository import FileSystemFrameworkRepository
from adapters.http.framework_repository import HttpFrameworkRepository
from adapters.http.logo_loader import HttpLogoLoader
from adapters.layout.jitter import JitterLayoutEngine
from app.config import AppSettings
from domain.ports.repositories import FrameworkRepository
from domain.services.image_cache import ImageCache, LogoLoader


def build_framework_repository(settings: AppSettings) -> FrameworkRepository:
    landscape = settings.landscape
    if landscape.dataset_source == "http":
        if not landscape.dataset_url:
            msg = "landscape.dataset_url is required when dataset_source is http"
            raise ValueError(msg)
        return HttpFrameworkRepository(timeout=landscape.http_timeout_seconds)
    return FileSystemFrameworkRepository()


def build_layout_engine(settings: AppSettings) -> JitterLayoutEngine:
    return JitterLayoutEngine(settings.landscape.to_jitter_config())


def build_logo_loader(settings: AppSettings) -> HttpLogoLoader:
    return HttpLogoLoader(timeout=settings.landscape.http_timeout_seconds)


def build_image_cache(settings: AppSettings, loader: LogoLoader | None = None) -> ImageCache:
    return ImageCache(loader or build_logo_loader(settings))


def close_resources(*resources: object) -> None:
    """Close the HTTP adapters among ``resources``; other collaborators are left alone."""
    for resource in resources:
        if isinstance(resource, (HttpFrameworkRepository, HttpLogoLoader)):
            resource.close()
