from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import ORJSONResponse, Response

from adapters.layout.jitter import JitterLayoutEngine
from app.config import AppSettings, load_settings
from app.dataset_wiring import (
    build_framework_repository,
    build_image_cache,
    build_layout_engine,
    build_logo_loader,
    close_resources,
)
from domain.models import AxisKey, AxisSelection, Framework
from domain.ports.repositories import DatasetLoadError, FrameworkRepository
from domain.services.build_scatter_view import BuildScatterView, ScatterView
from domain.services.filter_frameworks import filter_frameworks, list_categories
from domain.services.framework_views import build_details, build_tooltip
from domain.services.image_cache import LogoLoader
from domain.services.projection import Viewport
from domain.services.unique_names import find_duplicate_names, suffix_duplicate_names
from domain.theme import Theme

logger = logging.getLogger(__name__)

LOAD_FAILED_DETAIL = "Failed to load data"


class LandscapeContext:
    """Per-app state: the dataset (loaded once, lazily) and its collaborators."""

    def __init__(
        self,
        settings: AppSettings,
        repository: FrameworkRepository,
        layout: JitterLayoutEngine,
        logo_loader: LogoLoader,
    ) -> None:
        self.settings = settings
        self.repository = repository
        self.layout = layout
        self.logo_loader = logo_loader
        self.image_cache = build_image_cache(settings, logo_loader)
        self.scatter = BuildScatterView(layout, settings.landscape.to_plot_area())
        self._frameworks: list[Framework] | None = None
        self._lock = threading.Lock()

    def frameworks(self) -> list[Framework]:
        with self._lock:
            if self._frameworks is None:
                loaded = self.repository.load(self.settings.landscape.dataset_location())
                duplicates = find_duplicate_names(loaded)
                if duplicates:
                    logger.warning("Dataset has duplicate framework names: %s", duplicates)
                self._frameworks = suffix_duplicate_names(loaded)
                if self.settings.landscape.preload_logos:
                    self.image_cache.preload(self._frameworks)
            return self._frameworks

    def framework(self, name: str) -> Framework | None:
        for framework in self.frameworks():
            if framework.name == name:
                return framework
        return None

    def close(self) -> None:
        self.image_cache.clear()
        close_resources(self.repository, self.logo_loader)


def create_app(
    settings: AppSettings,
    *,
    repository: FrameworkRepository | None = None,
    logo_loader: LogoLoader | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> Any:
        yield
        context.close()

    app = FastAPI(title=settings.landscape.title, lifespan=lifespan)
    context = LandscapeContext(
        settings=settings,
        repository=repository or build_framework_repository(settings),
        layout=build_layout_engine(settings),
        logo_loader=logo_loader or build_logo_loader(settings),
    )
    app.state.context = context

    @app.get("/health")
    def health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.get("/api/frameworks")
    def api_frameworks(
        category: str | None = Query(default=None),
        q: str = Query(default=""),
        context: LandscapeContext = Depends(get_context),
    ) -> ORJSONResponse:
        frameworks = filter_frameworks(load_frameworks(context), category=category, query=q)
        return ORJSONResponse({"items": [framework.to_record() for framework in frameworks]})

    @app.get("/api/categories")
    def api_categories(context: LandscapeContext = Depends(get_context)) -> ORJSONResponse:
        return ORJSONResponse({"categories": list_categories(load_frameworks(context))})

    @app.get("/api/frameworks/{name}")
    def api_framework_details(
        name: str,
        context: LandscapeContext = Depends(get_context),
    ) -> ORJSONResponse:
        framework = require_framework(context, name)
        return ORJSONResponse(build_details(framework).to_dict())

    @app.get("/api/frameworks/{name}/tooltip")
    def api_framework_tooltip(
        name: str,
        x: AxisKey | None = Query(default=None),
        y: AxisKey | None = Query(default=None),
        context: LandscapeContext = Depends(get_context),
    ) -> ORJSONResponse:
        framework = require_framework(context, name)
        axes = resolve_axes(context, x, y)
        lines = build_tooltip(framework, axes.x, axes.y)
        return ORJSONResponse({"name": framework.name, "lines": lines})

    @app.get("/api/frameworks/{name}/logo")
    def api_framework_logo(
        name: str,
        context: LandscapeContext = Depends(get_context),
    ) -> Response:
        framework = require_framework(context, name)
        image = context.image_cache.fetch(framework)
        if image is None:
            raise HTTPException(status_code=404, detail="Logo not found")
        return Response(content=image.content, media_type=image.media_type)

    @app.get("/api/layout")
    def api_layout(
        x: AxisKey | None = Query(default=None),
        y: AxisKey | None = Query(default=None),
        category: str | None = Query(default=None),
        q: str = Query(default=""),
        zoom: float = Query(default=1.0),
        pan_x: float = Query(default=0.0),
        pan_y: float = Query(default=0.0),
        theme: Theme | None = Query(default=None),
        context: LandscapeContext = Depends(get_context),
    ) -> ORJSONResponse:
        view = build_view(context, x, y, category, q, zoom, pan_x, pan_y, theme)
        payload = view.to_dict()
        payload["point_radius_px"] = context.settings.landscape.point_radius_px
        return ORJSONResponse(payload)

    @app.get("/api/hit")
    def api_hit(
        px: float = Query(...),
        py: float = Query(...),
        x: AxisKey | None = Query(default=None),
        y: AxisKey | None = Query(default=None),
        category: str | None = Query(default=None),
        q: str = Query(default=""),
        zoom: float = Query(default=1.0),
        pan_x: float = Query(default=0.0),
        pan_y: float = Query(default=0.0),
        context: LandscapeContext = Depends(get_context),
    ) -> ORJSONResponse:
        view = build_view(context, x, y, category, q, zoom, pan_x, pan_y, None)
        point = view.hit(px, py, context.settings.landscape.point_radius_px)
        if point is None:
            return ORJSONResponse({"name": None})
        return ORJSONResponse(
            {
                "name": point.position.name,
                "point": point.to_dict(),
                "details": build_details(point.framework).to_dict(),
            }
        )

    return app


def get_context(request: Request) -> LandscapeContext:
    return cast(LandscapeContext, request.app.state.context)


def load_frameworks(context: LandscapeContext) -> Sequence[Framework]:
    try:
        return context.frameworks()
    except DatasetLoadError as exc:
        logger.exception("Dataset load failed: %s", exc.reason)
        raise HTTPException(status_code=503, detail=LOAD_FAILED_DETAIL) from exc


def require_framework(context: LandscapeContext, name: str) -> Framework:
    load_frameworks(context)
    framework = context.framework(name)
    if framework is None:
        raise HTTPException(status_code=404, detail="Framework not found")
    return framework


def resolve_axes(
    context: LandscapeContext, x: AxisKey | None, y: AxisKey | None
) -> AxisSelection:
    landscape = context.settings.landscape
    return AxisSelection(x=x or landscape.default_axis_x, y=y or landscape.default_axis_y)


def build_view(
    context: LandscapeContext,
    x: AxisKey | None,
    y: AxisKey | None,
    category: str | None,
    query: str,
    zoom: float,
    pan_x: float,
    pan_y: float,
    theme: Theme | None,
) -> ScatterView:
    try:
        viewport = Viewport(zoom=zoom, pan_x=pan_x, pan_y=pan_y)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return context.scatter.build(
        load_frameworks(context),
        resolve_axes(context, x, y),
        viewport=viewport,
        theme=theme or context.settings.landscape.theme,
        category=category,
        query=query,
    )


app = create_app(load_settings())
