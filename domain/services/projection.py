from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import List, Tuple

from domain.models import PositionedPoint, ProjectedPoint


@dataclass(frozen=True)
class LinearScale:
    domain_min: float
    domain_max: float
    range_min: float
    range_max: float

    def __post_init__(self) -> None:
        if self.domain_max == self.domain_min:
            msg = "scale domain must have non-zero width"
            raise ValueError(msg)

    @property
    def ratio(self) -> float:
        return (self.range_max - self.range_min) / (self.domain_max - self.domain_min)

    def apply(self, value: float) -> float:
        return self.range_min + (value - self.domain_min) * self.ratio

    def invert(self, value: float) -> float:
        if self.ratio == 0:
            return self.domain_min
        return self.domain_min + (value - self.range_min) / self.ratio


@dataclass(frozen=True)
class PlotArea:
    width: float = 960.0
    height: float = 640.0
    margin: float = 48.0

    def __post_init__(self) -> None:
        if self.width <= 2 * self.margin or self.height <= 2 * self.margin:
            msg = "plot area must be larger than its margins"
            raise ValueError(msg)

    @property
    def x_scale(self) -> LinearScale:
        return LinearScale(0.0, 1.0, self.margin, self.width - self.margin)

    @property
    def y_scale(self) -> LinearScale:
        # Screen y grows downward.
        return LinearScale(0.0, 1.0, self.height - self.margin, self.margin)


@dataclass(frozen=True)
class Viewport:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    min_zoom: float = 1.0
    max_zoom: float = 20.0

    def __post_init__(self) -> None:
        if not 0 < self.min_zoom <= self.max_zoom:
            msg = "zoom limits must satisfy 0 < min_zoom <= max_zoom"
            raise ValueError(msg)
        if not self.min_zoom <= self.zoom <= self.max_zoom:
            msg = f"zoom must be within [{self.min_zoom}, {self.max_zoom}], got {self.zoom}"
            raise ValueError(msg)

    def to_screen(self, base_x: float, base_y: float) -> Tuple[float, float]:
        return base_x * self.zoom + self.pan_x, base_y * self.zoom + self.pan_y

    def to_base(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        return (screen_x - self.pan_x) / self.zoom, (screen_y - self.pan_y) / self.zoom

    def pan_by(self, dx: float, dy: float) -> Viewport:
        return replace(self, pan_x=self.pan_x + dx, pan_y=self.pan_y + dy)

    def zoom_at(self, pointer_x: float, pointer_y: float, factor: float) -> Viewport:
        """Scale by ``factor`` keeping the pointer over the same plot location."""
        if factor <= 0:
            msg = f"zoom factor must be positive, got {factor}"
            raise ValueError(msg)
        zoom = min(max(self.zoom * factor, self.min_zoom), self.max_zoom)
        base_x, base_y = self.to_base(pointer_x, pointer_y)
        return replace(
            self,
            zoom=zoom,
            pan_x=pointer_x - base_x * zoom,
            pan_y=pointer_y - base_y * zoom,
        )


def project(
    plot_x: float, plot_y: float, area: PlotArea, viewport: Viewport
) -> Tuple[float, float]:
    return viewport.to_screen(area.x_scale.apply(plot_x), area.y_scale.apply(plot_y))


def project_points(
    points: Iterable[PositionedPoint],
    area: PlotArea,
    viewport: Viewport | None = None,
) -> List[ProjectedPoint]:
    viewport = viewport or Viewport()
    projected: List[ProjectedPoint] = []
    for point in points:
        x, y = project(point.plot_x, point.plot_y, area, viewport)
        projected.append(ProjectedPoint(name=point.name, x=x, y=y))
    return projected


def to_data(
    pointer_x: float, pointer_y: float, area: PlotArea, viewport: Viewport | None = None
) -> Tuple[float, float]:
    viewport = viewport or Viewport()
    base_x, base_y = viewport.to_base(pointer_x, pointer_y)
    return area.x_scale.invert(base_x), area.y_scale.invert(base_y)
