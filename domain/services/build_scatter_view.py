from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, List

from domain.models import AxisKey, AxisSelection, Framework, PositionedPoint, ProjectedPoint
from domain.ports.layout import ScatterLayoutEngine
from domain.services.filter_frameworks import filter_frameworks
from domain.services.hit_test import hit_test
from domain.services.projection import PlotArea, Viewport, project_points
from domain.theme import Theme, legend_label, palette_for


@dataclass(frozen=True)
class ScatterPoint:
    framework: Framework
    position: PositionedPoint
    pixel: ProjectedPoint
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.position.name,
            "category": self.framework.category,
            "raw_x": self.position.raw_x,
            "raw_y": self.position.raw_y,
            "plot_x": self.position.plot_x,
            "plot_y": self.position.plot_y,
            "pixel_x": self.pixel.x,
            "pixel_y": self.pixel.y,
            "color": self.color,
        }


@dataclass(frozen=True)
class ScatterView:
    axes: AxisSelection
    area: PlotArea
    viewport: Viewport
    theme: Theme
    points: List[ScatterPoint] = field(default_factory=list)

    @property
    def projected(self) -> List[ProjectedPoint]:
        return [point.pixel for point in self.points]

    def find(self, name: str) -> ScatterPoint | None:
        for point in self.points:
            if point.position.name == name:
                return point
        return None

    def hit(self, pointer_x: float, pointer_y: float, radius_px: float) -> ScatterPoint | None:
        name = hit_test(pointer_x, pointer_y, self.projected, radius_px)
        return self.find(name) if name is not None else None

    def to_dict(self) -> dict[str, Any]:
        categories: List[str] = []
        for point in self.points:
            if point.framework.category and point.framework.category not in categories:
                categories.append(point.framework.category)
        return {
            "axes": {
                "x": _axis_payload(self.axes.x),
                "y": _axis_payload(self.axes.y),
            },
            "plot": {
                "width": self.area.width,
                "height": self.area.height,
                "margin": self.area.margin,
            },
            "viewport": {
                "zoom": self.viewport.zoom,
                "pan_x": self.viewport.pan_x,
                "pan_y": self.viewport.pan_y,
            },
            "theme": self.theme.value,
            "palette": palette_for(self.theme).to_dict(),
            "legend": [
                {"category": category, "label": legend_label(category)} for category in categories
            ],
            "points": [point.to_dict() for point in self.points],
        }


class BuildScatterView:
    def __init__(self, layout: ScatterLayoutEngine, area: PlotArea) -> None:
        self._layout = layout
        self._area = area

    def build(
        self,
        frameworks: Sequence[Framework],
        axes: AxisSelection,
        viewport: Viewport | None = None,
        theme: Theme = Theme.LIGHT,
        category: str | None = None,
        query: str | None = "",
    ) -> ScatterView:
        viewport = viewport or Viewport()
        selected = filter_frameworks(frameworks, category=category, query=query)
        positions = self._layout.compute_layout(selected, axes.x, axes.y)
        pixels = project_points(positions, self._area, viewport)
        palette = palette_for(theme)
        points = [
            ScatterPoint(
                framework=framework,
                position=position,
                pixel=pixel,
                color=palette.color_for(framework.category),
            )
            for framework, position, pixel in zip(selected, positions, pixels)
        ]
        return ScatterView(
            axes=axes,
            area=self._area,
            viewport=viewport,
            theme=theme,
            points=points,
        )


def _axis_payload(axis: AxisKey) -> dict[str, str]:
    return {"key": axis.value, "label": axis.label, "caption": axis.caption}
