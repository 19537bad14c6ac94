from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from domain.models import AxisKey, Framework

UNKNOWN_METRIC = "unknown"
SUBTITLE_SEPARATOR = " • "


@dataclass(frozen=True)
class JustificationSection:
    heading: str
    text: str


@dataclass(frozen=True)
class FrameworkDetails:
    title: str
    subtitle: str
    description: str
    url: str
    logo_url: str
    category: str
    metrics: dict[str, str] = field(default_factory=dict)
    sections: List[JustificationSection] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "url": self.url,
            "logo_url": self.logo_url,
            "category": self.category,
            "metrics": dict(self.metrics),
            "sections": [
                {"heading": section.heading, "text": section.text} for section in self.sections
            ],
        }


def format_metric(value: float | None) -> str:
    if value is None:
        return UNKNOWN_METRIC
    return f"{value:g}"


def build_tooltip(framework: Framework, axis_x: AxisKey, axis_y: AxisKey) -> List[str]:
    lines = [
        framework.name,
        f"{axis_x.label}: {format_metric(framework.metric(axis_x))}",
        f"{axis_y.label}: {format_metric(framework.metric(axis_y))}",
    ]
    if framework.description:
        lines.append(framework.description)
    return lines


def build_details(framework: Framework) -> FrameworkDetails:
    metrics = {axis.value: format_metric(framework.metric(axis)) for axis in AxisKey}
    parts = [framework.category] if framework.category else []
    parts.extend(f"{axis.label}: {metrics[axis.value]}" for axis in AxisKey)
    sections = [
        JustificationSection(heading=f"{axis.label} Justification", text=framework.justification(axis))
        for axis in AxisKey
        if framework.justification(axis)
    ]
    return FrameworkDetails(
        title=framework.name,
        subtitle=SUBTITLE_SEPARATOR.join(parts),
        description=framework.description,
        url=framework.url,
        logo_url=framework.logo_url,
        category=framework.category,
        metrics=metrics,
        sections=sections,
    )
