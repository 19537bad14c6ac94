from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


DEFAULT_POINT_COLOR = "rgba(148, 163, 184, 0.6)"

CATEGORY_COLORS: Dict[str, str] = {
    "Agent Framework": "rgba(255, 99, 132, 0.6)",
    "Orchestration": "rgba(53, 162, 235, 0.6)",
}

CATEGORY_LEGEND_LABELS: Dict[str, str] = {
    "Agent Framework": "Agent Frameworks",
    "Orchestration": "Orchestration Tools",
}


@dataclass(frozen=True)
class Palette:
    background: str
    text: str
    grid: str
    point_border: str
    categories: Dict[str, str] = field(default_factory=lambda: dict(CATEGORY_COLORS))
    fallback: str = DEFAULT_POINT_COLOR

    def color_for(self, category: str) -> str:
        return self.categories.get(category, self.fallback)

    def to_dict(self) -> dict[str, Any]:
        return {
            "background": self.background,
            "text": self.text,
            "grid": self.grid,
            "point_border": self.point_border,
            "categories": dict(self.categories),
            "fallback": self.fallback,
        }


PALETTES: Dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        background="#ffffff",
        text="#111827",
        grid="rgba(0, 0, 0, 0.1)",
        point_border="#ffffff",
    ),
    Theme.DARK: Palette(
        background="#0a0e1a",
        text="#f9fafb",
        grid="rgba(255, 255, 255, 0.1)",
        point_border="#1f2937",
    ),
}


def palette_for(theme: Theme) -> Palette:
    return PALETTES[theme]


def color_for(category: str, theme: Theme = Theme.LIGHT) -> str:
    return palette_for(theme).color_for(category)


def legend_label(category: str) -> str:
    return CATEGORY_LEGEND_LABELS.get(category, category)
