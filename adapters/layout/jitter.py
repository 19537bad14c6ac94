from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Dict, List, Tuple

from domain.models import AxisKey, Framework, PositionedPoint
from domain.ports.layout import ScatterLayoutEngine

CollisionKey = Tuple[float, float]

PINNED_VALUES = (0.0, 1.0)


@dataclass(frozen=True)
class JitterConfig:
    amount: float = 0.02
    precision: int = 2

    def __post_init__(self) -> None:
        if not self.amount > 0:
            msg = f"jitter amount must be positive, got {self.amount}"
            raise ValueError(msg)
        if self.precision < 0:
            msg = f"collision precision must be non-negative, got {self.precision}"
            raise ValueError(msg)


def name_seeds(name: str) -> Tuple[int, int]:
    seed_x = sum(ord(char) for char in name) % 100
    seed_y = sum((idx + 1) * ord(char) for idx, char in enumerate(name)) % 100
    return seed_x, seed_y


def seed_offset(seed: int, amount: float) -> float:
    # Bucket centre in (0, 1), so the offset is never exactly zero.
    return ((seed + 0.5) / 100.0 - 0.5) * amount


def name_offsets(name: str, amount: float) -> Tuple[float, float]:
    seed_x, seed_y = name_seeds(name)
    return seed_offset(seed_x, amount), seed_offset(seed_y, amount)


def raw_value(entity: Framework, axis: AxisKey) -> float:
    value = entity.metric(axis)
    if value is None or math.isnan(value):
        return 0.0
    return float(value)


def collision_key(raw_x: float, raw_y: float, precision: int = 2) -> CollisionKey:
    return (round(raw_x, precision), round(raw_y, precision))


def displace(raw: float, offset: float) -> float:
    if raw in PINNED_VALUES:
        return raw
    plotted = raw + offset
    if 0.0 <= raw <= 1.0:
        plotted = min(max(plotted, 0.0), 1.0)
    return plotted


class JitterLayoutEngine(ScatterLayoutEngine):
    """Places entities on the scatter plane, nudging exact collisions apart.

    The first entity at a collision key keeps its coordinates; every later one
    is shifted by an offset derived only from its own name, so a name always
    lands in the same spot regardless of call order or collection size.
    Coordinates of exactly 0 or 1 are never shifted.

    Three or more entities sharing one key are displaced independently and can
    still overlap each other. Names are expected to be unique within one call;
    duplicates resolve to a single hit-test target.
    """

    def __init__(self, config: JitterConfig | None = None) -> None:
        self.config = config or JitterConfig()

    def compute_layout(
        self, entities: Sequence[Framework], axis_x: AxisKey, axis_y: AxisKey
    ) -> List[PositionedPoint]:
        seen: Dict[CollisionKey, int] = {}
        points: List[PositionedPoint] = []
        for entity in entities:
            raw_x = raw_value(entity, axis_x)
            raw_y = raw_value(entity, axis_y)
            key = collision_key(raw_x, raw_y, self.config.precision)
            count = seen.get(key, 0)
            seen[key] = count + 1
            if count == 0:
                plot_x, plot_y = raw_x, raw_y
            else:
                offset_x, offset_y = name_offsets(entity.name, self.config.amount)
                plot_x = displace(raw_x, offset_x)
                plot_y = displace(raw_y, offset_y)
            points.append(
                PositionedPoint(
                    name=entity.name,
                    raw_x=raw_x,
                    raw_y=raw_y,
                    plot_x=plot_x,
                    plot_y=plot_y,
                )
            )
        return points


def compute_layout(
    entities: Sequence[Framework],
    axis_x: AxisKey,
    axis_y: AxisKey,
    config: JitterConfig | None = None,
) -> List[PositionedPoint]:
    return JitterLayoutEngine(config).compute_layout(entities, axis_x, axis_y)
