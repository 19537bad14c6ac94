from __future__ import annotations

from collections.abc import Sequence
from typing import List, Protocol

from domain.models import AxisKey, Framework, PositionedPoint


class ScatterLayoutEngine(Protocol):
    def compute_layout(
        self, entities: Sequence[Framework], axis_x: AxisKey, axis_y: AxisKey
    ) -> List[PositionedPoint]:
        ...
