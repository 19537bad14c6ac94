from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

JUSTIFICATION_SUFFIX = "_justification"


class AxisKey(str, Enum):
    CODE_LEVEL = "code_level"
    COMPLEXITY = "complexity"
    LEARNING_CURVE = "learning_curve"

    @property
    def label(self) -> str:
        return AXIS_LABELS[self]

    @property
    def caption(self) -> str:
        return AXIS_CAPTIONS[self]


AXIS_LABELS: Dict[AxisKey, str] = {
    AxisKey.CODE_LEVEL: "Code Level",
    AxisKey.COMPLEXITY: "Complexity",
    AxisKey.LEARNING_CURVE: "Learning Curve",
}

AXIS_CAPTIONS: Dict[AxisKey, str] = {
    AxisKey.CODE_LEVEL: "Code Level (0 = No Code, 1 = Advanced Coding)",
    AxisKey.COMPLEXITY: "Complexity (0 = Simple, 1 = Complex)",
    AxisKey.LEARNING_CURVE: "Learning Curve (0 = Easy, 1 = Steep)",
}


def normalize_metric(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


class Framework(BaseModel):
    """One agent-framework record.

    Accepts the flat shape of the published dataset (``code_level``,
    ``code_level_justification``, ...) and folds the metric columns into
    ``attributes`` keyed by :class:`AxisKey`. Unknown attribute keys are rejected.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    category: str = ""
    description: str = ""
    url: str = ""
    logo_url: str = ""
    attributes: Dict[AxisKey, Optional[float]] = Field(default_factory=dict)
    justifications: Dict[AxisKey, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def fold_flat_columns(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        attributes = dict(payload.get("attributes") or {})
        justifications = dict(payload.get("justifications") or {})
        for axis in AxisKey:
            if axis.value in payload:
                attributes.setdefault(axis.value, payload.pop(axis.value))
            column = f"{axis.value}{JUSTIFICATION_SUFFIX}"
            if column in payload:
                justifications.setdefault(axis.value, payload.pop(column))
        payload["attributes"] = attributes
        payload["justifications"] = justifications
        return payload

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> str:
        return str(value).strip() if value is not None else ""

    @field_validator("category", "description", "url", "logo_url", mode="before")
    @classmethod
    def clean_text(cls, value: object) -> str:
        return normalize_text(value)

    @field_validator("attributes", mode="before")
    @classmethod
    def normalize_attributes(cls, value: object) -> Dict[Any, float | None]:
        if not isinstance(value, dict):
            msg = "attributes must be a mapping of axis key to number"
            raise ValueError(msg)
        return {key: normalize_metric(item) for key, item in value.items()}

    @field_validator("justifications", mode="before")
    @classmethod
    def normalize_justifications(cls, value: object) -> Dict[Any, str]:
        if not isinstance(value, dict):
            msg = "justifications must be a mapping of axis key to text"
            raise ValueError(msg)
        return {key: normalize_text(item) for key, item in value.items()}

    def metric(self, axis: AxisKey) -> float | None:
        return self.attributes.get(axis)

    def justification(self, axis: AxisKey) -> str:
        return self.justifications.get(axis, "")

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "url": self.url,
            "logo_url": self.logo_url,
        }
        for axis in AxisKey:
            record[axis.value] = self.metric(axis)
            record[f"{axis.value}{JUSTIFICATION_SUFFIX}"] = self.justification(axis)
        return record


@dataclass(frozen=True)
class AxisSelection:
    x: AxisKey
    y: AxisKey


@dataclass(frozen=True)
class PositionedPoint:
    name: str
    raw_x: float
    raw_y: float
    plot_x: float
    plot_y: float

    @property
    def displaced(self) -> bool:
        return self.plot_x != self.raw_x or self.plot_y != self.raw_y


@dataclass(frozen=True)
class ProjectedPoint:
    name: str
    x: float
    y: float
