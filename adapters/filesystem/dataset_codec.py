from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from typing import Any, List

import orjson
from pydantic import ValidationError

from adapters.filesystem.json_utils import load_json_bytes
from domain.models import Framework
from domain.ports.repositories import DatasetLoadError

_BOOL_CELLS = {"true": True, "false": False}


def coerce_cell(value: str | None) -> Any:
    """Type a CSV cell the way a dynamic-typing CSV reader would."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in _BOOL_CELLS:
        return _BOOL_CELLS[lowered]
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_csv_records(text: str) -> List[dict[str, Any]]:
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    records: List[dict[str, Any]] = []
    for row in reader:
        if not any((cell or "").strip() for cell in row.values() if isinstance(cell, str)):
            continue
        records.append(
            {
                str(key).strip(): coerce_cell(cell if isinstance(cell, str) else None)
                for key, cell in row.items()
                if key is not None
            }
        )
    return records


def parse_json_records(data: bytes, source: str) -> List[dict[str, Any]]:
    try:
        payload = load_json_bytes(data)
    except orjson.JSONDecodeError as exc:
        raise DatasetLoadError(source, f"invalid JSON: {exc}") from exc
    if isinstance(payload, Mapping):
        payload = payload.get("frameworks", payload.get("items"))
    if not isinstance(payload, list):
        raise DatasetLoadError(source, "expected a JSON array of framework records")
    records: List[dict[str, Any]] = []
    for idx, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise DatasetLoadError(source, f"record {idx} is not an object")
        records.append(dict(item))
    return records


def decode_records(data: bytes, source: str, fmt: str) -> List[dict[str, Any]]:
    if fmt == "csv":
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DatasetLoadError(source, f"CSV is not valid UTF-8: {exc}") from exc
        return parse_csv_records(text)
    if fmt == "json":
        return parse_json_records(data, source)
    raise DatasetLoadError(source, f"unsupported dataset format: {fmt}")


def build_frameworks(records: Iterable[Mapping[str, Any]], source: str) -> List[Framework]:
    frameworks: List[Framework] = []
    for idx, record in enumerate(records):
        try:
            frameworks.append(Framework.model_validate(dict(record)))
        except ValidationError as exc:
            raise DatasetLoadError(source, f"record {idx} is invalid: {exc}") from exc
    return frameworks


def detect_format(source: str, content_type: str | None = None) -> str:
    lowered = source.lower().split("?", 1)[0]
    if lowered.endswith(".csv"):
        return "csv"
    if lowered.endswith(".json"):
        return "json"
    if content_type and "csv" in content_type.lower():
        return "csv"
    return "json"
