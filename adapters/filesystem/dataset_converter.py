from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from filelock import FileLock

from adapters.filesystem.dataset_codec import parse_csv_records
from adapters.filesystem.json_utils import write_json_atomic
from domain.ports.repositories import DatasetLoadError

logger = logging.getLogger(__name__)


def convert_csv_to_json(csv_path: Path, json_path: Path) -> List[dict[str, Any]]:
    try:
        text = csv_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetLoadError(str(csv_path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise DatasetLoadError(str(csv_path), f"CSV is not valid UTF-8: {exc}") from exc
    records = parse_csv_records(text)
    lock_path = json_path.with_suffix(f"{json_path.suffix}.lock")
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with FileLock(str(lock_path)):
        write_json_atomic(json_path, records)
    logger.info("Converted %d records from %s to %s", len(records), csv_path, json_path)
    return records
