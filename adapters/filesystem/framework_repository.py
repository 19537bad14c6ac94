from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from adapters.filesystem.dataset_codec import build_frameworks, decode_records, detect_format
from domain.models import Framework
from domain.ports.repositories import DatasetLoadError, FrameworkRepository

logger = logging.getLogger(__name__)


class FileSystemFrameworkRepository(FrameworkRepository):
    def load(self, source: str | Path) -> List[Framework]:
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DatasetLoadError(str(path), exc.strerror or str(exc)) from exc
        records = decode_records(data, str(path), detect_format(path.name))
        frameworks = build_frameworks(records, str(path))
        logger.info("Loaded %d frameworks from %s", len(frameworks), path)
        return frameworks
