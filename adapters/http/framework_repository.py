from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import httpx

from adapters.filesystem.dataset_codec import build_frameworks, decode_records, detect_format
from domain.models import Framework
from domain.ports.repositories import DatasetLoadError, FrameworkRepository

logger = logging.getLogger(__name__)


class HttpFrameworkRepository(FrameworkRepository):
    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        # Injected clients belong to the caller.
        if self._owns_client:
            self._client.close()

    def load(self, source: str | Path) -> List[Framework]:
        url = str(source)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DatasetLoadError(url, str(exc)) from exc
        fmt = detect_format(url, response.headers.get("content-type"))
        records = decode_records(response.content, url, fmt)
        frameworks = build_frameworks(records, url)
        logger.info("Loaded %d frameworks from %s", len(frameworks), url)
        return frameworks
