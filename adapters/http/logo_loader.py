from __future__ import annotations

import logging

import httpx

from domain.services.image_cache import LogoImage

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


class HttpLogoLoader:
    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __call__(self, url: str) -> LogoImage | None:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Logo fetch failed for %s: %s", url, exc)
            return None
        media_type = response.headers.get("content-type", DEFAULT_MEDIA_TYPE).split(";", 1)[0]
        return LogoImage(content=response.content, media_type=media_type.strip())
