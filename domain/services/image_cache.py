from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Dict

from domain.models import Framework

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogoImage:
    content: bytes
    media_type: str


LogoLoader = Callable[[str], LogoImage | None]


class ImageCache:
    """Logo images keyed by framework name.

    A miss (no logo URL, or the loader returned nothing) is cached too, so each
    logo is requested at most once until :meth:`clear`.
    """

    def __init__(self, loader: LogoLoader) -> None:
        self._loader = loader
        self._images: Dict[str, LogoImage | None] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._images

    def __len__(self) -> int:
        return len(self._images)

    def get(self, name: str) -> LogoImage | None:
        return self._images.get(name)

    def fetch(self, framework: Framework) -> LogoImage | None:
        if framework.name not in self._images:
            self._images[framework.name] = self._load(framework)
        return self._images[framework.name]

    def preload(self, frameworks: Iterable[Framework]) -> int:
        loaded = 0
        for framework in frameworks:
            if framework.name in self._images:
                continue
            if self.fetch(framework) is not None:
                loaded += 1
        logger.info("Preloaded %d logo images", loaded)
        return loaded

    def clear(self) -> None:
        self._images.clear()

    def _load(self, framework: Framework) -> LogoImage | None:
        if not framework.logo_url:
            return None
        image = self._loader(framework.logo_url)
        if image is None:
            logger.warning("No logo image for %s (%s)", framework.name, framework.logo_url)
        return image
