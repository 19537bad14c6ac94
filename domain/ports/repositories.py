from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import Framework


class DatasetLoadError(RuntimeError):
    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to load dataset from {source}: {reason}")
        self.source = source
        self.reason = reason


class FrameworkRepository(Protocol):
    def load(self, source: str | Path) -> Sequence[Framework]: ...
