from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import List

from domain.models import Framework

logger = logging.getLogger(__name__)


def find_duplicate_names(frameworks: Iterable[Framework]) -> List[str]:
    seen: set[str] = set()
    duplicates: List[str] = []
    for framework in frameworks:
        if framework.name in seen and framework.name not in duplicates:
            duplicates.append(framework.name)
        seen.add(framework.name)
    return duplicates


def suffix_duplicate_names(frameworks: Iterable[Framework]) -> List[Framework]:
    """Rename repeated names to ``"<name> (2)"``, ``"<name> (3)"``, ...

    The layout and hit-test steps identify points by name, so callers run this
    before handing records to them. First occurrences keep their name.
    """
    items = list(frameworks)
    taken = {framework.name for framework in items}
    seen: set[str] = set()
    result: List[Framework] = []
    for framework in items:
        if framework.name not in seen:
            seen.add(framework.name)
            result.append(framework)
            continue
        counter = 2
        candidate = f"{framework.name} ({counter})"
        while candidate in taken:
            counter += 1
            candidate = f"{framework.name} ({counter})"
        taken.add(candidate)
        seen.add(candidate)
        logger.warning("Duplicate framework name %r renamed to %r", framework.name, candidate)
        result.append(framework.model_copy(update={"name": candidate}))
    return result
