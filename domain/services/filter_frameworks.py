from __future__ import annotations

from collections.abc import Iterable
from typing import List

from domain.models import Framework

ALL_CATEGORIES = "all"


def filter_frameworks(
    frameworks: Iterable[Framework],
    category: str | None = None,
    query: str | None = "",
) -> List[Framework]:
    selected = list(frameworks)
    if category and category != ALL_CATEGORIES:
        selected = [framework for framework in selected if framework.category == category]
    needle = (query or "").strip().lower()
    if needle:
        selected = [
            framework
            for framework in selected
            if needle in framework.name.lower() or needle in framework.description.lower()
        ]
    return selected


def list_categories(frameworks: Iterable[Framework]) -> List[str]:
    seen: set[str] = set()
    categories: List[str] = []
    for framework in frameworks:
        if framework.category and framework.category not in seen:
            seen.add(framework.category)
            categories.append(framework.category)
    return categories
