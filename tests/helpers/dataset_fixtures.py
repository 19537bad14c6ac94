from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from domain.models import Framework

SAMPLE_RECORDS: list[dict[str, Any]] = [
    {
        "name": "Alpha",
        "category": "Agent Framework",
        "code_level": 0.5,
        "code_level_justification": "Python SDK.",
        "complexity": 0.5,
        "complexity_justification": "Moderate.",
        "learning_curve": 0.4,
        "description": "First framework at the centre.",
        "url": "https://alpha.example.com",
        "logo_url": "https://alpha.example.com/logo.png",
    },
    {
        "name": "Beta",
        "category": "Orchestration",
        "code_level": 0.5,
        "complexity": 0.5,
        "learning_curve": 0.6,
        "description": "Workflow builder sharing the centre.",
        "url": "https://beta.example.com",
        "logo_url": "",
    },
    {
        "name": "Gamma",
        "category": "Agent Framework",
        "code_level": 1,
        "complexity": 0,
        "learning_curve": None,
        "description": "Pinned to the corner.",
        "url": "https://gamma.example.com",
        "logo_url": "",
    },
    {
        "name": "Delta",
        "category": "Orchestration",
        "complexity": 0.25,
        "description": "No code level recorded.",
        "url": "https://delta.example.com",
        "logo_url": "",
    },
]


def make_framework(name: str, category: str = "Agent Framework", **metrics: Any) -> Framework:
    return Framework.model_validate({"name": name, "category": category, **metrics})


def write_dataset(path: Path, records: list[dict[str, Any]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return path


def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")
