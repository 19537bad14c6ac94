from __future__ import annotations

import json
from pathlib import Path

import pytest

from adapters.filesystem.dataset_codec import coerce_cell, parse_csv_records
from adapters.filesystem.dataset_converter import convert_csv_to_json
from adapters.filesystem.framework_repository import FileSystemFrameworkRepository
from domain.models import AxisKey
from domain.ports.repositories import DatasetLoadError
from tests.helpers.dataset_fixtures import repo_root

CSV_TEXT = (
    "name,category,code_level,code_level_justification,complexity,description,url,logo_url\n"
    "LangChain,Agent Framework,0.8,Code first,0.7,\"Chains, agents\",https://langchain.com,\n"
    "n8n,Orchestration,0.2,,0.4,Workflow automation,https://n8n.io,\n"
    ",,,,,,,\n"
    "Mystery,Orchestration,,,,Nothing known,,\n"
)


def test_loads_json_dataset(dataset_path: Path) -> None:
    frameworks = FileSystemFrameworkRepository().load(dataset_path)

    assert [f.name for f in frameworks] == ["Alpha", "Beta", "Gamma", "Delta"]
    assert frameworks[3].metric(AxisKey.CODE_LEVEL) is None


def test_loads_csv_dataset(tmp_path: Path) -> None:
    path = tmp_path / "agent_frameworks.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")

    frameworks = FileSystemFrameworkRepository().load(path)

    assert [f.name for f in frameworks] == ["LangChain", "n8n", "Mystery"]
    assert frameworks[0].description == "Chains, agents"
    assert frameworks[0].justification(AxisKey.CODE_LEVEL) == "Code first"
    assert frameworks[1].metric(AxisKey.COMPLEXITY) == 0.4
    assert frameworks[2].metric(AxisKey.CODE_LEVEL) is None


def test_accepts_wrapped_json_object(tmp_path: Path) -> None:
    path = tmp_path / "wrapped.json"
    path.write_text(json.dumps({"frameworks": [{"name": "Only"}]}), encoding="utf-8")

    assert [f.name for f in FileSystemFrameworkRepository().load(path)] == ["Only"]


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    missing = tmp_path / "nope.json"

    with pytest.raises(DatasetLoadError) as exc_info:
        FileSystemFrameworkRepository().load(missing)
    assert exc_info.value.source == str(missing)


def test_malformed_json_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(DatasetLoadError, match="invalid JSON"):
        FileSystemFrameworkRepository().load(path)


def test_non_array_json_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "scalar.json"
    path.write_text("42", encoding="utf-8")

    with pytest.raises(DatasetLoadError, match="JSON array"):
        FileSystemFrameworkRepository().load(path)


def test_non_object_array_entry_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "mixed.json"
    path.write_text(
        json.dumps([{"name": "A", "code_level": 0.5}, "oops", 42, None]), encoding="utf-8"
    )

    with pytest.raises(DatasetLoadError, match="record 1 is not an object"):
        FileSystemFrameworkRepository().load(path)


def test_invalid_record_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps([{"name": "Ok"}, {"category": "No name"}]), encoding="utf-8")

    with pytest.raises(DatasetLoadError, match="record 1"):
        FileSystemFrameworkRepository().load(path)


def test_shipped_dataset_is_valid() -> None:
    frameworks = FileSystemFrameworkRepository().load(
        repo_root() / "data" / "agent_frameworks.json"
    )
    names = [f.name for f in frameworks]

    assert len(names) == len(set(names))
    for framework in frameworks:
        for axis in AxisKey:
            value = framework.metric(axis)
            assert value is None or 0.0 <= value <= 1.0


@pytest.mark.parametrize(
    ("cell", "expected"),
    [("", None), (" 3 ", 3), ("0.25", 0.25), ("TRUE", True), ("false", False), ("text", "text")],
)
def test_coerce_cell(cell: str, expected: object) -> None:
    assert coerce_cell(cell) == expected


def test_parse_csv_skips_blank_rows_and_bom() -> None:
    records = parse_csv_records("\ufeffname,code_level\nA,0.5\n,\n")

    assert records == [{"name": "A", "code_level": 0.5}]


def test_convert_csv_to_json_writes_array(tmp_path: Path) -> None:
    csv_path = tmp_path / "agent_frameworks.csv"
    csv_path.write_text(CSV_TEXT, encoding="utf-8")
    json_path = tmp_path / "out" / "agent_frameworks.json"

    records = convert_csv_to_json(csv_path, json_path)

    written = json.loads(json_path.read_text(encoding="utf-8"))
    assert written == records
    assert written[0]["code_level"] == 0.8
    assert written[1]["code_level_justification"] is None
    assert [f.name for f in FileSystemFrameworkRepository().load(json_path)] == [
        "LangChain",
        "n8n",
        "Mystery",
    ]


def test_convert_missing_csv_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(DatasetLoadError):
        convert_csv_to_json(tmp_path / "missing.csv", tmp_path / "out.json")
