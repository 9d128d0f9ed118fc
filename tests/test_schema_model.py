from __future__ import annotations

from pathlib import Path

import pytest

from diff_processor.exceptions import DiffComputationError
from diff_processor.schema_model import (
    FieldSchema,
    load_snapshot,
    schema_map_from_payload,
    snapshot_from_payload,
)


def test_load_snapshot_builds_tagged_records(tmp_path: Path, write_snapshot) -> None:
    path = write_snapshot(
        tmp_path / "new.json",
        resources={
            "google_x": {
                "name": {"required": True, "description": "The name.", "type": "TypeString"},
                "settings": {
                    "optional": True,
                    "elem": {"tier": {"computed": True}},
                },
            }
        },
        data_sources={"google_data_y": {"id": {"computed": True}}},
    )
    snapshot = load_snapshot(path)
    name = snapshot.resources["google_x"]["name"]
    assert name == FieldSchema(required=True, description="The name.", type="TypeString")
    settings = snapshot.resources["google_x"]["settings"]
    assert settings.optional is True
    assert settings.elem == {"tier": FieldSchema(computed=True)}
    assert snapshot.data_sources["google_data_y"]["id"].computed is True


def test_missing_sections_default_to_empty() -> None:
    snapshot = snapshot_from_payload({})
    assert snapshot.resources == {}
    assert snapshot.data_sources == {}


def test_null_description_is_empty_text() -> None:
    schema = schema_map_from_payload({"google_x": {"a": {"description": None}}})
    assert schema["google_x"]["a"].description == ""


@pytest.mark.parametrize(
    "payload",
    [
        {"resources": []},
        {"resources": {"google_x": []}},
        {"resources": {"google_x": {"a": "optional"}}},
        {"resources": {"google_x": {"a": {"optional": "yes"}}}},
        {"resources": {"google_x": {"a": {"description": 3}}}},
        {"resources": {"google_x": {"a": {"elem": ["b"]}}}},
        {"providers": {}},
    ],
)
def test_malformed_payloads_raise(payload: dict[str, object]) -> None:
    with pytest.raises(DiffComputationError):
        snapshot_from_payload(payload)


def test_load_snapshot_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not-json", encoding="utf-8")
    with pytest.raises(DiffComputationError, match="cannot load schema snapshot"):
        load_snapshot(path)


def test_load_snapshot_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(DiffComputationError):
        load_snapshot(path)


def test_load_snapshot_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DiffComputationError):
        load_snapshot(tmp_path / "absent.json")
