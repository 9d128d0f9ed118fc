from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, TypeAlias

from diff_processor.exceptions import DiffComputationError
from diff_processor.runtime import json_io


@dataclass(frozen=True)
class FieldSchema:
    """Documentable attributes of one schema field.

    `elem` holds the sub-schema of a block-typed field. It is a mapping so a
    field can be looked up by name while walking nested blocks.
    """

    required: bool = False
    optional: bool = False
    computed: bool = False
    description: str = ""
    type: str = ""
    elem: Mapping[str, "FieldSchema"] | None = None

    def documentable_attributes(self) -> tuple[bool, bool, bool, str]:
        return (self.required, self.optional, self.computed, self.description)


EntitySchema: TypeAlias = Mapping[str, FieldSchema]
SchemaMap: TypeAlias = Mapping[str, EntitySchema]

_SNAPSHOT_SECTIONS = ("resources", "data_sources")
_FIELD_FLAGS = ("required", "optional", "computed")
_FIELD_TEXTS = ("description", "type")


@dataclass(frozen=True)
class ProviderSnapshot:
    resources: SchemaMap = field(default_factory=dict)
    data_sources: SchemaMap = field(default_factory=dict)


def _field_from_payload(payload: object, *, where: str) -> FieldSchema:
    if not isinstance(payload, Mapping):
        raise DiffComputationError(f"{where}: field schema must be an object")
    flags: dict[str, bool] = {}
    for name in _FIELD_FLAGS:
        raw = payload.get(name, False)
        if not isinstance(raw, bool):
            raise DiffComputationError(f"{where}.{name}: expected a boolean, got {raw!r}")
        flags[name] = raw
    texts: dict[str, str] = {}
    for name in _FIELD_TEXTS:
        raw = payload.get(name, "")
        if raw is None:
            raw = ""
        if not isinstance(raw, str):
            raise DiffComputationError(f"{where}.{name}: expected a string, got {raw!r}")
        texts[name] = raw
    elem_payload = payload.get("elem")
    elem = None
    if elem_payload is not None:
        elem = _fields_from_payload(elem_payload, where=f"{where}.elem")
    return FieldSchema(
        required=flags["required"],
        optional=flags["optional"],
        computed=flags["computed"],
        description=texts["description"],
        type=texts["type"],
        elem=elem,
    )


def _fields_from_payload(payload: object, *, where: str) -> dict[str, FieldSchema]:
    if not isinstance(payload, Mapping):
        raise DiffComputationError(f"{where}: expected an object of fields")
    return {
        str(name): _field_from_payload(value, where=f"{where}.{name}")
        for name, value in payload.items()
    }


def schema_map_from_payload(payload: object, *, where: str = "schema") -> dict[str, EntitySchema]:
    if not isinstance(payload, Mapping):
        raise DiffComputationError(f"{where}: expected an object of entities")
    return {
        str(entity): _fields_from_payload(fields, where=f"{where}.{entity}")
        for entity, fields in payload.items()
    }


def snapshot_from_payload(payload: Mapping[str, object], *, where: str = "snapshot") -> ProviderSnapshot:
    unknown = set(payload) - set(_SNAPSHOT_SECTIONS)
    if unknown:
        raise DiffComputationError(
            f"{where}: unknown snapshot sections {sorted(unknown)!r}"
        )
    return ProviderSnapshot(
        resources=schema_map_from_payload(
            payload.get("resources", {}), where=f"{where}.resources"
        ),
        data_sources=schema_map_from_payload(
            payload.get("data_sources", {}), where=f"{where}.data_sources"
        ),
    )


def load_snapshot(path: Path) -> ProviderSnapshot:
    try:
        payload = json_io.load_json_object_path(path)
    except (OSError, UnicodeError, ValueError) as exc:
        raise DiffComputationError(f"cannot load schema snapshot {path}: {exc}") from exc
    return snapshot_from_payload(payload, where=str(path))
