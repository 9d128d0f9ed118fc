from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Mapping, TypeAlias

from diff_processor.exceptions import DiffComputationError
from diff_processor.json_types import JSONObject
from diff_processor.order_contract import sort_once
from diff_processor.schema_model import EntitySchema, FieldSchema, SchemaMap

MAX_SCHEMA_DEPTH = 32


@dataclass(frozen=True)
class FieldChange:
    field: str
    required: bool
    optional: bool
    computed: bool

    @classmethod
    def from_schema(cls, field: str, schema: FieldSchema) -> "FieldChange":
        return cls(
            field=field,
            required=schema.required,
            optional=schema.optional,
            computed=schema.computed,
        )

    @property
    def computed_only(self) -> bool:
        return self.computed and not self.required and not self.optional


SchemaDiff: TypeAlias = dict[str, tuple[FieldChange, ...]]


def _check_field(schema: object, *, where: str) -> FieldSchema:
    if not isinstance(schema, FieldSchema):
        raise DiffComputationError(
            f"{where}: expected FieldSchema, got {type(schema).__name__}"
        )
    if schema.required and schema.optional:
        raise DiffComputationError(f"{where}: field cannot be both required and optional")
    if schema.required and schema.computed:
        raise DiffComputationError(f"{where}: field cannot be both required and computed")
    return schema


def _check_fields(fields: object, *, where: str) -> Mapping[str, object]:
    if not isinstance(fields, Mapping):
        raise DiffComputationError(
            f"{where}: expected a mapping of fields, got {type(fields).__name__}"
        )
    return fields


def _changed_fields(
    old_fields: EntitySchema | None,
    new_fields: EntitySchema,
    *,
    where: str,
    prefix: str,
    depth: int,
    on_path: set[int],
) -> list[FieldChange]:
    if depth > MAX_SCHEMA_DEPTH:
        raise DiffComputationError(
            f"{where}: schema nesting exceeds {MAX_SCHEMA_DEPTH} levels"
        )
    marker = id(new_fields)
    if marker in on_path:
        raise DiffComputationError(f"{where}: schema references itself at {prefix!r}")
    on_path.add(marker)
    try:
        checked_new = _check_fields(new_fields, where=where)
        checked_old = (
            _check_fields(old_fields, where=f"{where} (old)")
            if old_fields is not None
            else {}
        )
        changes: list[FieldChange] = []
        for name, raw_schema in checked_new.items():
            if not isinstance(name, str) or not name:
                raise DiffComputationError(f"{where}: invalid field name {name!r}")
            path = f"{prefix}{name}"
            new_schema = _check_field(raw_schema, where=f"{where}.{path}")
            old_schema = None
            if name in checked_old:
                old_schema = _check_field(checked_old[name], where=f"{where}.{path} (old)")
            if (
                old_schema is None
                or old_schema.documentable_attributes()
                != new_schema.documentable_attributes()
            ):
                changes.append(FieldChange.from_schema(path, new_schema))
            if new_schema.elem is not None:
                changes.extend(
                    _changed_fields(
                        old_schema.elem if old_schema is not None else None,
                        new_schema.elem,
                        where=where,
                        prefix=f"{path}.",
                        depth=depth + 1,
                        on_path=on_path,
                    )
                )
        return changes
    finally:
        on_path.discard(marker)


def compute_schema_diff(old: SchemaMap, new: SchemaMap) -> SchemaDiff:
    """Return the fields of `new` that are absent from or changed since `old`.

    Entities that only exist in `old` are ignored, and so are removed fields.
    Nested block fields are reported under their dotted path. The result is
    keyed and ordered by entity name, and each entity's changes are ordered by
    field name.
    """
    if not isinstance(old, Mapping) or not isinstance(new, Mapping):
        raise DiffComputationError("schema maps must be mappings of entity name to fields")
    diff: SchemaDiff = {}
    for name in new:
        if not isinstance(name, str) or not name:
            raise DiffComputationError(f"invalid entity name {name!r}")
    entity_names = sort_once(
        new,
        source="compute_schema_diff.entity_names",
    )
    for entity in entity_names:
        changes = _changed_fields(
            old.get(entity),
            new[entity],
            where=entity,
            prefix="",
            depth=1,
            on_path=set(),
        )
        if not changes:
            continue
        diff[entity] = tuple(
            sort_once(
                changes,
                source="compute_schema_diff.changes",
                key=lambda change: change.field,
            )
        )
    return diff


def schema_diff_payload(diff: SchemaDiff) -> JSONObject:
    return {
        entity: [asdict(change) for change in changes]
        for entity, changes in diff.items()
    }
