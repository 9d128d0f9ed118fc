from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from diff_processor.doc_parser import DocumentedFields, parse_documented_fields
from diff_processor.doc_paths import (
    ARGUMENTS_SECTION,
    ATTRIBUTES_SECTION,
    DEFAULT_CONVENTION,
    DocsConvention,
)
from diff_processor.exceptions import DocReadError
from diff_processor.schema_diff import FieldChange, SchemaDiff


@dataclass(frozen=True)
class MissingDocField:
    field: str
    section: str | None = None


@dataclass(frozen=True)
class MissingDocDetails:
    name: str
    file_path: str
    fields: tuple[MissingDocField, ...]


def expected_section(change: FieldChange) -> str:
    if change.computed_only:
        return ATTRIBUTES_SECTION
    return ARGUMENTS_SECTION


def _read_documented_fields(path: Path) -> DocumentedFields | None:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeError) as exc:
        raise DocReadError(path, str(exc)) from exc
    return parse_documented_fields(text)


def _detect(
    diff: SchemaDiff,
    docs_root: Path,
    *,
    rel_path_fn: Callable[[str], str],
    convention: DocsConvention,
    with_sections: bool,
) -> dict[str, MissingDocDetails]:
    detected: dict[str, MissingDocDetails] = {}
    for entity, changes in diff.items():
        rel = rel_path_fn(entity)
        documented = _read_documented_fields(convention.doc_path(rel, root=docs_root))
        missing = tuple(
            MissingDocField(
                field=change.field,
                section=expected_section(change) if with_sections else None,
            )
            for change in changes
            if documented is None or not documented.contains(change.field)
        )
        if not missing:
            continue
        detected[entity] = MissingDocDetails(
            name=entity,
            file_path=convention.report_path(rel),
            fields=missing,
        )
    return detected


def detect_missing_docs(
    diff: SchemaDiff,
    docs_root: Path | str,
    *,
    convention: DocsConvention = DEFAULT_CONVENTION,
) -> dict[str, MissingDocDetails]:
    """Report resource fields in `diff` that the resource docs do not mention.

    A missing doc file means every diffed field is undocumented. Each reported
    field names the section it belongs under: computed-only fields are
    attributes, everything else is an argument. Raises `DocReadError` when a
    doc file exists but cannot be read.
    """
    return _detect(
        diff,
        Path(docs_root),
        rel_path_fn=convention.resource_doc_rel,
        convention=convention,
        with_sections=True,
    )


def detect_missing_docs_for_datasource(
    diff: SchemaDiff,
    docs_root: Path | str,
    *,
    convention: DocsConvention = DEFAULT_CONVENTION,
) -> dict[str, MissingDocDetails]:
    """Data source counterpart of `detect_missing_docs`; fields carry no section."""
    return _detect(
        diff,
        Path(docs_root),
        rel_path_fn=convention.datasource_doc_rel,
        convention=convention,
        with_sections=False,
    )
