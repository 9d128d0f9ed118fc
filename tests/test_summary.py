from __future__ import annotations

import json
from pathlib import Path

from diff_processor.cli import run_detect_missing_docs
from diff_processor.detector import MissingDocDetails, MissingDocField
from diff_processor.schema_diff import compute_schema_diff
from diff_processor.schema_model import FieldSchema
from diff_processor.summary import assemble_summary, render_summary, summary_payload


def _details(name: str, *fields: MissingDocField) -> MissingDocDetails:
    return MissingDocDetails(name=name, file_path=f"/docs/{name}", fields=tuple(fields))


def test_assemble_summary_orders_names_and_fields() -> None:
    resources = {
        "google_b": _details("google_b", MissingDocField("z"), MissingDocField("a")),
        "google_a": _details("google_a", MissingDocField("m")),
    }
    data_sources = {
        "google_data_c": _details("google_data_c", MissingDocField("y"), MissingDocField("x")),
    }
    summary = assemble_summary(resources, data_sources)
    assert [details.name for details in summary.resource] == ["google_a", "google_b"]
    assert [item.field for item in summary.resource[1].fields] == ["a", "z"]
    assert [details.name for details in summary.data_source] == ["google_data_c"]
    assert [item.field for item in summary.data_source[0].fields] == ["x", "y"]


def test_data_source_side_uses_its_own_names() -> None:
    summary = assemble_summary(
        {"google_r": _details("google_r", MissingDocField("a"))},
        {"google_data_d": _details("google_data_d", MissingDocField("b"))},
    )
    assert [details.name for details in summary.data_source] == ["google_data_d"]


def test_empty_summary_serializes_empty_lists() -> None:
    assert summary_payload(assemble_summary({}, {})) == {"dataSource": [], "resource": []}


def test_payload_uses_report_keys_and_omits_missing_sections() -> None:
    summary = assemble_summary(
        {"google_x": _details("google_x", MissingDocField("a", "Arguments Reference"))},
        {"google_data_y": _details("google_data_y", MissingDocField("b"))},
    )
    assert summary_payload(summary) == {
        "dataSource": [
            {"fields": [{"field": "b"}], "filePath": "/docs/google_data_y", "name": "google_data_y"}
        ],
        "resource": [
            {
                "fields": [{"field": "a", "section": "Arguments Reference"}],
                "filePath": "/docs/google_x",
                "name": "google_x",
            }
        ],
    }


def test_render_is_independent_of_mapping_order() -> None:
    items = {
        "google_b": _details("google_b", MissingDocField("2"), MissingDocField("1")),
        "google_a": _details("google_a", MissingDocField("3")),
    }
    shuffled = dict(reversed(list(items.items())))
    assert render_summary(assemble_summary(items, {})) == render_summary(
        assemble_summary(shuffled, {})
    )


def test_new_entity_without_docs_is_fully_reported(docs_root: Path) -> None:
    new = {"google_x": {"field-a": FieldSchema(), "field-b": FieldSchema()}}
    summary = run_detect_missing_docs(
        docs_root,
        compute_schema_diff_fn=lambda: compute_schema_diff({}, new),
        compute_datasource_schema_diff_fn=lambda: compute_schema_diff({}, {}),
    )
    assert json.loads(render_summary(summary)) == {
        "dataSource": [],
        "resource": [
            {
                "fields": [
                    {"field": "field-a", "section": "Arguments Reference"},
                    {"field": "field-b", "section": "Arguments Reference"},
                ],
                "filePath": "/website/docs/r/x.html.markdown",
                "name": "google_x",
            }
        ],
    }


def test_unchanged_documented_entity_reports_nothing(docs_root: Path, write_doc) -> None:
    write_doc(
        docs_root,
        "website/docs/r/x.html.markdown",
        "## Argument Reference\n\n* `field-a` - documented.\n",
    )
    schema = {"google_x": {"field-a": FieldSchema(optional=True, description="beep")}}
    summary = run_detect_missing_docs(
        docs_root,
        compute_schema_diff_fn=lambda: compute_schema_diff(schema, schema),
        compute_datasource_schema_diff_fn=lambda: compute_schema_diff(schema, schema),
    )
    assert summary.resource == []
    assert summary.data_source == []


def test_repeated_runs_render_identical_reports(docs_root: Path) -> None:
    new = {"google_x": {"b": FieldSchema(computed=True), "a": FieldSchema(required=True)}}

    def _run() -> str:
        return render_summary(
            run_detect_missing_docs(
                docs_root,
                compute_schema_diff_fn=lambda: compute_schema_diff({}, new),
                compute_datasource_schema_diff_fn=lambda: compute_schema_diff({}, new),
            )
        )

    assert _run() == _run()
