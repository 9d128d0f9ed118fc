from __future__ import annotations

from pathlib import Path
from typing import Callable, NoReturn, Optional
import sys

import typer

from diff_processor import config as config_module
from diff_processor.detector import (
    detect_missing_docs,
    detect_missing_docs_for_datasource,
)
from diff_processor.doc_paths import DEFAULT_CONVENTION, DocsConvention
from diff_processor.exceptions import DiffProcessorError, ReportWriteError
from diff_processor.runtime import json_io
from diff_processor.schema_diff import SchemaDiff, compute_schema_diff, schema_diff_payload
from diff_processor.schema_model import ProviderSnapshot, load_snapshot
from diff_processor.summary import MissingDocsSummary, assemble_summary, render_summary

app = typer.Typer(add_completion=False)

_STDOUT_ALIAS = "-"


def _write_text_to_target(target: str | Path, payload: str) -> None:
    if str(target) == _STDOUT_ALIAS:
        sys.stdout.write(payload)
        sys.stdout.flush()
        return
    path = Path(target)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(path, str(exc)) from exc


def _resolve_snapshot_path(
    value: Optional[Path],
    *,
    key: str,
    section: config_module.TomlTable,
) -> Path:
    if value is not None:
        return value
    configured = config_module.snapshot_path(section, key)
    if configured is None:
        raise typer.BadParameter(
            f"--{key} is required when [snapshots].{key} is not configured"
        )
    return configured


def _load_snapshots(
    old: Optional[Path],
    new: Optional[Path],
    *,
    config_path: Optional[Path],
) -> tuple[ProviderSnapshot, ProviderSnapshot]:
    section = config_module.snapshot_defaults(config_path=config_path)
    old_path = _resolve_snapshot_path(old, key="old", section=section)
    new_path = _resolve_snapshot_path(new, key="new", section=section)
    return load_snapshot(old_path), load_snapshot(new_path)


def _resolve_convention(
    *,
    config_path: Optional[Path],
    provider_prefix: Optional[str],
) -> DocsConvention:
    section = config_module.merge_payload(
        {"provider_prefix": provider_prefix},
        config_module.docs_defaults(config_path=config_path),
    )
    return config_module.docs_convention(section)


def run_detect_missing_docs(
    docs_root: Path,
    *,
    compute_schema_diff_fn: Callable[[], SchemaDiff],
    compute_datasource_schema_diff_fn: Callable[[], SchemaDiff],
    convention: DocsConvention = DEFAULT_CONVENTION,
) -> MissingDocsSummary:
    # Both diffs are computed before any doc file is read.
    schema_diff = compute_schema_diff_fn()
    datasource_schema_diff = compute_datasource_schema_diff_fn()
    resources = detect_missing_docs(schema_diff, docs_root, convention=convention)
    data_sources = detect_missing_docs_for_datasource(
        datasource_schema_diff,
        docs_root,
        convention=convention,
    )
    return assemble_summary(resources, data_sources)


def _fail(exc: DiffProcessorError) -> NoReturn:
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command("detect-missing-docs")
def detect_missing_docs_command(
    docs_root: Path = typer.Argument(..., help="Provider repository root holding website/docs."),
    old: Optional[Path] = typer.Option(None, "--old", help="Old provider schema snapshot (JSON)."),
    new: Optional[Path] = typer.Option(None, "--new", help="New provider schema snapshot (JSON)."),
    output: str = typer.Option(_STDOUT_ALIAS, "--output", help="Report path or '-' for stdout."),
    config: Optional[Path] = typer.Option(None, "--config"),
    provider_prefix: Optional[str] = typer.Option(None, "--provider-prefix"),
) -> None:
    """Compute list of fields missing documents."""
    convention = _resolve_convention(config_path=config, provider_prefix=provider_prefix)
    try:
        old_snapshot, new_snapshot = _load_snapshots(old, new, config_path=config)
        summary = run_detect_missing_docs(
            docs_root,
            compute_schema_diff_fn=lambda: compute_schema_diff(
                old_snapshot.resources, new_snapshot.resources
            ),
            compute_datasource_schema_diff_fn=lambda: compute_schema_diff(
                old_snapshot.data_sources, new_snapshot.data_sources
            ),
            convention=convention,
        )
    except DiffProcessorError as exc:
        _fail(exc)
    try:
        _write_text_to_target(output, render_summary(summary))
    except ReportWriteError as exc:
        _fail(exc)
    if output != _STDOUT_ALIAS:
        typer.echo(
            f"Wrote missing-docs report: {output} "
            f"(resources={len(summary.resource)}, data_sources={len(summary.data_source)})",
            err=True,
        )


@app.command("schema-diff")
def schema_diff_command(
    old: Optional[Path] = typer.Option(None, "--old", help="Old provider schema snapshot (JSON)."),
    new: Optional[Path] = typer.Option(None, "--new", help="New provider schema snapshot (JSON)."),
    output: str = typer.Option(_STDOUT_ALIAS, "--output", help="Diff path or '-' for stdout."),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Emit the added or changed fields between two schema snapshots."""
    try:
        old_snapshot, new_snapshot = _load_snapshots(old, new, config_path=config)
        payload = {
            "resources": schema_diff_payload(
                compute_schema_diff(old_snapshot.resources, new_snapshot.resources)
            ),
            "data_sources": schema_diff_payload(
                compute_schema_diff(old_snapshot.data_sources, new_snapshot.data_sources)
            ),
        }
    except DiffProcessorError as exc:
        _fail(exc)
    try:
        _write_text_to_target(output, json_io.dump_json_pretty(payload))
    except ReportWriteError as exc:
        _fail(exc)


def main() -> None:
    app()
