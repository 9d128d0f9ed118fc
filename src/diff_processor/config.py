from __future__ import annotations

from dataclasses import fields, replace
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from diff_processor.doc_paths import DEFAULT_CONVENTION, DocsConvention

DEFAULT_CONFIG_NAME = "diff-processor.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def docs_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("docs", {})
    return section if isinstance(section, dict) else {}


def snapshot_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("snapshots", {})
    return section if isinstance(section, dict) else {}


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def docs_convention(
    section: TomlTable | None,
    base: DocsConvention = DEFAULT_CONVENTION,
) -> DocsConvention:
    if not isinstance(section, dict):
        return base
    known = {item.name for item in fields(DocsConvention)}
    overrides = {
        key: value
        for key, value in section.items()
        if key in known and isinstance(value, str)
    }
    return replace(base, **overrides)


def snapshot_path(section: TomlTable | None, key: str) -> Path | None:
    if not isinstance(section, dict):
        return None
    value = section.get(key)
    if isinstance(value, str) and value.strip():
        return Path(value)
    return None
