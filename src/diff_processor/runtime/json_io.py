from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from diff_processor.order_contract import sort_once


def canonicalize_json(value: object) -> object:
    """Rebuild `value` with every object's keys in lexical order.

    Tuples become lists, so report and diff payloads built from frozen
    records serialize the same way as plain JSON input.
    """
    if isinstance(value, Mapping):
        keys = sort_once(
            (str(key) for key in value),
            source="json_io.canonicalize_json.keys",
        )
        raw = {str(key): item for key, item in value.items()}
        return {key: canonicalize_json(raw[key]) for key in keys}
    if isinstance(value, (list, tuple)):
        return [canonicalize_json(item) for item in value]
    return value


def load_json_object_path(
    path: Path,
    *,
    encoding: str = "utf-8",
) -> dict[str, object]:
    """Load a JSON object from `path`.

    Raises `OSError` when the file cannot be read and `ValueError` when it is
    not valid JSON or its top-level value is not an object.
    """
    payload = json.loads(path.read_text(encoding=encoding))
    if not isinstance(payload, Mapping):
        raise ValueError(f"{path}: expected a JSON object")
    return {str(key): payload[key] for key in payload}


def dump_json_pretty(payload: object) -> str:
    """Render `payload` as the byte-stable text CI compares between runs."""
    return json.dumps(canonicalize_json(payload), indent=2) + "\n"
