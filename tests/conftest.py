from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest


@pytest.fixture
def write_snapshot():
    def _write(
        path: Path,
        *,
        resources: dict[str, object] | None = None,
        data_sources: dict[str, object] | None = None,
    ) -> Path:
        payload = {
            "resources": dict(resources or {}),
            "data_sources": dict(data_sources or {}),
        }
        path.write_text(
            json.dumps(payload, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    root = tmp_path / "provider"
    root.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def write_doc():
    def _write(root: Path, rel: str, text: str) -> Path:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
