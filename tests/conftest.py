from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from weatherfx.config import feature_flags  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_feature_flags(tmp_path, monkeypatch):
    # Feature files are resolved relative to the working directory.
    monkeypatch.chdir(tmp_path)
    feature_flags.refresh_cache()
    yield
    feature_flags.refresh_cache()


@pytest.fixture
def write_features(tmp_path):
    def _write(features: dict, *, nested: bool = False) -> Path:
        import json

        target = tmp_path / ("config/weatherfx.json" if nested else "weatherfx.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps({"features": features}), encoding="utf-8")
        feature_flags.refresh_cache()
        return target

    return _write
