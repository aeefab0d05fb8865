from __future__ import annotations

import ast
import json
from datetime import datetime, timezone

import pytest

from weatherfx.effects.conditions import WeatherCondition
from weatherfx.effects.export import EXPORT_VERSION, export_tuned_presets
from weatherfx.effects.tuned_presets import TUNED_CHECKPOINT_OVERRIDES


def test_json_export_orders_conditions_and_drops_empty_groups():
    data = json.loads(export_tuned_presets(TUNED_CHECKPOINT_OVERRIDES))
    exported = data["checkpoint_overrides"]
    expected_order = [c.value for c in WeatherCondition if c in TUNED_CHECKPOINT_OVERRIDES]
    assert list(exported) == expected_order
    assert "drizzle" not in exported
    assert exported["fog"]["dawn"] == {}
    assert exported["thunderstorm"]["midnight"]["lightning"]["auto_interval"] == 7.5
    assert "exported_at" not in data


def test_json_export_with_metadata_and_subset():
    moment = datetime(2025, 6, 21, 12, tzinfo=timezone.utc)
    text = export_tuned_presets(
        {"snow": {"noon": {"snow": {"intensity": 0.2}, "cloud": {}}}},
        conditions=["snow"],
        include_metadata=True,
        signed_off=[WeatherCondition.SNOW, "clear"],
        exported_at=moment,
    )
    data = json.loads(text)
    assert data["version"] == EXPORT_VERSION
    assert data["signed_off"] == ["clear", "snow"]
    assert data["exported_at"] == moment.isoformat()
    assert data["checkpoint_overrides"]["snow"]["noon"] == {"snow": {"intensity": 0.2}}
    assert data["checkpoint_overrides"]["snow"]["dawn"] == {}


def test_python_export_is_a_literal_module():
    source = export_tuned_presets(
        {WeatherCondition.HAIL: TUNED_CHECKPOINT_OVERRIDES[WeatherCondition.HAIL]}, fmt="python"
    )
    tree = ast.parse(source)
    assign = tree.body[-1]
    assert assign.targets[0].id == "TUNED_CHECKPOINT_OVERRIDES"
    value = ast.literal_eval(assign.value)
    assert value["hail"]["midnight"]["celestial"] == {"celestial_y": 0.74}


def test_unknown_format_raises():
    with pytest.raises(ValueError):
        export_tuned_presets({}, fmt="yaml")
