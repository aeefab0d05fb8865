from __future__ import annotations

import pytest

from weatherfx.effects.conditions import (
    BLOOM_CONDITION_BOOST,
    CELESTIAL_PRESETS,
    CONDITION_BRIGHTNESS,
    CONDITION_PRESETS,
    WeatherCondition,
    bloom_boost,
    canonical_condition,
)


def test_condition_enum_has_thirteen_states():
    assert len(WeatherCondition) == 13


@pytest.mark.parametrize("table", [CONDITION_BRIGHTNESS, CONDITION_PRESETS, CELESTIAL_PRESETS])
def test_tables_are_total_over_conditions(table):
    assert set(table) == set(WeatherCondition)


def test_brightness_multipliers_within_band():
    assert CONDITION_BRIGHTNESS[WeatherCondition.CLEAR] == 1.0
    assert CONDITION_BRIGHTNESS[WeatherCondition.THUNDERSTORM] == 0.3
    assert all(0.3 <= value <= 1.0 for value in CONDITION_BRIGHTNESS.values())


def test_every_preset_has_cloud_layer():
    for condition, preset in CONDITION_PRESETS.items():
        assert "cloud" in preset, condition
        assert set(preset["cloud"]) == {"coverage", "speed", "darkness", "turbulence"}


def test_clear_has_no_precipitation_layers():
    preset = CONDITION_PRESETS[WeatherCondition.CLEAR]
    assert "rain" not in preset
    assert "snow" not in preset
    assert "lightning" not in preset


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        CONDITION_PRESETS[WeatherCondition.CLEAR]["cloud"]["coverage"] = 0.9  # type: ignore[index]
    with pytest.raises(TypeError):
        CELESTIAL_PRESETS[WeatherCondition.FOG]["x"] = 0.1  # type: ignore[index]


def test_celestial_entries_are_independent_objects():
    assert CELESTIAL_PRESETS[WeatherCondition.CLEAR] == CELESTIAL_PRESETS[WeatherCondition.FOG]
    assert CELESTIAL_PRESETS[WeatherCondition.CLEAR] is not CELESTIAL_PRESETS[WeatherCondition.FOG]


def test_bloom_boost_defaults():
    assert bloom_boost(WeatherCondition.FOG) == 0.18
    assert bloom_boost(WeatherCondition.SNOW) == 0.04
    assert WeatherCondition.CLEAR not in BLOOM_CONDITION_BOOST


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("partly_cloudy", "partly-cloudy"),
        ("Heavy Rain", "heavy-rain"),
        ("heavy_snow", "snow"),
        ("storm", "thunderstorm"),
        (" FOG ", "fog"),
        ("volcanic", "volcanic"),
    ],
)
def test_canonical_condition(raw, expected):
    assert canonical_condition(raw) == expected
