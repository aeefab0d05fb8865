from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from weatherfx.effects.brightness import (
    ThemeTracker,
    scene_brightness,
    scene_brightness_from_fraction,
    solar_light,
    weather_theme,
)
from weatherfx.effects.conditions import WeatherCondition
from weatherfx.effects.time_model import time_of_day


def test_solar_light_bands():
    assert solar_light(-1.0) == pytest.approx(0.05)
    assert solar_light(-0.0001) == pytest.approx(0.15, abs=1e-4)
    assert solar_light(0.0) == pytest.approx(0.15)
    assert solar_light(1.0) == pytest.approx(1.0)


def test_clear_noon_is_fully_bright():
    brightness = scene_brightness("2025-06-21T12:00:00Z", WeatherCondition.CLEAR)
    assert brightness == pytest.approx(1.0)
    assert weather_theme(brightness) == "light"


def test_thunderstorm_midnight_is_dark():
    brightness = scene_brightness("2025-06-21T00:00:00Z", WeatherCondition.THUNDERSTORM)
    assert brightness == pytest.approx(0.015)
    assert weather_theme(brightness) == "dark"


@pytest.mark.parametrize("condition", list(WeatherCondition))
def test_brightness_in_range_and_paths_agree(condition):
    start = datetime(2025, 2, 1, tzinfo=timezone.utc)
    for minute in range(0, 24 * 60, 17):
        moment = start + timedelta(minutes=minute)
        value = scene_brightness(moment, condition)
        assert 0.0 <= value <= 1.0
        assert value == scene_brightness_from_fraction(time_of_day(moment), condition)


def test_weather_theme_thresholds():
    assert weather_theme(0.34) == "dark"
    assert weather_theme(0.46) == "light"
    assert weather_theme(0.40) == "dark"
    assert weather_theme(0.40, "light") == "light"
    assert weather_theme(0.35, "light") == "light"
    assert weather_theme(0.45, "dark") == "dark"


def test_tracker_hysteresis_sequence():
    tracker = ThemeTracker(initial="light")
    themes = [tracker.observe_brightness(b) for b in (0.50, 0.40, 0.30, 0.40, 0.50)]
    assert themes == ["light", "light", "dark", "dark", "light"]


def test_tracker_only_notifies_on_change(caplog):
    tracker = ThemeTracker()
    seen: list[str] = []
    tracker.subscribe("listener", seen.append)

    with caplog.at_level(logging.INFO, logger="weatherfx.effects.brightness"):
        for value in (0.40, 0.41, 0.39, 0.60, 0.44, 0.36, 0.2):
            tracker.observe_brightness(value)

    assert seen == ["dark", "light", "dark"]
    assert tracker.theme == "dark"
    changes = [r for r in caplog.records if r.getMessage() == "Weather theme changed"]
    assert len(changes) == 3

    tracker.unsubscribe("listener")
    tracker.observe_brightness(0.9)
    assert seen == ["dark", "light", "dark"]


def test_tracker_update_from_observation_fields():
    tracker = ThemeTracker()
    assert tracker.update(WeatherCondition.CLEAR, timestamp="2025-06-21T12:00:00Z") == "light"
    assert tracker.update(WeatherCondition.CLEAR, fraction=0.0) == "dark"
    # No timestamp: default altitude 0.5 -> solar 0.575
    assert tracker.update(WeatherCondition.CLEAR) == "light"
