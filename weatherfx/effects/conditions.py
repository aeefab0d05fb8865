from __future__ import annotations

"""
Static, condition-indexed tables.

Every table here is keyed by :class:`WeatherCondition` and must stay total over
the enum; ``tests/test_conditions.py`` enforces that.  The tables are wrapped in
``MappingProxyType`` so nothing can mutate them after import.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class WeatherCondition(str, Enum):
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly-cloudy"
    CLOUDY = "cloudy"
    OVERCAST = "overcast"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    HEAVY_RAIN = "heavy-rain"
    THUNDERSTORM = "thunderstorm"
    SNOW = "snow"
    SLEET = "sleet"
    HAIL = "hail"
    WINDY = "windy"


_CONDITION_ALIASES: Dict[str, str] = {
    "sunny": "clear",
    "mostly-clear": "clear",
    "mostly-cloudy": "cloudy",
    "mist": "fog",
    "haze": "fog",
    "light-rain": "drizzle",
    "showers": "rain",
    "rainy": "rain",
    "downpour": "heavy-rain",
    "storm": "thunderstorm",
    "stormy": "thunderstorm",
    "thunder": "thunderstorm",
    "heavy-snow": "snow",
    "snowy": "snow",
    "blizzard": "snow",
    "freezing-rain": "sleet",
    "breezy": "windy",
}


def canonical_condition(value: Any) -> Any:
    """Fold aliases and spelling variants onto the enum value.

    Unknown values are returned cleaned but otherwise untouched so the caller's
    validator can reject them.
    """

    if isinstance(value, WeatherCondition):
        return value
    if not isinstance(value, str):
        return value
    cleaned = value.strip().lower().replace("_", "-").replace(" ", "-")
    return _CONDITION_ALIASES.get(cleaned, cleaned)


# 1.0 = no attenuation, lower = darker scene.  Loosely follows cloud darkness.
CONDITION_BRIGHTNESS: Mapping[WeatherCondition, float] = MappingProxyType(
    {
        WeatherCondition.CLEAR: 1.0,
        WeatherCondition.PARTLY_CLOUDY: 0.9,
        WeatherCondition.CLOUDY: 0.8,
        WeatherCondition.OVERCAST: 0.65,
        WeatherCondition.FOG: 0.7,
        WeatherCondition.DRIZZLE: 0.7,
        WeatherCondition.RAIN: 0.6,
        WeatherCondition.HEAVY_RAIN: 0.45,
        WeatherCondition.THUNDERSTORM: 0.3,
        WeatherCondition.SNOW: 0.8,
        WeatherCondition.SLEET: 0.65,
        WeatherCondition.HAIL: 0.5,
        WeatherCondition.WINDY: 0.9,
    }
)

BLOOM_CONDITION_BOOST: Mapping[WeatherCondition, float] = MappingProxyType(
    {
        WeatherCondition.FOG: 0.18,
        WeatherCondition.THUNDERSTORM: 0.12,
        WeatherCondition.HEAVY_RAIN: 0.10,
        WeatherCondition.OVERCAST: 0.08,
        WeatherCondition.CLOUDY: 0.06,
        WeatherCondition.PARTLY_CLOUDY: 0.06,
    }
)
DEFAULT_BLOOM_BOOST = 0.04


def _frozen(
    table: Dict[WeatherCondition, Dict[str, Any]]
) -> Mapping[WeatherCondition, Mapping[str, Any]]:
    return MappingProxyType(
        {
            condition: MappingProxyType(
                {
                    layer: MappingProxyType(dict(values))
                    for layer, values in layers.items()
                }
            )
            for condition, layers in table.items()
        }
    )


# A missing layer fragment disables that layer for the condition outright.
CONDITION_PRESETS = _frozen(
    {
        WeatherCondition.CLEAR: {
            "cloud": {"coverage": 0.1, "speed": 0.3, "darkness": 0.0, "turbulence": 0.2},
        },
        WeatherCondition.PARTLY_CLOUDY: {
            "cloud": {"coverage": 0.4, "speed": 0.4, "darkness": 0.1, "turbulence": 0.3},
        },
        WeatherCondition.CLOUDY: {
            "cloud": {"coverage": 0.7, "speed": 0.4, "darkness": 0.2, "turbulence": 0.3},
        },
        WeatherCondition.OVERCAST: {
            "cloud": {"coverage": 0.95, "speed": 0.3, "darkness": 0.35, "turbulence": 0.25},
        },
        WeatherCondition.FOG: {
            "cloud": {"coverage": 0.6, "speed": 0.15, "darkness": 0.15, "turbulence": 0.1},
        },
        WeatherCondition.DRIZZLE: {
            "cloud": {"coverage": 0.75, "speed": 0.35, "darkness": 0.3, "turbulence": 0.3},
            "rain": {"intensity": 0.25, "glass_drops": True, "falling_rain": True, "angle": 3.0},
        },
        WeatherCondition.RAIN: {
            "cloud": {"coverage": 0.85, "speed": 0.5, "darkness": 0.4, "turbulence": 0.4},
            "rain": {"intensity": 0.6, "glass_drops": True, "falling_rain": True, "angle": 5.0},
        },
        WeatherCondition.HEAVY_RAIN: {
            "cloud": {"coverage": 0.95, "speed": 0.6, "darkness": 0.55, "turbulence": 0.5},
            "rain": {"intensity": 1.0, "glass_drops": True, "falling_rain": True, "angle": 8.0},
        },
        WeatherCondition.THUNDERSTORM: {
            "cloud": {"coverage": 1.0, "speed": 0.7, "darkness": 0.7, "turbulence": 0.6},
            "rain": {"intensity": 1.0, "glass_drops": True, "falling_rain": True, "angle": 15.0},
            "lightning": {
                "enabled": True,
                "auto_trigger": True,
                "interval_min": 4.0,
                "interval_max": 12.0,
            },
        },
        WeatherCondition.SNOW: {
            "cloud": {"coverage": 0.7, "speed": 0.25, "darkness": 0.2, "turbulence": 0.2},
            "snow": {"intensity": 0.7, "wind_drift": 0.3},
        },
        WeatherCondition.SLEET: {
            "cloud": {"coverage": 0.8, "speed": 0.4, "darkness": 0.35, "turbulence": 0.35},
            "rain": {"intensity": 0.5, "glass_drops": True, "falling_rain": True, "angle": 10.0},
            "snow": {"intensity": 0.3, "wind_drift": 0.4},
        },
        WeatherCondition.HAIL: {
            "cloud": {"coverage": 0.9, "speed": 0.6, "darkness": 0.5, "turbulence": 0.5},
            "rain": {"intensity": 0.7, "glass_drops": True, "falling_rain": True, "angle": 5.0},
        },
        WeatherCondition.WINDY: {
            "cloud": {"coverage": 0.5, "speed": 1.0, "darkness": 0.1, "turbulence": 0.6},
        },
    }
)

# Shared celestial placement.  Each condition keeps its own entry so one can be
# retuned without touching the others.
_UNIFIED_CELESTIAL: Dict[str, float] = {
    "x": 0.74,
    "y": 0.78,
    "sun_size": 0.14,
    "moon_size": 0.17,
    "star_density": 2.0,
    "sun_glow_intensity": 3.05,
    "sun_glow_size": 0.3,
    "sun_ray_count": 6,
    "sun_ray_length": 3.0,
    "sun_ray_intensity": 0.1,
    "moon_glow_intensity": 3.45,
    "moon_glow_size": 0.94,
}

CELESTIAL_PRESETS: Mapping[WeatherCondition, Mapping[str, float]] = MappingProxyType(
    {condition: MappingProxyType(dict(_UNIFIED_CELESTIAL)) for condition in WeatherCondition}
)


def condition_preset(condition: WeatherCondition) -> Mapping[str, Mapping[str, Any]]:
    return CONDITION_PRESETS[WeatherCondition(condition)]


def bloom_boost(condition: WeatherCondition) -> float:
    return BLOOM_CONDITION_BOOST.get(WeatherCondition(condition), DEFAULT_BLOOM_BOOST)


__all__ = [
    "BLOOM_CONDITION_BOOST",
    "CELESTIAL_PRESETS",
    "CONDITION_BRIGHTNESS",
    "CONDITION_PRESETS",
    "DEFAULT_BLOOM_BOOST",
    "WeatherCondition",
    "bloom_boost",
    "canonical_condition",
    "condition_preset",
]
