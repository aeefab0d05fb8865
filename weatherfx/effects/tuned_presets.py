from __future__ import annotations

"""Tuned overrides per condition and checkpoint, as exported by the tuning studio."""

from types import MappingProxyType
from typing import Any, Dict, Mapping

from .conditions import WeatherCondition

_OVERCAST_CELESTIAL = {
    "sun_glow_intensity": 1.73,
    "sun_glow_size": 0.22,
    "sun_ray_count": 0,
    "sun_ray_length": 0,
    "sun_ray_intensity": 0,
}
_OVERCAST_CLOUD = {
    "cloud_scale": 0.98,
    "coverage": 1,
    "density": 0.87,
    "softness": 1,
    "wind_speed": 0.04,
    "light_intensity": 1.1,
    "backlight_intensity": 0,
    "num_layers": 1,
}
_HEAVY_RAIN_CLOUD = {"coverage": 0.64, "density": 1.2, "wind_speed": 0.1, "num_layers": 1}
_THUNDERSTORM_DAY = {
    "lightning": {"branch_density": 0.83, "flash_intensity": 0.85},
    "interactions": {"lightning_scene_illumination": 0.77},
}
_SLEET = {
    "rain": {
        "glass_intensity": 0.3,
        "glass_zoom": 0.83,
        "falling_speed": 3,
        "falling_streak_length": 0.42,
    },
    "snow": {
        "intensity": 0.08,
        "layers": 6,
        "fall_speed": 0.76,
        "drift": 0.28,
        "flake_size": 1.87,
    },
}
_WINDY = {
    "celestial": {"celestial_y": 0.74},
    "cloud": {
        "cloud_scale": 1.84,
        "coverage": 0.49,
        "density": 0.67,
        "wind_speed": 0.26,
        "turbulence": 0.77,
        "light_intensity": 0.63,
        "ambient_darkness": 0.37,
        "backlight_intensity": 0.39,
    },
}


def _dup(patch: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {group: dict(values) for group, values in patch.items()}


_TUNED: Dict[WeatherCondition, Dict[str, Dict[str, Dict[str, Any]]]] = {
    WeatherCondition.CLEAR: {
        "dawn": {
            "celestial": {
                "celestial_y": 0.74,
                "sun_glow_intensity": 3.7,
                "sun_glow_size": 0.36,
                "moon_glow_intensity": 2.45,
                "moon_glow_size": 0.96,
                "sky_brightness": 1.04,
                "sky_saturation": 1.31,
                "sky_contrast": 0.61,
            },
        },
        "noon": {
            "celestial": {
                "celestial_y": 0.74,
                "sun_glow_intensity": 2.68,
                "sun_glow_size": 0.37,
                "sun_ray_intensity": 0.11,
                "moon_glow_intensity": 2.45,
                "moon_glow_size": 0.96,
                "sky_brightness": 0.91,
                "sky_saturation": 1.53,
            },
        },
        "dusk": {
            "celestial": {
                "celestial_y": 0.74,
                "sun_glow_size": 0.47,
                "sun_ray_intensity": 0.04,
                "moon_glow_intensity": 2.45,
                "moon_glow_size": 0.96,
                "sky_brightness": 1.04,
                "sky_saturation": 1.31,
                "sky_contrast": 0.61,
            },
        },
        "midnight": {
            "celestial": {
                "celestial_y": 0.74,
                "moon_glow_intensity": 2.45,
                "moon_glow_size": 0.96,
                "sky_brightness": 1.04,
                "sky_saturation": 1.31,
                "sky_contrast": 0.61,
            },
        },
    },
    WeatherCondition.PARTLY_CLOUDY: {
        **{
            checkpoint: {
                "cloud": {
                    "coverage": 0.43,
                    "density": 0.32,
                    "softness": 0.34,
                    "light_intensity": 1.2,
                    "backlight_intensity": 0.45,
                },
            }
            for checkpoint in ("dawn", "noon", "dusk")
        },
        "midnight": {
            "cloud": {
                "coverage": 0.38,
                "density": 1.36,
                "softness": 0.34,
                "light_intensity": 0.47,
                "backlight_intensity": 0.61,
            },
        },
    },
    WeatherCondition.CLOUDY: {
        **{
            checkpoint: {
                "celestial": {"sky_brightness": 0.91, "sky_saturation": 1.16},
                "cloud": {
                    "softness": 0.45,
                    "wind_speed": 0.09,
                    "light_intensity": 0.81,
                    "backlight_intensity": 0.39,
                },
            }
            for checkpoint in ("dawn", "noon")
        },
        "dusk": {
            "celestial": {"sky_brightness": 0.91, "sky_saturation": 1.16},
            "cloud": {
                "coverage": 0.58,
                "softness": 0.29,
                "wind_speed": 0.09,
                "light_intensity": 1.26,
                "backlight_intensity": 0.55,
            },
        },
        "midnight": {
            "cloud": {
                "coverage": 0.76,
                "density": 1.25,
                "softness": 0.4,
                "light_intensity": 0.92,
                "ambient_darkness": 1,
                "backlight_intensity": 0.43,
                "num_layers": 1,
            },
        },
    },
    WeatherCondition.OVERCAST: {
        "dawn": {
            "celestial": {**_OVERCAST_CELESTIAL, "sun_glow_intensity": 2.08, "sky_brightness": 1.05},
            "cloud": {**_OVERCAST_CLOUD, "backlight_intensity": 0.53},
        },
        "noon": {
            "celestial": {
                **_OVERCAST_CELESTIAL,
                "sun_glow_size": 0.48,
                "sky_brightness": 0.68,
                "sky_saturation": 0.84,
            },
            "cloud": dict(_OVERCAST_CLOUD),
        },
        "dusk": {
            "celestial": {**_OVERCAST_CELESTIAL, "sky_brightness": 0.81, "sky_saturation": 0.79},
            "cloud": dict(_OVERCAST_CLOUD),
        },
        "midnight": {
            "celestial": {**_OVERCAST_CELESTIAL, "sky_brightness": 0.64, "sky_saturation": 1.46},
            "cloud": {
                **_OVERCAST_CLOUD,
                "density": 0.97,
                "softness": 0.95,
                "backlight_intensity": 0.22,
            },
        },
    },
    WeatherCondition.FOG: {
        "dawn": {},
        "noon": {},
        "dusk": {},
        "midnight": {"celestial": {"celestial_y": 0.74}},
    },
    WeatherCondition.RAIN: {
        "dawn": {},
        "noon": {},
        "dusk": {},
        "midnight": {"cloud": {"wind_speed": 0.19}},
    },
    WeatherCondition.HEAVY_RAIN: {
        "dawn": {"cloud": dict(_HEAVY_RAIN_CLOUD)},
        "noon": {
            "celestial": {
                "sun_glow_intensity": 3.38,
                "sky_brightness": 0.88,
                "sky_saturation": 0.97,
            },
            "cloud": {
                "coverage": 0.64,
                "density": 1.27,
                "wind_speed": 0.1,
                "light_intensity": 0.19,
                "ambient_darkness": 1,
                "backlight_intensity": 0.47,
                "num_layers": 2,
            },
            "rain": {
                "glass_intensity": 0.88,
                "glass_zoom": 1.18,
                "falling_speed": 3,
                "falling_streak_length": 2,
                "falling_layers": 6,
            },
        },
        "dusk": {"cloud": dict(_HEAVY_RAIN_CLOUD)},
        "midnight": {"cloud": dict(_HEAVY_RAIN_CLOUD)},
    },
    WeatherCondition.THUNDERSTORM: {
        "dawn": _dup(_THUNDERSTORM_DAY),
        "noon": _dup(_THUNDERSTORM_DAY),
        "dusk": _dup(_THUNDERSTORM_DAY),
        "midnight": {
            "cloud": {
                "wind_speed": 0.12,
                "turbulence": 0.63,
                "light_intensity": 0.73,
                "ambient_darkness": 1,
                "backlight_intensity": 0.62,
            },
            "lightning": {
                "branch_density": 0.72,
                "flash_intensity": 1.72,
                "auto_interval": 7.5,
            },
            "interactions": {"lightning_scene_illumination": 0.19},
        },
    },
    WeatherCondition.SNOW: {
        "dawn": {"cloud": {"light_intensity": 0.64}, "snow": {"intensity": 0.12}},
        "noon": {"cloud": {"light_intensity": 0.64}, "snow": {"intensity": 0.23}},
        "dusk": {"cloud": {"light_intensity": 0.64}, "snow": {"intensity": 0.15}},
        "midnight": {"cloud": {"light_intensity": 0.64}},
    },
    WeatherCondition.SLEET: {
        "dawn": _dup(_SLEET),
        "noon": _dup(_SLEET),
        "dusk": _dup(_SLEET),
        "midnight": {"celestial": {"celestial_y": 0.74}, **_dup(_SLEET)},
    },
    WeatherCondition.HAIL: {
        "dawn": {"cloud": {"wind_speed": 0.16}},
        "noon": {"cloud": {"wind_speed": 0.16}},
        "dusk": {"cloud": {"wind_speed": 0.16}},
        "midnight": {"celestial": {"celestial_y": 0.74}, "cloud": {"wind_speed": 0.16}},
    },
    WeatherCondition.WINDY: {
        checkpoint: _dup(_WINDY) for checkpoint in ("dawn", "noon", "dusk", "midnight")
    },
}

def _frozen(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({key: _frozen(item) for key, item in value.items()})
    return value


# condition -> checkpoint -> group -> field, read-only at every level.
TUNED_CHECKPOINT_OVERRIDES: Mapping[
    WeatherCondition, Mapping[str, Mapping[str, Mapping[str, Any]]]
] = _frozen(_TUNED)

__all__ = ["TUNED_CHECKPOINT_OVERRIDES"]
