from __future__ import annotations

"""
Weather-effect parameter mapping and compositing.

Hosts normally only need `compose_effects` (or the stateful `EffectCompositor`)
plus `ThemeTracker` for the widget chrome; the lower-level mapping helpers are
exported for previews and the tuning workflow.
"""

from .brightness import ThemeTracker, scene_brightness, scene_brightness_from_fraction, weather_theme
from .compositor import DisplayMetrics, EffectCompositor, compose_effects, resolve_dpr
from .conditions import WeatherCondition
from .mapper import map_weather_to_effects
from .models import (
    AutoInput,
    CustomEffectProps,
    CustomInput,
    EffectLayerConfig,
    EffectSettings,
    WeatherObservation,
)
from .tuning import merge_overrides, nearest_checkpoint

__all__ = [
    "AutoInput",
    "CustomEffectProps",
    "CustomInput",
    "DisplayMetrics",
    "EffectCompositor",
    "EffectLayerConfig",
    "EffectSettings",
    "ThemeTracker",
    "WeatherCondition",
    "WeatherObservation",
    "compose_effects",
    "map_weather_to_effects",
    "merge_overrides",
    "nearest_checkpoint",
    "resolve_dpr",
    "scene_brightness",
    "scene_brightness_from_fraction",
    "weather_theme",
]
