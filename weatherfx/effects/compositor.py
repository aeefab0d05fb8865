from __future__ import annotations

"""
Effect compositor: observation (or custom values) -> renderer props.

`compose_effects()` is the pure entry point.  `EffectCompositor` wraps it for
hosts with a render cycle: it withholds output until the host reports a
client-side mount and recomputes only when its inputs change.

Output shape::

    {
        "layers": {"celestial": bool, "clouds": bool, "rain": bool, ...},
        "celestial": {...}, "cloud": {...}|None, "rain": {...}|None,
        "lightning": {...}|None, "snow": {...}|None,
        "interactions": {...}|None,
        "post": {...},                      # auto mode only
        "dpr": float,
        "meta": {"mode": "auto"|"custom", "hash": "...", ...},
    }
"""

import copy
import hashlib
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from weatherfx.config import feature_flags

from .brightness import solar_light
from .conditions import WeatherCondition
from .mapper import config_to_canvas_props, map_weather_to_effects
from .models import AutoInput, CustomEffectProps, CustomInput, EffectInput, EffectSettings
from .tuned_presets import TUNED_CHECKPOINT_OVERRIDES
from .tuning import interpolated_overrides, merge_overrides, nearest_checkpoint

LOGGER = logging.getLogger(__name__)

MOBILE_VIEWPORT_WIDTH = 768

_QUALITY_DPR_CAP: Dict[str, float] = {
    "low": 1.0,
    "medium": 1.5,
    "high": 2.0,
}


@dataclass(frozen=True)
class DisplayMetrics:
    """What the host knows about the drawing surface."""

    device_pixel_ratio: Optional[float] = 1.0
    viewport_width: Optional[float] = None


def resolve_dpr(
    device_pixel_ratio: Optional[float],
    quality: str = "auto",
    viewport_width: Optional[float] = None,
) -> float:
    base = device_pixel_ratio or 1.0
    cap = _QUALITY_DPR_CAP.get(quality)
    if cap is None:
        narrow = viewport_width is not None and viewport_width < MOBILE_VIEWPORT_WIDTH
        cap = 1.5 if narrow else 2.0
    return max(1.0, min(base, cap))


def _input_hash(payload: Mapping[str, Any]) -> str:
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha1(serialized.encode("utf-8")).hexdigest()[:12]


def _tuned_for(condition: WeatherCondition) -> Optional[Mapping[str, Any]]:
    tuned = TUNED_CHECKPOINT_OVERRIDES.get(condition)
    if not tuned or not any(tuned.values()):
        return None
    return tuned


def _auto_props(request: AutoInput) -> Dict[str, Any]:
    observation = request.observation
    condition = WeatherCondition(observation.condition)
    config = map_weather_to_effects(observation)
    props = config_to_canvas_props(config)
    meta: Dict[str, Any] = {"mode": "auto", "condition": condition.value}

    tuned = _tuned_for(condition) if feature_flags.is_enabled("enable_tuned_presets") else None
    if tuned is not None:
        time_of_day = config.celestial.time_of_day
        if feature_flags.is_enabled("enable_checkpoint_interpolation"):
            base = dict(props)
            overrides = interpolated_overrides(tuned, time_of_day, lambda _cp: base)
            meta["checkpoint"] = "interpolated"
        else:
            checkpoint = nearest_checkpoint(time_of_day)
            overrides = tuned.get(checkpoint)
            meta["checkpoint"] = checkpoint
        props = merge_overrides(props, overrides)
        LOGGER.debug(
            "Applied tuned overrides",
            extra={"condition": condition.value, "checkpoint": meta["checkpoint"]},
        )

    meta["hash"] = _input_hash(observation.model_dump(mode="json"))
    props["meta"] = meta
    return props


def _custom_props(custom: CustomEffectProps) -> Optional[Dict[str, Any]]:
    toggles = custom.layers

    def _active(flag: Optional[bool], group: Any) -> bool:
        return flag is not False and group is not None

    has_celestial = _active(toggles.celestial if toggles else None, custom.celestial)
    has_cloud = _active(toggles.clouds if toggles else None, custom.cloud)
    has_rain = _active(toggles.rain if toggles else None, custom.rain)
    has_lightning = _active(toggles.lightning if toggles else None, custom.lightning)
    has_snow = _active(toggles.snow if toggles else None, custom.snow)
    if not any((has_celestial, has_cloud, has_rain, has_lightning, has_snow)):
        return None

    cloud = None
    if has_cloud and custom.cloud is not None:
        src = custom.cloud
        cloud = {
            "coverage": src.coverage,
            "density": src.density,
            "softness": src.softness,
            "cloud_scale": src.cloud_scale,
            "wind_speed": src.wind_speed,
            "wind_angle": src.wind_angle,
            "turbulence": src.turbulence,
            "light_intensity": (
                src.light_intensity
                if src.light_intensity is not None
                else solar_light(src.sun_altitude)
            ),
            "ambient_darkness": src.ambient_darkness,
            "num_layers": src.num_layers,
        }

    rain = None
    if has_rain and custom.rain is not None:
        src = custom.rain
        rain = {
            "glass_intensity": src.glass_intensity,
            "glass_zoom": src.zoom,
            "falling_intensity": src.falling_intensity,
            "falling_speed": src.falling_speed,
            "falling_angle": src.falling_angle,
            "falling_streak_length": src.falling_streak_length,
            "falling_layers": src.falling_layers,
        }

    lightning = None
    if has_lightning and custom.lightning is not None:
        src = custom.lightning
        lightning = {
            "enabled": True,
            "auto_mode": src.auto_mode,
            "auto_interval": src.auto_interval,
            "flash_intensity": src.glow_intensity,
            "branch_density": src.branch_density,
        }

    snow = None
    if has_snow and custom.snow is not None:
        snow = custom.snow.model_dump()

    interactions: Dict[str, float] = {}
    if custom.rain is not None and custom.rain.falling_refraction is not None:
        interactions["rain_refraction_strength"] = custom.rain.falling_refraction
    if custom.lightning is not None and custom.lightning.scene_illumination is not None:
        interactions["lightning_scene_illumination"] = custom.lightning.scene_illumination

    return {
        "layers": {
            "celestial": has_celestial,
            "clouds": has_cloud,
            "rain": has_rain,
            "lightning": has_lightning,
            "snow": has_snow,
        },
        "celestial": custom.celestial.model_dump() if has_celestial and custom.celestial else None,
        "cloud": cloud,
        "rain": rain,
        "lightning": lightning,
        "snow": snow,
        "interactions": interactions or None,
        "meta": {
            "mode": "custom",
            "hash": _input_hash(custom.model_dump(mode="json")),
        },
    }


def compose_effects(
    request: EffectInput,
    settings: Optional[EffectSettings] = None,
    display: Optional[DisplayMetrics] = None,
) -> Optional[Dict[str, Any]]:
    """Return renderer props for ``request``, or None when effects are off.

    Without ``display`` the ratio resolves against a plain 1x surface.
    """

    settings = settings or EffectSettings()
    if not settings.enabled or settings.reduced_motion:
        return None
    if not feature_flags.is_enabled("enable_weather_effects"):
        return None

    if isinstance(request, CustomInput):
        props = _custom_props(request.props)
    elif isinstance(request, AutoInput):
        props = _auto_props(request)
    else:
        raise TypeError(f"unsupported effect input: {type(request).__name__}")

    if props is None:
        return None
    display = display or DisplayMetrics()
    props["dpr"] = resolve_dpr(
        display.device_pixel_ratio, settings.quality, display.viewport_width
    )
    return props


class EffectCompositor:
    """Mount-gated, memoised wrapper around :func:`compose_effects`.

    The cached props stay private; every render hands out its own copy.
    """

    def __init__(self) -> None:
        self._mounted = False
        self._last_key: Optional[tuple] = None
        self._last_props: Optional[Dict[str, Any]] = None

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mark_mounted(self, mounted: bool = True) -> None:
        self._mounted = mounted

    def render(
        self,
        request: EffectInput,
        settings: Optional[EffectSettings] = None,
        display: Optional[DisplayMetrics] = None,
    ) -> Optional[Dict[str, Any]]:
        if not self._mounted:
            return None
        flags = tuple(sorted(feature_flags.load_feature_flags().items()))
        key = (request, settings, display, flags)
        if self._last_key is None or key != self._last_key:
            self._last_props = compose_effects(request, settings, display)
            self._last_key = key
        return copy.deepcopy(self._last_props)

    def reset(self) -> None:
        self._last_key = None
        self._last_props = None


__all__ = [
    "DisplayMetrics",
    "EffectCompositor",
    "compose_effects",
    "resolve_dpr",
]
