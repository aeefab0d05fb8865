from __future__ import annotations

"""
Weather observation -> effect layer configuration.

`map_weather_to_effects(observation)` starts from the condition preset, applies
the wind/precipitation/visibility modifiers and derives the post-processing
values.  The ``config_to_*`` helpers reshape the result into the field names the
renderer reads.  Everything here is deterministic.
"""

import logging
from typing import Any, Dict, Optional

from .brightness import solar_light
from .conditions import CELESTIAL_PRESETS, WeatherCondition, bloom_boost, condition_preset
from .models import (
    Atmosphere,
    CelestialLayer,
    CloudLayer,
    EffectLayerConfig,
    LightningLayer,
    PostProcess,
    RainLayer,
    SnowLayer,
    WeatherObservation,
)
from .time_model import is_night, moon_phase, sun_altitude, time_of_day

LOGGER = logging.getLogger(__name__)

_PRECIPITATION_INTENSITY: Dict[str, float] = {
    "none": 0.0,
    "light": 0.3,
    "moderate": 0.6,
    "heavy": 1.0,
}

# Approximate degrees -> renderer angle units.  Not pi/180; the renderer was
# tuned against this value.
RAIN_ANGLE_SCALE = 0.02


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    t = _clamp01((x - edge0) / (edge1 - edge0))
    return t * t * (3 - 2 * t)


def map_wind_speed(mph: Optional[float] = None) -> float:
    """0-10 mph subtle, 10-25 moderate, 25+ dramatic (saturates at 1.0)."""
    mph = max(0.0, mph or 0.0)
    if mph <= 10:
        return mph / 10 * 0.3
    if mph <= 25:
        return 0.3 + (mph - 10) / 15 * 0.4
    return 0.7 + min((mph - 25) / 25, 0.3)


def map_precipitation(level: Optional[str] = None) -> float:
    return _PRECIPITATION_INTENSITY.get(level or "none", 0.0)


def map_visibility(miles: Optional[float] = None) -> float:
    """10+ miles clear, 5-10 light haze, under 5 heavy haze."""
    miles = 10.0 if miles is None else max(0.0, miles)
    if miles >= 10:
        return 0.0
    if miles >= 5:
        return (10 - miles) / 5 * 0.3
    return 0.3 + (5 - miles) / 5 * 0.7


def _post_process(
    condition: WeatherCondition,
    haze: float,
    altitude: float,
    cloud: Optional[CloudLayer],
    lightning: Optional[LightningLayer],
) -> PostProcess:
    coverage = cloud.coverage if cloud else 0.0
    bloom_intensity = _clamp01(0.04 + bloom_boost(condition) + haze * 0.22)
    bloom_radius = 1.1 + haze * 1.2
    exposure_intensity = 0.85 if lightning is not None and lightning.enabled else 0.0

    # Crepuscular rays want a low sun, particles in the air and broken cloud.
    god_rays = 0.0
    if cloud is not None and coverage > 0.001:
        day_factor = smoothstep(-0.05, 0.08, altitude)
        sun_low_factor = 1.0 - smoothstep(0.18, 0.7, max(0.0, altitude))
        coverage_factor = smoothstep(0.25, 0.85, coverage)
        not_overcast = 1.0 - smoothstep(0.97, 1.0, coverage)
        particle_factor = 0.35 + haze * 0.65
        god_rays = _clamp01(
            day_factor
            * sun_low_factor
            * coverage_factor
            * not_overcast
            * particle_factor
            * 0.6
        )

    return PostProcess(
        haze=haze,
        bloom_intensity=bloom_intensity,
        bloom_radius=bloom_radius,
        exposure_intensity=exposure_intensity,
        god_ray_intensity=god_rays,
    )


def map_weather_to_effects(observation: WeatherObservation) -> EffectLayerConfig:
    condition = WeatherCondition(observation.condition)
    preset = condition_preset(condition)
    timestamp = observation.timestamp

    altitude = sun_altitude(timestamp)
    night = is_night(altitude)
    wind = map_wind_speed(observation.wind_speed)
    precip = map_precipitation(observation.precipitation)
    haze_amount = map_visibility(observation.visibility)

    cloud_preset = preset.get("cloud")
    haze = _clamp01(
        max(haze_amount, (cloud_preset["darkness"] if cloud_preset else 0.0) * 0.3)
    )
    if not night:
        star_visibility = 0.0
    elif cloud_preset:
        star_visibility = _clamp01(1.0 - cloud_preset["coverage"])
    else:
        star_visibility = 1.0
    atmosphere = Atmosphere(
        sun_altitude=altitude, haze=haze, star_visibility=star_visibility
    )

    cloud = None
    if cloud_preset:
        cloud = CloudLayer(
            coverage=_clamp01(cloud_preset["coverage"]),
            speed=cloud_preset["speed"] * (1 + wind * 0.5),
            darkness=_clamp01(cloud_preset["darkness"]),
            turbulence=_clamp01(cloud_preset["turbulence"] * (1 + wind * 0.3)),
        )

    rain = None
    rain_preset = preset.get("rain")
    if rain_preset:
        # Reported precipitation only wins when there is some.
        intensity = precip if precip > 0 else rain_preset["intensity"]
        rain = RainLayer(
            intensity=_clamp01(intensity),
            glass_drops=rain_preset["glass_drops"],
            falling_rain=rain_preset["falling_rain"],
            angle=rain_preset["angle"] + wind * 10,
        )

    lightning = None
    lightning_preset = preset.get("lightning")
    if lightning_preset:
        lightning = LightningLayer(**lightning_preset)

    snow = None
    snow_preset = preset.get("snow")
    if snow_preset:
        snow = SnowLayer(
            intensity=_clamp01(snow_preset["intensity"]),
            wind_drift=snow_preset["wind_drift"] + wind * 0.3,
        )

    sky = CELESTIAL_PRESETS[condition]
    celestial = CelestialLayer(
        time_of_day=time_of_day(timestamp),
        moon_phase=moon_phase(timestamp),
        star_density=sky["star_density"] if night else 0.0,
        celestial_x=sky["x"],
        celestial_y=sky["y"],
        sun_size=sky["sun_size"],
        moon_size=sky["moon_size"],
        sun_glow_intensity=sky["sun_glow_intensity"],
        sun_glow_size=sky["sun_glow_size"],
        sun_ray_count=sky["sun_ray_count"],
        sun_ray_length=sky["sun_ray_length"],
        sun_ray_intensity=sky["sun_ray_intensity"],
        moon_glow_intensity=sky["moon_glow_intensity"],
        moon_glow_size=sky["moon_glow_size"],
    )

    config = EffectLayerConfig(
        celestial=celestial,
        atmosphere=atmosphere,
        post=_post_process(condition, haze, altitude, cloud, lightning),
        cloud=cloud,
        rain=rain,
        lightning=lightning,
        snow=snow,
    )
    LOGGER.debug(
        "Mapped weather effects",
        extra={
            "condition": condition.value,
            "sun_altitude": round(altitude, 4),
            "wind_intensity": round(wind, 4),
            "haze": round(haze, 4),
        },
    )
    return config


# ------------------------------------------------------------ renderer shapes
def config_to_cloud_props(config: EffectLayerConfig) -> Optional[Dict[str, Any]]:
    if config.cloud is None:
        return None
    return {
        "coverage": config.cloud.coverage,
        "density": 0.5 + config.cloud.coverage * 0.5,
        "wind_speed": config.cloud.speed,
        "turbulence": config.cloud.turbulence,
        "ambient_darkness": config.cloud.darkness,
        "light_intensity": solar_light(config.atmosphere.sun_altitude),
    }


def config_to_rain_props(config: EffectLayerConfig) -> Optional[Dict[str, Any]]:
    rain = config.rain
    if rain is None:
        return None
    return {
        "glass_intensity": rain.intensity * 0.7 if rain.glass_drops else 0.0,
        "falling_intensity": rain.intensity if rain.falling_rain else 0.0,
        "falling_angle": rain.angle * RAIN_ANGLE_SCALE,
    }


def config_to_lightning_props(config: EffectLayerConfig) -> Optional[Dict[str, Any]]:
    lightning = config.lightning
    if lightning is None:
        return None
    return {
        "enabled": lightning.enabled,
        "auto_mode": lightning.auto_trigger,
        "auto_interval": (lightning.interval_min + lightning.interval_max) / 2,
    }


def config_to_snow_props(config: EffectLayerConfig) -> Optional[Dict[str, Any]]:
    if config.snow is None:
        return None
    return {
        "intensity": config.snow.intensity,
        "wind_speed": config.snow.wind_drift,
        "drift": config.snow.wind_drift,
    }


def config_to_celestial_props(config: EffectLayerConfig) -> Dict[str, Any]:
    return dict(vars(config.celestial))


def config_to_post_props(config: EffectLayerConfig) -> Dict[str, Any]:
    return dict(vars(config.post))


def config_to_canvas_props(config: EffectLayerConfig) -> Dict[str, Any]:
    """Reshape a mapped configuration into the renderer's prop groups."""
    cloud = config_to_cloud_props(config)
    lightning = config_to_lightning_props(config)
    props: Dict[str, Any] = {
        "layers": {
            "celestial": True,
            "clouds": cloud is not None,
            "rain": config.rain is not None,
            "lightning": bool(lightning and lightning["enabled"]),
            "snow": config.snow is not None,
        },
        "celestial": config_to_celestial_props(config),
        "cloud": cloud,
        "rain": config_to_rain_props(config),
        "lightning": lightning,
        "snow": config_to_snow_props(config),
        "interactions": None,
        "post": config_to_post_props(config),
    }
    return props


__all__ = [
    "RAIN_ANGLE_SCALE",
    "config_to_canvas_props",
    "config_to_celestial_props",
    "config_to_cloud_props",
    "config_to_lightning_props",
    "config_to_post_props",
    "config_to_rain_props",
    "config_to_snow_props",
    "map_precipitation",
    "map_visibility",
    "map_weather_to_effects",
    "map_wind_speed",
    "smoothstep",
]
