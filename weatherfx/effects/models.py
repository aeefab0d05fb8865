from __future__ import annotations

"""
Input models and the derived layer configuration.

Inputs (observation, settings, custom props) are pydantic models so hosts can
hydrate them straight from tool-call JSON.  The derived configuration is plain
dataclasses: it is recomputed per render and never validated again.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .conditions import WeatherCondition, canonical_condition

PrecipitationLevel = Literal["none", "light", "moderate", "heavy"]
EffectQuality = Literal["low", "medium", "high", "auto"]


class WeatherObservation(BaseModel):
    """One observation; immutable for the duration of a render."""

    condition: WeatherCondition
    wind_speed: Optional[float] = None
    precipitation: Optional[PrecipitationLevel] = None
    humidity: Optional[float] = None
    visibility: Optional[float] = None
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("condition", mode="before")
    @classmethod
    def _fold_condition(cls, value: Any) -> Any:
        return canonical_condition(value)


class EffectSettings(BaseModel):
    enabled: bool = True
    quality: EffectQuality = "auto"
    reduced_motion: bool = False

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomLayerToggles(BaseModel):
    celestial: Optional[bool] = None
    clouds: Optional[bool] = None
    rain: Optional[bool] = None
    lightning: Optional[bool] = None
    snow: Optional[bool] = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomCelestial(BaseModel):
    time_of_day: float
    moon_phase: float
    star_density: float
    celestial_x: float
    celestial_y: float
    sun_size: float
    moon_size: float
    sun_glow_intensity: float
    sun_glow_size: float
    sun_ray_count: float
    sun_ray_length: float
    sun_ray_intensity: float
    # 0 disables ray motion, 1 is the default subtlety.
    sun_ray_shimmer: Optional[float] = None
    sun_ray_shimmer_speed: Optional[float] = None
    moon_glow_intensity: float
    moon_glow_size: float

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomCloud(BaseModel):
    cloud_scale: Optional[float] = None
    coverage: float
    density: Optional[float] = None
    softness: Optional[float] = None
    wind_speed: float
    wind_angle: Optional[float] = None
    turbulence: float
    sun_altitude: float
    light_intensity: Optional[float] = None
    ambient_darkness: float
    num_layers: Optional[int] = None
    star_density: float

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomRain(BaseModel):
    glass_intensity: float
    zoom: Optional[float] = None
    falling_intensity: float
    falling_speed: Optional[float] = None
    falling_angle: float
    falling_streak_length: Optional[float] = None
    falling_layers: Optional[int] = None
    falling_refraction: Optional[float] = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomLightning(BaseModel):
    branch_density: Optional[float] = None
    glow_intensity: Optional[float] = None
    scene_illumination: Optional[float] = None
    auto_mode: bool
    auto_interval: float

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomSnow(BaseModel):
    intensity: float
    layers: Optional[int] = None
    fall_speed: Optional[float] = None
    wind_speed: float
    drift: float
    flake_size: Optional[float] = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class CustomEffectProps(BaseModel):
    """Fully manual layer values; bypasses the parameter mapper."""

    layers: Optional[CustomLayerToggles] = None
    celestial: Optional[CustomCelestial] = None
    cloud: Optional[CustomCloud] = None
    rain: Optional[CustomRain] = None
    lightning: Optional[CustomLightning] = None
    snow: Optional[CustomSnow] = None

    model_config = ConfigDict(extra="ignore", frozen=True)


# --------------------------------------------------------------------- derived
@dataclass(frozen=True)
class CloudLayer:
    coverage: float
    speed: float
    darkness: float
    turbulence: float


@dataclass(frozen=True)
class RainLayer:
    intensity: float
    glass_drops: bool
    falling_rain: bool
    angle: float


@dataclass(frozen=True)
class LightningLayer:
    enabled: bool
    auto_trigger: bool
    interval_min: float
    interval_max: float


@dataclass(frozen=True)
class SnowLayer:
    intensity: float
    wind_drift: float


@dataclass(frozen=True)
class Atmosphere:
    sun_altitude: float
    haze: float
    star_visibility: float


@dataclass(frozen=True)
class CelestialLayer:
    time_of_day: float
    moon_phase: float
    star_density: float
    celestial_x: float
    celestial_y: float
    sun_size: float
    moon_size: float
    sun_glow_intensity: float
    sun_glow_size: float
    sun_ray_count: float
    sun_ray_length: float
    sun_ray_intensity: float
    moon_glow_intensity: float
    moon_glow_size: float


@dataclass(frozen=True)
class PostProcess:
    haze: float
    bloom_intensity: float
    bloom_radius: float
    exposure_intensity: float
    god_ray_intensity: float
    enabled: bool = True


@dataclass(frozen=True)
class EffectLayerConfig:
    celestial: CelestialLayer
    atmosphere: Atmosphere
    post: PostProcess
    cloud: Optional[CloudLayer] = None
    rain: Optional[RainLayer] = None
    lightning: Optional[LightningLayer] = None
    snow: Optional[SnowLayer] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ----------------------------------------------------------------- input modes
@dataclass(frozen=True)
class AutoInput:
    """Effects derived from a weather observation."""

    observation: WeatherObservation
    kind: Literal["auto"] = "auto"


@dataclass(frozen=True)
class CustomInput:
    """Effects specified directly by the caller."""

    props: CustomEffectProps
    kind: Literal["custom"] = "custom"


EffectInput = Union[AutoInput, CustomInput]


__all__ = [
    "Atmosphere",
    "AutoInput",
    "CelestialLayer",
    "CloudLayer",
    "CustomCelestial",
    "CustomCloud",
    "CustomEffectProps",
    "CustomInput",
    "CustomLayerToggles",
    "CustomLightning",
    "CustomRain",
    "CustomSnow",
    "EffectInput",
    "EffectLayerConfig",
    "EffectQuality",
    "EffectSettings",
    "LightningLayer",
    "PostProcess",
    "PrecipitationLevel",
    "RainLayer",
    "SnowLayer",
    "WeatherObservation",
]
