from __future__ import annotations

"""
Predicted scene brightness and the light/dark theme chosen from it.

Brightness is estimated from the observation rather than sampled from the
rendered canvas, so it is available before anything is drawn.
"""

import logging
from typing import Callable, Dict, Literal, Optional

from .conditions import CONDITION_BRIGHTNESS, WeatherCondition
from .time_model import Timestamp, sun_altitude, sun_altitude_from_fraction, time_of_day

LOGGER = logging.getLogger(__name__)

WeatherTheme = Literal["light", "dark"]

DARK_THRESHOLD = 0.35
LIGHT_THRESHOLD = 0.45


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def solar_light(altitude: float) -> float:
    """Night maps onto 0.05-0.15, day onto 0.15-1.0."""
    if altitude < 0:
        light = 0.05 + (1 + altitude) * 0.10
    else:
        light = 0.15 + altitude * 0.85
    return _clamp01(light)


def brightness_from_altitude(
    altitude: float, condition: WeatherCondition = WeatherCondition.CLEAR
) -> float:
    modifier = CONDITION_BRIGHTNESS[WeatherCondition(condition)]
    return _clamp01(solar_light(altitude) * modifier)


def scene_brightness(
    timestamp: Timestamp = None,
    condition: WeatherCondition = WeatherCondition.CLEAR,
) -> float:
    return brightness_from_altitude(sun_altitude(timestamp), condition)


def scene_brightness_from_fraction(
    fraction: float, condition: WeatherCondition = WeatherCondition.CLEAR
) -> float:
    return brightness_from_altitude(sun_altitude_from_fraction(fraction), condition)


def weather_theme(
    brightness: float, current: Optional[WeatherTheme] = None
) -> WeatherTheme:
    if brightness < DARK_THRESHOLD:
        return "dark"
    if brightness > LIGHT_THRESHOLD:
        return "light"
    # Inside the band the committed theme holds.
    return current or "dark"


class ThemeTracker:
    """Feeds the committed theme back into :func:`weather_theme`.

    Subscribers are only called when the committed theme actually changes.
    """

    def __init__(self, initial: Optional[WeatherTheme] = None) -> None:
        self._theme: Optional[WeatherTheme] = initial
        self._subscribers: Dict[str, Callable[[WeatherTheme], None]] = {}

    @property
    def theme(self) -> Optional[WeatherTheme]:
        return self._theme

    def subscribe(self, key: str, callback: Callable[[WeatherTheme], None]) -> None:
        self._subscribers[key] = callback

    def unsubscribe(self, key: str) -> None:
        self._subscribers.pop(key, None)

    def observe_brightness(self, brightness: float) -> WeatherTheme:
        resolved = weather_theme(brightness, self._theme)
        if resolved != self._theme:
            previous, self._theme = self._theme, resolved
            LOGGER.info(
                "Weather theme changed",
                extra={
                    "theme_from": previous,
                    "theme_to": resolved,
                    "brightness": round(brightness, 4),
                },
            )
            for callback in list(self._subscribers.values()):
                callback(resolved)
        return resolved

    def update(
        self,
        condition: WeatherCondition,
        *,
        timestamp: Timestamp = None,
        fraction: Optional[float] = None,
    ) -> WeatherTheme:
        if fraction is None:
            fraction = time_of_day(timestamp) if timestamp else None
        if fraction is None:
            brightness = scene_brightness(None, condition)
        else:
            brightness = scene_brightness_from_fraction(fraction, condition)
        return self.observe_brightness(brightness)


__all__ = [
    "DARK_THRESHOLD",
    "LIGHT_THRESHOLD",
    "ThemeTracker",
    "WeatherTheme",
    "brightness_from_altitude",
    "scene_brightness",
    "scene_brightness_from_fraction",
    "solar_light",
    "weather_theme",
]
