from __future__ import annotations

"""
Feature toggles for the effect pipeline.

Flags live under ``"features"`` in ``weatherfx.json`` and, with higher
precedence, ``config/weatherfx.json``; both paths resolve against the working
directory at call time.  Results are cached until either file's mtime changes.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

LOGGER = logging.getLogger(__name__)

FEATURE_DEFAULTS: Dict[str, bool] = {
    "enable_weather_effects": True,
    "enable_tuned_presets": True,
    "enable_checkpoint_interpolation": False,
}

# Later entries win.
CONFIG_PATHS: Tuple[Path, ...] = (Path("weatherfx.json"), Path("config") / "weatherfx.json")

_cached: Optional[Tuple[Tuple[float, ...], Dict[str, bool]]] = None


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


def _read_features(path: Path) -> Dict[str, bool]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        LOGGER.debug("Ignoring unreadable config %s: %s", path, exc)
        return {}
    section = raw.get("features") if isinstance(raw, dict) else None
    if not isinstance(section, dict):
        return {}
    return {key: value for key, value in section.items() if isinstance(value, bool)}


def load_feature_flags(*, refresh: bool = False) -> Dict[str, bool]:
    global _cached
    signature = tuple(_mtime(path) for path in CONFIG_PATHS)
    if refresh or _cached is None or _cached[0] != signature:
        flags = dict(FEATURE_DEFAULTS)
        for path in CONFIG_PATHS:
            flags.update(_read_features(path))
        _cached = (signature, flags)
    return dict(_cached[1])


def is_enabled(
    name: str, *, default: Optional[bool] = None, refresh: bool = False
) -> bool:
    return bool(load_feature_flags(refresh=refresh).get(name, default or False))


def refresh_cache() -> Dict[str, bool]:
    return load_feature_flags(refresh=True)


__all__ = [
    "CONFIG_PATHS",
    "FEATURE_DEFAULTS",
    "is_enabled",
    "load_feature_flags",
    "refresh_cache",
]
