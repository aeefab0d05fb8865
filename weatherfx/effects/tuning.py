from __future__ import annotations

"""
Hand-tuned overrides keyed by condition and time-of-day checkpoint.

Designers tune four checkpoints per condition.  At render time the computed
canvas props are patched with the overrides of the nearest checkpoint, or, when
interpolation is enabled, a blend of the two checkpoints around the current
time.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple

TimeCheckpoint = Literal["dawn", "noon", "dusk", "midnight"]
Overrides = Dict[str, Dict[str, Any]]
CheckpointOverrides = Mapping[str, Overrides]

TIME_CHECKPOINTS: Mapping[str, float] = MappingProxyType(
    {"dawn": 0.25, "noon": 0.5, "dusk": 0.75, "midnight": 0.0}
)
# Iteration order decides exact ties (e.g. 0.125 resolves to dawn).
TIME_CHECKPOINT_ORDER: Tuple[TimeCheckpoint, ...] = ("dawn", "noon", "dusk", "midnight")

OVERRIDE_GROUPS: Tuple[str, ...] = (
    "layers",
    "celestial",
    "cloud",
    "rain",
    "lightning",
    "snow",
    "interactions",
)


def _normalize_fraction(value: float) -> float:
    return value % 1.0


def nearest_checkpoint(time_of_day: float) -> TimeCheckpoint:
    normalized = _normalize_fraction(time_of_day)
    nearest: TimeCheckpoint = "noon"
    best = float("inf")
    for checkpoint in TIME_CHECKPOINT_ORDER:
        distance = abs(normalized - TIME_CHECKPOINTS[checkpoint])
        if distance > 0.5:
            distance = 1 - distance
        if distance < best:
            best = distance
            nearest = checkpoint
    return nearest


def _merge_group(
    base: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]
) -> Optional[Dict[str, Any]]:
    if base is None and override is None:
        return None
    merged = dict(base or {})
    merged.update(override or {})
    return merged


def merge_overrides(
    base: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """Shallow-merge override groups onto ``base``.

    Only one level deep: each group's fields are replaced, never recursed into.
    Keys of ``base`` that are not override groups are carried over as-is.
    """

    overrides = overrides or {}
    merged: Dict[str, Any] = dict(base)
    for group in OVERRIDE_GROUPS:
        value = _merge_group(base.get(group), overrides.get(group))
        if value is not None or group in base:
            merged[group] = value
    return merged


# ------------------------------------------------------------- interpolation
def surrounding_checkpoints(time_of_day: float) -> Tuple[TimeCheckpoint, TimeCheckpoint, float]:
    """Return the checkpoints bracketing ``time_of_day`` and the blend weight."""
    ordered = sorted(TIME_CHECKPOINT_ORDER, key=lambda name: TIME_CHECKPOINTS[name])
    normalized = _normalize_fraction(time_of_day)
    for index, current in enumerate(ordered):
        following = ordered[(index + 1) % len(ordered)]
        start = TIME_CHECKPOINTS[current]
        end = TIME_CHECKPOINTS[following]
        if end <= start:
            end += 1.0
        if start <= normalized < end:
            return current, following, (normalized - start) / (end - start)
    return "midnight", "dawn", 0.0


def checkpoint_for_time(time_of_day: float) -> TimeCheckpoint:
    before, after, weight = surrounding_checkpoints(time_of_day)
    return before if weight < 0.5 else after


def _lerp(a: float, b: float, weight: float) -> float:
    return a + (b - a) * weight


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _interpolate_group(
    a: Optional[Mapping[str, Any]],
    b: Optional[Mapping[str, Any]],
    base_a: Optional[Mapping[str, Any]],
    base_b: Optional[Mapping[str, Any]],
    weight: float,
) -> Optional[Dict[str, Any]]:
    if not a and not b:
        return None
    keys = list(a or {})
    keys += [key for key in (b or {}) if key not in keys]

    result: Dict[str, Any] = {}
    for key in keys:
        start = (a or {}).get(key)
        end = (b or {}).get(key)
        if start is None and base_a:
            start = base_a.get(key)
        if end is None and base_b:
            end = base_b.get(key)
        if start is None or end is None:
            result[key] = start if start is not None else end
        elif _is_number(start) and _is_number(end):
            result[key] = _lerp(start, end, weight)
        else:
            result[key] = start if weight < 0.5 else end
    return result or None


def interpolate_overrides(
    a: Optional[Mapping[str, Any]],
    b: Optional[Mapping[str, Any]],
    base_a: Optional[Mapping[str, Any]] = None,
    base_b: Optional[Mapping[str, Any]] = None,
    weight: float = 0.0,
) -> Optional[Overrides]:
    if not a and not b:
        return None
    result: Overrides = {}
    for group in OVERRIDE_GROUPS:
        blended = _interpolate_group(
            (a or {}).get(group),
            (b or {}).get(group),
            (base_a or {}).get(group),
            (base_b or {}).get(group),
            weight,
        )
        if blended:
            result[group] = blended
    return result or None


def interpolated_overrides(
    checkpoint_overrides: Optional[CheckpointOverrides],
    time_of_day: float,
    base_for: Optional[Callable[[TimeCheckpoint], Mapping[str, Any]]] = None,
) -> Optional[Overrides]:
    if not checkpoint_overrides:
        return None
    before, after, weight = surrounding_checkpoints(time_of_day)
    return interpolate_overrides(
        checkpoint_overrides.get(before),
        checkpoint_overrides.get(after),
        base_for(before) if base_for else None,
        base_for(after) if base_for else None,
        weight,
    )


def create_empty_checkpoint_overrides() -> Dict[str, Overrides]:
    return {checkpoint: {} for checkpoint in TIME_CHECKPOINT_ORDER}


def is_checkpoint_overrides_empty(checkpoint_overrides: Optional[CheckpointOverrides]) -> bool:
    if not checkpoint_overrides:
        return True
    return not any(
        any(group for group in (checkpoint_overrides.get(name) or {}).values())
        for name in TIME_CHECKPOINT_ORDER
    )


__all__ = [
    "OVERRIDE_GROUPS",
    "TIME_CHECKPOINTS",
    "TIME_CHECKPOINT_ORDER",
    "TimeCheckpoint",
    "checkpoint_for_time",
    "create_empty_checkpoint_overrides",
    "interpolate_overrides",
    "interpolated_overrides",
    "is_checkpoint_overrides_empty",
    "merge_overrides",
    "nearest_checkpoint",
    "surrounding_checkpoints",
]
