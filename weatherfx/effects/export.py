from __future__ import annotations

import json
from datetime import datetime, timezone
from pprint import pformat
from typing import Any, Dict, Iterable, Mapping, Optional

from .conditions import WeatherCondition
from .tuning import TIME_CHECKPOINT_ORDER

EXPORT_VERSION = 2
EXPORT_FORMATS = ("json", "python")


def _condition_key(value: Any) -> str:
    return WeatherCondition(value).value


def _prune(checkpoint: Optional[Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Drop empty groups; the renderer treats them as absent anyway."""
    return {
        group: dict(values)
        for group, values in (checkpoint or {}).items()
        if values
    }


def _collect(
    table: Mapping[Any, Mapping[str, Any]],
    conditions: Optional[Iterable[Any]],
) -> Dict[str, Dict[str, Dict[str, Any]]]:
    by_name = {_condition_key(key): value for key, value in table.items()}
    if conditions is None:
        names = [c.value for c in WeatherCondition if c.value in by_name]
    else:
        names = [_condition_key(c) for c in conditions]
    return {
        name: {cp: _prune(by_name[name].get(cp)) for cp in TIME_CHECKPOINT_ORDER}
        for name in names
        if name in by_name
    }


def export_tuned_presets(
    table: Mapping[Any, Mapping[str, Any]],
    *,
    fmt: str = "json",
    conditions: Optional[Iterable[Any]] = None,
    include_metadata: bool = False,
    signed_off: Iterable[Any] = (),
    exported_at: Optional[datetime] = None,
) -> str:
    """Serialise a checkpoint override table for the tuning workflow.

    ``json`` is the interchange format; ``python`` emits a module body that can
    replace ``tuned_presets.py`` after review.
    """

    overrides = _collect(table, conditions)
    if fmt == "json":
        data: Dict[str, Any] = {}
        if include_metadata:
            moment = exported_at or datetime.now(timezone.utc)
            data["exported_at"] = moment.isoformat()
            data["signed_off"] = sorted(_condition_key(c) for c in signed_off)
            data["version"] = EXPORT_VERSION
        data["checkpoint_overrides"] = overrides
        return json.dumps(data, indent=2)
    if fmt == "python":
        lines = ['"""Tuned overrides per condition and checkpoint."""', ""]
        if include_metadata:
            lines.append(f"# version {EXPORT_VERSION}")
        lines.append(f"TUNED_CHECKPOINT_OVERRIDES = {pformat(overrides, sort_dicts=False)}")
        return "\n".join(lines) + "\n"
    raise ValueError(f"unknown export format '{fmt}' (expected one of {EXPORT_FORMATS})")


__all__ = ["EXPORT_FORMATS", "EXPORT_VERSION", "export_tuned_presets"]
