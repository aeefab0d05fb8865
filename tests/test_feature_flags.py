from __future__ import annotations

import json

from weatherfx.config import feature_flags


def test_defaults_without_config_files():
    flags = feature_flags.load_feature_flags(refresh=True)
    assert flags == feature_flags.FEATURE_DEFAULTS
    assert feature_flags.is_enabled("enable_weather_effects")
    assert not feature_flags.is_enabled("enable_checkpoint_interpolation")


def test_nested_file_overrides_root_file(write_features):
    write_features({"enable_tuned_presets": False, "enable_checkpoint_interpolation": True})
    write_features({"enable_tuned_presets": True}, nested=True)
    assert feature_flags.is_enabled("enable_tuned_presets")
    assert feature_flags.is_enabled("enable_checkpoint_interpolation")


def test_non_bool_values_are_ignored(write_features):
    write_features({"enable_weather_effects": "no", "enable_extra": True})
    assert feature_flags.is_enabled("enable_weather_effects")
    assert feature_flags.is_enabled("enable_extra")


def test_unknown_flag_uses_default():
    assert feature_flags.is_enabled("missing") is False
    assert feature_flags.is_enabled("missing", default=True) is True


def test_unreadable_file_falls_back_to_defaults(tmp_path):
    (tmp_path / "weatherfx.json").write_text("{not json", encoding="utf-8")
    assert feature_flags.refresh_cache() == feature_flags.FEATURE_DEFAULTS


def test_returned_flags_are_copies():
    flags = feature_flags.load_feature_flags()
    flags["enable_weather_effects"] = False
    assert feature_flags.is_enabled("enable_weather_effects")


def test_file_change_invalidates_cache_without_refresh(tmp_path, monkeypatch):
    assert feature_flags.is_enabled("enable_weather_effects")
    reads = []
    original = feature_flags._read_features
    monkeypatch.setattr(
        feature_flags, "_read_features", lambda path: reads.append(path) or original(path)
    )

    feature_flags.load_feature_flags()
    assert reads == []

    (tmp_path / "weatherfx.json").write_text(
        json.dumps({"features": {"enable_weather_effects": False}}), encoding="utf-8"
    )
    assert not feature_flags.is_enabled("enable_weather_effects")
    assert len(reads) == len(feature_flags.CONFIG_PATHS)
