from __future__ import annotations

import json
import logging

import pytest

from weatherfx.logging_config import StructuredJsonFormatter, default_log_dir, init_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_formatter_emits_json_with_extras():
    record = logging.LogRecord("weatherfx.test", logging.INFO, __file__, 1, "mapped %s", ("rain",), None)
    record.condition = "rain"
    record.unserialisable = object()
    payload = json.loads(StructuredJsonFormatter().format(record))
    assert payload["message"] == "mapped rain"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "weatherfx.test"
    assert payload["extra"]["condition"] == "rain"
    assert payload["extra"]["unserialisable"].startswith("<object")


def test_init_logging_writes_json_lines(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.delenv("WEATHERFX_LOG_FILE", raising=False)
    log_path = init_logging(tmp_path / "logs", level="debug")
    assert log_path == (tmp_path / "logs" / "weatherfx.log").resolve()
    assert restore_root_logger.level == logging.DEBUG

    logging.getLogger("weatherfx.effects").debug("hello", extra={"checkpoint": "noon"})
    for handler in restore_root_logger.handlers:
        handler.flush()
    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    entry = json.loads(lines[-1])
    assert entry["message"] == "hello"
    assert entry["extra"] == {"checkpoint": "noon"}


def test_init_logging_replaces_own_handlers(tmp_path, restore_root_logger):
    init_logging(tmp_path)
    count = len(restore_root_logger.handlers)
    init_logging(tmp_path, level="warning")
    assert len(restore_root_logger.handlers) == count
    assert restore_root_logger.level == logging.WARNING


def test_default_log_dir_prefers_env(tmp_path, monkeypatch):
    monkeypatch.setenv("WEATHERFX_LOG_DIR", str(tmp_path / "custom"))
    assert default_log_dir() == (tmp_path / "custom").resolve()
    monkeypatch.delenv("WEATHERFX_LOG_DIR")
    monkeypatch.delenv("LOG_DIR", raising=False)
    assert default_log_dir() == (tmp_path / "logs").resolve()
