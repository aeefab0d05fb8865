from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict

DEFAULT_LOG_FILE = "weatherfx.log"

_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys() | {"message"}
)


class StructuredJsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extras:
            payload["extra"] = _serialise_extra(extras)
        return json.dumps(payload, ensure_ascii=True)


def _serialise_extra(data: Dict[str, Any]) -> Dict[str, Any]:
    serialised: Dict[str, Any] = {}
    for key, value in data.items():
        try:
            json.dumps(value)
            serialised[key] = value
        except (TypeError, ValueError):
            serialised[key] = repr(value)
    return serialised


def _coerce_level(level: str) -> int:
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def default_log_dir() -> Path:
    for env_name in ("WEATHERFX_LOG_DIR", "LOG_DIR"):
        override = os.getenv(env_name)
        if override:
            return Path(override).expanduser().resolve()
    return Path("logs").resolve()


def init_logging(
    log_dir: str | os.PathLike[str] | None = None,
    *,
    level: str = "INFO",
    filename: str = DEFAULT_LOG_FILE,
) -> Path:
    """Point the root logger at a rotating JSON log file plus stderr.

    Calling it again replaces the handlers installed previously, so hosts
    can re-initialise after changing the level or directory.
    """

    base = Path(log_dir).expanduser().resolve() if log_dir else default_log_dir()
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / filename

    root_logger = logging.getLogger()
    root_logger.setLevel(_coerce_level(level))
    for handler in list(root_logger.handlers):
        if getattr(handler, "_weatherfx", False):
            root_logger.removeHandler(handler)
            handler.close()

    formatter = StructuredJsonFormatter()
    file_handler = RotatingFileHandler(
        str(log_path),
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    stream_handler = logging.StreamHandler()
    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
        handler._weatherfx = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    os.environ.setdefault("WEATHERFX_LOG_FILE", str(log_path))
    return log_path


__all__ = ["StructuredJsonFormatter", "default_log_dir", "init_logging"]
