"""Structured logging setup with JSON-lines output and structlog event loggers."""

from __future__ import annotations

import json
import logging
import math
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import IO, Final

import structlog

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_DEFAULT_LOGGER_NAME: Final[str] = "spark_id"

_STANDARD_LOG_RECORD_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
    }
)

_EVENT_PROCESSORS: Final[tuple[structlog.types.Processor, ...]] = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.render_to_log_kwargs,
)

_ACTIVE_LOCK = threading.Lock()
_ACTIVE_HANDLER: logging.Handler | None = None
_ACTIVE_LOGGER_NAME: str | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for the ``spark_id`` log sink."""

    level: int | str = "WARNING"
    logger_name: str = _DEFAULT_LOGGER_NAME
    json_lines: bool = True
    stream: IO[str] | None = None


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog event logger backed by the stdlib logger ``name``.

    Events go through stdlib ``logging``; the library stays silent unless the host
    application (or ``setup_logging``) attaches handlers.
    """

    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=list(_EVENT_PROCESSORS),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger and return it."""

    cfg = config or LoggingConfig()
    level = _parse_log_level(cfg.level)
    logger_name = _validate_logger_name(cfg.logger_name)

    shutdown_logging()

    handler = logging.StreamHandler(cfg.stream if cfg.stream is not None else sys.stderr)
    handler.setLevel(level)
    if cfg.json_lines:
        handler.setFormatter(_JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)

    global _ACTIVE_HANDLER, _ACTIVE_LOGGER_NAME
    with _ACTIVE_LOCK:
        _ACTIVE_HANDLER = handler
        _ACTIVE_LOGGER_NAME = logger_name
    return logger


def shutdown_logging() -> None:
    """Detach the handler installed by ``setup_logging``, if any."""

    global _ACTIVE_HANDLER, _ACTIVE_LOGGER_NAME
    with _ACTIVE_LOCK:
        handler = _ACTIVE_HANDLER
        logger_name = _ACTIVE_LOGGER_NAME
        _ACTIVE_HANDLER = None
        _ACTIVE_LOGGER_NAME = None

    if handler is None or logger_name is None:
        return

    logger = logging.getLogger(logger_name)
    logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    handler.flush()
    handler.close()


class _JsonLineFormatter(logging.Formatter):
    """Formatter that emits one canonical JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, JSONValue] = {
            "timestamp": _iso8601z_from_epoch(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = _extract_extra_fields(record)
        if extras:
            event["fields"] = extras

        if record.exc_info is not None:
            event["exception"] = self.formatException(record.exc_info)

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, bool):
        raise ValueError("level must be int or str, got bool")
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _validate_logger_name(logger_name: str) -> str:
    if not isinstance(logger_name, str):
        raise ValueError(f"logger_name must be a string, got {type(logger_name).__name__}")
    normalized = logger_name.strip()
    if not normalized:
        raise ValueError("logger_name must not be empty")
    return normalized


def _iso8601z_from_epoch(epoch_seconds: float) -> str:
    timestamp = datetime.fromtimestamp(epoch_seconds, tz=UTC)
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, JSONValue]:
    fields: dict[str, JSONValue] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_"):
            continue
        fields[key] = _normalize_json_value(value)
    return fields


def _normalize_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Mapping):
        return {str(key): _normalize_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_json_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize_json_value(item) for item in value), key=repr)
    return repr(value)


__all__ = [
    "JSONScalar",
    "JSONValue",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
]
