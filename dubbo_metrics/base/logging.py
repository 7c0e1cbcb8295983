"""Structured logging utilities for the metrics subsystem.

Rationale:
- Central place to configure consistent JSON (or plain) logging for the
  registry, collectors and the SDK lifecycle wrapper.
- Module loggers are children of the shared ``dubbo_metrics`` logger and
  propagate to its single console handler, so nothing is emitted twice.
- Instrumentation must stay quiet by default; the level can be raised or
  lowered with ``DUBBO_METRICS_LOG_LEVEL`` or :func:`configure_logger`.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from ..config.env import ENV_LOG_LEVEL
from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "dubbo_metrics"

_BASE_LOGGER_ATTR = "_dubbo_metrics_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_dubbo_metrics_console_handler"
_FILE_HANDLER_ATTR = "_dubbo_metrics_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name into its integer constant.

    Accepts DEBUG, INFO, WARN/WARNING, ERROR and CRITICAL case-insensitively;
    unknown values fall back to ``default``.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``dubbo_metrics`` logger.

    On repeat calls the level is refreshed from the environment and a console
    handler whose stream was closed (e.g. by pytest capture teardown) is
    replaced.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(ENV_LOG_LEVEL), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_console_handler(json_mode, desired_level))
                continue
            existing.setLevel(desired_level)
            if hasattr(existing, "setStream"):
                existing.setStream(sys.stderr)
            if json_mode != isinstance(existing.formatter, JsonFormatter):
                existing.setFormatter(_make_formatter(json_mode))
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(json_mode, desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def _console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger wired to the shared ``dubbo_metrics`` handler.

    Child loggers carry no handlers of their own and propagate to the base
    logger, which owns the console handler and the level.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            logger.removeHandler(handler)
            with contextlib.suppress(Exception):
                handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired level, numeric or by name. ``None`` keeps the current level.
    file_path: Optional[str]
        When provided, attach (or reuse) a rotating file handler writing to
        this path. When ``None``, any file handler previously attached by this
        function is removed. Handlers attached by callers are left alone.
    json_mode: bool
        Formatter used for the file handler.

    Returns
    -------
    logging.Logger
        The shared ``dubbo_metrics`` logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    keep: Optional[logging.Handler] = None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            keep = h
            continue
        logger.removeHandler(h)
        with contextlib.suppress(Exception):
            h.close()
    if abs_path is None:
        return logger

    if keep is None:
        os.makedirs(os.path.dirname(abs_path), exist_ok=True)
        keep = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(keep, _FILE_HANDLER_ATTR, True)
        logger.addHandler(keep)
    keep.setFormatter(_make_formatter(json_mode))
    keep.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON payload.

    Parameters
    ----------
    logger: logging.Logger
        Logger obtained from :func:`get_logger`.
    event: str
        Event name (e.g. ``registry.handle_created``).
    ctx: LogContext | None
        Shared context merged shallowly into the payload.
    level: int
        Logging level for the record.
    keep_none: bool
        Keep keys whose values are ``None`` (encoded as JSON ``null``).
    **fields: Any
        Additional JSON-serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
