"""Logging setup: stdlib handlers rendered through structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog

from vp_common.config.env import parse_bool_env

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    return logging._nameToLevel.get(value.upper(), logging.WARNING)


def _formatter(as_json: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if as_json else structlog.dev.ConsoleRenderer()
    )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
) -> None:
    """Replace the root handlers with a stderr handler and an optional file handler.

    ``VP_LOG_LEVEL``, ``VP_LOG_JSON`` and ``VP_LOG_FILE`` fill in whatever the
    caller leaves unset. Calling it again reconfigures instead of stacking.
    """
    if json is None:
        json = bool(parse_bool_env(os.environ.get("VP_LOG_JSON")))
    if log_file is None:
        log_file = os.environ.get("VP_LOG_FILE") or None
    formatter = _formatter(json)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(_resolve_level(level or os.environ.get("VP_LOG_LEVEL"), debug))

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
