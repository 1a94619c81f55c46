"""Tests for structlog-backed logging configuration."""

from __future__ import annotations

import logging

import pytest

from vp_common.logging import _resolve_level, configure_logging


pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize(
    ("value", "debug", "expected"),
    [
        (None, False, logging.WARNING),
        (None, True, logging.DEBUG),
        ("info", False, logging.INFO),
        ("10", False, 10),
        (logging.ERROR, False, logging.ERROR),
        ("bogus", False, logging.WARNING),
    ],
)
def test_resolve_level(value, debug, expected) -> None:
    assert _resolve_level(value, debug) == expected


def test_configure_logging_writes_to_file(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("VP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("VP_LOG_JSON", raising=False)
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    log_file = tmp_path / "vp.log"
    try:
        configure_logging(level="INFO", log_file=str(log_file), json=True)
        logging.getLogger("vp_test").info("hello %s", "world")
        for handler in root.handlers:
            handler.flush()
        content = log_file.read_text()
        assert "hello world" in content
        assert '"level": "info"' in content
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_reconfiguring_replaces_handlers(monkeypatch) -> None:
    monkeypatch.delenv("VP_LOG_FILE", raising=False)
    monkeypatch.delenv("VP_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    configure_logging()
    configure_logging(debug=True)
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    configure_logging()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
