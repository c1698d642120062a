from __future__ import annotations

import logging

import pytest

from invoicegen import config, logging_setup
from invoicegen.logging_setup import configure_logging, get_logger, level_from_name


@pytest.fixture
def fresh_logging(monkeypatch: pytest.MonkeyPatch):
    pkg = logging.getLogger("invoicegen")
    saved = (list(pkg.handlers), pkg.level, pkg.propagate)
    monkeypatch.setattr(logging_setup, "_configured", False)
    pkg.handlers = []
    yield pkg
    pkg.handlers, pkg.level, pkg.propagate = saved


@pytest.mark.parametrize(
    "level, expected",
    [("debug", logging.DEBUG), (" WARNING ", logging.WARNING), ("15", 15), (logging.ERROR, logging.ERROR)],
)
def test_level_from_name(level, expected):
    assert level_from_name(level) == expected


def test_level_falls_back_to_configured(monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "error")
    assert level_from_name(None) == logging.ERROR
    assert level_from_name("nonsense") == logging.ERROR
    monkeypatch.setattr(config, "LOG_LEVEL", "bogus")
    assert level_from_name("nonsense") == logging.INFO


def test_get_logger_is_silent_until_configured(fresh_logging):
    log = get_logger("invoicegen.test")
    assert log.name == "invoicegen.test"
    assert any(isinstance(h, logging.NullHandler) for h in fresh_logging.handlers)


def test_configure_logging_writes_to_stderr(fresh_logging, capsys):
    get_logger("invoicegen.test")
    configure_logging("DEBUG")

    get_logger("invoicegen.test").debug("hello %s", "world")
    assert "invoicegen.test DEBUG hello world" in capsys.readouterr().err
    assert not any(isinstance(h, logging.NullHandler) for h in fresh_logging.handlers)
    assert fresh_logging.propagate is False


def test_configure_logging_runs_once(fresh_logging):
    configure_logging("INFO")
    configure_logging("DEBUG")
    assert len(fresh_logging.handlers) == 1
    assert fresh_logging.level == logging.INFO
