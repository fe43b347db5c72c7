import logging

import optrack.logutils as logutils
from optrack.logutils import _LoggerProxy


def test_logger_proxy_formats_percent_style_messages():
    events = []

    class DummyLogger:
        def info(self, message, **kwargs):
            events.append(("info", message, kwargs))

        def opt(self, **kwargs):
            events.append(("opt", kwargs))
            return self

    proxy = _LoggerProxy(DummyLogger())
    proxy.info("symbol=%s", "SHOP")

    assert events == [("info", "symbol=SHOP", {})]


def test_logger_proxy_respects_exc_info():
    events = []

    class DummyLogger:
        def warning(self, message, **kwargs):
            events.append(("warning", message, kwargs))

        def opt(self, **kwargs):
            events.append(("opt", kwargs))
            return self

    proxy = _LoggerProxy(DummyLogger())
    proxy.warning("failure", exc_info=True)

    assert events == [("opt", {"exception": True}), ("warning", "failure", {})]


def test_setup_logging_honours_env(monkeypatch):
    calls = []
    monkeypatch.setenv("OPTRACK_LOG_LEVEL", "warning")
    monkeypatch.delenv("OPTRACK_DEBUG", raising=False)
    monkeypatch.setattr(logutils.logger, "remove", lambda *a, **k: calls.append("remove"))
    monkeypatch.setattr(
        logutils.logger, "add", lambda stream, **k: calls.append(("add", k["level"]))
    )

    logutils.setup_logging()

    assert calls == ["remove", ("add", logging.WARNING)]


def test_setup_logging_debug_flag(monkeypatch):
    levels = []
    monkeypatch.setenv("OPTRACK_DEBUG", "1")
    monkeypatch.setattr(logutils.logger, "remove", lambda *a, **k: None)
    monkeypatch.setattr(logutils.logger, "add", lambda stream, **k: levels.append(k["level"]))

    logutils.setup_logging()

    assert levels == [logging.DEBUG]
