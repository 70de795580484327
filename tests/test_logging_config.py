import logging

import logging_config


def _capture(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    return calls


def test_explicit_level(monkeypatch):
    calls = _capture(monkeypatch)
    logging_config.configure_logging("debug")
    assert calls[0]["level"] == logging.DEBUG


def test_level_from_environment(monkeypatch):
    calls = _capture(monkeypatch)
    monkeypatch.setenv(logging_config.LOG_LEVEL_ENV, "info")
    logging_config.configure_logging()
    assert calls[0]["level"] == logging.INFO


def test_default_and_unknown_level(monkeypatch):
    calls = _capture(monkeypatch)
    monkeypatch.delenv(logging_config.LOG_LEVEL_ENV, raising=False)
    logging_config.configure_logging()
    logging_config.configure_logging("verbose")
    assert [c["level"] for c in calls] == [logging.WARNING, logging.WARNING]
