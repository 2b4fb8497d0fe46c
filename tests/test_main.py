"""Tests for the server entry point."""

import logging

from autocorrector import __main__ as main
from autocorrector.config import AutocorrectorConfig, get_config, set_config


def test_serve_uses_arguments(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main, "setup_logging", lambda config: None)
    set_config(AutocorrectorConfig())
    try:
        main.serve(["--host", "0.0.0.0", "--port", "8000", "--log-level", "DEBUG"])
        assert get_config().log.level == "DEBUG"
    finally:
        set_config(None)

    [(app, kwargs)] = calls
    assert app == "autocorrector.app:app"
    assert kwargs == {"host": "0.0.0.0", "port": 8000, "log_level": "debug"}


def test_serve_falls_back_to_config(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.setattr(main, "setup_logging", lambda config: None)
    set_config(AutocorrectorConfig(api_host="127.0.0.1", api_port=3000))
    try:
        main.serve([])
    finally:
        set_config(None)

    assert calls == [{"host": "127.0.0.1", "port": 3000, "log_level": logging.getLevelName(logging.INFO).lower()}]
