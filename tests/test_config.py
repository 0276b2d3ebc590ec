import logging

import pytest

from config.log import setup_logging
from config.settings import AppConfig
from moderation.model import build_classifier


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("MODERATION_MODEL", "gemini-1.5-flash")
    monkeypatch.setenv("REGISTRATION_DELAY_SECONDS", "0.25")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = AppConfig.from_env()

    assert cfg.google_api_key == "test-key"
    assert cfg.moderation_model == "gemini-1.5-flash"
    assert cfg.registration_delay_seconds == 0.25
    assert cfg.log_level == "debug"


def test_from_env_defaults(monkeypatch):
    for name in ("GOOGLE_API_KEY", "MODERATION_MODEL", "REGISTRATION_DELAY_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    cfg = AppConfig.from_env()

    assert cfg.google_api_key is None
    assert cfg.moderation_model == "gemini-2.0-flash"
    assert cfg.registration_delay_seconds == 1.0


def test_classifier_requires_api_key():
    with pytest.raises(RuntimeError):
        build_classifier(AppConfig(google_api_key=None))


def test_setup_logging_sets_level():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
