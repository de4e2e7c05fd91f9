from __future__ import annotations

import logging

import pytest

from labstack_context.config import Config


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LABSTACK_LOG_FORMAT", raising=False)
    monkeypatch.delenv("LABSTACK_LOG_LEVEL", raising=False)

    cfg = Config.from_env()
    assert cfg.log_format == "text"
    assert cfg.log_level == logging.WARNING


def test_config_reads_format_and_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABSTACK_LOG_FORMAT", "JSON")
    monkeypatch.setenv("LABSTACK_LOG_LEVEL", "debug")

    cfg = Config.from_env()
    assert cfg.log_format == "json"
    assert cfg.log_level == logging.DEBUG


def test_config_rejects_unknown_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABSTACK_LOG_FORMAT", "xml")
    with pytest.raises(RuntimeError, match="LABSTACK_LOG_FORMAT"):
        Config.from_env()


def test_config_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LABSTACK_LOG_FORMAT", raising=False)
    monkeypatch.setenv("LABSTACK_LOG_LEVEL", "chatty")
    with pytest.raises(RuntimeError, match="LABSTACK_LOG_LEVEL"):
        Config.from_env()

