"""Tests for structlog/stdlib logging wiring."""

from __future__ import annotations

import structlog

from popcorn.infrastructure.config.schema import AppConfig
from popcorn.infrastructure.logging.setup import build_logging_config


def _renderer(cfg: dict) -> object:
    return cfg["formatters"]["structlog"]["processors"][-1]


class TestBuildLoggingConfig:
    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(AppConfig(environment="dev"))
        assert isinstance(_renderer(cfg), structlog.dev.ConsoleRenderer)

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))
        assert isinstance(_renderer(cfg), structlog.processors.JSONRenderer)

    def test_root_level_follows_config(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))
        assert cfg["root"]["level"] == "DEBUG"
        assert cfg["loggers"]["httpx"]["level"] == "DEBUG"

    def test_http_loggers_quiet_above_debug(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="INFO"))
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"
        assert cfg["loggers"]["httpcore"]["propagate"] is False
