"""Tests for logging setup and per-run context."""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog

from solrnode.config.settings import ObservabilitySettings
from solrnode.observability.logging import HTTP_LOGGERS, run_context, setup_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    levels = {name: logging.getLogger(name).level for name in HTTP_LOGGERS}
    yield
    structlog.reset_defaults()
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


class TestSetupLogging:
    def test_defaults_to_stdout(self) -> None:
        with patch("logging.basicConfig") as basic_config:
            setup_logging()
        assert basic_config.call_args.kwargs["stream"] is sys.stdout
        assert basic_config.call_args.kwargs["level"] == logging.INFO

    def test_custom_stream(self) -> None:
        stream = io.StringIO()
        with patch("logging.basicConfig") as basic_config:
            setup_logging(ObservabilitySettings(log_level="warning"), stream=stream)
        assert basic_config.call_args.kwargs["stream"] is stream
        assert basic_config.call_args.kwargs["level"] == logging.WARNING

    def test_http_loggers_quieted(self) -> None:
        with patch("logging.basicConfig"):
            setup_logging(ObservabilitySettings(log_level="info"))
        assert all(logging.getLogger(name).level == logging.WARNING for name in HTTP_LOGGERS)

    def test_http_loggers_follow_debug(self) -> None:
        with patch("logging.basicConfig"):
            setup_logging(ObservabilitySettings(log_level="debug"))
        assert all(logging.getLogger(name).level == logging.DEBUG for name in HTTP_LOGGERS)

    def test_console_format_renders_with_console_renderer(self) -> None:
        with patch("logging.basicConfig"):
            setup_logging(ObservabilitySettings(log_format="console"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert structlog.processors.format_exc_info not in processors


class TestRunContext:
    def test_binds_run_id_and_values(self) -> None:
        with run_context(core="products") as run_id:
            bound = structlog.contextvars.get_contextvars()
            assert bound["run_id"] == run_id
            assert bound["core"] == "products"
        assert "run_id" not in structlog.contextvars.get_contextvars()

    def test_each_run_gets_new_id(self) -> None:
        with run_context() as first:
            pass
        with run_context() as second:
            pass
        assert first != second
