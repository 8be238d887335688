"""Tests for structured logging setup."""

import logging

import pytest
import structlog

from aidmatch_agents.config import AidMatchConfig, LogFormat, PipelineConfig
from aidmatch_agents.logging_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_json_renderer(self):
        configure_logging(AidMatchConfig(env="test", log_format=LogFormat.JSON))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        configure_logging(AidMatchConfig(env="test", log_format=LogFormat.CONSOLE))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_level_filtering(self):
        configure_logging(AidMatchConfig(env="test", log_level="WARNING"))

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.WARNING)

    def test_debug_mode_lowers_level(self):
        configure_logging(
            AidMatchConfig(env="test", log_level="ERROR", pipeline=PipelineConfig(debug_mode=True))
        )

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.DEBUG)
