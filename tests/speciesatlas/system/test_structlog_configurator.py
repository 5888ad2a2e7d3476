"""Tests for the structlog configurator module."""

import logging
import os
import sys
from unittest.mock import Mock, patch

import pytest
import structlog

from speciesatlas.config import AtlasConfig
from speciesatlas.config.models import LoggingConfig
from speciesatlas.system.structlog_configurator import (
    _add_static_context,
    _configure_handlers,
    _configure_processors,
    _get_environment_config,
    configure_structlog,
    get_deployment_environment,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestAddStaticContext:
    """Test the _add_static_context processor."""

    def test_adds_static_fields_to_event_dict(self):
        """Should add static fields to all log events."""
        processor = _add_static_context({"service": "test", "version": "1.0.0"})

        result = processor(Mock(spec=structlog.BoundLogger), "info", {"event": "test_event"})

        assert result == {"event": "test_event", "service": "test", "version": "1.0.0"}

    def test_overwrites_existing_fields(self):
        """Should overwrite existing fields with static values."""
        processor = _add_static_context({"service": "override"})

        result = processor(Mock(spec=structlog.BoundLogger), "info", {"service": "original"})

        assert result["service"] == "override"


class TestGetEnvironmentConfig:
    """Test environment detection."""

    @patch("speciesatlas.system.structlog_configurator.is_docker_environment", return_value=True)
    @patch.dict(os.environ, {}, clear=True)
    def test_detects_docker_environment(self, mock_docker):
        """Should report Docker and a non-development environment."""
        assert _get_environment_config() == (True, False)

    @patch("speciesatlas.system.structlog_configurator.is_docker_environment", return_value=False)
    @patch.dict(os.environ, {"SPECIESATLAS_ENV": "development"}, clear=True)
    def test_detects_development_environment(self, mock_docker):
        """Should report development when SPECIESATLAS_ENV says so."""
        assert _get_environment_config() == (False, True)
        assert get_deployment_environment() == "development"


class TestConfigureProcessors:
    """Test renderer and context selection."""

    def test_json_renderer_outside_development(self):
        """Should render JSON by default in production."""
        processors = _configure_processors(AtlasConfig(), is_docker=False, is_development=False)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_in_development(self):
        """Should render human-readable output while developing."""
        processors = _configure_processors(AtlasConfig(), is_docker=False, is_development=True)

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_explicit_json_setting_wins(self):
        """Should honour json_logs from the config."""
        config = AtlasConfig(logging=LoggingConfig(json_logs=True))

        processors = _configure_processors(config, is_docker=False, is_development=True)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    @patch.dict(os.environ, {"SPECIESATLAS_JSON_LOGS": "true"})
    def test_json_env_override_in_development(self):
        """Should switch to JSON when SPECIESATLAS_JSON_LOGS is set."""
        processors = _configure_processors(AtlasConfig(), is_docker=False, is_development=True)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_include_caller_adds_callsite_processor(self):
        """Should add file and line info when asked."""
        config = AtlasConfig(logging=LoggingConfig(include_caller=True))

        processors = _configure_processors(config, is_docker=False, is_development=False)

        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder) for p in processors
        )


class TestConfigureHandlers:
    """Test root logger wiring."""

    def test_routes_root_logger_to_stdout(self, restore_root_logger):
        """Should replace root handlers with a single stdout handler at the config level."""
        config = AtlasConfig(logging=LoggingConfig(level="WARNING"))

        _configure_handlers(config)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        handler = root_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout


class TestConfigureStructlog:
    """Test the full configuration entry point."""

    def test_configures_structlog(self, restore_root_logger):
        """Should leave structlog configured with the chosen processors."""
        configure_structlog(AtlasConfig(logging=LoggingConfig(json_logs=True)))

        assert structlog.is_configured()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
