"""Structlog-based logging configuration for Species Atlas.

This module provides structured logging configuration using structlog,
layered over the standard logging system so that modules can keep using
``logging.getLogger(__name__)``.

Supports different deployment targets:
- Docker: Uses stdout with JSON output
- Development: Human-readable console output unless JSON is forced
- Anything else: JSON on stdout unless the config says otherwise
"""

import logging
import os
import sys
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import structlog

from speciesatlas.config.models import AtlasConfig


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def get_package_version() -> str:
    """Get the installed distribution version, or 'unknown' for a source checkout."""
    try:
        return version("species-atlas")
    except PackageNotFoundError:
        return "unknown"


def get_deployment_environment() -> str:
    """Get deployment environment with 'unknown' fallback."""
    if is_docker_environment():
        return "docker"
    elif os.environ.get("SPECIESATLAS_ENV") == "development":
        return "development"
    else:
        return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _get_environment_config() -> tuple[bool, bool]:
    """Detect deployment environment and return (is_docker, is_development)."""
    is_docker = is_docker_environment()
    is_development = os.environ.get("SPECIESATLAS_ENV", "production") == "development"
    return is_docker, is_development


def _configure_processors(config: AtlasConfig, is_docker: bool, is_development: bool) -> list:
    """Configure structlog processors based on environment."""
    extra_fields = {
        "service": "species-atlas",
        "version": get_package_version(),
        "deployment": get_deployment_environment(),
        **config.logging.extra_fields,  # Allow config to override/add fields
    }

    if config.site_name:
        extra_fields["site_name"] = config.site_name

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    # Auto-detect: JSON unless we are developing locally
    use_json = config.logging.json_logs
    if use_json is None:
        use_json = is_docker or not is_development

    if is_development and os.environ.get("SPECIESATLAS_JSON_LOGS", "false").lower() == "true":
        use_json = True

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def _configure_handlers(config: AtlasConfig) -> None:
    """Route the root logger to stdout at the configured level."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def configure_structlog(config: AtlasConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The AtlasConfig instance containing logging settings.
    """
    is_docker, is_development = _get_environment_config()

    processors = _configure_processors(config, is_docker, is_development)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Structured logging configured",
        version=get_package_version(),
        log_level=config.logging.level,
        environment=get_deployment_environment(),
        json_output=config.logging.json_logs,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
