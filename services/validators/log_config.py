"""
Structured logging configuration using structlog.

Provides JSON logging with ISO timestamps and stdlib compatibility.
All log messages are structured and include contextual information.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.typing import FilteringBoundLogger


def _get_settings():
    """Lazy load settings to avoid circular imports."""
    from .settings import settings
    return settings()


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structlog with JSON output and stdlib compatibility.

    Args:
        log_level: Override log level from settings
        log_format: Override log format from settings
    """
    config = _get_settings()
    level = log_level or config.log_level
    format_type = log_format or config.log_format

    # Configure stdlib logging on stderr, stdout is reserved for CLI output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
    )

    processors = [
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,

        # Add service metadata
        lambda _, __, event_dict: {
            **event_dict,
            "service": config.service_name,
            "environment": config.environment,
        },
    ]

    # Choose renderer based on format
    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> FilteringBoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_validation(
    logger: FilteringBoundLogger,
    kind: str,
    is_valid: bool,
    **extra_context: Any
) -> None:
    """
    Log the outcome of a validation command with structured information.

    The input value itself is never logged, only its outcome.

    Args:
        logger: Logger instance
        kind: Validator name (rut, password, ...)
        is_valid: Validation outcome
        **extra_context: Additional context to include
    """
    context = {
        "kind": kind,
        "is_valid": is_valid,
        **extra_context
    }

    if is_valid:
        logger.info("Validation passed", **context)
    else:
        logger.info("Validation failed", **context)


def _initialize_logging():
    """Initialize logging configuration on module import."""
    try:
        # Skip initialization during pytest
        if "pytest" not in sys.modules:
            configure_logging()
    except Exception as e:
        # Fallback to basic logging if configuration fails
        logging.basicConfig(level=logging.INFO)
        logging.getLogger(__name__).error(
            "Failed to configure structured logging: %s", e
        )


# Auto-initialize when module is imported
_initialize_logging()
