"""Structured logging configuration using structlog.

Log lines are written to stderr: stdout is reserved for the JSON plans.
Importing this module installs a quiet default (WARNING and above, console
format) so that library callers never see log text on stdout; the CLI
replaces it through setup_logging().
"""

import logging
import sys

import structlog

DEFAULT_LOG_LEVEL = "WARNING"


def _processors(json_output: bool) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _configure(json_output: bool, numeric_level: int, cache: bool) -> None:
    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=cache,
    )


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog for a command line run.

    Args:
        json_output: If True, output JSON lines. If False, console format.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    _configure(json_output, numeric_level, cache=True)

    # requests and urllib3 log through stdlib logging
    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(sys.stderr)]
    root.setLevel(numeric_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance bound with the module name."""
    return structlog.get_logger(name)


# Loggers stay uncached until setup_logging() so they pick up its settings
_configure(False, getattr(logging, DEFAULT_LOG_LEVEL), cache=False)
