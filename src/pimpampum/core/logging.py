"""Structured logging configuration for the Pim Pam Pum simulator.

Verbose combats narrate every selection, contest and wound as structlog
events. Narration is observational only and never feeds back into the
combat outcome.

Simulation batches may run in worker processes. Workers start with a
fresh structlog configuration, so the runner hands them the options the
parent was configured with (see ``logging_options`` and
``init_worker_logging``). Events logged from a worker carry its pid.

Example:
    >>> from pimpampum.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Wound dealt", target="T2_0_7", wounds=2)
"""

from __future__ import annotations

import logging
import multiprocessing
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


_options: dict[str, Any] | None = None


def app_context(app_name: str, app_version: str | None = None) -> Processor:
    """Build a processor stamping the application name and version.

    Args:
        app_name: Value for the ``app`` key.
        app_version: Value for the ``version`` key, omitted when None.

    Returns:
        A structlog processor.
    """

    def processor(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        if app_version is not None:
            event_dict.setdefault("version", app_version)
        return event_dict

    return processor


def add_worker_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag events logged from a simulation worker process with its pid."""
    if multiprocessing.parent_process() is not None:
        event_dict.setdefault("worker", os.getpid())
    return event_dict


def configure_logging(
    *,
    level: str = "WARNING",
    json_format: bool = False,
    app_name: str = "pimpampum",
    app_version: str | None = None,
) -> None:
    """Configure structlog for the simulator.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output logs as JSON lines.
        app_name: Application name stamped on every event.
        app_version: Application version stamped on every event.

    Example:
        >>> configure_logging(level="INFO", json_format=True)
    """
    global _options
    _options = {
        "level": level,
        "json_format": json_format,
        "app_name": app_name,
        "app_version": app_version,
    }

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context(app_name, app_version),
        add_worker_context,
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def logging_options() -> dict[str, Any] | None:
    """Options of the last ``configure_logging`` call, or None if never called."""
    return dict(_options) if _options is not None else None


def init_worker_logging(options: dict[str, Any] | None) -> None:
    """Process-pool initializer repeating the parent's logging setup."""
    if options is not None:
        configure_logging(**options)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A configured structlog BoundLogger instance.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables that will be included in all subsequent logs.

    The combat engine binds the current round so every narration event
    inside it carries ``round=<n>``.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific context variables, leaving the rest bound."""
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def bound_context(**kwargs: Any) -> Iterator[None]:
    """Bind context variables for the duration of a block.

    Previously bound values for the same keys are restored on exit.

    Example:
        >>> with bound_context(batch=3):
        ...     logger.debug("Batch started")  # includes batch=3
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "app_context",
    "add_worker_context",
    "configure_logging",
    "logging_options",
    "init_worker_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "bound_context",
    "clear_context",
]
