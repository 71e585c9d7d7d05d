"""structlog configuration for the accumulator library and its CLI."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import Processor

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_level(level: str) -> int:
    """Map a case-insensitive level name onto its :mod:`logging` value."""
    normalized = level.lower()
    if normalized not in LOG_LEVELS:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.")
    return LOG_LEVELS[normalized]


def _processors(json_output: bool) -> list[Processor]:
    """Build the processor chain ending in a console or JSON renderer."""
    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    level: str = "warning",
    *,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog events through stdlib logging on ``stream`` (stderr by default).

    Results printed on stdout by the CLI never interleave with log lines.
    """
    level_value = resolve_level(level)
    logging.basicConfig(level=level_value, format="%(message)s", stream=stream or sys.stderr)
    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


__all__ = ["LOG_LEVELS", "configure_logging", "resolve_level"]
