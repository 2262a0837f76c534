"""Structured logging for the catalog MCP server.

All output goes to stderr: on the stdio transport stdout carries protocol
messages and must never receive log lines.

Two output formats:
- ``text``: human-readable console output (default)
- ``json``: JSON lines for log aggregation
"""

from __future__ import annotations

import logging
import sys

import structlog

_NOISE_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
)


def _build_processors(time_fmt: str) -> list[structlog.types.Processor]:
    """Build the pre-chain processor list with the given timestamp format."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt=time_fmt),
        structlog.stdlib.ExtraAdder(),
    ]


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure structlog and stdlib logging for the process.

    Args:
        level: Root log level (e.g. "DEBUG", "INFO", "WARNING").
        fmt: ``"text"`` for console output, ``"json"`` for JSON lines.
    """
    if fmt == "json":
        processors = _build_processors(time_fmt="iso")
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors = _build_processors(time_fmt="%H:%M:%S")
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
        foreign_pre_chain=processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _NOISE_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
