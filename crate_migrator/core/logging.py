"""Log rendering for the CLI: stdlib records formatted by structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog

_HANDLER_NAME = "crate_migrator"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to every stdlib record before rendering."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    raise ValueError(f"unknown log format {log_format!r} (expected 'console' or 'json')")


def setup_logging(verbose: bool = False, log_format: str | None = None) -> None:
    """Route ``crate_migrator.*`` loggers to stderr through structlog.

    CRATE_MIGRATOR_LOG_LEVEL overrides the level (WARNING, or DEBUG when
    *verbose*). CRATE_MIGRATOR_LOG_FORMAT selects ``console`` or ``json``
    unless *log_format* is given. Safe to call more than once.
    """
    level = os.environ.get("CRATE_MIGRATOR_LOG_LEVEL", "DEBUG" if verbose else "WARNING")
    fmt = (log_format or os.environ.get("CRATE_MIGRATOR_LOG_FORMAT", "console")).lower()

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(fmt),
            ],
        )
    )

    pkg_logger = logging.getLogger("crate_migrator")
    for old in [h for h in pkg_logger.handlers if h.get_name() == _HANDLER_NAME]:
        pkg_logger.removeHandler(old)
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level.upper())
    pkg_logger.propagate = False
