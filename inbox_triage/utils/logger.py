"""structlog setup for the triage engine, CLI and API.

Console output is colored and human-readable; the same events go to a
JSON-lines file (``output/logs/app.jsonl``) for later inspection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional

import structlog

from inbox_triage.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

# HTTP request logs are noise next to triage events
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_configured = False


def level_from_env(value: str) -> int:
    """``"DEBUG"`` / ``"20"`` -> logging level; unknown names fall back to INFO."""
    if value.isdigit():
        return int(value)
    return getattr(logging, value.upper(), logging.INFO)


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _handler(handler: logging.Handler, level: int, renderer: Any) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_shared_processors())
    )
    return handler


def configure_logging(verbose: Optional[bool] = None, log_file: Optional[Path] = LOG_FILE) -> None:
    """(Re)configure logging. ``verbose`` overrides VERBOSE_LOGGING; ``log_file=None`` skips the JSONL file."""
    global _configured
    if verbose is None:
        verbose = VERBOSE_LOGGING
    level = logging.DEBUG if verbose else level_from_env(LOG_LEVEL)

    handlers = [_handler(logging.StreamHandler(), level, structlog.dev.ConsoleRenderer(colors=True))]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), level, structlog.processors.JSONRenderer())
        )

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)
    logging.captureWarnings(True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str = "inbox_triage", **bindings: Any) -> BoundLogger:
    """Structured logger for ``name``, configuring logging on first use."""
    if not _configured:
        configure_logging()
    logger = structlog.get_logger(name)
    if bindings:
        logger = logger.bind(**bindings)
    return logger


@contextmanager
def log_context(**context: Any) -> Iterator[None]:
    """Attach ``context`` to every event logged inside the block (contextvars, so async-safe)."""
    with structlog.contextvars.bound_contextvars(**context):
        yield
