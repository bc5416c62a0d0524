"""Structured logging: structlog rendering for stdlib and structlog loggers alike."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

from gemini_fallback.domain.ports.config import AppConfig

# httpx logs every request URL at INFO; Gemini URLs carry the API key.
_QUIET_LOGGERS = ("httpx", "httpcore")

_MB = 1024 * 1024


def _pre_chain() -> list:
    """Processors applied to records from both structlog and logging.getLogger()."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _formatter(console: bool) -> structlog.stdlib.ProcessorFormatter:
    """JSON lines by default; human-readable console output when debugging."""
    renderer = structlog.dev.ConsoleRenderer() if console else structlog.processors.JSONRenderer()
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def _rotating_file(file_path: str, max_mb: int, backups: int) -> logging.Handler | None:
    """Rotating file handler, or None when the path is blank or unwritable."""
    if not file_path.strip():
        return None
    path = Path(file_path.strip()).resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(path, maxBytes=max_mb * _MB, backupCount=backups, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"Log file disabled: could not open {path}: {e}\n")
        return None


def setup_logging(
    level: str = "INFO",
    file_path: str = "",
    rotation_max_mb: int = 5,
    rotation_backups: int = 3,
) -> None:
    """Route all logging through structlog formatting.

    Console output goes to stderr so generated text on stdout stays clean.
    A file handler is added when file_path is set.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = _formatter(console=log_level == logging.DEBUG)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if file_handler := _rotating_file(file_path, rotation_max_mb, rotation_backups):
        handlers.append(file_handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def setup_logging_from_config(config: AppConfig) -> None:
    """Apply the logging fields of AppConfig."""
    setup_logging(
        level=config.log_level,
        file_path=config.log_file or "",
        rotation_max_mb=config.log_rotation_max_mb,
        rotation_backups=config.log_rotation_backups,
    )


__all__ = ["setup_logging", "setup_logging_from_config"]
