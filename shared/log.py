#!/usr/bin/env python3
"""
frameforge Logging Configuration

Centralized logging setup for consistent formatting across the project.
Diagnostics go to stderr so the client's one-line report on stdout stays clean.

Usage:
    from shared.log import get_logger

    logger = get_logger(__name__)
    logger.debug("Connecting...")
    logger.debug("Connect failed", extra={"socket_path": "/tmp/frameforge.socket", "step": "connecting"})

Environment:
    FRAMEFORGE_LOG_LEVEL  explicit level ("DEBUG", "INFO", ...)
    FRAMEFORGE_ENV        "dev"/"development" switches on colour and DEBUG
    FRAMEFORGE_LOG_FILE   also write records to this file
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, Any
import os


# ========================================
#           LOGGING FORMATTERS
# ========================================

def _with_context(record: logging.LogRecord) -> logging.LogRecord:
    """Return a copy of ``record`` with the exchange context prefixed to its message.

    Each handler formats the same record, so formatters never modify it in place.
    """
    record = logging.makeLogRecord(record.__dict__)
    context = []

    if hasattr(record, 'socket_path'):
        context.append(f"sock={record.socket_path}")
    if hasattr(record, 'step'):
        context.append(f"step={record.step}")

    if context:
        record.msg = f"[{' '.join(context)}] {record.msg}"

    return record


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    # ANSI Color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        record = _with_context(record)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


class GenericFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        return super().format(_with_context(record))


# ========================================
#           LOGGING CONFIGURATION
# ========================================

_loggers_configured = set()

def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger for the given module.

    Args:
        name: Usually __name__ from the calling module
        level: Override log level ("DEBUG", "INFO", "WARNING", "ERROR")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure each logger once
    if name not in _loggers_configured:
        _configure_logger(logger, level)
        _loggers_configured.add(name)

    return logger


def _configure_logger(logger: logging.Logger, level: Optional[str] = None) -> None:
    """Configure a logger with appropriate handlers and formatters"""

    logger.setLevel(_get_log_level(level))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    _add_console_handler(logger, colored=_is_development())

    log_file = os.getenv('FRAMEFORGE_LOG_FILE')
    if log_file:
        _add_file_handler(logger, Path(log_file))

    # Prevent duplicate messages from parent loggers
    logger.propagate = False


def _get_log_level(level: Optional[str] = None) -> int:
    """Determine appropriate log level"""

    level = level or os.getenv('FRAMEFORGE_LOG_LEVEL')
    if level:
        return getattr(logging, level.upper(), logging.WARNING)

    return logging.DEBUG if _is_development() else logging.WARNING


def _is_development() -> bool:
    """Detect if we're in development mode"""
    return (
        os.getenv('FRAMEFORGE_ENV', '').lower() in ['dev', 'development'] or
        'pytest' in sys.modules
    )


def _add_console_handler(logger: logging.Logger, colored: bool = True) -> None:
    """Add stderr handler with appropriate formatter"""

    fmt = '[%(levelname)-8s][%(asctime)s][%(name)-5s]: %(message)s'
    handler = logging.StreamHandler(sys.stderr)

    if colored and _supports_color():
        formatter = ColoredFormatter(
            fmt=fmt,
            datefmt='%H:%M:%S'
        )
    else:
        formatter = GenericFormatter(
            fmt=fmt,
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _add_file_handler(logger: logging.Logger, log_file: Path) -> None:
    """Add file handler writing to ``log_file``"""

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)

    formatter = GenericFormatter(
        fmt='%(asctime)s | %(name)-30s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _supports_color() -> bool:
    """Check if stderr supports color output"""

    if not (hasattr(sys.stderr, "isatty") and sys.stderr.isatty()):
        return False

    if os.getenv("TERM", "") == "dumb":
        return False

    return True
# ========================================
#           CONVENIENCE FUNCTIONS
# ========================================

def configure_root_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the entire application.
    Call this once at application startup.

    Args:
        level: Root log level ("DEBUG", "INFO", "WARNING", "ERROR")
    """
    root_logger = logging.getLogger()
    _configure_logger(root_logger, level)

    # Module loggers created at import time follow the application-wide level
    for name in _loggers_configured:
        logging.getLogger(name).setLevel(root_logger.level)


def log_step(logger: logging.Logger, level: str, message: str,
             step: Optional[str] = None,
             socket_path: Optional[str] = None,
             **context: Any) -> None:
    """
    Log a ping state-machine transition with structured context.

    Args:
        logger: Logger instance
        level: Log level ("debug", "info", "warning", "error")
        message: Log message
        step: Current step name ("connecting", "writing", ...)
        socket_path: Target address of the exchange
        **context: Additional context fields

    Example:
        log_step(logger, "debug", "Sending request", step="writing",
                 socket_path=config.socket_path)
    """

    extra_context = dict(context)
    if step is not None:
        extra_context['step'] = step
    if socket_path is not None:
        extra_context['socket_path'] = socket_path

    log_func = getattr(logger, level.lower())
    log_func(message, extra=extra_context)
