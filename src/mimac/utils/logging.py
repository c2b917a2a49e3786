"""Logging setup and utilities.

All package loggers live under the ``mimac`` namespace. Console output goes
through rich; an optional plain-text file keeps a full session transcript.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "mimac"
_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``mimac`` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Logging level (e.g., logging.DEBUG, "INFO").
        log_file: Optional session transcript path.
        console: Whether to log to stderr through rich.

    Returns:
        Configured ``mimac`` logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if console:
        # stdout carries the session narration, so logs go to stderr
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a package logger.

    Args:
        name: Dotted sub-name (e.g. "simulation.runner"); the root package
            logger if None.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that prefixes messages with session context."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        if self.extra:
            prefix = " ".join(f"[{k}={v}]" for k, v in self.extra.items())
            msg = f"{prefix} {msg}"
        return msg, kwargs


def session_logger(variant: str, name: str = "simulation.runner") -> LoggerAdapter:
    """Logger whose messages are tagged with a protocol variant.

    Example:
        >>> session_logger("mi_mac").process("done", {})[0]
        '[variant=mi_mac] done'
    """
    return LoggerAdapter(get_logger(name), {"variant": variant})


def log_metrics(
    logger: logging.Logger | logging.LoggerAdapter,
    metrics: dict[str, Any],
    prefix: str = "",
    level: int = logging.INFO,
) -> None:
    """Log session counters on one line, floats with 2 decimals."""
    parts = [prefix] if prefix else []
    for name, value in metrics.items():
        if isinstance(value, float):
            parts.append(f"{name}: {value:.2f}")
        else:
            parts.append(f"{name}: {value}")
    logger.log(level, " | ".join(parts))
