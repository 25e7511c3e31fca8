"""Structured logging helpers."""
from .config import bootstrap_logging, shutdown_logging
from .context import context, bind
from .logger import StructuredLogger, get_logger, traceable

__all__ = [
    "bootstrap_logging",
    "shutdown_logging",
    "context",
    "bind",
    "StructuredLogger",
    "get_logger",
    "traceable",
]
