"""Shared utility modules.

- logging: JSON-formatted logging utilities
"""

from .logging import JSONFormatter, setup_logger, setup_logging, log_summary

__all__ = [
    "JSONFormatter",
    "setup_logger",
    "setup_logging",
    "log_summary",
]
