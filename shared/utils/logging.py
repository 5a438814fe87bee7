"""Logging helpers shared by the games.

Log files are JSON lines so they can be loaded alongside controllog output.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = getattr(record, "data", None)
        if extra:
            entry["data"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logger(
    name: str,
    log_file: Path,
    level: int = logging.INFO,
) -> logging.Logger:
    """Create (or reconfigure) a named logger writing JSON to ``log_file``."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid stacking handlers when called repeatedly for the same file
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == Path(log_file).absolute():
            logger.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(log_file)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return logger


def setup_logging(log_dir: Path, verbose: bool = False, prefix: str = "anagram") -> Path:
    """Route root logging to a timestamped JSON log file in ``log_dir``.

    Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{prefix}_{timestamp}.log"

    level = logging.DEBUG if verbose else logging.INFO
    setup_logger("", log_file, level=level)
    return log_file


def log_summary(logger: logging.Logger, summary: Dict[str, Any], message: Optional[str] = None) -> None:
    """Log a structured summary record."""
    logger.info(message or "summary", extra={"data": summary})
