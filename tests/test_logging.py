"""Tests for shared logging helpers."""

import json
import logging
import tempfile
from pathlib import Path

from shared.utils.logging import JSONFormatter, log_summary, setup_logger, setup_logging


class TestJSONFormatter:
    """Test cases for JSONFormatter."""

    def test_format_basic_record(self):
        record = logging.LogRecord("anagram.game", logging.INFO, __file__, 1, "Started game %s", ("abc",), None)
        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "anagram.game"
        assert entry["message"] == "Started game abc"
        assert "data" not in entry

    def test_format_includes_extra_data(self):
        record = logging.LogRecord("anagram", logging.INFO, __file__, 1, "summary", (), None)
        record.data = {"score": 3}
        entry = json.loads(JSONFormatter().format(record))
        assert entry["data"] == {"score": 3}


class TestSetupLogging:
    """Test cases for log file setup."""

    def setup_method(self):
        """Setup for each test."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def test_setup_logger_writes_json(self):
        log_file = self.temp_dir / "test.log"
        logger = setup_logger("anagram.test_logging", log_file)
        log_summary(logger, {"score": 5, "words_seen": 6}, "Game done")
        for handler in logger.handlers:
            handler.flush()

        lines = log_file.read_text().strip().splitlines()
        entry = json.loads(lines[-1])
        assert entry["message"] == "Game done"
        assert entry["data"]["score"] == 5

    def test_setup_logger_does_not_stack_handlers(self):
        log_file = self.temp_dir / "test.log"
        setup_logger("anagram.test_stacking", log_file)
        logger = setup_logger("anagram.test_stacking", log_file)
        assert len(logger.handlers) == 1

    def test_setup_logging_creates_file(self):
        log_dir = self.temp_dir / "nested" / "logs"
        log_file = setup_logging(log_dir, verbose=True)

        assert log_file.parent == log_dir
        assert log_file.name.startswith("anagram_")
        assert logging.getLogger().level == logging.DEBUG
