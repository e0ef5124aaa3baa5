"""Tests for logger module."""

import logging

from pdfintake.config import LOG_DATE_FORMAT, LOG_FORMAT
from pdfintake.utils.logger import logger, set_log_level, setup_logger


class TestSetupLogger:
    def test_configures_format_and_date_format(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        result = setup_logger()
        assert result.name == "PdfIntake"
        assert calls == [
            {"level": logging.INFO, "format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT}
        ]


class TestSetLogLevel:
    def test_level_name(self):
        previous = logger.level
        try:
            set_log_level("warning")
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(previous)

    def test_unknown_name_falls_back(self):
        previous = logger.level
        try:
            set_log_level("chatty")
            assert logger.level == logging.INFO
        finally:
            logger.setLevel(previous)
