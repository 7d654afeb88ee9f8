"""Tests for logging configuration."""

from __future__ import annotations

import json
import logging

from lesson2html.utils.logging_config import JsonFormatter, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_repeated_calls_keep_one_handler(self) -> None:
        configure_logging(logging.INFO)
        configure_logging(logging.DEBUG)

        package_logger = logging.getLogger("lesson2html")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG

    def test_accepts_level_names(self) -> None:
        configure_logging("warning")
        assert logging.getLogger("lesson2html").level == logging.WARNING

    def test_unknown_level_name_defaults_to_info(self) -> None:
        configure_logging("chatty")
        assert logging.getLogger("lesson2html").level == logging.INFO

    def test_json_logs(self) -> None:
        configure_logging(logging.INFO, json_logs=True)
        handler = logging.getLogger("lesson2html").handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_emits_one_json_object(self) -> None:
        record = logging.LogRecord(
            "lesson2html.pipeline", logging.INFO, __file__, 1, "Wrote %d files", (3,), None
        )

        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "lesson2html.pipeline"
        assert payload["msg"] == "Wrote 3 files"
