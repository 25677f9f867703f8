"""Tests for logging setup."""

import json
import logging
import sys

from rich.console import Console

from animescout.core.logging import JSONFormatter, RichConsoleHandler, get_logger, setup_logging


class TestSetupLogging:
    """Test setup_logging and formatters."""

    def test_file_handler_writes_json_lines(self, tmp_path):
        log_file = tmp_path / "logs" / "animescout.log"
        console = Console(record=True, force_terminal=False, color_system=None)

        root = setup_logging(level="INFO", log_file=log_file, console=console)
        get_logger("catalog.controller").error(
            "Error fetching anime: boom",
            extra={"page": 3, "generation": 7},
        )
        for handler in root.handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["level"] == "ERROR"
        assert record["logger"] == "animescout.catalog.controller"
        assert record["message"] == "Error fetching anime: boom"
        assert record["page"] == 3
        assert record["generation"] == 7
        assert record["timestamp"].endswith("Z")

        assert "[page 3] Error fetching anime: boom" in console.export_text()

        for handler in list(root.handlers):
            handler.close()
        root.handlers.clear()

    def test_level_filters_console_output(self):
        console = Console(record=True, force_terminal=False, color_system=None)

        root = setup_logging(level="WARNING", console=console)
        get_logger("fetch.throttling").debug("Throttling call for 500 ms")

        assert console.export_text() == ""
        assert isinstance(root.handlers[0], RichConsoleHandler)
        root.handlers.clear()

    def test_plain_stream_handler(self):
        root = setup_logging(level="DEBUG", rich_console=False)
        assert type(root.handlers[0]) is logging.StreamHandler
        root.handlers.clear()


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad payload")
    except ValueError:
        record = logging.getLogger("animescout.test").makeRecord(
            "animescout.test", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
        )

    data = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad payload" in data["exception"]
