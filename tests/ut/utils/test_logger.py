"""日志配置测试"""

from __future__ import annotations

import json
import logging

from depforge.utils.logger import JSONFormatter, reset_logging, setup_logging


class TestJSONFormatter:
    def test_fields(self) -> None:
        record = logging.LogRecord(
            "depforge.services.fetcher", logging.INFO, __file__, 10,
            "downloading %s", ("x/y",), None,
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "depforge.services.fetcher"
        assert entry["message"] == "downloading x/y"
        assert "exception" not in entry


class TestSetupLogging:
    def test_single_handler_and_level(self) -> None:
        try:
            setup_logging("DEBUG", json_output=True)
            setup_logging("WARNING", json_output=True)
            root = logging.getLogger()
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert root.level == logging.WARNING
        finally:
            reset_logging()
            logging.getLogger().setLevel(logging.WARNING)
