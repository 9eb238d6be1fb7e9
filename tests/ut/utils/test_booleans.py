"""布尔选项解析测试"""

from __future__ import annotations

import logging

import pytest

from depforge.utils.booleans import is_truthy, parse_bool


class TestParseBool:
    @pytest.mark.parametrize("token", ["t", "true", "y", "yes", "on", "1", "TRUE", "Yes", " on "])
    def test_truthy(self, token: str) -> None:
        assert parse_bool(token) is True

    @pytest.mark.parametrize("token", ["f", "false", "n", "no", "off", "0", "FALSE", "Off"])
    def test_falsy(self, token: str) -> None:
        assert parse_bool(token) is False

    @pytest.mark.parametrize("token", ["", "maybe", "2", "enabled", "nope"])
    def test_unrecognized(self, token: str) -> None:
        assert parse_bool(token) is None


class TestIsTruthy:
    def test_missing_is_false(self) -> None:
        assert is_truthy(None) is False

    def test_unrecognized_is_false_and_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="depforge.utils.booleans"):
            assert is_truthy("sure", option="private", owner="a/b/c") is False
        assert "private" in caplog.text
        assert "a/b/c" in caplog.text

    def test_recognized_does_not_warn(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert is_truthy("Yes", option="https") is True
        assert caplog.records == []
