"""group / goos 谓词测试"""

from __future__ import annotations

from depforge.core.filters import current_os, match_group, match_os


class TestMatchGroup:
    def test_any_active_group_matches(self) -> None:
        assert match_group(("development", "test"), ["test"]) is True

    def test_no_active_groups(self) -> None:
        assert match_group(("development",), []) is False

    def test_inactive_group(self) -> None:
        assert match_group(("production",), ["development", "test"]) is False


class TestMatchOs:
    def test_explicit_current(self) -> None:
        assert match_os(("darwin", "linux"), current="linux") is True
        assert match_os(("windows",), current="linux") is False

    def test_case_insensitive(self) -> None:
        assert match_os(("Linux",), current="linux") is True

    def test_defaults_to_running_system(self) -> None:
        assert match_os((current_os(),)) is True
