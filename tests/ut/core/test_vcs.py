"""版本控制适配器测试 - checkout / update / sync 回退"""

from __future__ import annotations

from pathlib import Path

import pytest

from depforge.core import vcs
from depforge.core.exceptions import ExecutionError, SyncError


@pytest.fixture()
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    (path / ".git").mkdir(parents=True)
    return path


class TestCommandForms:
    @pytest.mark.parametrize(("adapter", "checkout", "update"), [
        (vcs.GIT, ["git", "checkout", "-q", "r1"], ["git", "fetch"]),
        (vcs.HG, ["hg", "update", "r1"], ["hg", "pull"]),
        (vcs.BZR, ["bzr", "revert", "-r", "r1"], ["bzr", "pull"]),
    ])
    def test_argv(self, adapter, checkout, update, repo: Path, executor) -> None:
        adapter.checkout(repo, "r1")
        adapter.update(repo)
        assert executor.argvs == [checkout, update]
        assert all(c.cwd == repo.resolve() for c in executor.calls)


class TestSync:
    def test_local_revision_never_updates(self, repo: Path, executor) -> None:
        vcs.GIT.sync(repo, "v1.0")
        assert executor.argvs == [["git", "checkout", "-q", "v1.0"]]

    def test_missing_revision_updates_once_then_retries(self, repo: Path, executor) -> None:
        executor.script(["git", "checkout"], executor.failed("unknown revision"))
        vcs.GIT.sync(repo, "v1.0")
        assert executor.argvs == [
            ["git", "checkout", "-q", "v1.0"],
            ["git", "fetch"],
            ["git", "checkout", "-q", "v1.0"],
        ]

    def test_both_checkouts_fail_surfaces_retry_error(self, repo: Path, executor) -> None:
        executor.script(
            ["hg", "update"],
            executor.failed("first attempt"),
            executor.failed("second attempt"),
        )
        with pytest.raises(SyncError, match="second attempt") as exc_info:
            vcs.HG.sync(repo, "tip")
        assert isinstance(exc_info.value.__cause__, ExecutionError)
        assert "second attempt" in exc_info.value.__cause__.stderr
        assert executor.argvs.count(["hg", "pull"]) == 1
        assert len(executor.calls) == 3

    def test_update_failure_propagates(self, repo: Path, executor) -> None:
        executor.script(["bzr", "revert"], executor.failed("no such revision"))
        executor.script(["bzr", "pull"], executor.failed("network unreachable"))
        with pytest.raises(ExecutionError, match="network unreachable"):
            vcs.BZR.sync(repo, "42")
        assert executor.argvs == [["bzr", "revert", "-r", "42"], ["bzr", "pull"]]


class TestDetect:
    @pytest.mark.parametrize(("marker", "expected"), [
        (".git", vcs.GIT), (".hg", vcs.HG), (".bzr", vcs.BZR),
    ])
    def test_marker(self, tmp_path: Path, marker: str, expected) -> None:
        (tmp_path / marker).mkdir()
        assert vcs.detect(tmp_path) is expected

    def test_git_wins_over_hg(self, tmp_path: Path) -> None:
        (tmp_path / ".hg").mkdir()
        (tmp_path / ".git").mkdir()
        assert vcs.detect(tmp_path) is vcs.GIT

    def test_marker_file_is_not_metadata(self, tmp_path: Path) -> None:
        (tmp_path / ".git").write_text("gitdir: ../elsewhere")
        assert vcs.detect(tmp_path) is None
