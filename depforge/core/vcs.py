"""版本控制适配器 — git / hg / bzr

每个变体提供 checkout / update / sync，命令都在目标目录内执行。
sync 先尝试离线 checkout，失败后 update 一次再重试 checkout 一次。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from depforge.core.exceptions import ExecutionError, SyncError
from depforge.utils.fs import is_dir
from depforge.utils.shell import run_in_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VcsAdapter:
    """单个版本控制系统的命令集合"""

    name: str
    marker: str
    checkout_cmd: tuple[str, ...]
    update_cmd: tuple[str, ...]

    def checkout(self, path: str | Path, revision: str) -> None:
        """把工作树切到 revision；本地不存在该版本时抛 ExecutionError"""
        run_in_dir(path, [*self.checkout_cmd, revision], label=f"{self.name} checkout")

    def update(self, path: str | Path) -> None:
        """拉取远端引用，不改动工作树"""
        run_in_dir(path, list(self.update_cmd), label=f"{self.name} update")

    def sync(self, path: str | Path, revision: str) -> None:
        """checkout → (失败) update → 重试 checkout

        update 失败时直接抛出 update 的 ExecutionError；
        重试仍失败时抛 SyncError，异常链指向重试的错误。
        """
        try:
            self.checkout(path, revision)
            return
        except ExecutionError as e:
            logger.info("本地没有 %s，先更新 %s: %s", revision, path, e)

        self.update(path)
        try:
            self.checkout(path, revision)
        except ExecutionError as e:
            raise SyncError(
                f"{self.name} 无法切换到 {revision} ({path}): {e}"
            ) from e

    def owns(self, path: str | Path) -> bool:
        """path 下是否有本系统的元数据目录"""
        return is_dir(Path(path) / self.marker)


GIT = VcsAdapter("git", ".git", ("git", "checkout", "-q"), ("git", "fetch"))
HG = VcsAdapter("hg", ".hg", ("hg", "update"), ("hg", "pull"))
BZR = VcsAdapter("bzr", ".bzr", ("bzr", "revert", "-r"), ("bzr", "pull"))

# 探测顺序固定
ADAPTERS: tuple[VcsAdapter, ...] = (GIT, HG, BZR)


def detect(path: str | Path) -> VcsAdapter | None:
    """按 git → hg → bzr 顺序探测 path 本身（不向上查找）"""
    for adapter in ADAPTERS:
        if adapter.owns(path):
            return adapter
    return None
