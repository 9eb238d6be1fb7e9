"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换。
进程工作目录是全局状态：run_in_dir() 在切换目录期间持有进程级锁，
并在任何退出路径上恢复原目录。
"""

from __future__ import annotations

import contextlib
import logging
import os
import subprocess
import threading
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from depforge.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)

# 可重入：run_in_dir 内部的执行器可能再次进入 working_directory
_CWD_LOCK = threading.RLock()


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    测试时可注入记录型实现，无需 patch subprocess。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        r = subprocess.run(
            cmd, capture_output=True, text=True,
            cwd=cwd, env=env, check=False, timeout=timeout,
        )
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


# =========================================================================
# 便捷函数
# =========================================================================

def run_cmd(
    argv: Sequence[str], *, cwd: str = ".",
    env: dict[str, str] | None = None,
    label: str = "cmd",
) -> CommandResult:
    """执行命令，返回非零或无法启动时抛 ExecutionError

    Args:
        argv: 参数列表（不经过 shell）
        cwd: 工作目录
        env: 环境变量（不传则继承当前进程）
        label: 日志标签
    """
    args = list(argv)
    logger.info("  %s: %s (cwd=%s)", label, " ".join(args), cwd)
    try:
        r = get_executor().execute(args, cwd=cwd, env=env)
    except OSError as e:
        raise ExecutionError(f"{label}无法启动: {args[0]} ({e})") from e
    if r.stdout:
        logger.debug("  %s stdout: %s", label, r.stdout.rstrip())
    if not r.success:
        raise ExecutionError(
            f"{label}失败 (rc={r.returncode}): {r.stderr[:500]}",
            returncode=r.returncode, stderr=r.stderr,
        )
    return r


@contextlib.contextmanager
def working_directory(path: str | Path) -> Iterator[Path]:
    """临时切换进程工作目录，任何退出路径都恢复原目录

    切换期间持有进程级锁，避免并发调用互相覆盖工作目录。
    """
    with _CWD_LOCK:
        saved = os.getcwd()
        os.chdir(path)
        try:
            yield Path(path)
        finally:
            os.chdir(saved)


def run_in_dir(
    path: str | Path, argv: Sequence[str], *, label: str = "cmd",
) -> CommandResult:
    """在指定目录内执行命令（保存 → 切换 → 执行 → 恢复）

    目录不存在时抛 ExecutionError，且不会执行任何命令。
    """
    if not Path(path).is_dir():
        raise ExecutionError(f"{label}工作目录不存在: {path}")
    with working_directory(path):
        return run_cmd(argv, label=label)
