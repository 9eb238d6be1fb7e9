"""共享 fixture — 记录型命令执行器

RecordingExecutor 替换全局执行器，记录每次调用的 argv 和实际工作目录，
按 argv 前缀脚本化返回结果，不启动任何真实子进程。
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from depforge.utils.shell import CommandResult, get_executor, set_executor

OK = CommandResult(returncode=0, stdout="", stderr="")


@dataclass
class Call:
    argv: list[str]
    cwd: Path


Response = CommandResult | Callable[[list[str]], CommandResult | None]


class RecordingExecutor:
    def __init__(self) -> None:
        self.calls: list[Call] = []
        self._scripts: list[tuple[list[str], list[Response]]] = []

    @staticmethod
    def failed(stderr: str = "error", returncode: int = 1) -> CommandResult:
        return CommandResult(returncode=returncode, stdout="", stderr=stderr)

    def script(self, prefix: list[str], *responses: Response) -> None:
        """匹配 prefix 的调用依次消费 responses，用完后返回成功"""
        self._scripts.append((prefix, list(responses)))

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        argv = list(cmd)
        self.calls.append(Call(argv, Path(os.getcwd(), cwd).resolve()))
        for prefix, responses in self._scripts:
            if argv[:len(prefix)] == prefix and responses:
                response = responses.pop(0)
                if callable(response):
                    return response(argv) or OK
                return response
        return OK

    @property
    def argvs(self) -> list[list[str]]:
        return [c.argv for c in self.calls]


@pytest.fixture()
def executor():
    rec = RecordingExecutor()
    previous = get_executor()
    set_executor(rec)
    yield rec
    set_executor(previous)
