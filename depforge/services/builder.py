"""构建执行器 — 在依赖的 target 目录内执行安装命令"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from depforge.core.exceptions import BuildError, ExecutionError
from depforge.core.models import Dependency
from depforge.utils.shell import run_in_dir

logger = logging.getLogger(__name__)


class BuildRunner:
    """构建执行器，失败不重试"""

    def __init__(self, vendor: Path, build_cmd: Sequence[str]) -> None:
        self.vendor = vendor
        self.build_cmd = list(build_cmd)

    def build(self, dep: Dependency, extra_args: Sequence[str] = ()) -> None:
        """执行 <build_cmd> <extra_args...>，额外参数原样转发"""
        work_dir = dep.src_dir(self.vendor)
        logger.info("building %s", dep.target)
        try:
            run_in_dir(work_dir, [*self.build_cmd, *extra_args], label="build")
        except ExecutionError as e:
            raise BuildError(f"构建失败 {dep.target}: {e}") from e
