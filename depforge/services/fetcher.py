"""依赖拉取器

拉取顺序:
  1. 有 command 选项: 按空白拆分，追加目标目录后执行
  2. 否则 private 为真: 目录已存在则 pull，不存在则 clone
  3. 无论 1/2 是否执行，都再执行默认拉取命令 (<fetch_cmd> <args...> <fork>)
  4. 有 fork 选项: 把 src/<fork> 整体复制到 src/<target> 后删除 src/<fork>

第 4 步不是事务性的：复制成功但删除失败时两个目录会同时存在。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from depforge.core.exceptions import ExecutionError, FetchError, RelocationError
from depforge.core.models import Dependency
from depforge.utils.booleans import is_truthy
from depforge.utils.fs import copy_tree, is_dir, remove_tree
from depforge.utils.shell import run_cmd

logger = logging.getLogger(__name__)


def private_clone_url(name: str, use_https: bool) -> str:
    """私有仓库 clone 地址

    https: https://<name>.git
    ssh:   git@<host>:<org>/<project>
    """
    if use_https:
        return f"https://{name}.git"
    parts = name.split("/", 2)
    if len(parts) < 3 or not all(parts):
        raise FetchError(f"无法从 {name} 推导 SSH 地址，需要 host/org/project 形式")
    host, org, project = parts
    return f"git@{host}:{org}/{project}"


def private_pull_argv(srcdir: Path) -> list[str]:
    return [
        "git", f"--work-tree={srcdir}", f"--git-dir={srcdir}/.git",
        "pull", "origin",
    ]


class FetchEngine:
    """依赖拉取 + fork 重定位"""

    def __init__(self, vendor: Path, fetch_cmd: Sequence[str]) -> None:
        self.vendor = vendor
        self.fetch_cmd = list(fetch_cmd)

    def fetch(self, dep: Dependency, extra_args: Sequence[str] = ()) -> None:
        name = dep.fork
        srcdir = dep.src_dir(self.vendor, name)
        opts = dep.options

        if opts.command is not None:
            custom = [*opts.command.split(), str(srcdir)]
            logger.info("fetching %s (%s)", name, " ".join(custom))
            self._run(custom, name, label="custom fetch")
        elif is_truthy(opts.private, option="private", owner=dep.name):
            self._fetch_private(dep, srcdir)

        logger.info("downloading %s", name)
        try:
            run_cmd([*self.fetch_cmd, *extra_args, name], label="fetch")
        except ExecutionError as e:
            # 下载本身可能已完成（工具因其他原因返回非零），fork 目录存在时重定位照常进行
            if dep.has_fork and is_dir(dep.src_dir(self.vendor, dep.fork)):
                self.relocate(dep)
            raise FetchError(f"拉取失败 {name}: {e}") from e

        if dep.has_fork:
            self.relocate(dep)

    def _fetch_private(self, dep: Dependency, srcdir: Path) -> None:
        if is_dir(srcdir):
            logger.info("pulling private %s", dep.fork)
            self._run(private_pull_argv(srcdir), dep.fork, label="private pull")
            return

        use_https = is_truthy(dep.options.https, option="https", owner=dep.name)
        url = private_clone_url(dep.name, use_https)
        logger.info("cloning private %s (%s)", dep.fork, url)
        self._run(["git", "clone", url, str(srcdir)], dep.fork, label="private clone")

    @staticmethod
    def _run(argv: list[str], name: str, *, label: str) -> None:
        try:
            run_cmd(argv, label=label)
        except ExecutionError as e:
            raise FetchError(f"拉取失败 {name}: {e}") from e

    def relocate(self, dep: Dependency) -> Path:
        """把 src/<fork> 移到 src/<target>，返回 target 目录"""
        src = dep.src_dir(self.vendor, dep.fork)
        dst = dep.src_dir(self.vendor)
        logger.info("forking (%s, %s)", dep.fork, dep.target)
        if src == dst:
            return dst
        if not is_dir(src):
            raise RelocationError(f"fork 目录不存在: {src}")
        try:
            copy_tree(src, dst)
        except OSError as e:
            raise RelocationError(f"复制 {src} -> {dst} 失败: {e}") from e
        try:
            remove_tree(src)
        except OSError as e:
            raise RelocationError(
                f"已复制到 {dst}，但删除 fork 目录失败: {src} ({e})"
            ) from e
        return dst
