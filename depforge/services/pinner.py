"""版本固定

从 <vendor>/src 开始按 target 的路径段逐级向下，
第一个带有 .git/.hg/.bzr 的目录决定使用哪种版本控制系统，
随后对完整的 target 目录执行 sync。
"""

from __future__ import annotations

import logging
from pathlib import Path

from depforge.core import vcs
from depforge.core.exceptions import UnsupportedVCSError
from depforge.core.models import Dependency

logger = logging.getLogger(__name__)


class RevisionPinner:
    """把依赖切到 branch / tag / commit 指定的版本"""

    def __init__(self, vendor: Path) -> None:
        self.vendor = vendor

    def find_vcs(self, identity: str) -> vcs.VcsAdapter | None:
        """沿 identity 的路径段逐级探测版本控制元数据"""
        p = self.vendor / "src"
        for segment in identity.split("/"):
            if not segment:
                continue
            p = p / segment
            adapter = vcs.detect(p)
            if adapter is not None:
                logger.debug("%s 由 %s 管理 (%s)", identity, adapter.name, p)
                return adapter
        return None

    def pin(self, dep: Dependency) -> vcs.VcsAdapter | None:
        """未指定版本时直接返回 None；否则返回实际使用的适配器"""
        revision = dep.revision
        if not revision:
            return None

        adapter = self.find_vcs(dep.target)
        if adapter is None:
            logger.warning("不知道如何为 %s 检出版本", dep.target)
            raise UnsupportedVCSError(
                f"{dep.target}: 指定 tag/branch/commit 仅支持 git/hg/bzr 管理的依赖"
            )

        logger.info("checkout %s@%s (%s)", dep.target, revision, adapter.name)
        adapter.sync(dep.src_dir(self.vendor), revision)
        return adapter
