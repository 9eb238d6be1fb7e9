"""安装编排器 - 过滤 → 拉取 → 固定版本 → 构建

每个阶段对全部依赖执行完毕后才进入下一阶段，
任一依赖失败立即终止整个流程，不回滚已完成的依赖。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from depforge.core.config import Config, get_config
from depforge.core.exceptions import ConfigError
from depforge.core.filters import match_group, match_os
from depforge.core.models import Dependency
from depforge.services.builder import BuildRunner
from depforge.services.fetcher import FetchEngine
from depforge.services.pinner import RevisionPinner

logger = logging.getLogger(__name__)

Predicate = Callable[[Iterable[str]], bool]


class Orchestrator:
    """依赖安装编排器（单线程，严格顺序执行）"""

    def __init__(
        self,
        config: Config | None = None,
        group_matcher: Predicate | None = None,
        os_matcher: Predicate | None = None,
    ) -> None:
        self.config = config or get_config()
        active = list(self.config.active_groups)
        self.group_matcher = group_matcher or (lambda g: match_group(g, active))
        self.os_matcher = os_matcher or match_os

    def prepare_vendor(self) -> Path:
        """解析（必要时创建）工作空间根目录，并设置包根环境变量"""
        try:
            vendor = self.config.vendor_path()
            vendor.mkdir(parents=True, exist_ok=True)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigError(f"无法创建工作空间 {self.config.vendor_dir}: {e}") from e
        env_name = self.config.package_root_env
        if not env_name:
            raise ConfigError("package_root_env 不能为空")
        try:
            os.environ[env_name] = str(vendor)
        except (ValueError, OSError) as e:
            raise ConfigError(f"无法设置 {env_name}: {e}") from e
        logger.debug("%s=%s", env_name, vendor)
        return vendor

    def select(self, deps: Iterable[Dependency]) -> list[Dependency]:
        """按 group / goos 过滤，保持清单顺序"""
        selected = []
        for dep in deps:
            opts = dep.options
            if opts.group is not None and not self.group_matcher(opts.group):
                logger.debug("跳过 %s (group=%s)", dep.name, ",".join(opts.group))
                continue
            if opts.goos is not None and not self.os_matcher(opts.goos):
                logger.debug("跳过 %s (goos=%s)", dep.name, ",".join(opts.goos))
                continue
            selected.append(dep)
        return selected

    def install(
        self, deps: Sequence[Dependency], extra_args: Sequence[str] = (),
    ) -> list[Dependency]:
        """执行完整安装流程，返回实际处理的依赖"""
        vendor = self.prepare_vendor()
        selected = self.select(deps)
        logger.info("安装 %d/%d 个依赖 -> %s", len(selected), len(deps), vendor)

        fetcher = FetchEngine(vendor, self.config.fetch_cmd)
        pinner = RevisionPinner(vendor)
        builder = BuildRunner(vendor, self.config.build_cmd)

        for dep in selected:
            fetcher.fetch(dep, extra_args)
        for dep in selected:
            pinner.pin(dep)
        for dep in selected:
            builder.build(dep, extra_args)

        logger.info("安装完成: %d 个依赖", len(selected))
        return selected
