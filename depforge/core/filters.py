"""依赖过滤谓词 — group / goos 匹配"""

from __future__ import annotations

import platform
from collections.abc import Iterable


def current_os() -> str:
    """当前操作系统名（linux / darwin / windows ...）"""
    return platform.system().lower()


def match_group(group: Iterable[str], active_groups: Iterable[str]) -> bool:
    """依赖的任一 group 处于激活状态即匹配"""
    active = set(active_groups)
    return any(g in active for g in group)


def match_os(goos: Iterable[str], current: str | None = None) -> bool:
    """依赖的任一 goos 等于当前系统即匹配"""
    name = current or current_os()
    return any(g.lower() == name for g in goos)
