"""文件系统小工具 — 目录探测与递归复制"""

from __future__ import annotations

import shutil
from pathlib import Path


def is_dir(path: str | Path) -> bool:
    return Path(path).is_dir()


def copy_tree(src: str | Path, dst: str | Path) -> None:
    """递归复制 src 到 dst，dst 已存在时合并并覆盖同名文件"""
    shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)


def remove_tree(path: str | Path) -> None:
    shutil.rmtree(path)
