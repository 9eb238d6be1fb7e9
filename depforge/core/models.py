"""依赖数据模型

数据类:
- DepOptions: 单个依赖的已校验选项（只读）
- Dependency: 工作单元，名称 + 选项
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

# 可识别的选项键（清单中出现其他键视为错误）
SCALAR_KEYS = (
    "fork", "target", "command", "private", "https", "branch", "tag", "commit",
)
LIST_KEYS = ("group", "goos")
OPTION_KEYS = LIST_KEYS + SCALAR_KEYS


@dataclass(frozen=True)
class DepOptions:
    """依赖选项；group / goos 为元组，其余为原始字符串"""

    group: tuple[str, ...] | None = None
    goos: tuple[str, ...] | None = None
    fork: str | None = None
    target: str | None = None
    command: str | None = None
    private: str | None = None
    https: str | None = None
    branch: str | None = None
    tag: str | None = None
    commit: str | None = None

    @property
    def revision(self) -> str:
        """版本选择器：commit 覆盖 tag，tag 覆盖 branch；都没有时为空串"""
        selected = ""
        for key in ("branch", "tag", "commit"):
            value = getattr(self, key)
            if value is not None:
                selected = value
        return selected

    def present(self) -> dict[str, object]:
        """已设置的选项（用于展示）"""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self) if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class Dependency:
    """单个依赖

    name 为斜杠分隔标识（如 host/org/project）。
    fork 为实际从上游拉取的标识，target 为之后 checkout / build 使用的标识。
    """

    name: str
    options: DepOptions = field(default_factory=DepOptions)

    @property
    def target(self) -> str:
        return self.options.target or self.name

    @property
    def fork(self) -> str:
        """拉取标识：有 fork 选项时为 fork，否则与 target 相同"""
        return self.options.fork or self.target

    @property
    def has_fork(self) -> bool:
        return self.options.fork is not None

    @property
    def revision(self) -> str:
        return self.options.revision

    def src_dir(self, vendor: Path, identity: str | None = None) -> Path:
        """<vendor>/src/<identity>，默认使用 target 标识"""
        return vendor / "src" / (identity or self.target)
