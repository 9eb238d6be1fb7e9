"""集中配置管理

工作空间目录、包根环境变量名、拉取 / 构建命令前缀等统一从这里读取。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from depforge.core.exceptions import ConfigError
from depforge.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """全局配置"""

    # 目录
    vendor_dir: str = "_vendor"
    manifest: str = "Depfile.yml"

    # 生态工具
    package_root_env: str = "GOPATH"
    fetch_cmd: list[str] = field(default_factory=lambda: ["go", "get", "-d"])
    build_cmd: list[str] = field(default_factory=lambda: ["go", "install"])

    # 过滤
    active_groups: list[str] = field(default_factory=list)

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("vendor_dir", "manifest", "package_root_env"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{name} 必须是非空字符串 (实际: {value!r})")
        self.fetch_cmd = _as_argv(self.fetch_cmd, "fetch_cmd")
        self.build_cmd = _as_argv(self.build_cmd, "build_cmd")
        self.active_groups = _as_groups(self.active_groups)

    @classmethod
    def from_file(cls, path: str | Path = "depforge.yml") -> Config:
        """从 YAML 文件加载配置，文件不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise ConfigError(f"配置文件无效: {path} ({e})") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def vendor_path(self) -> Path:
        """工作空间根目录的绝对路径"""
        return Path(self.vendor_dir).expanduser().absolute()

    def to_dict(self) -> dict:
        return asdict(self)


def _as_argv(value: str | list[str], name: str) -> list[str]:
    if isinstance(value, str):
        value = shlex.split(value)
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(v, (str, int, float)) for v in value
    ):
        raise ConfigError(f"{name} 必须是字符串或字符串列表 (实际: {value!r})")
    argv = [str(v) for v in value]
    if not argv:
        raise ConfigError(f"{name} 不能为空")
    return argv


def _as_groups(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"active_groups 必须是字符串或字符串列表 (实际: {value!r})")
    return list(value)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str | Path = "depforge.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path)
    return _current
