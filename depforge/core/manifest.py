"""依赖清单加载

清单格式（YAML），dependencies 可以是列表或有序映射:

    dependencies:
      - name: github.com/foo/bar
        tag: v1.2.0
      - name: github.com/org/repo
        fork: github.com/me/repo
        group: [development, test]

    dependencies:
      github.com/foo/bar: {tag: v1.2.0}
      github.com/baz/qux:

选项在加载时一次性校验：未知键、空名称、非标量值都会报错，
所有问题汇总到 ValidationError.details。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from depforge.core.exceptions import ConfigError, ValidationError
from depforge.core.models import LIST_KEYS, OPTION_KEYS, SCALAR_KEYS, Dependency, DepOptions
from depforge.utils.yaml_io import read_yaml

logger = logging.getLogger(__name__)

_TEXT_TAGS = {
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class ManifestLoader(yaml.SafeLoader):
    """数字和日期按原文保留为字符串（tag: 1.10 不会变成 1.1，commit: 0123 不按八进制解析）"""


ManifestLoader.yaml_implicit_resolvers = {
    ch: [(tag, rx) for tag, rx in resolvers if tag not in _TEXT_TAGS]
    for ch, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_manifest(path: str | Path) -> list[Dependency]:
    """读取清单文件，按声明顺序返回依赖列表"""
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"清单文件不存在: {p}")
    try:
        data = read_yaml(p, loader=ManifestLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"清单文件无效: {p} ({e})") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError(
            f"清单顶层必须是映射 (实际类型: {type(data).__name__}): {p}"
        )
    deps = parse_manifest(data.get("dependencies"))
    logger.info("已加载 %d 个依赖: %s", len(deps), p)
    return deps


def parse_manifest(entries: Any) -> list[Dependency]:
    """把 dependencies 段解析为 Dependency 列表"""
    if entries is None:
        return []

    if isinstance(entries, dict):
        items = [(name, opts) for name, opts in entries.items()]
    elif isinstance(entries, list):
        items = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValidationError(f"dependencies[{i}] 必须是映射")
            entry = dict(entry)
            items.append((entry.pop("name", None), entry))
    else:
        raise ValidationError("dependencies 必须是列表或映射")

    errors: list[str] = []
    deps: list[Dependency] = []
    for name, opts in items:
        dep = _parse_entry(name, opts, errors)
        if dep is not None:
            deps.append(dep)
    if errors:
        raise ValidationError(f"清单校验失败 ({len(errors)} 项)", details=errors)
    return deps


def _parse_entry(name: Any, opts: Any, errors: list[str]) -> Dependency | None:
    if not isinstance(name, str) or not name.strip():
        errors.append(f"依赖缺少 name: {opts!r}")
        return None
    name = name.strip()
    if opts is None:
        opts = {}
    if not isinstance(opts, dict):
        errors.append(f"{name}: 选项必须是映射")
        return None

    unknown = sorted(str(k) for k in opts if k not in OPTION_KEYS)
    if unknown:
        errors.append(f"{name}: 未知选项 {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in SCALAR_KEYS:
        if key in opts:
            value = _scalar(opts[key])
            if value is None:
                errors.append(f"{name}: 选项 {key} 必须是标量")
            else:
                values[key] = value
    for key in LIST_KEYS:
        if key in opts:
            items = _string_list(opts[key])
            if items is None:
                errors.append(f"{name}: 选项 {key} 必须是字符串或字符串列表")
            else:
                values[key] = items

    return Dependency(name=name, options=DepOptions(**values))


def _scalar(value: Any) -> str | None:
    # YAML 会把 yes/true 解析成 bool，统一还原为字符串再交给布尔解析
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _string_list(value: Any) -> tuple[str, ...] | None:
    if isinstance(value, (list, tuple)):
        result = [_scalar(v) for v in value]
        if any(v is None for v in result):
            return None
        return tuple(v for v in result if v is not None)
    single = _scalar(value)
    return (single,) if single is not None else None
