"""布尔选项解析

封闭词表（大小写不敏感）:
  真: t, true, y, yes, on, 1
  假: f, false, n, no, off, 0
词表之外的值没有映射（返回 None），调用方默认按假处理并记录告警。
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_TOKENS: dict[str, bool] = {
    "t": True,
    "true": True,
    "y": True,
    "yes": True,
    "on": True,
    "1": True,
    "f": False,
    "false": False,
    "n": False,
    "no": False,
    "off": False,
    "0": False,
}


def parse_bool(value: str) -> bool | None:
    """三态解析：True / False / None（无法识别）"""
    return _TOKENS.get(value.strip().lower())


def is_truthy(value: str | None, *, option: str = "", owner: str = "") -> bool:
    """解析选项值，缺省或无法识别时视为 False（无法识别时告警）"""
    if value is None:
        return False
    parsed = parse_bool(value)
    if parsed is None:
        logger.warning(
            "无法识别的布尔值 %s=%r (%s)，按 false 处理", option, value, owner,
        )
        return False
    return parsed
