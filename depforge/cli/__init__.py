"""depforge 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from depforge import __version__
from depforge.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """depforge - 依赖拉取 / 版本固定 / 构建工具"""
    setup_logging(
        level=os.getenv("DEPFORGE_LOG_LEVEL", "INFO"),
        json_output=os.getenv("DEPFORGE_LOG_JSON", "") == "1",
    )


from depforge.cli.cmd_install import register as _reg_install  # noqa: E402

_reg_install(main)
