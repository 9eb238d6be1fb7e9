"""depforge - 依赖拉取 / 版本固定 / 构建编排工具"""

__version__ = "0.1.0"
