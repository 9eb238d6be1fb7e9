"""统一异常体系

所有业务异常继承 DepForgeError。编排器不做任何恢复，
第一个异常直接向上抛出；CLI 层据此输出 `code: message` 并以非零状态退出。
"""

from __future__ import annotations


class DepForgeError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(DepForgeError):
    """工作空间根目录解析、环境变量设置或配置文件无效"""

    code = "CONFIG_ERROR"


class ValidationError(DepForgeError):
    """清单或依赖选项校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ExecutionError(DepForgeError):
    """外部命令返回非零或无法启动"""

    code = "EXECUTION_ERROR"

    def __init__(
        self, message: str, returncode: int | None = None, stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class FetchError(DepForgeError):
    """自定义命令 / 私有仓库 / 默认拉取命令失败"""

    code = "FETCH_ERROR"


class RelocationError(DepForgeError):
    """fork → target 复制或 fork 目录删除失败"""

    code = "RELOCATION_ERROR"


class UnsupportedVCSError(DepForgeError):
    """请求固定版本，但目标路径上找不到 .git/.hg/.bzr"""

    code = "UNSUPPORTED_VCS"


class SyncError(DepForgeError):
    """首次 checkout 与 update 后的重试 checkout 均失败"""

    code = "SYNC_ERROR"


class BuildError(DepForgeError):
    """构建 / 安装命令失败"""

    code = "BUILD_ERROR"
