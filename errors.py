# errors.py
"""
[V1.1] 统一异常体系
- 所有异常都携带一个稳定的 code，便于 CLI 层区分失败原因。
- Git 相关失败按原因拆分为独立子类 (非仓库 / 未安装 / 超时 / 其他)。
"""
from typing import Optional


class VelogWriterError(Exception):
    """项目内所有可预期异常的基类"""

    def __init__(
        self,
        message: str,
        code: str = "VELOG_WRITER_ERROR",
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error


# --- Git 提取阶段 ---


class GitError(VelogWriterError):
    def __init__(
        self,
        message: str,
        code: str = "GIT_ERROR",
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message, code, original_error)


class NotARepositoryError(GitError):
    def __init__(self, repo_path: str, original_error: Optional[BaseException] = None):
        super().__init__(
            f"不是有效的 Git 仓库: {repo_path}", "NOT_A_REPOSITORY", original_error
        )
        self.repo_path = repo_path


class GitNotFoundError(GitError):
    def __init__(self, original_error: Optional[BaseException] = None):
        super().__init__(
            "未找到 git 命令。请先安装 Git 并确认其在 PATH 中。",
            "GIT_NOT_FOUND",
            original_error,
        )


class GitTimeoutError(GitError):
    def __init__(self, timeout: float, original_error: Optional[BaseException] = None):
        super().__init__(
            f"Git 命令执行超时 ({timeout} 秒)。提交过多或仓库过大，请缩小时间范围。",
            "GIT_TIMEOUT",
            original_error,
        )
        self.timeout = timeout


class GitCommandError(GitError):
    """其他非零退出码，附带 git 原始 stderr"""

    def __init__(self, stderr: str, original_error: Optional[BaseException] = None):
        super().__init__(
            f"获取 Git 提交失败: {stderr.strip()}", "GIT_COMMAND_FAILED", original_error
        )
        self.stderr = stderr


# --- 生成阶段 ---


class ApiKeyError(VelogWriterError):
    def __init__(self, message: str = "API 密钥未设置。"):
        super().__init__(message, "API_KEY_ERROR")


class AIGenerationError(VelogWriterError):
    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message, "AI_GENERATION_ERROR", original_error)


class VelogFetchError(VelogWriterError):
    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message, "VELOG_FETCH_ERROR", original_error)


class ValidationError(VelogWriterError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


def get_error_message(error: BaseException) -> str:
    """将任意异常转换为面向用户的提示文本"""
    if isinstance(error, VelogWriterError):
        return error.message
    return str(error)
