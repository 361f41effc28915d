# git_utils.py
"""
[V1.2] Git 日志提取与解析
- run_git_command: 统一的 git 调用入口，负责超时 / 输出上限 / 错误分类
- get_git_commits: 按时间窗口和过滤条件提取 numstat 日志并解析
- parse_git_log: 纯函数，将原始日志文本解析为 CommitRecord 列表
"""
import logging
import os
import re
import subprocess
from typing import Dict, List, Optional

from config import GlobalConfig
from errors import (
    GitCommandError,
    GitNotFoundError,
    GitTimeoutError,
    NotARepositoryError,
    ValidationError,
)
from models import CommitRecord, GitLogOptions

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = GlobalConfig.GIT_FIELD_SEPARATOR
# 二进制文件在 numstat 中以 "-" 代替行数
BINARY_PLACEHOLDER = "-"

# 注意: str.strip()/str.split() 会把 \x1c-\x1f 视为空白，这里只处理真正的空白字符
_WHITESPACE = " \t\r\n"
_NUMSTAT_SPLIT = re.compile(r"[ \t]+")

_NOT_A_REPO_MARKER = "not a git repository"
# 较旧的 git 在空仓库上报 "bad default revision"
_NO_COMMITS_MARKERS = ("does not have any commits", "bad default revision")


def _git_env() -> Dict[str, str]:
    env = dict(os.environ)
    env["LC_ALL"] = "C"
    env["LANGUAGE"] = "C"
    return env


def run_git_command(
    args: List[str],
    repo_path: str,
    timeout: Optional[float] = None,
    max_output: Optional[int] = None,
    context: str = "执行Git命令",
) -> str:
    """
    (V1.2) 在指定仓库路径下执行 git 命令并返回 stdout。
    - 单次尝试，不重试
    - 失败时抛出对应的 GitError 子类
    - 以 LC_ALL=C 运行，stderr 保持英文，便于识别失败原因
    - 输出上限在进程结束后检查 (stdout 已完整读入内存)，超出时抛出 GitCommandError
    """
    timeout = timeout if timeout is not None else GlobalConfig.GIT_TIMEOUT_SECONDS
    max_output = (
        max_output if max_output is not None else GlobalConfig.GIT_MAX_OUTPUT_BYTES
    )

    if not os.path.isdir(repo_path):
        raise NotARepositoryError(repo_path)

    logger.info(f"在 {repo_path} 中执行命令: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            cwd=repo_path,
            env=_git_env(),
        )
    except FileNotFoundError as e:
        logger.error(f"❌ {context}失败: 未找到 git")
        raise GitNotFoundError(e) from e
    except subprocess.TimeoutExpired as e:
        logger.error(f"❌ {context}超时 ({timeout}s)")
        raise GitTimeoutError(timeout, e) from e

    if result.returncode != 0:
        stderr = result.stderr or ""
        if _NOT_A_REPO_MARKER in stderr:
            raise NotARepositoryError(repo_path)
        logger.error(f"❌ {context}失败: {stderr.strip()}")
        raise GitCommandError(stderr)

    stdout = result.stdout or ""
    if len(stdout.encode("utf-8")) > max_output:
        logger.error(f"❌ {context}输出超过上限 ({max_output} bytes)")
        raise GitCommandError(f"输出超过上限 ({max_output} bytes)")

    logger.info(f"{context}成功，输出 {len(stdout.splitlines())} 行")
    return stdout


def _validate_days(days) -> int:
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise ValidationError(f"时间范围必须是非负整数天数: {days!r}", field="days")
    return days


def build_git_log_command(
    days: int = GlobalConfig.DEFAULT_DAYS, options: Optional[GitLogOptions] = None
) -> List[str]:
    """
    (V1.2) 组装 git log 命令参数。
    头部格式: hash, subject, author, date 四个字段，以 \\x1f 分隔。
    """
    days = _validate_days(days)
    options = options or GitLogOptions()

    # core.quotepath=off: 非 ASCII 路径 (如 회고.md) 原样输出，不转成带引号的八进制转义
    cmd = [
        "git",
        "-c",
        "core.quotepath=off",
        "log",
        "--pretty=format:%H%x1f%s%x1f%an%x1f%ad",
        "--date=short",
        "--numstat",
        f"--since={days}.days.ago",
    ]
    return cmd + _filter_args(options)


def _filter_args(options: GitLogOptions) -> List[str]:
    args = []
    if options.author:
        args.append(f"--author={options.author}")
    if options.max_commits:
        args.extend(["-n", str(options.max_commits)])
    if options.branch:
        args.append(options.branch)
    # 路径过滤必须放在 "--" 之后，且位于所有选项之后
    if options.path_filter:
        args.extend(["--", options.path_filter])
    return args


def get_git_commits(
    repo_path: str,
    days: int = GlobalConfig.DEFAULT_DAYS,
    options: Optional[GitLogOptions] = None,
    timeout: Optional[float] = None,
    max_output: Optional[int] = None,
) -> List[CommitRecord]:
    """
    (V1.2) 获取最近 N 天的提交 (含 numstat 行数统计)。
    - 仓库尚无任何提交时返回空列表，而不是报错
    """
    options = options or GitLogOptions()
    cmd = build_git_log_command(days, options)
    try:
        output = run_git_command(
            cmd, repo_path, timeout, max_output, context="获取Git提交历史"
        )
    except GitCommandError as e:
        if any(marker in e.stderr for marker in _NO_COMMITS_MARKERS):
            logger.warning("⚠️ 仓库中还没有任何提交")
            return []
        raise

    if not output.strip(_WHITESPACE):
        logger.warning(f"⚠️ 最近 {days} 天内没有提交")
        return []
    return parse_git_log(output, options.include_files)


def _parse_count(token: str) -> Optional[int]:
    if token == BINARY_PLACEHOLDER:
        return 0
    if token.isdigit():
        return int(token)
    return None


def parse_git_log(log_output: str, include_files: bool = False) -> List[CommitRecord]:
    """
    解析 `git log --numstat` 输出。
    - 含 \\x1f 的行为提交头部 (hash, subject, author, date)
    - 其余非空行视为 numstat 行: <added> <deleted> <path>
    - 格式不符的 numstat 行直接跳过
    """
    commits: List[CommitRecord] = []
    if not log_output or not log_output.strip(_WHITESPACE):
        return commits

    current: Optional[dict] = None

    def flush():
        if current is None:
            return
        files = tuple(current["files"]) if include_files else None
        commits.append(
            CommitRecord(
                hash=current["hash"],
                message=current["message"],
                author=current["author"],
                date=current["date"],
                additions=current["additions"],
                deletions=current["deletions"],
                files=files,
            )
        )

    for raw_line in log_output.split("\n"):
        line = raw_line.strip(_WHITESPACE)
        if not line:
            continue

        if FIELD_SEPARATOR in line:
            parts = line.split(FIELD_SEPARATOR)
            if len(parts) != 4:
                logger.debug(f"提交头部字段数异常，已跳过: {line!r}")
                continue
            flush()
            hash_, message, author, date = (p.strip() for p in parts)
            current = {
                "hash": hash_,
                "message": message,
                "author": author,
                "date": date,
                "additions": 0,
                "deletions": 0,
                "files": [],
            }
            continue

        if current is None:
            continue

        tokens = _NUMSTAT_SPLIT.split(line, maxsplit=2)
        if len(tokens) < 3:
            logger.debug(f"numstat 行格式异常，已跳过: {line!r}")
            continue
        added = _parse_count(tokens[0])
        deleted = _parse_count(tokens[1])
        if added is None or deleted is None:
            logger.debug(f"numstat 行格式异常，已跳过: {line!r}")
            continue

        current["additions"] += added
        current["deletions"] += deleted
        current["files"].append(tokens[2])

    # 最后一个提交后面没有新的头部行，需要手动收尾
    flush()

    logger.info(f"成功解析 {len(commits)} 个提交")
    return commits


def get_commit_timestamps(
    repo_path: str,
    days: int = GlobalConfig.DEFAULT_DAYS,
    options: Optional[GitLogOptions] = None,
) -> List[str]:
    """
    (V1.3) 获取最近 N 天每个提交的作者时间 (ISO 风格, `%ai`)。
    用于按小时统计活跃度，过滤条件与 get_git_commits 相同。
    """
    days = _validate_days(days)
    cmd = ["git", "log", "--pretty=format:%ai", f"--since={days}.days.ago"]
    output = run_git_command(
        cmd + _filter_args(options or GitLogOptions()),
        repo_path,
        context="获取提交时间",
    )
    return [line.strip() for line in output.splitlines() if line.strip()]
