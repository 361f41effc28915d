# commit_analyzer.py
"""
[V1.1] 提交分析器
- analyze_commit_stats: 将提交序列归约为 CommitStats (纯函数)
- extract_commit_category: 单个提交的类别 (Conventional Commits 前缀优先，韩文关键词兜底)
- infer_batch_categories: 整批提交的粗粒度类别集合 (供简化版提示词使用)
[V1.3] 新增按小时活跃度统计、提交信息检查、主要变更文件提取
"""
import logging
import os
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config import GlobalConfig
from models import CommitRecord, CommitStats

logger = logging.getLogger(__name__)

CONVENTIONAL_PATTERN = re.compile(
    r"^(feat|fix|docs|style|refactor|test|chore|perf|ci|build|revert)(\(.+\))?:",
    re.IGNORECASE,
)

# 顺序即优先级: 第一个命中的关键词组胜出
KEYWORD_CATEGORIES: List[Tuple[Tuple[str, ...], str]] = [
    (("기능", "추가"), "feat"),
    (("수정", "버그"), "fix"),
    (("문서",), "docs"),
    (("리팩토링", "개선"), "refactor"),
    (("테스트",), "test"),
    (("스타일",), "style"),
]

DEFAULT_CATEGORY = "other"

# 批量类别: 每个模式独立匹配 "提交信息 + 文件列表"
BATCH_CATEGORY_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("기능 추가", re.compile(r"feat|add|implement|create", re.IGNORECASE)),
    ("버그 수정", re.compile(r"fix|bug|issue|resolve", re.IGNORECASE)),
    ("리팩토링", re.compile(r"refactor|clean|improve", re.IGNORECASE)),
    ("스타일링", re.compile(r"style|css|design|ui", re.IGNORECASE)),
    ("문서화", re.compile(r"doc|readme|comment", re.IGNORECASE)),
    ("테스트", re.compile(r"test|spec", re.IGNORECASE)),
    ("성능 개선", re.compile(r"perf|optimize|speed", re.IGNORECASE)),
    ("의존성", re.compile(r"dep|package|install|upgrade", re.IGNORECASE)),
    ("설정", re.compile(r"config|setup|env", re.IGNORECASE)),
]

GENERAL_DEVELOPMENT = "개발"

UNKNOWN_FILE_TYPE = "unknown"
MAX_MESSAGE_LENGTH = 100


def extract_commit_category(message: str) -> str:
    """
    推断单个提交的类别。
    1. Conventional Commits 前缀 (大小写不敏感)
    2. 韩文关键词包含匹配
    3. 都不匹配时返回 "other"
    """
    match = CONVENTIONAL_PATTERN.match(message)
    if match:
        return match.group(1).lower()

    for keywords, category in KEYWORD_CATEGORIES:
        if any(keyword in message for keyword in keywords):
            return category

    return DEFAULT_CATEGORY


def infer_batch_categories(commits: Iterable[CommitRecord]) -> List[str]:
    """
    推断整批提交涉及的工作类别 (集合语义，按模式定义顺序返回)。
    没有任何模式命中时返回 ["개발"]。
    """
    matched = set()
    for commit in commits:
        text = f"{commit.message} {' '.join(commit.files or ())}"
        for label, pattern in BATCH_CATEGORY_PATTERNS:
            if pattern.search(text):
                matched.add(label)

    categories = [label for label, _ in BATCH_CATEGORY_PATTERNS if label in matched]
    return categories or [GENERAL_DEVELOPMENT]


def find_large_commits(
    commits: Sequence[CommitRecord],
    threshold: int = GlobalConfig.LARGE_COMMIT_THRESHOLD,
) -> List[CommitRecord]:
    """找出变更行数超过阈值的提交，按变更量降序 (稳定排序，同量时保持原顺序)"""
    large = [c for c in commits if c.total_changes > threshold]
    return sorted(large, key=lambda c: c.total_changes, reverse=True)


def get_file_type(path: str) -> str:
    """取文件名最后一个 '.' 之后的扩展名 (小写)，没有扩展名时返回 "unknown" """
    basename = os.path.basename(path.rstrip("/"))
    if "." not in basename:
        return UNKNOWN_FILE_TYPE
    ext = basename.rsplit(".", 1)[1].lower()
    return ext or UNKNOWN_FILE_TYPE


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def analyze_commit_stats(
    commits: Sequence[CommitRecord],
    large_commit_threshold: int = GlobalConfig.LARGE_COMMIT_THRESHOLD,
    timestamps: Optional[Iterable[str]] = None,
) -> CommitStats:
    """
    (V1.1) 将提交序列归约为 CommitStats。
    - file_types 仅在提交带有文件列表时统计
    - avg_commit_size 在空输入时为 0
    """
    total_additions = 0
    total_deletions = 0
    authors: Dict[str, int] = {}
    file_types: Dict[str, int] = {}
    commits_by_day: Dict[str, int] = {}
    categories: Dict[str, int] = {}

    for commit in commits:
        total_additions += commit.additions
        total_deletions += commit.deletions

        authors[commit.author] = authors.get(commit.author, 0) + 1
        commits_by_day[commit.date] = commits_by_day.get(commit.date, 0) + 1

        category = extract_commit_category(commit.message)
        categories[category] = categories.get(category, 0) + 1

        if commit.files is not None:
            for path in commit.files:
                ext = get_file_type(path)
                file_types[ext] = file_types.get(ext, 0) + 1

    total_commits = len(commits)
    avg_commit_size = 0
    if total_commits:
        avg_commit_size = _round_half_up(
            (total_additions + total_deletions) / total_commits
        )

    hourly = compute_hourly_activity(timestamps) if timestamps is not None else {}

    stats = CommitStats(
        total_commits=total_commits,
        total_additions=total_additions,
        total_deletions=total_deletions,
        authors=authors,
        file_types=file_types,
        commits_by_day=commits_by_day,
        commit_categories=categories,
        large_commits=tuple(find_large_commits(commits, large_commit_threshold)),
        avg_commit_size=avg_commit_size,
        hourly_activity=hourly,
    )
    logger.info(
        f"📊 统计完成: {total_commits} 个提交, +{total_additions} -{total_deletions}, "
        f"大提交 {len(stats.large_commits)} 个"
    )
    return stats


def compute_hourly_activity(timestamps: Iterable[str]) -> Dict[int, int]:
    """
    (V1.3) 按小时 (0-23) 统计提交数。
    时间戳格式为 git `%ai`，例如 "2024-01-02 14:05:33 +0900"，按提交者本地时间计。
    """
    hourly: Dict[int, int] = {}
    for stamp in timestamps:
        try:
            moment = datetime.strptime(stamp.strip()[:19], "%Y-%m-%d %H:%M:%S")
        except ValueError:
            logger.debug(f"无法解析的时间戳，已跳过: {stamp!r}")
            continue
        hourly[moment.hour] = hourly.get(moment.hour, 0) + 1
    return hourly


def validate_commit_message(message: str) -> Tuple[bool, List[str]]:
    """(V1.3) 检查提交信息的常见问题，返回 (是否合格, 问题列表)"""
    issues: List[str] = []

    if not message or not message.strip():
        issues.append("커밋 메시지가 비어있습니다.")
    if len(message) > MAX_MESSAGE_LENGTH:
        issues.append(f"커밋 메시지가 너무 깁니다 ({MAX_MESSAGE_LENGTH}자 초과).")
    if message.startswith("WIP") or message.startswith("wip"):
        issues.append("WIP(작업 중) 커밋입니다.")

    return not issues, issues


def extract_major_changes(
    commits: Sequence[CommitRecord], top_n: int = 5
) -> List[Dict[str, object]]:
    """
    (V1.3) 按变更量提取主要文件。
    每个文件累加其所属提交的总变更行数，并记录涉及的提交哈希。
    """
    file_changes: Dict[str, Dict[str, object]] = {}
    for commit in commits:
        for path in commit.files or ():
            entry = file_changes.setdefault(
                path, {"file": path, "changes": 0, "commits": []}
            )
            entry["changes"] += commit.total_changes
            entry["commits"].append(commit.hash)

    ranked = sorted(file_changes.values(), key=lambda e: e["changes"], reverse=True)
    return ranked[:top_n]
