# models.py
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class CommitRecord:
    """单个 Git 提交数据模型 (按 git log 默认顺序: 新 -> 旧)"""

    hash: str
    message: str
    author: str
    date: str  # YYYY-MM-DD
    additions: int = 0
    deletions: int = 0
    # None 表示“未收集文件列表”，空元组表示“未修改任何文件”
    files: Optional[Tuple[str, ...]] = None

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions


@dataclass(frozen=True)
class CommitStats:
    """一批提交的汇总统计"""

    total_commits: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    authors: Dict[str, int] = field(default_factory=dict)
    file_types: Dict[str, int] = field(default_factory=dict)
    commits_by_day: Dict[str, int] = field(default_factory=dict)
    commit_categories: Dict[str, int] = field(default_factory=dict)
    large_commits: Tuple[CommitRecord, ...] = ()
    avg_commit_size: int = 0
    # [V1.3] 仅在额外采集了提交时间戳时填充
    hourly_activity: Dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class GitLogOptions:
    """git log 的可选过滤条件"""

    path_filter: Optional[str] = None  # 例如 "src/" 或 "*.ts"
    author: Optional[str] = None
    branch: Optional[str] = None
    max_commits: Optional[int] = None
    include_files: bool = False
