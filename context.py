# context.py
"""
[V1.0] 运行时配置的数据模型
"""
from dataclasses import dataclass, field
from typing import List, Optional

from config import GlobalConfig
from models import GitLogOptions


@dataclass
class GenerationSettings:
    """
    (V1.0) 生成文章所需的用户设置。
    显式传递，不依赖任何全局可变状态。
    """

    api_key: Optional[str] = None
    custom_prompt: Optional[str] = None
    example_urls: List[str] = field(default_factory=list)
    template: str = "velog"
    include_stats: bool = False


@dataclass
class RunContext:
    """
    (V1.0) 封装一次运行所需的所有配置和状态。
    这是从 CLI 传递到 Orchestrator 的唯一对象。
    """

    # --- 核心路径 ---
    repo_path: str
    project_data_path: str

    # --- 范围参数 ---
    days: int
    git_options: GitLogOptions

    # --- AI 与文章参数 ---
    llm_id: str
    settings: GenerationSettings

    # --- 输出参数 ---
    output_path: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    append: bool = False

    # --- 标志 ---
    preview_only: bool = False
    stats_only: bool = False
    html_preview: bool = False
    open_browser: bool = False

    # --- 全局配置 ---
    global_config: GlobalConfig = field(default_factory=GlobalConfig)
