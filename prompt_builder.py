# prompt_builder.py
"""
[V1.1] 提示词构建
- 从 prompts/ 目录加载 .txt 模板 (velog / weekly / quick)
- 用提交列表、统计结果和用户设置填充模板
"""
import logging
import os
from typing import Dict, List, Optional, Sequence

from config import GlobalConfig
from context import GenerationSettings
from models import CommitRecord, CommitStats
import commit_analyzer
import report_builder

logger = logging.getLogger(__name__)

DEFAULT_INTRO = "당신은 기술 블로그 작성 전문가입니다."
FALLBACK_TEMPLATE = "velog"

# 每个模板引用的提交信息条数
MESSAGE_LIMITS = {"velog": 10, "weekly": 10, "quick": 5}


def load_prompt_templates(prompt_dir: str) -> Dict[str, str]:
    """(V1.0) 递归加载所有 .txt 模板，键为相对路径 (不含扩展名)"""
    prompts = {}
    try:
        for root, _, files in os.walk(prompt_dir):
            for filename in files:
                if filename.endswith(".txt"):
                    file_path = os.path.join(root, filename)
                    relative_path = os.path.relpath(file_path, prompt_dir)
                    key = os.path.splitext(relative_path)[0]
                    key = key.replace(os.path.sep, "/")

                    with open(file_path, "r", encoding="utf-8") as f:
                        prompts[key] = f.read()
    except OSError as e:
        logger.error(f"❌ 加载提示词失败 ({prompt_dir}): {e}")
        return {}

    if not prompts:
        logger.warning(f"⚠️ 在 {prompt_dir} 中未找到 .txt 提示词。")
    return prompts


def _format_commit_list(commits: Sequence[CommitRecord]) -> str:
    return "\n".join(
        f"{i}. [{c.short_hash}] {c.message} (+{c.additions} -{c.deletions})"
        for i, c in enumerate(commits, 1)
    )


def _format_messages(commits: Sequence[CommitRecord], limit: int) -> str:
    return "\n".join(f"{i}. {c.message}" for i, c in enumerate(commits[:limit], 1))


def _format_file_types(stats: CommitStats) -> str:
    if not stats.file_types:
        return "정보 없음"
    ranked = sorted(stats.file_types.items(), key=lambda item: item[1], reverse=True)
    return ", ".join(f"{ext}: {count}개" for ext, count in ranked)


def _format_period(commits: Sequence[CommitRecord]) -> str:
    # 提交按新 -> 旧排列: 最后一个最早，第一个最新
    if not commits:
        return "-"
    return f"{commits[-1].date} ~ {commits[0].date}"


def _count_changed_files(commits: Sequence[CommitRecord]) -> int:
    files = set()
    for commit in commits:
        files.update(commit.files or ())
    return len(files)


def _build_extra_sections(
    commits: Sequence[CommitRecord],
    stats: CommitStats,
    settings: GenerationSettings,
    style_guide: Optional[str],
) -> str:
    sections: List[str] = []

    major_changes = commit_analyzer.extract_major_changes(commits)
    if major_changes:
        lines = ["**주요 변경 파일**:"]
        for entry in major_changes:
            lines.append(f"- {entry['file']} ({entry['changes']}줄)")
        sections.append("\n".join(lines))

    if style_guide:
        sections.append(style_guide.strip())

    if settings.include_stats:
        sections.append(report_builder.format_commit_stats(stats).strip())

    if not sections:
        return ""
    return "\n" + "\n\n".join(sections) + "\n"


def build_blog_prompt(
    commits: Sequence[CommitRecord],
    stats: CommitStats,
    settings: GenerationSettings,
    style_guide: Optional[str] = None,
    templates: Optional[Dict[str, str]] = None,
    global_config: Optional[GlobalConfig] = None,
) -> str:
    """
    (V1.1) 生成发送给 LLM 的完整提示词。
    - settings.custom_prompt 会替换默认的角色说明
    - settings.include_stats 为 True 时附加 Markdown 统计报告
    - 未知模板回退到 velog
    """
    if templates is None:
        global_config = global_config or GlobalConfig()
        templates = load_prompt_templates(
            os.path.join(global_config.SCRIPT_BASE_PATH, global_config.PROMPTS_DIR_NAME)
        )

    template_key = settings.template or FALLBACK_TEMPLATE
    if template_key not in templates:
        logger.warning(f"⚠️ 未知的文章模板 '{template_key}'，回退到 '{FALLBACK_TEMPLATE}'")
        template_key = FALLBACK_TEMPLATE
    template = templates[template_key]

    intro = (settings.custom_prompt or "").strip() or DEFAULT_INTRO
    categories = commit_analyzer.infer_batch_categories(commits)

    return template.format(
        intro=intro,
        total_commits=stats.total_commits,
        files_changed=_count_changed_files(commits),
        additions=stats.total_additions,
        deletions=stats.total_deletions,
        period=_format_period(commits),
        categories=", ".join(categories),
        file_types=_format_file_types(stats),
        commit_list=_format_commit_list(commits),
        messages=_format_messages(commits, MESSAGE_LIMITS.get(template_key, 10)),
        authors=", ".join(report_builder.list_authors(stats)),
        extra=_build_extra_sections(commits, stats, settings, style_guide),
    )
