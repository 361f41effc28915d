# report_builder.py
"""
[V1.1] 报告生成器
- format_commit_stats: CommitStats -> Markdown 统计报告 (纯函数)
- generate_text_report: 终端预览用的提交列表
- generate_html_preview: 使用 Jinja2 模板渲染生成文章的 HTML 预览页
"""
import logging
import os
from datetime import datetime
from typing import List, Optional, Sequence

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import GlobalConfig
from models import CommitRecord, CommitStats
import commit_analyzer

logger = logging.getLogger(__name__)

CATEGORY_EMOJIS = {
    "feat": "✨",
    "fix": "🐛",
    "docs": "📝",
    "style": "💄",
    "refactor": "♻️",
    "test": "✅",
    "chore": "🔧",
    "perf": "⚡",
    "ci": "👷",
    "build": "🏗️",
    "revert": "⏪",
    "other": "📦",
}
DEFAULT_CATEGORY_EMOJI = "📦"

BAR_GLYPH = "█"
MAX_BAR_LENGTH = 20
TOP_FILE_TYPES = 10
TOP_LARGE_COMMITS = 5
MESSAGE_PREVIEW_LENGTH = 50


def _percentage(count: int, total: int) -> str:
    if not total:
        return "0.0"
    return f"{count / total * 100:.1f}"


def format_commit_stats(stats: CommitStats) -> str:
    """
    将统计结果渲染为 Markdown。
    空的统计项整段省略，不输出占位内容。
    """
    output = "## 📊 커밋 통계\n\n"

    output += f"**총 커밋 수**: {stats.total_commits}개\n"
    output += f"**변경 사항**: +{stats.total_additions} -{stats.total_deletions}\n\n"

    # 作者 (按提交数降序)
    if stats.authors:
        output += "### 👥 작성자별 커밋\n"
        for author, count in sorted(
            stats.authors.items(), key=lambda item: item[1], reverse=True
        ):
            percentage = _percentage(count, stats.total_commits)
            output += f"- **{author}**: {count}개 ({percentage}%)\n"
        output += "\n"

    # 文件类型 (前 10)
    if stats.file_types:
        output += "### 📁 파일 타입별 변경\n"
        sorted_types = sorted(
            stats.file_types.items(), key=lambda item: item[1], reverse=True
        )[:TOP_FILE_TYPES]
        for file_type, count in sorted_types:
            output += f"- `.{file_type}`: {count}개 파일\n"
        output += "\n"

    # 每日活动 (日期升序，条形最多 20 格)
    if stats.commits_by_day:
        output += "### 📅 일별 활동\n"
        for date, count in sorted(stats.commits_by_day.items()):
            bar = BAR_GLYPH * min(count, MAX_BAR_LENGTH)
            output += f"- {date}: {bar} ({count})\n"

    # 提交类别
    if stats.commit_categories:
        output += "\n### 🏷️ 커밋 카테고리\n"
        for category, count in sorted(
            stats.commit_categories.items(), key=lambda item: item[1], reverse=True
        ):
            emoji = CATEGORY_EMOJIS.get(category, DEFAULT_CATEGORY_EMOJI)
            percentage = _percentage(count, stats.total_commits)
            output += f"- {emoji} **{category}**: {count}개 ({percentage}%)\n"
        output += "\n"

    if stats.avg_commit_size:
        output += "### 📏 평균 커밋 크기\n"
        output += f"**{stats.avg_commit_size}**줄 변경/커밋\n\n"

    if stats.large_commits:
        output += "### ⚠️ 리뷰 필요 (큰 커밋)\n"
        for commit in stats.large_commits[:TOP_LARGE_COMMITS]:
            output += (
                f"- `{commit.short_hash}` {commit.message[:MESSAGE_PREVIEW_LENGTH]} "
                f"(+{commit.additions}/-{commit.deletions} = {commit.total_changes}줄)\n"
            )
        output += "\n"

    # [V1.3] 按小时活跃度
    if stats.hourly_activity:
        output += "### 🕐 시간대별 활동\n"
        for hour, count in sorted(stats.hourly_activity.items()):
            bar = BAR_GLYPH * min(count, MAX_BAR_LENGTH)
            output += f"- {hour:02d}시: {bar} ({count})\n"
        output += "\n"

    return output


def generate_text_report(commits: Sequence[CommitRecord], days: int) -> str:
    """
    生成终端预览文本 (提交列表 + 批量类别 + 提交信息检查)。
    """
    if not commits:
        return f"⚠️  최근 {days}일간 커밋이 없어요"

    lines = [f"📝 최근 {days}일간 {len(commits)}개 커밋:", ""]
    for i, commit in enumerate(commits, 1):
        lines.append(f"{i}. [{commit.short_hash}] {commit.message}")
        lines.append(
            f"   {commit.author} · {commit.date} · +{commit.additions} -{commit.deletions}"
        )
        if commit.files:
            lines.append(f"   파일: {', '.join(commit.files)}")
        _, issues = commit_analyzer.validate_commit_message(commit.message)
        for issue in issues:
            lines.append(f"   ⚠️ {issue}")
        lines.append("")

    categories = commit_analyzer.infer_batch_categories(commits)
    lines.append(f"🏷️ 작업 카테고리: {', '.join(categories)}")
    return "\n".join(lines)


def _get_css_styles(global_config: GlobalConfig) -> str:
    """读取 CSS 文件内容"""
    css_path = os.path.join(
        global_config.SCRIPT_BASE_PATH, global_config.TEMPLATES_DIR_NAME, "styles.css"
    )
    try:
        with open(css_path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.warning(f"⚠️ CSS 模板文件未找到: {css_path}")
        return ""


def generate_html_preview(
    blog_markdown: str,
    stats: Optional[CommitStats],
    global_config: GlobalConfig,
    title: Optional[str] = None,
) -> str:
    """
    (V1.2) 使用 Jinja2 模板把生成的 Markdown 文章渲染为 HTML 预览页。
    """
    templates_dir = os.path.join(
        global_config.SCRIPT_BASE_PATH, global_config.TEMPLATES_DIR_NAME
    )
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )

    extensions = ["fenced_code", "tables", "sane_lists", "nl2br"]
    article_html = markdown.markdown(blog_markdown, extensions=extensions)
    stats_html = ""
    if stats is not None and stats.total_commits:
        stats_html = markdown.markdown(format_commit_stats(stats), extensions=extensions)

    template_context = {
        "title": title or f"블로그 미리보기 - {datetime.now().strftime('%Y-%m-%d')}",
        "generation_time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "css_content": _get_css_styles(global_config),
        "article_html": article_html,
        "stats_html": stats_html,
    }

    template = env.get_template(global_config.HTML_PREVIEW_TEMPLATE)
    logger.info(f"🎨 正在渲染 Jinja2 模板: {global_config.HTML_PREVIEW_TEMPLATE}")
    return template.render(**template_context)


def save_html_preview(html_content: str, markdown_path: str) -> str:
    """把 HTML 预览保存在 Markdown 文件旁边，返回绝对路径"""
    base, _ = os.path.splitext(os.path.abspath(markdown_path))
    full_path = f"{base}.html"
    with open(full_path, "w", encoding="utf-8") as f:
        f.write(html_content)
    logger.info(f"✅ HTML 预览已保存: {full_path}")
    return full_path


def list_authors(stats: CommitStats) -> List[str]:
    """按提交数降序返回作者名"""
    return [
        author
        for author, _ in sorted(
            stats.authors.items(), key=lambda item: item[1], reverse=True
        )
    ]
