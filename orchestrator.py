# orchestrator.py
"""
[V1.2] 业务逻辑编排器
- 提取提交 -> 统计 -> (预览 | 仅统计 | 生成文章) -> 保存
- 所有 VelogWriterError 向上抛给 cli 层统一处理
"""
import logging
import os
from typing import List, Optional

from context import RunContext
from errors import GitError
from models import CommitRecord, CommitStats
from blog_generator import BlogGenerator
import commit_analyzer
import git_utils
import markdown_composer
import report_builder
import utils
import velog_fetcher

logger = logging.getLogger(__name__)


class BlogOrchestrator:
    """
    (V1.0) 负责执行文章生成的核心业务流程。
    """

    def __init__(self, context: RunContext):
        self.context = context
        self.global_config = context.global_config
        logger.info("✅ BlogOrchestrator 已初始化")

    def _fetch_commits(self) -> List[CommitRecord]:
        return git_utils.get_git_commits(
            self.context.repo_path,
            self.context.days,
            self.context.git_options,
            timeout=self.global_config.GIT_TIMEOUT_SECONDS,
            max_output=self.global_config.GIT_MAX_OUTPUT_BYTES,
        )

    def _fetch_timestamps(self) -> Optional[List[str]]:
        # 时间分布只是附加统计，取不到时不影响主流程
        try:
            return git_utils.get_commit_timestamps(
                self.context.repo_path, self.context.days, self.context.git_options
            )
        except GitError as e:
            logger.warning(f"⚠️ 获取提交时间失败，跳过时间段统计: {e.message}")
            return None

    def _resolve_output_path(self) -> str:
        if self.context.output_path:
            return self.context.output_path
        return os.path.join(
            os.getcwd(),
            markdown_composer.generate_date_based_filename(
                self.global_config.OUTPUT_FILENAME_PREFIX
            ),
        )

    def _write(self, content: str) -> str:
        output_path = self._resolve_output_path()
        if self.context.append and os.path.exists(output_path):
            return markdown_composer.append_to_existing_post(output_path, content)
        if self.context.append:
            logger.warning(f"⚠️ 文件 {output_path} 不存在，将新建文件")
        return markdown_composer.save_to_blog_file(content, output_path)

    def _generate_post(self, commits: List[CommitRecord], stats: CommitStats) -> str:
        settings = self.context.settings
        style_guide = None
        if settings.example_urls:
            logger.info(f"🔎 正在分析 {len(settings.example_urls)} 篇示例文章的风格...")
            style_guide = velog_fetcher.build_style_guide(settings.example_urls)
            if not style_guide:
                logger.warning("⚠️ 所有示例文章均抓取失败，将不使用风格参考")

        generator = BlogGenerator(self.context.llm_id, self.global_config, settings)
        if settings.template == "quick":
            return generator.generate_quick_summary(commits, stats)
        return generator.generate_blog_post(commits, stats, style_guide)

    def run(self) -> Optional[str]:
        """
        执行核心业务流程，返回写入的文件路径 (预览模式或没有提交时返回 None)。
        """
        # --- 1. 获取 Git 数据 ---
        commits = self._fetch_commits()
        if not commits:
            logger.warning(f"⚠️ 最近 {self.context.days} 天内没有可用的提交，结束运行。")
            return None

        # --- 2. 统计 ---
        stats = commit_analyzer.analyze_commit_stats(
            commits,
            self.global_config.LARGE_COMMIT_THRESHOLD,
            timestamps=self._fetch_timestamps(),
        )
        stats_markdown = report_builder.format_commit_stats(stats)

        # --- 3. 预览模式 ---
        if self.context.preview_only:
            print(report_builder.generate_text_report(commits, self.context.days))
            print()
            print(stats_markdown)
            return None

        # --- 4. 生成内容 ---
        if self.context.stats_only:
            body = stats_markdown
        else:
            body = self._generate_post(commits, stats)

        content = body
        if self.context.tags:
            content = markdown_composer.add_velog_metadata(body, self.context.tags)

        # --- 5. 保存 ---
        saved_path = self._write(content)

        # --- 6. HTML 预览 ---
        if self.context.html_preview or self.context.open_browser:
            html_content = report_builder.generate_html_preview(
                body,
                None if self.context.stats_only else stats,
                self.global_config,
            )
            html_path = report_builder.save_html_preview(html_content, saved_path)
            if self.context.open_browser:
                utils.open_report_in_browser(html_path)

        logger.info(f"🎉 完成! 作者: {', '.join(report_builder.list_authors(stats))}")
        return saved_path
