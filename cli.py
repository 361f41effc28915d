# cli.py
"""
[V1.1] 命令行界面 (Interface) 层
- 参数优先级: 命令行 > 项目 config.json > 全局 config.py
- --llm 不限制 choices，支持动态注册的供应商
"""
import argparse
import logging
import sys
import os
from typing import Any, Dict, List, Optional

import config_manager
from config import GlobalConfig
from context import GenerationSettings, RunContext
from errors import VelogWriterError, get_error_message
from models import GitLogOptions
from orchestrator import BlogOrchestrator

logger = logging.getLogger(__name__)

TEMPLATE_CHOICES = ["velog", "weekly", "quick"]


def setup_parser() -> argparse.ArgumentParser:
    """
    负责所有 argparse 的定义。
    """
    parser = argparse.ArgumentParser(
        description="Git 提交记录 -> Velog 博客文章生成器",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--configure",
        action="store_true",
        help="运行交互式配置向导。\n   (配置 -r 指定的仓库，默认当前目录)",
    )

    # --- Git 范围参数 ---
    parser.add_argument(
        "-r",
        "--repo-path",
        type=str,
        default=None,
        help="指定要分析的 Git 仓库路径。\n(默认: 当前目录)",
    )
    parser.add_argument(
        "-d",
        "--days",
        type=int,
        default=None,
        help="统计最近 N 天的提交。\n(默认: 项目配置或 7)",
    )
    parser.add_argument("--path", type=str, default=None, help="只统计该路径下的改动")
    parser.add_argument("--author", type=str, default=None, help="只统计该作者的提交")
    parser.add_argument("--branch", type=str, default=None, help="指定分支 (默认: HEAD)")
    parser.add_argument(
        "-n", "--max-commits", type=int, default=None, help="最多读取 N 个提交"
    )
    parser.add_argument(
        "--no-files",
        action="store_true",
        help="不收集每个提交的文件列表 (文件类型统计将为空)",
    )

    # --- 运行模式 ---
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--preview", action="store_true", help="只在终端预览提交和统计，不生成文章"
    )
    mode_group.add_argument(
        "--stats-only",
        action="store_true",
        help="只输出 Markdown 统计报告，不调用 LLM",
    )

    # --- AI 与文章参数 ---
    parser.add_argument(
        "--llm",
        type=str,
        default=None,
        help="(覆盖) 指定要使用的 LLM 供应商 (例如 'gemini', 'deepseek', 'ollama', 'mock')。\n"
        "(默认: 使用项目 config.json 或全局 config.py 中的设置)",
    )
    parser.add_argument("--api-key", type=str, default=None, help="(覆盖) API 密钥")
    parser.add_argument(
        "--template",
        type=str,
        choices=TEMPLATE_CHOICES,
        default=None,
        help="文章模板。\n(默认: 使用项目 config.json 中的设置或 velog)",
    )
    parser.add_argument(
        "--custom-prompt", type=str, default=None, help="替换默认的开场提示词"
    )
    parser.add_argument(
        "--example-url",
        action="append",
        default=None,
        help="参考风格的 Velog 文章 URL (可重复使用)",
    )
    parser.add_argument(
        "--include-stats", action="store_true", help="在提示词中附带提交统计"
    )
    parser.add_argument(
        "--tags", type=str, default=None, help="文章标签 (多个请用逗号,分隔)"
    )

    # --- 输出参数 ---
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="输出文件路径。\n(默认: 当前目录下的 blog-post-YYYY-MM-DD.md)",
    )
    parser.add_argument(
        "--append", action="store_true", help="追加到已有文章 (以 --- 分隔)"
    )
    parser.add_argument("--html", action="store_true", help="同时生成 HTML 预览")
    parser.add_argument(
        "--open", action="store_true", help="生成 HTML 预览并在浏览器中打开"
    )

    return parser


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_run_context(
    args: argparse.Namespace,
    project_config: Dict[str, Any],
    repo_path: str,
    project_data_path: str,
    global_config: GlobalConfig,
) -> RunContext:
    """
    合并命令行参数、项目配置和全局配置，组装 RunContext。
    """
    days = args.days
    if days is None:
        days = project_config.get("default_days", global_config.DEFAULT_DAYS)

    llm_id = args.llm or project_config.get("default_llm") or global_config.DEFAULT_LLM
    template = (
        args.template
        or project_config.get("default_template")
        or global_config.DEFAULT_TEMPLATE
    )
    example_urls = args.example_url or project_config.get("example_urls", [])
    tags = _split_list(args.tags) if args.tags else project_config.get("tags", [])

    settings = GenerationSettings(
        api_key=args.api_key,
        custom_prompt=args.custom_prompt or project_config.get("custom_prompt"),
        example_urls=list(example_urls),
        template=template,
        include_stats=args.include_stats or bool(project_config.get("include_stats")),
    )
    git_options = GitLogOptions(
        path_filter=args.path,
        author=args.author,
        branch=args.branch,
        max_commits=args.max_commits,
        include_files=not args.no_files,
    )

    return RunContext(
        repo_path=repo_path,
        project_data_path=project_data_path,
        days=days,
        git_options=git_options,
        llm_id=llm_id.lower(),
        settings=settings,
        output_path=args.output,
        tags=list(tags),
        append=args.append,
        preview_only=args.preview,
        stats_only=args.stats_only,
        html_preview=args.html,
        open_browser=args.open,
        global_config=global_config,
    )


def run_cli(argv: Optional[List[str]] = None):
    """
    主入口点。
    """

    # 1. 解析 Args
    parser = setup_parser()
    args = parser.parse_args(argv)

    # 2. 加载 GlobalConfig 和 Data Root
    global_config = GlobalConfig()
    data_root_path = os.path.join(
        global_config.SCRIPT_BASE_PATH, global_config.DATA_ROOT_DIR_NAME
    )
    repo_path = os.path.abspath(args.repo_path or os.getcwd())

    # 3. 处理特殊模式：--configure
    if args.configure:
        logger.info(f"⚙️ 启动交互式配置向导: {repo_path}")
        config_manager.run_interactive_config_wizard(data_root_path, repo_path)
        sys.exit(0)

    # 4. 加载项目配置
    project_data_path = config_manager.get_project_data_path(data_root_path, repo_path)
    project_config = config_manager.load_project_config(project_data_path)

    # 5. 组装 RunContext
    logger.info("⚙️ 正在合并配置并组装 RunContext...")
    run_context = build_run_context(
        args, project_config, repo_path, project_data_path, global_config
    )

    logger.info("=" * 50)
    logger.info("🚀 Velog 博客生成器启动...")
    logger.info(f"   [目标仓库]: {run_context.repo_path}")
    logger.info(f"   [时间范围]: 最近 {run_context.days} 天")
    logger.info(f"   [LLM 供应商]: {run_context.llm_id}")
    logger.info(f"   [文章模板]: {run_context.settings.template}")
    logger.info("=" * 50)

    # 6. 运行 Orchestrator
    try:
        output_path = BlogOrchestrator(run_context).run()
    except VelogWriterError as e:
        logger.error(f"❌ {get_error_message(e)}")
        sys.exit(1)

    if output_path:
        logger.info(f"✅ 输出文件: {output_path}")
    logger.info("✅ Orchestrator 运行完毕。")
