# config_manager.py
"""
[V1.1] 项目配置管理器
- 负责处理项目级默认配置 (data/<Project>/config.json)
- 包含一个交互式向导 (run_interactive_config_wizard)
"""

import os
import json
import logging
from typing import Dict, Any

from config import GlobalConfig

logger = logging.getLogger(__name__)

CONFIG_JSON_FILE = "config.json"


def load_project_config(project_data_path: str) -> Dict[str, Any]:
    """加载特定项目的配置文件 (data/<Project>/config.json)"""
    config_path = os.path.join(project_data_path, CONFIG_JSON_FILE)
    if not os.path.exists(config_path):
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"❌ 加载项目配置 {config_path} 失败: {e}")
        return {}


def save_project_config(project_data_path: str, config_data: Dict[str, Any]):
    """保存特定项目的配置文件 (data/<Project>/config.json)"""
    config_path = os.path.join(project_data_path, CONFIG_JSON_FILE)
    try:
        os.makedirs(project_data_path, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_data, f, indent=4, ensure_ascii=False)
    except OSError as e:
        logger.error(f"❌ 保存项目配置 {config_path} 失败: {e}")


def get_project_data_path(data_root_path: str, repo_path: str) -> str:
    """辅助函数：根据仓库路径获取其数据存储路径"""
    repo_path_abs = os.path.abspath(repo_path)
    project_name = os.path.basename(repo_path_abs) or "current_dir_project"
    return os.path.join(data_root_path, project_name)


def _input_with_default(prompt: str, default: str) -> str:
    """辅助函数：获取带默认值的用户输入"""
    return input(f"{prompt} [{default}]: ") or default


def _split_list(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("y", "yes", "true", "1")


def run_interactive_config_wizard(data_root_path: str, repo_path: str):
    """
    (V1.1) 运行交互式配置向导
    """
    logger.info("--- 🚀 欢迎使用 Velog 博客生成器配置向导 ---")
    repo_path_abs = os.path.abspath(repo_path)
    if not os.path.isdir(repo_path_abs):
        logger.error(f"路径 {repo_path_abs} 不是一个有效的目录。")
        return

    project_data_path = get_project_data_path(data_root_path, repo_path_abs)
    current_config = load_project_config(project_data_path)

    logger.info(f"  [目标仓库]: {repo_path_abs}")
    logger.info(f"  [数据目录]: {project_data_path}")

    print("\n--- 项目默认值配置 ---")
    print("  (提示：保留默认值或直接按 Enter 键跳过)")
    config_data: Dict[str, Any] = {}

    days_str = _input_with_default(
        "  默认统计天数",
        str(current_config.get("default_days", GlobalConfig.DEFAULT_DAYS)),
    )
    try:
        config_data["default_days"] = int(days_str)
    except ValueError:
        logger.warning(f"⚠️ 无效的天数 '{days_str}'，使用默认值 {GlobalConfig.DEFAULT_DAYS}")
        config_data["default_days"] = GlobalConfig.DEFAULT_DAYS

    config_data["default_llm"] = _input_with_default(
        "  默认 LLM (gemini, deepseek, ollama, mock)",
        current_config.get("default_llm", GlobalConfig.DEFAULT_LLM),
    )
    config_data["default_template"] = _input_with_default(
        "  默认文章模板 (velog, weekly, quick)",
        current_config.get("default_template", GlobalConfig.DEFAULT_TEMPLATE),
    )
    config_data["custom_prompt"] = (
        _input_with_default(
            "  自定义开场提示词 (留空则使用默认)",
            current_config.get("custom_prompt") or "",
        )
        or None
    )

    # 列表类配置以逗号分隔的字符串编辑
    urls_str = _input_with_default(
        "  示例 Velog 文章 URL (多个请用逗号,分隔)",
        ", ".join(current_config.get("example_urls", [])),
    )
    config_data["example_urls"] = _split_list(urls_str)

    include_stats_str = _input_with_default(
        "  在提示词中附带统计 (y/n)",
        "y" if current_config.get("include_stats") else "n",
    )
    config_data["include_stats"] = _parse_bool(include_stats_str)

    tags_str = _input_with_default(
        "  默认标签 (多个请用逗号,分隔)", ", ".join(current_config.get("tags", []))
    )
    config_data["tags"] = _split_list(tags_str)

    save_project_config(project_data_path, config_data)
    logger.info(f"✅ 项目配置已保存至 {project_data_path}/{CONFIG_JSON_FILE}")

    print("\n--- ✅ 配置完成！ ---")
    print(f"  现在你可以使用 'python VelogWriter.py -r {repo_path_abs}' 来生成文章。")
