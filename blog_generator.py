# blog_generator.py
"""
[V1.1] 博客文章生成服务
- 供应商注册表 + 动态加载 (llm/ 目录)
- BlogGenerator: 组装提示词，单次调用 LLM，清洗输出
"""
import dataclasses
import importlib
import logging
import os
import re
from typing import Optional, Sequence

from config import GlobalConfig
from context import GenerationSettings
from errors import AIGenerationError, ApiKeyError, ValidationError
from llm.provider_abc import LLMProvider, PROVIDER_REGISTRY
from models import CommitRecord, CommitStats
import prompt_builder

logger = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^```(markdown|md)?\s*\n", re.IGNORECASE)


# --- 动态加载器 ---
def load_providers_dynamically(script_base_path: str):
    """
    扫描 llm/ 目录下的所有 .py 文件并导入它们。
    这将触发 @register_provider 装饰器，将类注册到 PROVIDER_REGISTRY 中。
    """
    llm_dir = os.path.join(script_base_path, "llm")
    if not os.path.exists(llm_dir):
        logger.warning(f"⚠️ 未找到 llm 目录: {llm_dir}")
        return

    for filename in sorted(os.listdir(llm_dir)):
        if (
            filename.endswith(".py")
            and filename != "__init__.py"
            and filename != "provider_abc.py"
        ):
            module_name = f"llm.{filename[:-3]}"
            try:
                importlib.import_module(module_name)
            except ImportError as e:
                logger.error(f"❌ 动态加载模块 {module_name} 失败: {e}")


def get_llm_provider(
    provider_id: str, global_config: GlobalConfig, api_key: Optional[str] = None
) -> LLMProvider:
    """
    工厂函数：基于 Registry Pattern 实现，从 PROVIDER_REGISTRY 查找并实例化。
    """
    logger.info(f"ℹ️ 正在初始化 LLM 供应商: {provider_id}")

    load_providers_dynamically(global_config.SCRIPT_BASE_PATH)

    if provider_id not in PROVIDER_REGISTRY:
        logger.error(f"❌ 未知的 LLM 供应商: '{provider_id}'")
        logger.error(f"   可用供应商: {sorted(PROVIDER_REGISTRY.keys())}")
        raise ValidationError(f"未知的 LLM 供应商: {provider_id}", field="llm")

    if not api_key and not global_config.is_provider_configured(provider_id):
        logger.error(f"❌ 供应商 '{provider_id}' 未配置 API Key。")
        raise ApiKeyError(
            f"供应商 '{provider_id}' 未配置 API 密钥。"
            f"请在 .env 文件中设置，或通过 --api-key 传入。"
        )

    provider_class = PROVIDER_REGISTRY[provider_id]
    return provider_class(global_config, api_key=api_key)


def clean_markdown_output(text: str) -> str:
    """
    去除 LLM 可能输出的 Markdown 代码块包裹 (```markdown ... ```)
    """
    if not text:
        return text

    cleaned = text.strip()
    if _FENCE_START.match(cleaned):
        cleaned = _FENCE_START.sub("", cleaned, count=1)
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
    return cleaned.strip()


class BlogGenerator:
    """
    (V1.1) 封装所有对 LLM 的调用。
    不做重试：一次失败即抛出 AIGenerationError，原始错误信息原样附带。
    """

    def __init__(
        self,
        provider_id: str,
        global_config: GlobalConfig,
        settings: Optional[GenerationSettings] = None,
        provider: Optional[LLMProvider] = None,
    ):
        self.global_config = global_config
        self.settings = settings or GenerationSettings()
        self.provider: LLMProvider = provider or get_llm_provider(
            provider_id, global_config, api_key=self.settings.api_key
        )
        logger.info(
            f"✅ 🤖 生成服务已初始化 (Provider: {self.provider.__class__.__name__})"
        )

    def _generate(self, prompt: str) -> str:
        try:
            text = self.provider.generate(prompt)
        except Exception as e:
            logger.error(f"❌ 生成内容失败: {e}")
            raise AIGenerationError(f"AI 生成失败: {e}", e) from e
        return clean_markdown_output(text)

    def build_prompt(
        self,
        commits: Sequence[CommitRecord],
        stats: CommitStats,
        style_guide: Optional[str] = None,
        template: Optional[str] = None,
    ) -> str:
        settings = self.settings
        if template and template != settings.template:
            settings = dataclasses.replace(settings, template=template)
        return prompt_builder.build_blog_prompt(
            commits,
            stats,
            settings,
            style_guide=style_guide,
            global_config=self.global_config,
        )

    def generate_blog_post(
        self,
        commits: Sequence[CommitRecord],
        stats: CommitStats,
        style_guide: Optional[str] = None,
    ) -> str:
        logger.info(f"🤖 正在生成博客文章 (模板: {self.settings.template})...")
        prompt = self.build_prompt(commits, stats, style_guide)
        return self._generate(prompt)

    def generate_quick_summary(
        self, commits: Sequence[CommitRecord], stats: CommitStats
    ) -> str:
        logger.info("🤖 正在生成快速摘要...")
        prompt = self.build_prompt(commits, stats, template="quick")
        return self._generate(prompt)
