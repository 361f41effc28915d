# llm/mock_provider.py
"""
一个模拟的 LLM 供应商
不进行任何网络调用，用于测试和离线演示。
"""
import logging
from typing import List, Optional

from llm.provider_abc import LLMProvider, register_provider
from config import GlobalConfig

logger = logging.getLogger(__name__)


@register_provider("mock")
class MockProvider(LLMProvider):
    """
    模拟的 Provider，仅返回固定格式的 Markdown，并记录收到的提示词。
    """

    def __init__(self, global_config: GlobalConfig, api_key: Optional[str] = None):
        self.global_config = global_config
        self.prompts: List[str] = []
        logger.info("✅ MockProvider 已初始化 (无需 API Key)")

    def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        return (
            "```markdown\n"
            "# [Mock] 🧪 테스트 블로그 글\n\n"
            "MockProvider가 생성한 테스트 글이에요.\n\n"
            f"- 프롬프트 길이: {len(prompt)}자\n"
            "```"
        )
