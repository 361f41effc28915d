# llm/deepseek_provider.py
"""
[V1.0] LLMProvider 针对 DeepSeek 的具体实现 (OpenAI 兼容接口)。
"""
import logging
from typing import Optional

from openai import OpenAI

from llm.provider_abc import LLMProvider, register_provider
from config import GlobalConfig
from errors import ApiKeyError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "당신은 개발자의 Git 커밋을 바탕으로 기술 블로그 글을 작성하는 도우미입니다."


@register_provider("deepseek")
class DeepSeekProvider(LLMProvider):
    """
    DeepSeek 策略实现 (OpenAI 兼容)。
    """

    def __init__(self, global_config: GlobalConfig, api_key: Optional[str] = None):
        self.global_config = global_config
        api_key = api_key or self.global_config.DEEPSEEK_API_KEY
        if not api_key:
            logger.error("❌ DEEPSEEK_API_KEY 未设置。请检查您的 .env 文件或使用 --api-key。")
            raise ApiKeyError("DeepSeek API 密钥未设置。")

        self.client = OpenAI(
            api_key=api_key,
            base_url=self.global_config.DEEPSEEK_BASE_URL,
        )
        self.default_model = self.global_config.DEFAULT_MODEL_DEEPSEEK
        logger.info(f"✅ DeepSeekProvider 初始化成功 (模型: {self.default_model})")

    def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        response = self.client.chat.completions.create(
            model=model_name or self.default_model, messages=messages
        )
        if response.choices and response.choices[0].message.content:
            return response.choices[0].message.content.strip()
        raise RuntimeError("未从 DeepSeek API 收到内容")
