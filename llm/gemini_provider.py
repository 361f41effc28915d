# llm/gemini_provider.py
"""
[V1.0] LLMProvider 针对 Google Gemini 的具体实现。
"""
import logging
from typing import Optional

from google import genai

from llm.provider_abc import LLMProvider, register_provider
from config import GlobalConfig
from errors import ApiKeyError

logger = logging.getLogger(__name__)


@register_provider("gemini")
class GeminiProvider(LLMProvider):
    """
    Gemini 策略实现 (genai.Client)。
    """

    def __init__(self, global_config: GlobalConfig, api_key: Optional[str] = None):
        self.global_config = global_config
        api_key = api_key or self.global_config.GEMINI_API_KEY
        if not api_key:
            logger.error("❌ GEMINI_API_KEY 未设置。请检查您的 .env 文件或使用 --api-key。")
            raise ApiKeyError("Gemini API 密钥未设置。")

        self.client = genai.Client(api_key=api_key)
        self.default_model = self.global_config.DEFAULT_MODEL_GEMINI
        logger.info(f"✅ GeminiProvider 初始化成功 (模型: {self.default_model})")

    def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        model_to_use = model_name or self.default_model
        response = self.client.models.generate_content(
            model=f"models/{model_to_use}", contents=prompt
        )
        if not response or not response.text:
            raise RuntimeError("API 调用成功，但回复内容为空")
        return response.text
