# llm/ollama_provider.py
import logging
from typing import Optional

# 复用 openai 库，因为 Ollama 兼容 OpenAI 的接口格式
from openai import OpenAI

from llm.provider_abc import LLMProvider, register_provider
from llm.deepseek_provider import SYSTEM_PROMPT
from config import GlobalConfig

logger = logging.getLogger(__name__)


@register_provider("ollama")
class OllamaProvider(LLMProvider):
    """
    Ollama 本地大模型策略实现。
    通过 OpenAI 兼容接口连接本地 Ollama 服务，无需 API Key。
    """

    def __init__(self, global_config: GlobalConfig, api_key: Optional[str] = None):
        self.global_config = global_config
        self.base_url = global_config.OLLAMA_BASE_URL
        self.model_name = global_config.OLLAMA_MODEL

        self.client = OpenAI(
            base_url=self.base_url,
            api_key=api_key or "ollama",  # Ollama 不校验 Key，但库要求必填
        )
        logger.info(
            f"✅ OllamaProvider 初始化成功 (模型: {self.model_name}, 地址: {self.base_url})"
        )

    def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        response = self.client.chat.completions.create(
            model=model_name or self.model_name,
            messages=messages,
            temperature=0.7,
        )
        if response.choices and response.choices[0].message.content:
            return response.choices[0].message.content.strip()
        raise RuntimeError("未从 Ollama 收到内容")
