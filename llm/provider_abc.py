# llm/provider_abc.py
"""
[V1.0] 所有 LLM 供应商的抽象基类 (ABC)。
- Registry Pattern: 供应商通过 @register_provider 自动注册
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

# 全局注册表，存储 "provider_id" -> Provider Class 的映射
PROVIDER_REGISTRY: Dict[str, Type["LLMProvider"]] = {}


def register_provider(provider_id: str):
    """
    类装饰器：用于将具体的 Provider 实现类注册到全局注册表中。

    使用示例:
        @register_provider("gemini")
        class GeminiProvider(LLMProvider):
            ...
    """

    def decorator(cls):
        if provider_id in PROVIDER_REGISTRY and PROVIDER_REGISTRY[provider_id] is not cls:
            raise ValueError(
                f"Provider id '{provider_id}' 已经被注册过 ({PROVIDER_REGISTRY[provider_id].__name__})"
            )
        PROVIDER_REGISTRY[provider_id] = cls
        cls.provider_id = provider_id
        return cls

    return decorator


class LLMProvider(ABC):
    """
    LLM 供应商的抽象接口。
    每次调用只请求一次，失败时直接抛出原始异常，由 BlogGenerator 统一包装。
    """

    provider_id: str = ""

    @abstractmethod
    def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        """发送完整提示词并返回生成的文本"""
        pass
