# test_registry.py
import unittest
import os
import logging
from unittest import mock

# 导入核心模块
from config import GlobalConfig
from context import GenerationSettings
from errors import AIGenerationError, ApiKeyError, ValidationError
from blog_generator import (
    BlogGenerator,
    clean_markdown_output,
    get_llm_provider,
    load_providers_dynamically,
)
from llm.provider_abc import LLMProvider, PROVIDER_REGISTRY, register_provider
from models import CommitRecord
import commit_analyzer

# 配置日志输出以便观察
logging.basicConfig(level=logging.INFO)


class TestRegistry(unittest.TestCase):

    def setUp(self):
        self.config = GlobalConfig()
        # 确保脚本路径正确，以便 scanner 能找到 llm/ 目录
        self.config.SCRIPT_BASE_PATH = os.path.dirname(os.path.abspath(__file__))
        self.config.GEMINI_API_KEY = ""
        self.config.DEEPSEEK_API_KEY = ""

    def test_dynamic_discovery(self):
        """测试是否能自动扫描到 llm/ 下的所有供应商"""
        print("\n>>> 测试动态发现机制...")
        load_providers_dynamically(self.config.SCRIPT_BASE_PATH)
        print(f"当前注册表内容: {list(PROVIDER_REGISTRY.keys())}")

        for provider_id in ("mock", "gemini", "deepseek", "ollama"):
            self.assertIn(provider_id, PROVIDER_REGISTRY, f"❌ '{provider_id}' 未被自动注册！")

    def test_mock_needs_no_key(self):
        provider = get_llm_provider("mock", self.config)
        self.assertEqual(provider.provider_id, "mock")
        self.assertIn("[Mock]", provider.generate("hello"))

    def test_missing_key(self):
        with self.assertRaises(ApiKeyError):
            get_llm_provider("gemini", self.config)
        with self.assertRaises(ApiKeyError):
            get_llm_provider("deepseek", self.config)

    def test_unknown_provider(self):
        with self.assertRaises(ValidationError) as ctx:
            get_llm_provider("nope", self.config)
        self.assertEqual(ctx.exception.field, "llm")

    def test_duplicate_registration(self):
        load_providers_dynamically(self.config.SCRIPT_BASE_PATH)
        with self.assertRaises(ValueError):

            @register_provider("mock")
            class AnotherMock(LLMProvider):
                def generate(self, prompt, model_name=None):
                    return ""


class FailingProvider(LLMProvider):
    def generate(self, prompt, model_name=None):
        raise RuntimeError("quota exceeded")


class TestBlogGenerator(unittest.TestCase):

    def setUp(self):
        self.config = GlobalConfig()
        self.config.SCRIPT_BASE_PATH = os.path.dirname(os.path.abspath(__file__))
        self.commits = [
            CommitRecord("aaa1111", "fix: null pointer", "Kim", "2024-01-01", 10, 2, ("a.ts",)),
        ]
        self.stats = commit_analyzer.analyze_commit_stats(self.commits)

    def test_generate_blog_post_strips_fence(self):
        generator = BlogGenerator(
            "mock", self.config, GenerationSettings(custom_prompt="역할 설명")
        )
        post = generator.generate_blog_post(self.commits, self.stats, "스타일 가이드")

        self.assertTrue(post.startswith("# [Mock]"))
        self.assertFalse(post.endswith("```"))
        # 每次生成只调用一次供应商
        self.assertEqual(len(generator.provider.prompts), 1)
        self.assertTrue(generator.provider.prompts[0].startswith("역할 설명"))
        self.assertIn("스타일 가이드", generator.provider.prompts[0])

    def test_quick_summary_uses_quick_template(self):
        generator = BlogGenerator("mock", self.config)
        generator.generate_quick_summary(self.commits, self.stats)
        self.assertIn("3-5문장", generator.provider.prompts[0])
        self.assertEqual(generator.settings.template, "velog")

    def test_provider_error_is_wrapped(self):
        generator = BlogGenerator("unused", self.config, provider=FailingProvider())
        with self.assertRaises(AIGenerationError) as ctx:
            generator.generate_blog_post(self.commits, self.stats)
        self.assertIn("quota exceeded", ctx.exception.message)
        self.assertIsInstance(ctx.exception.original_error, RuntimeError)

    def test_api_key_from_settings(self):
        with mock.patch("llm.gemini_provider.genai.Client") as mock_client:
            BlogGenerator("gemini", self.config, GenerationSettings(api_key="k-123"))
        mock_client.assert_called_once_with(api_key="k-123")


class TestCleanMarkdownOutput(unittest.TestCase):
    def test_fence_variants(self):
        self.assertEqual(clean_markdown_output("```markdown\n# A\n```"), "# A")
        self.assertEqual(clean_markdown_output("```md\n# A\n```"), "# A")
        self.assertEqual(clean_markdown_output("```\n# A\n```"), "# A")
        self.assertEqual(clean_markdown_output("  # A  "), "# A")
        self.assertEqual(clean_markdown_output(""), "")

    def test_inner_code_blocks_are_kept(self):
        text = "# A\n\n```python\nprint(1)\n```"
        self.assertEqual(clean_markdown_output(text), text)


if __name__ == "__main__":
    unittest.main()
