# config.py
"""
[V1.0] 全局配置
[V1.2] 新增 Git 提取的超时 / 输出上限配置
"""
import os
from dotenv import load_dotenv


# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))
env_path = os.path.join(SCRIPT_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    print(f"✅ 已从脚本目录加载 .env: {env_path}")
else:
    load_dotenv()


class GlobalConfig:
    """
    (V1.0) Velog 博客生成器的全局应用配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    DATA_ROOT_DIR_NAME: str = "data"
    PROMPTS_DIR_NAME: str = "prompts"
    TEMPLATES_DIR_NAME: str = "templates"

    # --- Git 提取 ---
    # 头部字段分隔符: ASCII Unit Separator，不会出现在提交标题/作者名/日期中
    GIT_FIELD_SEPARATOR: str = "\x1f"
    DEFAULT_DAYS: int = 7
    GIT_TIMEOUT_SECONDS: float = 15
    GIT_MAX_OUTPUT_BYTES: int = 10 * 1024 * 1024

    # --- 统计 ---
    LARGE_COMMIT_THRESHOLD: int = 200

    # --- 文件名 ---
    OUTPUT_FILENAME_PREFIX: str = "blog-post"
    HTML_PREVIEW_TEMPLATE: str = "preview.html.j2"

    # --- 文章风格 ---
    DEFAULT_TEMPLATE: str = "velog"

    # --- Velog 示例文章抓取 ---
    VELOG_FETCH_TIMEOUT_SECONDS: float = 10
    VELOG_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    )

    # =================================================================
    # --- AI 供应商配置 ---
    # =================================================================

    # 1. 供应商 API 密钥
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    DEEPSEEK_API_KEY: str = os.getenv("DEEPSEEK_API_KEY", "")

    # 2. 供应商特定配置
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com"
    OLLAMA_BASE_URL: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/v1")
    OLLAMA_MODEL: str = os.getenv("OLLAMA_MODEL", "qwen2.5:7b")

    # 3. 应用程序默认值
    DEFAULT_LLM: str = os.getenv("DEFAULT_LLM", "gemini").lower()

    # 4. 供应商的默认模型
    DEFAULT_MODEL_GEMINI: str = "gemini-2.5-flash"
    DEFAULT_MODEL_DEEPSEEK: str = "deepseek-chat"

    # 不需要 API Key 的供应商
    KEYLESS_PROVIDERS = ("mock", "ollama")

    def get_api_key(self, provider: str) -> str:
        """返回环境中为该供应商配置的 API 密钥 (可能为空字符串)"""
        if provider == "gemini":
            return self.GEMINI_API_KEY
        if provider == "deepseek":
            return self.DEEPSEEK_API_KEY
        return ""

    def is_provider_configured(self, provider: str) -> bool:
        """
        检查特定供应商是否可以直接使用 (已设置 API 密钥或无需密钥)。
        """
        if provider in self.KEYLESS_PROVIDERS:
            return True
        return bool(self.get_api_key(provider))
