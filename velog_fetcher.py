# velog_fetcher.py
"""
[V1.2] Velog 示例文章抓取与风格分析
- fetch_velog_post: 抓取单篇文章 (标题 + 正文)
- analyze_post_style: 从多篇文章中提取写作风格特征
- style_to_prompt: 把风格特征转换为提示词片段
"""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import requests

from config import GlobalConfig
from errors import VelogFetchError

logger = logging.getLogger(__name__)

VELOG_URL_PATTERN = re.compile(r"velog\.io/@[\w-]+/[\w-]+")
USERNAME_PATTERN = re.compile(r"@([\w-]+)/")

OG_TITLE_PATTERN = re.compile(r'<meta property="og:title" content="([^"]+)"')
OG_DESCRIPTION_PATTERN = re.compile(r'<meta property="og:description" content="([^"]+)"')
NEXT_DATA_PATTERN = re.compile(
    r'<script id="__NEXT_DATA__" type="application/json">(.+?)</script>', re.DOTALL
)
ARTICLE_PATTERN = re.compile(r"<article[^>]*>([\s\S]*?)</article>")
SCRIPT_TAG_PATTERN = re.compile(r"<script\b[^>]*>[\s\S]*?</script>", re.IGNORECASE)
STYLE_TAG_PATTERN = re.compile(r"<style\b[^>]*>[\s\S]*?</style>", re.IGNORECASE)
HTML_TAG_PATTERN = re.compile(r"<[^>]+>")

EMOJI_PATTERN = re.compile("[\U0001F300-\U0001F9FF\u2600-\u26FF\u2700-\u27BF]")
SECTION_SPLIT_PATTERN = re.compile(r"^#{1,6}\s", re.MULTILINE)
CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```")
HEADING_PATTERN = re.compile(r"^#{1,6}", re.MULTILINE)

COMMON_EXPRESSIONS = [
    "이번 주", "저번 주", "이번에는", "오늘은",
    "배웠습니다", "공부했습니다", "구현했습니다", "개발했습니다",
    "느낀 점", "배운 점", "다음 계획", "앞으로",
    "💡", "🚀", "✨", "🔥", "💻", "📚", "🎯", "🐛",
]

EXCERPT_LENGTH = 500


@dataclass
class VelogPost:
    title: str
    content: str
    url: str


@dataclass
class PostStyle:
    has_emoji: bool = False
    average_section_length: int = 0
    code_block_count: int = 0
    heading_levels: List[int] = field(default_factory=list)
    common_phrases: List[str] = field(default_factory=list)
    tone_analysis: str = "전문적이고 객관적인"


def _extract_content(html: str) -> str:
    # 1. __NEXT_DATA__ 中的 JSON
    script_match = NEXT_DATA_PATTERN.search(html)
    if script_match:
        try:
            data = json.loads(script_match.group(1))
            body = (
                data.get("props", {}).get("pageProps", {}).get("post", {}).get("body")
            )
            if body:
                return body
        except (ValueError, AttributeError):
            logger.debug("__NEXT_DATA__ 解析失败，尝试下一种方式")

    # 2. og:description
    desc_match = OG_DESCRIPTION_PATTERN.search(html)
    if desc_match:
        return desc_match.group(1)

    # 3. <article> 纯文本
    article_match = ARTICLE_PATTERN.search(html)
    if article_match:
        text = SCRIPT_TAG_PATTERN.sub("", article_match.group(1))
        text = STYLE_TAG_PATTERN.sub("", text)
        text = HTML_TAG_PATTERN.sub(" ", text)
        return re.sub(r"\s+", " ", text).strip()

    return ""


def fetch_velog_post(
    url: str,
    timeout: float = GlobalConfig.VELOG_FETCH_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
) -> VelogPost:
    """(V1.2) 抓取一篇 Velog 文章，失败时抛出 VelogFetchError"""
    if not VELOG_URL_PATTERN.search(url):
        raise VelogFetchError(
            "올바른 Velog URL 형식이 아닙니다. (예: https://velog.io/@username/post-title)"
        )
    if not USERNAME_PATTERN.search(url) or not url.rstrip("/").split("/")[-1]:
        raise VelogFetchError("URL에서 사용자명 또는 글 제목을 추출할 수 없습니다.")

    http = session or requests
    logger.info(f"🌐 正在抓取示例文章: {url}")
    try:
        response = http.get(
            url,
            headers={"User-Agent": GlobalConfig.VELOG_USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise VelogFetchError(
            "요청 시간이 초과되었습니다. 네트워크 연결을 확인해주세요.", e
        ) from e
    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 404:
            raise VelogFetchError("글을 찾을 수 없습니다. URL을 확인해주세요.", e) from e
        raise VelogFetchError(f"글을 가져오는 중 오류 발생: {e}", e) from e
    except requests.exceptions.RequestException as e:
        raise VelogFetchError(f"글을 가져오는 중 오류 발생: {e}", e) from e

    html = response.text
    title_match = OG_TITLE_PATTERN.search(html)
    title = title_match.group(1) if title_match else ""

    content = _extract_content(html)
    if not content:
        raise VelogFetchError(
            "글 내용을 가져올 수 없습니다. 비공개 글이거나 접근할 수 없는 글일 수 있습니다."
        )

    logger.info(f"✅ 示例文章抓取成功: {title or url}")
    return VelogPost(title=title or "제목 없음", content=content, url=url)


def analyze_post_style(posts: Sequence[VelogPost]) -> PostStyle:
    """从示例文章中提取写作风格特征 (简单启发式)"""
    if not posts:
        return PostStyle()

    posts_with_emoji = 0
    total_sections = 0
    total_section_length = 0
    total_code_blocks = 0
    heading_levels = set()
    phrases: List[str] = []

    for post in posts:
        content = post.content

        if EMOJI_PATTERN.search(content):
            posts_with_emoji += 1

        sections = SECTION_SPLIT_PATTERN.split(content)
        total_sections += len(sections)
        total_section_length += sum(len(section) for section in sections)

        total_code_blocks += len(CODE_BLOCK_PATTERN.findall(content))

        heading_levels.update(len(h) for h in HEADING_PATTERN.findall(content))

        for expr in COMMON_EXPRESSIONS:
            if expr in content and expr not in phrases:
                phrases.append(expr)

    has_emoji = posts_with_emoji > 0
    if has_emoji and len(phrases) > 5:
        tone = "친근하고 개인적인"
    elif has_emoji:
        tone = "캐주얼하면서도 전문적인"
    else:
        tone = "전문적이고 객관적인"

    return PostStyle(
        has_emoji=has_emoji,
        average_section_length=(
            total_section_length // total_sections if total_sections else 0
        ),
        code_block_count=total_code_blocks // len(posts),
        heading_levels=sorted(heading_levels),
        common_phrases=phrases,
        tone_analysis=tone,
    )


def style_to_prompt(style: PostStyle, example_posts: Sequence[VelogPost]) -> str:
    """把风格分析结果转换为提示词片段"""
    examples = "\n".join(
        f"### 예시 글: {post.title}\n{post.content[:EXCERPT_LENGTH]}...\n"
        for post in example_posts
    )
    emoji_usage = (
        "자주 사용함 (각 섹션에 적절히 활용)" if style.has_emoji else "거의 사용하지 않음"
    )
    heading_levels = ", ".join(str(level) for level in style.heading_levels)
    common_phrases = ", ".join(style.common_phrases[:10])

    return f"""
## 📝 작성 스타일 가이드 (기존 글 분석 기반)

작성자의 기존 블로그 글들을 분석한 결과:
- **톤**: {style.tone_analysis} 스타일
- **이모지 사용**: {emoji_usage}
- **평균 섹션 길이**: {style.average_section_length}자 정도
- **코드 블록**: 평균 {style.code_block_count}개 사용
- **헤딩 레벨**: {heading_levels}레벨 주로 사용
- **자주 쓰는 표현**: {common_phrases}

### 예시 글 참고

{examples}

**위 예시 글의 스타일과 톤을 반영하여 새로운 글을 작성해주세요.**
특히 다음을 유지해주세요:
1. 문장의 길이와 리듬
2. 이모지 사용 패턴
3. 섹션 구성 방식
4. 전문성과 친근함의 밸런스
"""


def build_style_guide(urls: Sequence[str]) -> Optional[str]:
    """
    抓取所有示例 URL 并生成风格指南。
    单篇抓取失败只记录警告并跳过；全部失败时返回 None。
    """
    posts: List[VelogPost] = []
    for url in urls:
        try:
            posts.append(fetch_velog_post(url))
        except VelogFetchError as e:
            logger.warning(f"⚠️ 跳过示例文章 {url}: {e.message}")

    if not posts:
        return None
    return style_to_prompt(analyze_post_style(posts), posts)
