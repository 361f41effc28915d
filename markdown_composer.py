# markdown_composer.py
"""
[V1.0] 文章输出
负责把生成的 Markdown 写入磁盘，以及 Velog 元数据 (front matter) 的拼装。
"""
import logging
import os
from datetime import datetime
from typing import Optional, Sequence

from config import GlobalConfig

logger = logging.getLogger(__name__)

POST_SEPARATOR = "\n\n---\n\n"


def save_to_blog_file(content: str, output_path: str) -> str:
    """保存文章 (自动创建父目录)，返回绝对路径"""
    full_path = os.path.abspath(output_path)
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    with open(full_path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info(f"✅ 文章已保存: {full_path}")
    return full_path


def append_to_existing_post(existing_path: str, new_content: str) -> str:
    """把新内容追加到已有文章末尾 (以 --- 分隔)"""
    full_path = os.path.abspath(existing_path)
    with open(full_path, "r", encoding="utf-8") as f:
        existing = f.read()
    with open(full_path, "w", encoding="utf-8") as f:
        f.write(existing + POST_SEPARATOR + new_content)
    logger.info(f"✅ 已追加到现有文章: {full_path}")
    return full_path


def generate_date_based_filename(
    prefix: str = GlobalConfig.OUTPUT_FILENAME_PREFIX, now: Optional[datetime] = None
) -> str:
    """例如 blog-post-2024-01-02.md"""
    now = now or datetime.now()
    return f"{prefix}-{now.strftime('%Y-%m-%d')}.md"


def add_velog_metadata(
    content: str,
    tags: Sequence[str] = (),
    is_private: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """在正文前加上 Velog 风格的 front matter"""
    now = now or datetime.now()
    metadata = "\n".join(
        [
            "---",
            f"tags: {', '.join(tags)}",
            f"published: {'false' if is_private else 'true'}",
            f"date: {now.isoformat()}",
            "---",
            "",
        ]
    )
    return metadata + content
