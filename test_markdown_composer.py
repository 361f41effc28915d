# test_markdown_composer.py
import os
import shutil
import tempfile
import unittest
from datetime import datetime

import markdown_composer


class TestMarkdownComposer(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_save_creates_parent_dirs(self):
        target = os.path.join(self.tmp_dir, "posts", "2024", "post.md")
        saved = markdown_composer.save_to_blog_file("# 안녕", target)
        self.assertEqual(saved, os.path.abspath(target))
        with open(saved, "r", encoding="utf-8") as f:
            self.assertEqual(f.read(), "# 안녕")

    def test_append_uses_separator(self):
        target = os.path.join(self.tmp_dir, "post.md")
        markdown_composer.save_to_blog_file("첫 번째", target)
        markdown_composer.append_to_existing_post(target, "두 번째")
        with open(target, "r", encoding="utf-8") as f:
            self.assertEqual(f.read(), "첫 번째\n\n---\n\n두 번째")

    def test_date_based_filename(self):
        now = datetime(2024, 1, 2, 15, 30)
        self.assertEqual(
            markdown_composer.generate_date_based_filename(now=now),
            "blog-post-2024-01-02.md",
        )
        self.assertEqual(
            markdown_composer.generate_date_based_filename("weekly", now),
            "weekly-2024-01-02.md",
        )

    def test_velog_metadata(self):
        now = datetime(2024, 1, 2, 15, 30)
        content = markdown_composer.add_velog_metadata(
            "# 본문", ["git", "회고"], now=now
        )
        self.assertEqual(
            content,
            "---\ntags: git, 회고\npublished: true\ndate: 2024-01-02T15:30:00\n---\n# 본문",
        )

    def test_private_post(self):
        content = markdown_composer.add_velog_metadata("x", is_private=True)
        self.assertIn("published: false", content)
        self.assertIn("tags: \n", content)


if __name__ == "__main__":
    unittest.main()
