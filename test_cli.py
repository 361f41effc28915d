# test_cli.py
import os
import shutil
import tempfile
import unittest
from unittest import mock

import cli
import config_manager
from config import GlobalConfig
from errors import GitNotFoundError


class TestBuildRunContext(unittest.TestCase):
    def setUp(self):
        self.parser = cli.setup_parser()
        self.config = GlobalConfig()

    def build(self, argv, project_config=None):
        args = self.parser.parse_args(argv)
        return cli.build_run_context(
            args, project_config or {}, "/repo", "/data/repo", self.config
        )

    def test_defaults(self):
        context = self.build([])
        self.assertEqual(context.days, 7)
        self.assertEqual(context.llm_id, self.config.DEFAULT_LLM)
        self.assertEqual(context.settings.template, "velog")
        self.assertTrue(context.git_options.include_files)
        self.assertIsNone(context.output_path)
        self.assertEqual(context.tags, [])

    def test_cli_overrides_project_config(self):
        project_config = {
            "default_days": 14,
            "default_llm": "deepseek",
            "default_template": "weekly",
            "example_urls": ["https://velog.io/@a/b"],
            "tags": ["saved"],
            "include_stats": True,
        }
        context = self.build(
            ["-d", "3", "--llm", "Mock", "--tags", "x, y", "--template", "quick"],
            project_config,
        )
        self.assertEqual(context.days, 3)
        self.assertEqual(context.llm_id, "mock")
        self.assertEqual(context.settings.template, "quick")
        self.assertEqual(context.tags, ["x", "y"])
        self.assertEqual(context.settings.example_urls, ["https://velog.io/@a/b"])
        self.assertTrue(context.settings.include_stats)

    def test_project_config_used_when_flags_absent(self):
        context = self.build([], {"default_days": 0, "default_template": "weekly"})
        self.assertEqual(context.days, 0)
        self.assertEqual(context.settings.template, "weekly")

    def test_git_filters_and_flags(self):
        context = self.build(
            [
                "--path", "src/",
                "--author", "kim",
                "--branch", "dev",
                "-n", "20",
                "--no-files",
                "--example-url", "https://velog.io/@a/1",
                "--example-url", "https://velog.io/@a/2",
                "--api-key", "k",
                "-o", "out.md",
                "--append",
                "--html",
            ]
        )
        options = context.git_options
        self.assertEqual(
            (options.path_filter, options.author, options.branch, options.max_commits),
            ("src/", "kim", "dev", 20),
        )
        self.assertFalse(options.include_files)
        self.assertEqual(len(context.settings.example_urls), 2)
        self.assertEqual(context.settings.api_key, "k")
        self.assertEqual(context.output_path, "out.md")
        self.assertTrue(context.append)
        self.assertTrue(context.html_preview)

    def test_preview_and_stats_only_are_exclusive(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                self.parser.parse_args(["--preview", "--stats-only"])

    def test_unknown_template_rejected(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                self.parser.parse_args(["--template", "novel"])


class TestRunCli(unittest.TestCase):
    @mock.patch("cli.BlogOrchestrator")
    def test_errors_exit_with_code_1(self, mock_orchestrator):
        mock_orchestrator.return_value.run.side_effect = GitNotFoundError()
        with self.assertRaises(SystemExit) as ctx:
            cli.run_cli(["-r", os.getcwd(), "--stats-only"])
        self.assertEqual(ctx.exception.code, 1)

    @mock.patch("cli.BlogOrchestrator")
    def test_success(self, mock_orchestrator):
        mock_orchestrator.return_value.run.return_value = "/tmp/post.md"
        cli.run_cli(["-r", os.getcwd(), "--llm", "mock"])
        context = mock_orchestrator.call_args[0][0]
        self.assertEqual(context.repo_path, os.getcwd())
        self.assertEqual(context.llm_id, "mock")


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.repo = os.path.join(self.tmp_dir, "my-repo")
        os.makedirs(self.repo)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_project_data_path(self):
        self.assertEqual(
            config_manager.get_project_data_path("/data", self.repo),
            os.path.join("/data", "my-repo"),
        )

    def test_load_missing_or_broken(self):
        self.assertEqual(config_manager.load_project_config(self.tmp_dir), {})
        with open(os.path.join(self.tmp_dir, "config.json"), "w", encoding="utf-8") as f:
            f.write("{broken")
        self.assertEqual(config_manager.load_project_config(self.tmp_dir), {})

    def test_wizard_saves_config(self):
        data_root = os.path.join(self.tmp_dir, "data")
        answers = iter(["3", "mock", "weekly", "", "https://velog.io/@a/b, ", "y", "git, 회고"])
        with mock.patch("builtins.input", lambda _: next(answers)), mock.patch("builtins.print"):
            config_manager.run_interactive_config_wizard(data_root, self.repo)

        saved = config_manager.load_project_config(os.path.join(data_root, "my-repo"))
        self.assertEqual(
            saved,
            {
                "default_days": 3,
                "default_llm": "mock",
                "default_template": "weekly",
                "custom_prompt": None,
                "example_urls": ["https://velog.io/@a/b"],
                "include_stats": True,
                "tags": ["git", "회고"],
            },
        )


if __name__ == "__main__":
    unittest.main()
