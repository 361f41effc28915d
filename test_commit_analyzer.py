# test_commit_analyzer.py
import unittest

import commit_analyzer
from models import CommitRecord


def make_commit(hash_, message, additions=0, deletions=0, files=None, author="Kim", date="2024-01-01"):
    return CommitRecord(
        hash=hash_,
        message=message,
        author=author,
        date=date,
        additions=additions,
        deletions=deletions,
        files=files,
    )


SCENARIO_COMMITS = [
    make_commit("aaa1111", "fix: null pointer", 10, 2, ("a.ts",), date="2024-01-01"),
    make_commit("bbb2222", "feat: add export", 300, 0, ("b.ts",), date="2024-01-02"),
]


class TestAnalyzeCommitStats(unittest.TestCase):
    def test_two_commit_scenario(self):
        stats = commit_analyzer.analyze_commit_stats(SCENARIO_COMMITS, 200)

        self.assertEqual(stats.total_commits, 2)
        self.assertEqual(stats.total_additions, 310)
        self.assertEqual(stats.total_deletions, 2)
        self.assertEqual(stats.file_types, {"ts": 2})
        self.assertEqual(stats.commit_categories, {"fix": 1, "feat": 1})
        self.assertEqual([c.hash for c in stats.large_commits], ["bbb2222"])
        self.assertEqual(stats.avg_commit_size, 156)
        self.assertEqual(stats.commits_by_day, {"2024-01-01": 1, "2024-01-02": 1})
        self.assertEqual(stats.authors, {"Kim": 2})
        self.assertEqual(stats.hourly_activity, {})

    def test_empty_input(self):
        stats = commit_analyzer.analyze_commit_stats([])
        self.assertEqual(stats.total_commits, 0)
        self.assertEqual(stats.avg_commit_size, 0)
        self.assertEqual(stats.large_commits, ())
        self.assertEqual(stats.authors, {})

    def test_average_rounds_half_up(self):
        commits = [make_commit("a", "x", 1, 0), make_commit("b", "y", 2, 0)]
        self.assertEqual(commit_analyzer.analyze_commit_stats(commits).avg_commit_size, 2)

    def test_threshold_is_exclusive(self):
        commits = [make_commit("a", "x", 200, 0), make_commit("b", "y", 201, 0)]
        stats = commit_analyzer.analyze_commit_stats(commits, 200)
        self.assertEqual([c.hash for c in stats.large_commits], ["b"])

    def test_large_commits_sorted_and_stable(self):
        commits = [
            make_commit("a", "x", 250, 0),
            make_commit("b", "y", 400, 0),
            make_commit("c", "z", 250, 0),
        ]
        large = commit_analyzer.find_large_commits(commits, 200)
        self.assertEqual([c.hash for c in large], ["b", "a", "c"])

    def test_files_not_collected(self):
        stats = commit_analyzer.analyze_commit_stats([make_commit("a", "fix: x", 1, 1)])
        self.assertEqual(stats.file_types, {})

    def test_hourly_activity_from_timestamps(self):
        stats = commit_analyzer.analyze_commit_stats(
            SCENARIO_COMMITS,
            timestamps=[
                "2024-01-01 09:15:00 +0900",
                "2024-01-02 09:59:59 +0900",
                "not a timestamp",
            ],
        )
        self.assertEqual(stats.hourly_activity, {9: 2})


class TestCategories(unittest.TestCase):
    def test_conventional_prefix(self):
        self.assertEqual(commit_analyzer.extract_commit_category("feat(api): 추가"), "feat")
        self.assertEqual(commit_analyzer.extract_commit_category("FIX: crash"), "fix")
        self.assertEqual(commit_analyzer.extract_commit_category("revert: oops"), "revert")

    def test_korean_keywords(self):
        self.assertEqual(commit_analyzer.extract_commit_category("로그인 기능 추가"), "feat")
        self.assertEqual(commit_analyzer.extract_commit_category("버그 고침"), "fix")
        self.assertEqual(commit_analyzer.extract_commit_category("문서 정리"), "docs")
        self.assertEqual(commit_analyzer.extract_commit_category("코드 개선"), "refactor")

    def test_other(self):
        self.assertEqual(commit_analyzer.extract_commit_category("initial commit"), "other")
        # 前缀后没有冒号时不算 Conventional Commit
        self.assertEqual(commit_analyzer.extract_commit_category("feature flag"), "other")

    def test_batch_categories(self):
        commits = [
            make_commit("a", "fix login bug", files=("src/auth.py",)),
            make_commit("b", "update", files=("README.md",)),
        ]
        self.assertEqual(
            commit_analyzer.infer_batch_categories(commits), ["버그 수정", "문서화"]
        )

    def test_batch_categories_fallback(self):
        commits = [make_commit("a", "wow", files=("x.go",))]
        self.assertEqual(commit_analyzer.infer_batch_categories(commits), ["개발"])
        self.assertEqual(commit_analyzer.infer_batch_categories([]), ["개발"])


class TestFileType(unittest.TestCase):
    def test_extensions(self):
        self.assertEqual(commit_analyzer.get_file_type("src/App.TSX"), "tsx")
        self.assertEqual(commit_analyzer.get_file_type("archive.tar.gz"), "gz")
        self.assertEqual(commit_analyzer.get_file_type("Makefile"), "unknown")
        self.assertEqual(commit_analyzer.get_file_type("v1.2/Dockerfile"), "unknown")


class TestSupplementaryAnalyses(unittest.TestCase):
    def test_validate_commit_message(self):
        self.assertEqual(commit_analyzer.validate_commit_message("feat: ok"), (True, []))

        valid, issues = commit_analyzer.validate_commit_message("WIP " + "x" * 120)
        self.assertFalse(valid)
        self.assertEqual(len(issues), 2)

        valid, issues = commit_analyzer.validate_commit_message("")
        self.assertFalse(valid)
        self.assertEqual(issues, ["커밋 메시지가 비어있습니다."])

    def test_extract_major_changes(self):
        commits = [
            make_commit("a", "x", 10, 0, ("shared.py", "a.py")),
            make_commit("b", "y", 100, 5, ("shared.py",)),
        ]
        changes = commit_analyzer.extract_major_changes(commits, top_n=1)
        self.assertEqual(changes, [{"file": "shared.py", "changes": 115, "commits": ["a", "b"]}])


if __name__ == "__main__":
    unittest.main()
