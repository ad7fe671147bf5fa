import os
import shutil
import tempfile
import unittest
from datetime import date, datetime

from config import GlobalConfig
from context import RunContext
from data_sources.base import DataSource
from models import CommitRecord, DetailLevel, RepoEntry, ReposConfig, WeekWindow
from orchestrator import WeeklyReportOrchestrator


class FakeDataSource(DataSource):
    """内存中的数据源: branches 为 {分支: [提交标题]}，None 表示仓库不可用"""

    def __init__(self, name, branches):
        self.name = name
        self.branches = branches

    def validate(self):
        return self.branches is not None

    def has_branch(self, branch):
        return branch in self.branches

    def get_commits(self, branch):
        return [
            CommitRecord(
                timestamp=f"2026-10-1{6 - i} 12:00:00",
                author="me@example.com",
                message=title,
                branch=branch,
                repository=self.name,
            )
            for i, title in enumerate(self.branches[branch])
        ]


class FakeOrchestrator(WeeklyReportOrchestrator):

    def __init__(self, context, repos):
        super().__init__(context)
        self.repos = repos

    def get_data_source(self, entry, repo_path):
        return FakeDataSource(entry.name, self.repos.get(entry.name))


class TestWeeklyReportOrchestrator(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir, ignore_errors=True)

    def make_context(self, entries, write_html=False, global_config=None):
        return RunContext(
            repos_config=ReposConfig(base_path=self.tmp_dir, repositories=entries),
            author="me@example.com",
            run_date=date(2026, 10, 14),
            generated_at=datetime(2026, 10, 14, 9, 0),
            week_window=WeekWindow(date(2026, 10, 12), date(2026, 10, 16)),
            reports_root=os.path.join(self.tmp_dir, "reports"),
            detail_level=DetailLevel.TITLE,
            write_html=write_html,
            global_config=global_config or GlobalConfig(),
        )

    def test_summary_and_files(self):
        entries = [
            RepoEntry("api", ["main", "ghost", "develop"]),
            RepoEntry("missing", ["main"]),
            RepoEntry("web", ["ghost"]),
        ]
        repos = {
            "api": {"main": ["Newest", "Older", "Oldest"], "develop": []},
            "missing": None,
            "web": {"main": ["Unused"]},
        }
        orchestrator = FakeOrchestrator(self.make_context(entries), repos)

        with self.assertLogs(level="INFO") as logs:
            summary = orchestrator.run()

        output = "\n".join(logs.output)
        self.assertIn("Branch 'ghost' not found", output)
        self.assertIn("Found 3 commits", output)
        self.assertIn("Found 0 commits", output)

        self.assertEqual(summary.processed_repositories, 1)
        self.assertEqual(summary.skipped_repositories, 2)
        self.assertEqual(summary.skipped_branches, 2)
        self.assertEqual(summary.total_commits, 3)

        report_dir = os.path.join(self.tmp_dir, "reports", "2026-10-14")
        self.assertEqual(sorted(os.listdir(report_dir)), ["api.txt"])
        self.assertEqual(summary.written_reports, [os.path.join(report_dir, "api.txt")])

        with open(os.path.join(report_dir, "api.txt"), encoding="utf-8") as f:
            lines = f.read().splitlines()
        # 保持数据源返回的顺序
        main_index = lines.index("## Branch: main")
        self.assertEqual(
            lines[main_index + 1 : main_index + 4],
            [
                "2026-10-16 12:00:00 | Newest",
                "2026-10-15 12:00:00 | Older",
                "2026-10-14 12:00:00 | Oldest",
            ],
        )
        self.assertEqual(lines[-1], "## Branch: develop")

    def test_colliding_report_names_keep_first(self):
        entries = [RepoEntry("group/api", ["main"]), RepoEntry("group_api", ["main"])]
        repos = {
            "group/api": {"main": ["Nested repo work"]},
            "group_api": {"main": ["Flat repo work"]},
        }
        orchestrator = FakeOrchestrator(self.make_context(entries), repos)

        with self.assertLogs(level="INFO") as logs:
            summary = orchestrator.run()

        self.assertIn("group_api 与 group/api 的报告文件名冲突", "\n".join(logs.output))
        self.assertEqual(summary.processed_repositories, 1)
        self.assertEqual(summary.skipped_repositories, 1)
        self.assertEqual(summary.total_commits, 1)

        report_dir = os.path.join(self.tmp_dir, "reports", "2026-10-14")
        self.assertEqual(os.listdir(report_dir), ["group_api.txt"])
        with open(os.path.join(report_dir, "group_api.txt"), encoding="utf-8") as f:
            report = f.read()
        self.assertIn("Repository: group/api", report)
        self.assertNotIn("Flat repo work", report)

    def test_missing_template_skips_only_html(self):
        global_config = GlobalConfig()
        global_config.SCRIPT_BASE_PATH = self.tmp_dir
        entries = [RepoEntry("api", ["main"]), RepoEntry("web", ["main"])]
        repos = {"api": {"main": ["Api work"]}, "web": {"main": ["Web work"]}}
        context = self.make_context(entries, write_html=True, global_config=global_config)

        with self.assertLogs(level="INFO") as logs:
            summary = FakeOrchestrator(context, repos).run()

        output = "\n".join(logs.output)
        self.assertIn("Jinja2 模板渲染失败 (api)", output)
        self.assertIn("Jinja2 模板渲染失败 (web)", output)
        self.assertEqual(summary.processed_repositories, 2)

        report_dir = os.path.join(self.tmp_dir, "reports", "2026-10-14")
        self.assertEqual(sorted(os.listdir(report_dir)), ["api.txt", "web.txt"])


if __name__ == "__main__":
    unittest.main()
