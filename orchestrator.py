# orchestrator.py
"""
业务逻辑编排器
逐个仓库、逐个分支地校验、提取提交并写出报告 (严格顺序执行)。
"""
import logging
import os
from typing import Dict, Optional

from context import RunContext
from data_sources.base import DataSource
from data_sources.local_git import LocalGitDataSource
from models import BranchSection, RepoEntry, RepositoryReport, RunSummary
import report_builder

logger = logging.getLogger(__name__)


class WeeklyReportOrchestrator:
    """
    负责执行周报生成的核心业务逻辑。
    """

    def __init__(self, context: RunContext):
        self.context = context
        self.global_config = context.global_config
        self.summary = RunSummary()
        # 报告文件名 -> 仓库名，'group/api' 与 'group_api' 会映射到同一个文件
        self.report_names: Dict[str, str] = {}

    def get_data_source(self, entry: RepoEntry, repo_path: str) -> DataSource:
        return LocalGitDataSource(self.context, entry.name, repo_path)

    def run(self) -> RunSummary:
        """
        执行核心业务流程，返回运行汇总。
        单个仓库/分支的问题只记录警告，不会中止运行。
        """
        logger.info(f"📅 本周窗口: {self.context.week_window}")

        for entry in self.context.repos_config.repositories:
            report = self.process_repository(entry)
            if report is None:
                continue
            if not self.claim_report_name(report.repository):
                self.summary.skipped_repositories += 1
                continue

            self.summary.processed_repositories += 1
            self.summary.total_commits += report.total_commits
            self.write_report(report)

        logger.info(
            f"🏁 完成: 处理 {self.summary.processed_repositories} 个仓库, "
            f"跳过 {self.summary.skipped_repositories} 个仓库 / "
            f"{self.summary.skipped_branches} 个分支, "
            f"共 {self.summary.total_commits} 个提交, "
            f"生成 {len(self.summary.written_reports)} 份报告"
        )
        return self.summary

    def process_repository(self, entry: RepoEntry) -> Optional[RepositoryReport]:
        """
        校验仓库并提取各分支的提交。
        仓库不可用或没有任何有效分支时返回 None (不生成报告文件)。
        """
        repo_path = os.path.join(self.context.repos_config.base_path, entry.name)
        logger.info(f"📂 Processing: {repo_path}")
        data_source = self.get_data_source(entry, repo_path)

        if not data_source.validate():
            self.summary.skipped_repositories += 1
            return None

        report = RepositoryReport(
            repository=entry.name,
            author=self.context.author,
            generated=self.context.generated_str,
        )

        for branch in entry.branches:
            logger.info(f"🔍 Checking branch: {branch}")
            if not data_source.has_branch(branch):
                logger.warning(f"⚠️ Branch '{branch}' not found")
                self.summary.skipped_branches += 1
                continue

            commits = data_source.get_commits(branch)
            logger.info(f"   Found {len(commits)} commits")
            report.sections.append(BranchSection(branch=branch, commits=commits))

        if not report.sections:
            logger.warning(f"⚠️ 仓库 {entry.name} 没有有效分支，不生成报告")
            self.summary.skipped_repositories += 1
            return None

        return report

    def claim_report_name(self, repository: str) -> bool:
        """登记报告文件名；与之前的仓库冲突时保留先写出的报告"""
        file_name = report_builder.report_file_name(
            repository, self.global_config.TEXT_REPORT_SUFFIX
        )
        owner = self.report_names.setdefault(file_name, repository)
        if owner != repository:
            logger.warning(
                f"⚠️ 仓库 {repository} 与 {owner} 的报告文件名冲突 ({file_name})，"
                f"跳过 {repository}"
            )
            return False
        return True

    def write_report(self, report: RepositoryReport):
        """写出文本报告 (以及可选的 HTML 报告)"""
        text_report = report_builder.generate_text_report(
            report,
            self.context.detail_level,
            self.global_config.FULL_MESSAGE_SEPARATOR,
        )
        text_path = report_builder.save_text_report(
            text_report, report.repository, self.context
        )
        if text_path:
            self.summary.written_reports.append(text_path)

        if self.context.write_html:
            html = report_builder.generate_html_report(
                text_report, report, self.global_config
            )
            if html is None:
                logger.warning(f"⚠️ 跳过 {report.repository} 的 HTML 报告")
                return
            report_builder.save_html_report(html, report.repository, self.context)
