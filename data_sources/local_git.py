import logging
import os
from typing import List

from .base import DataSource
from models import CommitRecord
from context import RunContext
import git_utils

logger = logging.getLogger(__name__)


class LocalGitDataSource(DataSource):
    """
    本地 Git 数据源实现。
    通过调用 git 命令行工具查询本地仓库。
    """

    def __init__(self, context: RunContext, name: str, repo_path: str):
        self.context = context
        self.name = name
        self.repo_path = repo_path

    def validate(self) -> bool:
        if not os.path.isdir(self.repo_path):
            logger.warning(f"⚠️ Repository not found: {self.repo_path}")
            return False
        if not git_utils.is_git_repository(self.repo_path):
            logger.warning(f"⚠️ Not a git repository: {self.repo_path}")
            return False
        return True

    def has_branch(self, branch: str) -> bool:
        return git_utils.branch_exists(self.repo_path, branch)

    def get_commits(self, branch: str) -> List[CommitRecord]:
        log_output = git_utils.get_branch_log(
            self.repo_path,
            branch,
            self.context.author,
            self.context.week_window,
        )
        if log_output is None:
            return []
        return git_utils.parse_branch_log(log_output, self.name, branch)
