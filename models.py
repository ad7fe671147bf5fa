from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class DetailLevel(Enum):
    """报告详细程度"""

    TITLE = "title"
    FULL = "full"

    @classmethod
    def from_token(cls, token: str) -> Optional["DetailLevel"]:
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


@dataclass
class RepoEntry:
    """repos.conf 中的单个仓库条目"""

    name: str
    branches: List[str] = field(default_factory=list)


@dataclass
class ReposConfig:
    """repos.conf 解析结果"""

    base_path: str
    repositories: List[RepoEntry] = field(default_factory=list)
    detail_level: DetailLevel = DetailLevel.FULL
    author: Optional[str] = None


@dataclass(frozen=True)
class WeekWindow:
    """本周的时间窗口 (起止日期均包含在内)"""

    start: date
    end: date

    @property
    def since(self) -> str:
        return f"{self.start.isoformat()} 00:00:00"

    @property
    def until(self) -> str:
        return f"{self.end.isoformat()} 23:59:59"

    def __str__(self) -> str:
        return f"{self.since} ~ {self.until}"


@dataclass
class CommitRecord:
    """单个提交记录"""

    timestamp: str
    author: str
    message: str
    branch: str
    repository: str

    @property
    def title(self) -> str:
        lines = self.message.strip().splitlines()
        return lines[0].strip() if lines else ""

    def flattened_message(self, separator: str) -> str:
        """将多行提交信息压成一行 (丢弃空行)"""
        return separator.join(
            line.strip() for line in self.message.splitlines() if line.strip()
        )


@dataclass
class BranchSection:
    """报告中的一个分支段落"""

    branch: str
    commits: List[CommitRecord] = field(default_factory=list)


@dataclass
class RepositoryReport:
    """单个仓库的周报数据"""

    repository: str
    author: str
    generated: str
    sections: List[BranchSection] = field(default_factory=list)

    @property
    def total_commits(self) -> int:
        return sum(len(section.commits) for section in self.sections)


@dataclass
class RunSummary:
    """一次运行的汇总统计"""

    processed_repositories: int = 0
    skipped_repositories: int = 0
    skipped_branches: int = 0
    total_commits: int = 0
    written_reports: List[str] = field(default_factory=list)
