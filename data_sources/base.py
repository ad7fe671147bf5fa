from abc import ABC, abstractmethod
from typing import List

from models import CommitRecord


class DataSource(ABC):
    """
    单个仓库的提交数据源接口。
    Orchestrator 只依赖此接口，不关心底层如何查询版本库。
    """

    @abstractmethod
    def validate(self) -> bool:
        """
        验证仓库是否可用 (目录存在且为工作区)。
        不可用时记录警告并返回 False。
        """
        pass

    @abstractmethod
    def has_branch(self, branch: str) -> bool:
        """检查分支是否存在"""
        pass

    @abstractmethod
    def get_commits(self, branch: str) -> List[CommitRecord]:
        """
        获取分支在本周窗口内、由当前作者提交的记录。
        顺序与版本库返回的顺序一致。
        """
        pass
