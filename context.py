# context.py
"""
运行时配置的数据模型
"""
from dataclasses import dataclass
from datetime import date, datetime

from config import GlobalConfig
from models import DetailLevel, ReposConfig, WeekWindow


@dataclass
class RunContext:
    """
    封装一次运行所需的所有配置和状态。
    这是从 CLI 传递到 Orchestrator 的唯一对象。
    """

    # --- 输入 ---
    repos_config: ReposConfig
    author: str

    # --- 时间 ---
    run_date: date
    generated_at: datetime
    week_window: WeekWindow

    # --- 输出 ---
    reports_root: str
    detail_level: DetailLevel
    write_html: bool

    # --- 全局配置 ---
    global_config: GlobalConfig

    @property
    def run_date_str(self) -> str:
        return self.run_date.strftime(self.global_config.RUN_DATE_FORMAT)

    @property
    def generated_str(self) -> str:
        return self.generated_at.strftime(self.global_config.TIMESTAMP_FORMAT)
