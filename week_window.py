# week_window.py
"""
本周时间窗口计算
纯 datetime 运算，不依赖任何平台的 date 命令。
"""
import logging
from datetime import date, timedelta
from typing import Union

from models import WeekWindow

logger = logging.getLogger(__name__)

MONDAY = 0
FRIDAY = 4

WEEKDAY_NAMES = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


def parse_weekday(value: Union[str, int]) -> int:
    """
    将星期名 ('friday', 'fri') 或数字 ('4', 4) 解析为 0-6 (周一 = 0)。
    无法解析时抛出 ValueError。
    """
    if isinstance(value, int):
        day = value
    else:
        token = value.strip().lower()
        if token.isdigit():
            day = int(token)
        else:
            matches = [
                i
                for i, name in enumerate(WEEKDAY_NAMES)
                if len(token) >= 3 and name.startswith(token)
            ]
            if len(matches) != 1:
                raise ValueError(f"无法识别的星期: {value!r}")
            day = matches[0]

    if not MONDAY <= day <= 6:
        raise ValueError(f"星期必须在 0-6 之间: {value!r}")
    return day


def compute_week_window(today: date, end_weekday: int = FRIDAY) -> WeekWindow:
    """
    计算 today 所在周的周一和周末边界 (默认周五)。
    周末运行时返回刚刚过去的周一到周五。
    """
    monday = today - timedelta(days=today.weekday())
    end = monday + timedelta(days=end_weekday)
    window = WeekWindow(start=monday, end=end)
    logger.debug(f"📅 本周窗口: {window}")
    return window
