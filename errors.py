# errors.py
"""
致命错误类型。
这些错误会中止整个运行 (退出码 1)；其余问题只记录警告并继续。
"""


class WeeklyReportError(Exception):
    """所有致命错误的基类"""


class ConfigurationError(WeeklyReportError):
    """配置文件缺失或无法读取"""


class IdentityError(WeeklyReportError):
    """无法确定提交作者身份 (user.email)"""
