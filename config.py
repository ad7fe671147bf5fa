# config.py
"""
全局配置
- 常量 (文件名、目录名、git 格式)
- 可通过 .env 或环境变量覆盖的默认值
"""
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))
env_path = os.path.join(SCRIPT_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    logger.debug(f"✅ 已从脚本目录加载 .env: {env_path}")
else:
    load_dotenv()
    logger.debug("未在脚本目录找到 .env，尝试从 CWD 加载。")


class GlobalConfig:
    """
    周报生成器的全局应用配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    # 模板随 report_templates 包一同安装，与 config.py 位于同一目录下
    TEMPLATES_DIR_NAME: str = "report_templates"
    CONFIG_FILE_NAME: str = "repos.conf"
    REPORTS_DIR_NAME: str = "reports"

    # --- 文件名 ---
    TEXT_REPORT_SUFFIX: str = ".txt"
    HTML_REPORT_SUFFIX: str = ".html"
    HTML_TEMPLATE_NAME: str = "weekly_report.html.j2"

    # --- Git 命令 ---
    # %x1e 分隔记录，%x1f 分隔字段，%B 为原始提交信息 (可能多行)
    GIT_LOG_PRETTY_FORMAT: str = "--pretty=format:%x1e%cd%x1f%ae%x1f%B"
    GIT_LOG_DATE_FORMAT: str = "--date=format-local:%Y-%m-%d %H:%M:%S"
    IDENTITY_SCOPES: tuple = ("local", "global")

    # --- 时间格式 ---
    RUN_DATE_FORMAT: str = "%Y-%m-%d"
    TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # --- 报告 ---
    # 周末边界: 星期名 (friday) 或数字 0-6 (周一 = 0)
    WEEK_END_DAY: str = os.getenv("WEEKLY_REPORT_END_DAY", "friday")
    # full 模式下多行提交信息的拼接符
    FULL_MESSAGE_SEPARATOR: str = os.getenv("WEEKLY_REPORT_SEPARATOR", " / ")

    # --- 日志 ---
    LOG_LEVEL: str = os.getenv("WEEKLY_REPORT_LOG_LEVEL", "INFO").upper()
