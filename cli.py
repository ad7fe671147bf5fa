# cli.py
"""
命令行界面 (Interface) 层
负责参数解析、RunContext 组装与退出码。
"""
import argparse
import logging
import os
from datetime import date, datetime
from typing import List, Optional

import config_manager
import git_utils
from config import GlobalConfig
from context import RunContext
from errors import ConfigurationError, WeeklyReportError
from models import DetailLevel
from orchestrator import WeeklyReportOrchestrator
from week_window import compute_week_window, parse_weekday

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


def _parse_run_date(value: str) -> date:
    try:
        return datetime.strptime(value, GlobalConfig.RUN_DATE_FORMAT).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"日期格式应为 YYYY-MM-DD: {value!r}")


def _parse_end_day(value: str) -> int:
    try:
        return parse_weekday(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def setup_parser() -> argparse.ArgumentParser:
    """
    负责所有 argparse 的定义。
    """
    parser = argparse.ArgumentParser(
        description="Git 每周提交报告生成器",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=GlobalConfig.CONFIG_FILE_NAME,
        help="配置文件路径。\n(默认: 当前目录下的 repos.conf)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=GlobalConfig.REPORTS_DIR_NAME,
        help="报告输出根目录，报告写入 <output-dir>/<YYYY-MM-DD>/。\n(默认: reports)",
    )
    parser.add_argument(
        "--date",
        type=_parse_run_date,
        default=None,
        help="以指定日期 (YYYY-MM-DD) 作为“今天”运行。\n(默认: 今天)",
    )

    # --- 覆盖参数 ---
    parser.add_argument(
        "--detail",
        type=str,
        choices=[level.value for level in DetailLevel],
        default=None,
        help="(覆盖) 报告详细程度。\n"
        "'title': 只输出提交标题\n"
        "'full': 完整提交信息压成一行\n"
        "(默认: 使用 repos.conf 中的设置，未设置时为 full)",
    )
    parser.add_argument(
        "--author",
        type=str,
        default=None,
        help="(覆盖) 作者邮箱。\n(默认: repos.conf 中的 author=，否则 git config user.email)",
    )
    parser.add_argument(
        "--end-day",
        type=_parse_end_day,
        default=None,
        help="(覆盖) 本周窗口的最后一天，例如 'friday'、'sun' 或 0-6。\n"
        "(默认: WEEKLY_REPORT_END_DAY 或 friday)",
    )

    # --- 标志 (Flags) ---
    parser.add_argument(
        "--html", action="store_true", help="同时生成 HTML 版本的报告"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="输出调试日志"
    )

    return parser


def build_context(args: argparse.Namespace, global_config: GlobalConfig) -> RunContext:
    """
    组装 RunContext。
    配置文件缺失或作者身份无法确定时抛出 WeeklyReportError 的子类。
    """
    repos_config = config_manager.load_repos_config(args.config)

    author = git_utils.resolve_identity(
        override=args.author or repos_config.author,
        scopes=global_config.IDENTITY_SCOPES,
    )

    end_weekday = args.end_day
    if end_weekday is None:
        try:
            end_weekday = parse_weekday(global_config.WEEK_END_DAY)
        except ValueError as e:
            raise ConfigurationError(f"WEEKLY_REPORT_END_DAY 无效: {e}") from e
    run_date = args.date or date.today()
    generated_at = datetime.combine(run_date, datetime.now().time())

    detail_level = (
        DetailLevel(args.detail) if args.detail else repos_config.detail_level
    )

    return RunContext(
        repos_config=repos_config,
        author=author,
        run_date=run_date,
        generated_at=generated_at,
        week_window=compute_week_window(run_date, end_weekday),
        reports_root=os.path.abspath(args.output_dir),
        detail_level=detail_level,
        write_html=args.html,
        global_config=global_config,
    )


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    主入口点，返回进程退出码。
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    global_config = GlobalConfig()

    try:
        run_context = build_context(args, global_config)
    except WeeklyReportError as e:
        logger.error(f"❌ {e}")
        return EXIT_FATAL

    logger.info("=" * 50)
    logger.info("🚀 Weekly Commits Report 启动...")
    logger.info(f"   [仓库根目录]: {run_context.repos_config.base_path}")
    logger.info(f"   [作者]: {run_context.author}")
    logger.info(f"   [详细程度]: {run_context.detail_level.value}")
    logger.info(f"   [输出目录]: {run_context.reports_root}")
    logger.info("=" * 50)

    orchestrator = WeeklyReportOrchestrator(run_context)
    orchestrator.run()
    return EXIT_OK

