# WeeklyReport.py
"""
Git 每周提交报告生成器 - 主入口
- cli.py: 命令行界面和 RunContext 组装
- context.py: 运行时配置模型
- orchestrator.py: 核心业务逻辑
- WeeklyReport.py: 仅作为主入口启动器
"""

import logging
import os
import sys

# 1. 初始化日志 (必须在所有模块导入之前完成，config 导入时加载 .env 也会输出日志)
import utils

utils.setup_logging(os.getenv("WEEKLY_REPORT_LOG_LEVEL", "INFO"))

from config import GlobalConfig

# .env 中可能设置了新的日志级别
utils.set_log_level(GlobalConfig.LOG_LEVEL)

logger = logging.getLogger(__name__)


def main():
    try:
        # 延迟导入 cli 模块，确保日志已配置
        import cli

        sys.exit(cli.run_cli())

    except Exception as e:
        # 捕获所有未处理的全局异常
        logger.error(f"❌ 发生未处理的全局异常: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
