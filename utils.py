import logging
import sys


def setup_logging(level: str = "INFO"):
    """配置全局日志"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def set_log_level(level: str):
    """调整根日志级别 (日志已配置之后)"""
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
