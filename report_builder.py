# report_builder.py
"""
报告生成器
- 文本报告: 按行拼接，每个提交恰好占一行
- HTML 报告 (可选): 文本报告本身是 Markdown，经 markdown 转换后用 Jinja2 模板包装
"""
import html
import logging
import os
from typing import List, Optional

import markdown
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from config import GlobalConfig
from context import RunContext
from models import CommitRecord, DetailLevel, RepositoryReport

logger = logging.getLogger(__name__)


def format_commit_line(
    commit: CommitRecord, detail_level: DetailLevel, separator: str
) -> str:
    """格式化单个提交: '<date> <time> | <message>'"""
    if detail_level is DetailLevel.TITLE:
        message = commit.title
    else:
        message = commit.flattened_message(separator)
    return f"{commit.timestamp} | {message}"


def generate_text_report(
    report: RepositoryReport, detail_level: DetailLevel, separator: str
) -> str:
    """生成纯文本格式的周报"""
    lines: List[str] = [
        "# Weekly Commits Report",
        f"Repository: {report.repository}",
        f"Author: {report.author}",
        f"Generated: {report.generated}",
        "",
    ]
    for section in report.sections:
        lines.append(f"## Branch: {section.branch}")
        for commit in section.commits:
            lines.append(format_commit_line(commit, detail_level, separator))
        lines.append("")
    return "\n".join(lines)


def report_file_name(repository: str, suffix: str) -> str:
    """仓库名中的路径分隔符替换为下划线，保证报告落在同一目录"""
    return repository.replace("/", "_").replace("\\", "_") + suffix


def get_report_dir(context: RunContext) -> str:
    """reports/<run-date>/，不存在时创建"""
    report_dir = os.path.join(context.reports_root, context.run_date_str)
    os.makedirs(report_dir, exist_ok=True)
    return report_dir


def save_text_report(text: str, repository: str, context: RunContext) -> Optional[str]:
    """保存 (覆盖) 文本报告，返回文件路径；失败时返回 None"""
    full_path = os.path.join(
        get_report_dir(context),
        report_file_name(repository, context.global_config.TEXT_REPORT_SUFFIX),
    )
    try:
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"✅ 报告已保存: {full_path}")
        return full_path
    except OSError as e:
        logger.error(f"❌ 保存报告失败 ({full_path}): {e}")
        return None


def generate_html_report(
    text_report: str, report: RepositoryReport, global_config: GlobalConfig
) -> Optional[str]:
    """
    使用 Jinja2 模板包装 Markdown 渲染后的文本报告。
    提交信息中的 HTML 会先被转义。渲染失败时记录错误并返回 None。
    """
    templates_dir = os.path.join(
        global_config.SCRIPT_BASE_PATH, global_config.TEMPLATES_DIR_NAME
    )
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml", "html.j2"]),
    )

    body_html = markdown.markdown(
        html.escape(text_report, quote=False), extensions=["sane_lists", "nl2br"]
    )

    template_context = {
        "title": f"Weekly Commits Report - {report.repository}",
        "repository": report.repository,
        "author": report.author,
        "generation_time": report.generated,
        "total_commits": report.total_commits,
        "body_html": body_html,
    }

    try:
        template = env.get_template(global_config.HTML_TEMPLATE_NAME)
        logger.debug(f"🎨 正在渲染 Jinja2 模板: {global_config.HTML_TEMPLATE_NAME}")
        return template.render(**template_context)
    except TemplateError as e:
        logger.error(f"❌ Jinja2 模板渲染失败 ({report.repository}): {e}")
        return None


def save_html_report(html_content: str, repository: str, context: RunContext) -> Optional[str]:
    """保存 (覆盖) HTML 报告"""
    full_path = os.path.join(
        get_report_dir(context),
        report_file_name(repository, context.global_config.HTML_REPORT_SUFFIX),
    )
    try:
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(html_content)
        logger.info(f"✅ HTML报告已保存: {full_path}")
        return full_path
    except OSError as e:
        logger.error(f"❌ 保存HTML报告失败 ({full_path}): {e}")
        return None
