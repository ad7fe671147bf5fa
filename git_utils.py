# git_utils.py
import logging
import subprocess
from typing import List, Optional, Sequence

from config import GlobalConfig
from errors import IdentityError
from models import CommitRecord, WeekWindow

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"


def run_git_command(
    args: List[str],
    repo_path: Optional[str] = None,
    context: str = "执行Git命令",
    quiet: bool = False,
) -> Optional[str]:
    """
    统一的Git命令执行函数
    - 参数以列表形式传递，不经过 shell
    - 在 repo_path 下执行 (None 表示当前目录)
    - 失败时返回 None；quiet=True 时失败只记录 debug 日志 (用于探测类命令)
    """
    cmd = ["git"] + list(args)
    try:
        logger.debug(f"在 {repo_path or '.'} 中执行命令: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=repo_path,
        )
    except OSError as e:
        logger.error(f"{context}出错: {e}")
        return None

    if result.returncode != 0:
        log = logger.debug if quiet else logger.error
        log(f"{context}失败: {result.stderr.strip()}")
        return None
    logger.debug(f"{context}成功，输出 {len(result.stdout.splitlines())} 行")
    return result.stdout


def get_config_value(key: str, scope: str, cwd: Optional[str] = None) -> Optional[str]:
    """读取 git config --<scope> <key>，未设置时返回 None"""
    output = run_git_command(
        ["config", f"--{scope}", "--get", key],
        cwd,
        f"读取 {scope} 配置 {key}",
        quiet=True,
    )
    if output is None:
        return None
    return output.strip() or None


def resolve_identity(
    override: Optional[str] = None,
    scopes: Sequence[str] = GlobalConfig.IDENTITY_SCOPES,
    cwd: Optional[str] = None,
) -> str:
    """
    确定作者邮箱。
    - override 非空时直接使用 (来自 --author 或 repos.conf)
    - 否则按 scopes 顺序查询 git config user.email，先找到者优先
    都没有时抛出 IdentityError。
    """
    if override and override.strip():
        logger.info(f"👤 使用显式指定的作者: {override.strip()}")
        return override.strip()

    for scope in scopes:
        email = get_config_value("user.email", scope, cwd)
        if email:
            logger.info(f"👤 作者 ({scope}): {email}")
            return email

    raise IdentityError("Git user.email not set")


def is_git_repository(repo_path: str) -> bool:
    """检查指定路径是否为 Git 工作区"""
    output = run_git_command(
        ["rev-parse", "--is-inside-work-tree"],
        repo_path,
        "检查Git仓库",
        quiet=True,
    )
    return output is not None and output.strip() == "true"


def branch_exists(repo_path: str, branch: str) -> bool:
    """检查分支 (或任意可解析为提交的引用) 是否存在"""
    output = run_git_command(
        ["rev-parse", "--verify", "--quiet", f"{branch}^{{commit}}"],
        repo_path,
        f"检查分支 {branch}",
        quiet=True,
    )
    return output is not None


def get_branch_log(
    repo_path: str, branch: str, author: str, window: WeekWindow
) -> Optional[str]:
    """
    获取指定分支在时间窗口内、由 author 提交的日志。
    --fixed-strings 让 --author 按字面匹配 "<email>"。
    """
    args = [
        "log",
        branch,
        "--fixed-strings",
        f"--author=<{author}>",
        f"--since={window.since}",
        f"--until={window.until}",
        GlobalConfig.GIT_LOG_DATE_FORMAT,
        GlobalConfig.GIT_LOG_PRETTY_FORMAT,
        "--",
    ]
    return run_git_command(args, repo_path, f"获取分支 {branch} 的提交历史")


def parse_branch_log(
    log_output: str, repository: str, branch: str
) -> List[CommitRecord]:
    """解析 get_branch_log 的输出，保持 git 返回的顺序"""
    commits: List[CommitRecord] = []
    if not log_output or not log_output.strip():
        return commits

    for record in log_output.split(RECORD_SEPARATOR):
        if not record.strip():
            continue
        parts = record.split(FIELD_SEPARATOR, 2)
        if len(parts) < 3:
            logger.warning(f"提交格式异常: {record!r}")
            continue
        timestamp, email, message = parts
        commits.append(
            CommitRecord(
                timestamp=timestamp.strip(),
                author=email.strip(),
                message=message.strip(),
                branch=branch,
                repository=repository,
            )
        )
    return commits
