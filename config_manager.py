# config_manager.py
"""
repos.conf 配置加载器

文件格式 (逐行):
    # 注释与空行会被忽略
    ~/workspace                 <- 第一行非键值内容为仓库根目录 (或 base_path=...)
    api:main,develop            <- 仓库名:分支1,分支2
    web:main
    title                       <- 可选的详细程度 (title | full，或 detail=...)
    author=me@example.com       <- 可选，显式指定作者邮箱
"""

import logging
import os
from typing import Dict, List, Optional

from errors import ConfigurationError
from models import DetailLevel, RepoEntry, ReposConfig

logger = logging.getLogger(__name__)

BASE_PATH_KEY = "base_path"
DETAIL_KEY = "detail"
AUTHOR_KEY = "author"


def _resolve_base_path(raw_path: str, config_dir: str) -> str:
    """展开 ~ 并将相对路径解析为相对于配置文件所在目录的绝对路径"""
    path = os.path.expanduser(raw_path)
    if not os.path.isabs(path):
        path = os.path.join(config_dir, path)
    return os.path.normpath(path)


def parse_repo_entry(line: str) -> Optional[RepoEntry]:
    """解析 'name:branch1,branch2' 行，格式错误时返回 None"""
    name, _, branch_part = line.partition(":")
    name = name.strip()
    if not name:
        return None
    branches = [b.strip() for b in branch_part.split(",") if b.strip()]
    return RepoEntry(name=name, branches=branches)


def _merge_entry(entries: Dict[str, RepoEntry], entry: RepoEntry):
    """同名仓库的分支按顺序合并并去重"""
    existing = entries.get(entry.name)
    if existing is None:
        entries[entry.name] = entry
        return
    for branch in entry.branches:
        if branch not in existing.branches:
            existing.branches.append(branch)


def _is_base_path_key(raw_line: str) -> bool:
    key, sep, value = raw_line.strip().partition("=")
    return bool(sep) and key.strip().lower() == BASE_PATH_KEY and bool(value.strip())


def parse_repos_config(lines: List[str], config_dir: str) -> ReposConfig:
    """将 repos.conf 的文本行解析为 ReposConfig"""
    base_path: Optional[str] = None
    detail_level = DetailLevel.FULL
    author: Optional[str] = None
    entries: Dict[str, RepoEntry] = {}
    # 文件中任意位置出现 base_path= 时，不再把第一行非键值内容当作根目录
    has_base_path_key = any(_is_base_path_key(raw_line) for raw_line in lines)

    for lineno, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        # 1. 键值行
        if "=" in line and ":" not in line.split("=", 1)[0]:
            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = value.strip()
            if key == BASE_PATH_KEY:
                if base_path is not None and value:
                    logger.warning(
                        f"⚠️ 第 {lineno} 行: base_path 重复，覆盖之前的 '{base_path}'"
                    )
                base_path = value or base_path
            elif key == DETAIL_KEY:
                level = DetailLevel.from_token(value)
                if level is None:
                    logger.warning(
                        f"⚠️ 第 {lineno} 行: 未知的详细程度 '{value}'，保持 {detail_level.value}"
                    )
                else:
                    detail_level = level
            elif key == AUTHOR_KEY:
                author = value or None
            else:
                logger.warning(f"⚠️ 第 {lineno} 行: 未知的配置键 '{key}'，已忽略")
            continue

        # 2. 仓库根目录 (第一行非键值内容)
        if base_path is None and not has_base_path_key:
            base_path = line
            continue

        # 3. 详细程度标记
        level = DetailLevel.from_token(line)
        if level is not None:
            detail_level = level
            continue

        # 4. 仓库条目
        if ":" in line:
            entry = parse_repo_entry(line)
            if entry is None:
                logger.warning(f"⚠️ 第 {lineno} 行: 仓库条目格式错误，已跳过: {line}")
                continue
            if not entry.branches:
                logger.warning(
                    f"⚠️ 第 {lineno} 行: 仓库 '{entry.name}' 未配置任何分支，已跳过"
                )
                continue
            _merge_entry(entries, entry)
            continue

        logger.warning(f"⚠️ 第 {lineno} 行: 无法识别的配置行，已跳过: {line}")

    if base_path is None:
        logger.warning("⚠️ 配置中未指定仓库根目录，使用配置文件所在目录")
        base_path = "."

    return ReposConfig(
        base_path=_resolve_base_path(base_path, config_dir),
        repositories=list(entries.values()),
        detail_level=detail_level,
        author=author,
    )


def load_repos_config(config_path: str) -> ReposConfig:
    """
    加载 repos.conf。
    文件不存在或无法读取时抛出 ConfigurationError。
    """
    if not os.path.isfile(config_path):
        raise ConfigurationError(f"Configuration file '{config_path}' not found")

    try:
        with open(config_path, "r", encoding="utf-8-sig") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Configuration file '{config_path}' could not be read: {e}"
        ) from e

    config_dir = os.path.dirname(os.path.abspath(config_path))
    repos_config = parse_repos_config(lines, config_dir)
    logger.info(
        f"✅ 已加载配置 {config_path}: {len(repos_config.repositories)} 个仓库, "
        f"详细程度 {repos_config.detail_level.value}"
    )
    return repos_config
