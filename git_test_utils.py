"""
测试辅助: 在临时目录中创建带固定提交时间的 Git 仓库，并隔离全局 git 配置。
"""
import os
import shutil
import subprocess
import tempfile
import unittest
from typing import Dict, Optional
from unittest import mock

GIT_AVAILABLE = shutil.which("git") is not None

requires_git = unittest.skipUnless(GIT_AVAILABLE, "git 不在 PATH 中")

DEFAULT_EMAIL = "me@example.com"


def run_git(repo_path: str, *args: str, env: Optional[Dict[str, str]] = None) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def init_repo(repo_path: str, branch: str = "main") -> str:
    """初始化仓库，并把初始分支命名为 branch"""
    os.makedirs(repo_path, exist_ok=True)
    run_git(repo_path, "init", "-q")
    run_git(repo_path, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    return repo_path


def commit(
    repo_path: str,
    message: str,
    when: str,
    email: str = DEFAULT_EMAIL,
    name: str = "Me",
):
    """
    创建一个空提交，作者/提交时间都设为 when ('YYYY-MM-DDTHH:MM:SS'，本地时间)。
    message 中的换行会保留为多行提交信息。
    """
    env = dict(os.environ)
    env.update(
        {
            "GIT_AUTHOR_NAME": name,
            "GIT_AUTHOR_EMAIL": email,
            "GIT_AUTHOR_DATE": when,
            "GIT_COMMITTER_NAME": name,
            "GIT_COMMITTER_EMAIL": email,
            "GIT_COMMITTER_DATE": when,
        }
    )
    run_git(repo_path, "commit", "-q", "--allow-empty", "-m", message, env=env)


class IsolatedGitTestCase(unittest.TestCase):
    """
    每个测试都在独立的临时目录中运行:
    - HOME / GIT_CONFIG_GLOBAL 指向临时目录，不读取真实的全局配置
    - GIT_CEILING_DIRECTORIES 阻止 git 向上发现外层仓库
    - 当前目录切换到临时目录
    """

    global_email: Optional[str] = DEFAULT_EMAIL

    def setUp(self):
        self.tmp_dir = os.path.realpath(tempfile.mkdtemp(prefix="weekly_report_"))
        self.addCleanup(shutil.rmtree, self.tmp_dir, ignore_errors=True)

        home = os.path.join(self.tmp_dir, "home")
        os.makedirs(home)
        self.global_config_path = os.path.join(home, ".gitconfig")
        with open(self.global_config_path, "w", encoding="utf-8") as f:
            if self.global_email:
                f.write(f"[user]\n\temail = {self.global_email}\n")

        env_patch = mock.patch.dict(
            os.environ,
            {
                "HOME": home,
                "XDG_CONFIG_HOME": os.path.join(home, ".config"),
                "GIT_CONFIG_GLOBAL": self.global_config_path,
                "GIT_CONFIG_NOSYSTEM": "1",
                "GIT_CEILING_DIRECTORIES": os.path.dirname(self.tmp_dir),
            },
        )
        env_patch.start()
        self.addCleanup(env_patch.stop)

        self.work_dir = os.path.join(self.tmp_dir, "work")
        os.makedirs(self.work_dir)
        old_cwd = os.getcwd()
        os.chdir(self.work_dir)
        self.addCleanup(os.chdir, old_cwd)

        self.repos_dir = os.path.join(self.tmp_dir, "repos")
        os.makedirs(self.repos_dir)

    def write_repos_conf(self, *lines: str) -> str:
        path = os.path.join(self.work_dir, "repos.conf")
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        return path
