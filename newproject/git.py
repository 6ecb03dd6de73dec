"""
Template cloning through the ``git`` executable.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .exceptions import CloneError


logger = logging.getLogger(__name__)

GITHUB_URL = "https://github.com/{owner}/{repo}"


def normalize_repo(repo: str) -> str:
    """
    Turn a source locator into something ``git clone`` accepts.

    ``owner/repo`` expands to a GitHub URL. URLs, scp-style remotes and
    existing local paths are passed through unchanged.
    """
    trimmed = repo.strip()

    if Path(trimmed).exists() or "://" in trimmed or trimmed.startswith("git@"):
        return trimmed

    parts = trimmed.split('/')
    if len(parts) == 2 and all(parts):
        return GITHUB_URL.format(owner=parts[0], repo=parts[1])

    return trimmed


def is_local_repo(repo_url: str) -> bool:
    return repo_url.startswith("file://") or Path(repo_url).exists()


def build_clone_command(repo_url: str, branch: Optional[str], destination: Path) -> List[str]:
    command = ["git", "clone", "--quiet"]
    if not is_local_repo(repo_url):
        command += ["--depth", "1"]
    if branch:
        command += ["--branch", branch]
    command += [repo_url, str(destination)]
    return command


def clone_repo(repo: str, branch: Optional[str], destination: Path) -> None:
    """
    Clone ``repo`` into ``destination``.

    Args:
        repo: Source locator
        branch: Optional branch to check out
        destination: Target directory (absent or empty)

    Raises:
        CloneError: If git is unavailable or the clone fails
    """
    repo_url = normalize_repo(repo)
    destination = Path(destination)
    existed = destination.exists()

    command = build_clone_command(repo_url, branch, destination)
    env = dict(os.environ, GIT_TERMINAL_PROMPT="0")

    logger.info(f"Cloning {repo_url} into {destination}")
    try:
        result = subprocess.run(command, env=env, capture_output=True, text=True)
    except OSError as e:
        raise CloneError(f"Failed to run git: {e}") from e

    if result.returncode != 0:
        if not existed and destination.exists():
            shutil.rmtree(destination, ignore_errors=True)
        stderr = result.stderr.strip()
        message = f"Failed to clone template repository {repo_url}"
        raise CloneError(f"{message}: {stderr}" if stderr else message)
