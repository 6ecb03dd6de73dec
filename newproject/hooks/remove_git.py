"""Remove the template's VCS metadata after cloning."""

import logging
import shutil

from ..exceptions import FileSystemError
from ..placeholders.walker import VCS_DIR
from .types import Context, Hook, Stage


logger = logging.getLogger(__name__)


def remove_git(context: Context) -> None:
    """Delete ``<project_dir>/.git``; absent metadata is not an error."""
    git_dir = context.project_dir / VCS_DIR
    if not git_dir.is_dir():
        logger.debug(f"No {VCS_DIR} directory in {context.project_dir}")
        return

    try:
        shutil.rmtree(git_dir)
    except OSError as e:
        raise FileSystemError(git_dir, "Failed to remove directory") from e
    logger.debug(f"Removed {git_dir}")


REMOVE_GIT = Hook(
    name="Remove .git directory from template",
    stages=frozenset({Stage.POST_CLONE}),
    action=remove_git,
)
