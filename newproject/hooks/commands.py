"""
Run the recipe's shell commands inside the new project.

Each command runs through the platform shell in the project directory and
inherits the parent's standard streams.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List

from ..exceptions import CommandFailedError, NewProjectError
from .types import Context, Hook, Stage


logger = logging.getLogger(__name__)


def shell_argv(command: str) -> List[str]:
    """Build the argv that hands ``command`` to the platform shell."""
    if os.name == 'nt':
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


def run_command(command: str, cwd: Path) -> int:
    """
    Execute a single shell command with inherited stdio.

    Args:
        command: Command line passed to the shell
        cwd: Working directory

    Returns:
        The process return code (negative when killed by a signal)

    Raises:
        NewProjectError: If the shell could not be started
    """
    try:
        result = subprocess.run(shell_argv(command), cwd=str(cwd))
    except OSError as e:
        raise NewProjectError(f"Failed to run command `{command}`") from e
    return result.returncode


def run_commands(context: Context) -> None:
    """Run every command in ``recipe.commands``, stopping at the first failure."""
    commands = context.recipe.config("commands", List[str])
    if not commands:
        return

    for command in commands:
        logger.info(f"Running command: {command}")
        returncode = run_command(command, context.project_dir)

        if returncode < 0:
            raise CommandFailedError(command, signal=-returncode)
        if returncode != 0:
            raise CommandFailedError(command, exit_code=returncode)


RUN_COMMANDS = Hook(
    name="Run Commands",
    stages=frozenset({Stage.POST_CLONE}),
    action=run_commands,
)
