"""Init command: materialize a recipe into a new project directory."""

import logging
import os
from argparse import Namespace
from pathlib import Path
from typing import Callable, Optional

from newproject.exceptions import NewProjectError, ProjectDirectoryError, RecipeNotFoundError
from newproject.loader import RecipeLoader
from newproject.prompt import ask

from .common import configure_logging, report_error


logger = logging.getLogger(__name__)


def resolve_directory(directory: Optional[str], prompt: Callable[[str], str] = ask) -> Path:
    """
    Absolute project directory, asking for a name when none was given.

    Symlinks are not resolved.
    """
    if not directory:
        try:
            directory = prompt("What is your project named?")
        except NewProjectError:
            directory = None

    if not directory or not directory.strip():
        raise ProjectDirectoryError("Missing project directory")

    return Path(os.path.abspath(directory.strip()))


def project_name(directory: Path) -> str:
    name = directory.name
    if not name:
        raise ProjectDirectoryError(f"Invalid project directory {directory}")
    return name


def ensure_directory_available(directory: Path) -> None:
    """
    Check that ``directory`` is absent or empty and create missing parents.

    Raises:
        ProjectDirectoryError: If the path is a non-empty directory or not a directory
    """
    if directory.is_dir():
        try:
            has_entries = any(directory.iterdir())
        except OSError as e:
            raise ProjectDirectoryError(f"Failed to read project directory {directory}") from e
        if has_entries:
            raise ProjectDirectoryError("Project directory already exists and is not empty")
        return

    if directory.exists():
        raise ProjectDirectoryError("Project path already exists and is not a directory")

    try:
        directory.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProjectDirectoryError(f"Failed to create parent directory {directory.parent}") from e


def init_project(args: Namespace) -> int:
    """Run the init command."""
    configure_logging(args)

    try:
        loader = RecipeLoader(Path(args.recipes_dir) if args.recipes_dir else None)

        if not args.template:
            raise RecipeNotFoundError(
                f"Missing template recipe. Add one to your recipes directory ({loader.directory})"
            )
        recipe = loader.find(args.template)

        directory = resolve_directory(args.directory)
        ensure_directory_available(directory)
        name = project_name(directory)

        recipe.run(directory, name)
        logger.info(f"Created {name} at {directory}")
        return 0

    except NewProjectError as e:
        return report_error(e)
