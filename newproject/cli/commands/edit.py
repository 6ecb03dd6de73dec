"""Edit command: open the recipes directory in an editor."""

import logging
import subprocess
from argparse import Namespace
from pathlib import Path

from newproject.exceptions import NewProjectError
from newproject.loader import recipes_dir

from .common import configure_logging, report_error


logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "code"


def edit_recipes(args: Namespace) -> int:
    """Launch the editor on the recipes directory."""
    configure_logging(args)

    directory = Path(args.recipes_dir) if args.recipes_dir else recipes_dir()
    editor = args.editor or DEFAULT_EDITOR

    try:
        directory.mkdir(parents=True, exist_ok=True)
        try:
            result = subprocess.run([editor, str(directory)])
        except OSError as e:
            raise NewProjectError(f"Failed to launch editor {editor}") from e

        if result.returncode != 0:
            raise NewProjectError("Editor exited with a non-zero status")
        return 0

    except NewProjectError as e:
        return report_error(e)
