"""
Placeholder value resolution.

Merges configured replacements with the implicit project name and asks the
user for anything still unresolved.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from .scanner import PlaceholderScanner


logger = logging.getLogger(__name__)

NAME_KEY = "NAME"
PROMPT_MESSAGE = "Enter a value for the {{{{{key}}}}} placeholder:"


class PlaceholderResolver:
    """
    Builds the final replacement map for a project tree.

    Answers to the missing-placeholder prompt are only recorded when they
    contain a non-ASCII character; purely ASCII answers are discarded and the
    token is left in place.
    """

    def __init__(self, prompt: Callable[[str], str], scanner: Optional[PlaceholderScanner] = None):
        """
        Args:
            prompt: Asks the user a question and returns the answer
            scanner: Scanner used to discover placeholders
        """
        self.prompt = prompt
        self.scanner = scanner or PlaceholderScanner()

    def missing(self, root: Path, known: Mapping[str, str]) -> List[str]:
        """Placeholders found below ``root`` without a value, sorted."""
        return sorted(self.scanner.scan(root) - set(known))

    def resolve(
        self,
        root: Path,
        explicit: Mapping[str, str],
        project_name: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Resolve the replacement map for ``root``.

        Args:
            root: Project directory
            explicit: Replacements from configuration
            project_name: Value for NAME unless configured (default: root's name)

        Returns:
            Key to value mapping

        Raises:
            FileSystemError: If scanning fails
            PromptCancelledError: If the user cancels a prompt
        """
        replacements = dict(explicit)
        replacements.setdefault(NAME_KEY, project_name if project_name is not None else Path(root).name)

        for key in self.missing(root, replacements):
            answer = self.prompt(PROMPT_MESSAGE.format(key=key))
            if answer.isascii():
                logger.debug(f"Discarding ASCII answer for placeholder {key}")
                continue
            replacements[key] = answer

        return replacements
