"""
Placeholder discovery.

Finds every ``{{ KEY }}`` token in path names and text file contents below a
root directory.
"""

import logging
import re
from pathlib import Path
from typing import Set

from .walker import decode_text, read_bytes, walk_tree


logger = logging.getLogger(__name__)

# Keys cannot contain braces, so nested delimiters resolve to the innermost token
PLACEHOLDER_PATTERN = re.compile(r'\{\{\s*([^{}]+?)\s*\}\}')


def find_placeholders(text: str) -> Set[str]:
    """Return the distinct, trimmed, non-empty placeholder keys in ``text``."""
    keys = set()
    for match in PLACEHOLDER_PATTERN.finditer(text):
        key = match.group(1).strip()
        if key:
            keys.add(key)
    return keys


class PlaceholderScanner:
    """Collects placeholder keys from a directory tree."""

    def scan(self, root: Path) -> Set[str]:
        """
        Scan names and text contents below ``root``.

        Args:
            root: Directory to scan; its own name is not scanned

        Returns:
            Set of placeholder keys

        Raises:
            FileSystemError: If a directory or file cannot be read
        """
        keys: Set[str] = set()

        for entry in walk_tree(root):
            # Symlinks are never renamed, so their names are not scanned
            if not (entry.is_dir or entry.is_file):
                continue

            keys |= find_placeholders(entry.path.name)

            if not entry.is_file:
                continue

            text = decode_text(read_bytes(entry.path))
            if text is None:
                logger.debug(f"Skipping binary file: {entry.path}")
                continue
            keys |= find_placeholders(text)

        return keys
