"""
Placeholder substitution.

Rewrites a project tree in three passes: directory names (deepest first),
file names, then text file contents. All ``{{KEY}}`` literals are compiled
into one alternation so every input is rewritten in a single pass and a
substituted value is never substituted again.
"""

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..exceptions import FileSystemError
from .walker import decode_text, read_bytes, walk_tree


logger = logging.getLogger(__name__)


def placeholder_literal(key: str) -> str:
    """The exact token substituted for ``key``."""
    return "{{" + key + "}}"


class Replacer:
    """
    Substitutes placeholder literals in names and file contents.

    The pass order matters: directory renames change the paths the file pass
    sees, and both change the paths the content pass sees.
    """

    def __init__(self, replacements: Mapping[str, str]):
        """
        Args:
            replacements: Placeholder key to replacement value
        """
        self.replacements: Dict[str, str] = {
            placeholder_literal(key): value for key, value in replacements.items()
        }

        if self.replacements:
            pattern = "|".join(re.escape(literal) for literal in sorted(self.replacements))
            self.pattern: Optional[re.Pattern] = re.compile(pattern)
        else:
            self.pattern = None

    def apply(self, root: Path) -> None:
        """
        Rewrite everything below ``root``; the root itself is never renamed.

        Raises:
            FileSystemError: On the first read, rename or write failure.
                Work already done is not rolled back; re-running is safe.
        """
        root = Path(root)
        self.rename_directories(root)
        self.rename_files(root)
        self.replace_file_contents(root)

    def substitute(self, text: str) -> Optional[str]:
        """
        Substitute placeholders in ``text``.

        Returns:
            The rewritten text, or None if nothing was substituted
        """
        if self.pattern is None:
            return None

        replaced = False

        def replace_match(match):
            nonlocal replaced
            needle = match.group(0)
            value = self.replacements.get(needle)
            if value is None:
                return needle
            replaced = True
            return value

        result = self.pattern.sub(replace_match, text)
        return result if replaced else None

    def rename_directories(self, root: Path) -> None:
        dirs = [entry.path for entry in walk_tree(root) if entry.is_dir]
        # Deepest first so renaming a child never invalidates a pending parent path
        dirs.sort(key=lambda path: len(path.relative_to(root).parts), reverse=True)

        for directory in dirs:
            self._rename(directory)

    def rename_files(self, root: Path) -> None:
        for entry in walk_tree(root):
            if entry.is_file:
                self._rename(entry.path)

    def replace_file_contents(self, root: Path) -> None:
        for entry in walk_tree(root):
            if not entry.is_file:
                continue

            text = decode_text(read_bytes(entry.path))
            if text is None:
                continue

            replaced = self.substitute(text)
            if replaced is None:
                continue

            _write_atomic(entry.path, replaced.encode("utf-8"))
            logger.debug(f"Rewrote {entry.path}")

    def _rename(self, path: Path) -> None:
        new_name = self.substitute(path.name)
        if new_name is None or new_name == path.name:
            return

        if not _is_plain_name(new_name):
            raise FileSystemError(path, f"Refusing to rename to {new_name!r} outside its directory:")

        target = path.parent / new_name
        if os.path.lexists(target):
            raise FileSystemError(target, f"Refusing to rename {path} over existing path")

        try:
            path.rename(target)
        except OSError as e:
            raise FileSystemError(path, "Failed to rename") from e
        logger.debug(f"Renamed {path} -> {target}")


def _is_plain_name(name: str) -> bool:
    """True if ``name`` is a single path component that stays in its parent."""
    if name in ("", ".", "..") or "\x00" in name:
        return False
    separators = [sep for sep in (os.sep, os.altsep, "/") if sep]
    return not any(sep in name for sep in separators)


def _write_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temp file and rename, keeping the file mode."""
    fd, temp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
    except OSError as e:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise FileSystemError(path, "Failed to write file") from e
