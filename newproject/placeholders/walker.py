"""
Directory walking for placeholder scanning and rewriting.

Walks everything under a root, including hidden entries and paths an ignore
file would exclude, but never descends into the VCS metadata directory and
never follows symlinks.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..exceptions import FileSystemError


VCS_DIR = ".git"


@dataclass(frozen=True)
class TreeEntry:
    """A path below the walk root and its file type (symlinks are neither)."""
    path: Path
    is_dir: bool
    is_file: bool


def walk_tree(root: Path) -> List[TreeEntry]:
    """
    List every entry below ``root`` (the root itself is excluded).

    Args:
        root: Directory to walk

    Returns:
        Entries in depth-first order, siblings sorted by name

    Raises:
        FileSystemError: If a directory cannot be listed
    """
    entries: List[TreeEntry] = []
    _walk(Path(root), entries)
    return entries


def _walk(directory: Path, entries: List[TreeEntry]) -> None:
    try:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FileSystemError(directory, "Failed to read directory entry") from e

    for child in children:
        if child.name == VCS_DIR:
            continue
        is_dir = child.is_dir(follow_symlinks=False)
        entry = TreeEntry(
            path=Path(child.path),
            is_dir=is_dir,
            is_file=child.is_file(follow_symlinks=False),
        )
        entries.append(entry)
        if is_dir:
            _walk(entry.path, entries)


def decode_text(data: bytes) -> Optional[str]:
    """Decode file bytes as UTF-8 text; None for binary data (NUL byte or invalid UTF-8)."""
    if b"\x00" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileSystemError(path, "Failed to read file") from e
