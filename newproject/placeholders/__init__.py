"""
Placeholder scanning, resolution and substitution.
"""

from .scanner import PLACEHOLDER_PATTERN, PlaceholderScanner, find_placeholders
from .resolver import NAME_KEY, PlaceholderResolver
from .replacer import Replacer, placeholder_literal

__all__ = [
    "PLACEHOLDER_PATTERN",
    "PlaceholderScanner",
    "find_placeholders",
    "NAME_KEY",
    "PlaceholderResolver",
    "Replacer",
    "placeholder_literal",
]
