"""CLI command handlers."""

from .init import init_project
from .edit import edit_recipes

__all__ = ['init_project', 'edit_recipes']
