"""
Hook pipeline for the materialization engine.

Provides the stage model, the hook type and the ordered registry.
"""

from .types import Context, Hook, Stage
from .registry import HookRegistry


__all__ = [
    "Context",
    "Hook",
    "Stage",
    "HookRegistry",
]
