"""
Hook type definitions.

A hook is a named function paired with the stages it runs at. The registry
owns hooks for the lifetime of one materialization run.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, FrozenSet

if TYPE_CHECKING:
    from ..recipe import Recipe


class Stage(str, Enum):
    """Fixed points in the materialization timeline."""
    PRE_CLONE = "pre_clone"
    POST_CLONE = "post_clone"


@dataclass(frozen=True)
class Context:
    """
    View handed to every hook during one registry run.

    Attributes:
        recipe: Recipe being materialized (read-only)
        project_dir: Absolute target directory
        project_name: Resolved project name
    """
    recipe: "Recipe"
    project_dir: Path
    project_name: str


@dataclass(frozen=True)
class Hook:
    """
    A named, stage-scoped unit of behavior.

    Attributes:
        name: Display name used in logs and failure messages
        stages: Stages this hook runs at
        action: Callable performing the hook's work
    """
    name: str
    stages: FrozenSet[Stage]
    action: Callable[[Context], None]

    def runs_at(self, stage: Stage) -> bool:
        return stage in self.stages

    def run(self, context: Context) -> None:
        self.action(context)
