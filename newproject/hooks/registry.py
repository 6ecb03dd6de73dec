"""
Hook registry for sequencing materialization steps.

Hooks run strictly in registration order, filtered by stage. The first
failure aborts the stage.
"""

import logging
from typing import Callable, List, Optional

from ..exceptions import HookError
from .types import Context, Hook, Stage


logger = logging.getLogger(__name__)


class HookRegistry:
    """
    Ordered collection of hooks.

    Insertion order is execution order within a stage.
    """

    def __init__(self):
        """Initialize empty hook registry."""
        self._hooks: List[Hook] = []

    @classmethod
    def with_defaults(cls, prompt: Optional[Callable[[str], str]] = None) -> "HookRegistry":
        """
        Build the default pipeline: remove .git, replace placeholders, run commands.

        Args:
            prompt: Prompt collaborator used for unresolved placeholders

        Returns:
            Registry with the default hooks registered
        """
        from .commands import RUN_COMMANDS
        from .placeholders import replace_placeholders
        from .remove_git import REMOVE_GIT

        registry = cls()
        registry.register(REMOVE_GIT)
        registry.register(replace_placeholders(prompt))
        registry.register(RUN_COMMANDS)
        return registry

    def register(self, hook: Hook) -> None:
        """
        Register a hook.

        Args:
            hook: Hook to append to the pipeline

        Raises:
            ValueError: If hook declares no stages
        """
        if not hook.stages:
            raise ValueError(f"Hook '{hook.name}' must declare at least one stage")

        self._hooks.append(hook)
        logger.debug(f"Registered hook: {hook.name}")

    @property
    def hooks(self) -> List[Hook]:
        """Registered hooks in registration order."""
        return list(self._hooks)

    def for_stage(self, stage: Stage) -> List[Hook]:
        """Hooks that run at ``stage``, in registration order."""
        return [hook for hook in self._hooks if hook.runs_at(stage)]

    def run(self, stage: Stage, context: Context) -> None:
        """
        Run every hook registered for ``stage``.

        Args:
            stage: Stage being executed
            context: Context shared by the hooks

        Raises:
            HookError: Wrapping the first hook failure
        """
        for hook in self.for_stage(stage):
            logger.info(f"Running hook: {hook.name}")
            try:
                hook.run(context)
            except Exception as e:
                raise HookError(hook.name) from e
