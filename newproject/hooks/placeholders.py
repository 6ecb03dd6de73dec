"""Replace ``{{KEY}}`` placeholders in the cloned template."""

import logging
from typing import Callable, Dict, Optional

from ..placeholders import PlaceholderResolver, Replacer
from ..prompt import ask
from .types import Context, Hook, Stage


logger = logging.getLogger(__name__)


def load_replacements(context: Context) -> Dict[str, str]:
    """Explicit replacements from ``recipe.replacements``."""
    return context.recipe.config("replacements", Dict[str, str]) or {}


def replace_placeholders(prompt: Optional[Callable[[str], str]] = None) -> Hook:
    """
    Build the placeholder replacement hook.

    Args:
        prompt: Collaborator asked for placeholders without a configured value
            (default: interactive terminal prompt)

    Returns:
        Hook running at post-clone
    """
    prompt = prompt or ask

    def action(context: Context) -> None:
        resolver = PlaceholderResolver(prompt)
        replacements = resolver.resolve(
            context.project_dir,
            load_replacements(context),
            context.project_name,
        )
        logger.debug(f"Resolved {len(replacements)} placeholder(s)")
        Replacer(replacements).apply(context.project_dir)

    return Hook(
        name="Replace Placeholders",
        stages=frozenset({Stage.POST_CLONE}),
        action=action,
    )
