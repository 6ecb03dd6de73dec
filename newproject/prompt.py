"""Interactive terminal prompts."""

from typing import Optional, TextIO

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from .exceptions import PromptCancelledError


def ask(message: str, console: Optional[Console] = None, stream: Optional[TextIO] = None) -> str:
    """
    Ask a single question on the terminal and return the answer.

    The message is shown literally; brackets in it are not rich markup.

    Raises:
        PromptCancelledError: If input is closed or interrupted
    """
    try:
        return Prompt.ask(Text(message), console=console, stream=stream)
    except (EOFError, KeyboardInterrupt) as e:
        raise PromptCancelledError("Prompt cancelled") from e
