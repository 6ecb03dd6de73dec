"""newproject exceptions."""

from typing import List, Optional
from dataclasses import dataclass


class NewProjectError(Exception):
    """Base class for every error raised while materializing a project."""
    exit_code = 1


@dataclass
class ValidationError:
    """Single recipe validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class RecipeValidationError(NewProjectError):
    """Raised when a recipe declaration fails validation.

    The loader collects every problem it finds before raising, so the CLI can
    report them all at once and map to the validation exit code.
    """

    def __init__(self, errors: List[ValidationError], source: Optional[str] = None):
        self.errors = errors
        self.source = source
        self.exit_code = 2

        messages = []
        for error in errors:
            location = f"{error.path}: " if error.path else ""
            messages.append(f"Validation error: {location}{error.message}")

        prefix = f"Invalid recipe {source}\n" if source else ""
        super().__init__(prefix + "\n".join(messages))


class RecipeNotFoundError(NewProjectError):
    """Raised when no recipe with the requested name exists."""


class RecipeConfigError(NewProjectError):
    """A recipe config value is present but has the wrong shape."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Failed to parse recipe.{key} config: {message}")


class FileSystemError(NewProjectError):
    """A read, rename or write inside the project tree failed."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{message} {path}")


class HookError(NewProjectError):
    """Wraps the failure of a single hook with its display name."""

    MARKER = "🔴"

    def __init__(self, hook_name: str):
        self.hook_name = hook_name
        super().__init__(f"{self.MARKER} {hook_name} FAILED")


class CommandFailedError(NewProjectError):
    """A configured shell command exited non-zero or died to a signal."""

    def __init__(self, command: str, exit_code: Optional[int] = None, signal: Optional[int] = None):
        self.command = command
        self.returncode = exit_code
        self.signal = signal
        if signal is not None:
            message = f"Command `{command}` terminated by signal {signal}"
        else:
            message = f"Command `{command}` failed with exit code {exit_code}"
        super().__init__(message)


class CloneError(NewProjectError):
    """Cloning the template repository failed."""


class PromptCancelledError(NewProjectError):
    """The user cancelled an interactive prompt."""


class ProjectDirectoryError(NewProjectError):
    """The target project directory is missing or unusable."""


def format_error_chain(error: BaseException) -> str:
    """Render an error followed by each chained cause on its own line."""
    lines = [str(error)]
    seen = {id(error)}
    cause = error.__cause__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"Caused by: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)
