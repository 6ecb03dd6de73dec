"""
Recipe model and the materialization orchestrator.

A recipe names a template repository plus an open bag of configuration that
hooks read through typed lookups.
"""

import copy
import logging
import typing
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from .exceptions import RecipeConfigError
from .git import clone_repo
from .hooks import Context, HookRegistry, Stage
from .prompt import ask


logger = logging.getLogger(__name__)

CloneFn = Callable[[str, Optional[str], Path], None]
PromptFn = Callable[[str], str]


@dataclass(frozen=True)
class Recipe:
    """
    A named template descriptor.

    Attributes:
        name: Recipe identifier used on the command line
        repo: Template source locator (owner/repo, URL or local path)
        branch: Optional branch to check out
        extra: Read-only configuration bag consumed by hooks
    """
    name: str
    repo: str
    branch: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'extra', MappingProxyType(dict(self.extra)))

    def config(self, key: str, expected: Any = Any) -> Optional[Any]:
        """
        Typed lookup into the configuration bag.

        Args:
            key: Top-level config key
            expected: Expected type, e.g. ``str``, ``List[str]`` or ``Dict[str, str]``

        Returns:
            A copy of the value, or None if the key is absent

        Raises:
            RecipeConfigError: If the value does not conform to ``expected``
        """
        if key not in self.extra:
            return None

        value = self.extra[key]
        problem = _check_type(value, expected, key)
        if problem:
            raise RecipeConfigError(key, problem)

        return copy.deepcopy(value)

    def run(
        self,
        directory: Path,
        name: str,
        registry: Optional[HookRegistry] = None,
        clone: CloneFn = clone_repo,
        prompt: PromptFn = ask,
    ) -> None:
        """
        Materialize this recipe into ``directory``.

        Runs pre-clone hooks, clones the template, then runs post-clone hooks.
        The first failure aborts the run.
        """
        if registry is None:
            registry = HookRegistry.with_defaults(prompt=prompt)
        context = Context(recipe=self, project_dir=Path(directory), project_name=name)

        logger.info(f"Materializing recipe '{self.name}' into {directory}")
        registry.run(Stage.PRE_CLONE, context)
        clone(self.repo, self.branch, Path(directory))
        registry.run(Stage.POST_CLONE, context)
        logger.info(f"Recipe '{self.name}' materialized")


def _type_name(expected: Any) -> str:
    if typing.get_origin(expected) is not None:
        return str(expected).replace('typing.', '')
    return getattr(expected, '__name__', str(expected))


def _check_type(value: Any, expected: Any, path: str) -> Optional[str]:
    """Return a message naming the offending key path, or None if ``value`` conforms."""
    if expected is Any:
        return None

    origin = typing.get_origin(expected)

    if origin in (list, typing.List):
        if not isinstance(value, list):
            return f"recipe.{path}: expected {_type_name(expected)}, got {type(value).__name__}"
        args = typing.get_args(expected)
        item_type = args[0] if args else Any
        for i, item in enumerate(value):
            problem = _check_type(item, item_type, f"{path}[{i}]")
            if problem:
                return problem
        return None

    if origin in (dict, typing.Dict):
        if not isinstance(value, dict):
            return f"recipe.{path}: expected {_type_name(expected)}, got {type(value).__name__}"
        args = typing.get_args(expected)
        key_type, value_type = args if args else (Any, Any)
        for k, v in value.items():
            problem = _check_type(k, key_type, f"{path}.{k}")
            if problem:
                return problem
            problem = _check_type(v, value_type, f"{path}.{k}")
            if problem:
                return problem
        return None

    # bool is an int subclass; never accept it where a number is expected
    if expected in (int, float) and isinstance(value, bool):
        return f"recipe.{path}: expected {_type_name(expected)}, got bool"
    if expected is float and isinstance(value, int):
        return None
    if not isinstance(value, expected):
        return f"recipe.{path}: expected {_type_name(expected)}, got {type(value).__name__}"
    return None
