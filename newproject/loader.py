"""Recipe loader and declaration validation."""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from newproject.exceptions import RecipeNotFoundError, RecipeValidationError, ValidationError
from newproject.recipe import Recipe


logger = logging.getLogger(__name__)

RECIPES_DIR_ENV = "NEW_RECIPES_DIR"
APP_DIR_NAME = "newproject"
RECIPE_SUFFIXES = {".yml", ".yaml"}


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps 'on', 'off', 'yes' and 'no' as strings."""
    pass


# Only 'true'/'false' stay booleans; replacement values like 'yes' or 'on' must
# survive as the literal text the recipe author wrote
PreservingLoader.yaml_implicit_resolvers = dict(PreservingLoader.yaml_implicit_resolvers)
for _first in "oOyYnN":
    if _first in PreservingLoader.yaml_implicit_resolvers:
        PreservingLoader.yaml_implicit_resolvers[_first] = [
            (tag, regexp) for tag, regexp in PreservingLoader.yaml_implicit_resolvers[_first]
            if tag != 'tag:yaml.org,2002:bool'
        ]


def user_config_dir() -> Path:
    """Per-user configuration directory for the current platform."""
    if sys.platform == 'win32':
        appdata = os.environ.get('APPDATA')
        return Path(appdata) if appdata else Path.home() / 'AppData' / 'Roaming'
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support'
    xdg = os.environ.get('XDG_CONFIG_HOME')
    return Path(xdg) if xdg else Path.home() / '.config'


def recipes_dir() -> Path:
    """Directory holding recipe declarations (``$NEW_RECIPES_DIR`` overrides)."""
    override = os.environ.get(RECIPES_DIR_ENV)
    if override:
        return Path(override)
    return user_config_dir() / APP_DIR_NAME / 'recipes'


class RecipeLoader:
    """Loads and validates recipe declarations from a recipes directory."""

    KNOWN_FIELDS = {'name', 'repo', 'branch'}

    def __init__(self, directory: Optional[Path] = None):
        """Initialize loader with the recipes directory (default: ``recipes_dir()``)."""
        self.directory = Path(directory) if directory else recipes_dir()
        self.errors: List[ValidationError] = []

    def recipe_files(self) -> List[Path]:
        """Recipe files in the directory, sorted; creates the directory if needed."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RecipeNotFoundError(f"Failed to create recipes directory {self.directory}: {e}") from e

        return sorted(
            path for path in self.directory.iterdir()
            if path.is_file() and path.suffix in RECIPE_SUFFIXES
        )

    def load_all(self) -> List[Recipe]:
        """Load every recipe in the directory; the first invalid one raises."""
        return [self.load(path) for path in self.recipe_files()]

    def find(self, name: str) -> Recipe:
        """
        Find a recipe by name.

        Raises:
            RecipeNotFoundError: If no recipe has that name
            RecipeValidationError: If a recipe file is invalid
        """
        for recipe in self.load_all():
            if recipe.name == name:
                return recipe

        raise RecipeNotFoundError(
            f"Recipe {name} not found. Make sure you have a recipe named {name} "
            f"in your recipes directory ({self.directory})"
        )

    def load(self, recipe_path: Path) -> Recipe:
        """Load and validate a single recipe file."""
        self.errors = []
        source = str(recipe_path)

        try:
            with open(recipe_path, 'r', encoding='utf-8') as f:
                document = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to read recipe: {e}")
            self._raise_validation_errors(source)

        return self.parse(document, source)

    def parse(self, document: Any, source: Optional[str] = None) -> Recipe:
        """Validate a parsed declaration and build the Recipe."""
        self.errors = []

        if not isinstance(document, dict) or 'recipe' not in document:
            self._add_error("Recipe file must contain a top-level 'recipe' mapping")
            self._raise_validation_errors(source)

        body = document['recipe']
        if not isinstance(body, dict):
            self._add_error("must be a mapping", "recipe")
            self._raise_validation_errors(source)

        for key in document:
            if key != 'recipe':
                self._add_error(f"Unknown top-level field '{key}'")

        self._validate_required_string(body, 'name')
        self._validate_required_string(body, 'repo')

        branch = body.get('branch')
        if branch is not None and not isinstance(branch, str):
            self._add_error(f"must be a string, got {type(branch).__name__}", "recipe.branch")

        for key in body:
            if not isinstance(key, str):
                self._add_error(f"config keys must be strings, got {key!r}", "recipe")

        if self.errors:
            self._raise_validation_errors(source)

        extra: Dict[str, Any] = {k: v for k, v in body.items() if k not in self.KNOWN_FIELDS}
        logger.debug(f"Loaded recipe '{body['name']}' from {source or '<memory>'}")

        return Recipe(
            name=body['name'],
            repo=body['repo'],
            branch=branch,
            extra=extra,
        )

    def _validate_required_string(self, body: Dict[str, Any], field: str):
        path = f"recipe.{field}"
        if field not in body:
            self._add_error("is required", path)
        elif not isinstance(body[field], str):
            self._add_error(f"must be a string, got {type(body[field]).__name__}", path)
        elif not body[field].strip():
            self._add_error("cannot be empty", path)

    def _add_error(self, message: str, path: str = ""):
        """Add a validation error."""
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self, source: Optional[str] = None):
        """Raise collected validation errors."""
        raise RecipeValidationError(self.errors, source)
