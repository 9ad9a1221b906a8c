"""Declarative composites loaded from YAML recipe files.

A recipe file names composites and lists the references they are built from:

    composites:
      Cat:
        base: myapp.animals:Animal
        behaviors:
          - myapp.behaviors:make_pooper
          - myapp.behaviors:make_eater
      Digester:
        requires:
          - factory: myapp.behaviors:make_eater
            methods: [eat]

References use ``module:attribute`` (``module.attribute`` also works).
``requires`` entries are applied with mix_superclass directly over the base;
``behaviors`` are then layered on top, outermost first.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .compose import mix_class, mix_object, mix_superclass
from .types import Requirement

logger = logging.getLogger(__name__)

DEFAULT_BASE = "builtins:object"


def resolve_object(ref: str) -> Any:
    """Import the object named by a ``module:attribute`` reference.

    Raises:
        ValueError: If the reference is empty or has no attribute part.
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
    """
    ref = ref.strip()
    if ":" in ref:
        module_name, _, attr_path = ref.partition(":")
    else:
        module_name, _, attr_path = ref.rpartition(".")
    if not module_name or not attr_path:
        raise ValueError(f"Invalid reference (expected module:attribute): {ref!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


@dataclass
class Recipe:
    """A named composite described by references."""

    name: str
    base: str = DEFAULT_BASE
    behaviors: list[str] = field(default_factory=list)
    requires: list[tuple[str, tuple[str, ...]]] = field(default_factory=list)

    def build(self) -> type:
        """Resolve every reference and compose the class.

        A base that is not a class is used as a shared prototype object.
        """
        base = resolve_object(self.base)
        if not isinstance(base, type):
            base = mix_object(base)
        if self.requires:
            base = mix_superclass(
                base,
                *(Requirement(resolve_object(ref), methods) for ref, methods in self.requires),
            )
        composite = mix_class(base, *(resolve_object(ref) for ref in self.behaviors))
        logger.debug("Built recipe %s -> %s", self.name, composite.__name__)
        return composite


def _string_list(value: Any, what: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{what} must be a string or a list of strings")
    return list(value)


def parse_recipe(name: str, data: Any) -> Recipe:
    """Validate one composite entry and turn it into a Recipe.

    Raises:
        ValueError: If the entry is malformed.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("entry must be a mapping")

    unknown = set(data) - {"base", "behaviors", "requires"}
    if unknown:
        raise ValueError(f"unknown keys: {', '.join(sorted(unknown))}")

    base = data.get("base", DEFAULT_BASE)
    if not isinstance(base, str):
        raise ValueError("base must be a string reference")

    behaviors = _string_list(data.get("behaviors", []), "behaviors")

    requires: list[tuple[str, tuple[str, ...]]] = []
    raw_requires = data.get("requires", [])
    if not isinstance(raw_requires, list):
        raise ValueError("requires must be a list")
    for entry in raw_requires:
        if not isinstance(entry, dict) or not isinstance(entry.get("factory"), str):
            raise ValueError("each requires entry needs a 'factory' reference")
        methods = _string_list(entry.get("methods", []), "requires.methods")
        requires.append((entry["factory"], tuple(methods)))

    return Recipe(name=name, base=base, behaviors=behaviors, requires=requires)


def load_recipes(path: Path) -> dict[str, Recipe]:
    """Load all composites from a recipe file, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid YAML or a composite is malformed.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict) or not isinstance(data.get("composites") or {}, dict):
        raise ValueError(f"{path}: expected a 'composites' mapping")

    recipes: dict[str, Recipe] = {}
    for name, entry in (data.get("composites") or {}).items():
        try:
            recipes[str(name)] = parse_recipe(str(name), entry)
        except ValueError as e:
            raise ValueError(f"{path}: composite {name!r}: {e}") from e
    return recipes


def load_all_recipes(paths: list[Path]) -> dict[str, Recipe]:
    """Load several recipe files; later files override earlier names."""
    recipes: dict[str, Recipe] = {}
    for path in paths:
        loaded = load_recipes(path)
        for name in loaded.keys() & recipes.keys():
            logger.warning("Composite %s from %s overrides an earlier definition", name, path)
        recipes.update(loaded)
    return recipes


def build_all(recipes: dict[str, Recipe]) -> dict[str, type]:
    """Build every recipe, in order."""
    return {name: recipe.build() for name, recipe in recipes.items()}
