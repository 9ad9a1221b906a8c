"""Type definitions for mixchain.

Shared aliases and dataclasses used by the composers and the recipe loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

# A behavior factory takes a base class and returns a subclass of it.
BehaviorFactory = Callable[[type], type]


@dataclass(frozen=True)
class Requirement:
    """A behavior factory paired with the methods it is expected to contribute."""

    factory: BehaviorFactory
    methods: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        methods = self.methods
        if isinstance(methods, str):
            methods = (methods,)
        object.__setattr__(self, "methods", tuple(methods))

    @classmethod
    def coerce(cls, value: Any) -> "Requirement":
        """Build a Requirement from a Requirement, (factory, methods) pair, or mapping.

        Raises:
            TypeError: If the value has none of the accepted shapes.
        """
        if isinstance(value, Requirement):
            return value
        if isinstance(value, Mapping):
            if "factory" not in value:
                raise TypeError(f"Requirement mapping needs a 'factory' key: {value!r}")
            return cls(value["factory"], value.get("methods", ()))
        if isinstance(value, tuple) and len(value) == 2:
            return cls(value[0], value[1])
        raise TypeError(f"Not a requirement: {value!r}")
