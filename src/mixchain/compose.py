"""Compose behavior factories into a single class chain.

A behavior factory is a callable taking a base class and returning a subclass
of it. The composers fold an ordered list of factories into one chain. The
list reads outermost first: the first factory produces the most derived class
and the last one wraps the base directly.

    Cat = mix(make_pooper, make_eater, make_speaker)
    # Cat -> Pooper -> Eater -> Speaker -> object

Layers forward constructor arguments by consuming a leading prefix and passing
the rest on with ``super().__init__(*rest, **kwargs)``, so the argument list
of the composite also reads outermost first.
"""

from __future__ import annotations

import logging
import types
from functools import reduce
from typing import Any

from .chain import PROTOTYPE_ATTR, has_method, is_dunder, lookup_prototype
from .types import BehaviorFactory, Requirement

logger = logging.getLogger(__name__)


def _factory_name(factory: Any) -> str:
    return getattr(factory, "__qualname__", None) or repr(factory)


def _apply(cls: type, factory: BehaviorFactory) -> type:
    composed = factory(cls)
    logger.debug(
        "Applied %s: %s -> %s", _factory_name(factory), cls.__name__, composed.__name__
    )
    return composed


def mix_class(base: type, *factories: BehaviorFactory) -> type:
    """Fold factories over a base class, last factory innermost.

    Returns ``base`` itself when no factories are given. Errors raised by a
    factory (or by calling something that is not callable) propagate as-is.
    """
    return reduce(_apply, reversed(factories), base)


def _make_object_base(base_object: Any) -> type:
    """Create an empty class whose instances fall back to ``base_object``."""

    def __getattr__(self, name):
        if is_dunder(name):
            raise AttributeError(name)
        try:
            value = lookup_prototype(base_object, name)
        except AttributeError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            ) from None
        if isinstance(value, types.FunctionType):
            return value.__get__(self, type(self))
        if isinstance(value, types.MethodType) and value.__self__ is base_object:
            return value.__func__.__get__(self, type(self))
        return value

    return type(
        "ObjectBase",
        (),
        {
            PROTOTYPE_ATTR: base_object,
            "__getattr__": __getattr__,
            "__doc__": "Synthetic base delegating missing attributes to a prototype object.",
        },
    )


def mix_object(base_object: Any, *factories: BehaviorFactory) -> type:
    """Compose factories over a plain object used as a shared prototype.

    The object is held by reference. Members added to it later are visible
    on every instance of the composite.
    """
    return mix_class(_make_object_base(base_object), *factories)


def mix(*factories: BehaviorFactory) -> type:
    """Compose factories over ``object``."""
    return mix_class(object, *factories)


def mix_superclass(existing: type, *requirements: Any) -> type:
    """Compose only the requirements whose methods ``existing`` lacks.

    Each requirement is a ``Requirement``, a ``(factory, methods)`` pair or a
    mapping with ``factory`` and ``methods`` keys. Method presence is checked
    once against ``existing``; requirements kept by that check are applied in
    their original order even if they overlap each other. Returns ``existing``
    unchanged when every requirement is already satisfied.
    """
    kept: list[BehaviorFactory] = []
    for requirement in map(Requirement.coerce, requirements):
        if all(has_method(existing, name) for name in requirement.methods):
            logger.debug(
                "Skipping %s: %s already provides %s",
                _factory_name(requirement.factory),
                existing.__name__,
                ", ".join(requirement.methods),
            )
            continue
        kept.append(requirement.factory)
    return mix_class(existing, *kept)
