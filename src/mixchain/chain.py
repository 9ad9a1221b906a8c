"""Inspect composed class chains.

A composite built by the composers is a linear chain of classes linked
through ``__base__``. These helpers walk that chain and answer whether a
method is already reachable from instances of a class.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

# Attribute under which mix_object stores the shared prototype object.
PROTOTYPE_ATTR = "__mixchain_prototype__"

_MISSING = object()


def iter_layers(target: Any) -> Iterator[type]:
    """Yield the classes of a chain, outermost first, ending with ``object``.

    Accepts either a class or an instance.
    """
    cls = target if isinstance(target, type) else type(target)
    while cls is not None:
        yield cls
        cls = cls.__base__


def layer_names(target: Any) -> list[str]:
    """Get the class names of a chain, outermost first."""
    return [cls.__name__ for cls in iter_layers(target)]


def prototype_of(cls: type) -> Any:
    """Get the prototype object attached by mix_object, or None."""
    for klass in cls.__mro__:
        if PROTOTYPE_ATTR in vars(klass):
            return vars(klass)[PROTOTYPE_ATTR]
    return None


def is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def lookup_prototype(prototype: Any, name: str) -> Any:
    """Look up a name on a prototype object.

    Mappings are looked up by key, anything else by attribute.

    Raises:
        AttributeError: If the prototype has no such member.
    """
    if isinstance(prototype, Mapping):
        try:
            return prototype[name]
        except KeyError:
            raise AttributeError(name) from None
    return getattr(prototype, name)


def has_method(cls: type, name: str) -> bool:
    """Check whether instances of a class resolve ``name`` to a callable."""
    member = getattr(cls, name, _MISSING)
    if member is not _MISSING:
        return callable(member)

    # Instances never delegate dunder names to the prototype.
    prototype = prototype_of(cls)
    if prototype is None or is_dunder(name):
        return False
    try:
        return callable(lookup_prototype(prototype, name))
    except AttributeError:
        return False


def missing_methods(cls: type, names: Iterable[str]) -> list[str]:
    """Get the names that instances of ``cls`` cannot resolve, order preserved."""
    return [name for name in names if not has_method(cls, name)]
