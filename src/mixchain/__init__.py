"""mixchain - compose behavior factories into class chains."""

from .chain import has_method, iter_layers, layer_names, missing_methods, prototype_of
from .compose import mix, mix_class, mix_object, mix_superclass
from .types import BehaviorFactory, Requirement

__version__ = "0.1.0"

__all__ = [
    "BehaviorFactory",
    "Requirement",
    "has_method",
    "iter_layers",
    "layer_names",
    "missing_methods",
    "mix",
    "mix_class",
    "mix_object",
    "mix_superclass",
    "prototype_of",
]
