"""Tests for composing over a prototype object."""

from types import SimpleNamespace

import pytest
from animal_behaviors import Describer, make_eater, make_speaker

from mixchain import mix_object, prototype_of


class TestPrototypeLookup:
    def test_mapping_values_resolve_on_instances(self):
        Composite = mix_object({"legs": 4}, make_speaker)
        assert Composite("meow").legs == 4

    def test_object_attributes_resolve_on_instances(self):
        Composite = mix_object(SimpleNamespace(legs=4), make_speaker)
        assert Composite("meow").legs == 4

    def test_functions_are_bound_to_the_instance(self):
        proto = {"describe": lambda self: f"says {self.speak()}"}
        Composite = mix_object(proto, make_speaker)

        assert Composite("meow").describe() == "says meow..."

    def test_instance_state_shadows_prototype(self):
        Composite = mix_object({"sound": "default"}, make_speaker)
        assert Composite("meow").sound == "meow"

    def test_layer_methods_shadow_prototype(self):
        Composite = mix_object({"speak": lambda self: "proto"}, make_speaker)
        assert Composite("meow").speak() == "meow..."

    def test_missing_attribute_raises(self):
        Composite = mix_object({}, make_speaker)
        with pytest.raises(AttributeError, match="wings"):
            Composite("meow").wings

    def test_dunder_names_are_not_delegated(self):
        Composite = mix_object({"__secret__": 1}, make_speaker)
        assert not hasattr(Composite("meow"), "__secret__")

    def test_no_factories_gives_synthetic_base(self):
        proto = {"legs": 4}
        Base = mix_object(proto)

        assert Base.__name__ == "ObjectBase"
        assert Base().legs == 4
        assert prototype_of(Base) is proto


class TestSharedReference:
    def test_later_mutation_visible_on_new_instances(self):
        proto = {}
        Composite = mix_object(proto, make_eater, make_speaker)

        proto["legs"] = 4
        assert Composite(10, 0.9, "meow").legs == 4

    def test_later_mutation_visible_on_existing_instances(self):
        proto = SimpleNamespace()
        Composite = mix_object(proto, make_speaker)
        cat = Composite("meow")

        proto.legs = 4
        assert cat.legs == 4

    def test_prototype_shared_across_composites(self):
        proto = {}
        First = mix_object(proto, make_speaker)
        Second = mix_object(proto, make_eater)

        proto["legs"] = 2
        assert First("meow").legs == 2
        assert Second(10, 0.9).legs == 2
        assert prototype_of(First) is prototype_of(Second) is proto

    def test_prototype_is_not_copied(self):
        proto = {"legs": 4}
        Composite = mix_object(proto, make_speaker)

        assert prototype_of(Composite) is proto


class TestClassInstancePrototype:
    def test_bound_methods_rebind_to_the_instance(self):
        Composite = mix_object(Describer(), make_speaker)
        assert Composite("meow").describe() == "says meow..."

    def test_methods_bound_elsewhere_are_left_alone(self):
        other = Describer()
        Composite = mix_object({"describe": other.describe}, make_speaker)

        assert Composite("meow").describe.__self__ is other
