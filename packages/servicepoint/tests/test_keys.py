from enum import Enum

import pytest

from servicepoint.keys import (
    CandidateKey,
    ImplementationHandle,
    RegistrationKey,
    TaggedProperty,
    TaggedValue,
    is_scalar,
    stringify,
)
from zoo import Animal, Cat, PokemonType


class Color(str, Enum):
    RED = "r"


def test_stringify_normalizes_scalars():
    assert stringify(PokemonType.PIKACHU) == "PIKACHU"
    assert stringify(Color.RED) == "RED"
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(42) == "42"
    assert stringify(1.5) == "1.5"
    assert stringify("x") == "x"


def test_stringify_rejects_non_scalars():
    assert not is_scalar([1])
    with pytest.raises(TypeError):
        stringify([1])


def test_tagged_value_of_strips_tag_and_normalizes_value():
    assert TaggedValue.of(" type ", PokemonType.PIKACHU) == TaggedValue("type", "PIKACHU")
    assert str(TaggedValue("type", "PIKACHU")) == "type=PIKACHU"
    with pytest.raises(ValueError):
        TaggedValue.of("  ", 1)


def test_registration_key_equality_ignores_constraint_order():
    a = RegistrationKey.of("animals", Cat, {"a": 1, "b": True})
    b = RegistrationKey.of("animals", Cat, [("b", "true"), ("a", "1")])

    assert a == b
    assert hash(a) == hash(b)
    assert a.label == "animals:Cat[a=1,b=true]"
    assert a != RegistrationKey.of("animals", Animal, {"a": 1, "b": True})


def test_registration_key_validation():
    with pytest.raises(ValueError):
        RegistrationKey("", Cat)
    with pytest.raises(TypeError):
        RegistrationKey("animals", Cat("Tigger"))
    key = RegistrationKey("animals", Cat, {TaggedValue("a", "1")})
    assert isinstance(key.constraints, frozenset)


def test_implementation_handle_requires_name():
    assert str(ImplementationHandle("svc")) == "svc"
    with pytest.raises(ValueError):
        ImplementationHandle(" ")


def test_tagged_property_replaces_only_from_subtypes():
    base = TaggedProperty(Animal, "color", 1, "red")
    derived = TaggedProperty(Cat, "color", 0, "blue")

    assert derived.can_replace(base)
    assert not base.can_replace(derived)
    assert derived.tagged_value == TaggedValue("color", "blue")


def test_candidate_key_label():
    assert CandidateKey("animals", Cat).label == "Cat@-"
    assert CandidateKey("animals", Cat, 3).label == "Cat@3"
