import pytest

from servicepoint.keys import CandidateKey, RegistrationKey, TaggedProperty
from servicepoint.resolve import (
    CandidateOrderingError,
    build_candidates,
    compare_candidates,
    filter_and_build,
    rank_candidates,
)
from zoo import Animal, Cat, Dog, Pokemon

TYPE = TaggedProperty(Pokemon, "type", 1, "PIKACHU")
STATE = TaggedProperty(Pokemon, "state", 0, "WILD")
NAME = TaggedProperty(Animal, "nickname", 7, "pika")


def test_subclass_ranks_before_base():
    assert compare_candidates(CandidateKey("animals", Cat), CandidateKey("animals", Animal)) < 0
    assert compare_candidates(CandidateKey("animals", Animal), CandidateKey("animals", Cat)) > 0
    assert compare_candidates(CandidateKey("animals", Cat), CandidateKey("animals", Cat)) == 0


def test_floor_ranks_before_no_floor_and_lower_floor_first():
    ranked = rank_candidates(
        [
            CandidateKey("animals", Pokemon),
            CandidateKey("animals", Pokemon, 1),
            CandidateKey("animals", Pokemon, 0),
        ]
    )

    assert [c.priority_floor for c in ranked] == [0, 1, None]


def test_service_point_name_orders_first():
    ranked = rank_candidates([CandidateKey("b", Cat), CandidateKey("a", Animal)])

    assert [c.service_point for c in ranked] == ["a", "b"]


def test_unrelated_types_cannot_be_ordered():
    with pytest.raises(CandidateOrderingError):
        compare_candidates(CandidateKey("animals", Cat), CandidateKey("animals", Dog))


def test_build_candidates_for_pokemon():
    candidates = build_candidates("animals", Pokemon, {TYPE, STATE, NAME})

    assert [c.label for c in candidates] == [
        "Pokemon@0",
        "Pokemon@1",
        "Pokemon@-",
        "Animal@7",
        "Animal@-",
    ]


def test_build_candidates_deduplicates():
    again = TaggedProperty(Pokemon, "level", 1, "5")
    candidates = build_candidates("animals", Pokemon, {TYPE, again})

    assert [c.label for c in candidates] == ["Pokemon@1", "Pokemon@-", "Animal@-"]


def test_filter_keeps_own_properties_at_or_above_floor():
    props = {TYPE, STATE, NAME}

    assert filter_and_build(CandidateKey("animals", Pokemon, 0), props) == RegistrationKey.of(
        "animals", Pokemon, {"type": "PIKACHU", "state": "WILD", "nickname": "pika"}
    )
    assert filter_and_build(CandidateKey("animals", Pokemon, 1), props) == RegistrationKey.of(
        "animals", Pokemon, {"type": "PIKACHU", "nickname": "pika"}
    )


def test_filter_without_floor_keeps_only_ancestor_properties():
    props = {TYPE, STATE, NAME}

    assert filter_and_build(CandidateKey("animals", Pokemon), props) == RegistrationKey.of(
        "animals", Pokemon, {"nickname": "pika"}
    )
    assert filter_and_build(CandidateKey("animals", Animal), props) == RegistrationKey.of("animals", Animal)


def test_filter_drops_properties_of_more_derived_types():
    assert filter_and_build(CandidateKey("animals", Animal, 7), {TYPE, STATE, NAME}) == RegistrationKey.of(
        "animals", Animal, {"nickname": "pika"}
    )
