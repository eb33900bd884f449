import pytest

from uml_service.src.core.uml.uml_relation import (
    DEFAULT_KIND_PRIORITY,
    DEFAULT_RANKS,
    RelationKind,
    UMLRelation,
    UnknownRelationKind,
    build_rank_table,
    validate_rank_table,
)


def test_parse_accepts_names_in_any_case():
    assert RelationKind.parse("Composition") == RelationKind.COMPOSITION
    assert RelationKind.parse(" association_uni ") == RelationKind.ASSOCIATION_UNI
    assert RelationKind.parse(RelationKind.DEPENDENCY) is RelationKind.DEPENDENCY


def test_parse_unknown_kind_raises():
    with pytest.raises(UnknownRelationKind):
        RelationKind.parse("friendship")


def test_default_ranks_follow_declared_table():
    ranks = [DEFAULT_RANKS[kind] for kind in DEFAULT_KIND_PRIORITY]
    assert ranks == sorted(ranks)
    assert DEFAULT_RANKS[RelationKind.ASSOCIATION_BI] > DEFAULT_RANKS[RelationKind.ASSOCIATION_UNI]
    assert DEFAULT_RANKS[RelationKind.ASSOCIATION_BI] > DEFAULT_RANKS[RelationKind.DEPENDENCY]


def test_rank_table_must_cover_every_kind_once():
    with pytest.raises(ValueError):
        build_rank_table([RelationKind.DEPENDENCY, RelationKind.COMPOSITION])
    with pytest.raises(ValueError):
        build_rank_table(list(DEFAULT_KIND_PRIORITY) + [RelationKind.DEPENDENCY])


def test_custom_rank_table_is_used_as_given():
    order = list(reversed(DEFAULT_KIND_PRIORITY))
    ranks = build_rank_table(order)
    assert ranks[RelationKind.GENERALIZATION] == 0
    assert ranks[RelationKind.DEPENDENCY] == len(order) - 1


def test_endpoints_and_opposite_objects():
    ab = UMLRelation("A", "B", RelationKind.DEPENDENCY)
    ba = UMLRelation("B", "A", RelationKind.COMPOSITION)
    ac = UMLRelation("A", "C", RelationKind.DEPENDENCY)

    assert ab.endpoints() == ba.endpoints() == frozenset({"A", "B"})
    assert ab.endpoints() != ac.endpoints()

    assert ab.opposite_objects(ba)
    assert not ab.opposite_objects(ab)


def test_relation_kind_from_string_and_with_kind():
    rel = UMLRelation("A", "B", "association_uni")
    assert rel.kind == RelationKind.ASSOCIATION_UNI

    promoted = rel.with_kind(RelationKind.ASSOCIATION_BI)
    assert promoted == UMLRelation("A", "B", RelationKind.ASSOCIATION_BI)
    assert rel.kind == RelationKind.ASSOCIATION_UNI


def test_sort_key_orders_by_endpoints_then_rank():
    relations = [
        UMLRelation("B", "A", RelationKind.DEPENDENCY),
        UMLRelation("A", "B", RelationKind.COMPOSITION),
        UMLRelation("A", "B", RelationKind.DEPENDENCY),
    ]
    ordered = sorted(relations, key=UMLRelation.sort_key)
    assert [(r.from_name, r.kind) for r in ordered] == [
        ("A", RelationKind.DEPENDENCY),
        ("A", RelationKind.COMPOSITION),
        ("B", RelationKind.DEPENDENCY),
    ]


def test_validate_rank_table_accepts_complete_distinct_ranks():
    ranks = validate_rank_table(DEFAULT_RANKS)
    assert ranks == DEFAULT_RANKS
    assert ranks is not DEFAULT_RANKS


@pytest.mark.parametrize(
    "ranks",
    [
        {},
        {RelationKind.DEPENDENCY: 0},
        {kind: 0 for kind in RelationKind},
    ],
)
def test_validate_rank_table_rejects_partial_or_tied(ranks):
    with pytest.raises(ValueError):
        validate_rank_table(ranks)
