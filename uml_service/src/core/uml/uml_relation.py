# uml_service/src/core/uml/uml_relation.py
"""
UMLRelation

Directed relation between two entity names, plus the relation kinds and
their priority table.

Kind priority is a fixed ranking, lowest first. When two relations compete
for the same pair of endpoints the higher-ranked kind wins.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Tuple


class UnknownRelationKind(ValueError):
    """Raised when a relation kind name is not part of RelationKind."""


class RelationKind(str, Enum):
    DEPENDENCY = "dependency"
    ASSOCIATION_UNI = "association_uni"
    ASSOCIATION_BI = "association_bi"
    AGGREGATION = "aggregation"
    COMPOSITION = "composition"
    REALIZATION = "realization"
    GENERALIZATION = "generalization"

    @classmethod
    def parse(cls, value: "str | RelationKind") -> "RelationKind":
        """
        Accept a kind or its name ("composition", "COMPOSITION", "Composition").
        """
        if isinstance(value, RelationKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownRelationKind(f"Unknown relation kind: {value!r}") from None


# Lowest rank first
DEFAULT_KIND_PRIORITY: Tuple[RelationKind, ...] = (
    RelationKind.DEPENDENCY,
    RelationKind.ASSOCIATION_UNI,
    RelationKind.ASSOCIATION_BI,
    RelationKind.AGGREGATION,
    RelationKind.COMPOSITION,
    RelationKind.REALIZATION,
    RelationKind.GENERALIZATION,
)


def build_rank_table(order: Iterable[RelationKind] = DEFAULT_KIND_PRIORITY) -> Dict[RelationKind, int]:
    """
    Turn an ordered sequence of kinds (lowest first) into a {kind: rank} table.

    The sequence must name every RelationKind exactly once.
    """
    kinds = [RelationKind.parse(k) for k in order]
    if len(set(kinds)) != len(kinds):
        raise ValueError(f"Duplicate relation kind in priority order: {[k.value for k in kinds]}")
    missing = set(RelationKind) - set(kinds)
    if missing:
        raise ValueError(f"Priority order is missing kinds: {sorted(k.value for k in missing)}")
    return {kind: rank for rank, kind in enumerate(kinds)}


def validate_rank_table(ranks: Dict[RelationKind, int]) -> Dict[RelationKind, int]:
    """
    Check that a {kind: rank} table ranks every RelationKind with distinct ranks.
    """
    missing = set(RelationKind) - set(ranks)
    if missing:
        raise ValueError(f"Rank table is missing kinds: {sorted(k.value for k in missing)}")
    unknown = set(ranks) - set(RelationKind)
    if unknown:
        raise ValueError(f"Rank table has unknown kinds: {sorted(map(str, unknown))}")
    if len(set(ranks.values())) != len(ranks):
        raise ValueError(f"Rank table has tied ranks: {sorted(ranks.values())}")
    return dict(ranks)


DEFAULT_RANKS: Dict[RelationKind, int] = build_rank_table()


@dataclass(frozen=True)
class UMLRelation:
    from_name: str
    to_name: str
    kind: RelationKind

    def __post_init__(self):
        object.__setattr__(self, "kind", RelationKind.parse(self.kind))

    def endpoints(self) -> frozenset:
        """The two connected entities, regardless of direction."""
        return frozenset((self.from_name, self.to_name))

    def opposite_objects(self, other: "UMLRelation") -> bool:
        return self.from_name == other.to_name and self.to_name == other.from_name

    def with_kind(self, kind: RelationKind) -> "UMLRelation":
        return replace(self, kind=kind)

    def sort_key(self, ranks: Dict[RelationKind, int] = DEFAULT_RANKS) -> Tuple[str, str, int]:
        return (self.from_name, self.to_name, ranks[self.kind])

    def to_dict(self) -> dict:
        return {"from": self.from_name, "to": self.to_name, "kind": self.kind.value}
