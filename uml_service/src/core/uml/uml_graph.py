# uml_service/src/core/uml/uml_graph.py
"""
UMLGraph

In-memory graph of classes, functions and the relations between them.

Relations are deduplicated twice:
- on write, at most one relation is stored per ordered (from, to) pair,
  and opposite uni-directional associations are promoted to bi-directional;
- on read, get_relations() keeps a single relation per pair of endpoints
  regardless of direction and pairs up leftover uni-directional associations.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from uml_service.src.core.uml.uml_entities import UMLClass, UMLFunction
from uml_service.src.core.uml.uml_relation import (
    DEFAULT_RANKS,
    RelationKind,
    UMLRelation,
    validate_rank_table,
)

logger = logging.getLogger(__name__)


class RelationOutcome(str, Enum):
    ADDED = "added"
    PROMOTED = "promoted"
    REPLACED = "replaced"
    SUPERSEDED = "superseded"
    REJECTED = "rejected"


class UMLGraph:
    """
    Accumulates entities and relations for one analyzed codebase.
    """

    def __init__(self, kind_ranks: Optional[Dict[RelationKind, int]] = None):
        self.kind_ranks: Dict[RelationKind, int] = (
            dict(DEFAULT_RANKS) if kind_ranks is None else validate_rank_table(kind_ranks)
        )
        self.structs: Dict[str, UMLClass] = {}  # name -> class, insertion ordered
        self.fns: List[UMLFunction] = []
        self._fn_names: set[str] = set()
        self._relations: List[UMLRelation] = []
        self._relation_index: Dict[Tuple[str, str], int] = {}  # (from, to) -> position

    # ----------------------------
    # Entities
    # ----------------------------
    def add_struct(self, cls: UMLClass) -> None:
        """
        Register a class, merging into an existing record of the same name.
        """
        existing = self.structs.get(cls.name)
        if existing is not None:
            existing.merge_from(cls)
            logger.debug(f"Merged class observation: {cls.name}")
        else:
            # Merges go into this copy, never into the caller's object
            self.structs[cls.name] = replace(cls, fields=list(cls.fields), methods=list(cls.methods))
            logger.debug(f"Added class: {cls.name}")

    def add_fn(self, fn: UMLFunction) -> None:
        # Functions are never merged; duplicates are kept as separate entries
        self.fns.append(fn)
        self._fn_names.add(fn.name)
        logger.debug(f"Added function: {fn.name}")

    def has_entity(self, name: str) -> bool:
        return name in self.structs or name in self._fn_names

    @property
    def classes(self) -> List[UMLClass]:
        return list(self.structs.values())

    @property
    def functions(self) -> List[UMLFunction]:
        return list(self.fns)

    # ----------------------------
    # Relations (write side)
    # ----------------------------
    def add_relation(self, rel: UMLRelation) -> RelationOutcome:
        """
        Store a relation, resolving conflicts with already stored ones.

        Returns the outcome; rejected relations are also logged as warnings.
        """
        if not (self.has_entity(rel.from_name) and self.has_entity(rel.to_name)) or rel.from_name == rel.to_name:
            logger.warning(
                f"Rejected relation {rel.from_name} -> {rel.to_name} ({rel.kind.value}): "
                f"endpoint not registered or self relation"
            )
            return RelationOutcome.REJECTED

        if rel.kind == RelationKind.ASSOCIATION_UNI:
            opposite = self._relation_index.get((rel.to_name, rel.from_name))
            if opposite is not None and self._relations[opposite].kind == RelationKind.ASSOCIATION_UNI:
                self._relations[opposite] = self._relations[opposite].with_kind(RelationKind.ASSOCIATION_BI)
                logger.debug(f"Promoted {rel.to_name} <-> {rel.from_name} to association_bi")
                return RelationOutcome.PROMOTED

        position = self._relation_index.get((rel.from_name, rel.to_name))
        if position is None:
            self._relation_index[(rel.from_name, rel.to_name)] = len(self._relations)
            self._relations.append(rel)
            logger.debug(f"Added relation {rel.from_name} -> {rel.to_name} ({rel.kind.value})")
            return RelationOutcome.ADDED

        stored = self._relations[position]
        if self.kind_ranks[rel.kind] > self.kind_ranks[stored.kind]:
            self._relations[position] = stored.with_kind(rel.kind)
            logger.debug(
                f"Replaced {rel.from_name} -> {rel.to_name}: {stored.kind.value} -> {rel.kind.value}"
            )
            return RelationOutcome.REPLACED

        logger.debug(
            f"Superseded {rel.from_name} -> {rel.to_name} ({rel.kind.value}), keeping {stored.kind.value}"
        )
        return RelationOutcome.SUPERSEDED

    def stored_relations(self) -> List[UMLRelation]:
        """Relations as stored, one per ordered pair, in insertion order."""
        return list(self._relations)

    # ----------------------------
    # Relations (read side)
    # ----------------------------
    def get_relations(self) -> List[UMLRelation]:
        """
        Return the render-ready relation list.

        Phase 1 keeps the highest-ranked relation for each pair of endpoints,
        whatever its direction. Phase 2 merges opposite uni-directional
        associations into one bi-directional association.
        """
        ranked = sorted(
            self._relations,
            key=lambda r: (self.kind_ranks[r.kind], r.from_name, r.to_name),
            reverse=True,
        )
        dominant: List[UMLRelation] = []
        seen_pairs: set[frozenset] = set()
        for rel in ranked:
            pair = rel.endpoints()
            if pair in seen_pairs:
                continue
            seen_pairs.add(pair)
            dominant.append(rel)

        return self._merge_associations(dominant)

    def _merge_associations(self, relations: List[UMLRelation]) -> List[UMLRelation]:
        results: List[UMLRelation] = []
        pending: List[UMLRelation] = []  # unmatched association_uni relations
        for rel in relations:
            if rel.kind != RelationKind.ASSOCIATION_UNI:
                results.append(rel)
                continue

            match = next((i for i, p in enumerate(pending) if rel.opposite_objects(p)), None)
            if match is None:
                pending.append(rel)
            else:
                pending.pop(match)
                results.append(rel.with_kind(RelationKind.ASSOCIATION_BI))

        return results + pending
