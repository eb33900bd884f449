# uml_service/src/core/uml/uml_graph_builder.py
"""
UMLGraphBuilder

Feed facts produced by an upstream analyzer into a UMLGraph.

Facts are plain dictionaries:
- classes:   {"name", "kind"?, "fields"?, "methods"?}
- functions: {"name", "inputs"?, "output"?}
- relations: {"from", "to", "kind"}

Entities are registered before any relation so that endpoint checks see the
whole entity set; within each group the input order is kept.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from uml_service.src.core.uml.uml_entities import UMLClass, UMLFunction
from uml_service.src.core.uml.uml_graph import RelationOutcome, UMLGraph
from uml_service.src.core.uml.uml_relation import RelationKind, UMLRelation

logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    classes: int = 0
    functions: int = 0
    outcomes: Counter = field(default_factory=Counter)

    def count(self, outcome: RelationOutcome) -> int:
        return self.outcomes.get(outcome, 0)

    def to_dict(self) -> Dict[str, int]:
        return {outcome.value: self.count(outcome) for outcome in RelationOutcome}


class UMLGraphBuilder:
    """
    Build a UMLGraph from analyzer facts and keep a report of what happened.
    """

    def __init__(self, kind_ranks: Optional[Dict[RelationKind, int]] = None):
        self.kind_ranks = kind_ranks
        self.report = IngestionReport()

    def build(self, facts: Mapping[str, Iterable[dict]]) -> UMLGraph:
        """Build the graph: classes, then functions, then relations."""
        graph = UMLGraph(self.kind_ranks)
        self.report = IngestionReport()

        for item in facts.get("classes", ()):
            graph.add_struct(self._to_class(item))
            self.report.classes += 1

        for item in facts.get("functions", ()):
            graph.add_fn(self._to_function(item))
            self.report.functions += 1

        for item in facts.get("relations", ()):
            outcome = graph.add_relation(self._to_relation(item))
            self.report.outcomes[outcome] += 1

        logger.info(
            f"Built UML graph: {len(graph.structs)} classes, {len(graph.fns)} functions, "
            f"{len(graph.stored_relations())} stored relations "
            f"({self.report.count(RelationOutcome.REJECTED)} rejected)"
        )
        return graph

    # ----------------------------
    # Helpers
    # ----------------------------
    def _to_class(self, item: dict) -> UMLClass:
        return UMLClass(
            name=item["name"],
            kind=item.get("kind"),
            fields=list(item.get("fields") or []),
            methods=list(item.get("methods") or []),
        )

    def _to_function(self, item: dict) -> UMLFunction:
        return UMLFunction(
            name=item["name"],
            inputs=list(item.get("inputs") or []),
            output=item.get("output"),
        )

    def _to_relation(self, item: dict) -> UMLRelation:
        return UMLRelation(item["from"], item["to"], RelationKind.parse(item["kind"]))
