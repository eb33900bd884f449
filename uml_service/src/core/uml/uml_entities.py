# uml_service/src/core/uml/uml_entities.py
"""
UML entity records: classes/structs and free functions.

Field, method and parameter descriptors are opaque strings supplied by the
upstream analyzer (e.g. "name: String", "fn len(&self) -> usize").
"""

from dataclasses import dataclass, field
from typing import List, Optional


def _merge_unique(existing: List[str], incoming: List[str]) -> None:
    for item in incoming:
        if item not in existing:
            existing.append(item)


@dataclass
class UMLClass:
    """A class, struct, enum, trait or interface known to the graph."""

    name: str
    kind: Optional[str] = None  # "class" | "struct" | "enum" | "trait" | "interface"
    fields: List[str] = field(default_factory=list)
    methods: List[str] = field(default_factory=list)

    def merge_from(self, other: "UMLClass") -> None:
        """
        Fold another observation of the same class into this one.

        Fields and methods are unioned in first-seen order. A known kind
        overwrites an unknown one; nothing already recorded is removed.
        """
        if other.name != self.name:
            raise ValueError(f"Cannot merge class {other.name!r} into {self.name!r}")
        if other.kind:
            self.kind = other.kind
        _merge_unique(self.fields, other.fields)
        _merge_unique(self.methods, other.methods)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind,
            "fields": list(self.fields),
            "methods": list(self.methods),
        }


@dataclass
class UMLFunction:
    name: str
    inputs: List[str] = field(default_factory=list)
    output: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "inputs": list(self.inputs), "output": self.output}
