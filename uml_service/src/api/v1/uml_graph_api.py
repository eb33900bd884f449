"""
API Endpoints for UML relation normalization

Provides:
- POST /v1/uml/normalize: ingest classes, functions and relations, return the
  deduplicated, render-ready relation set
- GET  /v1/uml/relation-kinds: active relation kind priority, lowest first

Integrates:
- UMLGraphBuilder for graph construction
- UMLGraph.get_relations for read-time normalization
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from uml_service.src.config import Settings, load_settings
from uml_service.src.core.uml.uml_graph_builder import UMLGraphBuilder
from uml_service.src.core.uml.uml_relation import UnknownRelationKind

router = APIRouter(prefix="/v1/uml", tags=["uml_graph"])
logger = logging.getLogger(__name__)


# -----------------------------
# Request / Response Models
# -----------------------------
class ClassFact(BaseModel):
    name: str = Field(min_length=1)
    kind: str | None = None
    fields: List[str] = []
    methods: List[str] = []


class FunctionFact(BaseModel):
    name: str = Field(min_length=1)
    inputs: List[str] = []
    output: str | None = None


class RelationFact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_name: str = Field(alias="from", min_length=1)
    to_name: str = Field(alias="to", min_length=1)
    kind: str


class UMLFactsRequest(BaseModel):
    classes: List[ClassFact] = []
    functions: List[FunctionFact] = []
    relations: List[RelationFact] = []


class UMLGraphResponse(BaseModel):
    classes: List[ClassFact]
    functions: List[FunctionFact]
    relations: List[RelationFact]
    outcomes: Dict[str, int]


class RelationKindsResponse(BaseModel):
    priority: List[str]


def get_settings() -> Settings:
    return load_settings()


# -----------------------------
# POST /v1/uml/normalize
# -----------------------------
@router.post("/normalize", response_model=UMLGraphResponse)
def normalize_relations(
    request: UMLFactsRequest,
    settings: Settings = Depends(get_settings),
) -> UMLGraphResponse:
    facts = {
        "classes": [c.model_dump() for c in request.classes],
        "functions": [f.model_dump() for f in request.functions],
        "relations": [r.model_dump(by_alias=True) for r in request.relations],
    }

    builder = UMLGraphBuilder(kind_ranks=settings.kind_ranks)
    try:
        graph = builder.build(facts)
    except UnknownRelationKind as exc:
        logger.warning(f"Rejected UML facts payload: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))

    return UMLGraphResponse(
        classes=[ClassFact(**c.to_dict()) for c in graph.classes],
        functions=[FunctionFact(**f.to_dict()) for f in graph.functions],
        relations=[RelationFact.model_validate(r.to_dict()) for r in graph.get_relations()],
        outcomes=builder.report.to_dict(),
    )


# -----------------------------
# GET /v1/uml/relation-kinds
# -----------------------------
@router.get("/relation-kinds", response_model=RelationKindsResponse)
def get_relation_kinds(settings: Settings = Depends(get_settings)) -> RelationKindsResponse:
    return RelationKindsResponse(priority=[kind.value for kind in settings.kind_priority])
