from fastapi import APIRouter, Body
from pydantic import BaseModel, Field
from typing import List

from core.assembler import assemble
from core.instance_index import scan_instances
from core.models import AssembledTriple, FieldKind, InstanceRef, KnowledgeGraph
from core.ttl_parser import parse_ttl

# --- Pydantic Models ---
class AssembleRequest(BaseModel):
    kind: FieldKind
    value: str = Field(description="Raw form value; surrounding whitespace is ignored.")
    predicate: str = Field(description="Local name of the predicate in the ontology namespace.")
    existing_text: str = Field("", description="Current buffer, used to avoid re-declaring entities.")

# --- Router Initialization ---
router = APIRouter(
    prefix="/graph",
    tags=["Graph Text"]
)

# --- API Endpoints ---

@router.post("/parse", response_model=KnowledgeGraph)
def parse_graph(text: str = Body(..., embed=True)):
    """Rebuilds the node/edge model from serialized text."""
    return parse_ttl(text)


@router.post("/instances", response_model=List[InstanceRef])
def list_instances(text: str = Body(..., embed=True)):
    """Lists situation instances that can be referenced from new entries."""
    return scan_instances(text)


@router.post("/assemble", response_model=AssembledTriple)
def assemble_triple(request: AssembleRequest):
    """Turns one form value into the text fragments to append. Empty values produce nothing."""
    value = request.value.strip()
    if not value:
        return AssembledTriple()
    return assemble(request.kind, value, request.predicate, request.existing_text)
