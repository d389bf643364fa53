# /core/models.py

from enum import Enum
from typing import Dict, List, Optional
from pydantic import AliasChoices, BaseModel, Field

# Shared Pydantic data structures for the graph model, form metadata and service payloads.

class NodeKind(str, Enum):
    CLASS = "class"
    INSTANCE = "instance"
    LITERAL = "literal"

class FieldKind(str, Enum):
    """How a submitted form value is turned into the object of a statement."""
    REFERENCE = "Instance"
    ENTITY = "Entity"
    LITERAL = "Literal"
    IRI = "IRI"
    BLANK_NODE = "BNode"

    @classmethod
    def _missing_(cls, value):
        aliases = {"reference": cls.REFERENCE, "blanknode": cls.BLANK_NODE, "bnode": cls.BLANK_NODE}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None

class Node(BaseModel):
    id: str = Field(description="A unique identifier for the node within one parse.")
    label: str = Field(description="Display label; may be replaced by a later rdfs:label statement.")
    kind: NodeKind = Field(description="Whether the node is a class, an instance or a literal value.")

class Edge(BaseModel):
    source: str = Field(description="The ID of the source node.")
    target: str = Field(description="The ID of the target node.")
    label: str = Field(description="Local name of the predicate (e.g., type, agent, has_topic).")
    inferred: bool = Field(False, description="True when the predicate name looks machine generated by the inference service.")

class KnowledgeGraph(BaseModel):
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        return next((node for node in self.nodes if node.id == node_id), None)

    def is_consistent(self) -> bool:
        """True when every edge endpoint names a node of this graph."""
        ids = set(self.node_ids())
        return all(edge.source in ids and edge.target in ids for edge in self.edges)

class AssembledTriple(BaseModel):
    main: str = Field("", description="Predicate-object fragment appended to the current subject block.")
    supporting: str = Field("", description="Standalone statement declaring a newly minted entity, if any.")

class InstanceRef(BaseModel):
    id: str
    class_name: str
    label: str

    @property
    def display(self) -> str:
        return f"{self.label} ({self.class_name})"

# --- Form metadata ---

class FieldSpec(BaseModel):
    label: str
    path: str = "unknown"
    required: bool = False

class ShapeDefinition(BaseModel):
    fields: List[FieldSpec] = Field(default_factory=list)

class FieldValue(BaseModel):
    """One filled-in row of the generated form."""
    label: str
    path: str = "unknown"
    kind: FieldKind = FieldKind.LITERAL
    value: str = ""

class Sense(BaseModel):
    id: str
    gloss: str = ""
    situations: List[str] = Field(default_factory=list)

class LookupResult(BaseModel):
    found: bool = False
    senses: List[Sense] = Field(default_factory=list)

# --- Service payloads ---

class ServiceStats(BaseModel):
    shapes: int = 0
    roles: int = 0
    rules: int = 0
    lemmas: int = 0
    senses: int = 0

class InferenceStats(BaseModel):
    input_count: int = Field(0, validation_alias=AliasChoices("input_count", "input_triples"))
    inferred_count: int = Field(0, validation_alias=AliasChoices("inferred_count", "inferred_triples"))
    total_count: int = Field(0, validation_alias=AliasChoices("total_count", "total_triples"))

class InferenceResult(BaseModel):
    success: bool = False
    inferred_data: Optional[str] = None
    stats: InferenceStats = Field(default_factory=InferenceStats)

class ValidationReport(BaseModel):
    conforms: bool
    report_text: str = ""

class SaveResult(BaseModel):
    tripleCount: int

class OperationStatus(BaseModel):
    ok: bool
    status: str
    detail: Optional[str] = None
    data: Optional[Dict] = None
