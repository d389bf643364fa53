from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import List, Optional

from core.editor import GraphEditor
from core.models import FieldSpec, FieldValue, InstanceRef, KnowledgeGraph, OperationStatus

# --- Pydantic Models ---
class BufferResponse(BaseModel):
    text: str
    has_content: bool

class SenseSelection(BaseModel):
    situations: List[str]
    labels: List[str]
    selected_situation: Optional[str] = None

class SituationSelection(BaseModel):
    shape_id: str
    fields: Optional[List[FieldSpec]] = None

class EntryResponse(BaseModel):
    appended: str
    graph: KnowledgeGraph

# --- Router Initialization ---
router = APIRouter(
    prefix="/editor",
    tags=["Graph Editor"]
)

# One user, one document: the whole service shares a single editor.
_editor: Optional[GraphEditor] = None

def get_editor() -> GraphEditor:
    global _editor
    if _editor is None:
        _editor = GraphEditor()
    return _editor

def _buffer(editor: GraphEditor) -> BufferResponse:
    return BufferResponse(text=editor.text, has_content=editor.has_meaningful_content())

# --- Buffer Endpoints ---

@router.get("/buffer", response_model=BufferResponse)
def get_buffer(editor: GraphEditor = Depends(get_editor)):
    return _buffer(editor)


@router.put("/buffer", response_model=BufferResponse)
def replace_buffer(text: str = Body(..., embed=True), editor: GraphEditor = Depends(get_editor)):
    """Replaces the buffer with hand-edited text."""
    editor.set_text(text)
    return _buffer(editor)


@router.get("/graph", response_model=KnowledgeGraph)
def get_graph(editor: GraphEditor = Depends(get_editor)):
    return editor.graph()


@router.get("/instances", response_model=List[InstanceRef])
def get_instances(editor: GraphEditor = Depends(get_editor)):
    return editor.instances()


@router.post("/new", response_model=BufferResponse)
def new_graph(editor: GraphEditor = Depends(get_editor)):
    """Starts over with an empty buffer holding only the prefix block."""
    editor.new_graph()
    return _buffer(editor)


@router.post("/reset")
def reset_selections(editor: GraphEditor = Depends(get_editor)):
    editor.reset()
    return {"message": "Selections cleared."}

# --- Form Flow Endpoints ---

@router.post("/connect", response_model=OperationStatus)
async def connect(editor: GraphEditor = Depends(get_editor)):
    return await editor.connect()


@router.get("/lookup", response_model=OperationStatus)
async def lookup_verb(verb: str, editor: GraphEditor = Depends(get_editor)):
    if not verb.strip():
        raise HTTPException(status_code=400, detail="Please enter a verb.")
    return await editor.lookup(verb)


@router.post("/senses/{index}", response_model=SenseSelection)
def select_sense(index: int, editor: GraphEditor = Depends(get_editor)):
    try:
        situations = editor.select_sense(index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SenseSelection(
        situations=situations,
        labels=[editor.session.situation_label(s) for s in situations],
        selected_situation=editor.session.selected_situation,
    )


@router.post("/situations/{shape_id}", response_model=SituationSelection)
def select_situation(shape_id: str, editor: GraphEditor = Depends(get_editor)):
    fields = editor.select_situation(shape_id)
    return SituationSelection(shape_id=shape_id, fields=fields)


@router.post("/entries", response_model=EntryResponse)
def add_entry(values: List[FieldValue] = Body(..., embed=True), editor: GraphEditor = Depends(get_editor)):
    """Appends one situation entry built from the submitted form values."""
    try:
        appended = editor.add_entry(values)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EntryResponse(appended=appended, graph=editor.graph())


@router.get("/template", response_class=PlainTextResponse)
def get_template(editor: GraphEditor = Depends(get_editor)):
    """CSV header and blank row for bulk entry of the current situation."""
    return PlainTextResponse(editor.template_csv(), media_type="text/csv")

# --- Remote Service Endpoints ---

@router.post("/infer", response_model=OperationStatus)
async def run_inference(editor: GraphEditor = Depends(get_editor)):
    return await editor.run_inference()


@router.post("/validate", response_model=OperationStatus)
async def validate(editor: GraphEditor = Depends(get_editor)):
    return await editor.validate()


@router.post("/save", response_model=OperationStatus)
async def save(editor: GraphEditor = Depends(get_editor)):
    return await editor.save()
