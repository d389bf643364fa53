# /core/session.py

from typing import Dict, List, Optional

from core.models import FieldSpec, Sense, ShapeDefinition
from core.vocabulary import TEMP_PREFIX


class EditorSession:
    """
    Form state for one editing session.

    Shape metadata is loaded once and survives resets, as does the entry
    counter, so identifiers minted after a reset never collide with earlier ones.
    """

    def __init__(self, shapes: Optional[Dict[str, ShapeDefinition]] = None):
        self.shapes: Dict[str, ShapeDefinition] = dict(shapes or {})
        self.entry_count = 0
        self.current_verb = ""
        self.senses: List[Sense] = []
        self.selected_sense: Optional[Sense] = None
        self.selected_situation: Optional[str] = None

    def reset(self):
        """Clears transient selections; keeps shapes and the entry counter."""
        self.current_verb = ""
        self.senses = []
        self.selected_sense = None
        self.selected_situation = None

    def load_shapes(self, shapes: Dict[str, ShapeDefinition]):
        self.shapes.update(shapes)

    def set_lookup(self, verb: str, senses: List[Sense]):
        self.current_verb = verb
        self.senses = list(senses)
        self.selected_sense = None
        self.selected_situation = None

    def select_sense(self, index: int) -> List[str]:
        """Selects a sense and returns its situation shape ids; a single situation is selected automatically."""
        if not 0 <= index < len(self.senses):
            raise IndexError(f"Sense index {index} out of range.")
        self.selected_sense = self.senses[index]
        self.selected_situation = None
        situations = self.selected_sense.situations
        if len(situations) == 1:
            self.selected_situation = situations[0]
        return situations

    def select_situation(self, shape_id: str) -> Optional[List[FieldSpec]]:
        """Selects a situation shape; returns its fields, or None when no definition is loaded."""
        self.selected_situation = shape_id
        shape = self.shapes.get(shape_id)
        return shape.fields if shape else None

    def current_fields(self) -> List[FieldSpec]:
        shape = self.shapes.get(self.selected_situation or "")
        return shape.fields if shape else []

    def next_subject_id(self) -> str:
        self.entry_count += 1
        return f"{TEMP_PREFIX}s{self.entry_count}"

    @staticmethod
    def situation_label(shape_id: str) -> str:
        return shape_id.replace("_", " ").replace(" shape", "")
