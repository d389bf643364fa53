# /core/editor.py

import csv
import io
from typing import Iterable, List, Optional

from core.assembler import assemble_entry, highest_entry_number
from core.instance_index import scan_instances
from core.logger import get_logger
from core.models import FieldSpec, FieldValue, InstanceRef, KnowledgeGraph, OperationStatus
from core.session import EditorSession
from core.shacl_client import RemoteServiceError, ShaclServiceClient
from core.ttl_parser import TurtleGraphParser
from core.vocabulary import has_meaningful_content, prefix_block, with_prefix_block

logger = get_logger(__name__)


class GraphEditor:
    """
    Owns the serialization buffer and the session, and coordinates the
    assembler, the parser and the remote service.

    The buffer is the single source of truth: the graph is re-parsed from it
    on demand, and service responses replace it wholesale.
    """

    def __init__(self, client: Optional[ShaclServiceClient] = None, session: Optional[EditorSession] = None):
        self.client = client or ShaclServiceClient()
        self.session = session or EditorSession()
        self.parser = TurtleGraphParser()
        self._text = prefix_block()

    # --- Buffer ---

    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str):
        self._text = text
        self._sync_entry_count()

    def _sync_entry_count(self):
        # New entries must not reuse a temp:s<n> subject already in the buffer.
        self.session.entry_count = max(self.session.entry_count, highest_entry_number(self._text))

    def graph(self) -> KnowledgeGraph:
        return self.parser.parse(self._text)

    def instances(self) -> List[InstanceRef]:
        return scan_instances(self._text)

    def has_meaningful_content(self) -> bool:
        return has_meaningful_content(self._text)

    def new_graph(self):
        self._text = prefix_block()
        self.session.reset()

    def reset(self):
        self.session.reset()

    # --- Form flow ---

    def select_sense(self, index: int) -> List[str]:
        return self.session.select_sense(index)

    def select_situation(self, shape_id: str) -> Optional[List[FieldSpec]]:
        return self.session.select_situation(shape_id)

    def add_entry(self, values: Iterable[FieldValue]) -> str:
        """Appends one situation entry to the buffer and returns the appended text."""
        fragment = assemble_entry(self.session, values, self._text)
        self._text += fragment
        return fragment

    def template_csv(self) -> str:
        labels = [field.label for field in self.session.current_fields()]
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(["Verb", "Situation", *labels])
        writer.writerow([self.session.current_verb, self.session.selected_situation or "", *["" for _ in labels]])
        return out.getvalue()

    # --- Remote operations ---

    async def connect(self) -> OperationStatus:
        """Fetches service statistics and loads the shape definitions once."""
        try:
            stats = await self.client.get_stats()
        except RemoteServiceError as e:
            logger.error(f"Service connection failed: {e}")
            return OperationStatus(ok=False, status="Offline", detail=str(e))

        data = {"stats": stats.model_dump()}
        try:
            forms = await self.client.get_forms()
            self.session.load_shapes(forms)
            data["shapes"] = len(forms)
            logger.info(f"Loaded {len(forms)} situation definitions")
        except RemoteServiceError as e:
            logger.warning(f"Could not load form definitions: {e}")
        return OperationStatus(ok=True, status="Online", data=data)

    async def lookup(self, verb: str) -> OperationStatus:
        verb = verb.strip().lower()
        if not verb:
            return OperationStatus(ok=False, status="Please enter a verb")
        try:
            result = await self.client.lookup(verb)
        except RemoteServiceError as e:
            logger.error(f"Lookup of '{verb}' failed: {e}")
            return OperationStatus(ok=False, status="API Error", detail=str(e))

        if not result.found:
            self.session.reset()
            return OperationStatus(ok=False, status="Lemma not found")

        self.session.set_lookup(verb, result.senses)
        if len(result.senses) == 1:
            self.session.select_sense(0)
        return OperationStatus(ok=True, status="Lemma Found", data={"senses": [s.model_dump() for s in result.senses]})

    async def run_inference(self) -> OperationStatus:
        try:
            result = await self.client.infer(with_prefix_block(self._text))
        except RemoteServiceError as e:
            logger.error(f"Inference failed: {e}")
            return OperationStatus(ok=False, status="Error", detail=str(e))

        if not (result.success and result.inferred_data):
            return OperationStatus(ok=False, status="Failed")

        self._text = result.inferred_data
        self._sync_entry_count()
        stats = result.stats
        logger.info(f"Inference: {stats.inferred_count} new triples")
        if stats.inferred_count > 0:
            plural = "property" if stats.inferred_count == 1 else "properties"
            detail = f"Successfully generated {stats.inferred_count} opaque {plural}"
        else:
            detail = "No opaque properties were generated. Check that your data has :lemma and :synset properties."
        return OperationStatus(
            ok=True,
            status=f"{stats.inferred_count} triples",
            detail=detail,
            data=stats.model_dump(),
        )

    async def validate(self) -> OperationStatus:
        try:
            report = await self.client.validate(with_prefix_block(self._text))
        except RemoteServiceError as e:
            logger.error(f"Validation failed: {e}")
            return OperationStatus(ok=False, status="Error", detail=str(e))
        return OperationStatus(
            ok=report.conforms,
            status="Valid" if report.conforms else "Invalid",
            detail=report.report_text,
        )

    async def save(self) -> OperationStatus:
        if not self.has_meaningful_content():
            return OperationStatus(ok=False, status="Nothing to save")
        try:
            result = await self.client.save(self._text)
        except RemoteServiceError as e:
            logger.error(f"Save failed: {e}")
            status = "Network error" if e.status_code is None else "Save failed"
            return OperationStatus(ok=False, status=status, detail=str(e))
        return OperationStatus(ok=True, status=f"Saved ({result.tripleCount} triples)", data=result.model_dump())
