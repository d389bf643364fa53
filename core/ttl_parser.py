# /core/ttl_parser.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.logger import get_logger
from core.models import Edge, KnowledgeGraph, Node, NodeKind
from core.turtle_lexer import Token, TokenKind, tokenize_line
from core.vocabulary import (
    BLANK_NODE_LABEL,
    BLANK_NODE_PREFIX,
    CLASS_ID_PREFIX,
    LABEL_PREDICATES,
    LITERAL_ID_PREFIX,
    SUPPRESSED_PREDICATES,
    TYPE_KEYWORDS,
    display_label,
    is_inferred_predicate,
    local_name,
)

logger = get_logger(__name__)


@dataclass
class _ParseState:
    """Everything one parse call owns. Nothing survives between calls."""
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    bnode_count: int = 0
    subject: Optional[str] = None
    # Enclosing subjects of nested anonymous nodes.
    outer: List[str] = field(default_factory=list)
    # Predicate still waiting for its object on a following line.
    pending: Optional[Token] = None
    skipped: int = 0

    def close_block(self):
        self.subject = None
        self.outer.clear()
        self.pending = None


class TurtleGraphParser:
    """
    Rebuilds the visual graph from the serialized buffer.

    The buffer is read line by line. A line either declares a subject
    (``temp:s1 a :Giving ;``), opens an anonymous block (``[ a :Giving ;``)
    or continues the predicate-object list of the current subject. Lines that
    fit none of these are skipped; parsing never fails.
    """

    def parse(self, text: str) -> KnowledgeGraph:
        state = _ParseState()
        for raw_line in text.split("\n"):
            self._parse_line(state, tokenize_line(raw_line.strip()))

        graph = KnowledgeGraph(nodes=list(state.nodes.values()), edges=state.edges)
        logger.debug(
            f"Parsed graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges, {state.skipped} lines skipped"
        )
        return graph

    # --- Line dispatch ---

    def _parse_line(self, state: _ParseState, tokens: List[Token]):
        if not tokens or tokens[0].kind == TokenKind.DIRECTIVE:
            return

        if tokens[0].is_punct("[") and state.pending is None:
            state.close_block()
            state.subject = self._mint_blank_node(state)
            # "[] a :Giving ." keeps the anonymous node as the subject of the line.
            start = 2 if len(tokens) > 1 and tokens[1].is_punct("]") else 1
            self._read_predicate_objects(state, tokens, start)
            return

        if self._is_subject_declaration(tokens):
            state.close_block()
            state.subject = tokens[0].text
            self._instance_node(state, state.subject)
            self._read_predicate_objects(state, tokens, 1)
            return

        if state.subject is None:
            state.skipped += 1
            return

        self._read_predicate_objects(state, tokens, 0)

    @staticmethod
    def _is_subject_declaration(tokens: List[Token]) -> bool:
        return (
            len(tokens) >= 3
            and tokens[0].is_term
            and tokens[0].text not in TYPE_KEYWORDS
            and tokens[1].text in TYPE_KEYWORDS
            and tokens[2].is_term
        )

    # --- Predicate-object lists ---

    def _read_predicate_objects(self, state: _ParseState, tokens: List[Token], pos: int):
        while pos < len(tokens) and state.subject is not None:
            token = tokens[pos]

            if state.pending is not None:
                pos = self._read_objects(state, state.pending, tokens, pos)
                continue

            if token.kind == TokenKind.PUNCT:
                if token.text == ".":
                    state.close_block()
                elif token.text == "]":
                    state.subject = state.outer.pop() if state.outer else None
                pos += 1
                continue

            if not token.is_term:
                # A literal cannot be a predicate; drop the rest of the line.
                state.skipped += 1
                return

            state.pending = token
            pos += 1

    def _read_objects(self, state: _ParseState, predicate: Token, tokens: List[Token], pos: int) -> int:
        token = tokens[pos]

        if token.is_punct("["):
            bnode = self._mint_blank_node(state)
            self._emit(state, predicate, Token(TokenKind.BNODE, bnode, bnode))
            state.outer.append(state.subject)
            state.subject = bnode
            state.pending = None
            return pos + 1

        if token.is_term or token.kind == TokenKind.LITERAL:
            self._emit(state, predicate, token)
            if pos + 1 < len(tokens) and tokens[pos + 1].is_punct(","):
                # Object list: the next object may sit on this line or the next one.
                return pos + 2
            state.pending = None
            return pos + 1

        # Punctuation where an object was expected: the statement is malformed.
        state.pending = None
        return pos

    # --- Node and edge emission ---

    def _emit(self, state: _ParseState, predicate: Token, obj: Token):
        subject = state.subject
        pred = predicate.text

        if pred in TYPE_KEYWORDS:
            if obj.kind == TokenKind.LITERAL:
                return
            class_name = local_name(obj.text)
            class_id = f"{CLASS_ID_PREFIX}{class_name}"
            self._get_or_create_node(state, class_id, class_name, NodeKind.CLASS)
            state.edges.append(Edge(source=subject, target=class_id, label="type"))
            return

        if pred in LABEL_PREDICATES:
            state.nodes[subject].label = obj.value if obj.kind == TokenKind.LITERAL else obj.text
            return

        if pred in SUPPRESSED_PREDICATES:
            return

        pred_label = local_name(pred)
        inferred = is_inferred_predicate(pred_label)

        if obj.kind == TokenKind.LITERAL:
            target = f"{LITERAL_ID_PREFIX}{obj.value}_{subject}"
            self._get_or_create_node(state, target, f'"{obj.value}"', NodeKind.LITERAL)
        else:
            target = obj.text
            self._instance_node(state, target)

        state.edges.append(Edge(source=subject, target=target, label=pred_label, inferred=inferred))

    def _mint_blank_node(self, state: _ParseState) -> str:
        state.bnode_count += 1
        bnode = f"{BLANK_NODE_PREFIX}{state.bnode_count}"
        self._get_or_create_node(state, bnode, BLANK_NODE_LABEL, NodeKind.INSTANCE)
        return bnode

    def _instance_node(self, state: _ParseState, identifier: str) -> Node:
        return self._get_or_create_node(state, identifier, display_label(identifier), NodeKind.INSTANCE)

    @staticmethod
    def _get_or_create_node(state: _ParseState, node_id: str, label: str, kind: NodeKind) -> Node:
        node = state.nodes.get(node_id)
        if node is None:
            node = Node(id=node_id, label=label or node_id, kind=kind)
            state.nodes[node_id] = node
        return node


def parse_ttl(text: str) -> KnowledgeGraph:
    return TurtleGraphParser().parse(text)
