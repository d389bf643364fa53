# /core/assembler.py

import re
from typing import Iterable, Optional, Set

from core.logger import get_logger
from core.models import AssembledTriple, FieldKind, FieldSpec, FieldValue
from core.session import EditorSession
from core.turtle_lexer import tokenize_line
from core.vocabulary import ENTITY_CLASS, TEMP_PREFIX, TYPE_KEYWORDS

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")
# Characters that break an IRI or that the line tokenizer treats as punctuation or comments.
_UNSAFE_CHARS = re.compile(r"[<>\"'{}|\\^`#;,\[\]]")
_PATH_SPLIT = re.compile(r"[#/]")
_MINTED_SUBJECT = re.compile(rf"^{re.escape(TEMP_PREFIX)}s(\d+)$")


def to_slug(value: str) -> str:
    """'New York' -> 'New_York', with characters that break an IRI removed. A local name never ends in a dot."""
    return _UNSAFE_CHARS.sub("", _WHITESPACE.sub("_", value.strip())).rstrip(".")


def declared_identifiers(text: str) -> Set[str]:
    """Identifiers that already open a subject block with a type declaration."""
    declared = set()
    for line in text.split("\n"):
        tokens = tokenize_line(line.strip())
        if len(tokens) >= 3 and tokens[0].is_term and tokens[1].text in TYPE_KEYWORDS:
            declared.add(tokens[0].text)
    return declared


def highest_entry_number(text: str) -> int:
    """Largest n among the temp:s<n> subjects declared in the buffer, or 0."""
    matches = (_MINTED_SUBJECT.match(identifier) for identifier in declared_identifiers(text))
    return max((int(m.group(1)) for m in matches if m), default=0)


def predicate_for(field: FieldSpec) -> str:
    """Local name of the predicate a form field writes."""
    if field.path and field.path != "unknown":
        return _PATH_SPLIT.split(field.path)[-1]
    return field.label


def assemble(
    kind: FieldKind,
    raw_value: str,
    predicate: str,
    existing_text: str = "",
    declared: Optional[Set[str]] = None,
) -> AssembledTriple:
    """
    Turns one form value into text to append to the buffer.

    Args:
        kind: How the value should be written (reference, new entity, literal, IRI, blank node).
        raw_value: The value as typed or selected, already trimmed by the caller.
        predicate: Local name of the predicate in the ontology namespace.
        existing_text: Current buffer, used to find already declared entities.
        declared: Identifiers already declared. When given it takes precedence over
            existing_text and is updated with any entity minted here, so several
            fields of one entry never declare the same entity twice.

    Returns:
        AssembledTriple with the fragment for the current subject block and,
        for new entities, a standalone statement declaring the entity.
    """
    kind = FieldKind(kind)
    if declared is None:
        declared = declared_identifiers(existing_text)

    supporting = ""
    if kind == FieldKind.REFERENCE:
        obj = raw_value
    elif kind == FieldKind.ENTITY:
        obj = f"{TEMP_PREFIX}{to_slug(raw_value)}"
        if obj not in declared:
            supporting = f'{obj} a {ENTITY_CLASS} ;\n    rdfs:label "{raw_value}" .\n'
            declared.add(obj)
    elif kind == FieldKind.LITERAL:
        # Embedded quotes are written as-is.
        obj = f'"{raw_value}"'
    elif kind == FieldKind.IRI:
        obj = raw_value if raw_value.startswith("<") or ":" in raw_value else f":{raw_value}"
    else:
        obj = raw_value if raw_value.startswith("_:") else f"_:{raw_value}"

    return AssembledTriple(main=f" ;\n    :{predicate} {obj}", supporting=supporting)


def assemble_entry(session: EditorSession, values: Iterable[FieldValue], existing_text: str) -> str:
    """
    Builds the complete block for one situation entry plus any entity declarations.

    Empty values are skipped. Advances the session's entry counter.
    """
    if not session.selected_situation:
        raise ValueError("No situation selected.")

    subject = session.next_subject_id()
    class_name = session.selected_situation.replace("_shape", "")
    verb = session.current_verb

    main_block = f'{subject} a :{class_name} ;\n    rdfs:label "{verb}" ;\n    :lemma "{verb}"'
    sense = session.selected_sense
    if sense and sense.gloss:
        main_block += f' ;\n    :synset "{sense.gloss}"'

    declared = declared_identifiers(existing_text)
    entity_block = ""
    for field_value in values:
        value = field_value.value.strip()
        if not value:
            continue
        predicate = predicate_for(FieldSpec(label=field_value.label, path=field_value.path))
        triple = assemble(field_value.kind, value, predicate, declared=declared)
        main_block += triple.main
        entity_block += triple.supporting

    logger.info(f"Assembled entry {subject} for situation {session.selected_situation}")
    return f"{main_block} .\n{entity_block}\n"
