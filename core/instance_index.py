# /core/instance_index.py

import re
from typing import List, Optional

from core.models import InstanceRef
from core.turtle_lexer import TokenKind, tokenize_line
from core.vocabulary import TEMP_PREFIX

# Only situation subjects minted by the editor (temp:s1, temp:s2, ...) are offered as targets.
_MINTED_SUBJECT = re.compile(rf"^{re.escape(TEMP_PREFIX)}s\d+$")
_CLASS_NAME = re.compile(r"^:(\w+)$")


def scan_instances(text: str) -> List[InstanceRef]:
    """Finds labelled situation instances in the buffer, in document order."""
    instances = []
    current: Optional[dict] = None

    for line in text.split("\n"):
        tokens = tokenize_line(line.strip())
        if not tokens:
            continue

        if (
            len(tokens) >= 4
            and _MINTED_SUBJECT.match(tokens[0].text)
            and tokens[1].text == "a"
            and _CLASS_NAME.match(tokens[2].text)
            and tokens[3].is_punct(";")
        ):
            _flush(instances, current)
            current = {"id": tokens[0].text, "class_name": tokens[2].text[1:], "label": None}
            tokens = tokens[4:]

        if current is None:
            continue

        for i, token in enumerate(tokens):
            if (
                current["label"] is None
                and token.text == "rdfs:label"
                and i + 1 < len(tokens)
                and tokens[i + 1].kind == TokenKind.LITERAL
                and tokens[i + 1].value
            ):
                current["label"] = tokens[i + 1].value
            if token.is_punct("."):
                _flush(instances, current)
                current = None
                break

    _flush(instances, current)
    return instances


def _flush(instances: List[InstanceRef], current: Optional[dict]):
    if current is not None and current["label"] is not None:
        instances.append(InstanceRef(**current))
