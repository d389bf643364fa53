# /core/vocabulary.py

import re

from core.config import settings

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"

TEMP_PREFIX = "temp:"

TYPE_KEYWORDS = {"a", "rdf:type", f"<{RDF_NS}type>"}
LABEL_PREDICATES = {"rdfs:label", "label", f"<{RDFS_NS}label>"}
# Form bookkeeping written with every entry; never drawn as edges.
SUPPRESSED_PREDICATES = {
    ":lemma", ":synset",
    f"<{settings.ONTOLOGY_NS}lemma>", f"<{settings.ONTOLOGY_NS}synset>",
}

CLASS_ID_PREFIX = "Class:"
LITERAL_ID_PREFIX = "Lit:"
BLANK_NODE_PREFIX = "_:bnode"
BLANK_NODE_LABEL = "Situation"
ENTITY_CLASS = ":Entity"

INFERRED_NAME_PATTERN = re.compile(r"_[a-f0-9]{12}$")
LOCAL_NAME_SPLIT = re.compile(r"[/#:]")


def prefix_block() -> str:
    return (
        f"@prefix :    <{settings.ONTOLOGY_NS}> .\n"
        f"@prefix temp: <{settings.TEMP_NS}> .\n"
        f"@prefix rdf: <{RDF_NS}> .\n"
        f"@prefix rdfs: <{RDFS_NS}> .\n"
        "\n"
    )


def strip_prefix_block(text: str) -> str:
    return text.replace(prefix_block(), "", 1).lstrip()


def with_prefix_block(text: str) -> str:
    """Buffer as sent to the service: exactly one prefix block up front."""
    return prefix_block() + strip_prefix_block(text)


def has_meaningful_content(text: str) -> bool:
    return bool(strip_prefix_block(text).strip())


def local_name(term: str) -> str:
    return LOCAL_NAME_SPLIT.split(term.strip("<>"))[-1]


def is_working_identifier(identifier: str) -> bool:
    return identifier.startswith(TEMP_PREFIX) or identifier.startswith(f"<{settings.TEMP_NS}")


def display_label(identifier: str) -> str:
    """Human label for an identifier: working-namespace names lose their prefix, underscores become spaces."""
    if identifier.startswith(TEMP_PREFIX):
        return identifier[len(TEMP_PREFIX):].replace("_", " ")
    if identifier.startswith(f"<{settings.TEMP_NS}"):
        return identifier[len(settings.TEMP_NS) + 1:].rstrip(">").replace("_", " ")
    return identifier


def is_inferred_predicate(name: str) -> bool:
    return "_" in name and INFERRED_NAME_PATTERN.search(name) is not None
