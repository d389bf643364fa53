"""
Line tokenizer for the Turtle subset written by the editor.

Splits one line into IRIs, names, blank-node labels, quoted literals,
punctuation and directives. It never raises: anything it cannot make sense
of comes out as a NAME token and is left for the parser to ignore.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

PUNCTUATION = ";,.[]"
_WORD_STOP = set(";,[]\"'<#")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "'": "'", "\\": "\\"}


class TokenKind(str, Enum):
    IRI = "iri"
    NAME = "name"
    BNODE = "bnode"
    LITERAL = "literal"
    PUNCT = "punct"
    DIRECTIVE = "directive"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    # Unescaped content for literals, same as text otherwise.
    value: str = ""

    @property
    def is_term(self) -> bool:
        return self.kind in (TokenKind.IRI, TokenKind.NAME, TokenKind.BNODE)

    def is_punct(self, char: str) -> bool:
        return self.kind == TokenKind.PUNCT and self.text == char


def _unescape(content: str) -> str:
    out = []
    i = 0
    while i < len(content):
        ch = content[i]
        if ch == "\\" and i + 1 < len(content):
            out.append(_ESCAPES.get(content[i + 1], content[i + 1]))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _read_literal(line: str, start: int) -> Tuple[Token, int]:
    quote = line[start]
    n = len(line)
    if line.startswith(quote * 3, start):
        close = line.find(quote * 3, start + 3)
        if close == -1:
            content, end = line[start + 3:], n
        else:
            content, end = line[start + 3:close], close + 3
    else:
        i = start + 1
        while i < n and line[i] != quote:
            i += 2 if line[i] == "\\" else 1
        content = line[start + 1:min(i, n)]
        end = min(i + 1, n)

    # Language tag or datatype stays attached to the raw text.
    if end < n and line[end] == "@":
        end += 1
        while end < n and (line[end].isalnum() or line[end] == "-"):
            end += 1
    elif line.startswith("^^", end):
        end += 2
        if end < n and line[end] == "<":
            close = line.find(">", end)
            end = n if close == -1 else close + 1
        else:
            while end < n and not line[end].isspace() and line[end] not in _WORD_STOP:
                end += 1
            while line[end - 1] == "." and end - 1 > start:
                end -= 1

    return Token(TokenKind.LITERAL, line[start:end], _unescape(content)), end


def _classify_word(word: str, first: bool) -> Token:
    if word.lower() in ("@prefix", "@base") or (first and word.upper() in ("PREFIX", "BASE")):
        return Token(TokenKind.DIRECTIVE, word, word)
    if word.startswith("_:"):
        return Token(TokenKind.BNODE, word, word)
    return Token(TokenKind.NAME, word, word)


def tokenize_line(line: str) -> List[Token]:
    tokens: List[Token] = []
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch.isspace():
            i += 1
        elif ch == "#":
            break
        elif ch in PUNCTUATION:
            tokens.append(Token(TokenKind.PUNCT, ch, ch))
            i += 1
        elif ch == "<":
            close = line.find(">", i + 1)
            end = n if close == -1 else close + 1
            iri = line[i:end]
            tokens.append(Token(TokenKind.IRI, iri, iri))
            i = end
        elif ch in "\"'":
            token, i = _read_literal(line, i)
            tokens.append(token)
        else:
            j = i
            while j < n and not line[j].isspace() and line[j] not in _WORD_STOP:
                j += 1
            word = line[i:j]
            # A terminator glued to a name ("temp:Bob.") is punctuation, not part of the name.
            stripped = word.rstrip(".")
            if stripped:
                tokens.append(_classify_word(stripped, first=not tokens))
            tokens.extend(Token(TokenKind.PUNCT, ".", ".") for _ in range(len(word) - len(stripped)))
            i = j
    return tokens
