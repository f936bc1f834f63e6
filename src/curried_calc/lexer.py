"""Tokenization for curried-calc source text."""

from __future__ import annotations

from dataclasses import dataclass

from .config import KEYWORD_ELSE, KEYWORD_IF, KEYWORD_THEN
from .errors import InvalidCharacterError
from .operators import OPERATOR_CHARS


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int


_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
    ",": "COMMA",
    "-": "MINUS",
}

_KEYWORD_TOKENS = {
    KEYWORD_IF: "IF",
    KEYWORD_THEN: "THEN",
    KEYWORD_ELSE: "ELSE",
}


def _scan_while(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    return source[start:i], i


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def tokenize(source: str, start: int = 0) -> list[Token]:
    tokens: list[Token] = []
    i = start

    while i < len(source):
        ch = source[i]

        if ch.isspace():
            i += 1
            continue

        if ch in _SINGLE_TOKENS:
            tokens.append(Token(_SINGLE_TOKENS[ch], ch, i, i + 1))
            i += 1
            continue

        if ch in OPERATOR_CHARS:
            tokens.append(Token("OP", ch, i, i + 1))
            i += 1
            continue

        if _is_digit(ch):
            text, end = _scan_while(source, i, _is_digit)
            tokens.append(Token("NUMBER", text, i, end))
            i = end
            continue

        if ch.isalpha():
            word, end = _scan_while(source, i, str.isalpha)
            # Keywords only count when a space follows them.
            kind = "NAME"
            if word in _KEYWORD_TOKENS and end < len(source) and source[end].isspace():
                kind = _KEYWORD_TOKENS[word]
            tokens.append(Token(kind, word, i, end))
            i = end
            continue

        raise InvalidCharacterError(ch, i)

    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
