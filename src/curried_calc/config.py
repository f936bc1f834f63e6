"""Environment-backed runtime limits."""

from __future__ import annotations

import os
from typing import Final


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(1, int(raw))
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


MAX_DEPTH: Final[int] = _int_from_env("CURRIED_CALC_MAX_DEPTH", 100_000)
HISTORY_LIMIT: Final[int] = _int_from_env("CURRIED_CALC_HISTORY_LIMIT", 1000)

KEYWORD_IF: Final[str] = "if"
KEYWORD_THEN: Final[str] = "then"
KEYWORD_ELSE: Final[str] = "else"
KEYWORD_LET: Final[str] = "let"
KEYWORDS: Final[frozenset[str]] = frozenset({KEYWORD_IF, KEYWORD_THEN, KEYWORD_ELSE, KEYWORD_LET})


def is_reserved(name: str) -> bool:
    return name.lower() in KEYWORDS
