"""Scanning helpers shared by the matchers.

There is no token stream: every matcher looks directly at the remaining
source text (the cursor). This module only knows the lexical shapes.
"""

from __future__ import annotations

import re
from typing import Final

from .errors import InvalidNumberError

_WHITESPACE_RE: Final = re.compile(r"[ \t\r\n]")

_NUMBER_RE: Final = re.compile(r"(?:0|[1-9][0-9]*)?\.[0-9]+|[1-9][0-9]*|0")

_IDENT_RE: Final = re.compile(r"[a-zA-Z_][a-zA-Z_0-9]*")


def skip_whitespace(cursor: str) -> str:
    """Drop every space, tab, CR and LF from the whole cursor.

    This filters the entire remaining text, not just its prefix, so
    ``"1 2"`` reads as ``"12"`` once skipped.
    """
    return _WHITESPACE_RE.sub("", cursor)


def scan_number(cursor: str) -> tuple[float, str] | None:
    match = _NUMBER_RE.match(cursor)
    if match is None:
        return None
    text = match.group()
    try:
        value = float(text)
    except ValueError as exc:
        raise InvalidNumberError("Invalid number", {"text": text}) from exc
    return value, cursor[match.end() :]


def scan_identifier(cursor: str) -> tuple[str, str] | None:
    match = _IDENT_RE.match(cursor)
    if match is None:
        return None
    return match.group(), cursor[match.end() :]


def scan_symbol(cursor: str, symbol: str) -> str | None:
    """Return the cursor past ``symbol`` when it starts with it."""
    if not cursor.startswith(symbol):
        return None
    return cursor[len(symbol) :]
