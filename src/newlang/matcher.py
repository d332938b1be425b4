"""Backtracking matchers for the newlang grammar.

Grammar::

    number          := <decimal literal>
    binary_operator := '+' | '-' | '*' | '/'
    binary_subexpr  := '(' expression ')' | number | variable
    binary_chain    := binary_subexpr (binary_operator binary_subexpr)+
    variable        := [a-zA-Z_][a-zA-Z_0-9]*
    declaration     := variable ':' expression
    expression      := binary_chain | number | variable | '(' expression ')'
    command         := declaration | expression
    code            := command (',' command)*

Each matcher takes the remaining source text (the cursor) and returns either
``None`` when its production does not start there, or a ``Match`` holding the
produced node and the text left after it. A ``None`` result never consumes
anything, so callers can retry the same cursor with the next alternative.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Final, cast

from .ast import BinaryChain, BinaryOperator, Declaration, Name, Node, Number, Program
from .errors import ParseError
from .scanner import scan_identifier, scan_number, scan_symbol, skip_whitespace

_BRACKET_BEGIN: Final = "("
_BRACKET_END: Final = ")"
_ASSIGN: Final = ":"
_SEPARATOR: Final = ","


@dataclass(frozen=True)
class Match:
    rest: str
    node: Node


Matcher = Callable[[str], "Match | None"]


def _first_of(matchers: Sequence[Matcher], cursor: str) -> Match | None:
    cursor = skip_whitespace(cursor)
    for matcher in matchers:
        result = matcher(cursor)
        if result is not None:
            return result
    return None


def _match_operator(cursor: str) -> tuple[BinaryOperator, str] | None:
    for op in BinaryOperator:
        rest = scan_symbol(cursor, op.value)
        if rest is not None:
            return op, rest
    return None


def match_number(cursor: str) -> Match | None:
    scanned = scan_number(cursor)
    if scanned is None:
        return None
    value, rest = scanned
    return Match(rest, Number(value))


def match_name(cursor: str) -> Match | None:
    scanned = scan_identifier(cursor)
    if scanned is None:
        return None
    name, rest = scanned
    return Match(rest, Name(name))


def match_bracket(cursor: str) -> Match | None:
    rest = scan_symbol(cursor, _BRACKET_BEGIN)
    if rest is None:
        return None
    inner = match_expression(rest)
    if inner is None:
        return None
    rest = scan_symbol(inner.rest, _BRACKET_END)
    if rest is None:
        return None
    return Match(rest, inner.node)


def match_operand(cursor: str) -> Match | None:
    # Never the full expression matcher here: a chain operand must not start
    # another chain, or matching would recurse without consuming input.
    for matcher in (match_bracket, match_number, match_name):
        result = matcher(cursor)
        if result is not None:
            return result
    return None


def match_chain(cursor: str) -> Match | None:
    first = match_operand(cursor)
    if first is None:
        return None
    items: list[Node | BinaryOperator] = [first.node]
    rest = first.rest

    while True:
        rest = skip_whitespace(rest)
        found = _match_operator(rest)
        if found is None:
            # A lone operand is not a chain; the other expression
            # alternatives handle it.
            if len(items) == 1:
                return None
            return Match(rest, BinaryChain(tuple(items)))
        op, rest = found

        operand = match_operand(skip_whitespace(rest))
        if operand is None:
            return None
        items.extend((op, operand.node))
        rest = operand.rest


def match_expression(cursor: str) -> Match | None:
    return _first_of((match_chain, match_number, match_name, match_bracket), cursor)


def match_declaration(cursor: str) -> Match | None:
    scanned = scan_identifier(skip_whitespace(cursor))
    if scanned is None:
        return None
    name, rest = scanned

    rest = scan_symbol(skip_whitespace(rest), _ASSIGN)
    if rest is None:
        return None

    assignee = match_expression(rest)
    if assignee is None:
        return None
    return Match(assignee.rest, Declaration(name=name, assignee=assignee.node))


def match_command(cursor: str) -> Match | None:
    return _first_of((match_declaration, match_expression), cursor)


def match_code(cursor: str) -> Match | None:
    first = match_command(cursor)
    if first is None:
        return None
    commands: list[Node] = [first.node]
    rest = first.rest

    while True:
        after_separator = scan_symbol(skip_whitespace(rest), _SEPARATOR)
        if after_separator is None:
            return Match(skip_whitespace(rest), Program(commands=tuple(commands)))

        command = match_command(after_separator)
        if command is None:
            return None
        commands.append(command.node)
        rest = command.rest


def _parse_whole(source: str, matcher: Matcher) -> Node:
    text = skip_whitespace(source)
    if not text:
        raise ParseError("No parseable expression found in code", 0, 0)

    result = matcher(text)
    if result is None:
        raise ParseError("No parseable expression found in code", 0, len(text), found=text)
    if result.rest:
        start = len(text) - len(result.rest)
        raise ParseError("Unexpected trailing input", start, len(text), found=result.rest)
    return result.node


def parse(source: str) -> Node:
    """Parse a single expression spanning the whole source."""
    return _parse_whole(source, match_expression)


def parse_program(source: str) -> Program:
    """Parse comma-separated commands spanning the whole source."""
    return cast(Program, _parse_whole(source, match_code))
