"""AST nodes for the newlang expression language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class BinaryOperator(str, Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def precedence(self) -> int:
        if self in (BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE):
            return 2
        return 1


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Name:
    value: str


@dataclass(frozen=True)
class BinaryChain:
    """Flat ``operand op operand op ... operand`` sequence.

    Operands sit at even positions, operators at odd positions. Precedence is
    resolved when the chain is evaluated, not when it is parsed.
    """

    items: tuple[Union["Node", BinaryOperator], ...]

    def __post_init__(self) -> None:
        if len(self.items) % 2 == 0:
            raise ValueError("BinaryChain needs an odd number of items")
        for idx, item in enumerate(self.items):
            if (idx % 2 == 1) != isinstance(item, BinaryOperator):
                raise ValueError(f"BinaryChain item {idx} is in the wrong slot: {item!r}")

    @property
    def operands(self) -> tuple["Node", ...]:
        return self.items[0::2]  # type: ignore[return-value]

    @property
    def operators(self) -> tuple[BinaryOperator, ...]:
        return self.items[1::2]  # type: ignore[return-value]


@dataclass(frozen=True)
class Declaration:
    name: str
    assignee: "Node"


@dataclass(frozen=True)
class Program:
    commands: tuple["Node", ...]


Node = Union[Number, Name, BinaryChain, Declaration, Program]
