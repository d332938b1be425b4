"""Evaluator for the newlang expression language on top of JAX."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from functools import lru_cache
from typing import Final

import jax.numpy as jnp

from .ast import BinaryChain, BinaryOperator, Declaration, Name, Node, Number, Program
from .errors import RedeclarationError, UnknownOperatorError, UnknownVariableError
from .matcher import parse_program
from .values import BINARY_KERNELS, as_float64, to_float

_PROGRAM_CACHE_MAX: Final[int] = 256


@lru_cache(maxsize=_PROGRAM_CACHE_MAX)
def _parse_program_cached(source: str) -> Program:
    return parse_program(source)


class Environment(MutableMapping[str, Declaration]):
    """Name to declaration bindings visible to an evaluation.

    A name can be bound once. ``snapshot()`` gives an independent copy, which
    is what a declaration evaluates its right-hand side against so that the
    name it introduces is not yet visible there.
    """

    def __init__(self, bindings: Mapping[str, Declaration] | None = None) -> None:
        self._bindings: dict[str, Declaration] = {} if bindings is None else dict(bindings)

    def __getitem__(self, key: str) -> Declaration:
        return self._bindings[key]

    def __setitem__(self, key: str, value: Declaration) -> None:
        self.define(key, value)

    def __delitem__(self, key: str) -> None:
        del self._bindings[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def define(self, name: str, declaration: Declaration) -> None:
        if name in self._bindings:
            raise RedeclarationError(f"Variable {name!r} is already declared", {"name": name})
        self._bindings[name] = declaration

    def resolve(self, name: str) -> Declaration:
        try:
            return self._bindings[name]
        except KeyError:
            raise UnknownVariableError(f"Unknown variable {name!r}", {"name": name}) from None

    def snapshot(self) -> "Environment":
        return Environment(self._bindings)


def _apply_operator(op: BinaryOperator, left: jnp.ndarray, right: jnp.ndarray) -> jnp.ndarray:
    kernel = BINARY_KERNELS.get(op)
    if kernel is None:
        raise UnknownOperatorError("Invalid operator", {"operator": getattr(op, "value", op)})
    return kernel(left, right)


def _operand_value(slot: Node | jnp.ndarray, env: Environment) -> jnp.ndarray:
    if isinstance(slot, jnp.ndarray):
        return slot
    return _eval_node(slot, env)


def _reduce_chain(chain: BinaryChain, env: Environment) -> jnp.ndarray:
    slots: list[Node | jnp.ndarray | BinaryOperator] = list(chain.items)
    while len(slots) > 1:
        # Highest precedence first; leftmost wins a tie, which makes equal
        # precedence operators associate to the left.
        pos = max(range(1, len(slots), 2), key=lambda i: (slots[i].precedence, -i))
        op = slots[pos]
        left = _operand_value(slots[pos - 1], env)
        right = _operand_value(slots[pos + 1], env)
        slots[pos - 1 : pos + 2] = [_apply_operator(op, left, right)]
    return _operand_value(slots[0], env)


def _eval_node(node: Node, env: Environment) -> jnp.ndarray:
    if isinstance(node, Number):
        return as_float64(node.value)

    if isinstance(node, BinaryChain):
        return _reduce_chain(node, env)

    if isinstance(node, Name):
        # Bindings are not cached: every reference re-evaluates the
        # declared expression against the environment it is read from.
        declaration = env.resolve(node.value)
        return _eval_node(declaration.assignee, env)

    if isinstance(node, Declaration):
        before = env.snapshot()
        env.define(node.name, node)
        return _eval_node(node.assignee, before)

    if isinstance(node, Program):
        return _evaluate_commands(node, env)

    raise TypeError(f"Unsupported expression node: {type(node)!r}")


def _evaluate_commands(program: Program, env: Environment) -> jnp.ndarray:
    if not program.commands:
        raise ValueError("Program must contain at least one command")
    result = None
    for command in program.commands:
        result = _eval_node(command, env)
    assert result is not None
    return result


def evaluate_program(program: Program, env: Environment | None = None) -> float:
    """Evaluate a parsed program, by default against a fresh environment."""
    runtime_env = Environment() if env is None else env
    return to_float(_evaluate_commands(program, runtime_env))


def evaluate(source: str) -> float:
    """Parse and evaluate newlang source, returning the last command's value."""
    return evaluate_program(_parse_program_cached(source))
