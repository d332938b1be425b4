"""Runtime value model for the newlang evaluator.

Every runtime value is a 0-d float64 JAX array. Python numbers are accepted
on the way in and converted back with ``to_float`` on the way out.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable
from typing import Final

import jax
import jax.numpy as jnp

from .ast import BinaryOperator

jax.config.update("jax_enable_x64", True)

FLOAT_DTYPE: Final = jnp.float64

BINARY_KERNELS: Final[dict[BinaryOperator, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]]] = {
    BinaryOperator.PLUS: jnp.add,
    BinaryOperator.MINUS: jnp.subtract,
    BinaryOperator.MULTIPLY: jnp.multiply,
    BinaryOperator.DIVIDE: jnp.divide,
}


def as_float64(value: object) -> jnp.ndarray:
    validate_value(value)
    if isinstance(value, jnp.ndarray) and value.dtype == FLOAT_DTYPE:
        return value
    return jnp.asarray(value, dtype=FLOAT_DTYPE)


def to_float(value: object) -> float:
    return float(as_float64(value))


def validate_value(value: object, *, where: str = "value") -> None:
    if isinstance(value, bool):
        raise TypeError(f"{where} must be a number, not bool")
    if isinstance(value, jnp.ndarray):
        if value.ndim != 0:
            raise TypeError(f"{where} must be a scalar, got shape {tuple(value.shape)}")
        return
    if isinstance(value, numbers.Real):
        return
    raise TypeError(f"{where} has unsupported runtime type {type(value).__name__}")
