"""newlang public API."""

from .matcher import parse, parse_program
from .errors import (
    InvalidNumberError,
    NewLangError,
    NewLangRuntimeError,
    ParseError,
    RedeclarationError,
    SourceFileError,
    UnknownOperatorError,
    UnknownVariableError,
)

try:
    from .engine import Engine
    from .evaluator import Environment, evaluate, evaluate_program
except ModuleNotFoundError as exc:
    if exc.name and exc.name.startswith("jax"):
        _jax_import_error = exc

        def evaluate(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for evaluate(). Install runtime deps first."
            ) from _jax_import_error

        def evaluate_program(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for evaluate_program(). Install runtime deps first."
            ) from _jax_import_error

        class Environment:  # pragma: no cover - import-time fallback
            def __init__(self, *_args, **_kwargs) -> None:
                raise ModuleNotFoundError(
                    "jax is required for Environment(). Install runtime deps first."
                ) from _jax_import_error

        class Engine:  # pragma: no cover - import-time fallback
            def __init__(self, *_args, **_kwargs) -> None:
                raise ModuleNotFoundError(
                    "jax is required for Engine(). Install runtime deps first."
                ) from _jax_import_error

    else:
        raise

__all__ = [
    "parse",
    "parse_program",
    "evaluate",
    "evaluate_program",
    "Environment",
    "Engine",
    "NewLangError",
    "NewLangRuntimeError",
    "ParseError",
    "InvalidNumberError",
    "SourceFileError",
    "UnknownVariableError",
    "RedeclarationError",
    "UnknownOperatorError",
]
