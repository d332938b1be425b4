"""Structured error types for parser/runtime separation."""

from __future__ import annotations

from collections.abc import Mapping


class NewLangError(Exception):
    """Base class for structured newlang errors."""

    def __init__(self, message: str, context: Mapping[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, object] = {} if context is None else dict(context)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ParseError(NewLangError):
    """Source text could not be matched by the grammar as a whole.

    ``start`` and ``end`` count characters of the source after every space,
    tab, CR and LF has been removed, which is the text the matchers see.
    """

    def __init__(self, message: str, start: int, end: int, found: str | None = None) -> None:
        context: dict[str, object] = {"start": start, "end": end}
        if found is not None:
            context["found"] = found
        super().__init__(message, context)
        self.start = start
        self.end = end
        self.found = found

    def __str__(self) -> str:
        found = ""
        if self.found is not None:
            found = f"; found {self.found!r}"
        return f"{self.message} at span [{self.start}, {self.end}){found}"


class InvalidNumberError(NewLangError):
    """Literal text accepted by the grammar but rejected by float()."""


class SourceFileError(NewLangError):
    """Input path is missing or is not a regular file."""


class NewLangRuntimeError(NewLangError):
    """Generic runtime failure after successful parse."""


class UnknownVariableError(NewLangRuntimeError):
    """Reference to a name that is not bound in the current environment."""


class RedeclarationError(NewLangRuntimeError):
    """Second definition of a name that is already bound."""


class UnknownOperatorError(NewLangRuntimeError):
    """Operator has no reduction kernel."""
