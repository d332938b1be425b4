"""Parse-then-evaluate entry point."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .ast import Program
from .errors import SourceFileError
from .evaluator import _parse_program_cached, evaluate_program

logger = logging.getLogger(__name__)


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class Engine:
    """Runs one newlang source text.

    The engine holds no evaluation state between calls: every ``run()``
    evaluates against a fresh environment, so it can be called repeatedly.
    """

    code: str

    @classmethod
    def from_source_path(cls, source_path: str | os.PathLike[str]) -> "Engine":
        path = os.fspath(source_path)
        if not os.path.isfile(path):
            raise SourceFileError("Input file is invalid", {"path": path})

        with open(path, encoding="utf-8", newline="") as handle:
            code = normalize_line_endings(handle.read())
        logger.debug("Loaded %d characters from %s", len(code), path)
        return cls(code)

    def parse(self) -> Program:
        program = _parse_program_cached(self.code)
        logger.debug("Parsed %d command(s)", len(program.commands))
        return program

    def run(self) -> float:
        result = evaluate_program(self.parse())
        logger.debug("Evaluated to %r", result)
        return result
