"""Run a newlang source file."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from .engine import Engine
from .errors import NewLangError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newlang", description=__doc__)
    parser.add_argument("input", help="path to the source file")
    parser.add_argument(
        "--print",
        dest="print_result",
        action="store_true",
        help="write the numeric result to stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = Engine.from_source_path(args.input).run()
    except NewLangError as err:
        logger.error("%s", err)
        return 1

    if args.print_result:
        print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
