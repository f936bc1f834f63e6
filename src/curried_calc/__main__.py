"""Command-line entry point: ``python -m curried_calc``."""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import CalcError, SessionExit
from .session import Session
from .shell import Shell


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="curried-calc", description="Integer expression language with curried functions.")
    parser.add_argument("-c", "--command", help="run one statement, print its result and exit")
    parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        metavar="FILE",
        help="load function declarations from FILE before starting (repeatable)",
    )
    parser.add_argument("--max-depth", type=int, default=None, help="evaluation depth limit (default: $CURRIED_CALC_MAX_DEPTH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log tokens, trees and forced calls")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    session = Session(max_depth=args.max_depth)
    try:
        for path in args.imports:
            session.import_file(path)
        if args.command is not None:
            out = session.execute(args.command)
            if out is not None:
                print(out)
            return 0
    except SessionExit:
        return 0
    except CalcError as exc:
        print(exc, file=sys.stderr)
        return 1

    Shell(session).cmdloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
