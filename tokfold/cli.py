"""
cli.py

Umbrella CLI router for tokfold tools.

This file is intentionally thin and does not re-implement leaf flags.
It only routes:

  tokfold expand <...>   -> tokfold.expand_cli.main(<...>)
  tokfold header <...>   -> tokfold.header_gen.main(<...>)

All remaining arguments are forwarded verbatim.
"""

from __future__ import annotations

import sys
from typing import List


HELP = """\
usage: tokfold <expand|header> ...

tokfold umbrella CLI (routes to the expand and header generator tools).

commands:
  expand    Delegate to: python -m tokfold.expand_cli ...
  header    Delegate to: python -m tokfold.header_gen ...

examples:
  python3 -m tokfold.cli expand --schema
  python3 -m tokfold.cli expand count a b c
  python3 -m tokfold.cli expand foreach_comma --context numbers --map index-scale b0 b1 --pretty
  python3 -m tokfold.cli header --max 8 --prefix PP
"""


def _help(code: int = 0) -> int:
    print(HELP)
    return code


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help", "help"):
        return _help(0)

    top, rest = argv[0], argv[1:]

    if top == "expand":
        from tokfold.expand_cli import main as expand_main

        return int(expand_main(rest))

    if top == "header":
        from tokfold.header_gen import main as header_main

        return int(header_main(rest))

    print(f"tokfold: unknown command: {top!r}", file=sys.stderr)
    return _help(2)


if __name__ == "__main__":
    raise SystemExit(main())
