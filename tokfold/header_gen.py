#!/usr/bin/env python3
# tokfold/header_gen.py
"""
Generate the C preprocessor form of the fold engine.

The Python engine and the emitted header share one shape: a per-index
ELEMENT_AT rule, COUNT/EMPTY via a padded sentinel sequence, and one FOR_n
rule per arity. The header needs every rule spelled out because the
preprocessor has no recursion, so raising the ceiling is a matter of
passing a larger --max.

Usage:
    $ python3 -m tokfold.header_gen >_CB.h
    $ python3 -m tokfold.header_gen --max 16 --prefix PP --guard PP_FOLD_H
"""

from __future__ import annotations

import argparse
import re
import sys
from typing import List, Optional

from .core.tokens import MAX_ARITY

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _element_at_macros(p: str, n: int) -> List[str]:
    lines = [
        f"#define {p}_ELEMENT_AT(n, ...) {p}_CAT2(_{p}_ELEMENT_AT_, n)(__VA_ARGS__)",
    ]
    for k in range(n + 1):
        params = "".join(f"_{j}, " for j in range(k))
        lines.append(f"#define _{p}_ELEMENT_AT_{k}({params}x, ...) x")
    return lines


def _count_macros(p: str, n: int) -> List[str]:
    descending = ", ".join(str(i) for i in range(n, -1, -1))
    empty_flags = ", ".join(["0"] * n + ["1"])
    return [
        f"#define {p}_COUNT(...) {p}_ELEMENT_AT({n}, ## __VA_ARGS__, {descending})",
        f"#define {p}_EMPTY(...) {p}_ELEMENT_AT({n}, ## __VA_ARGS__, {empty_flags})",
    ]


def _foreach_macros(p: str) -> List[str]:
    return [
        f"#define {p}_FOREACH(context, concat, map, ...) "
        f"{p}_FOR_MAX({p}_COUNT(__VA_ARGS__), _{p}_FOREACH_CONCAT, _{p}_FOREACH_MAP, "
        f"context, concat, map, __VA_ARGS__)",
        f"#define _{p}_FOREACH_CONCAT(index, head, tail, context, concat, map, ...) "
        f"concat(context, index, head, tail)",
        f"#define _{p}_FOREACH_MAP(index, context, concat, map, ...) "
        f"map(context, index, {p}_ELEMENT_AT(index, __VA_ARGS__))",
        "",
        f"#define {p}_FOREACH_COMMA(context, map, ...) "
        f"{p}_CAT2(_{p}_FOREACH_COMMA_EMPTY_, {p}_EMPTY(__VA_ARGS__))(context, map, ## __VA_ARGS__)",
        f"#define _{p}_FOREACH_COMMA_EMPTY_1(context, map, ...)",
        f"#define _{p}_FOREACH_COMMA_EMPTY_0(context, map, ...) , "
        f"{p}_FOR_MAX({p}_COUNT(__VA_ARGS__), _{p}_FOREACH_COMMA_CONCAT, _{p}_FOREACH_COMMA_MAP, "
        f"context, map, __VA_ARGS__)",
        f"#define _{p}_FOREACH_COMMA_CONCAT(index, head, tail, context, map, ...) head, tail",
        f"#define _{p}_FOREACH_COMMA_MAP(index, context, map, ...) "
        f"map(context, index, {p}_ELEMENT_AT(index, __VA_ARGS__))",
    ]


def _for_macros(p: str, n: int) -> List[str]:
    lines = [
        f"#define {p}_FOR_MAX(max, concat, map, ...) {p}_CAT2({p}_FOR_, max)(concat, map, ## __VA_ARGS__)",
        "",
        f"#define {p}_FOR_0(concat, map, ...)",
        f"#define {p}_FOR_1(concat, map, ...) map(0, __VA_ARGS__)",
    ]
    for k in range(2, n + 1):
        lines.append(
            f"#define {p}_FOR_{k}(concat, map, ...) "
            f"concat({k - 1}, {p}_FOR_{k - 1}(concat, map, ## __VA_ARGS__), "
            f"map({k - 1}, __VA_ARGS__), __VA_ARGS__)"
        )
    return lines


def generate_header(max_arity: int = MAX_ARITY, prefix: str = "CB", guard: Optional[str] = None) -> str:
    """
    Return the header text for the given ceiling and macro prefix.

    Raises:
        ValueError: If max_arity < 1, or prefix/guard is not a C identifier.
    """
    if isinstance(max_arity, bool) or not isinstance(max_arity, int) or max_arity < 1:
        raise ValueError(f"max_arity must be an integer >= 1, got {max_arity!r}")
    if not _IDENT.fullmatch(prefix):
        raise ValueError(f"prefix must be a C identifier, got {prefix!r}")
    if guard is not None and not _IDENT.fullmatch(guard):
        raise ValueError(f"guard must be a C identifier, got {guard!r}")

    p = prefix
    lines: List[str] = [
        f"/* Generated by tokfold.header_gen (max arity {max_arity}). Do not edit. */",
        "",
    ]
    if guard is not None:
        lines += [f"#ifndef {guard}", f"#define {guard}", ""]

    lines += [
        f"#define {p}_CAT2(_1, _2) _{p}_CAT2(_1, _2)",
        f"#define _{p}_CAT2(_1, _2) _1 ## _2",
        "",
    ]
    lines += _element_at_macros(p, max_arity)
    lines.append("")
    lines += _count_macros(p, max_arity)
    lines.append("")
    lines += _foreach_macros(p)
    lines.append("")
    lines += _for_macros(p, max_arity)

    if guard is not None:
        lines += ["", f"#endif /* {guard} */"]
    return "\n".join(lines) + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Emit the C preprocessor fold/foreach macros for a given arity ceiling.")
    ap.add_argument("--max", type=int, default=MAX_ARITY, help=f"Arity ceiling (default {MAX_ARITY}).")
    ap.add_argument("--prefix", default="CB", help="Macro name prefix (default CB).")
    ap.add_argument("--guard", default=None, help="Wrap the output in an include guard with this name.")
    ap.add_argument(
        "--output",
        default=None,
        help="Write the header to this file instead of stdout.",
    )
    args = ap.parse_args(argv)

    try:
        text = generate_header(args.max, args.prefix, args.guard)
    except ValueError as e:
        print(f"header_gen: {e}", file=sys.stderr)
        return 2

    if args.output is not None:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
