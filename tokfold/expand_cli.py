from __future__ import annotations

"""
tokfold Expand CLI

Runs one engine entry point on a token list given on the command line and
emits the expansion as JSON.

    python3 -m tokfold.expand_cli count a b c
    python3 -m tokfold.expand_cli element_at --index 1 --args "f(x, y), z"
    python3 -m tokfold.expand_cli foreach --context numbers --concat sum --map index-scale b0 b1 b2
    python3 -m tokfold.expand_cli foreach_comma --context ctx --map double a b c --pretty

Contract: emits JSON with schema tag + schema_doc.
"""

import argparse
import datetime
import json
import sys
from typing import Any, Dict, List, Optional

from tokfold.core.arity import count, element_at, is_empty
from tokfold.core.tokens import GenerationError, parse_token_list, token_hash
from tokfold.fold import foreach, foreach_comma
from tokfold.strategies import CONCAT, MAP, describe_strategies, get_strategy
from tokfold.trace import FoldTrace


SCHEMA_TAG = "tokfold-expand.v1"
SCHEMA_DOC = "docs/expand_schema.md"

OPS = ("count", "is_empty", "element_at", "foreach", "foreach_comma")


def _utc_now_z() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _read_tokens(args: argparse.Namespace) -> List[str]:
    """
    Priority:
      1) positional tokens (if any)
      2) --args
      3) --stdin
    """
    if args.tokens:
        return list(args.tokens)
    if args.args is not None:
        return list(parse_token_list(args.args))
    if args.stdin:
        return list(parse_token_list(sys.stdin.read()))
    return []


def _params(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if args.op == "element_at":
        out["index"] = args.index
    if args.op in ("foreach", "foreach_comma"):
        out["context"] = args.context
        out["map"] = args.map
    if args.op == "foreach":
        out["concat"] = args.concat
    return out


def _check_params(op: str, params: Dict[str, Any]) -> None:
    missing = [k for k, v in params.items() if v is None]
    if missing:
        flags = ", ".join(f"--{k}" for k in missing)
        raise ValueError(f"{op} requires {flags}")


def _run(op: str, tokens: List[str], params: Dict[str, Any], trace: FoldTrace) -> Any:
    if op == "count":
        return count(*tokens)
    if op == "is_empty":
        return is_empty(*tokens)
    if op == "element_at":
        return element_at(params["index"], *tokens)

    map_fn = get_strategy(params["map"], MAP)
    if op == "foreach":
        concat_fn = get_strategy(params["concat"], CONCAT)
        return foreach(params["context"], concat_fn, map_fn, *tokens, trace=trace)
    return foreach_comma(params["context"], map_fn, *tokens, trace=trace)


def _emit(payload: dict[str, Any], pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(payload, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Expand a token list through one tokfold entry point and emit JSON.")
    ap.add_argument("--schema", action="store_true", help="Print schema tag + schema doc path and exit.")
    ap.add_argument("--list", action="store_true", help="List registered map/concat strategies and exit.")
    ap.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    ap.add_argument("--trace", action="store_true", help="Include fold trace events in the output.")
    ap.add_argument("--stdin", action="store_true", help="Read macro-argument text from stdin.")
    ap.add_argument("--args", default=None, help='Macro-argument text, e.g. "a, f(b, c), d".')
    ap.add_argument("--index", type=int, default=None, help="Index for element_at.")
    ap.add_argument("--context", default=None, help="Context token for foreach / foreach_comma.")
    ap.add_argument("--map", default=None, help="Registered map strategy name (e.g. index-scale).")
    ap.add_argument("--concat", default=None, help="Registered concat strategy name (e.g. sum).")

    ap.add_argument("op", nargs="?", choices=OPS, help="Entry point to run.")
    ap.add_argument("tokens", nargs="*", help="Tokens, one per argument. Optional if using --args/--stdin.")

    args = ap.parse_intermixed_args(argv)

    if args.schema:
        print(f"{SCHEMA_TAG} {SCHEMA_DOC}")
        return 0

    if args.list:
        for entry in describe_strategies():
            print(f"{entry['name']}\t{entry['kind']}\t{entry['doc']}")
        return 0

    if not args.op:
        ap.error("op is required unless --schema or --list is used")

    params = _params(args)
    try:
        tokens = _read_tokens(args)
        _check_params(args.op, params)
        for key, kind in (("map", MAP), ("concat", CONCAT)):
            if key in params:
                get_strategy(params[key], kind)
    except (GenerationError, ValueError, KeyError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    trace = FoldTrace(enabled=True if args.trace else None)
    warnings: List[str] = []
    try:
        output = _run(args.op, tokens, params, trace)
        ok = True
    except GenerationError as e:
        output = None
        ok = False
        warnings.append(str(e))

    payload: dict[str, Any] = {
        "schema": SCHEMA_TAG,
        "schema_doc": SCHEMA_DOC,
        "op": args.op,
        "input": tokens,
        "params": params,
        "output": output,
        "ok": ok,
        "warnings": warnings,
    }
    if trace.is_enabled and ok:
        payload["trace"] = trace.get_events()
    payload["meta"] = {
        "tool": "expand_cli",
        "generated_at": _utc_now_z(),
        "determinism": {
            "inputs_hash": token_hash({"op": args.op, "input": tokens, "params": params}),
        },
    }

    _emit(payload, pretty=bool(args.pretty))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
