# tokfold/strategies.py
"""
Map/concat strategies and an in-memory registry of named strategies.

A strategy is a plain Python callable passed to the fold engine:

    map    (context, index, element) -> Token
    concat (context, index, head, tail) -> Token

``head`` is the fold accumulated so far, ``tail`` is the newly mapped
element. Strategies must be pure: same inputs, same output, no side effects.

The registry lets CLIs and callers talk in terms of names like "sum" or
"index-scale" instead of passing callables around. Defaults are seeded
lazily so clear_registry() in tests does not fight import order.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, NamedTuple

from .core.tokens import GenerationError, assert_token

MAP = "map"
CONCAT = "concat"
STRATEGY_KINDS = (MAP, CONCAT)


class Strategy(NamedTuple):
    kind: str
    fn: Callable[..., Any]
    doc: str


_REGISTRY: Dict[str, Strategy] = {}


def assert_strategy_pure(fn: Any, name: str) -> Callable[..., Any]:
    """
    Wrap a strategy so every result is checked to be a Token.

    Args:
        fn: The strategy callable.
        name: Name for error messages.

    Returns:
        Wrapped callable with the same calling convention.

    Raises:
        GenerationError: If fn is not callable (immediately), or if a call
            returns something that is not a Token (at call time).
    """
    if not callable(fn):
        raise GenerationError(f"strategy '{name}' must be callable, got {type(fn).__name__}")

    def wrapped(*args: Any) -> Any:
        result = fn(*args)
        assert_token(result, f"strategy '{name}' result")
        return result

    wrapped.__name__ = f"pure_{name}"
    wrapped.__doc__ = f"Token-pure wrapper for {name}"
    return wrapped


# ---------------------------------------------------------------------------
# Built-in maps
# ---------------------------------------------------------------------------

def identity_map(context, index, element):
    return element


def index_scale_map(context, index, element):
    """(context)[index] * (element)"""
    return f"({context})[{index}] * ({element})"


def scale_map(context, index, element):
    return f"{context}*{element}"


def call_map(context, index, element):
    return f"{context}({element})"


def double_map(context, index, element):
    return f"2{element}"


def member_map(context, index, element):
    return f"{context}.{element}"


# ---------------------------------------------------------------------------
# Built-in concats
# ---------------------------------------------------------------------------

def sum_concat(context, index, head, tail):
    return f"{head} + {tail}"


def comma_concat(context, index, head, tail):
    return f"{head}, {tail}"


def product_concat(context, index, head, tail):
    return f"{head} * {tail}"


def and_concat(context, index, head, tail):
    return f"{head} && {tail}"


def space_concat(context, index, head, tail):
    return f"{head} {tail}"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def register_strategy(name: str, kind: str, fn: Callable[..., Any], doc: str = "") -> None:
    """
    Register (or overwrite) a named strategy.

    Raises:
        ValueError: If kind is not "map" or "concat".
        TypeError: If fn is not callable.
    """
    if kind not in STRATEGY_KINDS:
        raise ValueError(f"strategy kind must be one of {STRATEGY_KINDS}, got {kind!r}")
    if not callable(fn):
        raise TypeError(f"strategy {name!r} must be callable")
    _REGISTRY[name] = Strategy(kind, fn, doc)


def get_strategy(name: str, kind: str | None = None) -> Callable[..., Any]:
    """
    Look up a strategy callable by name.

    Raises:
        KeyError: If no such strategy is registered, or it is of another kind.
    """
    _ensure_defaults()
    entry = _REGISTRY.get(name)
    if entry is None:
        raise KeyError(f"No strategy named {name!r} is registered")
    if kind is not None and entry.kind != kind:
        raise KeyError(f"Strategy {name!r} is a {entry.kind} strategy, not {kind}")
    return entry.fn


def has_strategy(name: str) -> bool:
    _ensure_defaults()
    return name in _REGISTRY


def clear_registry() -> None:
    """Remove all registered strategies (defaults are re-seeded on next lookup)."""
    _REGISTRY.clear()


def list_strategy_names(kind: str | None = None) -> list[str]:
    """Return registered strategy names, sorted for stability."""
    _ensure_defaults()
    return sorted(n for n, s in _REGISTRY.items() if kind is None or s.kind == kind)


def describe_strategies() -> list[dict[str, str]]:
    _ensure_defaults()
    return [
        {"name": n, "kind": _REGISTRY[n].kind, "doc": _REGISTRY[n].doc}
        for n in sorted(_REGISTRY)
    ]


_DEFAULTS = (
    ("identity", MAP, identity_map, "element"),
    ("index-scale", MAP, index_scale_map, "(context)[index] * (element)"),
    ("scale", MAP, scale_map, "context*element"),
    ("call", MAP, call_map, "context(element)"),
    ("double", MAP, double_map, "2element"),
    ("member", MAP, member_map, "context.element"),
    ("sum", CONCAT, sum_concat, "head + tail"),
    ("comma", CONCAT, comma_concat, "head, tail"),
    ("product", CONCAT, product_concat, "head * tail"),
    ("and", CONCAT, and_concat, "head && tail"),
    ("space", CONCAT, space_concat, "head tail"),
)


def _ensure_defaults() -> None:
    for name, kind, fn, doc in _DEFAULTS:
        if name not in _REGISTRY:
            register_strategy(name, kind, fn, doc)
