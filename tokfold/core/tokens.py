"""
Token Type Definition and Validation.

A Token is an opaque unit of syntax: an identifier, an expression or a nested
call form, carried as ``str``, or an integer literal carried as ``int``.
The engine never evaluates tokens; it only rearranges and substitutes them.

A TokenList is a tuple of at most MAX_ARITY tokens. Everything past the
ceiling is a generation failure, never a silent truncation.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Tuple, Union


# Arity ceiling. Raising it means adding one rule per table in arity.py and
# fold.py, nothing else.
MAX_ARITY = 6

Token = Union[str, int]
TokenList = Tuple[Token, ...]

# The empty expansion produced by zero-arity rules.
EMPTY = ""

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}


class GenerationError(Exception):
    """Error during token expansion; generation must abort with no output."""
    pass


def is_token(value: Any) -> bool:
    """
    Check if a value is a valid Token.

    Returns:
        True for ``str`` and ``int`` (but not ``bool``), False otherwise.
    """
    # bool is an int subclass, but True/False are not literal tokens
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int))


def assert_token(value: Any, context: str = "token") -> None:
    """
    Assert that a value is a valid Token.

    Raises:
        GenerationError: If value is not a Token.
    """
    if not is_token(value):
        raise GenerationError(
            f"{context} must be a token (str or int), got {type(value).__name__}: {value!r}"
        )


def token_list(*tokens: Any) -> TokenList:
    """
    Validate a token sequence and return it as a tuple.

    Raises:
        GenerationError: If any element is not a Token, or if more than
            MAX_ARITY tokens are supplied.
    """
    if len(tokens) > MAX_ARITY:
        raise GenerationError(
            f"arity ceiling exceeded: {len(tokens)} tokens given, at most {MAX_ARITY} supported"
        )
    for i, tok in enumerate(tokens):
        assert_token(tok, f"tokens[{i}]")
    return tuple(tokens)


def parse_token_list(text: str) -> Tuple[str, ...]:
    """
    Split macro-argument text into tokens on top-level commas.

    Commas nested inside (), [] or {} belong to the enclosing token, so
    ``"f(a, b), c"`` yields ``("f(a, b)", "c")``. Surrounding whitespace is
    stripped from each token. Blank text is the empty list.

    Raises:
        GenerationError: On unbalanced brackets or an empty token between
            commas (e.g. ``"a,,b"``).
    """
    if not text.strip():
        return ()

    out = []
    current = []
    stack = []
    for ch in text:
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not stack or stack.pop() != ch:
                raise GenerationError(f"unbalanced {ch!r} in token list: {text!r}")
        elif ch == "," and not stack:
            out.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    if stack:
        raise GenerationError(f"unclosed bracket in token list: {text!r}")
    out.append("".join(current).strip())

    for i, tok in enumerate(out):
        if not tok:
            raise GenerationError(f"empty token at position {i} in {text!r}")
    return tuple(out)


def token_hash(value: Any) -> str:
    """
    Compute deterministic hash of a token or JSON-compatible payload.

    Uses SHA-256 of canonical JSON serialization.
    """
    canonical = json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
