# tokfold/core/arity.py
"""
Arity counting and positional indexing over token lists.

    count(*tokens)              -> 0..MAX_ARITY
    is_empty(*tokens)           -> 1 for the empty list, else 0
    element_at(index, *tokens)  -> the token at that position

Indexing dispatches through ELEMENT_AT_RULES, a table keyed by literal
index value. Each rule discards the tokens before its position and returns
the first remaining one.
"""

from __future__ import annotations

from typing import Callable, Dict

from .tokens import MAX_ARITY, GenerationError, Token, token_list


def _make_element_rule(n: int) -> Callable[..., Token]:
    def rule(*tokens: Token) -> Token:
        rest = tokens[n:]
        return rest[0]

    rule.__name__ = f"element_at_{n}"
    return rule


ELEMENT_AT_RULES: Dict[int, Callable[..., Token]] = {
    n: _make_element_rule(n) for n in range(MAX_ARITY)
}


def count(*tokens: Token) -> int:
    """Return the number of tokens; fails past the arity ceiling."""
    return len(token_list(*tokens))


def is_empty(*tokens: Token) -> int:
    """Return 1 when no tokens are given, else 0."""
    return 1 if count(*tokens) == 0 else 0


def element_at(index: int, *tokens: Token) -> Token:
    """
    Return the token at zero-based ``index``.

    Raises:
        GenerationError: If index is not an int, has no rule, or is not
            below count(*tokens).
    """
    n = count(*tokens)
    if isinstance(index, bool) or not isinstance(index, int):
        raise GenerationError(f"element_at: index must be an int, got {index!r}")
    rule = ELEMENT_AT_RULES.get(index)
    if rule is None:
        raise GenerationError(f"element_at: no rule for index {index} (ceiling {MAX_ARITY})")
    if index >= n:
        raise GenerationError(f"element_at: index {index} out of range for {n} tokens")
    return rule(*tokens)
