# tokfold/fold.py
"""
Fold engine and the two wrappers built on it.

    fold_max(max_index, concat, map, *tokens)
    foreach(context, concat, map, *tokens)
    foreach_comma(context, map, *tokens)

fold_max dispatches through FOR_RULES, one rule per arity. Rule n folds the
first n-1 positions through rule n-1, maps position n-1 and combines both:

    FOR_0                -> ""
    FOR_1                -> map(0, *tokens)
    FOR_n                -> concat(n-1, FOR_{n-1}, map(n-1, *tokens), *tokens)

so for (a, b, c) the result nests as concat(2, concat(1, m0, m1), m2).

The raw calling convention hands every strategy the full token tuple;
foreach rebinds map to the concrete element at each position and closes
over a shared context value. Every failure raises GenerationError before
any text is returned.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .core.arity import count, element_at, is_empty
from .core.tokens import EMPTY, MAX_ARITY, GenerationError, Token, assert_token, token_list
from .strategies import assert_strategy_pure, comma_concat
from .trace import FoldTrace

ForRule = Callable[[Callable[..., Token], Callable[..., Token], tuple, FoldTrace], Token]


def _for_0(concat, map, tokens, trace):
    trace.empty()
    return EMPTY


def _for_1(concat, map, tokens, trace):
    result = map(0, *tokens)
    trace.mapped(0, result)
    return result


def _make_for_rule(n: int) -> ForRule:
    def rule(concat, map, tokens, trace):
        head = FOR_RULES[n - 1](concat, map, tokens, trace)
        tail = map(n - 1, *tokens)
        trace.mapped(n - 1, tail)
        result = concat(n - 1, head, tail, *tokens)
        trace.concatenated(n - 1, result)
        return result

    rule.__name__ = f"_for_{n}"
    return rule


FOR_RULES: Dict[int, ForRule] = {0: _for_0, 1: _for_1}
for _n in range(2, MAX_ARITY + 1):
    FOR_RULES[_n] = _make_for_rule(_n)
del _n


def fold_max(
    max_index: int,
    concat: Callable[..., Token],
    map: Callable[..., Token],
    *tokens: Token,
    trace: Optional[FoldTrace] = None,
) -> Token:
    """
    Fold the first ``max_index`` positions of ``tokens``.

    Strategies use the raw convention:
        map(index, *tokens)
        concat(index, head, tail, *tokens)

    Raises:
        GenerationError: More than MAX_ARITY tokens, max_index outside
            0..len(tokens), a non-callable strategy, or a strategy result
            that is not a token.
    """
    toks = token_list(*tokens)
    if isinstance(max_index, bool) or not isinstance(max_index, int):
        raise GenerationError(f"fold_max: max_index must be an int, got {max_index!r}")
    rule = FOR_RULES.get(max_index)
    if rule is None:
        raise GenerationError(f"fold_max: no rule for arity {max_index} (ceiling {MAX_ARITY})")
    if max_index > len(toks):
        raise GenerationError(f"fold_max: arity {max_index} exceeds the {len(toks)} tokens given")

    pure_concat = assert_strategy_pure(concat, "concat")
    pure_map = assert_strategy_pure(map, "map")
    if trace is None:
        trace = FoldTrace(enabled=False)
    return rule(pure_concat, pure_map, toks, trace)


def foreach(
    context: Token,
    concat: Callable[..., Token],
    map: Callable[..., Token],
    *tokens: Token,
    trace: Optional[FoldTrace] = None,
) -> Token:
    """
    Map every element with a shared context, then fold the results.

    Strategies:
        map(context, index, element)
        concat(context, index, head, tail)

    Example:
        foreach("ctx", sum_concat, scale_map, "x0", "x1", "x2")
            -> 'ctx*x0 + ctx*x1 + ctx*x2'
    """
    assert_token(context, "context")
    pure_concat = assert_strategy_pure(concat, "concat")
    pure_map = assert_strategy_pure(map, "map")

    def bound_map(index: int, *toks: Token) -> Token:
        return pure_map(context, index, element_at(index, *toks))

    def bound_concat(index: int, head: Token, tail: Token, *toks: Token) -> Token:
        return pure_concat(context, index, head, tail)

    return fold_max(count(*tokens), bound_concat, bound_map, *tokens, trace=trace)


def foreach_comma(
    context: Token,
    map: Callable[..., Token],
    *tokens: Token,
    trace: Optional[FoldTrace] = None,
) -> Token:
    """
    Build a trailing argument-list extension.

    Empty input expands to "" (no lone comma); otherwise the result is a
    leading comma followed by the comma-joined mapped elements in order:

        foreach_comma("numbers", double_map, "a", "b", "c")
            -> ', 2a, 2b, 2c'
    """
    assert_token(context, "context")
    pure_map = assert_strategy_pure(map, "map")

    if is_empty(*tokens):
        if trace is not None:
            trace.empty()
        return EMPTY
    return ", " + str(foreach(context, comma_concat, pure_map, *tokens, trace=trace))

