# tokfold/__init__.py
"""
tokfold public API surface.

A generation-time engine over token lists of at most MAX_ARITY elements:

    - Tokens: MAX_ARITY, EMPTY, GenerationError, is_token, token_list,
              parse_token_list, token_hash
    - Arity / indexing: count, is_empty, element_at
    - Folding: fold_max, foreach, foreach_comma
    - Strategies: built-in maps/concats and the named strategy registry
    - Trace: FoldTrace
    - Header generation: generate_header
"""

from __future__ import annotations

from .core.tokens import (
    MAX_ARITY,
    EMPTY,
    GenerationError,
    Token,
    is_token,
    assert_token,
    token_list,
    parse_token_list,
    token_hash,
)
from .core.arity import count, is_empty, element_at
from .fold import fold_max, foreach, foreach_comma
from .strategies import (
    assert_strategy_pure,
    register_strategy,
    get_strategy,
    has_strategy,
    clear_registry,
    list_strategy_names,
    identity_map,
    index_scale_map,
    scale_map,
    call_map,
    double_map,
    member_map,
    sum_concat,
    comma_concat,
    product_concat,
    and_concat,
    space_concat,
)
from .trace import FoldTrace
from .header_gen import generate_header


__all__ = [
    # tokens
    "MAX_ARITY",
    "EMPTY",
    "GenerationError",
    "Token",
    "is_token",
    "assert_token",
    "token_list",
    "parse_token_list",
    "token_hash",

    # arity / indexing
    "count",
    "is_empty",
    "element_at",

    # folding
    "fold_max",
    "foreach",
    "foreach_comma",

    # strategies
    "assert_strategy_pure",
    "register_strategy",
    "get_strategy",
    "has_strategy",
    "clear_registry",
    "list_strategy_names",
    "identity_map",
    "index_scale_map",
    "scale_map",
    "call_map",
    "double_map",
    "member_map",
    "sum_concat",
    "comma_concat",
    "product_concat",
    "and_concat",
    "space_concat",

    # trace
    "FoldTrace",

    # header generation
    "generate_header",
]
