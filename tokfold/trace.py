"""
Fold trace events.

Every fold step can be observed as a canonical event:

    {"v": 1, "type": "fold.map",    "i": 0, "mu": {"index": 0, "result": "ctx*x0"}}
    {"v": 1, "type": "fold.concat", "i": 2, "mu": {"index": 1, "result": "..."}}
    {"v": 1, "type": "fold.empty",  "i": 0}

Feature flag: set TOKFOLD_TRACE=1 to enable recording by default. When
disabled, FoldTrace methods are no-ops.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional

TRACE_EVENT_V1 = 1
TRACE_EVENT_KEY_ORDER = ("v", "type", "i", "t", "mu")

TOKFOLD_TRACE_ENABLED = os.environ.get("TOKFOLD_TRACE", "0") == "1"

FOLD_EVENT_TYPES = frozenset(["fold.map", "fold.concat", "fold.empty"])


def _deep_sort_json(x: Any) -> Any:
    if isinstance(x, dict):
        return {str(k): _deep_sort_json(x[k]) for k in sorted(x.keys())}
    if isinstance(x, list):
        return [_deep_sort_json(v) for v in x]
    return x


def canon_event(ev: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Canonicalize a single trace event to a deterministic dict.

    Required:
    - v: const 1
    - type: one of FOLD_EVENT_TYPES
    - i: integer >= 0

    Optional ``t`` (stable tag) and ``mu`` (payload, deep-sorted) are dropped
    when None. Unknown keys are ignored. Top-level key order is fixed.
    """
    if not isinstance(ev, Mapping):
        raise TypeError(f"event must be a mapping, got {type(ev)}")

    v = ev.get("v", TRACE_EVENT_V1)
    if v != TRACE_EVENT_V1:
        raise ValueError(f"event.v must be {TRACE_EVENT_V1}, got {v!r}")

    typ = ev.get("type")
    if typ not in FOLD_EVENT_TYPES:
        raise ValueError(f"event.type must be one of {sorted(FOLD_EVENT_TYPES)}, got {typ!r}")

    i = ev.get("i")
    if isinstance(i, bool) or not isinstance(i, int) or i < 0:
        raise ValueError("event.i must be an integer >= 0")

    t = ev.get("t", None)
    if t is not None and (not isinstance(t, str) or not t.strip()):
        raise ValueError("event.t must be a non-empty string when provided")

    mu = ev.get("mu", None)
    if isinstance(mu, (dict, list)):
        mu = _deep_sort_json(mu)

    out: Dict[str, Any] = {"v": v, "type": typ, "i": i}
    if t is not None:
        out["t"] = t
    if mu is not None:
        out["mu"] = mu
    return out


def canon_events(events: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Canonicalize a sequence of events; ``i`` must already be contiguous 0..n-1.
    """
    out = [canon_event(ev) for ev in events]
    got = [e["i"] for e in out]
    expected = list(range(len(out)))
    if got != expected:
        raise ValueError(f"event.i must be contiguous 0..n-1 in-order; got {got}, expected {expected}")
    return out


def canon_jsonl(events: Iterable[Mapping[str, Any]]) -> str:
    """Serialize canonical events to JSONL (one event per line, newline-terminated)."""
    lines = [
        json.dumps(e, ensure_ascii=False, separators=(",", ":"), sort_keys=False)
        for e in canon_events(events)
    ]
    return "\n".join(lines) + ("\n" if lines else "")


class FoldTrace:
    """
    Observer for fold steps. Events share one contiguous index sequence.

    Pass an instance as ``trace=`` to fold_max / foreach / foreach_comma.
    """

    def __init__(self, enabled: Optional[bool] = None) -> None:
        self._events: List[Dict[str, Any]] = []
        self._enabled = enabled if enabled is not None else TOKFOLD_TRACE_ENABLED

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def _emit(self, event_type: str, mu: Any = None) -> None:
        if not self._enabled:
            return
        ev: Dict[str, Any] = {"v": TRACE_EVENT_V1, "type": event_type, "i": len(self._events)}
        if mu is not None:
            ev["mu"] = mu
        self._events.append(canon_event(ev))

    def empty(self) -> None:
        self._emit("fold.empty")

    def mapped(self, index: int, result: Any) -> None:
        self._emit("fold.map", mu={"index": index, "result": result})

    def concatenated(self, index: int, result: Any) -> None:
        self._emit("fold.concat", mu={"index": index, "result": result})

    def get_events(self) -> List[Dict[str, Any]]:
        return list(self._events)

    def clear(self) -> None:
        self._events = []
