"""
Tests for fold trace events.
"""

import json

import pytest

from tokfold import FoldTrace, foreach, foreach_comma, fold_max, scale_map, sum_concat, identity_map
from tokfold.trace import canon_event, canon_events, canon_jsonl


class TestCanonEvent:
    def test_key_order_fixed(self):
        ev = canon_event({"mu": {"result": "a", "index": 0}, "i": 0, "type": "fold.map", "v": 1})
        assert list(ev.keys()) == ["v", "type", "i", "mu"]
        assert list(ev["mu"].keys()) == ["index", "result"]

    def test_defaults_v(self):
        assert canon_event({"type": "fold.empty", "i": 0}) == {"v": 1, "type": "fold.empty", "i": 0}

    def test_unknown_keys_dropped(self):
        ev = canon_event({"type": "fold.empty", "i": 0, "extra": 1})
        assert "extra" not in ev

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError, match="event.type"):
            canon_event({"type": "step", "i": 0})

    def test_rejects_negative_i(self):
        with pytest.raises(ValueError, match="event.i"):
            canon_event({"type": "fold.empty", "i": -1})

    def test_rejects_wrong_version(self):
        with pytest.raises(ValueError, match="event.v"):
            canon_event({"v": 2, "type": "fold.empty", "i": 0})

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            canon_event(["fold.empty", 0])

    def test_events_must_be_contiguous(self):
        with pytest.raises(ValueError, match="contiguous"):
            canon_events([{"type": "fold.empty", "i": 1}])

    def test_jsonl(self):
        text = canon_jsonl([{"type": "fold.empty", "i": 0}])
        assert text == '{"v":1,"type":"fold.empty","i":0}\n'
        assert canon_jsonl([]) == ""


class TestFoldTrace:
    def test_disabled_records_nothing(self):
        trace = FoldTrace(enabled=False)
        foreach("ctx", sum_concat, scale_map, "a", "b", trace=trace)
        assert trace.get_events() == []

    def test_foreach_steps_in_order(self):
        trace = FoldTrace(enabled=True)
        out = foreach("ctx", sum_concat, scale_map, "a", "b", "c", trace=trace)
        events = trace.get_events()
        assert [(e["type"], e["mu"]["index"]) for e in events] == [
            ("fold.map", 0),
            ("fold.map", 1),
            ("fold.concat", 1),
            ("fold.map", 2),
            ("fold.concat", 2),
        ]
        assert [e["i"] for e in events] == list(range(5))
        assert events[-1]["mu"]["result"] == out

    def test_empty_fold(self):
        trace = FoldTrace(enabled=True)
        fold_max(0, sum_concat, scale_map, trace=trace)
        assert trace.get_events() == [{"v": 1, "type": "fold.empty", "i": 0}]

    def test_empty_comma_list(self):
        trace = FoldTrace(enabled=True)
        foreach_comma("ctx", identity_map, trace=trace)
        assert [e["type"] for e in trace.get_events()] == ["fold.empty"]

    def test_events_are_canonical_and_json(self):
        trace = FoldTrace(enabled=True)
        foreach_comma("ctx", identity_map, "a", "b", trace=trace)
        events = trace.get_events()
        assert canon_events(events) == events
        json.dumps(events)

    def test_clear(self):
        trace = FoldTrace(enabled=True)
        foreach("ctx", sum_concat, scale_map, "a", trace=trace)
        trace.clear()
        assert trace.get_events() == []

    def test_env_flag_default(self, monkeypatch):
        import tokfold.trace as trace_mod

        monkeypatch.setattr(trace_mod, "TOKFOLD_TRACE_ENABLED", True)
        assert FoldTrace().is_enabled is True
        monkeypatch.setattr(trace_mod, "TOKFOLD_TRACE_ENABLED", False)
        assert FoldTrace().is_enabled is False
