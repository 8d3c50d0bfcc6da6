"""
Tests for count / is_empty / element_at.
"""

import pytest

from tokfold import MAX_ARITY, GenerationError, count, is_empty, element_at
from tokfold.core.arity import ELEMENT_AT_RULES


def _tokens(n):
    return tuple(f"t{i}" for i in range(n))


class TestCount:
    @pytest.mark.parametrize("n", range(MAX_ARITY + 1))
    def test_count_is_exact(self, n):
        assert count(*_tokens(n)) == n

    def test_count_empty_is_zero(self):
        assert count() == 0

    def test_count_seven_fails(self):
        with pytest.raises(GenerationError):
            count(*_tokens(MAX_ARITY + 1))

    def test_count_accepts_int_literals(self):
        assert count(1, 2, 3) == 3

    def test_count_rejects_non_tokens(self):
        with pytest.raises(GenerationError):
            count("a", 2.5)


class TestIsEmpty:
    def test_empty_is_one(self):
        assert is_empty() == 1

    @pytest.mark.parametrize("n", range(1, MAX_ARITY + 1))
    def test_non_empty_is_zero(self, n):
        assert is_empty(*_tokens(n)) == 0

    def test_is_empty_seven_fails(self):
        with pytest.raises(GenerationError):
            is_empty(*_tokens(MAX_ARITY + 1))


class TestElementAt:
    def test_one_rule_per_index(self):
        assert sorted(ELEMENT_AT_RULES) == list(range(MAX_ARITY))

    @pytest.mark.parametrize("n", range(1, MAX_ARITY + 1))
    def test_round_trip_every_position(self, n):
        """Indexing every position recovers the original sequence in order."""
        toks = _tokens(n)
        assert tuple(element_at(i, *toks) for i in range(n)) == toks

    def test_nested_call_form(self):
        assert element_at(1, "a", "f(b, c)", "d") == "f(b, c)"

    def test_index_equal_to_count_fails(self):
        with pytest.raises(GenerationError, match="out of range"):
            element_at(3, "a", "b", "c")

    def test_index_on_empty_list_fails(self):
        with pytest.raises(GenerationError, match="out of range"):
            element_at(0)

    def test_negative_index_fails(self):
        with pytest.raises(GenerationError, match="no rule"):
            element_at(-1, "a")

    def test_index_past_ceiling_fails(self):
        with pytest.raises(GenerationError, match="no rule"):
            element_at(MAX_ARITY, *_tokens(MAX_ARITY))

    def test_non_int_index_fails(self):
        with pytest.raises(GenerationError, match="must be an int"):
            element_at("0", "a")

    def test_bool_index_fails(self):
        with pytest.raises(GenerationError, match="must be an int"):
            element_at(False, "a")

    def test_too_many_tokens_fails(self):
        with pytest.raises(GenerationError, match="arity ceiling"):
            element_at(0, *_tokens(MAX_ARITY + 1))
