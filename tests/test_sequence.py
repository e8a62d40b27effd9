"""Tests for the ordered sequence primitives."""

import pytest

from ancestry_svc.sequence import (
    EmptySequenceError,
    IndexOutOfRangeError,
    SequenceError,
    append,
    at,
    drop_first,
    ensure_sequence,
    filter_seq,
    max_by,
    prepend,
    size,
)


class TestBasicOperations:
    """append / prepend / drop_first / at."""

    def test_append_returns_new_sequence(self):
        original = ("a", "b")
        result = append(original, "c")
        assert result == ("a", "b", "c")
        assert original == ("a", "b")

    def test_append_does_not_mutate_list_input(self):
        original = ["a"]
        assert append(original, "b") == ("a", "b")
        assert original == ["a"]

    def test_prepend(self):
        assert prepend("z", ("a", "b")) == ("z", "a", "b")
        assert prepend("z", ()) == ("z",)

    def test_drop_first(self):
        assert drop_first(("a", "b", "c")) == ("b", "c")
        assert drop_first(("a",)) == ()

    def test_drop_first_empty_raises(self):
        with pytest.raises(EmptySequenceError):
            drop_first(())

    def test_at(self):
        assert at(("a", "b", "c"), 0) == "a"
        assert at(("a", "b", "c"), 2) == "c"

    def test_at_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            at(("a", "b"), 2)
        assert exc_info.value.index == 2
        assert exc_info.value.length == 2

    def test_at_negative_index_rejected(self):
        with pytest.raises(IndexOutOfRangeError):
            at(("a", "b"), -1)

    def test_errors_share_a_base(self):
        assert issubclass(EmptySequenceError, SequenceError)
        assert issubclass(IndexOutOfRangeError, SequenceError)
        assert issubclass(IndexOutOfRangeError, IndexError)

    def test_size(self):
        assert size(()) == 0
        assert size((1, 2, 3)) == 3


class TestEnsureSequence:

    def test_list_becomes_tuple(self):
        assert ensure_sequence([1, 2]) == (1, 2)

    @pytest.mark.parametrize("value", ["abc", b"abc", {1, 2}, 42, None])
    def test_non_sequences_rejected(self, value):
        with pytest.raises(TypeError):
            ensure_sequence(value)


class TestFilter:
    """filter_seq keeps order and is idempotent."""

    def test_preserves_relative_order(self):
        seq = (5, 1, 4, 2, 3)
        assert filter_seq(seq, lambda x: x > 2) == (5, 4, 3)

    def test_empty_input(self):
        assert filter_seq((), lambda x: True) == ()

    def test_keeps_duplicates(self):
        assert filter_seq(("a", "b", "a"), lambda x: x == "a") == ("a", "a")

    def test_idempotent(self):
        seq = tuple(range(20))

        def is_even(x):
            return x % 2 == 0

        once = filter_seq(seq, is_even)
        assert filter_seq(once, is_even) == once


class TestMaxBy:
    """max_by is a right fold over the comparator."""

    def test_empty_raises(self):
        with pytest.raises(EmptySequenceError):
            max_by((), lambda a, b: True)

    def test_single_element(self):
        assert max_by(("only",), lambda a, b: False) == "only"

    def test_numeric_max(self):
        assert max_by((3, 9, 1, 7), lambda a, b: a >= b) == 9

    def test_first_wins_only_when_comparator_holds(self):
        # comparator never holds: the fold keeps the last element
        assert max_by(("x", "y", "z"), lambda a, b: False) == "z"
        # comparator always holds: the first element wins
        assert max_by(("x", "y", "z"), lambda a, b: True) == "x"

    def test_matches_recursive_definition(self):
        def recursive(seq, cmp):
            if len(seq) == 1:
                return seq[0]
            rest_max = recursive(seq[1:], cmp)
            return seq[0] if cmp(seq[0], rest_max) else rest_max

        def divides(a, b):
            return b % a == 0

        seq = (6, 4, 3, 2, 12, 5)
        assert max_by(seq, divides) == recursive(seq, divides)
