"""Ordered sequence primitives.

Pure operations over ordered sequences of opaque elements. Inputs are never
mutated; every operation that produces a sequence returns a new tuple.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar


T = TypeVar("T")


class SequenceError(Exception):
    """Base class for sequence contract violations."""
    pass


class EmptySequenceError(SequenceError, IndexError):
    """Raised when an operation needs at least one element."""
    pass


class IndexOutOfRangeError(SequenceError, IndexError):
    """Raised when an index falls outside the sequence."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} out of range for sequence of length {length}")
        self.index = index
        self.length = length


def ensure_sequence(value: Any) -> tuple:
    """Return ``value`` as a tuple, rejecting anything that is not an ordered sequence.

    Strings and bytes are sequences to Python but never a sequence of
    entities, so they are rejected too.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"Expected an ordered sequence, got {type(value).__name__}")
    return tuple(value)


def size(seq: Sequence[T]) -> int:
    return len(seq)


def append(seq: Sequence[T], elem: T) -> tuple[T, ...]:
    """Return a new sequence with ``elem`` added at the end."""
    return (*seq, elem)


def prepend(elem: T, seq: Sequence[T]) -> tuple[T, ...]:
    """Return a new sequence with ``elem`` added at the front."""
    return (elem, *seq)


def drop_first(seq: Sequence[T]) -> tuple[T, ...]:
    """Return ``seq`` without its first element.

    Raises:
        EmptySequenceError: If ``seq`` is empty
    """
    if not seq:
        raise EmptySequenceError("Cannot drop the first element of an empty sequence")
    return tuple(seq[1:])


def at(seq: Sequence[T], index: int) -> T:
    """Return the element at ``index``.

    Negative indexes are not supported.

    Raises:
        IndexOutOfRangeError: If ``index`` is outside ``[0, len(seq))``
    """
    if index < 0 or index >= len(seq):
        raise IndexOutOfRangeError(index, len(seq))
    return seq[index]


def filter_seq(seq: Sequence[T], predicate: Callable[[T], bool]) -> tuple[T, ...]:
    """Return the elements satisfying ``predicate`` in their original order."""
    return tuple(elem for elem in seq if predicate(elem))


def max_by(seq: Sequence[T], comparator: Callable[[T, T], bool]) -> T:
    """Select the maximum element under ``comparator`` with a right fold.

    For ``[first, *rest]`` the result is ``first`` when
    ``comparator(first, max_by(rest))`` holds, otherwise ``max_by(rest)``.
    The fold is evaluated from the right so the tie-break between elements
    the comparator cannot order favours the later one.

    Raises:
        EmptySequenceError: If ``seq`` is empty
    """
    if not seq:
        raise EmptySequenceError("Cannot take the maximum of an empty sequence")

    best = seq[-1]
    for index in range(len(seq) - 2, -1, -1):
        candidate = seq[index]
        if comparator(candidate, best):
            best = candidate
    return best
