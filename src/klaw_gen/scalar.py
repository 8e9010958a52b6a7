"""Scalar and list generators built directly on the generator monad."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from klaw_gen.gen import Gen, boolean, int_below, join, pure, traverse_list
from klaw_gen.parray import PArray, shuffle

__all__ = [
    'Bound',
    'boolean',
    'char_range',
    'digit',
    'int_range',
    'lowercase',
    'one_of',
    'select',
    'shuffle_list',
    'split_int',
    'string',
    'traverse_list',
    'unit',
    'uppercase',
]


class Bound(Enum):
    """Whether the upper limit of a range is included."""

    INCL = 'incl'
    EXCL = 'excl'


def _size(start: int, limit: int, bound: Bound) -> int:
    if bound is Bound.INCL:
        return limit - start + 1
    return limit - start


def int_range(start: int, limit: int, bound: Bound = Bound.INCL) -> Gen[int]:
    """Uniform integer from `start` up to `limit`.

    Args:
        start: Smallest value.
        limit: Largest value (INCL) or one past it (EXCL).
        bound: Whether `limit` itself may be drawn.

    Raises:
        InvalidBoundError: If the range is empty.
    """
    return int_below(_size(start, limit, bound)).map(lambda i: start + i)


def char_range(start: str, limit: str, bound: Bound = Bound.INCL) -> Gen[str]:
    """Uniform character between two code points."""
    first = ord(start)
    return int_below(_size(first, ord(limit), bound)).map(lambda i: chr(first + i))


lowercase: Gen[str] = char_range('a', 'z')
uppercase: Gen[str] = char_range('A', 'Z')
digit: Gen[str] = char_range('0', '9')
unit: Gen[None] = pure(None)


def string(size: Gen[int], char: Gen[str]) -> Gen[str]:
    """String whose length is drawn from `size` and characters from `char`.

    Example:
        ```python
        identifiers = string(int_range(1, 8), lowercase)
        ```
    """
    return size.and_then(lambda n: traverse_list([char] * n)).map(''.join)


def split_int(n: int) -> Gen[tuple[int, int]]:
    """Split `n` into `(k, n - k)` with k uniform in `{0, ..., n}`."""
    return int_below(n + 1).map(lambda k: (k, n - k))


def select[T](items: Sequence[T]) -> Gen[T]:
    """Uniform element of a nonempty sequence.

    Raises:
        InvalidBoundError: If `items` is empty.
    """
    choices = tuple(items)
    return int_below(len(choices)).map(lambda i: choices[i])


def one_of[T](gens: Sequence[Gen[T]]) -> Gen[T]:
    """Pick one of the generators uniformly, then sample it."""
    return join(select(gens))


def shuffle_list[T](items: Sequence[T]) -> Gen[list[T]]:
    """Uniformly random permutation of a list."""
    return shuffle(PArray.from_values(items)).map(PArray.values)
