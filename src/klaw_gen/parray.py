"""Persistent arrays and a Fisher-Yates shuffle built on them.

`PArray` is an immutable indexed container. `set` copies only the path from
the root to the updated slot of a 32-way trie, so every older version stays
valid and observably unchanged while sharing the rest of its storage with
the new one. Lookups and updates cost O(log32 n).

Example:
    ```python
    arr = PArray.init(5, lambda i: i * i)
    arr2 = arr.set(0, 'x')
    arr.get(0), arr2.get(0)
    # (0, 'x')
    shuffle(arr).run(PRNGSource(seed=4)).values()
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Any, Self

import msgspec

from klaw_gen.errors import IndexOutOfRangeError, MissingIndexError
from klaw_gen.gen import Continue, Done, Gen, int_below, loop, pure

if TYPE_CHECKING:
    from klaw_gen.source import RandomSource

__all__ = ['PArray', 'shuffle', 'traverse']

_BITS = 5
_WIDTH = 1 << _BITS
_MASK = _WIDTH - 1


def _build(values: Sequence[Any]) -> tuple[tuple[Any, ...], int]:
    """Pack values into trie nodes; return (root, shift)."""
    nodes: list[tuple[Any, ...]] = [
        tuple(values[i : i + _WIDTH]) for i in range(0, len(values), _WIDTH)
    ] or [()]
    shift = 0
    while len(nodes) > 1:
        nodes = [tuple(nodes[i : i + _WIDTH]) for i in range(0, len(nodes), _WIDTH)]
        shift += _BITS
    return nodes[0], shift


def _assoc(node: tuple[Any, ...], shift: int, index: int, value: Any) -> tuple[Any, ...]:
    slot = (index >> shift) & _MASK
    if shift == 0:
        child = value
    else:
        child = _assoc(node[slot], shift - _BITS, index, value)
    return (*node[:slot], child, *node[slot + 1 :])


def _walk(node: tuple[Any, ...], shift: int) -> Iterator[Any]:
    if shift == 0:
        yield from node
        return
    for child in node:
        yield from _walk(child, shift - _BITS)


class PArray[T](msgspec.Struct, frozen=True):
    """Immutable array of fixed length with non-destructive update.

    Every index in `[0, length)` holds a value and no other index exists.
    Use the constructors (`init`, `of_list`, `from_values`) rather than
    building the trie fields by hand.

    Attributes:
        length: Number of elements.
        shift: Bit shift of the root level of the trie.
        root: Root trie node; leaves hold the values.
    """

    length: int
    shift: int
    root: tuple[Any, ...]

    @classmethod
    def init(cls, length: int, f: Callable[[int], T]) -> Self:
        """Build an array of `length` elements where element i is `f(i)`.

        Args:
            length: Number of elements, at least 0.
            f: Function from an index to its value.
        """
        if length < 0:
            msg = f'PArray.init: negative length {length}'
            raise ValueError(msg)
        return cls.from_values([f(i) for i in range(length)])

    @classmethod
    def from_values(cls, values: Iterable[T]) -> Self:
        """Build an array holding `values` at indices 0, 1, 2, ..."""
        items = list(values)
        root, shift = _build(items)
        return cls(length=len(items), shift=shift, root=root)

    @classmethod
    def of_list(cls, pairs: Iterable[tuple[int, T]]) -> Self:
        """Build an array from `(index, value)` pairs.

        The length is the number of pairs, and every index in `[0, length)`
        must appear. When an index repeats, the last pair wins, which
        necessarily leaves some other index missing.

        Raises:
            MissingIndexError: If an index of `[0, length)` has no pair.
        """
        items = list(pairs)
        mapping = dict(items)
        length = len(items)
        for i in range(length - 1, -1, -1):
            if i not in mapping:
                raise MissingIndexError(i, length)
        return cls.from_values([mapping[i] for i in range(length)])

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[T]:
        if self.length:
            yield from _walk(self.root, self.shift)

    def get(self, index: int) -> T:
        """Return the value at `index`.

        Raises:
            IndexOutOfRangeError: If `index` is not in `[0, length)`.
        """
        if index < 0 or index >= self.length:
            raise IndexOutOfRangeError('get', index, self.length)
        node: Any = self.root
        shift = self.shift
        while shift > 0:
            node = node[(index >> shift) & _MASK]
            shift -= _BITS
        return node[index & _MASK]

    def set(self, index: int, value: T) -> PArray[T]:
        """Return a new array with `index` bound to `value`.

        self is left untouched.

        Raises:
            IndexOutOfRangeError: If `index` is not in `[0, length)`.
        """
        if index < 0 or index >= self.length:
            raise IndexOutOfRangeError('set', index, self.length)
        root = _assoc(self.root, self.shift, index, value)
        return PArray(length=self.length, shift=self.shift, root=root)

    def swap(self, i: int, j: int) -> PArray[T]:
        """Return a new array with the values at `i` and `j` exchanged."""
        if i == j:
            return self
        vi, vj = self.get(i), self.get(j)
        return self.set(i, vj).set(j, vi)

    def to_list(self) -> list[tuple[int, T]]:
        """Return `(index, value)` pairs in ascending index order."""
        return list(enumerate(self))

    def values(self) -> list[T]:
        """Return the values in index order."""
        return list(self)


def traverse[T](arr: PArray[Gen[T]]) -> Gen[PArray[T]]:
    """Sample every generator of an array, in index order.

    Args:
        arr: Array whose elements are generators.

    Returns:
        Gen[PArray[T]]: Generator of arrays of the same length.
    """
    gens = arr.values()

    def sample(source: RandomSource) -> PArray[T]:
        return PArray.from_values([gen.sample(source) for gen in gens])

    return Gen(sample)


def shuffle[T](arr: PArray[T]) -> Gen[PArray[T]]:
    """Uniformly random permutation of an array (Fisher-Yates).

    For i from `length - 1` down to 1, draws k uniformly in `[0, i]` and
    swaps positions i and k, producing each of the `length!` orderings
    with equal probability. Each swap yields a fresh array; `arr` itself
    is never modified.

    Args:
        arr: Array to permute.

    Returns:
        Gen[PArray[T]]: Generator of permuted copies of `arr`.
    """

    def step(state: tuple[int, PArray[T]]) -> Gen[Continue[tuple[int, PArray[T]]] | Done[PArray[T]]]:
        i, current = state
        if i < 1:
            return pure(Done(current))
        return int_below(i + 1).map(lambda k: Continue((i - 1, current.swap(i, k))))

    return loop((len(arr) - 1, arr), step)
