"""Randomness sources: the state a generator is run against.

A `Gen` is a pure description; all of its draws go through a `RandomSource`.
Two sources are provided:

- `PRNGSource`: a private, seedable `random.Random`. No global random state
  is touched, so identical seeds yield identical draw sequences.
- `ReplaySource`: replays a fixed script of integer draws, for pinning down
  exactly which branch a generator takes.
"""

from __future__ import annotations

import random
from abc import abstractmethod
from collections.abc import Iterable
from typing import Protocol, Self

from klaw_gen.errors import InvalidBoundError, SourceExhaustedError

__all__ = ['PRNGSource', 'RandomSource', 'ReplaySource']


class RandomSource(Protocol):
    """Protocol for the primitive draws every generator is built from."""

    @abstractmethod
    def int_below(self, n: int) -> int:
        """Draw an integer uniformly from `[0, n)`.

        Args:
            n: Exclusive upper bound, at least 1.

        Raises:
            InvalidBoundError: If `n < 1`.
        """
        ...

    @abstractmethod
    def bool(self) -> bool:
        """Draw a uniform boolean."""
        ...


class PRNGSource:
    """Seeded pseudo-random source backed by its own `random.Random`.

    Example:
        ```python
        src = PRNGSource(seed=7)
        src.int_below(10)
        # always the same value for seed 7
        ```
    """

    __slots__ = ('_rng', 'seed')

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    @classmethod
    def from_random(cls, rng: random.Random) -> Self:
        """Wrap an existing `random.Random` without reseeding it."""
        source = cls.__new__(cls)
        source.seed = None
        source._rng = rng
        return source

    def int_below(self, n: int) -> int:
        if n < 1:
            raise InvalidBoundError(n)
        return self._rng.randrange(n)

    def bool(self) -> bool:
        return self._rng.getrandbits(1) == 1

    def spawn(self) -> PRNGSource:
        """Derive an independent child source.

        The child is seeded from this source's stream, so spawning is itself
        deterministic. Use one child per parallel invocation.
        """
        return PRNGSource(self._rng.getrandbits(64))

    def __repr__(self) -> str:
        return f'PRNGSource(seed={self.seed!r})'


class ReplaySource:
    """Source that replays a fixed sequence of integer draws.

    Booleans consume one draw and are read as `draw == 1`, matching
    `int_below(2)`.

    Example:
        ```python
        src = ReplaySource([2, 0])
        src.int_below(3)  # 2
        src.bool()        # False
        src.int_below(3)  # raises SourceExhaustedError
        ```
    """

    __slots__ = ('_draws', 'consumed')

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws = tuple(draws)
        self.consumed = 0

    @property
    def remaining(self) -> int:
        """Number of scripted draws not yet consumed."""
        return len(self._draws) - self.consumed

    def int_below(self, n: int) -> int:
        if n < 1:
            raise InvalidBoundError(n)
        if self.consumed >= len(self._draws):
            raise SourceExhaustedError(self.consumed)
        value = self._draws[self.consumed]
        if not 0 <= value < n:
            msg = f'Scripted draw {value} is outside [0, {n}) at position {self.consumed}'
            raise ValueError(msg)
        self.consumed += 1
        return value

    def bool(self) -> bool:
        return self.int_below(2) == 1

    def __repr__(self) -> str:
        return f'ReplaySource(consumed={self.consumed}, remaining={self.remaining})'
