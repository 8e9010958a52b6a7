"""The generator monad: composable descriptions of random values.

A `Gen[T]` wraps a sampling function `RandomSource -> T`. Building a
generator never draws anything; draws happen only when it is run, and every
run is independent of the previous ones.

Example:
    ```python
    from klaw_gen.gen import int_below, pure
    from klaw_gen.source import PRNGSource

    dice = int_below(6).map(lambda k: k + 1)
    two_dice = dice.zip(dice).map(sum)
    two_dice.run(PRNGSource(seed=1))
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import msgspec

from klaw_gen.errors import InvalidBoundError

if TYPE_CHECKING:
    from klaw_gen.source import RandomSource

__all__ = [
    'Continue',
    'Done',
    'Gen',
    'bind',
    'boolean',
    'fix',
    'int_below',
    'join',
    'loop',
    'map_gen',
    'pair',
    'pure',
    'run',
    'traverse_list',
]


@dataclass(slots=True, frozen=True)
class Gen[T]:
    """A referentially transparent random computation producing T.

    Attributes:
        sample: Function drawing from a source and returning a value.
    """

    sample: Callable[[RandomSource], T]

    def run(self, source: RandomSource) -> T:
        """Execute the generator against a randomness source.

        Args:
            source: Where draws come from.

        Returns:
            T: The sampled value, a deterministic function of the source state.
        """
        return self.sample(source)

    def map[U](self, f: Callable[[T], U]) -> Gen[U]:
        """Transform sampled values with a pure function.

        Args:
            f: Function applied to every sampled value.

        Returns:
            Gen[U]: A generator performing the same draws as self.
        """
        sample = self.sample
        return Gen(lambda source: f(sample(source)))

    def zip[U](self, other: Gen[U]) -> Gen[tuple[T, U]]:
        """Sample self, then other, independently.

        Args:
            other: Generator sampled second.

        Returns:
            Gen[tuple[T, U]]: Generator of pairs.
        """
        first, second = self.sample, other.sample

        def sample(source: RandomSource) -> tuple[T, U]:
            a = first(source)
            return a, second(source)

        return Gen(sample)

    def and_then[U](self, f: Callable[[T], Gen[U]]) -> Gen[U]:
        """Sequence a generator that depends on the sampled value.

        Also known as bind or flatmap.

        Args:
            f: Function from a sampled value to the next generator.

        Returns:
            Gen[U]: Generator threading the source through both steps in order.
        """
        sample = self.sample
        return Gen(lambda source: f(sample(source)).sample(source))


class Continue[S](msgspec.Struct, frozen=True):
    """Loop step asking for another iteration with a new state."""

    state: S


class Done[T](msgspec.Struct, frozen=True):
    """Loop step carrying the final result."""

    value: T


def pure[T](value: T) -> Gen[T]:
    """Generator that always yields `value` without drawing."""
    return Gen(lambda _source: value)


def map_gen[T, U](f: Callable[[T], U], gen: Gen[T]) -> Gen[U]:
    return gen.map(f)


def pair[T, U](gen1: Gen[T], gen2: Gen[U]) -> Gen[tuple[T, U]]:
    return gen1.zip(gen2)


def bind[T, U](gen: Gen[T], f: Callable[[T], Gen[U]]) -> Gen[U]:
    return gen.and_then(f)


def join[T](gen: Gen[Gen[T]]) -> Gen[T]:
    """Flatten a generator of generators."""
    return gen.and_then(lambda inner: inner)


def int_below(n: int) -> Gen[int]:
    """Uniform integer in `[0, n)`.

    Args:
        n: Exclusive upper bound.

    Raises:
        InvalidBoundError: If `n < 1`. Raised when the generator is built,
            not when it is run.
    """
    if n < 1:
        raise InvalidBoundError(n)
    return Gen(lambda source: source.int_below(n))


boolean: Gen[bool] = Gen(lambda source: source.bool())
"""Uniform boolean."""


def traverse_list[T](gens: Iterable[Gen[T]]) -> Gen[list[T]]:
    """Sample every generator in order, collecting the results."""
    samplers = [gen.sample for gen in gens]
    return Gen(lambda source: [sample(source) for sample in samplers])


def run[T](gen: Gen[T], source: RandomSource) -> T:
    return gen.run(source)


def loop[S, T](state: S, step: Callable[[S], Gen[Continue[S] | Done[T]]]) -> Gen[T]:
    """Iterate a monadic step function until it returns `Done`.

    Runs in constant stack depth, so long retry loops and long arrays are
    fine where a chain of `and_then` calls would hit the recursion limit.

    Args:
        state: Initial loop state.
        step: Function from the current state to a generator of the next step.

    Returns:
        Gen[T]: Generator of the value carried by the final `Done`.

    Example:
        ```python
        # count draws until a six comes up
        def step(n):
            return int_below(6).map(lambda k: Done(n + 1) if k == 5 else Continue(n + 1))

        rolls_until_six = loop(0, step)
        ```
    """

    def sample(source: RandomSource) -> T:
        current = state
        while True:
            outcome = step(current).sample(source)
            if isinstance(outcome, Done):
                return outcome.value
            current = outcome.state

    return Gen(sample)


def fix[P, T](definition: Callable[[Callable[[P], Gen[T]], P], Gen[T]]) -> Callable[[P], Gen[T]]:
    """Tie the knot for a parameterised self-referential generator.

    `definition` receives the generator family being defined and a
    parameter. The definition is re-entered when the generator is sampled,
    never while it is being built, so a recursive definition does not loop
    at construction time. Termination of sampling is the caller's concern.

    Args:
        definition: Function `(self, param) -> Gen[T]`.

    Returns:
        Callable[[P], Gen[T]]: The fixed point.

    Example:
        ```python
        # geometric distribution: count heads before the first tail
        heads = fix(
            lambda self, n: boolean.and_then(lambda b: self(n + 1) if b else pure(n))
        )
        heads(0).run(PRNGSource(seed=3))
        ```
    """

    def fixed(param: P) -> Gen[T]:
        return Gen(lambda source: definition(fixed, param).sample(source))

    return fixed
