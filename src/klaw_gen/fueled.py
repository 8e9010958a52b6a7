"""Fuel-bounded generators for recursive data.

A fueled generator maps a fuel budget to a backtracking generator. Fuel
counts recursive constructor applications: `tick` spends one unit, `prod`
splits the budget between two children, and `zero` is the only way to
succeed, and only once the budget is exactly spent. Since every recursive
step goes through `tick`, fuel strictly decreases and every sampled value
is finite.

Example:
    ```python
    from klaw_gen import backtrack, fueled
    from klaw_gen.fueled import binary, nullary

    class Leaf: ...
    class Node:
        def __init__(self, left, right): ...

    tree = fueled.fix(lambda self: fueled.choose([nullary(Leaf()), binary(self, self, Node)]))
    backtrack(tree(3)).run(PRNGSource(seed=0))  # a tree with at most 3 Nodes
    ```

Failure (`Nothing`) is a normal outcome here: it means the sampled path
could not use up the fuel exactly. `backtrack` or `generate` retries.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from klaw_gen import gen as _gen
from klaw_gen.backtrack import backtrack
from klaw_gen.gen import Gen, pure, traverse_list
from klaw_gen.option import Nothing, NothingType, Option, Some
from klaw_gen.scalar import select, split_int

if TYPE_CHECKING:
    from klaw_gen.source import RandomSource

__all__ = [
    'Fueled',
    'binary',
    'choose',
    'fix',
    'fix_with',
    'generate',
    'map',
    'nullary',
    'prod',
    'tick',
    'unary',
    'zero',
]

type Splitter = Callable[[int], Gen[tuple[int, int]]]

_FAIL: Gen[NothingType] = pure(Nothing)


@dataclass(slots=True, frozen=True)
class Fueled[T]:
    """Function from fuel to a backtracking generator of T.

    Attributes:
        attempt: Builds the backtracking generator for a given fuel.
    """

    attempt: Callable[[int], Gen[Option[T]]]

    def __call__(self, fuel: int) -> Gen[Option[T]]:
        return self.attempt(fuel)

    def map[U](self, f: Callable[[T], U]) -> Fueled[U]:
        """Transform successful values, leaving fuel use unchanged."""
        attempt = self.attempt
        return Fueled(lambda fuel: attempt(fuel).map(lambda outcome: outcome.map(f)))

    def zip[U](self, other: Fueled[U]) -> Fueled[tuple[T, U]]:
        """Pair with another fueled generator, splitting fuel uniformly."""
        return prod(split_int, self, other)


def map[T, U](f: Callable[[T], U], gen: Fueled[T]) -> Fueled[U]:  # noqa: A001
    return gen.map(f)


def zero[T](value: T) -> Fueled[T]:
    """Base case: succeeds with `value` iff the fuel is exactly 0.

    Any other fuel, negative included, fails. Leftover fuel is never
    silently dropped.
    """
    success = pure(Some(value))
    return Fueled(lambda fuel: success if fuel == 0 else _FAIL)


def tick[T](gen: Fueled[T]) -> Fueled[T]:
    """Spend one unit of fuel, then run `gen` with the rest.

    Fails immediately at fuel 0 (or below).
    """

    def attempt(fuel: int) -> Gen[Option[T]]:
        remaining = fuel - 1
        if remaining < 0:
            return _FAIL
        return gen(remaining)

    return Fueled(attempt)


def prod[T, U](split: Splitter, gen1: Fueled[T], gen2: Fueled[U]) -> Fueled[tuple[T, U]]:
    """Fueled generator of pairs.

    Draws a partition `(k1, k2) = split(fuel)`, then samples `gen1(k1)` and
    `gen2(k2)` independently. Succeeds only when both do. Negative fuel
    fails without drawing a partition.

    Args:
        split: Partition of a fuel budget into two parts summing to it,
            usually `split_int`.
        gen1: Generator of the first component.
        gen2: Generator of the second component.
    """

    def attempt(fuel: int) -> Gen[Option[tuple[T, U]]]:
        if fuel < 0:
            return _FAIL
        return (
            split(fuel)
            .and_then(lambda parts: gen1(parts[0]).zip(gen2(parts[1])))
            .map(lambda outcomes: outcomes[0].zip(outcomes[1]))
        )

    return Fueled(attempt)


def choose[T](candidates: Iterable[Fueled[T]]) -> Fueled[T]:
    """Uniform choice among the candidates that succeed at the current fuel.

    Every candidate is sampled at the given fuel before choosing, so a
    candidate's position in the list does not bias the result and failure
    is reported only when every alternative failed. An empty candidate list
    always fails.
    """
    alternatives = tuple(candidates)

    def pick(outcomes: list[Option[T]]) -> Gen[Option[T]]:
        survivors = [outcome.value for outcome in outcomes if isinstance(outcome, Some)]
        if not survivors:
            return _FAIL
        return select(survivors).map(Some)

    def attempt(fuel: int) -> Gen[Option[T]]:
        return traverse_list([candidate(fuel) for candidate in alternatives]).and_then(pick)

    return Fueled(attempt)


def fix[T](definition: Callable[[Fueled[T]], Fueled[T]]) -> Fueled[T]:
    """Self-referential fueled generator.

    `definition` receives the generator being defined. It is unfolded
    lazily, once per fuel value, at sampling time. Every path from the
    definition back to itself must go through `tick`, or sampling does not
    terminate.

    Sampling recurses once per level of nesting in the generated value, at
    about four interpreter frames per level. Under the default recursion
    limit of 1000, values nesting up to about 150 levels deep are fine;
    a linear shape at fuel ~220 raises `RecursionError`. Raise the limit
    with `sys.setrecursionlimit` for deeper values.

    Args:
        definition: Function from "self" to the generator's definition.
    """
    return Fueled(_gen.fix(lambda self, fuel: definition(Fueled(self))(fuel)))


def fix_with[P, T](
    definition: Callable[[Callable[[P], Fueled[T]], P], Fueled[T]],
) -> Callable[[P], Fueled[T]]:
    """Parameterised variant of `fix`.

    Useful for mutually dependent shapes, such as expressions indexed by a
    type or by a scope.

    Args:
        definition: Function `(self, param) -> Fueled[T]`.

    Returns:
        Callable[[P], Fueled[T]]: The family of fueled generators.
    """

    def family(param: P) -> Fueled[T]:
        def attempt(fuel: int) -> Gen[Option[T]]:
            def sample(source: RandomSource) -> Option[T]:
                return definition(family, param)(fuel).sample(source)

            return Gen(sample)

        return Fueled(attempt)

    return family


def nullary[T](value: T) -> Fueled[T]:
    """Constructor without recursive arguments."""
    return zero(value)


def unary[T, U](gen: Fueled[T], f: Callable[[T], U]) -> Fueled[U]:
    """Constructor with one recursive argument; spends one unit of fuel."""
    return tick(gen).map(f)


def binary[T, U, V](gen1: Fueled[T], gen2: Fueled[U], merge: Callable[[T, U], V]) -> Fueled[V]:
    """Constructor with two recursive arguments; spends one unit of fuel.

    The remaining fuel is split uniformly between the two arguments.
    """
    return tick(prod(split_int, gen1, gen2).map(lambda parts: merge(parts[0], parts[1])))


def generate[T](gen: Fueled[T], fuel: int, *, max_attempts: int | None = None) -> Gen[T]:
    """Plain generator from a fueled one: retry `gen(fuel)` until it succeeds.

    Pick a fuel for which a successful path exists, or this loops (see
    `backtrack`).
    """
    return backtrack(gen(fuel), max_attempts=max_attempts)
