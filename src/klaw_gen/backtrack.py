"""Backtracking generators: generators that may discard an attempt.

A backtracking generator is a `Gen[Option[T]]`. `Some(v)` is a successful
attempt, `Nothing` an attempt to throw away. `backtrack` turns one back
into a plain generator by re-running the same description until it
succeeds.

Example:
    ```python
    even = guard(lambda n: n % 2 == 0, succeed(int_range(0, 100)))
    backtrack(even).run(PRNGSource(seed=2))
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from klaw_gen.errors import BacktrackExhaustedError
from klaw_gen.gen import Continue, Done, Gen, loop, pure
from klaw_gen.option import Nothing, NothingType, Option, Some
from klaw_gen.runtime import get_config, get_logger

if TYPE_CHECKING:
    from klaw_gen.source import RandomSource

__all__ = ['backtrack', 'cond', 'guard', 'retry', 'succeed']

log = get_logger(__name__)


def succeed[T](gen: Gen[T]) -> Gen[Option[T]]:
    """Lift a generator into a backtracking generator that never fails."""
    return gen.map(Some)


def guard[T](predicate: Callable[[T], bool], gen: Gen[Option[T]]) -> Gen[Option[T]]:
    """Discard attempts whose value fails `predicate`.

    `gen` is always sampled, so the draws consumed do not depend on the
    outcome.

    Args:
        predicate: Check applied to successful values.
        gen: Backtracking generator to filter.
    """
    return gen.map(lambda outcome: outcome.filter(predicate))


def cond[T](flag: bool, gen: Gen[Option[T]] | Callable[[], Gen[Option[T]]]) -> Gen[Option[T]]:
    """Fail without touching `gen` when `flag` is false.

    The guarded generator is neither sampled nor, when passed as a thunk,
    built. This matters when it is only well defined under `flag`, such as
    a draw from a range that is empty otherwise.

    Args:
        flag: Whether the guarded generator may run.
        gen: Backtracking generator, or a zero-argument function building one.

    Example:
        ```python
        cond(n > 0, lambda: succeed(int_below(n)))
        ```
    """
    if not flag:
        return pure(Nothing)
    if isinstance(gen, Gen):
        return gen
    return gen()


def backtrack[T](gen: Gen[Option[T]], *, max_attempts: int | None = None) -> Gen[T]:
    """Re-run a backtracking generator until it succeeds.

    Each attempt samples the same description afresh; nothing is cached
    between attempts.

    Without a cap this loops for as long as `gen` keeps failing: it
    terminates only if every attempt succeeds with positive probability.
    A "backtrack.slow" warning is logged every `retry_warning_interval`
    failures so a generator that can never succeed does not hang silently.

    Args:
        gen: Backtracking generator to retry.
        max_attempts: Give up after this many failed attempts. Defaults to
            the configured `max_attempts`, which defaults to no cap.

    Returns:
        Gen[T]: Generator of the first successful value.

    Raises:
        BacktrackExhaustedError: When the cap is reached (at run time).
    """
    if max_attempts is not None and max_attempts < 1:
        msg = f'max_attempts must be at least 1, got {max_attempts}'
        raise ValueError(msg)
    attempt = gen.sample

    def sample(source: RandomSource) -> T:
        config = get_config()
        cap = max_attempts if max_attempts is not None else config.max_attempts
        interval = config.retry_warning_interval
        failures = 0
        while True:
            outcome = attempt(source)
            if isinstance(outcome, Some):
                return outcome.value
            failures += 1
            if cap is not None and failures >= cap:
                log.error('backtrack.exhausted', attempts=failures)
                raise BacktrackExhaustedError(failures)
            if failures % interval == 0:
                log.warning('backtrack.slow', attempts=failures)

    return Gen(sample)


def retry[T](gen: Gen[Option[T]], attempts: int) -> Gen[Option[T]]:
    """Bounded retry that stays inside the backtracking algebra.

    Samples `gen` up to `attempts` times and yields the first success, or
    `Nothing` if every attempt failed.

    Args:
        gen: Backtracking generator to retry.
        attempts: Maximum number of attempts, at least 1.
    """
    if attempts < 1:
        msg = f'attempts must be at least 1, got {attempts}'
        raise ValueError(msg)

    def step(tried: int) -> Gen[Continue[int] | Done[Option[T]]]:
        def decide(outcome: Some[T] | NothingType) -> Continue[int] | Done[Option[T]]:
            if isinstance(outcome, Some) or tried + 1 >= attempts:
                return Done(outcome)
            return Continue(tried + 1)

        return gen.map(decide)

    return loop(0, step)
