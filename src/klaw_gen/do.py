"""@do decorator for generator-based do-notation over `Gen`."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import wrapt

from klaw_gen.gen import Gen

if TYPE_CHECKING:
    from klaw_gen.source import RandomSource

__all__ = ['do']

P = ParamSpec('P')
T = TypeVar('T')


def do(func: Callable[P, Generator[Gen[Any], Any, T]]) -> Callable[P, Gen[T]]:
    """Decorator for writing dependent generators in imperative style.

    Yield `Gen` values to sample them; the sampled value is sent back into
    the function. The function's return value is the generated value. The
    decorated function returns a `Gen`, and every run of that `Gen` starts
    the Python generator afresh, so runs stay independent.

    Args:
        func: A generator function yielding `Gen` values and returning T.

    Returns:
        A function with the same parameters returning `Gen[T]`.

    Example:
        ```python
        @do
        def ordered_pair(limit: int):
            low = yield int_range(0, limit)
            high = yield int_range(low, limit)
            return (low, high)

        ordered_pair(10).run(PRNGSource(seed=0))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Generator[Gen[Any], Any, T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Gen[T]:
        def sample(source: RandomSource) -> T:
            steps = wrapped(*args, **kwargs)
            try:
                step = next(steps)
                while True:
                    if not isinstance(step, Gen):
                        steps.close()
                        msg = f'@do functions must yield Gen values, got {type(step).__name__}'
                        raise TypeError(msg)
                    step = steps.send(step.sample(source))
            except StopIteration as e:
                return e.value

        return Gen(sample)

    return wrapper(func)  # type: ignore[return-value]
