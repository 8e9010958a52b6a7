"""Bridge from generators to hypothesis strategies.

Requires the `hypothesis` extra. Hypothesis supplies a seeded `Random` per
example, so failures replay deterministically; the generator itself knows
nothing about shrinking.

Example:
    ```python
    from hypothesis import given
    from klaw_gen.strategy import to_strategy

    @given(to_strategy(fueled.generate(tree, 4)))
    def test_tree_roundtrip(tree): ...
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import strategies as st

from klaw_gen.source import PRNGSource

if TYPE_CHECKING:
    from klaw_gen.gen import Gen

__all__ = ['to_strategy']


def to_strategy[T](gen: Gen[T]) -> st.SearchStrategy[T]:
    """Wrap a generator as a hypothesis strategy.

    Args:
        gen: Generator to run once per drawn example.

    Returns:
        A strategy whose examples are values sampled from `gen`.
    """
    return st.randoms(use_true_random=False).map(lambda rng: gen.run(PRNGSource.from_random(rng)))
