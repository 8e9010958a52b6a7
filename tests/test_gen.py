"""Tests for the Gen monad and its primitives."""

import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_gen import (
    Continue,
    Done,
    Gen,
    InvalidBoundError,
    PRNGSource,
    ReplaySource,
    bind,
    boolean,
    int_below,
    join,
    loop,
    map_gen,
    pair,
    pure,
    run,
    traverse_list,
)
from klaw_gen.gen import fix

from tests.strategies import seeds


class TestPure:
    """Tests for pure()."""

    def test_pure_returns_value(self):
        """pure(x) always yields x."""
        assert pure(42).run(PRNGSource(seed=0)) == 42

    def test_pure_draws_nothing(self):
        """pure() consumes no randomness."""
        source = ReplaySource([])
        assert pure('x').run(source) == 'x'
        assert source.consumed == 0


class TestMap:
    """Tests for Gen.map and the functor laws."""

    @given(seeds)
    def test_identity_law(self, seed):
        """Mapping the identity leaves the samples unchanged."""
        gen = int_below(1000)
        assert gen.map(lambda x: x).run(PRNGSource(seed)) == gen.run(PRNGSource(seed))

    @given(seeds)
    def test_composition_law(self, seed):
        """map(g . f) == map(f).map(g)."""
        gen = int_below(1000)

        def f(x):
            return x * 3

        def g(x):
            return x - 7

        composed = gen.map(lambda x: g(f(x))).run(PRNGSource(seed))
        chained = gen.map(f).map(g).run(PRNGSource(seed))
        assert composed == chained

    def test_map_gen_function(self):
        """map_gen is the function form of Gen.map."""
        assert map_gen(str, pure(5)).run(ReplaySource([])) == '5'


class TestPairAndBind:
    """Tests for independent pairing and dependent sequencing."""

    def test_zip_samples_first_then_second(self):
        """zip draws for the left generator before the right one."""
        source = ReplaySource([3, 1])
        assert int_below(5).zip(int_below(2)).run(source) == (3, 1)
        assert source.consumed == 2

    def test_pair_function(self):
        """pair is the function form of Gen.zip."""
        assert pair(pure(1), pure('a')).run(ReplaySource([])) == (1, 'a')

    def test_and_then_threads_source(self):
        """and_then feeds the first sample into the next generator."""
        gen = int_below(10).and_then(lambda n: int_below(n + 1).map(lambda k: (n, k)))
        assert gen.run(ReplaySource([7, 4])) == (7, 4)

    def test_bind_function(self):
        """bind is the function form of Gen.and_then."""
        gen = bind(pure(3), lambda n: pure(n * 2))
        assert gen.run(ReplaySource([])) == 6

    @given(seeds)
    def test_left_identity(self, seed):
        """pure(a).and_then(f) == f(a)."""

        def f(n):
            return int_below(n + 1)

        assert pure(9).and_then(f).run(PRNGSource(seed)) == f(9).run(PRNGSource(seed))

    @given(seeds)
    def test_right_identity(self, seed):
        """gen.and_then(pure) == gen."""
        gen = int_below(50)
        assert gen.and_then(pure).run(PRNGSource(seed)) == gen.run(PRNGSource(seed))

    def test_join_flattens(self):
        """join samples the outer generator, then the inner one."""
        nested = int_below(2).map(lambda b: pure('left') if b == 0 else int_below(4))
        assert join(nested).run(ReplaySource([0])) == 'left'
        assert join(nested).run(ReplaySource([1, 3])) == 3


class TestPrimitives:
    """Tests for int_below, boolean and run."""

    @given(seeds, st.integers(min_value=1, max_value=10_000))
    def test_int_below_in_range(self, seed, n):
        """int_below(n) stays in [0, n)."""
        assert 0 <= int_below(n).run(PRNGSource(seed)) < n

    @pytest.mark.parametrize('bound', [0, -1, -100])
    def test_int_below_rejects_empty_range(self, bound):
        """int_below with a non-positive bound fails at construction."""
        with pytest.raises(InvalidBoundError):
            int_below(bound)

    def test_boolean_reads_draw(self):
        """boolean consumes one draw from [0, 2)."""
        assert boolean.run(ReplaySource([1])) is True
        assert boolean.run(ReplaySource([0])) is False

    def test_run_function(self):
        """run(gen, source) is gen.run(source)."""
        assert run(pure(1), PRNGSource(seed=0)) == 1

    def test_gen_is_frozen(self):
        """Gen instances are immutable."""
        gen = pure(1)
        with pytest.raises(AttributeError):
            gen.sample = lambda source: 2  # type: ignore[misc]

    def test_runs_are_independent(self):
        """Running the same Gen twice with equal seeds gives equal results."""
        gen = traverse_list([int_below(100)] * 20)
        assert gen.run(PRNGSource(seed=11)) == gen.run(PRNGSource(seed=11))

    def test_traverse_list_order(self):
        """traverse_list samples in list order."""
        gens = [int_below(10), int_below(10), int_below(10)]
        assert traverse_list(gens).run(ReplaySource([5, 6, 7])) == [5, 6, 7]


class TestLoop:
    """Tests for the stack-safe monadic loop."""

    def test_loop_counts_until_done(self):
        """loop iterates until the step returns Done."""

        def step(n):
            return int_below(6).map(lambda k: Done(n + 1) if k == 5 else Continue(n + 1))

        assert loop(0, step).run(ReplaySource([0, 2, 5])) == 3

    def test_loop_is_stack_safe(self):
        """Many more iterations than the recursion limit are fine."""
        iterations = sys.getrecursionlimit() * 20

        def step(n):
            return pure(Done(n) if n >= iterations else Continue(n + 1))

        assert loop(0, step).run(ReplaySource([])) == iterations


class TestFix:
    """Tests for the parameterised fixpoint."""

    def test_fix_recurses_lazily(self):
        """Defining a recursive generator does not recurse at build time."""
        calls = []

        def definition(self, n):
            calls.append(n)
            return boolean.and_then(lambda b: self(n + 1) if b else pure(n))

        heads = fix(definition)
        gen = heads(0)
        assert calls == []
        assert gen.run(ReplaySource([1, 1, 0])) == 2
        assert calls == [0, 1, 2]

    def test_fix_returns_gen(self):
        """The fixed point maps parameters to Gen instances."""
        heads = fix(lambda self, n: pure(n))
        assert isinstance(heads(3), Gen)
