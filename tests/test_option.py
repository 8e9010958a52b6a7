"""Tests for Option type (Some and Nothing)."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_gen import Nothing, NothingType, Some


class TestSomeCreation:
    """Tests for Some instantiation and basic properties."""

    def test_some_creation(self):
        """Some wraps a value."""
        assert Some(42).value == 42

    def test_some_with_none(self):
        """Some can wrap None (Some(None) is not Nothing)."""
        some = Some(None)
        assert some.value is None
        assert some != Nothing

    def test_some_is_frozen(self):
        """Some instances are immutable."""
        some = Some(42)
        with pytest.raises(AttributeError):
            some.value = 100  # type: ignore[misc]


class TestNothing:
    """Tests for the Nothing singleton."""

    def test_nothing_is_singleton_type(self):
        assert isinstance(Nothing, NothingType)
        assert Nothing == NothingType()

    def test_nothing_unwrap_raises(self):
        """Nothing.unwrap() raises RuntimeError."""
        with pytest.raises(RuntimeError, match='Called unwrap on Nothing'):
            Nothing.unwrap()

    def test_nothing_combinators(self):
        """Every combinator on Nothing returns Nothing."""
        assert Nothing.map(lambda x: x + 1) is Nothing
        assert Nothing.and_then(lambda x: Some(x)) is Nothing
        assert Nothing.filter(lambda x: True) is Nothing
        assert Nothing.zip(Some(1)) is Nothing
        assert Nothing.unwrap_or(7) == 7


class TestSomeCombinators:
    """Tests for map, and_then, filter and zip on Some."""

    @given(st.integers())
    def test_map(self, x):
        assert Some(x).map(lambda v: v * 2) == Some(x * 2)

    def test_and_then(self):
        assert Some(3).and_then(lambda v: Some(v + 1)) == Some(4)
        assert Some(3).and_then(lambda v: Nothing) is Nothing

    @given(st.integers())
    def test_filter(self, x):
        """filter keeps the value iff the predicate holds."""
        result = Some(x).filter(lambda v: v % 2 == 0)
        assert result == (Some(x) if x % 2 == 0 else Nothing)

    def test_zip(self):
        assert Some(1).zip(Some('a')) == Some((1, 'a'))
        assert Some(1).zip(Nothing) is Nothing

    def test_querying(self):
        assert Some(1).is_some() is True
        assert Some(1).is_none() is False
        assert Nothing.is_some() is False
        assert Nothing.is_none() is True
        assert Some(5).unwrap() == 5
        assert Some(5).unwrap_or(0) == 5
