"""Option type: Some[T] | Nothing, the outcome of a backtracking generator."""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypeIs

import msgspec

__all__ = ['Nothing', 'NothingType', 'Option', 'Some']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """A successful generation attempt carrying a value of type T.

    Examples:
        >>> Some(42).map(lambda x: x * 2)
        Some(value=84)
        >>> Some(3).filter(lambda x: x > 5)
        NothingType()
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True since this is Some."""
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value."""
        return f(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return self if the predicate holds for the value, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing

    def zip[U](self, other: Some[U] | NothingType) -> Some[tuple[T, U]] | NothingType:
        """Pair two values; Nothing if the other option is Nothing."""
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """A discarded generation attempt.

    This is a singleton - use the `Nothing` constant instead of
    instantiating directly.
    """

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True since this is Nothing."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise since there is no value.

        Raises:
            RuntimeError: Always.
        """
        raise RuntimeError('Called unwrap on Nothing')

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value."""
        return default

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        return self

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        return self

    def filter[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        return self

    def zip[U](self, _other: Some[U] | NothingType) -> NothingType:
        return self


Nothing: NothingType = NothingType()
"""Singleton instance representing a failed attempt."""


type Option[T] = Some[T] | NothingType
