"""Error types for generator construction and execution.

Every error here is a caller contract violation and is raised at the call
site. Ordinary generation failures are not errors: they are `Nothing`
values produced by backtracking generators.
"""

from __future__ import annotations

__all__ = [
    'BacktrackExhaustedError',
    'GenError',
    'IndexOutOfRangeError',
    'InvalidBoundError',
    'MissingIndexError',
    'SourceExhaustedError',
]


class GenError(Exception):
    """Base class for klaw-gen errors."""


class IndexOutOfRangeError(GenError, IndexError):
    """Index passed to a persistent array is outside `[0, length)`."""

    def __init__(self, operation: str, index: int, length: int) -> None:
        self.operation = operation
        self.index = index
        self.length = length
        super().__init__(f'PArray.{operation}: index {index} out of range [0, {length})')


class MissingIndexError(GenError, ValueError):
    """Index mapping passed to `PArray.of_list` is not dense."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f'PArray.of_list: index {index} missing from [0, {length})')


class InvalidBoundError(GenError, ValueError):
    """Uniform draw requested from an empty range."""

    def __init__(self, bound: int) -> None:
        self.bound = bound
        super().__init__(f'int_below requires a bound >= 1, got {bound}')


class SourceExhaustedError(GenError):
    """A scripted randomness source has no draws left."""

    def __init__(self, consumed: int) -> None:
        self.consumed = consumed
        super().__init__(f'Replay source exhausted after {consumed} draws')


class BacktrackExhaustedError(GenError, RuntimeError):
    """A bounded backtrack gave up before the generator succeeded."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f'Backtracking generator failed {attempts} times in a row')
