"""Typeclass utilities for ad-hoc polymorphism."""

from klaw_gen.typeclass.core import NoInstanceError, TypeClass, typeclass

__all__ = [
    'NoInstanceError',
    'TypeClass',
    'typeclass',
]
