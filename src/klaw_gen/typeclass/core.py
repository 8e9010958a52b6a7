"""@typeclass decorator and dispatch mechanism.

Dispatches a polymorphic function on the type of its first argument, the
way klaw_gen distributes `Gen` over the different container shapes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

import wrapt

__all__ = ['NoInstanceError', 'TypeClass', 'typeclass']

F = TypeVar('F', bound=Callable[..., Any])


class NoInstanceError(TypeError):
    """Raised when no typeclass instance is registered for a type."""

    def __init__(self, typeclass_name: str, value_type: type) -> None:
        self.typeclass_name = typeclass_name
        self.value_type = value_type
        super().__init__(
            f"No instance of '{typeclass_name}' for type '{value_type.__name__}'"
        )


class TypeClass(wrapt.ObjectProxy, Generic[F]):
    """A typeclass with registered type instances.

    The proxied function supplies the name, signature and docstring. If it
    has a body it also serves as the fallback for unregistered types. A body
    that only returns None (`...`, `pass`, `return None`) counts as no body,
    so such a function cannot be a fallback; unregistered types then raise
    `NoInstanceError`.

    Attributes:
        _self_name: The name of the typeclass function.
        _self_default: The fallback implementation, if any.
        _self_instances: Dictionary mapping types to their instance implementations.

    Example:
        ```python
        @typeclass
        def size(container) -> int: ...

        @size.instance(list)
        def size_list(container: list) -> int:
            return len(container)
        ```
    """

    def __init__(self, default_fn: F) -> None:
        super().__init__(default_fn)
        self._self_name = default_fn.__name__
        self._self_default: F | None = default_fn if _has_implementation(default_fn) else None
        self._self_instances: dict[type, Callable[..., Any]] = {}

    def instance(self, *types: type) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register an implementation for one or more types.

        Args:
            *types: The types to register the implementation for.

        Returns:
            A decorator that registers the implementation.
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            for type_ in types:
                self._self_instances[type_] = fn
            return fn

        return decorator

    def _find_instance(self, value: Any) -> Callable[..., Any] | None:
        """Find the best matching instance for a value: exact type, then MRO."""
        for base in type(value).__mro__:
            if base in self._self_instances:
                return self._self_instances[base]
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Dispatch to the appropriate instance based on first argument."""
        if not args:
            raise TypeError(f'{self._self_name}() requires at least one argument')

        first_arg = args[0]
        instance_fn = self._find_instance(first_arg)

        if instance_fn is not None:
            return instance_fn(*args, **kwargs)

        if self._self_default is not None:
            return self._self_default(*args, **kwargs)

        raise NoInstanceError(self._self_name, type(first_arg))

    def __repr__(self) -> str:
        return f'<typeclass {self._self_name} with {len(self._self_instances)} instances>'


def _stub() -> None: ...


def _documented_stub() -> None:
    """Stub."""


# Bytecode of bodies that only return None, with and without a docstring.
_STUB_BYTECODE = frozenset({_stub.__code__.co_code, _documented_stub.__code__.co_code})


def _has_implementation(fn: Callable[..., Any]) -> bool:
    """Check if a function has a body beyond `...`, `pass` or a docstring.

    Detection compares bytecode, so an explicit `return None` body is
    indistinguishable from `...` and also reports False.
    """
    code = getattr(fn, '__code__', None)
    if code is None:
        return True

    if code.co_code in _STUB_BYTECODE and set(code.co_consts) <= {None, fn.__doc__}:
        return False

    return True


def typeclass(fn: F) -> TypeClass[F]:
    """Decorator to create a typeclass from a function signature.

    Args:
        fn: The function defining the typeclass signature.

    Returns:
        A TypeClass instance that can dispatch to registered instances.
    """
    return TypeClass(fn)
