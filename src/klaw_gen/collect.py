"""collect(): sample every generator inside a container.

`collect` is a typeclass dispatching on the container type. Register more
container types with `@collect.instance(MyContainer)`.

Example:
    ```python
    point = collect({'x': int_range(0, 9), 'y': int_range(0, 9)})
    point.run(PRNGSource(seed=5))
    # {'x': ..., 'y': ...}
    ```
"""

from __future__ import annotations

from typing import Any

from klaw_gen.gen import Gen, pure, traverse_list
from klaw_gen.option import Nothing, NothingType, Some
from klaw_gen.parray import PArray, traverse
from klaw_gen.typeclass import NoInstanceError, typeclass

__all__ = ['collect']


@typeclass
def collect(container: Any) -> Gen[Any]:
    """Turn a container of generators into a generator of containers.

    Elements are sampled in iteration order.

    Raises:
        NoInstanceError: If no instance is registered for the container type.
    """
    raise NoInstanceError('collect', type(container))


@collect.instance(list)
def _collect_list(container: list[Gen[Any]]) -> Gen[list[Any]]:
    return traverse_list(container)


@collect.instance(tuple)
def _collect_tuple(container: tuple[Gen[Any], ...]) -> Gen[tuple[Any, ...]]:
    return traverse_list(container).map(tuple)


@collect.instance(dict)
def _collect_dict(container: dict[Any, Gen[Any]]) -> Gen[dict[Any, Any]]:
    keys = list(container)
    return traverse_list(container[key] for key in keys).map(
        lambda values: dict(zip(keys, values, strict=True))
    )


@collect.instance(PArray)
def _collect_parray(container: PArray[Gen[Any]]) -> Gen[PArray[Any]]:
    return traverse(container)


@collect.instance(Some)
def _collect_some(container: Some[Gen[Any]]) -> Gen[Some[Any]]:
    return container.value.map(Some)


@collect.instance(NothingType)
def _collect_nothing(container: NothingType) -> Gen[NothingType]:
    return pure(Nothing)
