import functools
import heapq
import typing
from typing import Any, TypeVar

from maze_graph.errors import InvalidArgumentError

T = TypeVar("T", bound=Any)


def _compare(a: Any, b: Any) -> int:
    """three-way comparison using only `<`"""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def top_k_sort(k: int, items: typing.Iterable[T]) -> list[T]:
    """return the `k` smallest of `items` in ascending order

    the sort is stable: items which compare equal keep their input order.
    if `k` is larger than the number of items, all of them are returned.

    ```
    >>> top_k_sort(2, [5, 1, 4, 2])
    [1, 2]
    >>> top_k_sort(10, [3, 1, 2])
    [1, 2, 3]
    ```
    """
    if k < 0:
        raise InvalidArgumentError(f"k must be non-negative, got {k = }")
    if items is None:
        raise InvalidArgumentError("items must not be None")

    # items which only define `__lt__` (like edges, whose `__eq__` is identity) would
    # otherwise never tie, and `nsmallest` could not fall back on input position
    return heapq.nsmallest(k, items, key=functools.cmp_to_key(_compare))
