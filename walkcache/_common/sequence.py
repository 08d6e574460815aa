"""Lazy sequence combinators used to compose traversal steps.

All helpers return iterators and pull from their input only on demand.
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def constantly(value: T) -> Callable[..., T]:
    """Return a function that ignores its arguments and returns ``value``."""
    def _constant(*args, **kwargs) -> T:
        return value
    return _constant


def filter_items(iterable: Iterable[T], pred: Callable[[T], bool]) -> Iterator[T]:
    """Yield the values of ``iterable`` that satisfy ``pred``."""
    for value in iterable:
        if pred(value):
            yield value


def map_items(iterable: Iterable[T], func: Callable[[T], R]) -> Iterator[R]:
    """Yield ``func(value)`` for each value of ``iterable``."""
    for value in iterable:
        yield func(value)


def flatmap(iterable: Iterable[T], func: Callable[[T], Iterable[R]]) -> Iterator[R]:
    """Map ``func`` over ``iterable`` and yield from each resulting iterable."""
    for outer in map_items(iterable, func):
        yield from outer


def partition(iterable: Iterable[T], size: int) -> Iterator[List[T]]:
    """Split ``iterable`` into lists of ``size`` items.

    The last list may be shorter. An empty input yields nothing.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Partition size must be positive, got {size}")

    buffer: List[T] = []
    for value in iterable:
        buffer.append(value)
        if len(buffer) == size:
            yield buffer
            buffer = []

    if buffer:
        yield buffer


def or_chain(*funcs: Callable[..., Any]) -> Callable[..., Optional[Any]]:
    """Combine functions into one that returns the first truthy result.

    Each function is called with the arguments given to the combined
    function, in order, until one returns a truthy value.

    Example:
        >>> first = or_chain(lambda x, y: None, lambda x, y: x + y)
        >>> first(1, 2)
        3
    """
    def _chained(*args, **kwargs) -> Optional[Any]:
        for func in funcs:
            result = func(*args, **kwargs)
            if result:
                return result
        return None
    return _chained
