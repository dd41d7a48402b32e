"""Small iteration helpers."""

from __future__ import annotations

import itertools
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")
K = TypeVar("K")


def group_by(items: Iterable[T], key: Callable[[T], K]) -> Iterator[tuple[K, list[T]]]:
    """Yield ``(key, run)`` for each run of consecutive items with equal keys."""
    for group_key, run in itertools.groupby(items, key):
        yield group_key, list(run)


class SizedIterator(Iterator[T]):
    """An iterator that reports a declared length."""

    def __init__(self, iterable: Iterable[T], length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        self._iter = iter(iterable)
        self._length = length

    def __iter__(self) -> SizedIterator[T]:
        return self

    def __next__(self) -> T:
        return next(self._iter)

    def __len__(self) -> int:
        return self._length