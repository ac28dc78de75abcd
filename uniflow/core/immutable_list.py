"""Immutable sequence used for accumulated items.

Every change returns a new list, so a state that has been published can never
be altered by a later transition.
"""

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")
R = TypeVar("R")


class ImmutableList(Sequence[T], Generic[T]):
    """A read-only, hashable sequence with copy-on-write helpers.

    Example:
        >>> items = ImmutableList([1, 2])
        >>> more = items.add_all([3, 4])
        >>> list(items), list(more)
        ([1, 2], [1, 2, 3, 4])
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)

    @classmethod
    def empty(cls) -> "ImmutableList[T]":
        """Return an empty list."""
        return cls()

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> "ImmutableList[T]": ...

    def __getitem__(self, index: int | slice) -> "T | ImmutableList[T]":
        if isinstance(index, slice):
            return ImmutableList(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ImmutableList):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ImmutableList({list(self._items)!r})"

    def add(self, item: T) -> "ImmutableList[T]":
        """Return a new list with ``item`` appended."""
        return ImmutableList((*self._items, item))

    def add_all(self, items: Iterable[T]) -> "ImmutableList[T]":
        """Return a new list with ``items`` appended, in order."""
        return ImmutableList((*self._items, *items))

    def remove(self, item: T) -> "ImmutableList[T]":
        """Return a new list without any element equal to ``item``."""
        return ImmutableList(x for x in self._items if x != item)

    def where(self, predicate: Callable[[T], bool]) -> "ImmutableList[T]":
        """Return a new list of the elements matching ``predicate``."""
        return ImmutableList(x for x in self._items if predicate(x))

    def map(self, func: Callable[[T], R]) -> "ImmutableList[R]":
        """Return a new list of ``func`` applied to each element."""
        return ImmutableList(func(x) for x in self._items)

    def element_at_or_none(self, index: int) -> T | None:
        """Return the element at ``index``, or None when out of bounds.

        Negative indexes are out of bounds.
        """
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def order_by(
        self, key: Callable[[T], Any], descending: bool = False
    ) -> "ImmutableList[T]":
        """Return a new list sorted by ``key``."""
        return ImmutableList(sorted(self._items, key=key, reverse=descending))
