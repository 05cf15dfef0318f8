"""A container with constant-time add and remove that does not keep order."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Optional, TypeVar

__all__ = ["PtrVec"]

T = TypeVar("T")


class PtrVec(Generic[T]):
    """Elements carry their own position in an ``index`` attribute.

    Removing an element moves the last element into its place.
    """

    def __init__(self, factory: Optional[Callable[[], T]] = None) -> None:
        self._factory = factory
        self._items: List[T] = []

    def add(self, elem: Optional[T] = None) -> T:
        """Append ``elem``, or a new element from the factory, and return it."""
        if elem is None:
            if self._factory is None:
                raise TypeError("no element given and no factory set")
            elem = self._factory()
        elem.index = len(self._items)
        self._items.append(elem)
        return elem

    def erase(self, elem: T) -> None:
        idx = getattr(elem, "index", None)
        if not isinstance(idx, int) or not 0 <= idx < len(self._items) or self._items[idx] is not elem:
            raise ValueError("element is not in this container")
        last = self._items[-1]
        if idx < len(self._items) - 1:
            last.index = idx
            self._items[idx] = last
        self._items.pop()

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]