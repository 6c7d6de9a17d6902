"""List that keeps elements unique, in insertion order. Not thread safe."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class UniqueList(Generic[T]):
    def __init__(self, items: Iterable[T] = ()) -> None:
        self._data: list[T] = []
        for item in items:
            self.add(item)

    def add(self, element: T) -> None:
        """Append element unless it is already present."""
        if element not in self._data:
            self._data.append(element)

    def remove(self, element: T) -> None:
        """Remove element if present; absent elements are ignored."""
        try:
            self._data.remove(element)
        except ValueError:
            pass

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._data):
            raise IndexError("index out of range")

    def remove_index(self, index: int) -> T:
        self._check_index(index)
        return self._data.pop(index)

    def remove_first(self) -> T:
        if not self._data:
            raise IndexError("list is empty")
        return self._data.pop(0)

    def index_of(self, element: T) -> int:
        """Return the element's index, or -1 when it is absent."""
        try:
            return self._data.index(element)
        except ValueError:
            return -1

    def clear(self) -> None:
        self._data = []

    def for_each_and_clear(self, func: Callable[[T], object]) -> None:
        """Call func on every element, then empty the list."""
        for item in list(self._data):
            func(item)
        self.clear()

    def __contains__(self, element: object) -> bool:
        return element in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> T:
        self._check_index(index)
        return self._data[index]

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._data))

    def __str__(self) -> str:
        return "[" + " ".join(str(item) for item in self._data) + "]"

    def __repr__(self) -> str:
        return f"UniqueList({self._data!r})"