"""Read-only live views over the ordered lists kept by the indexes."""
from __future__ import annotations

from typing import Callable, Iterator, Sequence, TypeVar, overload

T = TypeVar("T")


class SortedView(Sequence[T]):
    """Restartable view of an index-owned list.

    Iterating walks the underlying list as it is at that moment; no copy is
    taken, so entries added later show up on the next traversal.
    """

    __slots__ = ("_items",)

    def __init__(self, items: list[T]) -> None:
        self._items = items

    def _current(self) -> list[T]:
        return self._items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):
        return self._current()[index]

    def __len__(self) -> int:
        return len(self._current())

    def __iter__(self) -> Iterator[T]:
        return iter(self._current())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._current()!r})"


class DeferredView(SortedView[T]):
    """View whose list is looked up on every access.

    Used before the owning list exists, e.g. reviews of a hotel that has none yet.
    """

    __slots__ = ("_resolve",)

    def __init__(self, resolve: Callable[[], list[T]]) -> None:
        self._resolve = resolve

    def _current(self) -> list[T]:
        return self._resolve()
