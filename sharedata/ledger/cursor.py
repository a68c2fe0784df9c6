"""
Cursor over ledger query and history results.

A cursor is a ledger-side resource: whoever opens one must close it, on
every exit path. Cursors are context managers and plain iterators, and also
expose the explicit has_next()/next()/close() surface.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

_MISSING = object()


class LedgerCursor(Generic[T]):
    def __init__(self, items: Iterable[T], on_close: Callable[[], None] | None = None):
        self._items: Iterator[T] = iter(items)
        self._on_close = on_close
        self._peeked: object = _MISSING
        self.closed = False

    def has_next(self) -> bool:
        if self.closed:
            return False
        if self._peeked is _MISSING:
            self._peeked = next(self._items, _MISSING)
        return self._peeked is not _MISSING

    def next(self) -> T:
        """Return the next item; StopIteration when exhausted or closed."""
        if not self.has_next():
            raise StopIteration
        item = self._peeked
        self._peeked = _MISSING
        return item  # type: ignore[return-value]

    def close(self) -> None:
        """Release the cursor. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self._peeked = _MISSING
        self._items = iter(())
        if self._on_close is not None:
            self._on_close()

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return self.next()

    def __enter__(self) -> LedgerCursor[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
