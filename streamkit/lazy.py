""" Pull-based lazy sequences over a "next value or sentinel" callback.

A LazySequence stages at most one value at a time.  `has_next`
calls the supplier once and keeps the result until `next` takes it,
so asking twice never advances the underlying producer.
"""

from typing import Any, Generic, TypeVar
from collections.abc import Callable, Iterator

from stream import Stream, source

T = TypeVar('T')

# marks an empty staging slot (distinct from any user sentinel)
_EMPTY = object()

class SequenceExhausted(LookupError):
    """ Raised by LazySequence.next() when no value is available.
    """
    pass

class LazySequence(Generic[T], Iterator[T]):
    """ Present `supplier` as a pull sequence that ends when
    the supplier returns `sentinel`.

    Once the sentinel has been staged, the sequence stays
    exhausted and the supplier is not called again.

    >>> xs = iter([3, 2, 1])
    >>> LazySequence(lambda: next(xs, None)) >> list
    [3, 2, 1]
    """
    def __init__(self,
                 supplier: Callable[[], Any],
                 sentinel: Any = None) -> None:
        self.supplier = supplier
        self.sentinel = sentinel
        self._current: Any = _EMPTY

    def _is_sentinel(self, value: Any) -> bool:
        # same test as iter(callable, sentinel)
        return value is self.sentinel or value == self.sentinel

    def has_next(self) -> bool:
        if self._current is _EMPTY:
            self._current = self.supplier()
        return not self._is_sentinel(self._current)

    def next(self) -> T:
        if not self.has_next():
            raise SequenceExhausted("sequence has no more items")
        value, self._current = self._current, _EMPTY
        return value

    def __iter__(self) -> "LazySequence[T]":
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.next()

    def __rshift__(self, outpipe):
        return Stream.pipe(self, outpipe)

@source
def supply(supplier: Callable[[], Any], sentinel: Any = None):
    """ Source yielding supplier() results until `sentinel`.

    >>> it = iter('abc')
    >>> supply(lambda: next(it, None)) >> list
    ['a', 'b', 'c']
    """
    return LazySequence(supplier, sentinel)
