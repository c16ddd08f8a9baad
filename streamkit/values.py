from typing import Any, Generic, Optional, TypeVar
from collections.abc import Callable

from stream import Source

from .stream_utils import nullable

T = TypeVar('T')

class Holder(Generic[T]):
    """ Mutable single slot, handy for getting a value out of
    a callback:

    >>> h = Holder(0)
    >>> from streamkit.stream_utils import for_each
    >>> [1, 2, 3] >> for_each(lambda x: h.set(h.get() + x))
    >>> h.get()
    6
    """
    def __init__(self, value: Optional[T] = None) -> None:
        self.value = value

    def get(self) -> Optional[T]:
        return self.value

    def set(self, value: Optional[T]) -> None:
        self.value = value

    def to_optional(self) -> Source:
        return nullable(self.value)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return 'Holder(value=%r)' % (self.value,)

class LazyStr:
    """ Defer str(supplier()) until the object is actually rendered,
    e.g. as a logging argument that may be filtered out.

    >>> '-{}-'.format(LazyStr(lambda: 5))
    '-5-'
    """
    __slots__ = ('supplier',)

    def __init__(self, supplier: Callable[[], Any]) -> None:
        self.supplier = supplier

    @classmethod
    def of(cls, supplier: Callable[[], Any]) -> "LazyStr":
        return cls(supplier)

    def __str__(self) -> str:
        return str(self.supplier())

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return 'LazyStr(%r)' % (self.supplier,)
