from typing import Any, Optional, Union
from collections.abc import Callable, Iterable, Iterator
import re

from stream import Source, stream, sink, map

from .lazy import supply
from .control import Break

def nullable(value: Optional[Any]) -> Source:
    """ Empty source for None, otherwise a one-item source.

    >>> nullable(None) >> list
    []
    >>> nullable(10) >> list
    [10]
    """
    if value is None:
        return Source([])
    return Source([value])

def from_iterator(iterator: Iterator) -> Source:
    """ Wrap a (possibly stateful) iterator so it can be
    used on the left of `>>`.
    """
    return Source(iterator)

@stream
def flat_map(items, fn: Callable[[Any], Iterable]):
    """ Replace every item with the contents of fn(item).

    >>> [1, 2, 3] >> flat_map(range) >> list
    [0, 0, 1, 0, 1, 2]
    """
    for i in items:
        yield from fn(i)

@sink
def for_each(items, fn: Callable[[Any], Any]) -> Any:
    """ Call fn on every item.

    fn may raise Break(value) to stop early; the value is returned.
    The input is closed afterwards if it can be (generators,
    DirectoryWalker), so abandoning a walk releases its listing.
    """
    try:
        for i in items:
            fn(i)
    except Break as b:
        return b.value
    finally:
        close = getattr(items, 'close', None)
        if close is not None:
            close()
    return None

def match_results(pattern: Union[str, bytes, re.Pattern],
                  string: Union[str, bytes],
                  flags: int = 0) -> Source:
    """ Lazily produce every re.Match of pattern in string.

    An empty match moves the search position forward by one,
    so the sequence always terminates.
    """
    rx = re.compile(pattern, flags)
    pos = 0
    end = len(string)

    def find() -> Optional[re.Match]:
        nonlocal pos
        if pos > end:
            return None
        m = rx.search(string, pos)
        if m is None:
            pos = end + 1
            return None
        pos = m.end() if m.end() > m.start() else m.end() + 1
        return m

    return supply(find)

def match_groups(pattern: Union[str, bytes, re.Pattern],
                 string: Union[str, bytes],
                 group: Union[int, str] = 1,
                 flags: int = 0) -> Source:
    """ The chosen group of every match.

    >>> match_groups(r'(\\d+)', 'A B25CD E 4F') >> list
    ['25', '4']
    """
    return match_results(pattern, string, flags) \
            >> map(lambda m: m.group(group))

def _cause_of(exc: BaseException) -> Optional[BaseException]:
    # same rule traceback uses for chained exceptions
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__

def causes(exc: Optional[BaseException]) -> Source:
    """ exc, then its cause, then that cause's cause, ...

    >>> try:
    ...     try:
    ...         raise KeyError('k')
    ...     except KeyError as e:
    ...         raise ValueError('v') from e
    ... except ValueError as err:
    ...     causes(err) >> map(type) >> list
    [<class 'ValueError'>, <class 'KeyError'>]
    """
    seen = set()
    nxt = exc

    def step() -> Optional[BaseException]:
        nonlocal nxt
        cur = nxt
        # context chains may loop back on themselves
        if cur is None or id(cur) in seen:
            return None
        seen.add(id(cur))
        nxt = _cause_of(cur)
        return cur

    return supply(step)
