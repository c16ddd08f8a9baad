""" Small control-flow adapters for use inside callbacks and lambdas.
"""

from typing import Any, TypeVar
from collections.abc import Callable

R = TypeVar('R')

class Break(Exception):
    """ Early-exit signal, optionally carrying a value out of
    a callback (e.g. the function passed to `for_each`).
    """
    def __init__(self, value: Any = None, message: str = "Break") -> None:
        super().__init__(message)
        self.value = value

def breakable(fn: Callable[..., R], *args, **kws) -> Any:
    """ Run fn.  If it raises Break, return the Break's value
    instead of its result.

    >>> def find_first(xs):
    ...     for x in xs:
    ...         if x > 2:
    ...             raise Break(x)
    >>> breakable(find_first, [1, 5, 3])
    5
    """
    try:
        return fn(*args, **kws)
    except Break as b:
        return b.value

def unchecked(fn: Callable[..., R], *args, **kws) -> R:
    """ Call fn and return its result.  Failures pass through
    unchanged (same exception object and traceback), so this
    can wrap anything that needs to run inside a lambda.
    """
    return fn(*args, **kws)

def result(fn: Callable[..., Any], *args, **kws) -> None:
    """ Run fn for its side effects and return None.
    """
    fn(*args, **kws)
    return None

# Python has one kind of callable, so the "no result" form is the same
result_void = result
