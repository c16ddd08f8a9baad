import pytest
from stream import take, map

from streamkit.lazy import LazySequence, SequenceExhausted, supply

class CountingSupplier:
    """ Returns the items one by one, then None forever,
    counting how many times it was asked.
    """
    def __init__(self, *items):
        self.items = list(items)
        self.calls = 0
    def __call__(self):
        self.calls += 1
        if self.items:
            return self.items.pop(0)
        return None

def test_drain():
    seq = LazySequence(CountingSupplier(1, 2, 3))
    assert seq >> list == [1, 2, 3]

def test_has_next_idempotent():
    fn = CountingSupplier('a', 'b')
    seq = LazySequence(fn)
    for _ in range(5):
        assert seq.has_next()
    assert fn.calls == 1
    assert seq.next() == 'a'
    assert fn.calls == 1
    assert seq.has_next()
    assert seq.has_next()
    assert fn.calls == 2
    assert list(seq) == ['b']

def test_exhausted_stays_exhausted():
    fn = CountingSupplier(7)
    seq = LazySequence(fn)
    assert seq.next() == 7
    assert not seq.has_next()
    assert not seq.has_next()
    calls = fn.calls
    with pytest.raises(SequenceExhausted):
        seq.next()
    assert fn.calls == calls

def test_next_without_has_next():
    seq = LazySequence(CountingSupplier(1))
    assert seq.next() == 1
    with pytest.raises(LookupError):
        seq.next()

def test_empty():
    fn = CountingSupplier()
    seq = LazySequence(fn)
    assert not seq.has_next()
    assert list(seq) == []
    assert fn.calls == 1

def test_custom_sentinel():
    it = iter([0, None, 2, -1, 5])
    seq = LazySequence(lambda: next(it), sentinel=-1)
    assert seq >> list == [0, None, 2]

def test_lazy():
    fn = CountingSupplier(*range(100))
    seq = LazySequence(fn)
    assert seq >> take(3) >> list == [0, 1, 2]
    # islice stops as soon as it has 3 items
    assert fn.calls == 3

def test_supply_source():
    it = iter('abc')
    s = supply(lambda: next(it, ''), sentinel='')
    assert s >> map(str.upper) >> list == ['A', 'B', 'C']

def test_supply_default_sentinel():
    it = iter('abc')
    assert supply(lambda: next(it, None)) >> list == ['a', 'b', 'c']

    # a different end marker needs sentinel=, else it is just a value
    it = iter('ab')
    assert supply(lambda: next(it, '')) >> take(4) >> list == ['a', 'b', '', '']
