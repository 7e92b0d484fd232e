from ..deferred import Deferred, resolve


def test_resolves_once():
    calls = []

    def yielder(value):
        calls.append(value)
        return value

    deferred = Deferred(yielder, 42)
    assert repr(deferred) == "Deferred(<unresolved>)"
    assert deferred() == 42
    assert deferred() == 42
    assert calls == [42]
    assert repr(deferred) == "Deferred(42)"


def test_resolve():
    assert resolve(Deferred(lambda: int)) is int
    assert resolve(str) is str
    assert resolve(None) is None
