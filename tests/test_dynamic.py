import pytest

from sonnetkit.dynamic import Pending, Thunk
from sonnetkit.errors import ErrorKind, EvalError


def test_pending_fill_and_unwrap():
    cell = Pending()
    assert cell.try_get() is None
    cell.fill(42)
    assert cell.unwrap() == 42
    assert cell.try_get() == 42
    assert cell.get() == 42


def test_pending_prefilled():
    assert Pending("x").unwrap() == "x"


def test_pending_double_fill():
    cell = Pending(1)
    with pytest.raises(RuntimeError, match="wrapper is filled already"):
        cell.fill(2)
    assert cell.unwrap() == 1


def test_pending_unwrap_unfilled():
    with pytest.raises(RuntimeError, match="pending was not filled"):
        Pending().unwrap()


def test_pending_get_unfilled_is_recursion():
    with pytest.raises(EvalError) as info:
        Pending().get()
    assert info.value.kind is ErrorKind.INFINITE_RECURSION_DETECTED


def test_thunk_computes_once():
    calls = []

    def compute():
        calls.append(1)
        return "value"

    thunk = Thunk(compute)
    assert thunk.evaluate() == "value"
    assert thunk.evaluate() == "value"
    assert len(calls) == 1


def test_thunk_caches_error():
    calls = []

    def compute():
        calls.append(1)
        raise EvalError(ErrorKind.DIVISION_BY_ZERO)

    thunk = Thunk(compute)
    for _ in range(2):
        with pytest.raises(EvalError) as info:
            thunk.evaluate()
        assert info.value.kind is ErrorKind.DIVISION_BY_ZERO
    assert len(calls) == 1


def test_thunk_detects_recursion():
    holder = {}
    holder["t"] = Thunk(lambda: holder["t"].evaluate())
    with pytest.raises(EvalError) as info:
        holder["t"].evaluate()
    assert info.value.kind is ErrorKind.INFINITE_RECURSION_DETECTED


def test_thunk_evaluated_and_errored():
    assert Thunk.evaluated([1, 2]).evaluate() == [1, 2]
    err = EvalError(ErrorKind.NO_SUPER_FOUND)
    with pytest.raises(EvalError) as info:
        Thunk.errored(err).evaluate()
    assert info.value is err


def test_thunk_over_pending():
    cell = Pending()
    thunk = Thunk(cell.get)
    cell.fill(5)
    assert thunk.evaluate() == 5