import pytest

from sonnetkit.arrays import (
    ArrValue,
    EagerArray,
    ExtendedArray,
    RangeArray,
    SliceArray,
)
from sonnetkit.dynamic import Thunk
from sonnetkit.errors import ErrorKind, EvalError


def test_eager_roundtrip():
    values = [1, "a", None, True]
    arr = ArrValue.eager(values)
    assert list(arr) == values
    assert len(arr) == len(values)
    assert arr.is_cheap()


def test_empty():
    arr = ArrValue.empty()
    assert len(arr) == 0
    assert arr.is_empty()
    assert list(arr) == []


def test_out_of_bounds_raises():
    arr = ArrValue.eager([1, 2])
    with pytest.raises(IndexError):
        arr.get(2)
    with pytest.raises(IndexError):
        arr.get_lazy(-1)


def test_lazy_evaluates_thunks():
    calls = []
    thunks = [Thunk(lambda i=i: calls.append(i) or i * 10) for i in range(3)]
    arr = ArrValue.lazy(thunks)
    assert not arr.is_cheap()
    assert arr.iter_cheap() is None
    assert calls == []
    assert arr.get(1) == 10
    assert calls == [1]
    assert arr.get_lazy(2) is thunks[2]


def test_chars():
    arr = ArrValue.chars("héllo")
    assert list(arr) == list("héllo")
    assert arr.is_cheap()


def test_bytes_are_numbers():
    data = b"\x00\x7f\xff"
    arr = ArrValue.bytes(data)
    assert list(arr) == [float(b) for b in data]


def test_range_inclusive_and_exclusive():
    assert list(ArrValue.range_inclusive(1, 3)) == [1.0, 2.0, 3.0]
    assert list(ArrValue.range_exclusive(1, 3)) == [1.0, 2.0]
    assert len(ArrValue.range_exclusive(5, 5)) == 0


def test_range_empty_equality():
    assert RangeArray.empty() == RangeArray.new_exclusive(0, 0)
    assert len(RangeArray.empty()) == 0


def test_reversed():
    values = [1, 2, 3, 4]
    arr = ArrValue.eager(values).reversed()
    assert list(arr) == values[::-1]
    assert list(arr.reversed()) == values


def test_slice_matches_python_slicing():
    values = list(range(10))
    arr = ArrValue.eager(values)
    for start, end, step in [(0, 10, 1), (1, 9, 2), (2, 100, 3), (None, None, 4)]:
        sliced = arr.slice(start, end, step)
        assert list(sliced) == values[slice(start, end, step)]
        assert isinstance(sliced.inner, SliceArray)


def test_slice_empty_returns_none():
    arr = ArrValue.eager([1, 2, 3])
    assert arr.slice(2, 1, 1) is None
    assert arr.slice(0, 3, 0) is None
    assert arr.slice(3, None, None) is None


def test_slice_out_of_bounds():
    sliced = ArrValue.eager([1, 2, 3, 4]).slice(0, 4, 2)
    assert len(sliced) == 2
    with pytest.raises(IndexError):
        sliced.get(2)


def test_repeated():
    values = [1, 2, 3]
    arr = ArrValue.repeated(ArrValue.eager(values), 3)
    assert list(arr) == values * 3
    with pytest.raises(IndexError):
        arr.get(len(values) * 3)


def test_extended_short_cheap_is_eager():
    a = ArrValue.eager([1, 2])
    b = ArrValue.eager([3])
    out = ArrValue.extended(a, b)
    assert list(out) == [1, 2, 3]
    assert isinstance(out.inner, EagerArray)


def test_extended_short_lazy_stays_lazy():
    a = ArrValue.lazy([Thunk(lambda: "x")])
    b = ArrValue.eager(["y"])
    out = ArrValue.extended(a, b)
    assert not out.is_cheap()
    assert list(out) == ["x", "y"]


def test_extended_long_is_view():
    a = ArrValue.range_exclusive(0, 60)
    b = ArrValue.range_exclusive(60, 120)
    out = ArrValue.extended(a, b)
    assert isinstance(out.inner, ExtendedArray)
    assert list(out) == list(ArrValue.range_exclusive(0, 120))


def test_extended_with_empty_returns_other():
    a = ArrValue.eager([1])
    assert ArrValue.extended(a, ArrValue.empty()) is a
    assert ArrValue.extended(ArrValue.empty(), a) is a


def test_map_is_lazy_and_cached():
    calls = []

    def mapper(v):
        calls.append(v)
        return v * 2

    arr = ArrValue.eager([1, 2, 3]).map(mapper)
    assert calls == []
    assert arr.get(1) == 4
    assert arr.get(1) == 4
    assert calls == [2]
    assert list(arr) == [2, 4, 6]


def test_map_error_is_cached():
    calls = []

    def mapper(v):
        calls.append(v)
        raise EvalError(ErrorKind.RUNTIME_ERROR, "boom")

    arr = ArrValue.eager([1]).map(mapper)
    for _ in range(2):
        with pytest.raises(EvalError) as info:
            arr.get(0)
        assert info.value.kind is ErrorKind.RUNTIME_ERROR
    assert calls == [1]


def test_filter():
    arr = ArrValue.eager([1, 2, 3, 4, 5]).filter(lambda v: v % 2 == 1)
    assert list(arr) == [1, 3, 5]
    assert arr.is_cheap()


def test_expr_array_evaluates_once():
    calls = []

    def evaluator(expr):
        calls.append(expr)
        return expr.upper()

    arr = ArrValue.expr(evaluator, ["a", "b"])
    assert not arr.is_cheap()
    assert arr.get(0) == "A"
    assert arr.get_lazy(0).evaluate() == "A"
    assert calls == ["a"]
    assert list(arr) == ["A", "B"]


def test_expr_array_detects_recursion():
    holder = {}
    calls = []

    def evaluator(expr):
        calls.append(expr)
        return holder["arr"].get(0)

    arr = ArrValue.expr(evaluator, ["self"])
    holder["arr"] = arr
    assert len(arr) == 1
    with pytest.raises(EvalError) as info:
        arr.get(0)
    assert info.value.kind is ErrorKind.INFINITE_RECURSION_DETECTED
    assert str(info.value) == "infinite recursion detected"
    with pytest.raises(EvalError) as again:
        arr.get(0)
    assert again.value.kind is ErrorKind.INFINITE_RECURSION_DETECTED
    assert calls == ["self"]


def test_iter_cheap_and_iter_lazy_agree():
    arr = ArrValue.range_inclusive(3, 7)
    cheap = list(arr.iter_cheap())
    lazy = [t.evaluate() for t in arr.iter_lazy()]
    assert cheap == lazy == list(arr)


def test_get_cheap_on_lazy_array_fails():
    arr = ArrValue.lazy([Thunk.evaluated(1)])
    with pytest.raises(TypeError):
        arr.get_cheap(0)
    assert arr[0] == 1