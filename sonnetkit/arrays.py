"""Array values: eager, lazy, computed and view-based sequences."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, Optional

from sonnetkit.dynamic import Thunk

# Above this combined length, concatenation keeps a view instead of copying.
ARR_EXTEND_THRESHOLD = 100


class ArrayLike(ABC):
    """A read-only, indexable sequence of possibly lazy values."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def get(self, index: int) -> Any:
        """Element at ``index``, evaluating it; IndexError when out of range."""

    @abstractmethod
    def get_lazy(self, index: int) -> Thunk:
        """Element at ``index`` without evaluating it."""

    @abstractmethod
    def get_cheap(self, index: int) -> Any:
        """Element at ``index`` for arrays whose elements cost nothing to get."""

    @abstractmethod
    def is_cheap(self) -> bool:
        """Whether ``get_cheap`` is supported."""

    def is_empty(self) -> bool:
        return len(self) == 0

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexError(f"array index {index} out of range [0,{len(self)})")

    def _not_cheap(self) -> Any:
        raise TypeError(f"{type(self).__name__} elements are not cheap to get")


class EagerArray(ArrayLike):
    """Already evaluated values."""

    def __init__(self, values: Iterable[Any]) -> None:
        self.values = tuple(values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, index: int) -> Any:
        return self.get_cheap(index)

    def get_lazy(self, index: int) -> Thunk:
        return Thunk.evaluated(self.get_cheap(index))

    def get_cheap(self, index: int) -> Any:
        self._check(index)
        return self.values[index]

    def is_cheap(self) -> bool:
        return True


class LazyArray(ArrayLike):
    """Values held as thunks, evaluated on access."""

    def __init__(self, thunks: Iterable[Thunk]) -> None:
        self.thunks = tuple(thunks)

    def __len__(self) -> int:
        return len(self.thunks)

    def get(self, index: int) -> Any:
        return self.get_lazy(index).evaluate()

    def get_lazy(self, index: int) -> Thunk:
        self._check(index)
        return self.thunks[index]

    def get_cheap(self, index: int) -> Any:
        return self._not_cheap()

    def is_cheap(self) -> bool:
        return False


class CharArray(ArrayLike):
    """The characters of a string, each as a one-character string."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __len__(self) -> int:
        return len(self.text)

    def get(self, index: int) -> Any:
        return self.get_cheap(index)

    def get_lazy(self, index: int) -> Thunk:
        return Thunk.evaluated(self.get_cheap(index))

    def get_cheap(self, index: int) -> str:
        self._check(index)
        return self.text[index]

    def is_cheap(self) -> bool:
        return True


class BytesArray(ArrayLike):
    """The bytes of a buffer, each as a number."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, index: int) -> Any:
        return self.get_cheap(index)

    def get_lazy(self, index: int) -> Thunk:
        return Thunk.evaluated(self.get_cheap(index))

    def get_cheap(self, index: int) -> float:
        self._check(index)
        return float(self.data[index])

    def is_cheap(self) -> bool:
        return True


class RangeArray(ArrayLike):
    """Numbers from ``start`` to ``end``, both inclusive."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end

    @classmethod
    def empty(cls) -> "RangeArray":
        return cls.new_exclusive(0, 0)

    @classmethod
    def new_exclusive(cls, start: int, end: int) -> "RangeArray":
        return cls(start, end - 1)

    @classmethod
    def new_inclusive(cls, start: int, end: int) -> "RangeArray":
        return cls(start, end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeArray):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def get(self, index: int) -> Any:
        return self.get_cheap(index)

    def get_lazy(self, index: int) -> Thunk:
        return Thunk.evaluated(self.get_cheap(index))

    def get_cheap(self, index: int) -> float:
        self._check(index)
        return float(self.start + index)

    def is_cheap(self) -> bool:
        return True


class SliceArray(ArrayLike):
    """Every ``step``-th element of ``inner`` between ``start`` and ``end``."""

    def __init__(self, inner: ArrayLike, start: int, end: int, step: int) -> None:
        if step <= 0:
            raise ValueError("slice step must be positive")
        self.inner = inner
        self.start = start
        self.end = end
        self.step = step

    def __len__(self) -> int:
        return len(range(self.start, self.end, self.step))

    def _source(self, index: int) -> int:
        self._check(index)
        return self.start + index * self.step

    def get(self, index: int) -> Any:
        return self.inner.get(self._source(index))

    def get_lazy(self, index: int) -> Thunk:
        return self.inner.get_lazy(self._source(index))

    def get_cheap(self, index: int) -> Any:
        return self.inner.get_cheap(self._source(index))

    def is_cheap(self) -> bool:
        return self.inner.is_cheap()


class ExtendedArray(ArrayLike):
    """Concatenation of two arrays, without copying."""

    def __init__(self, a: ArrayLike, b: ArrayLike) -> None:
        self.a = a
        self.b = b
        self._split = len(a)
        self._len = self._split + len(b)

    def __len__(self) -> int:
        return self._len

    def _locate(self, index: int) -> tuple[ArrayLike, int]:
        self._check(index)
        if index < self._split:
            return self.a, index
        return self.b, index - self._split

    def get(self, index: int) -> Any:
        part, at = self._locate(index)
        return part.get(at)

    def get_lazy(self, index: int) -> Thunk:
        part, at = self._locate(index)
        return part.get_lazy(at)

    def get_cheap(self, index: int) -> Any:
        part, at = self._locate(index)
        return part.get_cheap(at)

    def is_cheap(self) -> bool:
        return self.a.is_cheap() and self.b.is_cheap()


class ReverseArray(ArrayLike):
    """A reversed view of another array."""

    def __init__(self, inner: ArrayLike) -> None:
        self.inner = inner

    def __len__(self) -> int:
        return len(self.inner)

    def _source(self, index: int) -> int:
        self._check(index)
        return len(self.inner) - index - 1

    def get(self, index: int) -> Any:
        return self.inner.get(self._source(index))

    def get_lazy(self, index: int) -> Thunk:
        return self.inner.get_lazy(self._source(index))

    def get_cheap(self, index: int) -> Any:
        return self.inner.get_cheap(self._source(index))

    def is_cheap(self) -> bool:
        return self.inner.is_cheap()


class _CachedArray(ArrayLike):
    """Elements computed once each, with results and errors cached."""

    def __init__(self, thunks: list[Thunk]) -> None:
        self._thunks = thunks

    def __len__(self) -> int:
        return len(self._thunks)

    def get(self, index: int) -> Any:
        return self.get_lazy(index).evaluate()

    def get_lazy(self, index: int) -> Thunk:
        self._check(index)
        return self._thunks[index]

    def get_cheap(self, index: int) -> Any:
        return self._not_cheap()

    def is_cheap(self) -> bool:
        return False


class ExprArray(_CachedArray):
    """Elements given as expressions, evaluated on first access."""

    def __init__(self, evaluator: Callable[[Any], Any], exprs: Iterable[Any]) -> None:
        self.evaluator = evaluator
        super().__init__(
            [Thunk(lambda expr=expr: evaluator(expr)) for expr in exprs]
        )


class MappedArray(_CachedArray):
    """Another array with a function applied to each element on access."""

    def __init__(self, inner: ArrayLike, mapper: Callable[[Any], Any]) -> None:
        self.inner = inner
        self.mapper = mapper
        super().__init__(
            [Thunk(lambda i=i: mapper(inner.get(i))) for i in range(len(inner))]
        )


class RepeatedArray(ArrayLike):
    """Another array repeated a number of times."""

    def __init__(self, data: ArrayLike, repeats: int) -> None:
        if repeats < 0:
            raise ValueError("repeat count must not be negative")
        self.data = data
        self.repeats = repeats
        self._total = len(data) * repeats

    def __len__(self) -> int:
        return self._total

    def _source(self, index: int) -> int:
        self._check(index)
        return index % len(self.data)

    def get(self, index: int) -> Any:
        return self.data.get(self._source(index))

    def get_lazy(self, index: int) -> Thunk:
        return self.data.get_lazy(self._source(index))

    def get_cheap(self, index: int) -> Any:
        return self.data.get_cheap(self._source(index))

    def is_cheap(self) -> bool:
        return self.data.is_cheap()


class ArrValue(ArrayLike):
    """An array value, backed by any of the array implementations."""

    __slots__ = ("inner",)

    def __init__(self, inner: ArrayLike) -> None:
        self.inner = inner

    @classmethod
    def empty(cls) -> "ArrValue":
        return cls(RangeArray.empty())

    @classmethod
    def eager(cls, values: Iterable[Any]) -> "ArrValue":
        return cls(EagerArray(values))

    @classmethod
    def lazy(cls, thunks: Iterable[Thunk]) -> "ArrValue":
        return cls(LazyArray(thunks))

    @classmethod
    def expr(cls, evaluator: Callable[[Any], Any], exprs: Iterable[Any]) -> "ArrValue":
        return cls(ExprArray(evaluator, exprs))

    @classmethod
    def chars(cls, text: str) -> "ArrValue":
        return cls(CharArray(text))

    @classmethod
    def bytes(cls, data: bytes) -> "ArrValue":
        return cls(BytesArray(data))

    @classmethod
    def repeated(cls, data: ArrayLike, repeats: int) -> "ArrValue":
        return cls(RepeatedArray(data, repeats))

    @classmethod
    def extended(cls, a: "ArrValue", b: "ArrValue") -> "ArrValue":
        """Concatenate two arrays, copying only when they are short."""
        if a.is_empty():
            return b
        if b.is_empty():
            return a
        if len(a) + len(b) > ARR_EXTEND_THRESHOLD:
            return cls(ExtendedArray(a, b))
        cheap_a, cheap_b = a.iter_cheap(), b.iter_cheap()
        if cheap_a is not None and cheap_b is not None:
            return cls.eager([*cheap_a, *cheap_b])
        return cls.lazy([*a.iter_lazy(), *b.iter_lazy()])

    @classmethod
    def range_exclusive(cls, a: int, b: int) -> "ArrValue":
        return cls(RangeArray.new_exclusive(a, b))

    @classmethod
    def range_inclusive(cls, a: int, b: int) -> "ArrValue":
        return cls(RangeArray.new_inclusive(a, b))

    def map(self, mapper: Callable[[Any], Any]) -> "ArrValue":
        """Lazily apply ``mapper`` to each element."""
        return ArrValue(MappedArray(self, mapper))

    def filter(self, predicate: Callable[[Any], bool]) -> "ArrValue":
        """Evaluate every element and keep those matching ``predicate``."""
        return ArrValue.eager(value for value in self if predicate(value))

    def slice(
        self,
        start: Optional[int] = None,
        end: Optional[int] = None,
        step: Optional[int] = None,
    ) -> Optional["ArrValue"]:
        """A view of part of the array, or None when that part is empty."""
        length = len(self)
        start = 0 if start is None else start
        end = length if end is None else min(end, length)
        step = 1 if step is None else step
        if start >= end or step == 0:
            return None
        return ArrValue(SliceArray(self, start, end, step))

    def __len__(self) -> int:
        return len(self.inner)

    def __iter__(self) -> Iterator[Any]:
        return (self.get(i) for i in range(len(self)))

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def get(self, index: int) -> Any:
        return self.inner.get(index)

    def get_lazy(self, index: int) -> Thunk:
        return self.inner.get_lazy(index)

    def get_cheap(self, index: int) -> Any:
        return self.inner.get_cheap(index)

    def iter_lazy(self) -> Iterator[Thunk]:
        return (self.get_lazy(i) for i in range(len(self)))

    def iter_cheap(self) -> Optional[Iterator[Any]]:
        """Iterator over elements when they are cheap, otherwise None."""
        if not self.is_cheap():
            return None
        return (self.get_cheap(i) for i in range(len(self)))

    def reversed(self) -> "ArrValue":
        return ArrValue(ReverseArray(self))

    def is_cheap(self) -> bool:
        return self.inner.is_cheap()