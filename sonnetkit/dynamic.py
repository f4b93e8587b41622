"""Late-filled cells and lazily computed values."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from sonnetkit.errors import ErrorKind, EvalError

T = TypeVar("T")

_UNSET: Any = object()


class Pending(Generic[T]):
    """A cell that is filled exactly once, possibly after it is shared."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = _UNSET) -> None:
        self._value = value

    def fill(self, value: T) -> None:
        """Store the value; filling twice is an error."""
        if self._value is not _UNSET:
            raise RuntimeError("wrapper is filled already")
        self._value = value

    def unwrap(self) -> T:
        """The stored value; it must already be filled."""
        if self._value is _UNSET:
            raise RuntimeError("pending was not filled")
        return self._value

    def try_get(self) -> Optional[T]:
        """The stored value, or None when not yet filled."""
        return None if self._value is _UNSET else self._value

    def get(self) -> T:
        """The stored value, as an evaluation: unfilled means recursion."""
        if self._value is _UNSET:
            raise EvalError(ErrorKind.INFINITE_RECURSION_DETECTED)
        return self._value


class _State(Enum):
    WAITING = "waiting"
    PENDING = "pending"
    COMPUTED = "computed"
    ERRORED = "errored"


class Thunk(Generic[T]):
    """A value computed on first use and then cached, errors included."""

    __slots__ = ("_compute", "_state", "_result")

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute: Optional[Callable[[], T]] = compute
        self._state = _State.WAITING
        self._result: Any = None

    @classmethod
    def evaluated(cls, value: T) -> "Thunk[T]":
        thunk = cls.__new__(cls)
        thunk._compute = None
        thunk._state = _State.COMPUTED
        thunk._result = value
        return thunk

    @classmethod
    def errored(cls, error: EvalError) -> "Thunk[Any]":
        thunk = cls.__new__(cls)
        thunk._compute = None
        thunk._state = _State.ERRORED
        thunk._result = error
        return thunk

    def evaluate(self) -> T:
        """Compute the value once, detecting self-reference."""
        if self._state is _State.COMPUTED:
            return self._result
        if self._state is _State.ERRORED:
            raise self._result
        if self._state is _State.PENDING:
            raise EvalError(ErrorKind.INFINITE_RECURSION_DETECTED)
        compute = self._compute
        assert compute is not None
        self._state = _State.PENDING
        try:
            value = compute()
        except EvalError as err:
            self._state, self._result, self._compute = _State.ERRORED, err, None
            raise
        except BaseException:
            self._state = _State.WAITING
            raise
        self._state, self._result, self._compute = _State.COMPUTED, value, None
        return value