"""Lexical evaluation context: variables and the current objects."""

from __future__ import annotations

from collections import ChainMap
from typing import Any, Mapping, Optional

from sonnetkit.dynamic import Thunk
from sonnetkit.errors import ErrorKind, EvalError, suggest_similar


class Context:
    """Local variables plus the top-level (``$``), current and super objects."""

    __slots__ = ("_state", "_bindings", "_dollar", "_sup", "_this")

    def __init__(
        self,
        state: Any = None,
        bindings: Optional[Mapping[str, Thunk]] = None,
        dollar: Any = None,
        sup: Any = None,
        this: Any = None,
    ) -> None:
        self._state = state
        if isinstance(bindings, ChainMap):
            self._bindings = bindings
        else:
            self._bindings = ChainMap(dict(bindings or {}))
        self._dollar = dollar
        self._sup = sup
        self._this = this

    @property
    def state(self) -> Any:
        if self._state is None:
            raise RuntimeError("used state from dummy context")
        return self._state

    @property
    def dollar(self) -> Any:
        return self._dollar

    @property
    def this(self) -> Any:
        return self._this

    @property
    def super_obj(self) -> Any:
        return self._sup

    def binding(self, name: str) -> Thunk:
        """The thunk bound to ``name``, or an error naming similar variables."""
        try:
            return self._bindings[name]
        except KeyError:
            similar = suggest_similar(self._bindings.keys(), name)
            raise EvalError(ErrorKind.VARIABLE_IS_NOT_DEFINED, name, similar) from None

    def contains_binding(self, name: str) -> bool:
        return name in self._bindings

    def with_var(self, name: str, value: Any) -> "Context":
        """A child context with one more, already evaluated, variable."""
        return self.extend({name: Thunk.evaluated(value)})

    def extend(
        self,
        new_bindings: Optional[Mapping[str, Thunk]] = None,
        new_dollar: Any = None,
        new_sup: Any = None,
        new_this: Any = None,
    ) -> "Context":
        """A child context; unset parts are taken from this one."""
        bindings = (
            self._bindings.new_child(dict(new_bindings))
            if new_bindings
            else self._bindings
        )
        return Context(
            state=self._state,
            bindings=bindings,
            dollar=new_dollar if new_dollar is not None else self._dollar,
            sup=new_sup if new_sup is not None else self._sup,
            this=new_this if new_this is not None else self._this,
        )


class ContextBuilder:
    """Collects bindings, then builds a fresh or child context."""

    def __init__(self, state: Any = None) -> None:
        self._state = state
        self._bindings: dict[str, Thunk] = {}
        self._parent: Optional[Context] = None

    @classmethod
    def from_parent(cls, parent: Context) -> "ContextBuilder":
        builder = cls(parent._state)
        builder._parent = parent
        return builder

    def bind(self, name: str, value: Thunk) -> "ContextBuilder":
        """Add a binding; a name may be bound only once."""
        if name in self._bindings:
            raise ValueError("variable bound twice in single context call")
        self._bindings[name] = value
        return self

    def build(self) -> Context:
        if self._parent is not None:
            return self._parent.extend(self._bindings)
        return Context(state=self._state, bindings=self._bindings)