"""Evaluation errors, their messages and stack traces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence

Signature = Sequence[tuple[Optional[str], bool]]


def _jaro(a: str, b: str) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    search_range = max(max(len(a), len(b)) // 2 - 1, 0)
    taken = [False] * len(b)
    a_matched: list[str] = []
    for i, ch in enumerate(a):
        low = max(0, i - search_range)
        high = min(len(b), i + search_range + 1)
        for j in range(low, high):
            if not taken[j] and b[j] == ch:
                taken[j] = True
                a_matched.append(ch)
                break
    matches = len(a_matched)
    if matches == 0:
        return 0.0
    b_matched = [ch for ch, used in zip(b, taken) if used]
    transpositions = sum(x != y for x, y in zip(a_matched, b_matched)) / 2
    return (
        matches / len(a) + matches / len(b) + (matches - transpositions) / matches
    ) / 3


def jaro_winkler(a: str, b: str) -> float:
    """Jaro-Winkler similarity of two strings, between 0.0 and 1.0."""
    sim = _jaro(a, b)
    if sim > 0.7:
        prefix = 0
        for x, y in zip(a[:4], b[:4]):
            if x != y:
                break
            prefix += 1
        sim += 0.1 * prefix * (1.0 - sim)
    return sim


def suggest_similar(candidates: Iterable[str], key: str) -> list[str]:
    """Names from ``candidates`` that look like ``key``, most similar first."""
    scored = []
    for candidate in candidates:
        if candidate == key:
            continue
        conf = jaro_winkler(candidate, key)
        if conf < 0.8:
            continue
        scored.append((conf, candidate))
    scored.sort(key=lambda item: item[0], reverse=True)
    return [name for _, name in scored]


def format_found(names: Sequence[str], what: str) -> str:
    """Hint listing similarly named items, or an empty string."""
    if not names:
        return ""
    plural = "s" if len(names) > 1 else ""
    return (
        f"\nThere is {what}{plural} with similar name{plural} present: "
        + ", ".join(names)
    )


def format_signature(signature: Signature) -> str:
    """Describe a function signature given as ``(name, has_default)`` pairs."""
    if not signature:
        params = "/*no arguments*/"
    else:
        parts = []
        for name, has_default in signature:
            part = name if name is not None else "<unnamed>"
            if has_default:
                part += " = <default>"
            parts.append(part)
        params = ", ".join(parts)
    return f"\nFunction has the following signature: ({params})"


def format_empty_str(text: str) -> str:
    """Make an empty string visible in a message."""
    return '"" (empty string)' if not text else text


class ErrorKind(Enum):
    """Kinds of evaluation errors, each with its message template."""

    INTRINSIC_NOT_FOUND = "intrinsic not found: {0}"
    UNARY_OPERATOR_DOES_NOT_OPERATE_ON_TYPE = "operator {0} does not operate on type {1}"
    BINARY_OPERATOR_DOES_NOT_OPERATE_ON_VALUES = (
        "binary operation {1} {0} {2} is not implemented"
    )
    NO_TOP_LEVEL_OBJECT_FOUND = "no top level object in this context"
    CANT_USE_SELF_OUTSIDE_OF_OBJECT = "self is only usable inside objects"
    NO_SUPER_FOUND = "no super found"
    IN_COMPREHENSION_CAN_ONLY_ITERATE_OVER_ARRAY = "for loop can only iterate over arrays"
    ARRAY_BOUNDS_ERROR = "array out of bounds: {0} is not within [0,{1})"
    STRING_BOUNDS_ERROR = "string out of bounds: {0} is not within [0,{1})"
    ASSERTION_FAILED = "assert failed: {0}"
    VARIABLE_IS_NOT_DEFINED = "variable is not defined: {0}{1}"
    DUPLICATE_LOCAL_VAR = "duplicate local var: {0}"
    TYPE_MISMATCH = "type mismatch: expected {1}, got {2} {0}"
    NO_SUCH_FIELD = "no such field: {0}{1}"
    ONLY_FUNCTIONS_CAN_BE_CALLED_GOT = "only functions can be called, got {0}"
    UNKNOWN_FUNCTION_PARAMETER = "parameter {0} is not defined"
    BINDING_PARAMETER_A_SECOND_TIME = "argument {0} is already bound"
    TOO_MANY_ARGS_FUNCTION_HAS = "too many args, function has {0}{1}"
    FUNCTION_PARAMETER_NOT_BOUND_IN_CALL = "function argument is not passed: {0}{1}"
    UNDEFINED_EXTERNAL_VARIABLE = "external variable is not defined: {0}"
    FIELD_MUST_BE_STRING_GOT = "field name should be string, got {0}"
    DUPLICATE_FIELD_NAME = "duplicate field name: {0}"
    ATTEMPTED_INDEX_AN_ARRAY_WITH_STRING = "attempted to index array with string {0}"
    VALUE_INDEX_MUST_BE_TYPE_GOT = "{0} index type should be {1}, got {2}"
    CANT_INDEX_INTO = "cant index into {0}"
    VALUE_IS_NOT_INDEXABLE = "{0} is not indexable"
    STANDALONE_SUPER = "super can't be used standalone"
    IMPORT_FILE_NOT_FOUND = "can't resolve {1} from {0}"
    ABSOLUTE_IMPORT_FILE_NOT_FOUND = "can't resolve absolute {0}"
    RESOLVED_FILE_NOT_FOUND = "resolved file not found: {0}"
    IMPORT_IS_A_DIRECTORY = "can't import {0}: is a directory"
    IMPORT_BAD_FILE_UTF8 = "imported file is not valid utf-8: {0}"
    IMPORT_IO = "import io error: {0}"
    IMPORT_NOT_SUPPORTED = "tried to import {1} from {0}, but imports are not supported"
    ABSOLUTE_IMPORT_NOT_SUPPORTED = (
        "tried to import {0}, but absolute imports are not supported"
    )
    CANT_IMPORT_FROM_VIRTUAL_FILE = "can't import from virtual file"
    IMPORT_SYNTAX_ERROR = "syntax error: {0}"
    RUNTIME_ERROR = "runtime error: {0}"
    STACK_OVERFLOW = (
        "stack overflow, try to reduce recursion, or set --max-stack to bigger value"
    )
    INFINITE_RECURSION_DETECTED = "infinite recursion detected"
    FRACTIONAL_INDEX = "tried to index by fractional value"
    DIVISION_BY_ZERO = "attempted to divide by zero"
    STRING_MANIFEST_OUTPUT_IS_NOT_A_STRING = "string manifest output is not an string"
    STREAM_MANIFEST_OUTPUT_IS_NOT_AN_ARRAY = "stream manifest output is not an array"
    MULTI_MANIFEST_OUTPUT_IS_NOT_AN_OBJECT = "multi manifest output is not an object"
    STREAM_MANIFEST_OUTPUT_CANNOT_BE_RECURSED = "cant recurse stream manifest"
    STREAM_MANIFEST_CANNOT_NEST_STRING = (
        "stream manifest output cannot consist of raw strings"
    )
    IMPORT_CALLBACK_ERROR = "{0}"
    INVALID_UNICODE_CODEPOINT_GOT = "invalid unicode codepoint: {0}"
    FORMAT = "format error: {0}"
    TYPE_ERROR = "type error: {0}"

    def render(self, *args: Any) -> str:
        """Build the message of this kind from its arguments."""
        prepare = _PREPARE.get(self)
        values = prepare(*args) if prepare is not None else args
        return self.value.format(*values)


def _empty_first(text: str, *rest: Any) -> tuple:
    return (format_empty_str(text), *rest)


def _not_defined(name: str, similar: Sequence[str] = ()) -> tuple:
    return (name, format_found(list(similar), "variable"))


def _no_such_field(name: str, similar: Sequence[str] = ()) -> tuple:
    return (format_empty_str(name), format_found(list(similar), "field"))


def _type_mismatch(context: str, expected: Sequence[Any], got: Any) -> tuple:
    return (context, ", ".join(str(e) for e in expected), got)


def _too_many(count: int, signature: Signature) -> tuple:
    return (count, format_signature(signature))


def _not_bound(name: Optional[str], signature: Signature) -> tuple:
    return (name if name is not None else "<unnamed>", format_signature(signature))


_PREPARE: dict[ErrorKind, Callable[..., tuple]] = {
    ErrorKind.ASSERTION_FAILED: _empty_first,
    ErrorKind.DUPLICATE_FIELD_NAME: _empty_first,
    ErrorKind.ATTEMPTED_INDEX_AN_ARRAY_WITH_STRING: _empty_first,
    ErrorKind.RUNTIME_ERROR: _empty_first,
    ErrorKind.IMPORT_CALLBACK_ERROR: _empty_first,
    ErrorKind.VARIABLE_IS_NOT_DEFINED: _not_defined,
    ErrorKind.NO_SUCH_FIELD: _no_such_field,
    ErrorKind.TYPE_MISMATCH: _type_mismatch,
    ErrorKind.TOO_MANY_ARGS_FUNCTION_HAS: _too_many,
    ErrorKind.FUNCTION_PARAMETER_NOT_BOUND_IN_CALL: _not_bound,
}


@dataclass
class StackTraceElement:
    """One frame of an evaluation stack trace."""

    desc: str
    location: Optional[Any] = None


class EvalError(Exception):
    """An error raised while evaluating, carrying a stack trace."""

    def __init__(self, kind: ErrorKind, *params: Any) -> None:
        self.kind = kind
        self.params = params
        self.message = kind.render(*params)
        self.trace: list[StackTraceElement] = []
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def with_description(self, desc: str, location: Any = None) -> "EvalError":
        """Append a frame to the trace and return this error."""
        self.trace.append(StackTraceElement(desc, location))
        return self

    def format_trace(self) -> str:
        """The message followed by one line per trace frame."""
        lines = [self.message + "\n"]
        for element in self.trace:
            line = f"\t{element.desc}"
            if element.location is not None:
                line += f"at {element.location}"
            lines.append(line + "\n")
        return "".join(lines)