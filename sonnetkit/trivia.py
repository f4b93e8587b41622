"""Grouping of syntax children with the comments and whitespace around them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Union


class TriviaKind(Enum):
    """Kinds of tokens that carry no meaning for evaluation."""

    WHITESPACE = "whitespace"
    MULTI_LINE_COMMENT = "multi_line_comment"
    SINGLE_LINE_HASH_COMMENT = "single_line_hash_comment"
    SINGLE_LINE_SLASH_COMMENT = "single_line_slash_comment"
    ERROR_COMMENT_TOO_SHORT = "error_comment_too_short"
    ERROR_COMMENT_UNTERMINATED = "error_comment_unterminated"


_SINGLE_LINE = (TriviaKind.SINGLE_LINE_HASH_COMMENT, TriviaKind.SINGLE_LINE_SLASH_COMMENT)


@dataclass(frozen=True)
class Trivia:
    """A whitespace or comment token."""

    kind: TriviaKind
    text: str


# Trivia list entries: a trivia token, or the text of a parse error.
ChildTrivia = list[Union[Trivia, str]]

ERROR_KIND = "ERROR_CUSTOM"
SEPARATOR_KINDS = frozenset({"COMMA", "SEMI"})


@dataclass(eq=False)
class Element:
    """A child of a syntax node: a node, a trivia token, an error or another token.

    Elements compare by identity, as positions in a tree do.
    """

    kind: str
    text: str = ""
    node: Any = None
    trivia: Optional[Trivia] = None

    @classmethod
    def token(cls, kind: str, text: str = "") -> "Element":
        return cls(kind, text)

    @classmethod
    def from_trivia(cls, kind: TriviaKind, text: str) -> "Element":
        return cls(kind.name, text, trivia=Trivia(kind, text))

    @classmethod
    def from_node(cls, node: Any, kind: str = "NODE") -> "Element":
        return cls(kind, str(node), node=node)

    @classmethod
    def error(cls, text: str) -> "Element":
        return cls(ERROR_KIND, text)

    @property
    def is_error(self) -> bool:
        return self.kind == ERROR_KIND


@dataclass
class Child:
    """A child node with the comments above it and on its line."""

    should_start_with_newline: bool
    before_trivia: ChildTrivia
    value: Any
    inline_trivia: ChildTrivia = field(default_factory=list)


@dataclass
class EndingComments:
    """Comments after the last child."""

    should_start_with_newline: bool
    trivia: ChildTrivia

    def is_empty(self) -> bool:
        return not self.should_start_with_newline and not self.trivia

    def extract_trailing(self) -> ChildTrivia:
        """Take the trivia out, leaving this empty of trivia."""
        taken, self.trivia = self.trivia, []
        return taken


def _check_separator(item: Element) -> None:
    if item.kind not in SEPARATOR_KINDS:
        raise ValueError(f"silently eaten token: {item.kind}")


def _after(elements: Iterable[Element], start: Optional[Element]) -> Iterator[Element]:
    """Elements after ``start``; nothing when ``start`` is absent or missing."""
    iterator = iter(elements)
    if start is None:
        return iter(())
    for item in iterator:
        if item is start:
            break
    return iterator


def trivia_before(elements: Iterable[Element], end: Optional[Element]) -> ChildTrivia:
    """Trivia before ``end``; without ``end``, up to the first other element."""
    out: ChildTrivia = []
    for item in elements:
        if item is end:
            break
        if item.trivia is not None:
            out.append(item.trivia)
        elif item.is_error:
            out.append(item.text)
        elif end is None:
            break
        else:
            _check_separator(item)
    return out


def trivia_after(elements: Iterable[Element], start: Optional[Element]) -> ChildTrivia:
    """Trivia after ``start``; only separators may sit between them."""
    out: ChildTrivia = []
    for item in _after(elements, start):
        if item.trivia is not None:
            out.append(item.trivia)
        elif item.is_error:
            out.append(item.text)
        else:
            _check_separator(item)
    return out


def trivia_between(
    elements: Iterable[Element], start: Optional[Element], end: Optional[Element]
) -> EndingComments:
    """Trivia strictly between ``start`` and ``end``."""
    loose = start is None or end is None
    out: ChildTrivia = []
    for item in _after(elements, start):
        if item is end:
            break
        if item.trivia is not None:
            out.append(item.trivia)
        elif item.is_error:
            out.append(item.text)
        elif loose:
            break
        else:
            _check_separator(item)
    return EndingComments(should_start_with_newline(None, out), out)


def children_between(
    elements: Iterable[Element],
    start: Optional[Element],
    end: Optional[Element],
    trailing: Optional[ChildTrivia] = None,
    accept: Optional[Callable[[Any], bool]] = None,
) -> tuple[list[Child], EndingComments]:
    """Group the children between ``start`` and ``end`` with their trivia."""
    iterator: Iterator[Element] = iter(elements)
    if start is not None:
        iterator = _after(iterator, start)

    def until_end() -> Iterator[Element]:
        for item in iterator:
            if item is end:
                return
            yield item

    return children(until_end(), start is None and end is None, trailing, accept)


def _count_newlines_before(trivia: Sequence[Union[Trivia, str]]) -> int:
    count = 0
    for item in trivia:
        if isinstance(item, str):
            count += 1
        elif item.kind is TriviaKind.WHITESPACE:
            count += item.text.count("\n")
        else:
            break
    return count


def _count_newlines_after(trivia: Sequence[Union[Trivia, str]]) -> int:
    count = 0
    for item in reversed(trivia):
        if isinstance(item, str):
            count += 1
        elif item.kind is TriviaKind.WHITESPACE:
            count += item.text.count("\n")
        elif item.kind in _SINGLE_LINE:
            count += 1
            break
    return count


def should_start_with_newline(
    prev_inline: Optional[Sequence[Union[Trivia, str]]],
    trivia: Sequence[Union[Trivia, str]],
) -> bool:
    """Whether an empty line separated this item from the previous one."""
    after = _count_newlines_after(prev_inline) if prev_inline is not None else 0
    return _count_newlines_before(trivia) + after >= 2


def children(
    items: Iterable[Element],
    loose: bool = False,
    trailing: Optional[ChildTrivia] = None,
    accept: Optional[Callable[[Any], bool]] = None,
) -> tuple[list[Child], EndingComments]:
    """Split elements into children, trivia above and inline, and ending comments."""
    out: list[Child] = []
    current: Optional[Child] = None
    pending: ChildTrivia = []
    # Set once the previous child's line ended: no more inline comments for it.
    started_next = False
    had_some = False

    for item in items:
        if item.node is not None and (accept is None or accept(item.node)):
            if trailing is not None:
                if pending:
                    raise ValueError("trivia collected while trailing trivia was given")
                before, trailing = trailing, None
            else:
                before, pending = pending, []
            new_child = Child(
                should_start_with_newline=had_some
                and should_start_with_newline(
                    current.inline_trivia if current is not None else None, before
                ),
                before_trivia=before,
                value=item.node,
            )
            if current is not None:
                out.append(current)
            current = new_child
            had_some = True
            started_next = False
        elif item.trivia is not None:
            trivia = item.trivia
            single_line = trivia.kind in _SINGLE_LINE
            if trailing is not None:
                continue
            if (
                started_next
                or current is None
                or ("\n" in trivia.text and not single_line)
            ):
                pending.append(trivia)
                started_next = True
            else:
                current.inline_trivia.append(trivia)
                if single_line:
                    started_next = True
            had_some = True
        elif item.is_error:
            pending.append(item.text)
        elif loose:
            if had_some:
                break
            started_next = True
        else:
            _check_separator(item)

    ending = EndingComments(
        should_start_with_newline(
            current.inline_trivia if current is not None else None, pending
        ),
        pending,
    )
    if current is not None:
        out.append(current)
    return out, ending