"""Print items: text and layout signals, rendered into indented text."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Union


class Signal(Enum):
    """Layout instructions that sit between pieces of text."""

    NEW_LINE = "new_line"
    TAB = "tab"
    START_INDENT = "start_indent"
    FINISH_INDENT = "finish_indent"


Item = Union[str, Signal]


class PrintItems:
    """An ordered list of text pieces and signals."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: list[Item] = list(items)

    def text(self, value: str) -> "PrintItems":
        """Append a piece of text."""
        self._items.append(value)
        return self

    def signal(self, signal: Signal) -> "PrintItems":
        """Append a layout signal."""
        self._items.append(signal)
        return self

    def extend(self, other: Iterable[Item]) -> "PrintItems":
        """Append every item of ``other``."""
        self._items.extend(other)
        return self

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrintItems):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"PrintItems({self._items!r})"


def render(items: Iterable[Item], indent_width: int = 2, use_tabs: bool = False) -> str:
    """Lay out items as text; indentation is written only before content."""
    unit = "\t" if use_tabs else " " * indent_width
    out: list[str] = []
    level = 0
    at_line_start = True

    def content(text: str) -> None:
        nonlocal at_line_start
        if at_line_start:
            out.append(unit * level)
            at_line_start = False
        out.append(text)

    for item in items:
        if item is Signal.NEW_LINE:
            out.append("\n")
            at_line_start = True
        elif item is Signal.TAB:
            content(unit)
        elif item is Signal.START_INDENT:
            level += 1
        elif item is Signal.FINISH_INDENT:
            if level == 0:
                raise ValueError("indentation finished more times than started")
            level -= 1
        elif item:
            content(item)
    return "".join(out)