"""Formatting of comments and error text into print items."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Union

from sonnetkit.printer import PrintItems, Signal
from sonnetkit.trivia import Trivia, TriviaKind

_ASCII_WHITESPACE = " \t\n\x0c\r"


class CommentLocation(Enum):
    """Where comments sit relative to the item they belong to."""

    ABOVE_ITEM = "above_item"
    ITEM_INLINE = "item_inline"
    END_OF_ITEMS = "end_of_items"


def _common_ws_prefix(a: str, b: str) -> str:
    offset = 0
    for x, y in zip(a, b):
        if x != y or not (x in _ASCII_WHITESPACE or x == "*"):
            break
        offset += 1
    return a[:offset]


def _format_error(pi: PrintItems, text: str) -> None:
    while text:
        cut = len(text)
        for i, ch in enumerate(text):
            if ch in "\n\t":
                cut = i
                break
        pi.text(text[:cut])
        text = text[cut:]
        if text:
            pi.signal(Signal.NEW_LINE if text[0] == "\n" else Signal.TAB)
            text = text[1:]


def _format_multiline(pi: PrintItems, raw: str, loc: CommentLocation) -> None:
    if not raw.startswith("/*"):
        raise ValueError("multi-line comment must start with /*")
    if not raw.endswith("*/") or len(raw) < 4:
        raise ValueError("multi-line comment must end with */")
    text = raw[2:-2]
    doc = text.startswith("*")
    if doc:
        text = text[1:]

    all_lines = [line.rstrip() for line in text.split("\n")]
    immediate_start = True
    skip = 0
    while skip < len(all_lines) and not all_lines[skip]:
        skip += 1
        immediate_start = False
    lines = all_lines[skip:]
    while lines and not lines[-1]:
        lines.pop()

    if len(lines) == 1 and not doc:
        if loc is CommentLocation.ITEM_INLINE:
            pi.text(" ")
        pi.text("/* ").text(lines[0].strip()).text(" */")
        return
    if not lines:
        return

    first = lines[1] if immediate_start and len(lines) > 1 else lines[0]
    padding = _common_ws_prefix(first, first)
    for line in lines[2 if immediate_start else 1:]:
        if line:
            padding = _common_ws_prefix(padding, line)
    start = 1 if immediate_start else 0
    for i in range(start, len(lines)):
        if lines[i]:
            if not lines[i].startswith(padding):
                raise ValueError("all non-empty lines start with this padding")
            lines[i] = lines[i][len(padding):]

    pi.text("/*")
    if doc:
        pi.text("*")
    pi.signal(Signal.NEW_LINE)
    for line in lines:
        if doc:
            pi.text(" *")
        if not line:
            pi.signal(Signal.NEW_LINE)
            continue
        if doc:
            pi.text(" ")
        while line.startswith("\t"):
            if doc:
                pi.text("    ")
            else:
                pi.signal(Signal.TAB)
            line = line[1:]
        pi.text(line).signal(Signal.NEW_LINE)
    if doc:
        pi.text(" ")
    pi.text("*/").signal(Signal.NEW_LINE)


def _format_single_line(
    pi: PrintItems, marker: str, text: str, loc: CommentLocation
) -> None:
    if not text.startswith(marker):
        raise ValueError(f"comment must start with {marker}")
    inline = loc is CommentLocation.ITEM_INLINE
    if inline:
        pi.text(" ")
    pi.text(f"{marker} ").text(text[len(marker):].strip())
    if not inline:
        pi.signal(Signal.NEW_LINE)


def format_comments(
    comments: Sequence[Union[Trivia, str]], loc: CommentLocation
) -> PrintItems:
    """Print items for comments; whitespace is dropped, error text kept as is."""
    pi = PrintItems()
    for item in comments:
        if isinstance(item, str):
            _format_error(pi, item)
            continue
        kind = item.kind
        if kind is TriviaKind.WHITESPACE:
            continue
        if kind is TriviaKind.MULTI_LINE_COMMENT:
            _format_multiline(pi, item.text, loc)
        elif kind is TriviaKind.SINGLE_LINE_HASH_COMMENT:
            _format_single_line(pi, "#", item.text, loc)
        elif kind is TriviaKind.SINGLE_LINE_SLASH_COMMENT:
            _format_single_line(pi, "//", item.text, loc)
        elif kind is TriviaKind.ERROR_COMMENT_TOO_SHORT:
            pi.text("/*/")
        else:
            pi.text(item.text)
    return pi