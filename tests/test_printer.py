import pytest

from sonnetkit.printer import PrintItems, Signal, render


def test_chaining_collects_items_in_order():
    items = PrintItems().text("a").signal(Signal.NEW_LINE).text("b")
    assert list(items) == ["a", Signal.NEW_LINE, "b"]
    assert len(items) == 3


def test_extend_appends_other_items():
    first = PrintItems().text("x")
    second = PrintItems().signal(Signal.TAB).text("y")
    first.extend(second)
    assert list(first) == ["x", Signal.TAB, "y"]
    assert first == PrintItems(["x", Signal.TAB, "y"])


def test_indentation_applies_to_lines_inside_block():
    items = (
        PrintItems()
        .text("{")
        .signal(Signal.START_INDENT)
        .signal(Signal.NEW_LINE)
        .text("a")
        .signal(Signal.NEW_LINE)
        .signal(Signal.FINISH_INDENT)
        .text("}")
    )
    assert render(items, indent_width=2) == "{\n  a\n}"


def test_hard_tabs_use_tab_character():
    items = (
        PrintItems()
        .signal(Signal.START_INDENT)
        .signal(Signal.NEW_LINE)
        .text("a")
        .signal(Signal.FINISH_INDENT)
    )
    assert render(items, indent_width=3, use_tabs=True) == "\n\ta"


def test_empty_lines_carry_no_trailing_whitespace():
    items = (
        PrintItems()
        .signal(Signal.START_INDENT)
        .text("a")
        .signal(Signal.NEW_LINE)
        .signal(Signal.NEW_LINE)
        .text("b")
        .signal(Signal.FINISH_INDENT)
    )
    rendered = render(items, indent_width=4)
    assert rendered.split("\n")[1] == ""
    assert rendered.endswith("    b")


def test_tab_signal_matches_indent_unit():
    items = PrintItems().text("a").signal(Signal.TAB).text("b")
    assert render(items, indent_width=4) == "a" + " " * 4 + "b"
    assert render(items, use_tabs=True) == "a\tb"


def test_unbalanced_finish_indent_is_rejected():
    items = PrintItems().signal(Signal.FINISH_INDENT)
    with pytest.raises(ValueError):
        render(items)