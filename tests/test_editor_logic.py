import pytest

from EditorLogic import (
    compute_newline_with_indentation,
    cursor_offset_after_reindent,
    find_previous_meaningful,
    indentation_width,
    reindent_line,
    reindent_lines,
    resolve_indent,
    unindent_line,
)
from LineClassifier import Role


def test_first_meaningful_line_resolves_to_zero():
    assert resolve_indent(["      program 'x' (a)"], 0) == 0
    assert resolve_indent(["", "# header", "    x = 1"], 2) == 0


def test_if_block_round_trip():
    lines = ["if n = 2 then", "  x = 1", "end if"]
    assert resolve_indent(lines, 1, 4) == 4
    assert resolve_indent(lines, 2, 4) == 0


def test_empty_block_closer_stays_at_opener_level():
    assert resolve_indent(["for n = 1 to 5", "next"], 1, 4) == 0
    assert resolve_indent(["    loop", "    end loop"], 1, 4) == 4


def test_else_chain_is_stable():
    lines = ["if a then", "  s1", "else if b then", "  s2", "end if"]
    assert resolve_indent(lines, 1, 4) == 4
    assert resolve_indent(lines, 2, 4) == 0
    assert resolve_indent(lines, 3, 4) == 4
    assert resolve_indent(lines, 4, 4) == 0


def test_else_directly_after_else_keeps_level():
    assert resolve_indent(["    else if a then", "    else"], 1, 4) == 4


def test_end_directly_after_else_keeps_level():
    assert resolve_indent(["    else", "    end if"], 1, 4) == 4


def test_plain_after_plain_keeps_indent():
    assert resolve_indent(["      a = 1", "b = 2"], 1, 4) == 6


def test_closer_after_body_dedents():
    assert resolve_indent(["    function f(x)", "        return x", "end function"], 2, 4) == 4


@pytest.mark.parametrize("gap", [[], [""], ["   "], ["# note"], ["", "  # a", "", "\t"]])
def test_blank_and_comment_lines_are_skipped(gap):
    lines = ["program 'p' ()"] + gap + ["x = 1"]
    assert resolve_indent(lines, len(lines) - 1, 4) == 4


def test_stray_end_is_clamped_to_zero():
    assert resolve_indent(["x = 1", "end if"], 1, 4) == 0


def test_tab_width_controls_step():
    assert resolve_indent(["loop", "x"], 1, 2) == 2
    assert resolve_indent(["\tloop", "x"], 1, 8) == 16


def test_out_of_range_position_raises():
    with pytest.raises(IndexError):
        resolve_indent(["x"], 1)
    with pytest.raises(IndexError):
        resolve_indent([], 0)


def test_non_positive_tab_width_raises():
    with pytest.raises(ValueError):
        resolve_indent(["x"], 0, 0)


def test_find_previous_meaningful():
    lines = ["  if a then", "", "# c", "y"]
    found = find_previous_meaningful(lines, 3)
    assert found is not None
    assert (found.role, found.indent, found.line_number) == (Role.START, 2, 0)
    assert find_previous_meaningful(["", "#"], 2) is None


@pytest.mark.parametrize(
    "text, width",
    [("x", 0), ("   x", 3), ("\tx", 4), ("  \tx", 4), ("\t  x", 6), ("    ", 4)],
)
def test_indentation_width(text, width):
    assert indentation_width(text, 4) == width


def test_reindent_line_replaces_leading_whitespace():
    assert reindent_line("\t  x = 1", 4) == "    x = 1"
    assert reindent_line("   ", 8) == ""


def test_reindent_lines_formats_whole_program():
    source = [
        "program 'demo' ()",
        "declare",
        "numeric n",
        "end declare",
        "",
        "for n = 1 to 3",
        "if n = 2 then",
        "# two",
        "print(n)",
        "else",
        "arm device \"/mod3\"",
        "wait(10)",
        "readout device \"/mod3\"",
        "end if",
        "next",
        "end program",
    ]
    expected = [
        "program 'demo' ()",
        "    declare",
        "        numeric n",
        "    end declare",
        "",
        "    for n = 1 to 3",
        "        if n = 2 then",
        "            # two",
        "            print(n)",
        "        else",
        "            arm device \"/mod3\"",
        "                wait(10)",
        "            readout device \"/mod3\"",
        "        end if",
        "    next",
        "end program",
    ]
    assert reindent_lines(source, 4) == expected


def test_reindent_lines_is_stable_on_formatted_input():
    formatted = ["loop", "    x = 1", "end loop"]
    assert reindent_lines(formatted, 4) == formatted


def test_newline_after_opener_indents():
    lines = ["  if n = 2 then"]
    assert compute_newline_with_indentation(lines, 0, lines[0]) == "\n      "


def test_newline_after_plain_keeps_indent():
    lines = ["    x = 1"]
    assert compute_newline_with_indentation(lines, 0, lines[0]) == "\n    "


def test_newline_before_closer_text_dedents():
    lines = ["loop", "    x = 1 end loop"]
    prefix, suffix = "    x = 1 ", "end loop"
    assert compute_newline_with_indentation(lines, 1, prefix, suffix) == "\n"


def test_newline_at_top_of_empty_document():
    assert compute_newline_with_indentation([""], 0, "") == "\n"


def test_unindent_line_removes_one_level():
    assert unindent_line("        x = 1", 4) == "    x = 1"
    assert unindent_line("\tx = 1", 4) == "x = 1"
    assert unindent_line("  x = 1", 4) == "x = 1"


def test_unindent_line_without_indent_keeps_text():
    assert unindent_line("x = 1", 4) == "x = 1"


@pytest.mark.parametrize(
    "offset, old, new, expected",
    [(0, 2, 4, 4), (2, 2, 4, 4), (5, 2, 4, 7), (6, 4, 0, 2)],
)
def test_cursor_offset_after_reindent(offset, old, new, expected):
    assert cursor_offset_after_reindent(offset, old, new) == expected
