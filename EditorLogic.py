from __future__ import annotations

"""
Эти функции не зависят от Qt и могут использоваться и
тестироваться отдельно от GUI. CodeEditor делегирует им
вычисление отступов: документ передаётся как последовательность строк.
"""

import logging
from typing import Final, List, NamedTuple, Optional, Sequence

from LineClassifier import COMMENT_CHAR, Role, classify, is_blank_or_comment

logger = logging.getLogger(__name__)

DEFAULT_TAB_WIDTH: Final[int] = 4

OPENERS: Final = (Role.START, Role.START_END)
CLOSERS: Final = (Role.END, Role.START_END)


class ScanResult(NamedTuple):
    role: Role
    indent: int
    line_number: int


def indentation_width(text: str, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Column width of the leading whitespace; tabs advance to the next stop."""
    column = 0
    for char in text:
        if char == " ":
            column += 1
        elif char == "\t":
            column += tab_width - column % tab_width
        else:
            break
    return column


def find_previous_meaningful(
    lines: Sequence[str],
    line_number: int,
    comment_char: str = COMMENT_CHAR,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> Optional[ScanResult]:
    """Nearest line above line_number that is not blank or comment-only."""
    for number in range(line_number - 1, -1, -1):
        text = lines[number]
        if is_blank_or_comment(text, comment_char):
            continue
        return ScanResult(classify(text, comment_char), indentation_width(text, tab_width), number)
    return None


def resolve_indent(
    lines: Sequence[str],
    line_number: int,
    tab_width: int = DEFAULT_TAB_WIDTH,
    comment_char: str = COMMENT_CHAR,
) -> int:
    """Return the indentation column for lines[line_number].

    Only the line itself and the nearest meaningful line above it are looked
    at. Malformed nesting never raises, it just produces a plausible column.
    Raises IndexError for a position outside the document and ValueError for
    a non-positive tab width.
    """
    if tab_width < 1:
        raise ValueError(f"tab width must be positive, got {tab_width!r}")
    if not 0 <= line_number < len(lines):
        raise IndexError(f"line {line_number} outside document of {len(lines)} lines")

    this_role = classify(lines[line_number], comment_char)
    previous = find_previous_meaningful(lines, line_number, comment_char, tab_width)
    if previous is None:
        return 0
    last_role, last_indent = previous.role, previous.indent

    # Условия перекрываются, поэтому порядок проверок существенен.
    if (this_role == last_role == Role.START_END) or (this_role == Role.END and last_role == Role.START_END):
        rule, column = "same-clause", last_indent
    elif this_role in CLOSERS:
        if last_role == Role.START:
            rule, column = "empty-block", last_indent
        else:
            rule, column = "close", last_indent - tab_width
    elif last_role in OPENERS:
        rule, column = "open", last_indent + tab_width
    else:
        rule, column = "keep", last_indent

    logger.debug(
        "line %d (%s) after line %d (%s, col %d): %s -> %d",
        line_number, this_role.value, previous.line_number, last_role.value, last_indent, rule, column,
    )
    return max(0, column)


def indent_string(column: int) -> str:
    return " " * max(0, column)


def reindent_line(line: str, column: int) -> str:
    """Replace the leading whitespace of line with column spaces."""
    body = line.lstrip(" \t")
    if not body:
        return ""
    return indent_string(column) + body


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


def cursor_offset_after_reindent(offset: int, old_indent: int, new_indent: int) -> int:
    """Cursor offset in a line whose indent changed from old_indent to new_indent chars.

    A cursor inside the old indentation lands right after the new one,
    otherwise it stays on the same character of the line's text.
    """
    if offset <= old_indent:
        return new_indent
    return offset - old_indent + new_indent


def reindent_lines(
    lines: Sequence[str],
    tab_width: int = DEFAULT_TAB_WIDTH,
    comment_char: str = COMMENT_CHAR,
) -> List[str]:
    """Reindent a whole buffer top to bottom.

    Each line is resolved against the already reindented lines above it, so
    the result does not depend on the original indentation.
    """
    result: List[str] = []
    for number, line in enumerate(lines):
        result.append(line)
        column = resolve_indent(result, number, tab_width, comment_char)
        result[number] = reindent_line(line, column)
    return result


def compute_newline_with_indentation(
    lines: Sequence[str],
    line_number: int,
    prefix: str,
    suffix: str = "",
    tab_width: int = DEFAULT_TAB_WIDTH,
    comment_char: str = COMMENT_CHAR,
) -> str:
    """Вернуть строку для вставки при автоотступе после Enter.

    prefix: текст текущей строки до курсора, suffix: после курсора
    (он переедет на новую строку и определяет её роль).
    """
    virtual = list(lines[:line_number]) + [prefix, suffix.lstrip(" \t")]
    column = resolve_indent(virtual, line_number + 1, tab_width, comment_char)
    return "\n" + indent_string(column)


def unindent_line(line: str, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Вернуть строку без одного уровня отступа в начале (если он есть)."""
    if line.startswith("\t"):
        return line[1:]
    width = len(line) - len(line.lstrip(" "))
    return line[min(width, tab_width) :]
