from __future__ import annotations

"""
Классификация строк по роли в блочной структуре.

Модуль не зависит от Qt: роль строки вычисляется только по её
собственному тексту, без учёта соседних строк.
"""

import re
from enum import Enum
from typing import Final, Tuple

COMMENT_CHAR: Final[str] = "#"
QUOTES: Final[str] = "'\""


class Role(str, Enum):
    START = "start"
    END = "end"
    START_END = "start_end"
    PLAIN = "plain"


def _rule(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# Порядок важен: первое совпадение выигрывает.
ROLE_RULES: Final[Tuple[Tuple[re.Pattern[str], Role], ...]] = (
    (_rule(r"^(program|function|for|loop|handle|exercise)\b"), Role.START),
    (_rule(r"^declare$"), Role.START),
    (_rule(r"^if\b.*\bthen$"), Role.START),
    (_rule(r"^arm\s+device\b"), Role.START),
    (_rule(r"^else\b"), Role.START_END),
    (_rule(r"^(end|next)\b"), Role.END),
    (_rule(r"^readout\s+device\b"), Role.END),
)


def strip_comment(text: str, comment_char: str = COMMENT_CHAR) -> str:
    """Return text without its trailing comment.

    The comment character is ignored inside quoted strings; an unmatched
    quote runs to the end of the line.
    """
    quote = ""
    for index, char in enumerate(text):
        if quote:
            if char == quote:
                quote = ""
        elif char in QUOTES:
            quote = char
        elif char == comment_char:
            return text[:index]
    return text


def is_blank_or_comment(text: str, comment_char: str = COMMENT_CHAR) -> bool:
    """True for empty, whitespace-only and comment-only lines."""
    return not strip_comment(text, comment_char).strip()


def classify(line_text: str, comment_char: str = COMMENT_CHAR) -> Role:
    """Return the block role of a single line."""
    code = strip_comment(line_text, comment_char).strip()
    for pattern, role in ROLE_RULES:
        if pattern.search(code):
            return role
    return Role.PLAIN
