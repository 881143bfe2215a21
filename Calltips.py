"""Calltip utilities for BlockPad."""
import re
from typing import Optional

from Keywords import HELP

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def get_calltip(name: Optional[str]) -> Optional[str]:
    """Return the signature and description for a builtin name (any case)."""
    if not name:
        return None
    return HELP.get(name.lower())


def word_at(text: str, column: int) -> Optional[str]:
    """Identifier that spans column or ends right before it."""
    for match in _IDENTIFIER.finditer(text):
        if match.start() <= column <= match.end():
            return match.group(0)
    return None
