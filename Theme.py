from dataclasses import dataclass, field
from enum import Enum
from PyQt5.QtGui import QColor

@dataclass
class EditorPalette:
	# Тёмная схема по умолчанию
	background: QColor = field(default_factory=lambda: QColor("#1e2127"))
	foreground: QColor = field(default_factory=lambda: QColor("#c8ccd4"))
	keyword: QColor = field(default_factory=lambda: QColor("#c678dd"))
	type: QColor = field(default_factory=lambda: QColor("#56b6c2"))
	builtin: QColor = field(default_factory=lambda: QColor("#61afef"))
	constant: QColor = field(default_factory=lambda: QColor("#d19a66"))
	comment: QColor = field(default_factory=lambda: QColor("#7f848e"))
	string: QColor = field(default_factory=lambda: QColor("#98c379"))
	number: QColor = field(default_factory=lambda: QColor("#d19a66"))
	function: QColor = field(default_factory=lambda: QColor("#e5c07b"))


class Theme(str, Enum):
	DARK = "dark"
	LIGHT = "light"


LIGHT_PALETTE = EditorPalette(
	background=QColor("#fdfdfd"),
	foreground=QColor("#2f3337"),
	keyword=QColor("#8b1fa9"),
	type=QColor("#0e7c86"),
	builtin=QColor("#1f5fbf"),
	constant=QColor("#a05a00"),
	comment=QColor("#6a737d"),
	string=QColor("#3a7d34"),
	number=QColor("#a05a00"),
	function=QColor("#6f42c1"),
)

DARK_PALETTE = EditorPalette()


def palette_for(theme_value: str) -> EditorPalette:
	"""Palette for a stored theme name; unknown names get the dark one."""
	return LIGHT_PALETTE if theme_value == Theme.LIGHT.value else DARK_PALETTE
