from typing import List, Optional, Tuple

from PyQt5.QtCore import QRegularExpression
from PyQt5.QtGui import QColor, QFont, QTextCharFormat, QSyntaxHighlighter

from Keywords import BUILTIN, CONSTANT, KEYWORD, TYPE, names_in_category
from LineClassifier import COMMENT_CHAR, strip_comment
from Theme import EditorPalette

_CI = QRegularExpression.PatternOption.CaseInsensitiveOption


class ScriptHighlighter(QSyntaxHighlighter):
	"""Syntax highlighter for device scripts (keywords are case-insensitive)."""

	def __init__(self, document, palette: Optional[EditorPalette] = None, comment_char: str = COMMENT_CHAR) -> None:
		super().__init__(document)
		self.palette = palette or EditorPalette()
		self.comment_char = comment_char
		self._rules: List[Tuple[QRegularExpression, QTextCharFormat, int]] = []
		self._comment_format = QTextCharFormat()
		self._init_rules()

	@staticmethod
	def _fmt(color: QColor, bold: bool = False, italic: bool = False) -> QTextCharFormat:
		char_format = QTextCharFormat()
		char_format.setForeground(color)
		if bold:
			char_format.setFontWeight(QFont.Weight.Bold)
		if italic:
			char_format.setFontItalic(True)
		return char_format

	def _words(self, category: str) -> QRegularExpression:
		return QRegularExpression(r"\b(" + "|".join(names_in_category(category)) + r")\b", _CI)

	def _init_rules(self) -> None:
		p = self.palette
		self._rules = [
			(self._words(KEYWORD), self._fmt(p.keyword, bold=True), 0),
			(self._words(TYPE), self._fmt(p.type), 0),
			(self._words(BUILTIN), self._fmt(p.builtin), 0),
			(self._words(CONSTANT), self._fmt(p.constant), 0),
			(QRegularExpression(r"\b(\d+(\.\d+)?([eE][-+]?\d+)?)\b"), self._fmt(p.number), 0),
			# Подсвечиваем только имя после program/function
			(QRegularExpression(r"\b(?:program|function)\s+([A-Za-z_][A-Za-z0-9_]*)", _CI), self._fmt(p.function), 1),
			(QRegularExpression(r"'[^']*'?|\"[^\"]*\"?"), self._fmt(p.string), 0),
		]
		self._comment_format = self._fmt(p.comment, italic=True)

	def rebuild(self, palette: EditorPalette) -> None:
		self.palette = palette
		self._init_rules()
		self.rehighlight()

	def highlightBlock(self, text: str) -> None:  # noqa: N802 (Qt API)
		code_length = len(strip_comment(text, self.comment_char))
		for pattern, text_format, group in self._rules:
			match_iterator = pattern.globalMatch(text[:code_length])
			while match_iterator.hasNext():
				match = match_iterator.next()
				self.setFormat(match.capturedStart(group), match.capturedLength(group), text_format)
		if code_length < len(text):
			self.setFormat(code_length, len(text) - code_length, self._comment_format)
