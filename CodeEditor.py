import logging
from collections.abc import Sequence
from typing import Optional

from PyQt5.QtCore import Qt, QTimer, QRect, QSize, pyqtSignal
from PyQt5.QtGui import QFont, QTextCursor, QPainter, QWheelEvent, QTextDocument, QTextBlock
from PyQt5.QtWidgets import QPlainTextEdit, QToolTip, QWidget

from Calltips import get_calltip, word_at
from EditorLogic import (
	CLOSERS,
	DEFAULT_TAB_WIDTH,
	compute_newline_with_indentation,
	cursor_offset_after_reindent,
	indent_string,
	leading_whitespace,
	reindent_lines,
	resolve_indent,
	unindent_line,
)
from LineClassifier import classify
from ScriptHighlighter import ScriptHighlighter
from Theme import EditorPalette

logger = logging.getLogger(__name__)


class DocumentLines(Sequence):
	"""Read-only view of a QTextDocument as a sequence of line texts."""

	def __init__(self, document: QTextDocument) -> None:
		self._document = document

	def __len__(self) -> int:
		return self._document.blockCount()

	def __getitem__(self, index):
		if isinstance(index, slice):
			return [self[i] for i in range(*index.indices(len(self)))]
		if index < 0:
			index += len(self)
		block = self._document.findBlockByNumber(index)
		if index < 0 or not block.isValid():
			raise IndexError(index)
		return block.text()


class CodeEditor(QPlainTextEdit):
	"""QPlainTextEdit with block-aware auto-indentation for device scripts."""

	cursorMoved = pyqtSignal(int, int)

	def __init__(self, palette: Optional[EditorPalette] = None, tab_width: int = DEFAULT_TAB_WIDTH) -> None:
		super().__init__()
		font = QFont("Consolas", 11)
		font.setStyleHint(QFont.StyleHint.Monospace)
		self.setFont(font)
		self._default_font_size = font.pointSize()
		self._palette = palette or EditorPalette()
		self._apply_palette()
		self.highlighter = ScriptHighlighter(self.document(), self._palette)
		self.lines = DocumentLines(self.document())
		self.tab_width = DEFAULT_TAB_WIDTH
		self.set_tab_width(tab_width)
		self.show_calltips = True
		self.calltip_timeout_ms = 2500
		self.cursorPositionChanged.connect(self._handle_cursor_change)

		# Line number area setup
		self._lineNumberArea = _LineNumberArea(self)
		self.blockCountChanged.connect(self._update_line_number_area_width)
		self.updateRequest.connect(self._update_line_number_area)
		self._update_line_number_area_width(0)

		self._calltip_timer = QTimer(self)
		self._calltip_timer.setSingleShot(True)
		self._calltip_timer.timeout.connect(QToolTip.hideText)

		self.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)

	def _apply_palette(self) -> None:
		p = self._palette
		self.setStyleSheet(
			f"QPlainTextEdit {{ background-color: {p.background.name()}; color: {p.foreground.name()}; }}"
		)
		if hasattr(self, "_lineNumberArea"):
			self._lineNumberArea.update()

	def set_tab_width(self, width: int) -> None:
		"""Set indentation step in columns (also used for tab stops)."""
		if width < 1:
			raise ValueError(f"tab width must be positive, got {width!r}")
		self.tab_width = width
		self.setTabStopDistance(self.fontMetrics().horizontalAdvance(" ") * width)

	def set_font_size(self, size: int) -> None:
		"""Set absolute font size (clamped)."""
		size = max(6, min(72, int(size)))
		font = self.font()
		if font.pointSize() == size:
			return
		font.setPointSize(size)
		self.setFont(font)
		self.setTabStopDistance(self.fontMetrics().horizontalAdvance(" ") * self.tab_width)
		self._update_line_number_area_width(0)

	def adjust_font_size(self, delta: int) -> None:
		self.set_font_size(self.font().pointSize() + delta)

	def reset_font_size(self) -> None:
		self.set_font_size(self._default_font_size)

	def set_palette(self, palette: EditorPalette) -> None:
		self._palette = palette
		self._apply_palette()
		self.highlighter.rebuild(palette)
		self._update_line_number_area_width(0)

	def lineNumberAreaWidth(self) -> int:
		"""Return width of line number area in pixels."""
		digits = len(str(max(1, self.blockCount())))
		char_width = self.fontMetrics().horizontalAdvance('9')
		padding = 8  # слева/справа
		return padding + char_width * digits

	def _update_line_number_area_width(self, _):
		self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

	def _update_line_number_area(self, rect, dy):
		if dy:
			self._lineNumberArea.scroll(0, dy)
		else:
			self._lineNumberArea.update(0, rect.y(), self._lineNumberArea.width(), rect.height())
		if rect.contains(self.viewport().rect()):
			self._update_line_number_area_width(0)

	def resizeEvent(self, event):  # type: ignore[override]
		super().resizeEvent(event)
		self._lineNumberArea.setGeometry(QRect(0, 0, self.lineNumberAreaWidth(), self.height()))

	def wheelEvent(self, event: QWheelEvent):  # type: ignore[override]
		# Ctrl + колёсико: масштаб шрифта
		if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
			angle = event.angleDelta().y()
			if angle:
				self.adjust_font_size(1 if angle > 0 else -1)
			event.accept()
			return
		super().wheelEvent(event)

	def _lineNumberAreaPaintEvent(self, event) -> None:
		painter = QPainter(self._lineNumberArea)
		painter.setFont(self.font())
		painter.fillRect(event.rect(), self._palette.background)
		painter.setPen(self._palette.comment)
		x = self._lineNumberArea.width() - 1
		painter.drawLine(x, event.rect().top(), x, event.rect().bottom())

		block = self.firstVisibleBlock()
		block_number = block.blockNumber()
		top = int(self.blockBoundingGeometry(block).translated(self.contentOffset()).top())
		bottom = top + int(self.blockBoundingRect(block).height())
		while block.isValid() and top <= event.rect().bottom():
			if block.isVisible() and bottom >= event.rect().top():
				painter.drawText(0, top, self._lineNumberArea.width() - 4, self.fontMetrics().height(),
							   Qt.AlignmentFlag.AlignRight, str(block_number + 1))
			block = block.next()
			block_number += 1
			top = bottom
			bottom = top + int(self.blockBoundingRect(block).height())

	def keyPressEvent(self, event):
		key = event.key()
		mods = event.modifiers()

		# Приоритет 1: явный вызов подсказки
		ctrl_shift = (mods & Qt.KeyboardModifier.ControlModifier) and (mods & Qt.KeyboardModifier.ShiftModifier)
		if key == Qt.Key.Key_F1 or (key == Qt.Key.Key_Space and ctrl_shift):
			self.show_calltip_at_cursor()
			return

		# Приоритет 2: Esc / Enter, тултипы и автоотступ
		if key == Qt.Key.Key_Escape:
			QToolTip.hideText()
			return
		if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
			QToolTip.hideText()
			self.newline_and_indent()
			return

		# Приоритет 3: Tab / Shift+Tab, переотступ и снятие отступа
		if key == Qt.Key.Key_Tab:
			self.reindent_selection()
			return
		if key == Qt.Key.Key_Backtab:
			self.unindent_selection()
			return

		super().keyPressEvent(event)

	def _reindent_block(self, block: QTextBlock) -> int:
		"""Reindent one line in place. Returns the new indentation length."""
		text = block.text()
		old_indent = leading_whitespace(text)
		new_indent = indent_string(resolve_indent(self.lines, block.blockNumber(), self.tab_width))
		if old_indent != new_indent:
			edit = QTextCursor(block)
			edit.setPosition(block.position() + len(old_indent), QTextCursor.MoveMode.KeepAnchor)
			edit.removeSelectedText()
			if new_indent:
				edit.insertText(new_indent)
		return len(new_indent)

	def reindent_current_line(self) -> None:
		cursor = self.textCursor()
		block = cursor.block()
		offset = cursor.positionInBlock()
		old_indent = len(leading_whitespace(block.text()))
		cursor.beginEditBlock()
		new_indent = self._reindent_block(block)
		cursor.endEditBlock()
		cursor.setPosition(block.position() + cursor_offset_after_reindent(offset, old_indent, new_indent))
		self.setTextCursor(cursor)

	def reindent_selection(self) -> None:
		"""Reindent the current line, or every line touched by the selection."""
		cursor = self.textCursor()
		if not cursor.hasSelection():
			self.reindent_current_line()
			return
		document = self.document()
		first = document.findBlock(cursor.selectionStart()).blockNumber()
		last = document.findBlock(cursor.selectionEnd()).blockNumber()
		cursor.beginEditBlock()
		for number in range(first, last + 1):
			self._reindent_block(document.findBlockByNumber(number))
		cursor.endEditBlock()

	def reindent_buffer(self) -> int:
		"""Reindent the whole document as one undo step. Returns changed line count."""
		lines = list(self.lines)
		result = reindent_lines(lines, self.tab_width)
		changed = sum(1 for old, new in zip(lines, result) if old != new)
		if not changed:
			return 0
		cursor = self.textCursor()
		line_number, offset = cursor.blockNumber(), cursor.positionInBlock()
		cursor.beginEditBlock()
		cursor.select(QTextCursor.SelectionType.Document)
		cursor.insertText("\n".join(result))
		cursor.endEditBlock()
		block = self.document().findBlockByNumber(line_number)
		cursor.setPosition(block.position() + min(offset, len(block.text())))
		self.setTextCursor(cursor)
		logger.debug("Reindented %d of %d lines", changed, len(lines))
		return changed

	def newline_and_indent(self) -> None:
		"""Вставить перевод строки с отступом, вычисленным по структуре блоков."""
		cursor = self.textCursor()
		cursor.beginEditBlock()
		cursor.removeSelectedText()
		if classify(cursor.block().text()) in CLOSERS:
			# «end if» / «else» возвращаются на уровень открывающей строки
			self._reindent_block(cursor.block())
		block = cursor.block()
		text = block.text()
		column = cursor.positionInBlock()
		prefix, suffix = text[:column], text[column:]
		cursor.movePosition(
			QTextCursor.MoveOperation.Right,
			QTextCursor.MoveMode.KeepAnchor,
			len(leading_whitespace(suffix)),
		)
		cursor.insertText(
			compute_newline_with_indentation(self.lines, block.blockNumber(), prefix, suffix, self.tab_width)
		)
		cursor.endEditBlock()
		self.setTextCursor(cursor)

	def unindent_selection(self) -> None:
		cursor = self.textCursor()
		document = self.document()
		first = document.findBlock(cursor.selectionStart()).blockNumber()
		last = document.findBlock(cursor.selectionEnd()).blockNumber()
		cursor.beginEditBlock()
		for number in range(first, last + 1):
			block = document.findBlockByNumber(number)
			text = block.text()
			new_text = unindent_line(text, self.tab_width)
			if new_text != text:
				edit = QTextCursor(block)
				edit.setPosition(block.position() + len(text) - len(new_text), QTextCursor.MoveMode.KeepAnchor)
				edit.removeSelectedText()
		cursor.endEditBlock()

	def show_calltip_at_cursor(self) -> None:
		if not self.show_calltips:
			return
		cursor = self.textCursor()
		text = get_calltip(word_at(cursor.block().text(), cursor.positionInBlock()))
		if text:
			pt = self.cursorRect().bottomLeft()
			QToolTip.showText(self.mapToGlobal(pt), text, self)
			self._calltip_timer.start(max(500, self.calltip_timeout_ms))

	def _handle_cursor_change(self) -> None:
		cursor = self.textCursor()
		self.cursorMoved.emit(cursor.blockNumber() + 1, cursor.positionInBlock() + 1)
		self._lineNumberArea.update()

	def set_word_wrap_enabled(self, enabled: bool) -> None:
		"""Включить/выключить перенос строк по ширине виджета."""
		mode = QPlainTextEdit.LineWrapMode.WidgetWidth if enabled else QPlainTextEdit.LineWrapMode.NoWrap
		self.setLineWrapMode(mode)


class _LineNumberArea(QWidget):
	def __init__(self, editor: CodeEditor) -> None:
		super().__init__(editor)
		self._editor = editor

	def sizeHint(self):
		return QSize(self._editor.lineNumberAreaWidth(), 0)

	def paintEvent(self, event):  # type: ignore[override]
		self._editor._lineNumberAreaPaintEvent(event)
