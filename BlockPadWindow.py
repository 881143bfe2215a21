from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
	QAction,
	QActionGroup,
	QFileDialog,
	QInputDialog,
	QMainWindow,
	QMessageBox,
	QStatusBar,
)

from CodeEditor import CodeEditor
from Settings import SETTINGS_PATH, load_settings, normalize_tab_width, save_settings
from Theme import EditorPalette, Theme, palette_for

logger = logging.getLogger(__name__)

FILE_FILTER = "Device Scripts (*.dsc);;All Files (*.*)"


class BlockPadWindow(QMainWindow):
	"""Main application window wrapping the code editor."""

	def __init__(self, settings_path: Path = SETTINGS_PATH) -> None:
		super().__init__()
		self.setWindowTitle("BlockPad")
		self.resize(900, 650)
		self._settings_path = settings_path
		self._settings = load_settings(self._settings_path)
		palette = palette_for(self._settings["theme"])

		self.editor = CodeEditor(palette, tab_width=self._settings["tab_width"])
		self.editor.show_calltips = bool(self._settings["show_calltips"])
		self.editor.calltip_timeout_ms = int(self._settings["calltip_timeout_ms"])
		self.editor.set_font_size(self._settings["font_size"])
		self.editor.cursorMoved.connect(self.update_status)
		self.setCentralWidget(self.editor)

		self.status_bar = QStatusBar()
		self.setStatusBar(self.status_bar)

		self._current_file: Optional[Path] = None
		self._create_actions()
		self._create_menu_bar()
		self._create_settings_menu()
		self._apply_global_theme(palette)

		wrap_enabled = bool(self._settings["word_wrap"])
		self.editor.set_word_wrap_enabled(wrap_enabled)
		self.word_wrap_action.setChecked(wrap_enabled)

	def _create_actions(self) -> None:
		self.new_action = QAction("&New", self)
		self.new_action.setShortcut("Ctrl+N")
		self.new_action.triggered.connect(self.new_file)

		self.open_action = QAction("&Open…", self)
		self.open_action.setShortcut("Ctrl+O")
		self.open_action.triggered.connect(self.open_file)

		self.save_action = QAction("&Save", self)
		self.save_action.setShortcut("Ctrl+S")
		self.save_action.triggered.connect(self.save_file)

		self.save_as_action = QAction("Save &As…", self)
		self.save_as_action.setShortcut("Ctrl+Shift+S")
		self.save_as_action.triggered.connect(self.save_file_as)

		self.exit_action = QAction("E&xit", self)
		self.exit_action.setShortcut("Ctrl+Q")
		self.exit_action.triggered.connect(self.close)

		self.reindent_line_action = QAction("Reindent &Line", self)
		self.reindent_line_action.triggered.connect(self.editor.reindent_selection)

		self.reindent_buffer_action = QAction("Reindent &Buffer", self)
		self.reindent_buffer_action.setShortcut(QKeySequence("Ctrl+Shift+I"))
		self.reindent_buffer_action.triggered.connect(self._reindent_buffer)

		self.increase_font_action = QAction("Increase Font", self)
		self.increase_font_action.setShortcuts([QKeySequence("Ctrl++"), QKeySequence("Ctrl+=")])
		self.increase_font_action.triggered.connect(lambda: self._adjust_font_size(1))

		self.decrease_font_action = QAction("Decrease Font", self)
		self.decrease_font_action.setShortcut(QKeySequence("Ctrl+-"))
		self.decrease_font_action.triggered.connect(lambda: self._adjust_font_size(-1))

		self.reset_font_action = QAction("Reset Font Size", self)
		self.reset_font_action.setShortcut(QKeySequence("Ctrl+0"))
		self.reset_font_action.triggered.connect(self._reset_font_size)

		self.word_wrap_action = QAction("Word Wrap", self, checkable=True)
		self.word_wrap_action.triggered.connect(self._toggle_word_wrap)

	def _create_menu_bar(self) -> None:
		menu_bar = self.menuBar()
		file_menu = menu_bar.addMenu("&File")
		file_menu.addAction(self.new_action)
		file_menu.addAction(self.open_action)
		file_menu.addSeparator()
		file_menu.addAction(self.save_action)
		file_menu.addAction(self.save_as_action)
		file_menu.addSeparator()
		file_menu.addAction(self.exit_action)

		edit_menu = menu_bar.addMenu("&Edit")
		edit_menu.addAction(self.reindent_line_action)
		edit_menu.addAction(self.reindent_buffer_action)

		view_menu = menu_bar.addMenu("&View")
		view_menu.addAction(self.increase_font_action)
		view_menu.addAction(self.decrease_font_action)
		view_menu.addAction(self.reset_font_action)
		view_menu.addSeparator()
		view_menu.addAction(self.word_wrap_action)

	def _create_settings_menu(self) -> None:
		settings_menu = self.menuBar().addMenu("&Settings")

		theme_menu = settings_menu.addMenu("Theme")
		action_group = QActionGroup(self)
		action_group.setExclusive(True)

		self.dark_theme_action = QAction("Dark", self, checkable=True)
		self.light_theme_action = QAction("Light", self, checkable=True)
		action_group.addAction(self.dark_theme_action)
		action_group.addAction(self.light_theme_action)
		theme_menu.addAction(self.dark_theme_action)
		theme_menu.addAction(self.light_theme_action)

		current = self._settings["theme"]
		self.dark_theme_action.setChecked(current != Theme.LIGHT.value)
		self.light_theme_action.setChecked(current == Theme.LIGHT.value)
		self.dark_theme_action.triggered.connect(lambda: self._set_theme(Theme.DARK.value))
		self.light_theme_action.triggered.connect(lambda: self._set_theme(Theme.LIGHT.value))

		settings_menu.addSeparator()
		self.calltips_action = QAction("Show Calltips", self, checkable=True)
		self.calltips_action.setChecked(bool(self._settings["show_calltips"]))
		self.calltips_action.toggled.connect(self._toggle_calltips)
		settings_menu.addAction(self.calltips_action)

		self.tab_width_action = QAction("Tab Width…", self)
		self.tab_width_action.triggered.connect(self._ask_tab_width)
		settings_menu.addAction(self.tab_width_action)

	def _save_settings(self) -> None:
		try:
			save_settings(self._settings, self._settings_path)
		except OSError as exc:
			self.status_bar.showMessage(f"Settings not saved: {exc}", 5000)

	def _set_theme(self, theme_value: str) -> None:
		palette = palette_for(theme_value)
		self._settings["theme"] = theme_value
		self._save_settings()
		self.editor.set_palette(palette)
		self._apply_global_theme(palette)

	def _apply_global_theme(self, palette: EditorPalette) -> None:
		bg = palette.background.name()
		fg = palette.foreground.name()
		accent = palette.keyword.name()
		stylesheet = f"""
QMainWindow {{ background-color: {bg}; }}
QMenuBar {{ background-color: {bg}; color: {fg}; }}
QMenuBar::item:selected {{ background: {accent}; }}
QMenu {{ background-color: {bg}; color: {fg}; }}
QMenu::item:selected {{ background: {accent}; }}
QStatusBar {{ background-color: {bg}; color: {fg}; }}
"""
		self.setStyleSheet(stylesheet)

	def _toggle_calltips(self, enabled: bool) -> None:
		self.editor.show_calltips = bool(enabled)
		self._settings["show_calltips"] = bool(enabled)
		self._save_settings()

	def set_tab_width(self, width) -> None:
		width = normalize_tab_width(width)
		self.editor.set_tab_width(width)
		self._settings["tab_width"] = width
		self._save_settings()

	def _ask_tab_width(self) -> None:
		width, ok = QInputDialog.getInt(self, "Tab Width", "Columns per level:", self.editor.tab_width, 1, 16)
		if ok:
			self.set_tab_width(width)

	def _reindent_buffer(self) -> None:
		changed = self.editor.reindent_buffer()
		self.status_bar.showMessage(f"Reindented {changed} line(s)", 3000)

	def _adjust_font_size(self, delta: int) -> None:
		self.editor.adjust_font_size(delta)
		self._settings["font_size"] = self.editor.font().pointSize()
		self._save_settings()

	def _reset_font_size(self) -> None:
		self.editor.reset_font_size()
		self._settings["font_size"] = self.editor.font().pointSize()
		self._save_settings()

	def _toggle_word_wrap(self, checked: bool) -> None:
		self.editor.set_word_wrap_enabled(bool(checked))
		self._settings["word_wrap"] = bool(checked)
		self._save_settings()

	def new_file(self) -> None:
		if not self._maybe_discard_changes():
			return
		self.editor.clear()
		self._current_file = None
		self._update_window_title()

	def open_file(self) -> None:
		if not self._maybe_discard_changes():
			return
		file_path, _ = QFileDialog.getOpenFileName(self, "Open File", str(Path.home()), FILE_FILTER)
		if file_path:
			self.load_path(Path(file_path))

	def load_path(self, path: Path) -> bool:
		try:
			text = path.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as exc:
			logger.warning("Could not open %s: %s", path, exc)
			QMessageBox.critical(self, "Open File", f"Could not open {path}:\n{exc}")
			return False
		self.editor.setPlainText(text)
		self._current_file = path
		self._update_window_title()
		return True

	def save_file(self) -> None:
		if self._current_file is None:
			self.save_file_as()
			return
		self._write_to_path(self._current_file)

	def save_file_as(self) -> None:
		file_path, _ = QFileDialog.getSaveFileName(self, "Save File As", str(Path.home()), FILE_FILTER)
		if file_path and self._write_to_path(Path(file_path)):
			self._current_file = Path(file_path)
			self._update_window_title()

	def closeEvent(self, event):
		if self._maybe_discard_changes():
			event.accept()
		else:
			event.ignore()

	def update_status(self, line: int, column: int) -> None:
		path = str(self._current_file) if self._current_file else "Untitled"
		self.status_bar.showMessage(f"{path} — Line {line}, Column {column}")

	def _maybe_discard_changes(self) -> bool:
		if not self.editor.document().isModified():
			return True
		response = QMessageBox.warning(
			self,
			"Unsaved Changes",
			"The document has unsaved changes. Do you want to continue without saving?",
			QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
			QMessageBox.StandardButton.No,
		)
		return response == QMessageBox.StandardButton.Yes

	def _write_to_path(self, path: Path) -> bool:
		try:
			path.write_text(self.editor.toPlainText(), encoding="utf-8")
		except OSError as exc:
			logger.warning("Could not save %s: %s", path, exc)
			QMessageBox.critical(self, "Save File", f"Could not save {path}:\n{exc}")
			return False
		self.editor.document().setModified(False)
		return True

	def _update_window_title(self) -> None:
		suffix = f" — {self._current_file.name}" if self._current_file else ""
		self.setWindowTitle(f"BlockPad{suffix}")
