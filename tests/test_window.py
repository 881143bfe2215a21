import json
import sys

from PyQt5.QtWidgets import QApplication

from BlockPadWindow import BlockPadWindow


def _get_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    return app


def test_window_applies_stored_tab_width(tmp_path) -> None:
    _get_app()
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"tab_width": 2, "show_calltips": False}), encoding="utf-8")
    window = BlockPadWindow(settings_path=path)
    assert window.editor.tab_width == 2
    assert window.editor.show_calltips is False


def test_set_tab_width_is_persisted(tmp_path) -> None:
    _get_app()
    path = tmp_path / "settings.json"
    window = BlockPadWindow(settings_path=path)
    window.set_tab_width(3)
    assert window.editor.tab_width == 3
    assert json.loads(path.read_text(encoding="utf-8"))["tab_width"] == 3


def test_load_path_reads_script(tmp_path) -> None:
    _get_app()
    script = tmp_path / "demo.dsc"
    script.write_text("loop\n    x = 1\nend loop\n", encoding="utf-8")
    window = BlockPadWindow(settings_path=tmp_path / "settings.json")
    assert window.load_path(script)
    assert window.editor.toPlainText() == "loop\n    x = 1\nend loop\n"
    assert window.windowTitle() == "BlockPad — demo.dsc"


def test_broken_numeric_settings_still_open_window(tmp_path) -> None:
    _get_app()
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"font_size": "big", "calltip_timeout_ms": None, "tab_width": 4.0}), encoding="utf-8")
    window = BlockPadWindow(settings_path=path)
    assert window.editor.font().pointSize() == 13
    assert window.editor.calltip_timeout_ms == 2500
    assert type(window.editor.tab_width) is int


def test_reindent_buffer_reports_changed_lines(tmp_path) -> None:
    _get_app()
    window = BlockPadWindow(settings_path=tmp_path / "settings.json")
    window.editor.setPlainText("loop\nx = 1\nend loop")
    window._reindent_buffer()
    assert window.status_bar.currentMessage() == "Reindented 1 line(s)"
