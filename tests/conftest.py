import os

# Qt-тесты запускаются без дисплея
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import sys

import pytest
from PyQt5.QtWidgets import QApplication


@pytest.fixture(scope="session", autouse=True)
def qapp():
    # Держим один QApplication на всю сессию, иначе его соберёт GC
    app = QApplication.instance() or QApplication(sys.argv)
    yield app
