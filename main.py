"""BlockPad – launcher."""

import logging
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication
from BlockPadWindow import BlockPadWindow


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = BlockPadWindow()
    if len(sys.argv) > 1:
        window.load_path(Path(sys.argv[1]))
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    run()
