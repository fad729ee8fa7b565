import logging
import sys
from PySide6.QtWidgets import QApplication
from ui import MainWindow

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def main():
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
