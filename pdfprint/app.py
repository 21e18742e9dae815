import sys

from PyQt5.QtWidgets import QApplication

from pdfprint.config import AppConfig
from pdfprint.ui.windows import MainWindow
from pdfprint.utils import setup_logging


def main():
    """
    Main function to run the PDF viewer application.
    It checks for a file path passed as a command-line argument.
    """
    config = AppConfig.from_env()
    setup_logging(config.log_level, config.log_file)

    app = QApplication(sys.argv)
    app.setApplicationName("PDFPrint")

    file_path = None
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    window = MainWindow(file_path, config=config)
    window.show()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
