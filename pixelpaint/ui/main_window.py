"""
Main window for PixelPaint.

This module contains the main application window with the editor widget
and the menu bar.
"""

from typing import Optional

from PySide6.QtGui import QAction, QImage, QKeySequence
from PySide6.QtWidgets import QMainWindow, QWidget

from pixelpaint.editor.editor_widget import EditorWidget
from pixelpaint.services.config_service import ConfigService
from pixelpaint.services.image_service import ImageService
from pixelpaint.services.logging_service import get_logger


class MainWindow(QMainWindow):
    """
    Main application window for PixelPaint.

    Features:
    - Menu bar with File menu (open, save, paste, quit)
    - Editor widget with the canvas and the toolbar
    """

    def __init__(
        self,
        config_service: Optional[ConfigService] = None,
        image_service: Optional[ImageService] = None,
        parent: Optional[QWidget] = None
    ) -> None:
        """
        Initialize the MainWindow.

        Args:
            config_service: Optional config service for canvas and tool defaults.
            image_service: Optional image service for loading and saving.
            parent: Optional parent widget.
        """
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._config = config_service
        self._editor = EditorWidget(config_service, image_service, self)

        self._setup_window()
        self.setCentralWidget(self._editor)
        self._setup_menu_bar()

        self._logger.info("MainWindow initialized")

    def _setup_window(self) -> None:
        self.setWindowTitle("PixelPaint")
        self.setMinimumSize(640, 480)

    def _setup_menu_bar(self) -> None:
        """Create and configure the menu bar."""
        menu_bar = self.menuBar()

        # ─── File Menu ────────────────────────────────────────────────
        file_menu = menu_bar.addMenu("&File")

        open_action = QAction("&Open…", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.setStatusTip("Load a picture into the canvas")
        open_action.triggered.connect(self._editor.open_image)
        file_menu.addAction(open_action)

        save_action = QAction("&Save…", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.setStatusTip("Save the current picture")
        save_action.triggered.connect(self._editor.save_image)
        file_menu.addAction(save_action)

        paste_action = QAction("&Paste Image", self)
        paste_action.setShortcut(QKeySequence.StandardKey.Paste)
        paste_action.setStatusTip("Load the clipboard image or a copied data URL")
        paste_action.triggered.connect(self._editor.paste_image)
        file_menu.addAction(paste_action)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.setStatusTip("Exit the application")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    @property
    def editor(self) -> EditorWidget:
        return self._editor

    def load_image_in_editor(self, image: QImage, readable: bool = True) -> None:
        """Load an image, then show and raise the window."""
        self._editor.load_image(image, readable)
        self.show()
        self.raise_()
        self.activateWindow()
