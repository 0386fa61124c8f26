"""
Application core for PixelPaint.

This module contains the AppCore class which is responsible for:
- Initializing all services (config, logging, images)
- Applying global styling (dark theme)
- Creating and showing the main window
- Opening an image passed on the command line

This is the central orchestration point for the application.
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject
from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

from pixelpaint.services.config_service import ConfigService
from pixelpaint.services.image_service import ImageService
from pixelpaint.services.logging_service import get_logger, set_log_level, setup_logging
from pixelpaint.ui.main_window import MainWindow


class AppCore(QObject):
    """
    Central application core that wires together all components.

    Responsibilities:
    - Initialize all services
    - Apply global dark theme
    - Create and show the MainWindow
    """

    def __init__(
        self,
        app: QApplication,
        config_service: Optional[ConfigService] = None,
        image_path: Optional[Path] = None
    ) -> None:
        """
        Initialize the application core.

        Args:
            app: The QApplication instance.
            config_service: Optional pre-built config service.
            image_path: Optional image to open at startup.
        """
        super().__init__()
        self._app = app
        self._config_service = config_service
        self._image_service: Optional[ImageService] = None
        self._main_window: Optional[MainWindow] = None

        self._init_services()
        self._apply_dark_theme()
        self._init_ui()

        if image_path is not None:
            self.open_image(image_path)

    def _init_services(self) -> None:
        """Initialize all application services."""
        if self._config_service is None:
            self._config_service = ConfigService()
        setup_logging()
        set_log_level(self._config_service.log_level)
        self._logger = get_logger(__name__)
        self._logger.info("Initializing PixelPaint application core...")

        self._image_service = ImageService()

    def _apply_dark_theme(self) -> None:
        """
        Apply a dark color palette to the application.

        Uses Qt's QPalette for a native-looking dark theme.
        """
        if self._config_service.theme != "dark":
            return

        palette = QPalette()

        palette.setColor(QPalette.ColorRole.Window, QColor(45, 45, 45))
        palette.setColor(QPalette.ColorRole.WindowText, QColor(220, 220, 220))
        palette.setColor(QPalette.ColorRole.Base, QColor(35, 35, 35))
        palette.setColor(QPalette.ColorRole.AlternateBase, QColor(50, 50, 50))
        palette.setColor(QPalette.ColorRole.Text, QColor(220, 220, 220))
        palette.setColor(QPalette.ColorRole.Button, QColor(55, 55, 55))
        palette.setColor(QPalette.ColorRole.ButtonText, QColor(220, 220, 220))
        palette.setColor(QPalette.ColorRole.Highlight, QColor(80, 120, 180))
        palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))

        palette.setColor(
            QPalette.ColorGroup.Disabled,
            QPalette.ColorRole.ButtonText,
            QColor(127, 127, 127)
        )

        self._app.setPalette(palette)
        self._logger.info("Dark theme applied")

    def _init_ui(self) -> None:
        """Create and show the main window."""
        self._main_window = MainWindow(self._config_service, self._image_service)
        self._main_window.show()
        self._logger.info("Main window shown")

    def open_image(self, path: Path) -> bool:
        """Load an image file into the editor."""
        image = self._image_service.load_file(path)
        if image is None:
            return False
        self._main_window.load_image_in_editor(image)
        return True

    # ─── Properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> ConfigService:
        """Get the configuration service."""
        if self._config_service is None:
            raise RuntimeError("ConfigService not initialized")
        return self._config_service

    @property
    def main_window(self) -> MainWindow:
        """Get the main window."""
        if self._main_window is None:
            raise RuntimeError("MainWindow not initialized")
        return self._main_window
