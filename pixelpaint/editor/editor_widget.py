"""
Editor widget for PixelPaint - the main editor UI component.

This widget composes the complete editor interface:
- Canvas showing the pixel surface
- Toolbar below it with the tool selector, color button and brush size
- Status line with the surface dimensions

The widget owns the surface, the drawing context and the input channel,
and wires them into a ToolEngine.
"""

import random
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import (
    QApplication,
    QColorDialog,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pixelpaint.editor.canvas_view import CanvasView
from pixelpaint.editor.color import Color
from pixelpaint.editor.drag import InputChannel, PointerEvent
from pixelpaint.editor.engine import ToolEngine
from pixelpaint.editor.surface import AccessDenied, PixelSurface
from pixelpaint.editor.tools import ToolContext, create_tool_table
from pixelpaint.services.config_service import ConfigService
from pixelpaint.services.image_service import ImageService
from pixelpaint.services.logging_service import get_logger


DEFAULT_BRUSH_SIZES = [1, 2, 3, 5, 8, 12, 25, 35, 50, 75, 100]


class ColorButton(QPushButton):
    """Button that shows a color and opens color picker on click."""

    color_changed = Signal(QColor)

    def __init__(self, color: QColor = QColor(0, 0, 0), parent=None):
        super().__init__(parent)
        self._color = color
        self.setFixedSize(32, 32)
        self.clicked.connect(self._on_click)
        self._update_style()

    @property
    def color(self) -> QColor:
        return self._color

    @color.setter
    def color(self, value: QColor) -> None:
        self._color = value
        self._update_style()

    def _update_style(self) -> None:
        self.setToolTip(self._color.name())
        self.setStyleSheet(f"""
            QPushButton {{
                background-color: {self._color.name()};
                border: 2px solid #555;
                border-radius: 4px;
            }}
            QPushButton:hover {{
                border-color: #888;
            }}
        """)

    def _on_click(self) -> None:
        color = QColorDialog.getColor(self._color, self, "Select Color")
        if color.isValid():
            self._color = color
            self._update_style()
            self.color_changed.emit(color)


class EditorWidget(QWidget):
    """
    Toolbar plus canvas around one pixel surface.

    Signals:
        surface_loaded: Emitted with (width, height) after an image load.
    """

    surface_loaded = Signal(int, int)

    def __init__(
        self,
        config_service: Optional[ConfigService] = None,
        image_service: Optional[ImageService] = None,
        parent: Optional[QWidget] = None
    ) -> None:
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._config = config_service
        self._images = image_service or ImageService()

        width = config_service.canvas_width if config_service else 500
        height = config_service.canvas_height if config_service else 300
        self._surface = PixelSurface.blank(width, height)

        self._context = ToolContext()
        if config_service:
            self._context.color = Color.from_hex(config_service.default_color)
            self._context.brush_width = config_service.default_brush_width

        self._channel = InputChannel()
        self._canvas = CanvasView(self._surface, self._channel, self)

        spray_interval = config_service.spray_interval_ms if config_service else 25
        self._engine = ToolEngine(
            self._surface,
            self._context,
            create_tool_table(spray_interval),
            self._channel,
            self._canvas.reference_frame,
            prompt=self._prompt_text,
            rng=random.Random(),
            parent=self,
        )

        self._setup_ui()
        self._connect_signals()

        self._logger.info(f"Editor initialized with a {width}x{height} surface")

    # ─── UI Setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        layout.addWidget(self._canvas, 1)
        layout.addWidget(self._create_toolbar())

        self._status_label = QLabel()
        self._status_label.setStyleSheet("color: #aaa; padding: 4px 8px;")
        layout.addWidget(self._status_label)
        self._update_status()

    def _create_toolbar(self) -> QWidget:
        toolbar = QWidget(self)
        row = QHBoxLayout(toolbar)
        row.setContentsMargins(8, 6, 8, 6)
        row.setSpacing(8)

        # Tool selector
        self._tool_combo = QComboBox()
        self._tool_combo.addItems(self._engine.tool_names)
        if self._config and self._config.default_tool in self._engine.tools:
            self._tool_combo.setCurrentText(self._config.default_tool)
        row.addWidget(QLabel("Tool:"))
        row.addWidget(self._tool_combo)

        # Color
        self._color_button = ColorButton(self._context.color.to_qcolor())
        row.addWidget(QLabel("Color:"))
        row.addWidget(self._color_button)

        # Brush size
        sizes = self._config.brush_sizes if self._config else DEFAULT_BRUSH_SIZES
        self._brush_combo = QComboBox()
        for size in sizes:
            self._brush_combo.addItem(f"{size} pixels", size)
        index = self._brush_combo.findData(self._context.brush_width)
        if index >= 0:
            self._brush_combo.setCurrentIndex(index)
        row.addWidget(QLabel("Brush size:"))
        row.addWidget(self._brush_combo)

        row.addStretch(1)

        open_button = QPushButton("Open…")
        open_button.clicked.connect(self.open_image)
        row.addWidget(open_button)

        save_button = QPushButton("Save…")
        save_button.clicked.connect(self.save_image)
        row.addWidget(save_button)

        return toolbar

    def _connect_signals(self) -> None:
        self._canvas.pointer_pressed.connect(self._on_pointer_pressed)
        self._tool_combo.currentTextChanged.connect(self._on_tool_changed)
        self._color_button.color_changed.connect(self._on_color_changed)
        self._brush_combo.currentIndexChanged.connect(self._on_brush_changed)

        self._engine.surface_changed.connect(self._canvas.update)
        self._engine.preview_changed.connect(self._canvas.set_preview)
        self._engine.color_sampled.connect(self._on_color_sampled)
        self._engine.notice.connect(self._on_notice)

    # ─── Properties ───────────────────────────────────────────────────────

    @property
    def surface(self) -> PixelSurface:
        return self._surface

    @property
    def context(self) -> ToolContext:
        return self._context

    @property
    def engine(self) -> ToolEngine:
        return self._engine

    @property
    def canvas(self) -> CanvasView:
        return self._canvas

    @property
    def active_tool_name(self) -> str:
        return self._tool_combo.currentText()

    # ─── Slots ────────────────────────────────────────────────────────────

    @Slot(object)
    def _on_pointer_pressed(self, event: PointerEvent) -> None:
        self._engine.dispatch(event, self.active_tool_name)

    @Slot(str)
    def _on_tool_changed(self, name: str) -> None:
        tool = self._engine.tools.get(name)
        if tool is not None:
            self._canvas.setCursor(tool.cursor)
        self._logger.debug(f"Tool changed to {name}")

    @Slot(QColor)
    def _on_color_changed(self, color: QColor) -> None:
        self._context.color = Color.from_qcolor(color).with_alpha(255)

    @Slot(int)
    def _on_brush_changed(self, index: int) -> None:
        size = self._brush_combo.itemData(index)
        if size is not None:
            self._context.brush_width = int(size)

    @Slot(object)
    def _on_color_sampled(self, color: Color) -> None:
        self._color_button.color = QColor(color.hex_string)

    @Slot(str)
    def _on_notice(self, message: str) -> None:
        QMessageBox.warning(self, "PixelPaint", message)

    def _prompt_text(self, label: str) -> Optional[str]:
        text, ok = QInputDialog.getText(self, "Text", label)
        return text if ok else None

    def _update_status(self) -> None:
        readable = "" if self._surface.readable else " (pixels locked)"
        self._status_label.setText(
            f"{self._surface.width} × {self._surface.height}{readable}"
        )

    # ─── Images ───────────────────────────────────────────────────────────

    def load_image(self, image: QImage, readable: bool = True) -> None:
        """
        Replace the surface contents with a decoded image.

        The brush color and width in effect before the load are kept.
        """
        saved = self._context.snapshot()
        self._surface.replace(image, readable)
        self._context.restore(saved)

        self._canvas.set_preview(None)
        self._canvas.surface_resized()
        self._update_status()
        self.surface_loaded.emit(self._surface.width, self._surface.height)

    @Slot()
    def open_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Image", "", self._images.file_filter()
        )
        if not path:
            return

        image = self._images.load_file(path)
        if image is None:
            QMessageBox.warning(self, "PixelPaint", f"Could not open {Path(path).name}")
            return
        self.load_image(image)

    @Slot()
    def paste_image(self) -> None:
        """Load a clipboard image, or a data:image URL copied as text."""
        clipboard = QApplication.clipboard()
        mime = clipboard.mimeData()

        image = None
        if mime is not None and mime.hasImage():
            image = clipboard.image()
        elif mime is not None and mime.hasText() and mime.text().strip().startswith("data:image/"):
            image = self._images.load_data_url(mime.text())

        if image is None or image.isNull():
            QMessageBox.warning(self, "PixelPaint", "The clipboard does not hold an image")
            return
        self.load_image(image)

    @Slot()
    def save_image(self) -> None:
        folder = self._config.default_save_folder if self._config else str(Path.home())
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Image",
            str(Path(folder) / "picture.png"),
            "PNG Image (*.png);;JPEG Image (*.jpg *.jpeg);;All Files (*)",
        )
        if not path:
            return

        result = self._images.save(self._surface, path)
        if isinstance(result, AccessDenied):
            self._on_notice(result.reason)
        elif not result:
            QMessageBox.critical(self, "PixelPaint", f"Failed to save {path}")
