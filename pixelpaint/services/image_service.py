"""
Image loading and export for PixelPaint.

Loading decodes files or raw bytes into QImages that the editor swaps into
its surface. Export reads the surface without changing it and is refused
when the surface pixels are locked.
"""

from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage, QImageReader

from pixelpaint.editor.surface import AccessDenied, PixelSurface
from pixelpaint.services.logging_service import get_logger


class ImageService:
    """Decode images for the editor and export the surface."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    @staticmethod
    def supported_formats() -> list:
        return [fmt.data().decode("ascii") for fmt in QImageReader.supportedImageFormats()]

    def file_filter(self) -> str:
        """Filter string for QFileDialog listing the readable formats."""
        patterns = " ".join(f"*.{fmt}" for fmt in self.supported_formats())
        return f"Images ({patterns});;All Files (*)"

    # ─── Loading ──────────────────────────────────────────────────────────

    def load_file(self, path: Union[str, Path]) -> Optional[QImage]:
        """
        Decode an image file.

        Returns:
            The image, or None if the file could not be read or decoded.
        """
        reader = QImageReader(str(path))
        image = reader.read()
        if image.isNull():
            self._logger.error(f"Could not load image {path}: {reader.errorString()}")
            return None

        self._logger.info(f"Loaded {path}: {image.width()}x{image.height()}")
        return image

    def load_bytes(self, data: bytes) -> Optional[QImage]:
        """Decode an in-memory encoded image (PNG, JPEG, ...)."""
        image = QImage()
        if not image.loadFromData(data):
            self._logger.error(f"Could not decode {len(data)} bytes of image data")
            return None
        return image

    def load_data_url(self, url: str) -> Optional[QImage]:
        """
        Decode a data:image/...;base64 URL, the form to_data_url produces.

        Returns:
            The image, or None if the URL is not a base64 image URL or the
            payload does not decode.
        """
        header, _, payload = url.strip().partition(",")
        if not header.startswith("data:image/") or not header.endswith(";base64") or not payload:
            self._logger.error(f"Not a base64 image data URL: {url[:40]!r}")
            return None
        data = QByteArray.fromBase64(payload.encode("ascii", errors="ignore")).data()
        return self.load_bytes(data)

    # ─── Export ───────────────────────────────────────────────────────────

    def encode_png(self, surface: PixelSurface) -> Union[bytes, AccessDenied]:
        snapshot = surface.snapshot()
        if isinstance(snapshot, AccessDenied):
            return snapshot

        array = QByteArray()
        buffer = QBuffer(array)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        snapshot.save(buffer, "PNG")
        buffer.close()
        return bytes(array.data())

    def to_data_url(self, surface: PixelSurface) -> Union[str, AccessDenied]:
        """Encode the surface as a data:image/png;base64 URL."""
        png = self.encode_png(surface)
        if isinstance(png, AccessDenied):
            self._logger.warning(f"Export refused: {png.reason}")
            return png
        encoded = QByteArray(png).toBase64().data().decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def save(self, surface: PixelSurface, path: Union[str, Path]) -> Union[bool, AccessDenied]:
        """
        Save the surface to disk; the format follows the file extension.

        Returns:
            True on success, False if writing failed, AccessDenied if the
            surface pixels are locked.
        """
        snapshot = surface.snapshot()
        if isinstance(snapshot, AccessDenied):
            self._logger.warning(f"Save refused: {snapshot.reason}")
            return snapshot

        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._logger.error(f"Could not create folder {path.parent}: {e}")
            return False

        if snapshot.save(str(path)):
            self._logger.info(f"Image saved to: {path}")
            return True

        self._logger.error(f"Failed to save image to: {path}")
        return False
