"""
PixelPaint - A small raster paint program built on Qt.

This package contains the main application modules:
- core: Application core and wiring
- ui: Main window
- editor: Pixel surface, tools, flood fill and the canvas widgets
- services: Application services (config, logging, images)
"""

__version__ = "0.1.0"
