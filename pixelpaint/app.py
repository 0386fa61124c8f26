"""
PixelPaint - A small raster paint program.

This is the main entry point for the application.
Run with: python -m pixelpaint.app [IMAGE]
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from pixelpaint import __version__
from pixelpaint.core.app_core import AppCore
from pixelpaint.services.logging_service import get_logger, setup_logging


# Global app reference for signal handlers
_app: Optional[QApplication] = None
_should_quit = False


def cleanup_and_quit(signum, frame):
    """Handle termination signals."""
    global _should_quit
    _should_quit = True


def check_for_quit():
    """Timer callback to check if we should quit."""
    if _should_quit and _app:
        get_logger(__name__).info("Signal received, quitting...")
        _app.quit()


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pixelpaint", description="Raster paint program")
    parser.add_argument("image", nargs="?", type=Path, help="image file to open")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for PixelPaint.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    global _app

    args = parse_args(sys.argv[1:] if argv is None else argv)

    # Initialize basic logging first to catch early errors
    setup_logging()
    logger = get_logger(__name__)

    try:
        logger.info("Starting PixelPaint...")

        _app = QApplication(sys.argv[:1])
        _app.setApplicationName("PixelPaint")
        _app.setOrganizationName("PixelPaint")
        _app.setApplicationVersion(__version__)

        signal.signal(signal.SIGINT, cleanup_and_quit)
        signal.signal(signal.SIGTERM, cleanup_and_quit)

        # Qt event loop blocks Python signals; poll for them
        quit_timer = QTimer()
        quit_timer.timeout.connect(check_for_quit)
        quit_timer.start(100)

        app_core = AppCore(_app, image_path=args.image)

        logger.info("PixelPaint initialization complete. Entering event loop...")
        exit_code = _app.exec()

        logger.info(f"PixelPaint exiting with code {exit_code}")
        return exit_code

    except Exception as e:
        logger.critical(f"Fatal error during startup: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
