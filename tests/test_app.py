"""
Tests for the command line and AppCore startup.

Verifies:
- The optional image argument is parsed as a path
- AppCore builds the window from the config and opens the startup image
"""
from pathlib import Path

import pytest
from PySide6.QtGui import QImage
from PySide6.QtWidgets import QApplication

from pixelpaint.app import parse_args
from pixelpaint.core import app_core as app_core_module
from pixelpaint.core.app_core import AppCore
from pixelpaint.editor.color import Color
from pixelpaint.services.config_service import ConfigService


def test_parse_args_image():
    assert parse_args(["picture.png"]).image == Path("picture.png")
    assert parse_args([]).image is None


def test_version_exits(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--version"])
    assert "pixelpaint" in capsys.readouterr().out


@pytest.fixture
def core_factory(qtbot, tmp_path, monkeypatch):
    monkeypatch.setattr(app_core_module, "setup_logging", lambda: None)
    monkeypatch.setattr(app_core_module, "set_log_level", lambda level: None)

    config = ConfigService(tmp_path / "config.json")
    config.set("theme", "light")
    config.set("canvas", {"width": 64, "height": 48})

    def _make(image_path=None):
        core = AppCore(QApplication.instance(), config, image_path)
        qtbot.addWidget(core.main_window)
        return core

    return _make


def test_window_uses_config(core_factory):
    core = core_factory()

    surface = core.main_window.editor.surface
    assert (surface.width, surface.height) == (64, 48)
    assert core.main_window.isVisible()


def test_startup_image_opened(core_factory, tmp_path):
    path = tmp_path / "start.png"
    image = QImage(7, 5, QImage.Format.Format_ARGB32)
    image.fill(0xFF00FF00)
    assert image.save(str(path))

    core = core_factory(path)

    surface = core.main_window.editor.surface
    assert (surface.width, surface.height) == (7, 5)
    assert surface.get_pixel(3, 3) == Color(0, 255, 0)


def test_missing_startup_image_keeps_blank_surface(core_factory, tmp_path):
    core = core_factory()

    assert core.open_image(tmp_path / "missing.png") is False
    assert core.main_window.editor.surface.width == 64
