import logging

import pytest

from pixelpaint.services.logging_service import get_logger, parse_log_level, set_log_level


@pytest.mark.parametrize("value, expected", [
    ("DEBUG", logging.DEBUG),
    ("warning", logging.WARNING),
    (logging.ERROR, logging.ERROR),
    ("chatty", logging.INFO),
])
def test_parse_log_level(value, expected):
    assert parse_log_level(value) == expected


def test_set_log_level_updates_root_and_handlers():
    root = logging.getLogger()
    handler = logging.NullHandler()
    previous = root.level
    saved_handlers = root.handlers[:]
    root.handlers = [handler]
    try:
        set_log_level("ERROR")
        assert root.level == logging.ERROR
        assert handler.level == logging.ERROR
    finally:
        root.handlers = saved_handlers
        root.setLevel(previous)


def test_get_logger_uses_module_name():
    assert get_logger("pixelpaint.editor.tools").name == "pixelpaint.editor.tools"
