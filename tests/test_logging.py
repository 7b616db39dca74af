import logging

import pytest

from bookstore_api.app.core.logging_config import SERVER_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_levels():
    names = ("",) + SERVER_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_uvicorn_loggers_follow_configured_level():
    setup_logging("warning")
    for name in SERVER_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")
    assert logging.getLogger("uvicorn.access").level == logging.INFO


def test_existing_root_handlers_are_kept(monkeypatch):
    root = logging.getLogger()
    handler = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [handler])
    setup_logging("DEBUG")
    assert root.handlers == [handler]
