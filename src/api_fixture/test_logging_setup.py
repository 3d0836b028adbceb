"""
Unit tests for :mod:`api_fixture.logging_setup`.

pytest attaches its own capture handlers to the root logger for every test
phase, so each test swaps in an empty handler list inside the test body.
"""

import logging

import pytest

from api_fixture import logging_setup


def _bare_root(monkeypatch: pytest.MonkeyPatch) -> logging.Logger:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    return root


def test_console_handler_is_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    root = _bare_root(monkeypatch)

    logging_setup.configure_logging()

    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert root.level == logging.INFO


def test_debug_lowers_level(monkeypatch: pytest.MonkeyPatch) -> None:
    root = _bare_root(monkeypatch)

    logging_setup.configure_logging(debug=True)

    assert root.level == logging.DEBUG


def test_existing_handlers_are_kept(monkeypatch: pytest.MonkeyPatch) -> None:
    root = _bare_root(monkeypatch)
    handler = logging.NullHandler()
    root.handlers.append(handler)

    logging_setup.configure_logging(debug=True)

    assert root.handlers == [handler]
    assert root.level == logging.DEBUG
