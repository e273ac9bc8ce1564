"""Tests for the opt-in logging helper."""

from __future__ import annotations

import io
import logging

import pytest

from Cordlink.core.logging_config import LOGGER_GROUPS, configure_logging, set_group_level

_NAMES = ("Cordlink",) + tuple(name for names in LOGGER_GROUPS.values() for name in names)


@pytest.fixture
def restore_logging():
    loggers = [logging.getLogger(name) for name in _NAMES]
    saved = [(list(lg.handlers), lg.level, lg.propagate) for lg in loggers]
    yield
    for lg, (handlers, level, propagate) in zip(loggers, saved):
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


def test_rest_group_is_quiet_by_default(restore_logging) -> None:
    stream = io.StringIO()
    configure_logging(stream=stream, replace_handlers=True)

    logging.getLogger("Cordlink.core.bootstrap").info("bootstrap line")
    logging.getLogger("Cordlink.core.login").info("login line")
    logging.getLogger("Cordlink.core.rest").info("rest line")

    output = stream.getvalue()
    assert "bootstrap line" in output
    assert "login line" in output
    assert "rest line" not in output


def test_groups_are_tuned_independently(restore_logging) -> None:
    stream = io.StringIO()
    root = configure_logging(
        level="DEBUG",
        flow_level="WARNING",
        rest_level="DEBUG",
        with_source=True,
        stream=stream,
        replace_handlers=True,
    )

    logging.getLogger("Cordlink.core.bootstrap").info("bootstrap line")
    logging.getLogger("Cordlink.core.rest").debug("rest line")

    output = stream.getvalue()
    assert "bootstrap line" not in output
    assert "rest line" in output
    assert "rest.py" not in output
    assert "test_logging_config.py" in output
    assert root.propagate is False


def test_repeated_calls_do_not_stack_handlers(restore_logging) -> None:
    configure_logging(stream=io.StringIO(), replace_handlers=True)
    root = configure_logging(stream=io.StringIO())

    assert len([h for h in root.handlers if not isinstance(h, logging.NullHandler)]) == 1


def test_unknown_group_is_rejected() -> None:
    with pytest.raises(ValueError):
        set_group_level("gateway", "INFO")
