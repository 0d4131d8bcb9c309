"""Tests for verbosity-controlled logging."""

from __future__ import annotations

import logging
from io import StringIO

import pytest

from cssfn import transform_value
from cssfn.logger import CHANGES, CHECKS, get_logger, setup_logger


@pytest.mark.parametrize(
    ("verbosity", "level"),
    [(0, logging.ERROR), (1, CHANGES), (2, CHECKS), (3, logging.DEBUG), (7, logging.DEBUG)],
)
def test_verbosity_levels(verbosity: int, level: int) -> None:
    setup_logger(verbosity)
    assert get_logger().level == level


def test_setup_replaces_handler() -> None:
    """Test that reconfiguring doesn't duplicate output."""
    stream = StringIO()
    setup_logger(1, stream)
    setup_logger(1, stream)
    get_logger().changes("once")
    assert stream.getvalue() == "once\n"


def test_changes_are_logged() -> None:
    """Test that rewritten values are reported at verbosity 1."""
    stream = StringIO()
    setup_logger(1, stream)
    transform_value("--negative(1px)", {"--negative": lambda v: f"calc(-1 * {v})"})
    assert "calc(-1 * 1px)" in stream.getvalue()
    assert "Calling" not in stream.getvalue()


def test_calls_are_logged() -> None:
    """Test that each call and its arguments are reported at verbosity 2."""
    stream = StringIO()
    setup_logger(2, stream)
    transform_value("--pair(a, b)", {"--pair": lambda a, b: a + b})
    assert "Calling --pair() with arguments ['a', 'b']" in stream.getvalue()


def test_failures_are_logged_at_debug() -> None:
    stream = StringIO()
    setup_logger(3, stream)
    transform_value("--boom()", {"--boom": lambda: 1 / 0})
    assert "--boom() raised ZeroDivisionError" in stream.getvalue()


def test_silent_by_default() -> None:
    stream = StringIO()
    setup_logger(0, stream)
    transform_value("--negative(1px)", {"--negative": lambda v: f"calc(-1 * {v})"})
    assert stream.getvalue() == ""
    assert get_logger().propagate is False
