"""Pytest configuration and fixtures for cssfn tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from cssfn import registry
from cssfn.logger import reset_logger
from cssfn.registry import FunctionRegistry


@pytest.fixture(autouse=True)
def clear_function_registrations() -> Iterator[None]:
    """Clear decorator registrations around each test for isolation."""
    registry.clear_registrations()
    yield
    registry.clear_registrations()
    reset_logger()


def _fail(*args: str) -> str:
    raise RuntimeError("custom function error")


@pytest.fixture
def functions() -> FunctionRegistry:
    """A registry with the functions used throughout the tests."""
    return FunctionRegistry(
        {
            "--negative": lambda value: f"calc(-1 * {value})",
            "--repeat": lambda count, value: f"repeat({count}, {value})",
            "--list": lambda: "10px, 20px",
            "--join": lambda *args: " ".join(args),
            "--count": lambda *args: str(len(args)),
            "--error": _fail,
        }
    )
