"""Call custom functions and capture their failures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

from .logger import get_logger
from .registry import CustomFunction

logger = get_logger()


@dataclass(frozen=True)
class CallSuccess:
    """The custom function returned replacement CSS text."""

    value: str


@dataclass(frozen=True)
class CallFailure:
    """The custom function raised, or returned something other than a string."""

    message: str
    error: Exception | None = None


CallResult: TypeAlias = CallSuccess | CallFailure


def invoke(name: str, func: CustomFunction, arguments: Sequence[str]) -> CallResult:
    """Call *func* with one positional string per argument.

    Exceptions raised by user code never propagate out of this function;
    they come back as a CallFailure carrying the exception message.
    """
    try:
        value = func(*arguments)
    except Exception as e:  # noqa: BLE001 - any error from user code is reported, not raised
        logger.debug("%s() raised %s: %s", name, type(e).__name__, e)
        return CallFailure(str(e) or type(e).__name__, e)

    if not isinstance(value, str):
        return CallFailure(f"{name}() returned {type(value).__name__}, expected str")
    return CallSuccess(value)
