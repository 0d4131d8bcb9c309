"""Custom exceptions for cssfn."""

from __future__ import annotations


class CssfnError(Exception):
    """Base exception for all cssfn errors."""

    pass


class ValueSyntaxError(CssfnError):
    """Raised when a value cannot be tokenized or parsed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class MalformedArgumentsError(CssfnError):
    """Raised when a function call has an empty argument between commas."""

    pass


class RegistryError(CssfnError):
    """Raised when a custom function registration is invalid."""

    pass


class FunctionLoadError(CssfnError):
    """Raised when a custom functions module cannot be loaded."""

    pass


class ConfigError(CssfnError):
    """Raised when the configuration file is invalid."""

    pass
