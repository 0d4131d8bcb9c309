"""Diagnostics reported while expanding custom functions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class DiagnosticKind(Enum):
    """What went wrong at a call site."""

    SYNTAX = "syntax"  # the value or a callback result could not be parsed
    MALFORMED_ARGUMENTS = "malformed-arguments"  # empty argument between commas
    CALLBACK = "callback"  # the custom function raised or returned a non-string


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while transforming one declaration.

    ``declaration``, ``line`` and ``column`` are only known to the host that
    walks a stylesheet; the engine leaves them unset.
    """

    kind: DiagnosticKind
    message: str
    function: str | None = None
    declaration: str | None = None
    line: int | None = None
    column: int | None = None

    def at(self, declaration: str, line: int | None = None, column: int | None = None) -> Diagnostic:
        """Return a copy attributed to a declaration in a stylesheet."""
        return replace(self, declaration=declaration, line=line, column=column)

    def __str__(self) -> str:
        location = ""
        if self.line is not None:
            location = f"{self.line}:{self.column}: "
        if self.declaration:
            location += f"{self.declaration}: "
        return f"{location}{self.message}"
