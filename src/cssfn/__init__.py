"""Custom CSS functions implemented in Python."""

from .diagnostics import Diagnostic, DiagnosticKind
from .engine import SubstitutionEngine, TransformResult, transform_value
from .exceptions import (
    ConfigError,
    CssfnError,
    FunctionLoadError,
    MalformedArgumentsError,
    RegistryError,
    ValueSyntaxError,
)
from .registry import CustomFunction, FunctionRegistry, clear_registrations, custom_function
from .stylesheet import StylesheetResult, process_stylesheet

__all__ = [
    "ConfigError",
    "CssfnError",
    "CustomFunction",
    "Diagnostic",
    "DiagnosticKind",
    "FunctionLoadError",
    "FunctionRegistry",
    "MalformedArgumentsError",
    "RegistryError",
    "StylesheetResult",
    "SubstitutionEngine",
    "TransformResult",
    "ValueSyntaxError",
    "clear_registrations",
    "custom_function",
    "process_stylesheet",
    "transform_value",
]
