"""Custom function registry and registration decorator."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar, overload

from .exceptions import RegistryError

CustomFunction = Callable[..., str]
"""A custom function receives its arguments as strings and returns CSS text."""

_F = TypeVar("_F", bound=CustomFunction)

_FORBIDDEN_NAME_CHARS = frozenset("(),;{}[] \t\n\r\f\"'")


def _validate(name: object, func: object) -> str:
    if not isinstance(name, str) or not name:
        raise RegistryError(f"Custom function name must be a non-empty string, got {name!r}")
    if _FORBIDDEN_NAME_CHARS.intersection(name):
        raise RegistryError(f"Invalid custom function name: {name!r}")
    if not callable(func):
        raise RegistryError(f"Custom function {name} is not callable: {func!r}")
    return name


class FunctionRegistry(Mapping[str, CustomFunction]):
    """Immutable mapping from function name to custom function.

    Names are matched case-sensitively against function calls in values,
    so ``--Shadow`` and ``--shadow`` are distinct functions. A registry is
    never changed after construction and can be shared between threads.
    """

    __slots__ = ("_functions",)

    def __init__(self, functions: Mapping[str, CustomFunction] | None = None) -> None:
        validated: dict[str, CustomFunction] = {}
        for name, func in (functions or {}).items():
            validated[_validate(name, func)] = func
        self._functions: Mapping[str, CustomFunction] = MappingProxyType(validated)

    @classmethod
    def from_registrations(cls) -> FunctionRegistry:
        """Snapshot the functions registered with @custom_function.

        Raises:
            RegistryError: If two functions were registered under one name
        """
        functions: dict[str, CustomFunction] = {}
        for reg in _registrations:
            if reg.name in functions:
                raise RegistryError(f"Custom function {reg.name} is registered more than once")
            functions[reg.name] = reg.func
        return cls(functions)

    def __getitem__(self, name: str) -> CustomFunction:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __repr__(self) -> str:
        return f"FunctionRegistry({sorted(self._functions)!r})"

    @property
    def names(self) -> list[str]:
        return list(self._functions)

    def mentioned_in(self, value: str) -> bool:
        """Return True if *value* textually contains ``name(`` for any name.

        This is only a pre-filter: a name inside a string or comment also
        counts as mentioned.
        """
        return any(f"{name}(" in value for name in self._functions)


def as_registry(functions: FunctionRegistry | Mapping[str, CustomFunction]) -> FunctionRegistry:
    """Wrap a plain mapping in a FunctionRegistry (registries pass through)."""
    if isinstance(functions, FunctionRegistry):
        return functions
    return FunctionRegistry(functions)


# ============================================================================
# Decorator registration (used by custom functions modules)
# ============================================================================


@dataclass(frozen=True, slots=True)
class FunctionRegistration:
    """Registration entry for a custom function."""

    name: str
    func: CustomFunction


_registrations: list[FunctionRegistration] = []


def default_name(func: Callable[..., object]) -> str:
    """Derive a function name from a Python name: ``drop_shadow`` -> ``--drop-shadow``."""
    return "--" + func.__name__.strip("_").replace("_", "-")


@overload
def custom_function(func: _F) -> _F: ...


@overload
def custom_function(name: str) -> Callable[[_F], _F]: ...


def custom_function(func: _F | str) -> _F | Callable[[_F], _F]:
    """Register a custom CSS function.

    The function is called with one string per argument of the CSS call,
    with surrounding whitespace removed, and must return the CSS text that
    replaces the call. Raising an exception leaves the call unchanged and
    reports the exception message as a warning.

    Examples:
        @custom_function
        def negative(value):
            # Registered as --negative
            return f"calc(-1 * {value})"

        @custom_function("--repeat")
        def repeat(count, value):
            return f"repeat({count}, {value})"
    """

    def register(name: str) -> Callable[[_F], _F]:
        def decorator(f: _F) -> _F:
            _registrations.append(FunctionRegistration(_validate(name, f), f))
            return f

        return decorator

    if isinstance(func, str):
        # Called with a name: @custom_function("--repeat")
        return register(func)
    # Called without arguments: @custom_function
    return register(default_name(func))(func)


def clear_registrations() -> None:
    """Clear all decorator registrations (called before loading a functions module)."""
    _registrations.clear()