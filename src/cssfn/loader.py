"""Load custom functions from a user module or file."""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from .exceptions import CssfnError, FunctionLoadError
from .logger import get_logger
from .registry import FunctionRegistry, clear_registrations

logger = get_logger()


def _import_module(module_name: str) -> ModuleType:
    # Re-run an already imported module so its decorators register again
    if module_name in sys.modules:
        return importlib.reload(sys.modules[module_name])
    return importlib.import_module(module_name)


def _exec_file(path: Path) -> ModuleType:
    functions_path = path.resolve()
    if not functions_path.exists():
        raise FunctionLoadError(f"Functions file not found: {path}")
    spec = importlib.util.spec_from_file_location("cssfn_user_functions", functions_path)
    if spec is None or spec.loader is None:
        raise FunctionLoadError(f"Could not load functions file: {path}")
    user_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(user_module)
    return user_module


def load_functions(
    functions_module: str | None = None, functions_file: Path | None = None
) -> FunctionRegistry:
    """Import a module of @custom_function definitions and return their registry.

    Exactly one of *functions_module* (a dotted import path) or
    *functions_file* (a Python file) may be given; with neither, the
    registry is empty.

    Raises:
        FunctionLoadError: If the module can't be imported or registers
            invalid or duplicate functions
    """
    if functions_module and functions_file:
        raise FunctionLoadError("Cannot load functions from both a module and a file")

    clear_registrations()
    try:
        if functions_module:
            _import_module(functions_module)
        elif functions_file:
            _exec_file(functions_file)
        registry = FunctionRegistry.from_registrations()
    except FunctionLoadError:
        raise
    except CssfnError as e:
        raise FunctionLoadError(str(e)) from e
    except Exception as e:
        source = functions_module or functions_file
        raise FunctionLoadError(f"Error loading custom functions from {source}: {e}") from e
    finally:
        clear_registrations()

    logger.checks("Loaded custom functions: %s", ", ".join(registry.names) or "(none)")
    return registry
