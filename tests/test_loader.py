"""Tests for loading custom functions modules."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from cssfn.exceptions import FunctionLoadError
from cssfn.loader import load_functions
from cssfn.registry import FunctionRegistry

FUNCTIONS_SOURCE = textwrap.dedent(
    """
    from cssfn import custom_function


    @custom_function
    def negative(value):
        return f"calc(-1 * {value})"


    @custom_function("--repeat")
    def repeat_track(count, track):
        return f"repeat({count}, {track})"
    """
)


def write_functions(directory: Path, source: str, name: str = "functions.py") -> Path:
    path = directory / name
    path.write_text(source, encoding="utf-8")
    return path


class TestLoadFunctions:
    """Test building a registry from user code."""

    def test_load_file(self, tmp_path: Path) -> None:
        registry = load_functions(functions_file=write_functions(tmp_path, FUNCTIONS_SOURCE))
        assert sorted(registry) == ["--negative", "--repeat"]
        assert registry["--negative"]("1px") == "calc(-1 * 1px)"

    def test_load_module(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_functions(tmp_path, FUNCTIONS_SOURCE, "cssfn_test_functions_module.py")
        monkeypatch.syspath_prepend(str(tmp_path))
        registry = load_functions(functions_module="cssfn_test_functions_module")
        assert sorted(registry) == ["--negative", "--repeat"]

    def test_module_can_be_loaded_twice(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that an already imported module registers its functions again."""
        write_functions(tmp_path, FUNCTIONS_SOURCE, "cssfn_test_functions_twice.py")
        monkeypatch.syspath_prepend(str(tmp_path))
        load_functions(functions_module="cssfn_test_functions_twice")
        registry = load_functions(functions_module="cssfn_test_functions_twice")
        assert sorted(registry) == ["--negative", "--repeat"]

    def test_nothing_to_load(self) -> None:
        assert load_functions() == FunctionRegistry()

    def test_registrations_are_cleared_after_loading(self, tmp_path: Path) -> None:
        load_functions(functions_file=write_functions(tmp_path, FUNCTIONS_SOURCE))
        assert len(FunctionRegistry.from_registrations()) == 0

    def test_both_sources(self, tmp_path: Path) -> None:
        with pytest.raises(FunctionLoadError, match="both"):
            load_functions("some.module", tmp_path / "functions.py")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FunctionLoadError, match="not found"):
            load_functions(functions_file=tmp_path / "missing.py")

    def test_missing_module(self) -> None:
        with pytest.raises(FunctionLoadError):
            load_functions(functions_module="cssfn_no_such_module_anywhere")

    def test_error_while_importing(self, tmp_path: Path) -> None:
        path = write_functions(tmp_path, "raise RuntimeError('broken module')\n")
        with pytest.raises(FunctionLoadError, match="broken module"):
            load_functions(functions_file=path)

    def test_duplicate_names(self, tmp_path: Path) -> None:
        source = FUNCTIONS_SOURCE + textwrap.dedent(
            """

            @custom_function("--negative")
            def negative_again(value):
                return value
            """
        )
        with pytest.raises(FunctionLoadError, match="more than once"):
            load_functions(functions_file=write_functions(tmp_path, source))
