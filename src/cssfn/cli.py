"""Command-line interface for cssfn."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer

from .config import CssfnConfig, discover_config
from .diagnostics import Diagnostic
from .engine import transform_value
from .exceptions import CssfnError
from .loader import load_functions
from .logger import setup_logger
from .registry import FunctionRegistry
from .stylesheet import process_stylesheet

app = typer.Typer(
    name="cssfn",
    help="Expand custom CSS functions implemented in Python",
    add_completion=False,
)


class _State:
    """Options given to the top-level command."""

    def __init__(self) -> None:
        self.config_path: Path | None = None


_state = _State()

FunctionsModuleOption = Annotated[
    str | None,
    typer.Option("--functions-module", "-m", help="Python module path defining custom functions"),
]
FunctionsFileOption = Annotated[
    Path | None,
    typer.Option("--functions-file", "-f", help="Python file path defining custom functions"),
]
StrictOption = Annotated[
    bool,
    typer.Option("--strict", help="Exit with status 1 if any warning is reported"),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show calls, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: cssfn_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for cssfn commands."""
    setup_logger(verbose)
    _state.config_path = config


@app.command()
def process(
    file: Annotated[Path, typer.Argument(help="Path to the stylesheet to process")],
    *,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
    functions_module: FunctionsModuleOption = None,
    functions_file: FunctionsFileOption = None,
    strict: StrictOption = False,
) -> None:
    """Expand custom functions in every declaration of a stylesheet."""
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    config = _load_config(file)
    registry = _load_registry(functions_module, functions_file, config)

    result = process_stylesheet(file.read_text(encoding="utf-8"), registry)
    _report_diagnostics(result.diagnostics, f"{file}:")

    if output:
        output.write_text(result.css, encoding="utf-8")
        typer.echo(f"Stylesheet written to {output} ({result.changed_declarations} changed)")
    else:
        typer.echo(result.css, nl=False)

    _exit_if_strict(result.diagnostics, strict, config)


@app.command()
def value(
    css_value: Annotated[
        str, typer.Argument(help="Declaration value; put it after -- when it starts with a dash")
    ],
    *,
    functions_module: FunctionsModuleOption = None,
    functions_file: FunctionsFileOption = None,
    strict: StrictOption = False,
) -> None:
    """Expand custom functions in a single declaration value."""
    config = _load_config(None)
    registry = _load_registry(functions_module, functions_file, config)

    result = transform_value(css_value, registry)
    _report_diagnostics(result.diagnostics)
    typer.echo(result.value if result.value is not None else css_value)

    _exit_if_strict(result.diagnostics, strict, config)


@app.command("list-functions")
def list_functions(
    *,
    functions_module: FunctionsModuleOption = None,
    functions_file: FunctionsFileOption = None,
) -> None:
    """List the custom functions that would be available."""
    config = _load_config(None)
    registry = _load_registry(functions_module, functions_file, config)
    if not registry:
        typer.echo("No custom functions registered", err=True)
        return
    for name in sorted(registry):
        typer.echo(name)


def _load_config(input_path: Path | None) -> CssfnConfig:
    try:
        config = discover_config(input_path, _state.config_path)
    except (CssfnError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    return config or CssfnConfig()


def _load_registry(
    functions_module: str | None, functions_file: Path | None, config: CssfnConfig
) -> FunctionRegistry:
    """Load functions from CLI options, falling back to the config file."""
    if functions_module and functions_file:
        typer.echo("Error: Cannot specify both --functions-module and --functions-file", err=True)
        raise typer.Exit(1)

    if not functions_module and not functions_file:
        functions_module = config.functions.module
        functions_file = config.functions.file

    try:
        return load_functions(functions_module, functions_file)
    except CssfnError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _report_diagnostics(diagnostics: Sequence[Diagnostic], prefix: str = "") -> None:
    for diagnostic in diagnostics:
        typer.echo(f"Warning: {prefix}{diagnostic}", err=True)


def _exit_if_strict(
    diagnostics: Sequence[Diagnostic], strict: bool, config: CssfnConfig
) -> None:
    if (strict or config.strict) and diagnostics:
        typer.echo(f"Error: {len(diagnostics)} warning(s) reported in strict mode", err=True)
        raise typer.Exit(1)


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
