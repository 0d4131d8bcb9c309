"""Configuration file (cssfn_config.yaml) loading.

Example:

    functions:
      module: my_project.css_functions
      # or: file: css_functions.py   (relative to this config file)
    strict: true
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigError

CONFIG_FILENAME = "cssfn_config.yaml"


class FunctionsConfig(BaseModel):
    """Where to load custom functions from."""

    model_config = ConfigDict(extra="forbid")

    module: str | None = None  # importable module path, e.g. "pkg.css_functions"
    file: Path | None = None  # Python file path

    def model_post_init(self, __context: Any) -> None:
        """Validate configuration after initialization."""
        if self.module and self.file:
            raise ValueError("functions.module and functions.file are mutually exclusive")


class CssfnConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="forbid")

    functions: FunctionsConfig = Field(default_factory=FunctionsConfig)
    strict: bool = False  # exit with an error status when any diagnostic is reported


def load_config(config_path: Path | str) -> CssfnConfig:
    """Load configuration from a YAML file.

    A relative ``functions.file`` is resolved against the config file's
    directory.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the YAML is malformed or fails validation
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return CssfnConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    try:
        config = CssfnConfig.model_validate(data)
    except ValueError as e:  # pydantic.ValidationError is a ValueError
        raise ConfigError(f"Invalid configuration in {config_path}:\n{e}") from e

    functions_file = config.functions.file
    if functions_file is not None and not functions_file.is_absolute():
        config.functions.file = config_path.parent / functions_file
    return config


def discover_config(
    input_path: Path | None = None, config_path: Path | None = None
) -> CssfnConfig | None:
    """Find and load the configuration file.

    Search order:
    1. Explicit config_path argument (must exist)
    2. Directory of input_path / cssfn_config.yaml
    3. Current directory / cssfn_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    candidates: list[Path] = []
    if input_path is not None:
        candidates.append(input_path.parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_config(candidate)
    return None
