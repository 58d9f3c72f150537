# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the singerschema output configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".singerschema.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class OutputConfig:
    """Formatting options for normalized JSON output.

    Attributes:
        indent: Indentation width, or None for compact single-line output.
        sort_keys: Whether object keys are emitted in sorted order.
    """

    indent: int | None = None
    sort_keys: bool = False


def load_config(path: Path) -> OutputConfig:
    """Load and parse a singerschema configuration file.

    Args:
        path: Path to the ``.singerschema.yaml`` file.

    Returns:
        An OutputConfig populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def find_config(directory: Path) -> OutputConfig:
    """Load ``.singerschema.yaml`` from *directory*, or return defaults if there is none."""
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return OutputConfig()
    return load_config(path)


# ################
# Implementation
# ################

_OUTPUT_KEYS = {"indent", "sort-keys"}


def _parse_config(text: str, source_label: str = "<string>") -> OutputConfig:
    """Parse configuration YAML text into an OutputConfig.

    An empty document yields the defaults.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return OutputConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - {"output"})
    if unknown:
        raise ConfigError(f"{source_label}: unknown top-level key(s): {', '.join(map(str, unknown))}")

    output = data.get("output") or {}
    if not isinstance(output, dict):
        raise ConfigError(f"{source_label}: 'output' must be a YAML mapping")

    unknown = sorted(set(output) - _OUTPUT_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown key(s) in 'output': {', '.join(map(str, unknown))}")

    indent = output.get("indent")
    if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int) or indent < 0):
        raise ConfigError(f"{source_label}: 'output.indent' must be a non-negative integer or null")

    sort_keys = output.get("sort-keys", False)
    if not isinstance(sort_keys, bool):
        raise ConfigError(f"{source_label}: 'output.sort-keys' must be a boolean")

    return OutputConfig(indent=indent, sort_keys=sort_keys)
