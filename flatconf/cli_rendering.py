"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and flattened key/value listings.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
from typing import NoReturn

import typer
import yaml

from .errors import ConfigLoadError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ConfigLoadError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_pairs(pairs: Iterable[tuple[str, str]]) -> None:
    """Print `path => value` rows in the given order."""

    for path, value in pairs:
        typer.echo(f"{path} => {value}")


def render_mapping(values: dict[str, str], output_format: str) -> str:
    """Serialize a flattened mapping as `json` or `yaml` text."""

    if output_format == "json":
        return json.dumps(values, ensure_ascii=False, indent=2, sort_keys=True)
    if output_format == "yaml":
        return yaml.safe_dump(values, allow_unicode=True, sort_keys=True).rstrip("\n")
    raise ValueError(f"Unsupported output format `{output_format}`.")
