"""Command-line interface for flatconf.

Responsibilities:
- Expose user-facing commands that parse a document and print its values.
- Convert CLI arguments, settings files and env vars into `ParserSettings`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_pairs, exit_with_command_error, render_mapping
from .config import ParserSettings, SettingsLoader, SettingsSources
from .errors import ConfigLoadError
from .loader import load_file
from .parser import iter_statements
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="flatconf",
    no_args_is_help=True,
    help="Flatten brace-nested configuration documents into key paths.",
)

_VALUE_TYPES: dict[str, type] = {"str": str, "int": int, "float": float, "bool": bool}


def _load_settings_file(settings_path: Path | None) -> ParserSettings:
    """Load a YAML settings file when requested and map failures to load errors."""

    if settings_path is None:
        return ParserSettings()

    try:
        return SettingsLoader.from_yaml(settings_path)
    except FileNotFoundError as exc:
        raise ConfigLoadError(
            stage="settings",
            detail=f"Settings file not found: `{settings_path}`.",
            hint="Provide an existing path via `--settings <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ConfigLoadError(
            stage="settings",
            detail=f"Invalid settings file `{settings_path}`: {exc}",
            hint="Fix settings keys/values and rerun.",
        ) from exc


def _resolve_settings(
    settings_path: Path | None,
    document: Path | None,
    delimiter: str | None,
    encoding: str | None,
    output_format: str | None = None,
    renders_output: bool = True,
) -> ParserSettings:
    """Resolve effective settings from the settings file, env and CLI overrides."""

    cli_values = {
        key: value
        for key, value in {
            "source_path": str(document) if document is not None else None,
            "delimiter": delimiter,
            "encoding": encoding,
            "output_format": output_format,
        }.items()
        if value is not None
    }
    base = _load_settings_file(settings_path)
    return base.resolved(
        SettingsSources(cli=cli_values, env=os.environ), renders_output=renders_output
    )


@app.command("dump")
def dump_command(
    document: Annotated[
        Path | None,
        typer.Argument(help="Path to the config document (default `config.txt`)."),
    ] = None,
    delimiter: Annotated[
        str | None,
        typer.Option(
            "--delimiter",
            "-d",
            help="Single-character field delimiter used instead of whitespace.",
        ),
    ] = None,
    encoding: Annotated[
        str | None, typer.Option("--encoding", help="Document text encoding.")
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", help="Output format: `text`, `json`, or `yaml`."),
    ] = None,
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", help="Path to YAML settings file."),
    ] = None,
    trace: Annotated[
        bool,
        typer.Option(
            "--trace",
            help="Print statements in document order, including overwritten ones.",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Write stage logs to stderr.")
    ] = False,
) -> None:
    """Parse a document and print every `path => value` pair."""

    try:
        settings = _resolve_settings(
            settings_path=settings_file,
            document=document,
            delimiter=delimiter,
            encoding=encoding,
            output_format=output_format,
        )
        run_logger = RunLogger() if verbose else None
        config = load_file(
            settings.source_path,
            delimiter=settings.delimiter,
            encoding=settings.encoding,
            run_logger=run_logger,
        )
    except Exception as exc:
        exit_with_command_error("dump", exc)

    if not config:
        return
    if trace:
        echo_pairs(iter_statements(config.raw_text, config.delimiter))
        return
    if settings.output_format == "text":
        echo_pairs(config)
        return
    typer.echo(render_mapping(config.as_dict(), settings.output_format))


@app.command("get")
def get_command(
    document: Annotated[Path, typer.Argument(help="Path to the config document.")],
    key: Annotated[str, typer.Argument(help="Slash-joined key path, e.g. `a/b/c`.")],
    value_type: Annotated[
        str, typer.Option("--type", "-t", help="Value type: `str`, `int`, `float`, `bool`.")
    ] = "str",
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail when the key is missing or not convertible."),
    ] = False,
    delimiter: Annotated[
        str | None,
        typer.Option("--delimiter", "-d", help="Single-character field delimiter."),
    ] = None,
    encoding: Annotated[
        str | None, typer.Option("--encoding", help="Document text encoding.")
    ] = None,
) -> None:
    """Print one value converted to the requested type."""

    try:
        resolved_type = _VALUE_TYPES.get(value_type.strip().lower())
        if resolved_type is None:
            supported = ", ".join(_VALUE_TYPES)
            raise ValueError(f"Unsupported `--type` value `{value_type}`; supported: {supported}.")
        settings = _resolve_settings(
            settings_path=None,
            document=document,
            delimiter=delimiter,
            encoding=encoding,
            renders_output=False,
        )
        config = load_file(
            settings.source_path,
            delimiter=settings.delimiter,
            encoding=settings.encoding,
        )
        if strict:
            value = config.require_value(key, resolved_type)
        else:
            value = config.get_value(key, resolved_type)
    except KeyError as exc:
        exit_with_command_error("get", ValueError(f"Key `{exc.args[0]}` not found."))
    except Exception as exc:
        exit_with_command_error("get", exc)

    if isinstance(value, bool):
        typer.echo("true" if value else "false")
        return
    typer.echo(value)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
