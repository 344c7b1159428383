"""Loading helpers that feed document text into the parser.

The parser works on in-memory text only; this module owns reading files,
decoding and stage logging around a parse.
"""

from __future__ import annotations

from pathlib import Path

from .document import ParsedConfig
from .errors import ConfigLoadError
from .telemetry.logger import RunLogger

DEFAULT_DOCUMENT_PATH = Path("config.txt")


def loads(text: str, delimiter: str | None = None) -> ParsedConfig:
    """Parse in-memory document text into a `ParsedConfig`."""

    return ParsedConfig(text, delimiter)


def read_document_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole document into memory and map failures to load errors."""

    try:
        return path.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise ConfigLoadError(
            stage="read",
            detail=f"Config document not found: `{path}`.",
            hint="Pass an existing document path or set `FLATCONF_FILE`.",
        ) from exc
    except IsADirectoryError as exc:
        raise ConfigLoadError(
            stage="read",
            detail=f"Config document path is a directory: `{path}`.",
            hint="Pass the path of a text file.",
        ) from exc
    except LookupError as exc:
        raise ConfigLoadError(
            stage="decode",
            detail=f"Unknown text encoding `{encoding}`.",
            hint="Use a Python codec name such as `utf-8` or `latin-1`.",
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigLoadError(
            stage="decode",
            detail=f"Failed to decode `{path}` as `{encoding}`: {exc.reason}.",
            hint="Pass the document encoding via `--encoding`.",
        ) from exc


def load_file(
    path: Path | str,
    delimiter: str | None = None,
    encoding: str = "utf-8",
    run_logger: RunLogger | None = None,
) -> ParsedConfig:
    """Read `path` fully and parse it into a `ParsedConfig`.

    Args:
        path: Document path.
        delimiter: Optional field delimiter; `None` selects whitespace mode.
        encoding: Text encoding of the document.
        run_logger: Optional logger for stage events.

    Raises:
        ConfigLoadError: If the document cannot be read or decoded.
    """

    document_path = Path(path)
    if run_logger is not None:
        run_logger.log_stage_start("read", path=document_path)
    try:
        text = read_document_text(document_path, encoding)
    except ConfigLoadError as exc:
        if run_logger is not None:
            run_logger.log_stage_failure(exc.stage, type(exc.__cause__).__name__)
        raise
    if run_logger is not None:
        run_logger.log_stage_complete("read", chars=len(text))
        run_logger.log_stage_start("parse", delimiter=delimiter or "whitespace")

    config = ParsedConfig(text, delimiter)

    if run_logger is not None:
        run_logger.log_stage_complete("parse", entries=len(config), valid=bool(config))
    return config


__all__ = ["DEFAULT_DOCUMENT_PATH", "load_file", "loads", "read_document_text"]
