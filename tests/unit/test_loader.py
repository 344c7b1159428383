"""Unit tests for document loading and stage logging."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from flatconf import load_file, loads
from flatconf.errors import ConfigLoadError
from flatconf.telemetry.logger import RunLogger


def test_load_file_parses_sample_document(
    sample_document: Path, canonical_values: dict[str, str]
) -> None:
    """Multi-line sample document should flatten like the canonical text."""

    config = load_file(sample_document)

    assert config.values == canonical_values
    assert config


def test_load_file_uses_custom_delimiter(delimited_document: Path) -> None:
    """Delimiter mode should apply when loading from disk."""

    config = load_file(delimited_document, delimiter="=")

    assert config.values == {
        "name": "flat conf",
        "port": "8080",
        "server/debug": "yes",
        "server/host": "localhost",
    }
    assert config.get_value("server/debug", bool) is True


def test_loads_matches_load_file(sample_document: Path) -> None:
    """In-memory and on-disk loading should agree."""

    text = sample_document.read_text(encoding="utf-8")

    assert loads(text) == load_file(sample_document)


def test_load_file_reports_missing_document(tmp_path: Path) -> None:
    """Missing documents should raise a stage-aware load error."""

    with pytest.raises(ConfigLoadError) as exc_info:
        load_file(tmp_path / "missing.conf")

    assert exc_info.value.stage == "read"
    assert "Config document not found" in exc_info.value.detail
    assert exc_info.value.hint


def test_load_file_reports_decode_failures(tmp_path: Path) -> None:
    """Undecodable bytes should raise a decode-stage load error."""

    document = tmp_path / "latin.conf"
    document.write_bytes('name "caf\xe9";'.encode("latin-1"))

    with pytest.raises(ConfigLoadError) as exc_info:
        load_file(document, encoding="utf-8")

    assert exc_info.value.stage == "decode"
    assert load_file(document, encoding="latin-1")["name"] == "caf\xe9"


def test_load_file_emits_stage_logs(sample_document: Path) -> None:
    """Stage logs should describe read and parse phases deterministically."""

    sink = io.StringIO()

    load_file(sample_document, run_logger=RunLogger(sink=sink))

    lines = sink.getvalue().splitlines()
    assert lines[0].startswith("[flatconf] level=INFO stage=read event=start path=")
    assert lines[1].startswith("[flatconf] level=INFO stage=read event=complete chars=")
    assert lines[2] == (
        "[flatconf] level=INFO stage=parse event=start delimiter=whitespace"
    )
    assert lines[3] == (
        "[flatconf] level=INFO stage=parse event=complete entries=7 valid=True"
    )


def test_load_file_logs_failure_stage(tmp_path: Path) -> None:
    """Read failures should be logged with the underlying error type."""

    sink = io.StringIO()

    with pytest.raises(ConfigLoadError):
        load_file(tmp_path / "missing.conf", run_logger=RunLogger(sink=sink))

    assert (
        "[flatconf] level=ERROR stage=read event=failure error_type=FileNotFoundError"
        in sink.getvalue()
    )
