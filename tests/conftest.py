"""Shared pytest fixtures for the full flatconf test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixture_paths import delimited_document_path, sample_document_path

CANONICAL_SAMPLE_TEXT = (
    'tag1 "value1"; tag2 10; tag3 1.5; container1 { subtag1 "subvalue1"; '
    'subtag2 10; subtag3 1.5; subcontainer1 { subsubtag1 "subsubvalue1"; } }'
)

CANONICAL_SAMPLE_VALUES = {
    "tag1": "value1",
    "tag2": "10",
    "tag3": "1.5",
    "container1/subtag1": "subvalue1",
    "container1/subtag2": "10",
    "container1/subtag3": "1.5",
    "container1/subcontainer1/subsubtag1": "subsubvalue1",
}


@pytest.fixture
def canonical_text() -> str:
    """Provide the canonical single-line sample document."""

    return CANONICAL_SAMPLE_TEXT


@pytest.fixture
def canonical_values() -> dict[str, str]:
    """Provide the flattened values expected from the canonical sample."""

    return dict(CANONICAL_SAMPLE_VALUES)


@pytest.fixture
def sample_document() -> Path:
    """Provide the multi-line sample document path."""

    return sample_document_path()


@pytest.fixture
def delimited_document() -> Path:
    """Provide the `=`-delimited sample document path."""

    return delimited_document_path()
