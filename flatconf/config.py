"""Settings model and loaders for flatconf commands.

Responsibilities:
- Define parser/command settings as a typed dataclass.
- Provide deterministic precedence resolution (`cli` > `env` > file/defaults).
- Provide loader entry points for YAML- and environment-based settings.

Key types:
- `ParserSettings`: normalized settings for one parse run.
- `SettingsSources`: optional value sources for precedence resolution.
- `SettingsLoader`: static construction helpers for `ParserSettings`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .conversion import normalize_optional_string
from .loader import DEFAULT_DOCUMENT_PATH

_DEFAULT_ENCODING = "utf-8"
_DEFAULT_OUTPUT_FORMAT = "text"
SUPPORTED_OUTPUT_FORMATS = frozenset({"text", "json", "yaml"})

_ENV_KEYS = {
    "source_path": "FLATCONF_FILE",
    "delimiter": "FLATCONF_DELIMITER",
    "encoding": "FLATCONF_ENCODING",
    "output_format": "FLATCONF_FORMAT",
}


@dataclass(frozen=True, slots=True)
class SettingsSources:
    """Source mappings used for deterministic settings precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ParserSettings:
    """Settings for reading, parsing and rendering one document.

    Attributes:
        source_path: Document path to read.
        delimiter: Optional single-character field delimiter.
        encoding: Text encoding of the document.
        output_format: Rendering format for `dump` (`text`, `json`, `yaml`).
    """

    source_path: Path = DEFAULT_DOCUMENT_PATH
    delimiter: str | None = None
    encoding: str = _DEFAULT_ENCODING
    output_format: str = _DEFAULT_OUTPUT_FORMAT

    def validate(self) -> None:
        """Validate settings values before a run."""

        self.validate_reading()
        if self.output_format not in SUPPORTED_OUTPUT_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_OUTPUT_FORMATS))
            raise ValueError(
                f"Unsupported `output_format` value `{self.output_format}`; "
                f"supported: {supported}."
            )

    def validate_reading(self) -> None:
        """Validate only the values used to read and parse a document."""

        if self.delimiter is not None and len(self.delimiter) != 1:
            raise ValueError("`delimiter` must be exactly one character.")
        if not self.encoding.strip():
            raise ValueError("`encoding` must be a non-empty string.")

    def resolved(
        self, sources: SettingsSources | None = None, *, renders_output: bool = True
    ) -> ParserSettings:
        """Resolve settings with deterministic source precedence.

        Precedence for each key is `cli` > `env` > current field value. When
        `renders_output` is false, `output_format` is not validated.
        """

        resolved_sources = sources if sources is not None else SettingsSources()

        source_path = self._resolve_value("source_path", resolved_sources)
        delimiter = self._resolve_delimiter(resolved_sources)
        encoding = self._resolve_value("encoding", resolved_sources)
        output_format = self._resolve_value("output_format", resolved_sources)

        resolved = replace(
            self,
            source_path=Path(source_path) if source_path is not None else self.source_path,
            delimiter=delimiter,
            encoding=encoding or self.encoding,
            output_format=(output_format or self.output_format).lower(),
        )
        if renders_output:
            resolved.validate()
        else:
            resolved.validate_reading()
        return resolved

    def _resolve_value(self, key: str, sources: SettingsSources) -> str | None:
        """Resolve one optional value from `cli`, then `env` sources."""

        cli_value = normalize_optional_string(sources.cli.get(key))
        if cli_value is not None:
            return cli_value
        return normalize_optional_string(sources.env.get(_ENV_KEYS[key]))

    def _resolve_delimiter(self, sources: SettingsSources) -> str | None:
        """Resolve the delimiter without stripping whitespace delimiters."""

        for value in (sources.cli.get("delimiter"), sources.env.get(_ENV_KEYS["delimiter"])):
            if value:
                return _decode_delimiter(value)
        return self.delimiter


def _decode_delimiter(value: str) -> str:
    """Translate escaped delimiter spellings like `\\t` into the character."""

    escapes = {"\\t": "\t", "\\n": "\n", "tab": "\t", "space": " "}
    return escapes.get(value, value)


class SettingsLoader:
    """Factory methods for creating `ParserSettings` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset({"source_path", "delimiter", "encoding", "output_format"})

    @staticmethod
    def from_yaml(path: Path) -> ParserSettings:
        """Create validated settings from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = SettingsLoader._parse_yaml_payload(path_text, path)
        return SettingsLoader._build_settings_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ParserSettings:
        """Create validated settings from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return ParserSettings().resolved(SettingsSources(env=env_map))

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML settings `{path}` are not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML settings `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_settings_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ParserSettings:
        """Build validated settings from a normalized mapping payload."""

        unknown = sorted(set(payload).difference(SettingsLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        source_path = normalize_optional_string(payload.get("source_path"))
        delimiter = SettingsLoader._optional_delimiter(payload, source_label)
        encoding = normalize_optional_string(payload.get("encoding")) or _DEFAULT_ENCODING
        output_format = (
            normalize_optional_string(payload.get("output_format")) or _DEFAULT_OUTPUT_FORMAT
        )

        settings = ParserSettings(
            source_path=Path(source_path) if source_path is not None else DEFAULT_DOCUMENT_PATH,
            delimiter=delimiter,
            encoding=encoding,
            output_format=output_format.lower(),
        )
        settings.validate()
        return settings

    @staticmethod
    def _optional_delimiter(payload: Mapping[str, Any], source_label: str) -> str | None:
        """Read an optional delimiter; whitespace delimiters are kept verbatim."""

        value = payload.get("delimiter")
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise ValueError(f"{source_label} `delimiter` must be a string.")
        return _decode_delimiter(value)


__all__ = [
    "SUPPORTED_OUTPUT_FORMATS",
    "ParserSettings",
    "SettingsLoader",
    "SettingsSources",
]
