"""Unit tests for YAML/environment settings loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from flatconf.config import ParserSettings, SettingsLoader, SettingsSources


def test_settings_loader_from_yaml_loads_valid_settings(tmp_path: Path) -> None:
    """YAML loader should parse valid payloads and normalize blank/padded values."""

    settings_path = tmp_path / "flatconf.yml"
    settings_path.write_text(
        """
source_path: " docs/app.conf "
delimiter: "="
encoding: " latin-1 "
output_format: " JSON "
""".strip(),
        encoding="utf-8",
    )

    settings = SettingsLoader.from_yaml(settings_path)

    assert settings.source_path == Path("docs/app.conf")
    assert settings.delimiter == "="
    assert settings.encoding == "latin-1"
    assert settings.output_format == "json"


def test_settings_loader_from_yaml_uses_defaults_for_empty_file(tmp_path: Path) -> None:
    """An empty settings file should resolve to default settings."""

    settings_path = tmp_path / "empty.yml"
    settings_path.write_text("", encoding="utf-8")

    assert SettingsLoader.from_yaml(settings_path) == ParserSettings()


def test_settings_loader_from_yaml_decodes_tab_delimiter(tmp_path: Path) -> None:
    """Escaped delimiter spellings should resolve to the actual character."""

    settings_path = tmp_path / "tab.yml"
    settings_path.write_text("delimiter: tab\n", encoding="utf-8")

    assert SettingsLoader.from_yaml(settings_path).delimiter == "\t"


def test_settings_loader_from_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    """YAML loader should fail clearly on unknown fields."""

    settings_path = tmp_path / "unknown.yml"
    settings_path.write_text("source_path: a.conf\ncomments: true\n", encoding="utf-8")

    with pytest.raises(ValueError, match=r"unsupported key\(s\): comments"):
        SettingsLoader.from_yaml(settings_path)


def test_settings_loader_from_yaml_rejects_invalid_values(tmp_path: Path) -> None:
    """YAML loader should reject invalid delimiters, formats and root payloads."""

    bad_delimiter = tmp_path / "bad-delimiter.yml"
    bad_delimiter.write_text('delimiter: "=="\n', encoding="utf-8")
    with pytest.raises(ValueError, match="`delimiter` must be exactly one character"):
        SettingsLoader.from_yaml(bad_delimiter)

    bad_format = tmp_path / "bad-format.yml"
    bad_format.write_text("output_format: xml\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported `output_format` value `xml`"):
        SettingsLoader.from_yaml(bad_format)

    bad_root = tmp_path / "bad-root.yml"
    bad_root.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a top-level mapping"):
        SettingsLoader.from_yaml(bad_root)


def test_settings_loader_from_env_reads_flatconf_variables() -> None:
    """Environment loader should read `FLATCONF_*` variables."""

    settings = SettingsLoader.from_env(
        {
            "FLATCONF_FILE": " app.conf ",
            "FLATCONF_DELIMITER": ":",
            "FLATCONF_ENCODING": "utf-16",
            "FLATCONF_FORMAT": "yaml",
            "UNRELATED": "ignored",
        }
    )

    assert settings.source_path == Path("app.conf")
    assert settings.delimiter == ":"
    assert settings.encoding == "utf-16"
    assert settings.output_format == "yaml"


def test_settings_resolution_prefers_cli_over_env_over_file() -> None:
    """Resolution should apply `cli` > `env` > base values per key."""

    base = ParserSettings(source_path=Path("file.conf"), delimiter="=", output_format="json")

    resolved = base.resolved(
        SettingsSources(
            cli={"source_path": "cli.conf"},
            env={"FLATCONF_FILE": "env.conf", "FLATCONF_FORMAT": "yaml"},
        )
    )

    assert resolved.source_path == Path("cli.conf")
    assert resolved.output_format == "yaml"
    assert resolved.delimiter == "="
    assert resolved.encoding == "utf-8"


def test_settings_resolution_rejects_invalid_cli_delimiter() -> None:
    """CLI delimiters longer than one character should fail validation."""

    with pytest.raises(ValueError, match="exactly one character"):
        ParserSettings().resolved(SettingsSources(cli={"delimiter": "::"}))


def test_settings_resolution_can_skip_output_format_validation() -> None:
    """Read-only resolution should ignore an invalid output format."""

    sources = SettingsSources(env={"FLATCONF_FORMAT": "xml", "FLATCONF_DELIMITER": "="})

    resolved = ParserSettings().resolved(sources, renders_output=False)

    assert resolved.delimiter == "="
    with pytest.raises(ValueError, match="Unsupported `output_format` value `xml`"):
        ParserSettings().resolved(sources)
