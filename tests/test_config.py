"""Tests for configuration parsing and loading."""

from pathlib import Path

import pytest

from pantry import config
from pantry.config import (
    ConfigParseError,
    ConfigReadError,
    load_config,
    parse_config,
    parse_yaml_config,
)
from pantry.types import DisplayMode, SourceMode


class TestParseConfig:
    def test_empty_document(self):
        cfg = parse_config("")
        assert cfg.display == DisplayMode.TEXT
        assert cfg.source == SourceMode.CONFIG
        assert cfg.categories == {}

    def test_globals_and_categories(self):
        cfg = parse_config(
            'display = "picture"\n'
            'source = "command"\n'
            "\n"
            "[wallpapers]\n"
            '"Nature" = "~/Pictures/nature"\n'
            "\n"
            "[notes]\n"
            'display = "text"\n'
            'source = "config"\n'
            '"Todo" = "buy milk"\n'
        )
        assert cfg.display == DisplayMode.PICTURE
        assert cfg.source == SourceMode.COMMAND
        assert list(cfg.categories) == ["wallpapers", "notes"]

        wallpapers = cfg.categories["wallpapers"]
        assert wallpapers.display is None
        assert wallpapers.source is None
        assert wallpapers.entries == {"Nature": "~/Pictures/nature"}

        notes = cfg.categories["notes"]
        assert notes.display == DisplayMode.TEXT
        assert notes.source == SourceMode.CONFIG
        assert notes.entries == {"Todo": "buy milk"}

    def test_entries_keep_file_order(self):
        cfg = parse_config('[c]\nz = "1"\na = "2"\nm = "3"\n')
        assert list(cfg.categories["c"].entries) == ["z", "a", "m"]

    def test_dynamic_entry_key_is_list_command(self):
        cfg = parse_config('[docs]\nsource = "dynamic"\n"ls ~/docs" = "cat ~/docs/{}"\n')
        assert cfg.categories["docs"].entries == {"ls ~/docs": "cat ~/docs/{}"}

    def test_invalid_toml(self):
        with pytest.raises(ConfigParseError, match="invalid TOML"):
            parse_config("[unclosed")

    def test_duplicate_display_rejected(self):
        with pytest.raises(ConfigParseError):
            parse_config('display = "text"\ndisplay = "picture"\n')

    def test_category_must_be_table(self):
        with pytest.raises(ConfigParseError, match="must be a table"):
            parse_config('bookmarks = "oops"\n')

    def test_display_wrong_type(self):
        with pytest.raises(ConfigParseError, match="must be a string"):
            parse_config("display = 3\n")

    def test_display_unknown_value(self):
        with pytest.raises(ConfigParseError, match="Invalid display mode"):
            parse_config('display = "video"\n')

    def test_category_source_unknown_value(self):
        with pytest.raises(ConfigParseError, match="Invalid source mode"):
            parse_config('[c]\nsource = "shell"\n')

    def test_entry_must_be_string(self):
        with pytest.raises(ConfigParseError, match="entry c.count must be a string"):
            parse_config("[c]\ncount = 3\n")

    def test_nested_table_in_category_rejected(self):
        with pytest.raises(ConfigParseError):
            parse_config('[c.sub]\nx = "y"\n')


class TestParseYamlConfig:
    def test_same_shape_as_toml(self):
        cfg = parse_yaml_config(
            "display: picture\n"
            "wallpapers:\n"
            "  Nature: ~/Pictures/nature\n"
            "notes:\n"
            "  display: text\n"
            "  Todo: buy milk\n"
        )
        assert cfg.display == DisplayMode.PICTURE
        assert cfg.categories["wallpapers"].entries == {"Nature": "~/Pictures/nature"}
        assert cfg.categories["notes"].display == DisplayMode.TEXT

    def test_empty_document(self):
        assert parse_yaml_config("").categories == {}

    def test_duplicate_key_rejected(self):
        with pytest.raises(ConfigParseError, match="duplicate key"):
            parse_yaml_config("notes:\n  display: text\n  display: picture\n")

    def test_merge_key(self):
        cfg = parse_yaml_config(
            "base: &b\n"
            "  github: https://github.com\n"
            "work:\n"
            "  <<: *b\n"
            "  jira: https://jira\n"
        )
        assert cfg.categories["work"].entries == {
            "github": "https://github.com",
            "jira": "https://jira",
        }

    def test_explicit_key_overrides_merged(self):
        cfg = parse_yaml_config(
            "base: &b\n"
            "  github: https://github.com\n"
            "work:\n"
            "  <<: *b\n"
            "  github: https://github.example.com\n"
        )
        assert cfg.categories["work"].entries == {"github": "https://github.example.com"}

    def test_duplicate_next_to_merge_key_rejected(self):
        with pytest.raises(ConfigParseError, match="duplicate key"):
            parse_yaml_config(
                "base: &b\n"
                "  a: x\n"
                "work:\n"
                "  <<: *b\n"
                "  jira: one\n"
                "  jira: two\n"
            )

    def test_root_must_be_mapping(self):
        with pytest.raises(ConfigParseError, match="root must be a table"):
            parse_yaml_config("- a\n- b\n")

    def test_invalid_yaml(self):
        with pytest.raises(ConfigParseError, match="invalid YAML"):
            parse_yaml_config("notes: [unclosed, list\n")


class TestLoadConfig:
    def test_load_toml(self, write_config):
        path = write_config(
            """
            [links]
            "Site" = "https://example.com"
            """
        )
        cfg = load_config(path)
        assert cfg.categories["links"].entries == {"Site": "https://example.com"}

    def test_load_yaml_by_suffix(self, write_config):
        path = write_config("links:\n  Site: https://example.com\n", name="config.yaml")
        cfg = load_config(path)
        assert cfg.categories["links"].entries == {"Site": "https://example.com"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigReadError) as exc:
            load_config(tmp_path / "nope.toml")
        assert exc.value.path == tmp_path / "nope.toml"

    def test_parse_error_carries_path(self, write_config):
        path = write_config("display = 1\n")
        with pytest.raises(ConfigParseError) as exc:
            load_config(path)
        assert exc.value.path == path
        assert str(path) in str(exc.value)

    def test_accepts_string_path(self, write_config):
        path = write_config('[c]\nk = "v"\n')
        assert "c" in load_config(str(path)).categories


class TestConfigPaths:
    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("PANTRY_CONFIG", raising=False)
        assert config.get_config_dir() == tmp_path / "pantry"
        assert config.get_config_path() == tmp_path / "pantry" / "config.toml"

    def test_env_override(self, tmp_path, monkeypatch):
        target = tmp_path / "custom.yaml"
        monkeypatch.setenv("PANTRY_CONFIG", str(target))
        assert config.get_config_path() == Path(target)
