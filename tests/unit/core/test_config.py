"""Tests for Config loading."""

from pathlib import Path

import pytest

from checkvault.core.config import ChecklistConfig, Config
from checkvault.core.exceptions import ConfigError
from checkvault.core.types import BlockBoundary, SortDirection

_ENV_VARS = (
    "CHECKVAULT_VAULT",
    "CHECKVAULT_SETTINGS",
    "CHECKVAULT_LOG_LEVEL",
    "CHECKVAULT_DEBOUNCE",
    "CHECKVAULT_BOUNDARY",
    "CHECKVAULT_CONFIG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for default configuration."""

    def test_checklist_defaults(self):
        config = ChecklistConfig()

        assert config.sort_groups is SortDirection.NEW_TO_OLD
        assert config.block_boundary is BlockBoundary.SECTION
        assert config.debounce_seconds == 1.0
        assert config.auto_refresh is True

    def test_settings_path_under_xdg(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert Config().settings_path == tmp_path / "checkvault" / "settings.yaml"


class TestFromEnv:
    """Tests for Config.from_env."""

    def test_env_overrides(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CHECKVAULT_VAULT", str(tmp_path / "notes"))
        monkeypatch.setenv("CHECKVAULT_SETTINGS", str(tmp_path / "s.yaml"))
        monkeypatch.setenv("CHECKVAULT_LOG_LEVEL", "debug")
        monkeypatch.setenv("CHECKVAULT_DEBOUNCE", "0.5")
        monkeypatch.setenv("CHECKVAULT_BOUNDARY", "paragraph")

        config = Config.from_env()

        assert config.vault.path == tmp_path / "notes"
        assert config.settings_path == tmp_path / "s.yaml"
        assert config.log_level == "DEBUG"
        assert config.checklist.debounce_seconds == 0.5
        assert config.checklist.block_boundary is BlockBoundary.PARAGRAPH

    def test_invalid_boundary_raises(self, monkeypatch):
        monkeypatch.setenv("CHECKVAULT_BOUNDARY", "chapter")

        with pytest.raises(ConfigError):
            Config.from_env()

    def test_invalid_debounce_raises(self, monkeypatch):
        monkeypatch.setenv("CHECKVAULT_DEBOUNCE", "soon")

        with pytest.raises(ConfigError):
            Config.from_env()


class TestFromFile:
    """Tests for Config.from_file."""

    def test_nested_mappings(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "settings_path: /etc/checkvault.yaml\n"
            "vault:\n"
            "  path: /srv/notes\n"
            "  follow_symlinks: true\n"
            "checklist:\n"
            "  sort_groups: a->z\n"
            "  block_boundary: paragraph\n"
            "  debounce_seconds: 2.0\n"
        )

        config = Config.from_file(path)

        assert config.settings_path == Path("/etc/checkvault.yaml")
        assert config.vault.path == Path("/srv/notes")
        assert config.vault.follow_symlinks is True
        assert config.checklist.sort_groups is SortDirection.A_TO_Z
        assert config.checklist.block_boundary is BlockBoundary.PARAGRAPH
        assert config.checklist.debounce_seconds == 2.0

    def test_json_file(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"log_level": "INFO", "checklist": {"sort_items": "z->a"}}')

        config = Config.from_file(path)

        assert config.log_level == "INFO"
        assert config.checklist.sort_items is SortDirection.Z_TO_A

    def test_env_takes_precedence(self, monkeypatch, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("checklist:\n  debounce_seconds: 2.0\n")
        monkeypatch.setenv("CHECKVAULT_DEBOUNCE", "0.1")

        assert Config.from_file(path).checklist.debounce_seconds == 0.1

    def test_unknown_keys_ignored(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("colour: blue\nchecklist:\n  shape: round\n")

        config = Config.from_file(path)

        assert config.checklist == ChecklistConfig()

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert Config.from_file(path).checklist == ChecklistConfig()

    def test_invalid_sort_direction_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("checklist:\n  sort_groups: sideways\n")

        with pytest.raises(ConfigError, match="sort_groups"):
            Config.from_file(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            Config.from_file(tmp_path / "missing.yaml")

    def test_malformed_file_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("checklist: [unclosed")

        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n")

        with pytest.raises(ConfigError, match="mapping"):
            Config.from_file(path)

    def test_from_env_or_file_uses_env_path(self, monkeypatch, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: INFO\n")
        monkeypatch.setenv("CHECKVAULT_CONFIG", str(path))

        assert Config.from_env_or_file().log_level == "INFO"

    def test_from_env_or_file_without_file(self):
        assert Config.from_env_or_file().log_level == "WARNING"
