"""Tests for configuration file loader."""
from __future__ import annotations

from pathlib import Path

import pytest

from license_auditor.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from license_auditor.exceptions import ConfigurationError
from license_auditor.models.config import AuditorConfig


class TestFindConfigFile:
    """Tests for find_config_file function."""

    def test_finds_yaml_extension(self, tmp_path: Path) -> None:
        """Test that .yaml extension is found."""
        config_file = tmp_path / ".license-auditor.yaml"
        config_file.write_text("allowed_licenses:\n  - MIT\n")

        assert find_config_file(tmp_path) == config_file

    def test_finds_yml_extension(self, tmp_path: Path) -> None:
        """Test that .yml extension is found."""
        config_file = tmp_path / ".license-auditor.yml"
        config_file.write_text("allowed_licenses:\n  - MIT\n")

        assert find_config_file(tmp_path) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Test that None is returned when no config file exists."""
        assert find_config_file(tmp_path) is None

    def test_yaml_takes_precedence_over_yml(self, tmp_path: Path) -> None:
        """Test that .yaml file takes precedence over .yml."""
        yaml_file = tmp_path / ".license-auditor.yaml"
        yml_file = tmp_path / ".license-auditor.yml"
        yaml_file.write_text("allowed_licenses:\n  - MIT\n")
        yml_file.write_text("allowed_licenses:\n  - Apache-2.0\n")

        assert find_config_file(tmp_path) == yaml_file

    def test_uses_cwd_when_no_root(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the working directory is searched by default."""
        config_file = tmp_path / ".license-auditor.yaml"
        config_file.write_text("allowed_licenses:\n  - MIT\n")
        monkeypatch.chdir(tmp_path)

        assert find_config_file() == config_file


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_loads_valid_config(self, tmp_path: Path) -> None:
        """Test loading a valid configuration file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "allowed_licenses:\n"
            "  - MIT\n"
            "  - Apache-2.0\n"
            "ignored_packages:\n"
            "  - '@company/internal'\n"
            "include_types: true\n"
        )

        result = load_config_file(config_file)
        assert isinstance(result, AuditorConfig)
        assert result.allowed_licenses == ["MIT", "Apache-2.0"]
        assert result.ignored_packages == ["@company/internal"]
        assert result.include_types is True

    def test_loads_config_with_overrides(self, tmp_path: Path) -> None:
        """Test loading configuration with license overrides."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "overrides:\n"
            "  some-package:\n"
            "    license: MIT\n"
            "    reason: Confirmed with maintainer\n"
        )

        result = load_config_file(config_file)
        assert result.overrides is not None
        assert result.overrides["some-package"].license == "MIT"
        assert result.overrides["some-package"].reason == "Confirmed with maintainer"

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        """Test that empty file returns default config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        result = load_config_file(config_file)
        assert result == AuditorConfig()

    def test_file_with_only_comments_returns_defaults(self, tmp_path: Path) -> None:
        """Test that file with only comments returns default config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("# This is a comment\n# Another comment\n")

        result = load_config_file(config_file)
        assert result.allowed_licenses is None
        assert result.include_types is False

    def test_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        """Test that invalid YAML syntax raises ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("allowed_licenses:\n  - MIT\n  invalid yaml here")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_file)
        assert "Invalid YAML syntax" in str(exc_info.value)
        assert str(config_file) in str(exc_info.value)

    def test_unknown_fields_raise_error(self, tmp_path: Path) -> None:
        """Test that unknown fields raise ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("unknown_field: value\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_file)
        assert "Invalid configuration" in str(exc_info.value)
        assert "unknown_field" in str(exc_info.value)

    def test_invalid_field_type_raises_error(self, tmp_path: Path) -> None:
        """Test that invalid field type raises ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("allowed_licenses: not_a_list\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_file)
        assert "allowed_licenses" in str(exc_info.value)

    def test_override_without_reason_raises_error(self, tmp_path: Path) -> None:
        """Test that overrides must carry a reason."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("overrides:\n  pkg:\n    license: MIT\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_file)
        assert "overrides.pkg.reason" in str(exc_info.value)

    def test_non_dict_root_raises_error(self, tmp_path: Path) -> None:
        """Test that YAML with non-dict root raises ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- item1\n- item2\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_file)
        assert "expected a mapping at root level" in str(exc_info.value)

    def test_unreadable_file_raises_error(self, tmp_path: Path) -> None:
        """Test that unreadable file raises ConfigurationError."""
        config_dir = tmp_path / "config.yaml"
        config_dir.mkdir()

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_dir)
        assert "Cannot read configuration file" in str(exc_info.value)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_from_custom_path(self, tmp_path: Path) -> None:
        """Test loading from a custom config path."""
        config_file = tmp_path / "custom-config.yaml"
        config_file.write_text("allowed_licenses:\n  - MIT\n")

        result = load_config(str(config_file))
        assert result.allowed_licenses == ["MIT"]

    def test_discovers_in_project_root(self, project_root: Path) -> None:
        """Test that the scanned project's config file is used."""
        (project_root / ".license-auditor.yml").write_text("allowed_licenses:\n  - ISC\n")

        result = load_config(project_root=project_root)
        assert result.allowed_licenses == ["ISC"]

    def test_returns_defaults_when_no_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that defaults are returned when no config file exists."""
        monkeypatch.chdir(tmp_path)

        result = load_config()
        assert result == AuditorConfig()

    def test_custom_path_overrides_discovery(self, project_root: Path) -> None:
        """Test that custom path takes precedence over auto-discovery."""
        (project_root / ".license-auditor.yaml").write_text("allowed_licenses:\n  - MIT\n")
        custom_config = project_root / "strict.yaml"
        custom_config.write_text("allowed_licenses:\n  - Apache-2.0\n")

        result = load_config(str(custom_config), project_root=project_root)
        assert result.allowed_licenses == ["Apache-2.0"]

    def test_invalid_discovered_config_raises_error(self, project_root: Path) -> None:
        """Test that invalid discovered config raises ConfigurationError."""
        (project_root / ".license-auditor.yaml").write_text("unknown_field: value\n")

        with pytest.raises(ConfigurationError):
            load_config(project_root=project_root)
