"""Tests for persistence safety features (backups, atomic writes, corruption handling)."""

import json
from pathlib import Path

import pytest

from ledmapper.exceptions import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from ledmapper.models import AppConfig
from ledmapper.utils import PydanticPersistence


class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    def test_save_creates_backup(self, tmp_path: Path):
        """Test that save_json creates a .bak file before overwriting."""
        config_path = tmp_path / "config.json"

        PydanticPersistence.save_json(AppConfig(host="first.local"), config_path, backup=False)
        PydanticPersistence.save_json(AppConfig(host="second.local"), config_path, backup=True)

        backup_path = config_path.with_suffix(".json.bak")
        assert backup_path.exists()
        assert PydanticPersistence.load_json(backup_path, AppConfig).host == "first.local"
        assert PydanticPersistence.load_json(config_path, AppConfig).host == "second.local"

    def test_save_without_backup(self, tmp_path: Path):
        """Test that backup can be disabled."""
        config_path = tmp_path / "config.json"

        PydanticPersistence.save_json(AppConfig(), config_path, backup=False)
        PydanticPersistence.save_json(AppConfig(layout_spacing=10), config_path, backup=False)

        assert not config_path.with_suffix(".json.bak").exists()

    def test_atomic_write_cleans_up_temp_file(self, tmp_path: Path):
        """Test that temporary file is cleaned up after successful write."""
        config_path = tmp_path / "nested" / "config.json"

        PydanticPersistence.save_json(AppConfig(request_timeout=2.5), config_path)

        assert not config_path.with_suffix(".json.tmp").exists()
        assert PydanticPersistence.load_json(config_path, AppConfig).request_timeout == 2.5

    def test_load_missing_file_raises(self, tmp_path: Path):
        """Test load_json on a missing file."""
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "missing.json", AppConfig)

    def test_load_or_default_missing_file(self, tmp_path: Path):
        """Test load_or_default with missing file does not create it."""
        config_path = tmp_path / "missing.json"

        result = PydanticPersistence.load_or_default(config_path, AppConfig)

        assert result == AppConfig()
        assert not config_path.exists()

    def test_load_or_default_with_default_factory(self, tmp_path: Path):
        """Test custom default factory."""
        result = PydanticPersistence.load_or_default(
            tmp_path / "missing.json",
            AppConfig,
            default_factory=lambda: AppConfig(host="factory.local"),
        )
        assert result.host == "factory.local"

    def test_corrupted_file_raises(self, tmp_path: Path):
        """Test that invalid JSON raises instead of falling back to defaults."""
        config_path = tmp_path / "corrupted.json"
        config_path.write_text("{ invalid }", encoding="utf-8")

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PydanticPersistence.load_or_default(config_path, AppConfig)
        assert exc_info.value.file_path == str(config_path)
        assert config_path.read_text() == "{ invalid }"

    def test_empty_file_raises(self, tmp_path: Path):
        """Test that an empty file is reported as invalid."""
        config_path = tmp_path / "empty.json"
        config_path.write_text("  \n", encoding="utf-8")

        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_json(config_path, AppConfig)

    def test_invalid_value_raises(self, tmp_path: Path):
        """Test that a schema violation names the field."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"layout_spacing": -5}), encoding="utf-8")

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_or_default(config_path, AppConfig)
        assert exc_info.value.field == "layout_spacing"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_several_invalid_values(self, tmp_path: Path):
        """Test that several schema violations are reported together."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"layout_spacing": -5, "request_timeout": "soon"}), encoding="utf-8"
        )

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(config_path, AppConfig)
        assert exc_info.value.field == "multiple fields"
        assert "2 validation errors" in exc_info.value.user_message
