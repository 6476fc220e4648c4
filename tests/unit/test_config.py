"""Tests for configuration loading and validation."""

import pytest

from stringbird.core.config import load_config, resolve_config_path, validate_config_file
from stringbird.core.exceptions import ConfigurationError
from stringbird.models.config import StringBirdConfig


class TestStringBirdConfig:
    """Tests for the StringBirdConfig model."""

    def test_defaults(self):
        config = StringBirdConfig()

        assert config.store_file == "stringbird"
        assert config.dialect == "tsx"
        assert config.encoding == "utf-8"
        assert config.sort_keys is True
        assert config.backup_dir == ".stringbird-backups"

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            StringBirdConfig(dialect="coffeescript")

    def test_unknown_encoding(self):
        with pytest.raises(ValueError, match="unknown encoding"):
            StringBirdConfig(encoding="no-such-codec")

    def test_empty_store_file(self):
        with pytest.raises(ValueError, match="must not be empty"):
            StringBirdConfig(store_file="  ")


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid_file(self, tmp_path):
        path = tmp_path / ".stringbird.yml"
        path.write_text("store_file: i18n/strings\ndialect: typescript\nsort_keys: false\n")

        config = validate_config_file(str(path))

        assert config.store_file == "i18n/strings"
        assert config.dialect == "typescript"
        assert config.sort_keys is False

    def test_empty_file_means_defaults(self, tmp_path):
        path = tmp_path / ".stringbird.yml"
        path.write_text("")

        assert validate_config_file(str(path)) == StringBirdConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            validate_config_file(str(tmp_path / "missing.yml"))

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not a file"):
            validate_config_file(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / ".stringbird.yml"
        path.write_text("store_file: [unclosed\n")

        with pytest.raises(ConfigurationError, match="YAML parsing failed"):
            validate_config_file(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / ".stringbird.yml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="YAML dictionary"):
            validate_config_file(str(path))

    def test_invalid_value(self, tmp_path):
        path = tmp_path / ".stringbird.yml"
        path.write_text("dialect: python\n")

        with pytest.raises(ConfigurationError, match="Validation failed"):
            validate_config_file(str(path))


class TestLoadConfig:
    """Tests for resolve_config_path and load_config."""

    def test_no_config_anywhere(self, project_dir):
        assert resolve_config_path() is None
        assert load_config() == StringBirdConfig()

    def test_discovers_file_in_working_directory(self, project_dir):
        (project_dir / ".stringbird.yml").write_text("store_file: from-cwd\n")

        assert load_config().store_file == "from-cwd"

    def test_env_var_beats_working_directory(self, project_dir, monkeypatch):
        (project_dir / ".stringbird.yml").write_text("store_file: from-cwd\n")
        env_config = project_dir / "env.yml"
        env_config.write_text("store_file: from-env\n")
        monkeypatch.setenv("STRINGBIRD_CONFIG", str(env_config))

        assert load_config().store_file == "from-env"

    def test_explicit_path_beats_env_var(self, project_dir, monkeypatch):
        env_config = project_dir / "env.yml"
        env_config.write_text("store_file: from-env\n")
        explicit = project_dir / "explicit.yml"
        explicit.write_text("store_file: from-flag\n")
        monkeypatch.setenv("STRINGBIRD_CONFIG", str(env_config))

        assert load_config(str(explicit)).store_file == "from-flag"

    def test_overrides_beat_file(self, project_dir):
        (project_dir / ".stringbird.yml").write_text("store_file: from-cwd\ndialect: typescript\n")

        config = load_config(store_file="from-cli", dialect=None)

        assert config.store_file == "from-cli"
        assert config.dialect == "typescript"

    def test_invalid_override(self, project_dir):
        with pytest.raises(ConfigurationError):
            load_config(dialect="python")
