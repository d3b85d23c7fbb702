"""
Tests for configuration loading and validation.
"""

import json
from pathlib import Path

import pytest

from sobject_codegen.core.config import (
    ConfigManager,
    ConfigurationError,
    GeneratorConfig,
    load_config,
    package_path,
    validate_package_name,
)


@pytest.fixture
def manager():
    return ConfigManager()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "salesforce.json"
    path.write_text(
        json.dumps(
            {
                "package_name": "com.acme.crm",
                "includes": ["Account", "Contact"],
                "exclude_pattern": ".*History",
                "timeout": "30",
                "jackson_version": "2",
            }
        ),
        encoding="utf-8",
    )
    return path


class TestPackageName:
    """Tests for package name validation."""

    @pytest.mark.parametrize(
        "name", ["dto", "com.example.dto", "org.fusesource.camel.salesforce.dto", "a.b2c"]
    )
    def test_valid(self, name):
        assert validate_package_name(name) == name

    @pytest.mark.parametrize(
        "name", ["", "Com.example", "com..dto", "com.2dto", ".com", "com.", "com-example", "com.dto\n"]
    )
    def test_invalid(self, name):
        with pytest.raises(ConfigurationError):
            validate_package_name(name)

    def test_package_path(self):
        config = GeneratorConfig(package_name="com.example.dto", output_dir="build/src")

        assert package_path(config) == Path("build/src/com/example/dto")


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_java_defaults(self, manager):
        config = manager.get_config()

        assert config.language == "java"
        assert config.package_name == "org.fusesource.camel.salesforce.dto"
        assert config.output_dir == "generated-sources/camel-salesforce"
        assert config.version == "59.0"
        assert config.timeout == 60.0

    def test_python_defaults(self, manager):
        config = manager.get_config("Python")

        assert config.language == "python"
        assert config.package_name == "salesforce.dto"

    def test_file_merge(self, manager, config_file):
        config = manager.get_config(config_file=config_file)

        assert config.package_name == "com.acme.crm"
        assert config.includes == ["Account", "Contact"]
        assert config.exclude_pattern == ".*History"
        assert config.timeout == 30.0
        assert config.custom == {"jackson_version": "2"}

    def test_overrides_win_over_file(self, manager, config_file):
        config = manager.get_config(
            custom_config={"package_name": "com.acme.other", "includes": None},
            config_file=config_file,
        )

        assert config.package_name == "com.acme.other"
        # None overrides are ignored
        assert config.includes == ["Account", "Contact"]

    def test_language_from_file(self, manager, tmp_path):
        path = tmp_path / "python.json"
        path.write_text(json.dumps({"language": "python"}), encoding="utf-8")

        config = manager.get_config(config_file=path)

        assert config.language == "python"
        assert config.package_name == "salesforce.dto"

    def test_single_include_string(self, manager):
        config = manager.get_config(custom_config={"includes": "Account"})

        assert config.includes == ["Account"]

    def test_missing_file(self, manager, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            manager.get_config(config_file=tmp_path / "missing.json")

        assert "not found" in str(exc_info.value)

    def test_not_json_suffix(self, manager, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("language: java", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            manager.get_config(config_file=path)

    def test_invalid_json(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            manager.get_config(config_file=path)

    def test_not_an_object(self, manager, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            manager.get_config(config_file=path)

    def test_invalid_list(self, manager):
        with pytest.raises(ConfigurationError):
            manager.get_config(custom_config={"excludes": [1, 2]})

    def test_invalid_timeout(self, manager):
        with pytest.raises(ConfigurationError):
            manager.get_config(custom_config={"timeout": "soon"})


def test_load_config(config_file):
    config = load_config("java", {"output_dir": "out"}, config_file)

    assert config.output_dir == "out"
    assert config.package_name == "com.acme.crm"
