"""
Tests for the generator registry.
"""

import pytest

from sobject_codegen.core.config import GeneratorConfig
from sobject_codegen.languages.java import JavaGenerator
from sobject_codegen.languages.python import PythonGenerator
from sobject_codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


class TestGeneratorRegistry:
    """Tests for GeneratorRegistry."""

    @pytest.fixture
    def registry(self):
        registry = GeneratorRegistry()
        registry.register("java", JavaGenerator, aliases=["jvm"])
        return registry

    def test_resolve_alias(self, registry):
        assert registry.resolve_language("JVM") == "java"
        assert registry.get_generator_class("jvm") is JavaGenerator

    def test_unknown_language(self, registry):
        with pytest.raises(RegistryError) as exc_info:
            registry.resolve_language("cobol")

        assert "java" in str(exc_info.value)

    def test_register_non_generator(self, registry):
        with pytest.raises(RegistryError):
            registry.register("text", str)

    def test_alias_conflict(self, registry):
        with pytest.raises(RegistryError):
            registry.register("python", PythonGenerator, aliases=["jvm"])

    def test_register_existing_is_skipped(self, registry):
        registry.register("java", PythonGenerator)

        assert registry.get_generator_class("java") is JavaGenerator

    def test_create_generator_from_dict(self, registry):
        generator = registry.create_generator("java", {"package_name": "com.acme"})

        assert generator.config.package_name == "com.acme"

    def test_create_generator_invalid_config(self, registry):
        with pytest.raises(RegistryError):
            registry.create_generator("java", 42)


class TestGlobalRegistry:
    """Tests for the built-in registrations."""

    def test_languages(self):
        assert list_supported_languages() == ["java", "python"]
        assert is_language_supported("py") is True
        assert is_language_supported("go") is False

    def test_get_generator(self):
        config = GeneratorConfig(language="python", package_name="crm.dto")
        generator = get_generator("py", config)

        assert isinstance(generator, PythonGenerator)
        assert generator.config is config

    def test_language_info(self):
        info = get_language_info("java")

        assert info["file_extension"] == ".java"
        assert info["aliases"] == ["jvm"]
        assert info["default_package"] == "org.fusesource.camel.salesforce.dto"
        assert get_language_info("python")["default_package"] == "salesforce.dto"
