"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PACKAGE_NAME_PATTERN = re.compile(r"^[a-z]+(\.[a-z][a-z0-9]*)*$")


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Settings consumed by the generation pipeline."""

    # Target
    language: str = "java"
    package_name: str = "org.fusesource.camel.salesforce.dto"
    output_dir: str = "generated-sources/camel-salesforce"

    # Object selection
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None

    # Pinned timestamp for reproducible output
    generated_at: Optional[str] = None

    # Inherited field manifest override
    base_fields: Optional[List[str]] = None

    # Offline metadata dump used instead of Salesforce
    metadata_file: Optional[str] = None

    # Salesforce connection
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    version: str = "59.0"
    login_url: str = "https://login.salesforce.com"
    timeout: float = 60.0

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


_LIST_KEYS = ("includes", "excludes", "base_fields")


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["java"] = {
            "language": "java",
            "package_name": "org.fusesource.camel.salesforce.dto",
            "output_dir": "generated-sources/camel-salesforce",
        }

        self._configs["python"] = {
            "language": "python",
            "package_name": "salesforce.dto",
            "output_dir": "generated",
        }

    def get_config(self, language: Optional[str] = None,
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        The language is taken from the argument, the overrides or the file,
        in that order; its defaults are applied first.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        file_config = self._load_config_file(config_file) if config_file else {}
        overrides = {k: v for k, v in (custom_config or {}).items() if v is not None}

        language = (
            language
            or overrides.get("language")
            or file_config.get("language")
            or "java"
        ).lower()

        base_config = self._configs.get(language, {"language": language}).copy()
        base_config.update(file_config)
        base_config.update(overrides)
        base_config["language"] = language

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigurationError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        for key in _LIST_KEYS:
            value = config_args.get(key)
            if value is None:
                continue
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, (list, tuple)) or not all(
                isinstance(item, str) for item in value
            ):
                raise ConfigurationError(f"{key} must be a list of strings")
            config_args[key] = list(value)

        if "timeout" in config_args:
            try:
                config_args["timeout"] = float(config_args["timeout"])
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid timeout: {config_args['timeout']!r}"
                ) from e

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get('custom') or {})
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)


def validate_package_name(package_name: str) -> str:
    """
    Validate a dotted package name.

    Returns:
        The package name

    Raises:
        ConfigurationError: If the name is not lowercase dotted segments
    """
    if not package_name or not PACKAGE_NAME_PATTERN.fullmatch(package_name):
        raise ConfigurationError(f"Invalid package name {package_name!r}")
    return package_name


def package_path(config: GeneratorConfig) -> Path:
    """Directory receiving the generated sources for a configuration."""
    validate_package_name(config.package_name)
    return Path(config.output_dir).joinpath(*config.package_name.split("."))


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: Optional[str] = None,
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

