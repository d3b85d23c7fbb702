"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    ArtifactWriteError,
    EntityBindings,
    EnumBindings,
    GeneratorUtility,
    SObjectGenerator,
    write_artifact,
)
from .schema import (
    Catalog,
    FieldDescriptor,
    ObjectDescription,
    PicklistValue,
    convert_catalog_output,
    convert_describe_output,
)
from .naming import BASE_FIELDS_V1, ArtifactKind, NamingPolicy
from .types import TypeMapper, UnsupportedFieldType, strip_namespace
from .config import (
    ConfigManager,
    ConfigurationError,
    GeneratorConfig,
    load_config,
    package_path,
    validate_package_name,
)
from .templates import RenderError, TemplateEngine, create_template_engine

__all__ = [
    # Base generator interface
    "SObjectGenerator",
    "GeneratorUtility",
    "EntityBindings",
    "EnumBindings",
    "ArtifactWriteError",
    "write_artifact",
    # Schema system - core data structures
    "Catalog",
    "PicklistValue",
    "FieldDescriptor",
    "ObjectDescription",
    "convert_catalog_output",
    "convert_describe_output",
    # Naming and type mapping
    "BASE_FIELDS_V1",
    "ArtifactKind",
    "NamingPolicy",
    "TypeMapper",
    "UnsupportedFieldType",
    "strip_namespace",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigurationError",
    "load_config",
    "package_path",
    "validate_package_name",
    # Template system
    "TemplateEngine",
    "RenderError",
    "create_template_engine",
]
