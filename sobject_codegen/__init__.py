"""
SObject Code Generation

Generates typed DTO sources in various languages from Salesforce
SObject descriptions.
"""

from .core.config import ConfigurationError, GeneratorConfig, load_config
from .core.generator import ArtifactWriteError, SObjectGenerator
from .core.schema import FieldDescriptor, ObjectDescription, PicklistValue
from .core.templates import RenderError
from .core.types import UnsupportedFieldType
from .pipeline import GenerationSummary, generate_sources
from .provider import (
    AuthenticationError,
    FileMetadataProvider,
    MetadataProvider,
    ProviderError,
    SalesforceClient,
    create_provider,
)
from .registry import GeneratorRegistry, get_generator, list_supported_languages
from .selector import ObjectSelector, select_objects

# Version info
__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "generate_sources",
    "GenerationSummary",
    # Metadata
    "MetadataProvider",
    "SalesforceClient",
    "FileMetadataProvider",
    "create_provider",
    "ObjectDescription",
    "FieldDescriptor",
    "PicklistValue",
    # Selection
    "ObjectSelector",
    "select_objects",
    # Generators
    "SObjectGenerator",
    "GeneratorRegistry",
    "get_generator",
    "list_supported_languages",
    # Configuration
    "GeneratorConfig",
    "load_config",
    # Errors
    "ConfigurationError",
    "ProviderError",
    "AuthenticationError",
    "UnsupportedFieldType",
    "RenderError",
    "ArtifactWriteError",
]
