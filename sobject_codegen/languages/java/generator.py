"""
Java code generator implementation.

Generates Jackson-annotated POJOs, picklist enums and query-records
wrappers for the camel-salesforce component.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ...core.config import GeneratorConfig
from ...core.generator import SObjectGenerator

# Mostly the JAXB mapping; temporal types are kept as strings
JAVA_TYPE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "ID": "String",  # mapping for tns:ID SOAP type
        "string": "String",
        "integer": "java.math.BigInteger",
        "int": "Integer",
        "long": "Long",
        "short": "Short",
        "decimal": "java.math.BigDecimal",
        "float": "Float",
        "double": "Double",
        "boolean": "Boolean",
        "byte": "Byte",
        "dateTime": "String",
        "unsignedInt": "Long",
        "unsignedShort": "Integer",
        "unsignedByte": "Short",
        "time": "String",
        "date": "String",
        "g": "String",
    }
)


class JavaGenerator(SObjectGenerator):
    """Code generator for camel-salesforce DTO classes."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    @property
    def type_table(self) -> Mapping[str, str]:
        return JAVA_TYPE_MAP

    def target_constant_name(self, name: str) -> str:
        """Replace the bare underscore, a keyword since Java 9."""
        return "_EMPTY" if name == "_" else name

    def get_template_directory(self) -> Path:
        """Return the Java templates directory."""
        return Path(__file__).parent / "templates"


def create_java_generator(package_name: str = "org.fusesource.camel.salesforce.dto") -> JavaGenerator:
    """Create a Java generator for a package."""
    return JavaGenerator(GeneratorConfig(language="java", package_name=package_name))
