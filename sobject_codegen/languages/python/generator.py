"""
Python code generator implementation.

Generates dataclass DTOs, str-backed picklist enums and query-records
wrappers built on ``sobject_codegen.runtime``.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ...core.config import GeneratorConfig
from ...core.generator import SObjectGenerator

# Python type mappings; temporal types are kept as ISO strings
PYTHON_TYPE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "ID": "str",
        "string": "str",
        "integer": "int",
        "int": "int",
        "long": "int",
        "short": "int",
        "decimal": "Decimal",
        "float": "float",
        "double": "float",
        "boolean": "bool",
        "byte": "int",
        "dateTime": "str",
        "unsignedInt": "int",
        "unsignedShort": "int",
        "unsignedByte": "int",
        "time": "str",
        "date": "str",
        "g": "str",
    }
)


class PythonGenerator(SObjectGenerator):
    """Code generator for Python dataclass DTOs."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    @property
    def type_table(self) -> Mapping[str, str]:
        return PYTHON_TYPE_MAP

    def target_constant_name(self, name: str) -> str:
        """
        Keep constant names out of the shapes Enum treats specially.

        ``_sunder_`` names are reserved and raise on class creation, and
        ``__private`` names are mangled instead of becoming members. The
        bare underscore matches the Java target.
        """
        if name == "_":
            return "_EMPTY"
        if name.startswith("__"):
            return "V" + name
        if len(name) > 2 and name[0] == name[-1] == "_":
            return name + "_"
        return name

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"


def create_python_generator(package_name: str = "salesforce.dto") -> PythonGenerator:
    """Create a Python generator for a package."""
    return PythonGenerator(GeneratorConfig(language="python", package_name=package_name))
