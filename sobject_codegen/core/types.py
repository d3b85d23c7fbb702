"""
Type mapping from Salesforce SOAP types to target-language types.

Each target language supplies one immutable table; the mapper resolves
picklist fields to their generated enum type instead of the table.
"""

from types import MappingProxyType
from typing import Mapping, Set

from .naming import NamingPolicy
from .schema import FieldDescriptor, ObjectDescription


class UnsupportedFieldType(Exception):
    """Raised when a SOAP type has no mapping in the target language."""

    def __init__(self, field_name: str, soap_type: str):
        self.field_name = field_name
        self.soap_type = soap_type
        super().__init__(f"Unsupported type {soap_type} for field {field_name}")


def strip_namespace(soap_type: str) -> str:
    """Remove the namespace prefix, e.g. ``xsd:string`` -> ``string``."""
    return soap_type.split(":", 1)[1] if ":" in soap_type else soap_type


class TypeMapper:
    """Resolves field descriptors to target type names."""

    def __init__(self, table: Mapping[str, str], naming: NamingPolicy):
        """
        Initialize type mapper.

        Args:
            table: SOAP type (without namespace) to target type name
            naming: Naming policy used for picklist enum names
        """
        self._table = MappingProxyType(dict(table))
        self.naming = naming

    @property
    def table(self) -> Mapping[str, str]:
        """Read-only view of the mapping table."""
        return self._table

    def supports(self, soap_type: str) -> bool:
        """Check if a SOAP type (with or without namespace) is mapped."""
        return strip_namespace(soap_type) in self._table

    def resolve(self, field: FieldDescriptor) -> str:
        """
        Get the target type for a field.

        Raises:
            UnsupportedFieldType: If the field is not a picklist and its
                SOAP type is not in the table
        """
        if field.is_enumerated:
            return self.naming.enum_type_name(field.name)

        target = self._table.get(strip_namespace(field.soap_type))
        if target is None:
            raise UnsupportedFieldType(field.name, field.soap_type)
        return target

    def target_types(self, description: ObjectDescription) -> Set[str]:
        """All target types used by an object's own fields."""
        return {self.resolve(f) for f in self.naming.own_fields(description)}
