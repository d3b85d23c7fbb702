"""
Naming utilities for safe code generation.

Derives enum type names, enum constant names and artifact file names
from raw SObject metadata, and decides which fields are inherited
from the generated base class.
"""

from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from .schema import FieldDescriptor, ObjectDescription

CUSTOM_FIELD_SUFFIX = "__c"
ENUM_SUFFIX = "Enum"
QUERY_RECORDS_PREFIX = "QueryRecords"

# Fields declared by the generated base class (AbstractSObjectBase / SObjectBase).
# Bump the version when the base class changes.
BASE_FIELDS_V1: FrozenSet[str] = frozenset(
    {
        "Id",
        "OwnerId",
        "IsDeleted",
        "Name",
        "CreatedDate",
        "CreatedById",
        "LastModifiedDate",
        "LastModifiedById",
        "SystemModstamp",
        "LastActivityDate",
    }
)


class ArtifactKind(Enum):
    """Kinds of artifacts emitted per object."""

    PRIMARY = "primary"
    QUERY_RECORDS = "query_records"
    ENUM = "enum"


def _is_identifier_start(char: str) -> bool:
    return char.isidentifier()


def _is_identifier_part(char: str) -> bool:
    return ("_" + char).isidentifier()


class NamingPolicy:
    """Pure naming rules used by generators and templates."""

    def __init__(self, base_fields: Optional[Iterable[str]] = None):
        """
        Initialize naming policy.

        Args:
            base_fields: Manifest of inherited field names, defaults to BASE_FIELDS_V1
        """
        self.base_fields: FrozenSet[str] = (
            frozenset(base_fields) if base_fields is not None else BASE_FIELDS_V1
        )

    def enum_type_name(self, field_name: str) -> str:
        """Enum type name for a picklist field, e.g. Status__c -> StatusEnum."""
        if field_name.endswith(CUSTOM_FIELD_SUFFIX):
            field_name = field_name[: -len(CUSTOM_FIELD_SUFFIX)]
        return field_name + ENUM_SUFFIX

    def enum_constant_name(self, value: str) -> str:
        """
        Sanitize a picklist value into an upper-case constant name.

        Characters that cannot appear in an identifier become ``_`` and
        a leading ``_`` is added when the value cannot start one.
        """
        if not value:
            return "_"

        chars = []
        changed = False
        if not _is_identifier_start(value[0]):
            chars.append("_")
            changed = True

        for char in value:
            if _is_identifier_part(char):
                chars.append(char)
            else:
                chars.append("_")
                changed = True

        return "".join(chars).upper() if changed else value.upper()

    def is_inherited_field(self, name: str) -> bool:
        """True if the field is declared by the base class."""
        return name in self.base_fields

    def own_fields(self, description: ObjectDescription) -> Tuple[FieldDescriptor, ...]:
        """Fields the generated class declares itself."""
        return tuple(f for f in description.fields if not self.is_inherited_field(f.name))

    def artifact_file_name(
        self,
        entity_name: str,
        kind: ArtifactKind,
        field_name: Optional[str] = None,
    ) -> str:
        """
        File name (without extension) of an artifact.

        Args:
            entity_name: Object the artifact belongs to
            kind: Artifact kind
            field_name: Picklist field, required for ENUM artifacts
        """
        if kind == ArtifactKind.PRIMARY:
            return entity_name
        elif kind == ArtifactKind.QUERY_RECORDS:
            return QUERY_RECORDS_PREFIX + entity_name
        elif kind == ArtifactKind.ENUM:
            if not field_name:
                raise ValueError("field_name is required for enum artifacts")
            return self.enum_type_name(field_name)
        else:
            raise ValueError(f"Unknown artifact kind: {kind}")
