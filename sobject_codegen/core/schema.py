"""
Core schema representation for code generation.

Converts Salesforce describe output into immutable value types
that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

# Set of entity names returned by the global objects call
Catalog = FrozenSet[str]


@dataclass(frozen=True)
class PicklistValue:
    """A single legal value of a picklist field."""

    value: str
    label: str
    default_value: bool = False
    active: bool = True


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents a single field of an SObject."""

    name: str
    soap_type: str  # Namespace-qualified wire type, e.g. "xsd:string"
    label: Optional[str] = None
    type: Optional[str] = None  # Salesforce display type, e.g. "picklist"
    picklist_values: Optional[Tuple[PicklistValue, ...]] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Field name must not be empty")
        if self.picklist_values is not None and not isinstance(
            self.picklist_values, tuple
        ):
            object.__setattr__(self, "picklist_values", tuple(self.picklist_values))

    @property
    def is_enumerated(self) -> bool:
        """True when the field carries a non-empty picklist."""
        return bool(self.picklist_values)


@dataclass(frozen=True)
class ObjectDescription:
    """Represents the structure of a described SObject."""

    name: str
    label: Optional[str] = None
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Object name must not be empty")
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))

        seen = set()
        for field_desc in self.fields:
            if field_desc.name in seen:
                raise ValueError(
                    f"Duplicate field {field_desc.name} in object {self.name}"
                )
            seen.add(field_desc.name)

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        """Get field by name."""
        for field_desc in self.fields:
            if field_desc.name == name:
                return field_desc
        return None

    def enumerated_fields(self) -> Tuple[FieldDescriptor, ...]:
        """Fields that produce an enum artifact, in declaration order."""
        return tuple(f for f in self.fields if f.is_enumerated)


def convert_catalog_output(payload: Dict[str, Any]) -> Catalog:
    """
    Convert a global objects payload to a catalog of names.

    Args:
        payload: Parsed JSON of the ``sobjects`` resource

    Returns:
        Catalog: Frozen set of object names

    Raises:
        ValueError: If the payload does not list named objects
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("sobjects"), list):
        raise ValueError("Expected an object with an 'sobjects' list")

    names = set()
    for entry in payload["sobjects"]:
        if not isinstance(entry, dict):
            raise ValueError(f"Expected an object entry, got {type(entry).__name__}")
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Object entry without a name: {entry!r}")
        names.add(name)

    return frozenset(names)


def convert_describe_output(payload: Dict[str, Any]) -> ObjectDescription:
    """
    Convert a describe payload to the internal ObjectDescription.

    Args:
        payload: Parsed JSON of the ``sobjects/<name>/describe`` resource

    Returns:
        ObjectDescription with fields in payload order

    Raises:
        ValueError: If required keys are missing or have the wrong type
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Expected object description, got {type(payload).__name__}")

    name = payload.get("name")
    if not isinstance(name, str):
        raise ValueError("Object description has no name")

    raw_fields = payload.get("fields", [])
    if not isinstance(raw_fields, list):
        raise ValueError(f"Fields of {name} must be a list")

    fields = []
    for raw in raw_fields:
        if not isinstance(raw, dict):
            raise ValueError(f"Field entry of {name} must be an object")

        field_name = raw.get("name")
        soap_type = raw.get("soapType")
        if not isinstance(field_name, str) or not isinstance(soap_type, str):
            raise ValueError(f"Field of {name} is missing 'name' or 'soapType'")

        picklist = None
        raw_values = raw.get("picklistValues")
        if raw_values:
            picklist = tuple(_convert_picklist_value(v, name, field_name) for v in raw_values)

        fields.append(
            FieldDescriptor(
                name=field_name,
                soap_type=soap_type,
                label=raw.get("label"),
                type=raw.get("type"),
                picklist_values=picklist,
            )
        )

    return ObjectDescription(name=name, label=payload.get("label"), fields=tuple(fields))


def _convert_picklist_value(raw: Any, object_name: str, field_name: str) -> PicklistValue:
    """Convert one ``picklistValues`` entry."""
    if not isinstance(raw, dict) or not isinstance(raw.get("value"), str):
        raise ValueError(f"Invalid picklist value in {object_name}.{field_name}")

    return PicklistValue(
        value=raw["value"],
        label=raw.get("label") or raw["value"],
        default_value=bool(raw.get("defaultValue", False)),
        active=bool(raw.get("active", True)),
    )
