"""Base classes imported by generated Python DTOs.

Field names of ``SObjectBase`` must stay in sync with
``sobject_codegen.core.naming.BASE_FIELDS_V1``.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


@dataclass
class SObjectBase:
    """Fields shared by every SObject."""

    Id: str | None = None
    OwnerId: str | None = None
    IsDeleted: bool | None = None
    Name: str | None = None
    CreatedDate: str | None = None
    CreatedById: str | None = None
    LastModifiedDate: str | None = None
    LastModifiedById: str | None = None
    SystemModstamp: str | None = None
    LastActivityDate: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize set fields using their Salesforce names."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result


@dataclass
class QueryRecordsBase:
    """Paging information of a SOQL query result."""

    totalSize: int | None = None
    done: bool | None = None
    nextRecordsUrl: str | None = None
