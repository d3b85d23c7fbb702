"""
Shared fixtures: describe payloads for a small Salesforce organization.
"""

import json

import pytest

from sobject_codegen.core.schema import convert_describe_output


def _field(name, soap_type, label=None, type="string", picklist=None):
    return {
        "name": name,
        "soapType": soap_type,
        "label": label or name,
        "type": type,
        "picklistValues": picklist or [],
    }


@pytest.fixture
def account_payload():
    """Account with base fields, one custom picklist and a decimal."""
    return {
        "name": "Account",
        "label": "Account",
        "fields": [
            _field("Id", "tns:ID", type="id"),
            _field("Name", "xsd:string"),
            _field("IsDeleted", "xsd:boolean", type="boolean"),
            _field("AnnualRevenue", "xsd:double", type="currency"),
            _field("NumberOfEmployees", "xsd:int", type="int"),
            _field(
                "Industry__c",
                "xsd:string",
                label="Industry",
                type="picklist",
                picklist=[
                    {"value": "Agriculture", "label": "Agriculture", "defaultValue": False, "active": True},
                    {"value": "Banking", "label": "Banking", "defaultValue": True, "active": True},
                ],
            ),
            _field("Rating__c", "xsd:decimal", type="double"),
            _field("CreatedDate", "xsd:dateTime", type="datetime"),
        ],
    }


@pytest.fixture
def contact_payload():
    """Contact without picklist fields."""
    return {
        "name": "Contact",
        "label": "Contact",
        "fields": [
            _field("Id", "tns:ID", type="id"),
            _field("Name", "xsd:string"),
            _field("Email", "xsd:string", type="email"),
            _field("Birthdate", "xsd:date", type="date"),
            _field("AccountId", "tns:ID", type="reference"),
        ],
    }


@pytest.fixture
def account(account_payload):
    return convert_describe_output(account_payload)


@pytest.fixture
def contact(contact_payload):
    return convert_describe_output(contact_payload)


@pytest.fixture
def metadata_file(tmp_path, account_payload, contact_payload):
    """JSON dump readable by FileMetadataProvider."""
    path = tmp_path / "describe.json"
    path.write_text(
        json.dumps({"sobjects": [account_payload, contact_payload]}), encoding="utf-8"
    )
    return path
