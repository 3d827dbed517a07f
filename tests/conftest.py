"""Shared fixtures: small metadata documents in the wire format."""

from __future__ import annotations

import copy
import logging
from typing import Any

import pytest

from metagen.models import Entity, decode_schema


# ---------------------------------------------------------------------------
# Metadata documents
# ---------------------------------------------------------------------------

_METADATA: dict[str, Any] = {
    "SoftLayer_Account": {
        "name": "SoftLayer_Account",
        "base": "SoftLayer_Entity",
        "typeDoc": "The account data type.",
        "serviceDoc": "Retrieve and manage an account.",
        "properties": {
            "id": {"name": "id", "type": "int", "form": "local", "doc": "Account id."},
            "createDate": {"name": "createDate", "type": "dateTime", "form": "local", "doc": "Created."},
            "hardware": {
                "name": "hardware",
                "type": "SoftLayer_Hardware",
                "typeArray": True,
                "form": "relational",
                "doc": "hardware on the account.",
            },
        },
        "methods": {
            "getObject": {"name": "getObject", "type": "SoftLayer_Account", "doc": "Get the account."},
            "setAbuseEmails": {
                "name": "setAbuseEmails",
                "type": "boolean",
                "doc": "Set abuse emails.",
                "parameters": [
                    {"name": "emails", "type": "string", "typeArray": True, "doc": "Addresses."},
                ],
            },
        },
    },
    "SoftLayer_Account_Address": {
        "name": "SoftLayer_Account_Address",
        "base": "SoftLayer_Entity",
        "typeDoc": "A mailing address.",
        "properties": {
            "account": {"name": "account", "type": "SoftLayer_Account", "form": "relational", "doc": "the account."},
        },
        "methods": {
            "createObject": {
                "name": "createObject",
                "type": "SoftLayer_Account_Address",
                "parameters": [{"name": "templateObject", "type": "SoftLayer_Account_Address"}],
            },
        },
    },
    "SoftLayer_Container_Product_Order": {
        "name": "SoftLayer_Container_Product_Order",
        "base": "SoftLayer_Entity",
        "noservice": True,
        "properties": {
            "quantity": {"name": "quantity", "type": "int", "form": "local"},
        },
    },
    "SoftLayer_Hardware": {
        "name": "SoftLayer_Hardware",
        "base": "SoftLayer_Entity",
        "typeDoc": "A piece of hardware.",
        "properties": {
            "hostname": {"name": "hostname", "type": "string", "form": "local"},
            "account": {"name": "account", "type": "SoftLayer_Account", "form": "relational", "doc": "the owner."},
        },
        "methods": {
            "getObject": {"name": "getObject", "type": "SoftLayer_Hardware"},
            "deleteObject": {"name": "deleteObject", "type": "void"},
        },
    },
    "SoftLayer_Hardware_Server": {
        "name": "SoftLayer_Hardware_Server",
        "base": "SoftLayer_Hardware",
        "typeDoc": "A bare metal server.",
        "methods": {
            "getObject": {"name": "getObject", "type": "SoftLayer_Hardware_Server"},
            "rebootSoft": {
                "name": "rebootSoft",
                "type": "boolean",
                "parameters": [{"name": "type", "type": "string"}],
            },
        },
    },
}

_ROUND_TRIP: dict[str, Any] = {
    "Root": {
        "name": "Root",
        "base": "SoftLayer_Entity",
        "methods": {"ping": {"name": "ping", "type": "boolean"}},
    },
    "Child": {
        "name": "Child",
        "base": "Root",
        "properties": {
            "target": {"name": "target", "type": "Root", "form": "relational", "doc": "the target."},
        },
        "methods": {"pong": {"name": "pong", "type": "boolean"}},
    },
}


@pytest.fixture
def metadata() -> dict[str, Any]:
    """A small SoftLayer-shaped metadata document (fresh copy per test)."""
    return copy.deepcopy(_METADATA)


@pytest.fixture
def schema(metadata) -> dict[str, Entity]:
    return decode_schema(metadata)


@pytest.fixture
def round_trip_metadata() -> dict[str, Any]:
    return copy.deepcopy(_ROUND_TRIP)


@pytest.fixture
def round_trip_schema(round_trip_metadata) -> dict[str, Entity]:
    return decode_schema(round_trip_metadata)


@pytest.fixture
def identity_formatter():
    """Formatter stand-in that returns the source untouched."""
    def _format(source: str) -> str:
        return source
    return _format


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by configure_logging() during a test."""
    yield
    logger = logging.getLogger("metagen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
