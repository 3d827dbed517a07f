"""Schema model for the metadata document.

The document is a JSON object mapping entity names to entity records:

    {
      "SoftLayer_Account": {
        "name": "SoftLayer_Account",
        "base": "SoftLayer_Entity",
        "typeDoc": "...",
        "serviceDoc": "...",
        "properties": {"id": {"name": "id", "type": "int", "form": "local"}},
        "methods": {"getObject": {"name": "getObject", "type": "SoftLayer_Account"}},
        "noservice": false
      },
      ...
    }

Unknown keys are ignored so newer metadata revisions still decode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import SchemaDecodeError

ROOT_ENTITY = "SoftLayer_Entity"

SCALAR = "scalar"
RELATIONAL = "relational"


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str
    is_array: bool = False
    doc: str = ""
    default_value: Any = None


@dataclass(frozen=True)
class Method:
    name: str
    return_type: str
    return_is_array: bool = False
    doc: str = ""
    is_static: bool = False
    requires_auth: bool = True
    limitable: bool = False
    filterable: bool = False
    maskable: bool = False
    parameters: tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class Property:
    name: str
    type: str
    is_array: bool = False
    relation_kind: str = SCALAR
    doc: str = ""

    @property
    def is_relational(self) -> bool:
        return self.relation_kind == RELATIONAL


@dataclass(frozen=True)
class Entity:
    name: str
    base_name: str = ROOT_ENTITY
    type_doc: str = ""
    service_doc: str = ""
    properties: dict[str, Property] = field(default_factory=dict)
    methods: dict[str, Method] = field(default_factory=dict)
    is_data_only: bool = False

    @property
    def is_root(self) -> bool:
        """True when the entity extends nothing but the root sentinel."""
        return self.base_name in (ROOT_ENTITY, "")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _expect_object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaDecodeError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _get_str(record: dict[str, Any], key: str, where: str, default: str = "") -> str:
    value = record.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise SchemaDecodeError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _get_bool(record: dict[str, Any], key: str, where: str, default: bool = False) -> bool:
    value = record.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise SchemaDecodeError(f"{where}.{key}: expected a boolean, got {type(value).__name__}")
    return value


def _decode_parameter(raw: Any, where: str) -> Parameter:
    record = _expect_object(raw, where)
    return Parameter(
        name=_get_str(record, "name", where),
        type=_get_str(record, "type", where),
        is_array=_get_bool(record, "typeArray", where),
        doc=_get_str(record, "doc", where),
        default_value=record.get("defaultValue"),
    )


def _decode_method(key: str, raw: Any, where: str) -> Method:
    record = _expect_object(raw, where)

    raw_params = record.get("parameters")
    if raw_params is None:
        raw_params = []
    if not isinstance(raw_params, list):
        raise SchemaDecodeError(f"{where}.parameters: expected an array")

    return Method(
        name=_get_str(record, "name", where, default=key),
        return_type=_get_str(record, "type", where),
        return_is_array=_get_bool(record, "typeArray", where),
        doc=_get_str(record, "doc", where),
        is_static=_get_bool(record, "static", where),
        requires_auth=not _get_bool(record, "noauth", where),
        limitable=_get_bool(record, "limitable", where),
        filterable=_get_bool(record, "filterable", where),
        maskable=_get_bool(record, "maskable", where),
        parameters=tuple(
            _decode_parameter(p, f"{where}.parameters[{i}]")
            for i, p in enumerate(raw_params)
        ),
    )


def _decode_property(key: str, raw: Any, where: str) -> Property:
    record = _expect_object(raw, where)
    form = _get_str(record, "form", where)
    return Property(
        name=_get_str(record, "name", where, default=key),
        type=_get_str(record, "type", where),
        is_array=_get_bool(record, "typeArray", where),
        relation_kind=RELATIONAL if form == RELATIONAL else SCALAR,
        doc=_get_str(record, "doc", where),
    )


def _decode_members(record: dict[str, Any], key: str, where: str, decode) -> dict[str, Any]:
    raw = record.get(key)
    if raw is None:
        return {}
    members = _expect_object(raw, f"{where}.{key}")
    return {
        name: decode(name, value, f"{where}.{key}.{name}")
        for name, value in members.items()
    }


def decode_entity(key: str, raw: Any) -> Entity:
    """Decode one entity record; ``key`` is its name in the document."""
    record = _expect_object(raw, key)
    return Entity(
        name=_get_str(record, "name", key, default=key),
        base_name=_get_str(record, "base", key, default=ROOT_ENTITY),
        type_doc=_get_str(record, "typeDoc", key),
        service_doc=_get_str(record, "serviceDoc", key),
        properties=_decode_members(record, "properties", key, _decode_property),
        methods=_decode_members(record, "methods", key, _decode_method),
        is_data_only=_get_bool(record, "noservice", key),
    )


def decode_schema(data: Any) -> dict[str, Entity]:
    """Decode the whole metadata document into entities keyed by name."""
    document = _expect_object(data, "metadata")
    return {key: decode_entity(key, raw) for key, raw in document.items()}
