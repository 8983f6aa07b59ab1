"""Resolve OpenAPI schemas to target type expressions.

Handles:
- Primitive types with their numeric formats (int64, double)
- Arrays, whose items are always resolved as required
- $ref to #/components/schemas/<Name> only
- Requiredness and nullable, both folded into a single OptionalType
- Free-form objects (additionalProperties without properties)

Everything else (allOf, not, untyped schemas, objects with properties at a
nested position, other reference targets) raises UnsupportedSchemaError.
"""

from __future__ import annotations

import enum
from typing import Any

from .definitions import NamedType, OptionalType, Primitive, SequenceType, TypeExpr
from .errors import InvalidReferenceError, UnsupportedSchemaError
from .loader import is_reference

_SCHEMA_REF_PREFIX = ("#", "components", "schemas")


class SchemaKind(enum.Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ONE_OF = "oneOf"
    ANY_OF = "anyOf"
    ALL_OF = "allOf"
    NOT = "not"
    ANY = "any"


_TYPE_KINDS = {
    "string": SchemaKind.STRING,
    "number": SchemaKind.NUMBER,
    "integer": SchemaKind.INTEGER,
    "boolean": SchemaKind.BOOLEAN,
    "array": SchemaKind.ARRAY,
    "object": SchemaKind.OBJECT,
}


def _declared_types(schema: dict[str, Any]) -> list[str]:
    declared = schema.get("type")
    if isinstance(declared, list):
        return [t for t in declared if t != "null"]
    if isinstance(declared, str):
        return [declared]
    return []


def is_nullable(schema: Any) -> bool:
    """Check for nullable: true (3.0) or a "null" member of type (3.1)."""
    if not isinstance(schema, dict):
        return False
    declared = schema.get("type")
    return bool(schema.get("nullable")) or (isinstance(declared, list) and "null" in declared)


def classify(schema: Any) -> SchemaKind:
    """Return the kind of an inline schema."""
    if not isinstance(schema, dict):
        return SchemaKind.ANY
    # Rejected combinators win over a sibling "type"
    if "allOf" in schema:
        return SchemaKind.ALL_OF
    if "not" in schema:
        return SchemaKind.NOT
    if "oneOf" in schema:
        return SchemaKind.ONE_OF
    if "anyOf" in schema:
        return SchemaKind.ANY_OF

    declared = _declared_types(schema)
    if len(declared) == 1 and declared[0] in _TYPE_KINDS:
        return _TYPE_KINDS[declared[0]]
    if not declared and "properties" in schema:
        return SchemaKind.OBJECT
    return SchemaKind.ANY


def is_free_form_object(schema: dict[str, Any]) -> bool:
    """An object with no properties whose values are left open."""
    return not schema.get("properties") and schema.get("additionalProperties") not in (None, False)


def parse_reference(reference: str, *, owner: str) -> str:
    """Return the schema name a #/components/schemas/<Name> reference targets."""
    segments = reference.split("/")
    if len(segments) != 4 or tuple(segments[:3]) != _SCHEMA_REF_PREFIX or not segments[3]:
        raise InvalidReferenceError(owner, reference)
    return segments[3].replace("~1", "/").replace("~0", "~")


def _resolve_primitive(kind: SchemaKind, schema: dict[str, Any]) -> Primitive:
    fmt = schema.get("format")
    if kind is SchemaKind.STRING:
        return Primitive.STRING
    if kind is SchemaKind.BOOLEAN:
        return Primitive.BOOL
    if kind is SchemaKind.INTEGER:
        return Primitive.INT64 if fmt == "int64" else Primitive.INT32
    return Primitive.FLOAT64 if fmt == "double" else Primitive.FLOAT32


def resolve_array_item(schema: dict[str, Any], *, owner: str) -> TypeExpr:
    """Resolve the element type of an array schema (always required)."""
    items = schema.get("items")
    if items is None:
        raise UnsupportedSchemaError(owner, "array without items")
    return resolve_type(items, True, owner=f"{owner}[]")


def resolve_type(schema: Any, is_required: bool, *, owner: str) -> TypeExpr:
    """Resolve a schema or reference to a TypeExpr.

    owner names the schema position being resolved and is carried into any
    error raised, e.g. "Pet.tags[]".
    """
    if is_reference(schema):
        inner: TypeExpr = NamedType(parse_reference(schema["$ref"], owner=owner))
        nullable = False
    else:
        kind = classify(schema)
        if kind in (SchemaKind.STRING, SchemaKind.BOOLEAN, SchemaKind.INTEGER, SchemaKind.NUMBER):
            inner = _resolve_primitive(kind, schema)
        elif kind is SchemaKind.ARRAY:
            inner = SequenceType(resolve_array_item(schema, owner=owner))
        elif kind is SchemaKind.OBJECT and is_free_form_object(schema):
            inner = Primitive.DYNAMIC_MAP
        elif kind is SchemaKind.OBJECT:
            raise UnsupportedSchemaError(owner, "inline object at a nested position")
        else:
            raise UnsupportedSchemaError(owner, f"'{kind.value}' schema")
        nullable = is_nullable(schema)

    if is_required and not nullable:
        return inner
    return OptionalType(inner)
