"""Tests for the type_resolver module."""

from __future__ import annotations

import pytest

from openapi_struct_gen.definitions import NamedType, OptionalType, Primitive, SequenceType
from openapi_struct_gen.errors import GenError, InvalidReferenceError, UnsupportedSchemaError
from openapi_struct_gen.type_resolver import SchemaKind, classify, parse_reference, resolve_type


def _resolve(schema, is_required=True):
    return resolve_type(schema, is_required, owner="Test")


class TestPrimitives:
    """Test OpenAPI primitive -> TypeExpr conversion."""

    def test_string(self):
        assert _resolve({"type": "string"}) is Primitive.STRING

    def test_string_with_enum(self):
        assert _resolve({"type": "string", "enum": ["a", "b"]}) is Primitive.STRING

    def test_boolean(self):
        assert _resolve({"type": "boolean"}) is Primitive.BOOL

    def test_integer_defaults_to_32_bit(self):
        assert _resolve({"type": "integer"}) is Primitive.INT32

    def test_integer_int32(self):
        assert _resolve({"type": "integer", "format": "int32"}) is Primitive.INT32

    def test_integer_int64(self):
        assert _resolve({"type": "integer", "format": "int64"}) is Primitive.INT64

    def test_number_defaults_to_float(self):
        assert _resolve({"type": "number"}) is Primitive.FLOAT32

    def test_number_double(self):
        assert _resolve({"type": "number", "format": "double"}) is Primitive.FLOAT64


class TestRequiredness:
    """Optional wrapping follows requiredness and nullability."""

    def test_required_is_bare(self):
        assert _resolve({"type": "string"}, True) is Primitive.STRING

    def test_not_required_is_optional(self):
        assert _resolve({"type": "string"}, False) == OptionalType(Primitive.STRING)

    def test_nullable_required_is_optional(self):
        assert _resolve({"type": "string", "nullable": True}, True) == OptionalType(Primitive.STRING)

    def test_nullable_not_required_wrapped_once(self):
        assert _resolve({"type": "string", "nullable": True}, False) == OptionalType(Primitive.STRING)

    def test_type_list_with_null(self):
        assert _resolve({"type": ["integer", "null"]}, True) == OptionalType(Primitive.INT32)

    def test_optional_reference(self):
        assert _resolve({"$ref": "#/components/schemas/Pet"}, False) == OptionalType(NamedType("Pet"))


class TestArrays:
    """Array items are always resolved as required."""

    def test_array_of_strings(self):
        assert _resolve({"type": "array", "items": {"type": "string"}}) == SequenceType(Primitive.STRING)

    def test_optional_array_has_required_items(self):
        schema = {"type": "array", "items": {"type": "string"}}
        assert _resolve(schema, False) == OptionalType(SequenceType(Primitive.STRING))

    def test_array_of_refs(self):
        schema = {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
        assert _resolve(schema) == SequenceType(NamedType("Pet"))

    def test_nested_arrays(self):
        schema = {"type": "array", "items": {"type": "array", "items": {"type": "number", "format": "double"}}}
        assert _resolve(schema) == SequenceType(SequenceType(Primitive.FLOAT64))

    def test_array_without_items(self):
        with pytest.raises(UnsupportedSchemaError):
            _resolve({"type": "array"})


class TestReferences:
    """Only #/components/schemas/<Name> references resolve."""

    def test_schema_reference(self):
        assert _resolve({"$ref": "#/components/schemas/Foo"}) == NamedType("Foo")

    def test_response_reference_is_fatal(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            _resolve({"$ref": "#/components/responses/Foo"})
        assert exc_info.value.reference == "#/components/responses/Foo"

    def test_other_document_reference_is_fatal(self):
        with pytest.raises(InvalidReferenceError):
            _resolve({"$ref": "other.yaml#/components/schemas/Foo"})

    def test_deeper_reference_is_fatal(self):
        with pytest.raises(InvalidReferenceError):
            parse_reference("#/components/schemas/Foo/properties/bar", owner="Test")

    def test_pointer_escapes(self):
        assert parse_reference("#/components/schemas/a~1b~0c", owner="Test") == "a/b~c"

    def test_invalid_reference_is_gen_error(self):
        with pytest.raises(GenError):
            _resolve({"$ref": "#/definitions/Foo"})


class TestUnsupported:
    """Unsupported constructs raise typed errors naming the schema position."""

    def test_all_of(self):
        with pytest.raises(UnsupportedSchemaError) as exc_info:
            resolve_type({"allOf": [{"type": "string"}]}, True, owner="Pet.kind")
        assert exc_info.value.schema_name == "Pet.kind"

    def test_not(self):
        with pytest.raises(UnsupportedSchemaError):
            _resolve({"not": {"type": "string"}})

    def test_all_of_inside_array(self):
        with pytest.raises(UnsupportedSchemaError) as exc_info:
            resolve_type({"type": "array", "items": {"allOf": []}}, False, owner="Pet.tags")
        assert exc_info.value.schema_name == "Pet.tags[]"

    def test_all_of_beside_type(self):
        with pytest.raises(UnsupportedSchemaError):
            _resolve({"type": "object", "allOf": [{"type": "object"}]})

    def test_nested_object(self):
        schema = {"type": "object", "properties": {"a": {"type": "string"}}}
        with pytest.raises(UnsupportedSchemaError):
            _resolve(schema)

    def test_nested_one_of(self):
        with pytest.raises(UnsupportedSchemaError):
            _resolve({"oneOf": [{"type": "string"}]})

    def test_untyped_schema(self):
        with pytest.raises(UnsupportedSchemaError):
            _resolve({})

    def test_free_form_object(self):
        assert _resolve({"type": "object", "additionalProperties": True}) is Primitive.DYNAMIC_MAP


class TestClassify:
    """Test schema kind detection."""

    def test_types(self):
        assert classify({"type": "object"}) is SchemaKind.OBJECT
        assert classify({"type": "array"}) is SchemaKind.ARRAY
        assert classify({"type": "integer"}) is SchemaKind.INTEGER

    def test_properties_imply_object(self):
        assert classify({"properties": {}}) is SchemaKind.OBJECT

    def test_combinators(self):
        assert classify({"oneOf": []}) is SchemaKind.ONE_OF
        assert classify({"anyOf": []}) is SchemaKind.ANY_OF
        assert classify({"allOf": []}) is SchemaKind.ALL_OF
        assert classify({"not": {}}) is SchemaKind.NOT

    def test_unknown(self):
        assert classify({}) is SchemaKind.ANY
        assert classify({"type": ["string", "integer"]}) is SchemaKind.ANY
        assert classify(True) is SchemaKind.ANY
