"""Build a GeneratedModule from the schema catalogue.

Each top-level schema becomes one definition, in catalogue order:
  object              -> Record (free-form objects become an Alias of a map)
  array               -> Alias of a sequence
  oneOf / anyOf       -> Union, one variant per alternative
  anything else       -> Alias of the resolved type
"""

from __future__ import annotations

import logging
from typing import Any

from .collector import NamedSchema
from .definitions import (
    Alias,
    Definition,
    Field,
    GeneratedModule,
    NamedType,
    Primitive,
    Record,
    SequenceType,
    TypeExpr,
    Union,
    Variant,
)
from .errors import NameCollisionError, UnsupportedSchemaError
from .naming import field_name, type_name
from .options import Decoration, GeneratorOptions
from .type_resolver import SchemaKind, classify, is_free_form_object, resolve_array_item, resolve_type

logger = logging.getLogger(__name__)

_PRIMITIVE_VARIANTS: dict[Primitive, str] = {
    Primitive.BOOL: "Bool",
    Primitive.STRING: "String",
    Primitive.FLOAT32: "F32",
    Primitive.FLOAT64: "F64",
    Primitive.INT32: "I32",
    Primitive.INT64: "I64",
    Primitive.DYNAMIC_MAP: "Map",
}


def _applicable(decorations: tuple[Decoration, ...], schema_name: str) -> tuple[str, ...]:
    return tuple(d.attribute for d in decorations if d.applies_to(schema_name))


def container_attributes(schema_name: str, options: GeneratorOptions) -> tuple[str, ...]:
    """Before-annotations, the derive line, then after-annotations."""
    derive = "derive({})".format(", ".join(options.all_derives()))
    return (
        _applicable(options.annotations_before, schema_name)
        + (derive,)
        + _applicable(options.annotations_after, schema_name)
    )


def variant_name(expr: TypeExpr, *, owner: str) -> str:
    """Name a union variant after the type it carries."""
    if isinstance(expr, NamedType):
        return type_name(expr.name)
    if isinstance(expr, Primitive):
        return _PRIMITIVE_VARIANTS[expr]
    if isinstance(expr, SequenceType):
        return "Vec" + variant_name(expr.item, owner=owner)
    raise UnsupportedSchemaError(owner, "optional union alternative")


def build_record(
    name: str, schema: dict[str, Any], options: GeneratorOptions
) -> Record:
    """Build a Record from a top-level object schema."""
    required = {str(r) for r in schema.get("required") or []}
    field_attributes = _applicable(options.field_annotations, name)
    fields: list[Field] = []
    seen: set[str] = set()

    for prop_name, prop_schema in (schema.get("properties") or {}).items():
        prop_name = str(prop_name)
        ident = field_name(prop_name, owner=name)
        if ident in seen:
            raise NameCollisionError("field", ident, owner=name)
        seen.add(ident)
        fields.append(Field(
            name=ident,
            type=resolve_type(prop_schema, prop_name in required, owner=f"{name}.{prop_name}"),
            attributes=field_attributes,
        ))

    return Record(
        name=type_name(name),
        schema_name=name,
        fields=tuple(fields),
        attributes=container_attributes(name, options),
    )


def build_union(
    name: str, alternatives: list[Any], options: GeneratorOptions
) -> Union:
    """Build a Union with one variant per oneOf/anyOf alternative."""
    variants: list[Variant] = []
    seen: set[str] = set()
    for index, alternative in enumerate(alternatives):
        payload = resolve_type(alternative, True, owner=f"{name}[{index}]")
        tag = variant_name(payload, owner=name)
        if tag in seen:
            raise NameCollisionError("union variant", tag, owner=name)
        seen.add(tag)
        variants.append(Variant(name=tag, payload=payload))

    return Union(
        name=type_name(name),
        schema_name=name,
        variants=tuple(variants),
        attributes=container_attributes(name, options),
    )


def build_definition(entry: NamedSchema, options: GeneratorOptions) -> Definition:
    """Turn one catalogue entry into its definition."""
    name, schema = entry.name, entry.schema
    kind = classify(schema)

    if kind is SchemaKind.OBJECT and is_free_form_object(schema):
        return Alias(type_name(name), name, Primitive.DYNAMIC_MAP)
    if kind is SchemaKind.OBJECT:
        return build_record(name, schema, options)
    if kind is SchemaKind.ARRAY:
        return Alias(type_name(name), name, SequenceType(resolve_array_item(schema, owner=name)))
    if kind is SchemaKind.ONE_OF:
        return build_union(name, list(schema["oneOf"] or []), options)
    if kind is SchemaKind.ANY_OF:
        return build_union(name, list(schema["anyOf"] or []), options)

    return Alias(type_name(name), name, resolve_type(schema, True, owner=name))


def build_module(
    catalogue: list[NamedSchema], options: GeneratorOptions | None = None
) -> GeneratedModule:
    """Build the module for a whole catalogue."""
    options = options or GeneratorOptions()
    module = GeneratedModule()
    for module_path, symbol in options.imports:
        module.add_import(module_path, symbol)

    type_names: set[str] = set()
    for entry in catalogue:
        definition = build_definition(entry, options)
        if definition.name in type_names:
            raise NameCollisionError("type", definition.name, owner=entry.name)
        type_names.add(definition.name)
        logger.debug("Built %s %s from schema %r", definition.kind, definition.name, entry.name)
        module.definitions.append(definition)
    return module
