"""Infer target-language types and models from Swagger schemas.

Handles:
- $ref naming (the model takes the class-cased name of the ref target)
- allOf inheritance (first $ref branch becomes the superclass edge)
- enums, arrays, free-form maps and primitives through the TypeMap
- inline objects nested inside their owner's model
- inherited property flattening and redeclaration suppression
- $ref cycles, direct or indirect, via the ``visiting`` set

Every function returns an ``Inference``; nothing accumulates models on
the side.
"""

from __future__ import annotations

import enum
from typing import Any

from .errors import UnsupportedSchemaError
from .models import EnumModel, EnumValue, Inference, ObjectModel, Property, TypeInfo
from .naming import (
    class_name_from_components,
    class_name_from_ref,
    last_ref_component,
    name_from_components,
)
from .resolver import resolve_refs, resolve_refs_and_all_of
from .type_map import TypeMap, preserved_format

# Composition keywords that describe polymorphism we do not model.
_UNSUPPORTED_KEYWORDS = ("oneOf", "anyOf", "not")


class SchemaKind(enum.Enum):
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    MAP = "map"
    PRIMITIVE = "primitive"
    VOID = "void"


def classify(schema: dict[str, Any]) -> SchemaKind:
    """Classify a fully resolved schema (no top-level $ref or allOf left)."""
    for keyword in _UNSUPPORTED_KEYWORDS:
        if keyword in schema:
            raise UnsupportedSchemaError(f"'{keyword}' schemas are not supported", schema)

    schema_type = schema.get("type")
    if schema_type is not None and not isinstance(schema_type, str):
        raise UnsupportedSchemaError(f"Unsupported schema type {schema_type!r}", schema)

    if "enum" in schema:
        return SchemaKind.ENUM
    if schema_type == "array":
        return SchemaKind.ARRAY
    if schema_type in (None, "object") and "properties" in schema:
        return SchemaKind.OBJECT
    if schema_type == "object" or (schema_type is None and "additionalProperties" in schema):
        return SchemaKind.MAP
    if schema_type is None:
        return SchemaKind.VOID
    return SchemaKind.PRIMITIVE


def _is_inline_object(schema: Any) -> bool:
    return (
        isinstance(schema, dict)
        and "$ref" not in schema
        and schema.get("type") == "object"
        and "properties" in schema
    )


def _superclass_schema(ref_resolved: dict[str, Any]) -> dict[str, Any] | None:
    for branch in ref_resolved.get("allOf") or ():
        if isinstance(branch, dict) and "$ref" in branch:
            return branch
    return None


def _discriminator(schema: dict[str, Any]) -> str | None:
    value = schema.get("discriminator")
    if isinstance(value, dict):
        return value.get("propertyName")
    return value


def infer(
    document: dict[str, Any],
    schema: dict[str, Any] | None,
    default_name: str,
    type_map: TypeMap,
    *,
    visiting: frozenset[str] = frozenset(),
    lineage: tuple[str, ...] = (),
) -> Inference:
    """Infer the type of ``schema`` and every model needed to express it.

    ``default_name`` names the model when the schema is not a $ref.
    ``visiting`` holds the class names under construction on the current
    path; a $ref back into one of them yields its name and no models.
    ``lineage`` is the chain of subclasses that led here through
    superclass edges.
    """
    if not schema:
        return Inference(TypeInfo(type_map.void))
    if not isinstance(schema, dict):
        raise UnsupportedSchemaError("Expected a schema object", schema)

    ref = schema.get("$ref")
    name = class_name_from_ref(ref) if ref else default_name
    spec_name = last_ref_component(ref) if ref else default_name

    if ref:
        if name in visiting:
            return Inference(TypeInfo(name))
        visiting = visiting | {name}

    superclass_schema = _superclass_schema(resolve_refs(schema, document))
    superclass_ref = superclass_schema["$ref"] if superclass_schema else None
    resolved = resolve_refs_and_all_of(schema, document, ignore_ref=superclass_ref)

    kind = classify(resolved)
    if kind is SchemaKind.ENUM:
        return _infer_enum(resolved, name, type_map)

    if kind is SchemaKind.ARRAY:
        items = resolved.get("items")
        if not isinstance(items, dict):
            raise UnsupportedSchemaError("Array schema without 'items'", resolved)
        item = infer(document, items, name, type_map, visiting=visiting)
        return Inference(
            TypeInfo(type_map.array_of(item.type_info.name), item.type_info.format),
            item.models,
        )

    if kind is SchemaKind.OBJECT:
        return _infer_object(
            document, resolved, name, spec_name, superclass_schema, type_map, visiting, lineage,
        )

    if kind is SchemaKind.MAP:
        additional = resolved.get("additionalProperties")
        if isinstance(additional, dict) and additional:
            value = infer(
                document, additional, class_name_from_components(name, "value"), type_map,
                visiting=visiting,
            )
            return Inference(TypeInfo(type_map.map_of(value.type_info.name)), value.models)
        return Inference(TypeInfo(type_map.map_of()))

    if kind is SchemaKind.VOID:
        return Inference(TypeInfo(type_map.void))

    schema_type = resolved["type"]
    fmt = resolved.get("format")
    try:
        type_name = type_map.primitive(schema_type, fmt)
    except UnsupportedSchemaError as exc:
        raise UnsupportedSchemaError(str(exc), resolved) from exc
    return Inference(TypeInfo(type_name, preserved_format(schema_type, fmt)))


def _infer_enum(schema: dict[str, Any], name: str, type_map: TypeMap) -> Inference:
    enum_type = type_map.primitive(schema.get("type") or "string", schema.get("format"))
    values = [
        EnumValue(name=name_from_components(str(value)), value=value)
        for value in schema["enum"]
    ]
    model = EnumModel(
        name=name,
        enum_type=enum_type,
        values=values,
        description=schema.get("description"),
    )
    return Inference(TypeInfo(name), [model])


def _infer_object(
    document: dict[str, Any],
    schema: dict[str, Any],
    name: str,
    spec_name: str,
    superclass_schema: dict[str, Any] | None,
    type_map: TypeMap,
    visiting: frozenset[str],
    lineage: tuple[str, ...],
) -> Inference:
    required = schema.get("required")
    required_names = set(required) if isinstance(required, list) else set()

    properties: list[Property] = []
    nested_models = []
    property_models = []
    for prop_name, prop_schema in (schema.get("properties") or {}).items():
        # Inline objects have no identity of their own in the document, so
        # their class lives inside the owner's class.
        nested = _is_inline_object(prop_schema)
        default_name = class_name_from_components(name, prop_name, skip=1 if nested else 0)
        prop = infer(document, prop_schema, default_name, type_map, visiting=visiting)

        type_name = prop.type_info.name
        if nested:
            nested_models.append(prop.models[0])
            property_models.extend(prop.models[1:])
            type_name = f"{name}.{type_name}"
        else:
            property_models.extend(prop.models)

        properties.append(Property(
            name=name_from_components(prop_name),
            spec_name=prop_name,
            type=type_name,
            format=prop.type_info.format,
            is_required=prop_name in required_names,
            description=prop_schema.get("description") if isinstance(prop_schema, dict) else None,
        ))

    superclass = None
    inherited: list[Property] = []
    superclass_models = []
    if superclass_schema is not None:
        superclass = class_name_from_ref(superclass_schema["$ref"])
        if superclass == name or superclass in lineage:
            raise UnsupportedSchemaError(
                f"Circular inheritance between {name!r} and {superclass!r}", superclass_schema,
            )
        # The superclass itself must be built in full even when it is on
        # the current path, or the inherited properties would be lost.
        sup = infer(
            document, superclass_schema, "", type_map,
            visiting=visiting - {superclass},
            lineage=lineage + (name,),
        )
        superclass_models = sup.models
        super_model = sup.models[0] if sup.models else None
        if isinstance(super_model, ObjectModel):
            inherited = [*super_model.properties, *super_model.inherited_properties]

    own = [p for p in properties if not any(p.same_shape(i) for i in inherited)]

    model = ObjectModel(
        name=name,
        spec_name=spec_name,
        superclass=superclass,
        discriminator=_discriminator(schema),
        properties=own,
        inherited_properties=list(inherited),
        initializer_properties=[*own, *inherited],
        nested_models=nested_models,
        description=schema.get("description"),
    )
    return Inference(TypeInfo(name), [model, *property_models, *superclass_models])
