"""
Property resolution.

Maps one property schema to a ``Property``: the C++ field type, the handler
type that parses it, documentation, default value, headers and the schemas
it depends on.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Collection
from dataclasses import dataclass, replace
from typing import Any

from ...utils import constant_name, snake_to_pascal_case, unique
from ..config import GeneratorConfig
from ..schema_cache import Schema, SchemaCache, child_uri
from .ir_nodes import Property, TypeKind, TypeRef
from .name_resolver import get_name_from_schema

logger = logging.getLogger(__name__)

# Properties owned by the extensible base object
BASE_OWNED_PROPERTIES = ("extensions", "extras")

_READER = "CesiumJsonReader"

# JSON type -> (kind, C++ type, handler type, struct headers, handler headers)
_SCALARS: dict[str, tuple[TypeKind, str, str, tuple[str, ...], tuple[str, ...]]] = {
    "string": (TypeKind.STRING, "std::string", f"{_READER}::StringJsonHandler", ("<string>",), (f"<{_READER}/StringJsonHandler.h>",)),
    "integer": (TypeKind.INTEGER, "int64_t", f"{_READER}::IntegerJsonHandler<int64_t>", ("<cstdint>",), (f"<{_READER}/IntegerJsonHandler.h>",)),
    "number": (TypeKind.NUMBER, "double", f"{_READER}::DoubleJsonHandler", (), (f"<{_READER}/DoubleJsonHandler.h>",)),
    "boolean": (TypeKind.BOOLEAN, "bool", f"{_READER}::BoolJsonHandler", (), (f"<{_READER}/BoolJsonHandler.h>",)),
}


@dataclass(frozen=True)
class _Scope:
    cache: SchemaCache
    config: GeneratorConfig
    class_name: str
    namespace: str


def resolve_property(
    cache: SchemaCache,
    config: GeneratorConfig,
    class_name: str,
    property_name: str,
    property_schema: Any,
    required: Collection[str],
    namespace: str,
) -> Property | None:
    """
    Resolve one property of ``class_name``.

    Must be called while the schema that declares the property is the current
    context of ``cache``, so that relative references resolve correctly.

    Args:
        cache: Schema cache used for $ref resolution
        config: Generator configuration
        class_name: Name of the class declaring the property
        property_name: JSON key of the property
        property_schema: The property's schema
        required: Names of the required properties of the class
        namespace: Target namespace

    Returns:
        The resolved property; a property without a type when its shape is not
        supported; None for properties owned by the base object
    """
    if property_name in BASE_OWNED_PROPERTIES:
        return None

    scope = _Scope(cache, config, class_name, namespace)
    uri = child_uri(cache.current.uri, "properties", property_name) if cache.current else f"#/properties/{property_name}"
    return _resolve(scope, property_name, property_schema, property_name in required, uri)


def _resolve(scope: _Scope, name: str, schema: Any, is_required: bool, uri: str) -> Property:
    if schema is True or schema == {}:
        return _any(name, schema if isinstance(schema, dict) else {})
    if not isinstance(schema, dict):
        return _unsupported(name, {}, "schema is not an object")

    if "$ref" in schema:
        return _resolve_ref(scope, name, schema, is_required)
    if _is_enum(schema):
        return _resolve_enum(name, schema, is_required)

    all_of = schema.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1 and "type" not in schema:
        nested = _resolve(scope, name, all_of[0], is_required, child_uri(uri, "allOf", "0"))
        return _with_docs(nested, schema)

    kind = schema.get("type")
    if isinstance(kind, str) and kind in _SCALARS:
        return _resolve_scalar(name, schema, kind, is_required)
    if kind == "array":
        return _resolve_array(scope, name, schema, uri)
    if kind == "object":
        return _resolve_object(scope, name, schema, uri)
    if kind is None and not any(k in schema for k in ("oneOf", "anyOf", "not", "allOf")):
        return _any(name, schema)
    return _unsupported(name, schema, f"type {kind!r} cannot be mapped")


def _docs(schema: dict) -> dict[str, Any]:
    brief = schema.get("description")
    full = schema.get("gltf_detailedDescription") or schema.get("detailedDescription")
    return {"brief_doc": brief, "full_doc": full if full != brief else None}


def _with_docs(prop: Property, schema: dict) -> Property:
    """Let the referencing schema's documentation win over the target's."""
    docs = {k: v for k, v in _docs(schema).items() if v}
    return replace(prop, **docs) if docs else prop


def _unsupported(name: str, schema: dict, reason: str) -> Property:
    logger.debug("Property %s is not materialized: %s", name, reason)
    return Property(name=name, **_docs(schema))


def _any(name: str, schema: dict) -> Property:
    return Property(
        name=name,
        type="CesiumUtility::JsonValue",
        reader_type=f"{_READER}::JsonObjectJsonHandler",
        headers=("<CesiumUtility/JsonValue.h>",),
        reader_headers=(f"<{_READER}/JsonObjectJsonHandler.h>",),
        type_ref=TypeRef(TypeKind.ANY),
        default_json=schema.get("default"),
        **_docs(schema),
    )


def _make_optional(cpp_type: str, is_required: bool, has_default: bool) -> tuple[str, tuple[str, ...], bool]:
    # An empty string is a usable "absent" value, so strings are never wrapped
    if is_required or has_default or cpp_type == "std::string":
        return cpp_type, (), False
    return f"std::optional<{cpp_type}>", ("<optional>",), True


def format_default(value: Any, kind: TypeKind) -> str | None:
    """Format a JSON default as a C++ initializer; None when no initializer is needed."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}.0" if kind == TypeKind.NUMBER else str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, list):
        if not value:
            return None
        items = [format_default(item, kind) for item in value]
        if any(item is None for item in items):
            return None
        return "{ " + ", ".join(items) + " }"
    return None


def _resolve_scalar(name: str, schema: dict, kind: str, is_required: bool) -> Property:
    type_kind, cpp_type, reader_type, headers, reader_headers = _SCALARS[kind]
    default = format_default(schema.get("default"), type_kind)
    cpp_type, optional_headers, is_optional = _make_optional(cpp_type, is_required, default is not None)
    return Property(
        name=name,
        type=cpp_type,
        reader_type=reader_type,
        default_value=default,
        needs_initialization=default is None and not is_optional and type_kind != TypeKind.STRING,
        headers=headers + optional_headers,
        reader_headers=reader_headers,
        type_ref=TypeRef(type_kind, is_optional=is_optional),
        default_json=schema.get("default"),
        **_docs(schema),
    )


def _enum_entries(schema: dict) -> list[tuple[Any, dict]]:
    """(value, entry schema) pairs of an enum, from ``enum`` or ``anyOf`` consts."""
    if isinstance(schema.get("enum"), list):
        return [(value, {}) for value in schema["enum"]]
    entries = []
    for entry in schema.get("anyOf") or ():
        if isinstance(entry, dict) and "const" in entry:
            entries.append((entry["const"], entry))
        elif isinstance(entry, dict) and isinstance(entry.get("enum"), list) and len(entry["enum"]) == 1:
            entries.append((entry["enum"][0], entry))
    return entries


def _is_enum(schema: dict) -> bool:
    entries = _enum_entries(schema)
    if not entries:
        return False
    values = [value for value, _ in entries]
    if all(isinstance(v, str) for v in values):
        return True
    return all(isinstance(v, int) and not isinstance(v, bool) for v in values)


def _enum_constant_name(value: Any, entry: dict) -> str:
    label = entry.get("title") or entry.get("description")
    if isinstance(label, str) and label and " " not in label.strip():
        return constant_name(label)
    return constant_name(value)


def _resolve_enum(name: str, schema: dict, is_required: bool) -> Property:
    entries = _enum_entries(schema)
    is_string = isinstance(entries[0][0], str)
    kind = "string" if is_string else "integer"
    type_kind, cpp_type, reader_type, headers, reader_headers = _SCALARS[kind]
    enum_name = snake_to_pascal_case(name)

    names = {}
    lines = []
    for value, entry in entries:
        const = _enum_constant_name(value, entry)
        if const in names.values():
            continue
        names[value] = const
        if is_string:
            lines.append(f"inline static const std::string {const} = {json.dumps(value)};")
        else:
            lines.append(f"static constexpr int64_t {const} = {value};")

    body = "\n".join("  " + line for line in lines)
    local_type = f"/**\n * @brief Known values for {name}.\n */\nstruct {enum_name} {{\n{body}\n}};"

    default_json = schema.get("default")
    if isinstance(default_json, (str, int)) and default_json in names:
        default = f"{enum_name}::{names[default_json]}"
    else:
        default = format_default(default_json, type_kind)
    cpp_type, optional_headers, is_optional = _make_optional(cpp_type, is_required, default is not None)

    return Property(
        name=name,
        type=cpp_type,
        reader_type=reader_type,
        default_value=default,
        needs_initialization=default is None and not is_optional and not is_string,
        headers=headers + optional_headers,
        reader_headers=reader_headers,
        local_types=(local_type,),
        type_ref=TypeRef(type_kind, is_optional=is_optional),
        default_json=default_json,
        **_docs(schema),
    )


def _is_class_schema(schema: dict) -> bool:
    if "properties" in schema or "allOf" in schema:
        return not _is_enum(schema)
    return schema.get("type") == "object" and "additionalProperties" not in schema


def _class_property(scope: _Scope, name: str, target: Schema, doc_schema: dict, is_required: bool) -> Property:
    type_name = get_name_from_schema(scope.config, target)
    cpp_type, optional_headers, is_optional = _make_optional(type_name, is_required, False)
    docs = _docs(doc_schema)
    if not docs["brief_doc"]:
        docs = _docs(target.raw)
    return Property(
        name=name,
        type=cpp_type,
        reader_type=f"{type_name}JsonHandler",
        headers=(f'"{type_name}.h"',) + optional_headers,
        reader_headers=(f'"{type_name}JsonHandler.h"',),
        schemas=(target,),
        type_ref=TypeRef(TypeKind.CLASS, name=type_name, is_optional=is_optional),
        **docs,
    )


def _resolve_ref(scope: _Scope, name: str, schema: dict, is_required: bool) -> Property:
    target = scope.cache.load(schema["$ref"])
    if _is_class_schema(target.raw):
        return _class_property(scope, name, target, schema, is_required)

    # Aliases such as an id schema resolve to the aliased type
    with scope.cache.context(target):
        resolved = _resolve(scope, name, target.raw, is_required, target.uri)
    return _with_docs(resolved, schema)


def _resolve_array(scope: _Scope, name: str, schema: dict, uri: str) -> Property:
    items = schema.get("items", {})
    item = _resolve(scope, name, items, True, child_uri(uri, "items"))
    if not item.is_materialized:
        return _unsupported(name, schema, "array items cannot be mapped")

    type_kind = item.type_ref.kind if item.type_ref else TypeKind.ANY
    return Property(
        name=name,
        type=f"std::vector<{item.type}>",
        reader_type=f"{_READER}::ArrayJsonHandler<{item.type}, {item.reader_type}>",
        default_value=format_default(schema.get("default"), type_kind),
        headers=tuple(unique(("<vector>",) + item.headers)),
        reader_headers=tuple(unique((f"<{_READER}/ArrayJsonHandler.h>",) + item.reader_headers)),
        reader_headers_impl=item.reader_headers_impl,
        local_types=item.local_types,
        reader_local_types=item.reader_local_types,
        reader_local_types_impl=item.reader_local_types_impl,
        schemas=item.schemas,
        type_ref=TypeRef(TypeKind.ARRAY, type_args=(item.type_ref,)),
        default_json=schema.get("default"),
        **_docs(schema),
    )


def _resolve_object(scope: _Scope, name: str, schema: dict, uri: str) -> Property:
    additional = schema.get("additionalProperties")
    if isinstance(additional, dict) and "properties" not in schema:
        value = _resolve(scope, name, additional, True, child_uri(uri, "additionalProperties"))
        if not value.is_materialized:
            return _unsupported(name, schema, "dictionary values cannot be mapped")
        return Property(
            name=name,
            type=f"std::unordered_map<std::string, {value.type}>",
            reader_type=f"{_READER}::DictionaryJsonHandler<{value.type}, {value.reader_type}>",
            headers=tuple(unique(("<string>", "<unordered_map>") + value.headers)),
            reader_headers=tuple(unique((f"<{_READER}/DictionaryJsonHandler.h>",) + value.reader_headers)),
            reader_headers_impl=value.reader_headers_impl,
            local_types=value.local_types,
            reader_local_types=value.reader_local_types,
            reader_local_types_impl=value.reader_local_types_impl,
            schemas=value.schemas,
            type_ref=TypeRef(TypeKind.DICT, type_args=(value.type_ref,)),
            **_docs(schema),
        )

    if "properties" in schema:
        # Nested inline type: generated as a class of its own
        default_title = scope.class_name + snake_to_pascal_case(name)
        target = scope.cache.register(Schema.from_dict(schema, uri, default_title))
        return _class_property(scope, name, target, {}, True)

    return _any(name, schema)
