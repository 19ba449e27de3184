"""
Tests for mapping property schemas to C++ fields and handlers.
"""

import pytest
from conftest import SCHEMAS

from json_schema_to_cpp.pipeline import GeneratorConfig, SchemaCache
from json_schema_to_cpp.pipeline.analyzer import TypeKind, resolve_property
from json_schema_to_cpp.pipeline.analyzer.property_resolver import format_default


@pytest.fixture
def cache():
    cache = SchemaCache()
    cache.push_context(cache.load_file(SCHEMAS / "node.json"))
    return cache


def resolve(cache, name, schema, required=()):
    return resolve_property(cache, GeneratorConfig(), "Thing", name, schema, set(required), "Sample")


def test_base_owned_properties_are_skipped(cache):
    assert resolve(cache, "extensions", {}) is None
    assert resolve(cache, "extras", {}) is None


@pytest.mark.parametrize(
    "kind,cpp_type,reader_type",
    [
        ("integer", "int64_t", "CesiumJsonReader::IntegerJsonHandler<int64_t>"),
        ("number", "double", "CesiumJsonReader::DoubleJsonHandler"),
        ("boolean", "bool", "CesiumJsonReader::BoolJsonHandler"),
    ],
)
def test_required_scalars(cache, kind, cpp_type, reader_type):
    prop = resolve(cache, "value", {"type": kind}, required=["value"])
    assert prop.type == cpp_type
    assert prop.reader_type == reader_type
    assert prop.needs_initialization
    assert prop.default_value is None


def test_optional_scalar(cache):
    prop = resolve(cache, "count", {"type": "integer", "description": "How many."})
    assert prop.type == "std::optional<int64_t>"
    assert set(prop.headers) == {"<cstdint>", "<optional>"}
    assert prop.reader_headers == ("<CesiumJsonReader/IntegerJsonHandler.h>",)
    assert not prop.needs_initialization
    assert prop.brief_doc == "How many."
    assert prop.type_ref.is_optional


def test_strings_are_never_optional(cache):
    prop = resolve(cache, "name", {"type": "string"})
    assert prop.type == "std::string"
    assert not prop.needs_initialization
    assert not prop.type_ref.is_optional


def test_scalar_defaults(cache):
    assert resolve(cache, "scale", {"type": "number", "default": 1}).default_value == "1.0"
    assert resolve(cache, "scale", {"type": "number", "default": 0.5}).default_value == "0.5"
    assert resolve(cache, "count", {"type": "integer", "default": 3}).type == "int64_t"
    assert resolve(cache, "flag", {"type": "boolean", "default": False}).default_value == "false"
    assert resolve(cache, "label", {"type": "string", "default": 'say "hi"'}).default_value == '"say \\"hi\\""'


def test_format_default():
    assert format_default([1, 0], TypeKind.NUMBER) == "{ 1.0, 0.0 }"
    assert format_default([], TypeKind.NUMBER) is None
    assert format_default({"a": 1}, TypeKind.ANY) is None
    assert format_default(None, TypeKind.STRING) is None


def test_string_enum(cache):
    prop = resolve(cache, "alphaMode", {"type": "string", "enum": ["OPAQUE", "MASK", "BLEND"], "default": "OPAQUE"})
    assert prop.type == "std::string"
    assert prop.default_value == "AlphaMode::OPAQUE"
    (local_type,) = prop.local_types
    assert "struct AlphaMode {" in local_type
    assert 'inline static const std::string MASK = "MASK";' in local_type


def test_integer_enum_from_any_of(cache):
    schema = {
        "anyOf": [
            {"const": 5121, "description": "UNSIGNED_BYTE"},
            {"const": 5123, "description": "UNSIGNED_SHORT"},
            {"type": "integer"},
        ],
    }
    prop = resolve(cache, "componentType", schema, required=["componentType"])
    assert prop.type == "int64_t"
    assert "static constexpr int64_t UNSIGNED_BYTE = 5121;" in prop.local_types[0]
    assert prop.needs_initialization


def test_reference_to_class(cache):
    prop = resolve(cache, "camera", {"$ref": "camera.json"})
    assert prop.type == "std::optional<Camera>"
    assert prop.reader_type == "CameraJsonHandler"
    assert '"Camera.h"' in prop.headers
    assert prop.reader_headers == ('"CameraJsonHandler.h"',)
    assert [s.title for s in prop.schemas] == ["Camera"]
    assert prop.needs_context
    # The target's description is used when the reference has none
    assert prop.brief_doc == "A camera's projection."


def test_reference_to_alias(cache):
    prop = resolve(cache, "mesh", {"allOf": [{"$ref": "id.json"}], "description": "The mesh."}, required=["mesh"])
    assert prop.type == "int64_t"
    assert prop.brief_doc == "The mesh."
    assert prop.schemas == ()
    assert cache.current.title == "Node"


def test_array_bubbles_up_item_attributes(cache):
    prop = resolve(cache, "cameras", {"type": "array", "items": {"$ref": "camera.json"}})
    assert prop.type == "std::vector<Camera>"
    assert prop.reader_type == "CesiumJsonReader::ArrayJsonHandler<Camera, CameraJsonHandler>"
    assert set(prop.headers) == {"<vector>", '"Camera.h"'}
    assert set(prop.reader_headers) == {"<CesiumJsonReader/ArrayJsonHandler.h>", '"CameraJsonHandler.h"'}
    assert [s.title for s in prop.schemas] == ["Camera"]
    assert prop.type_ref.kind == TypeKind.ARRAY
    assert prop.type_ref.type_args[0].name == "Camera"


def test_dictionary(cache):
    prop = resolve(cache, "attributes", {"type": "object", "additionalProperties": {"type": "integer"}})
    assert prop.type == "std::unordered_map<std::string, int64_t>"
    assert prop.reader_type == "CesiumJsonReader::DictionaryJsonHandler<int64_t, CesiumJsonReader::IntegerJsonHandler<int64_t>>"
    assert prop.type_ref.kind == TypeKind.DICT


def test_inline_object_becomes_a_class(cache):
    prop = resolve(cache, "metadata", {"type": "object", "properties": {"author": {"type": "string"}}})
    assert prop.type == "ThingMetadata"
    (schema,) = prop.schemas
    assert schema.title == "ThingMetadata"
    assert schema.uri.endswith("node.json#/properties/metadata")


def test_untyped_values_map_to_json_value(cache):
    for schema in ({}, True, {"type": "object"}, {"description": "Anything."}):
        prop = resolve(cache, "payload", schema)
        assert prop.type == "CesiumUtility::JsonValue"
        assert prop.type_ref.kind == TypeKind.ANY


@pytest.mark.parametrize(
    "schema",
    [
        {"type": ["string", "null"]},
        {"oneOf": [{"type": "string"}, {"type": "integer"}]},
        {"not": {"type": "string"}},
        {"type": "array", "items": {"oneOf": [{"type": "string"}, {"type": "integer"}]}},
    ],
)
def test_unsupported_shapes_are_not_materialized(cache, schema):
    prop = resolve(cache, "odd", schema)
    assert prop is not None
    assert not prop.is_materialized
    assert prop.type_ref is None


def test_missing_reference_is_fatal(cache):
    from json_schema_to_cpp.pipeline import SchemaLoadError

    with pytest.raises(SchemaLoadError):
        resolve(cache, "ghost", {"$ref": "ghost.json"})
