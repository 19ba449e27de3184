"""
Tests for the generated struct headers.
"""

from conftest import NAMESPACE, SCHEMAS

from json_schema_to_cpp.pipeline import ClassGenerator, GeneratorConfig, SchemaCache


def generate(config, name):
    cache = SchemaCache()
    return ClassGenerator(cache, config, NAMESPACE).generate(cache.load_file(SCHEMAS / name))


def test_node_struct(result):
    header = result.get("Node").struct_header
    assert header.startswith("// This file was generated by json_schema_to_cpp.\n// DO NOT EDIT THIS FILE!\n#pragma once\n")
    assert "namespace Sample {" in header
    assert "struct SAMPLE_API Node final : public NamedObject {" in header
    assert 'static inline constexpr const char* TypeName = "Node";' in header
    assert "ExtensionName" not in header


def test_node_fields(result):
    header = result.get("Node").struct_header
    assert "  std::vector<Node> children;\n" in header
    assert "  std::optional<Camera> camera;\n" in header
    assert "  std::optional<int64_t> mesh;\n" in header
    assert "  double weight = 1.0;\n" in header
    assert "  std::string visibility = Visibility::VISIBLE;\n" in header
    assert "  std::vector<double> translation = { 0.0, 0.0, 0.0 };\n" in header
    assert "  NodeMetadata metadata;\n" in header
    assert "  std::unordered_map<std::string, int64_t> attributes;\n" in header


def test_node_includes(result):
    header = result.get("Node").struct_header
    includes = [line for line in header.splitlines() if line.startswith("#include")]
    assert includes == [
        '#include "Camera.h"',
        '#include "Library.h"',
        '#include "NamedObject.h"',
        '#include "NodeMetadata.h"',
        "#include <cstdint>",
        "#include <optional>",
        "#include <string>",
        "#include <unordered_map>",
        "#include <vector>",
    ]


def test_documentation_blocks(result):
    header = result.get("Node").struct_header
    assert "/**\n * @brief A node in the node hierarchy.\n */\nstruct" in header
    assert "  /**\n   * @brief The child nodes.\n   */\n  std::vector<Node> children;" in header


def test_local_types_come_before_fields(result):
    header = result.get("Node").struct_header
    assert header.index("struct Visibility {") < header.index("std::vector<Node> children;")
    assert '    inline static const std::string HIDDEN = "hidden";' in header


def test_values_without_implicit_zero_are_initialized(result):
    header = result.get("Camera").struct_header
    assert "  double znear = double();\n" in header
    assert "  std::string type;\n" in header
    assert "  std::optional<double> zfar;\n" in header


def test_base_class_is_not_sealed(result):
    header = result.get("NamedObject").struct_header
    assert "struct SAMPLE_API NamedObject : public CesiumUtility::ExtensibleObject {" in header
    assert 'TypeName = "Named Object";' in header
    assert "#include <CesiumUtility/ExtensibleObject.h>" in header


def test_extension_struct(result):
    header = result.get("ExtensionNodeTag").struct_header
    assert "struct SAMPLE_API ExtensionNodeTag final : public CesiumUtility::ExtensibleObject {" in header
    assert 'static inline constexpr const char* ExtensionName = "EXT_node_tag";' in header
    assert "  int64_t priority = 0;\n" in header


def test_to_be_inherited_emits_spec_shape():
    config = GeneratorConfig.from_dict({"classes": {"Camera": {"toBeInherited": True}}})
    generated = generate(config, "camera.json")
    assert generated.struct_file_name == "CameraSpec.h"
    header = generated.struct_header
    assert "struct SAMPLE_API CameraSpec : public CesiumUtility::ExtensibleObject {" in header
    assert "private:\n" in header
    assert "  CameraSpec() = default;\n  friend struct Camera;\n" in header

    # The handler still parses the concrete type
    assert generated.handler_header_file_name == "CameraJsonHandler.h"
    assert "using ValueType = Camera;" in generated.handler_header


def test_sealed_struct_has_no_private_section(result):
    assert "private:" not in result.get("Camera").struct_header


def test_generation_comment_can_be_disabled():
    config = GeneratorConfig(add_generation_comment=False)
    generated = generate(config, "camera.json")
    assert generated.struct_header.startswith("#pragma once\n")
    assert "DO NOT EDIT" not in generated.handler_source


def test_root_class_declares_its_own_fields():
    generated = generate(GeneratorConfig(), "tree_node.json")
    header = generated.struct_header
    assert "struct SAMPLE_API Node final : public CesiumUtility::ExtensibleObject {" in header
    assert "  std::string name;\n" in header
    assert "  std::vector<Node> children;\n" in header
    assert '"Node.h"' not in header
    assert '"NodeJsonHandler.h"' not in generated.handler_header
    assert [schema.title for schema in generated.dependencies] == ["Node"]
