"""
Tests for the generated JSON handler declarations and implementations.
"""

from json_schema_to_cpp.pipeline.backends import FORWARDED_EVENTS
from json_schema_to_cpp.reader import JSON_EVENTS


def test_handler_declaration(result):
    header = result.get("Node").handler_header
    assert "class NodeJsonHandler : public NamedObjectJsonHandler {" in header
    assert "  using ValueType = Node;\n" in header
    assert "  NodeJsonHandler(const CesiumJsonReader::ExtensionReaderContext& context) noexcept;\n" in header
    assert "  void reset(IJsonHandler* pParentHandler, Node* pObject);\n" in header
    assert "  virtual IJsonHandler* readObjectKey(const std::string_view& str) override;\n" in header
    assert "  IJsonHandler* readObjectKeyNode(const std::string& objectType, const std::string_view& str, Node& o);\n" in header
    assert "IExtensionJsonHandler" not in header


def test_handler_fields(result):
    header = result.get("Node").handler_header
    assert "  Node* _pObject = nullptr;\n" in header
    assert "  CesiumJsonReader::ArrayJsonHandler<Node, NodeJsonHandler> _children;\n" in header
    assert "  CameraJsonHandler _camera;\n" in header
    assert "  CesiumJsonReader::IntegerJsonHandler<int64_t> _mesh;\n" in header
    assert "  NodeMetadataJsonHandler _metadata;\n" in header
    assert "  CesiumJsonReader::DictionaryJsonHandler<int64_t, CesiumJsonReader::IntegerJsonHandler<int64_t>> _attributes;\n" in header


def test_handler_declaration_includes(result):
    header = result.get("Node").handler_header
    includes = [line for line in header.splitlines() if line.startswith("#include")]
    assert includes == [
        '#include "CameraJsonHandler.h"',
        '#include "NamedObjectJsonHandler.h"',
        '#include "NodeMetadataJsonHandler.h"',
        "#include <CesiumJsonReader/ArrayJsonHandler.h>",
        "#include <CesiumJsonReader/DictionaryJsonHandler.h>",
        "#include <CesiumJsonReader/DoubleJsonHandler.h>",
        "#include <CesiumJsonReader/IntegerJsonHandler.h>",
        "#include <CesiumJsonReader/StringJsonHandler.h>",
        "#include <Sample/Node.h>",
    ]


def test_constructor_passes_context_to_class_fields_only(result):
    source = result.get("Node").handler_source
    assert (
        "NodeJsonHandler::NodeJsonHandler(const CesiumJsonReader::ExtensionReaderContext& context) noexcept"
        " : NamedObjectJsonHandler(context), _children(context), _camera(context), _mesh(), _weight(),"
        " _visibility(), _translation(), _metadata(context), _attributes() {}"
    ) in source


def test_reset_rebinds_base_handler(result):
    source = result.get("Node").handler_source
    assert "void NodeJsonHandler::reset(CesiumJsonReader::IJsonHandler* pParentHandler, Node* pObject) {\n  NamedObjectJsonHandler::reset(pParentHandler, pObject);\n  this->_pObject = pObject;\n}" in source


def test_key_dispatch_falls_back_to_base(result):
    source = result.get("Node").handler_source
    assert "return this->readObjectKeyNode(Node::TypeName, str, *this->_pObject);" in source
    assert '  if ("children"s == str) return property("children", this->_children, o.children);\n' in source
    assert '  if ("attributes"s == str) return property("attributes", this->_attributes, o.attributes);\n' in source
    assert "  return this->readObjectKeyNamedObject(objectType, str, *this->_pObject);\n" in source

    # Key checks keep declaration order
    assert source.index('"children"s') < source.index('"camera"s') < source.index('"attributes"s')

    # Base-owned keys are handled by the root handler
    assert '"extensions"s' not in source
    assert '"extras"s' not in source


def test_root_class_dispatches_to_extensible_object(result):
    source = result.get("Camera").handler_source
    assert "CameraJsonHandler::CameraJsonHandler(const CesiumJsonReader::ExtensionReaderContext& context) noexcept : CesiumJsonReader::ExtensibleObjectJsonHandler(context)" in source
    assert "  return this->readObjectKeyExtensibleObject(objectType, str, *this->_pObject);\n" in source


def test_handler_source_includes_own_headers(result):
    source = result.get("Node").handler_source
    assert source.count('#include "NodeJsonHandler.h"') == 1
    assert "#include <Sample/Node.h>" in source
    assert "#include <any>" not in source


def test_extension_handler_declaration(result):
    header = result.get("ExtensionNodeTag").handler_header
    assert (
        "class ExtensionNodeTagJsonHandler : public CesiumJsonReader::ExtensibleObjectJsonHandler,"
        " public CesiumJsonReader::IExtensionJsonHandler {"
    ) in header
    assert 'static inline constexpr const char* ExtensionName = "EXT_node_tag";' in header
    assert "#include <CesiumJsonReader/IExtensionJsonHandler.h>" in header
    assert (
        "  virtual void reset(IJsonHandler* pParentHandler, CesiumUtility::ExtensibleObject& o, const std::string_view& extensionName) override;\n"
    ) in header


def test_extension_handler_forwards_every_event(result):
    header = result.get("ExtensionNodeTag").handler_header
    assert len(FORWARDED_EVENTS) == len(JSON_EVENTS) == 13
    assert header.count(") override {") == len(FORWARDED_EVENTS)
    assert "  virtual IJsonHandler* readInt32(int32_t i) override {\n    return CesiumJsonReader::ExtensibleObjectJsonHandler::readInt32(i);\n  }" in header
    assert (
        "  virtual void reportWarning(const std::string& warning, std::vector<std::string>&& context = std::vector<std::string>()) override {\n"
        "    CesiumJsonReader::ExtensibleObjectJsonHandler::reportWarning(warning, std::move(context));\n"
        "  }"
    ) in header


def test_extension_reset_inserts_one_instance(result):
    source = result.get("ExtensionNodeTag").handler_source
    assert "#include <any>" in source
    assert source.count("o.extensions.emplace(extensionName, ExtensionNodeTag())") == 1
    assert "this->reset(pParentHandler, &std::any_cast<ExtensionNodeTag&>(value));" in source


def test_register_extensions(result):
    source = result.register_extensions
    assert "void registerExtensions(CesiumJsonReader::ExtensionReaderContext& context) {" in source
    assert "  context.registerExtension<Node, ExtensionNodeTagJsonHandler>();\n" in source
    includes = [line for line in source.splitlines() if line.startswith("#include")]
    assert includes == [
        '#include "registerExtensions.h"',
        '#include "ExtensionNodeTagJsonHandler.h"',
        "#include <Sample/Node.h>",
        "#include <CesiumJsonReader/ExtensionReaderContext.h>",
    ]
