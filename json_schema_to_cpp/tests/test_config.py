import json

import pytest

from json_schema_to_cpp.pipeline import ClassConfig, ConfigError, ExtensionConfig, GeneratorConfig


def test_class_config_from_json_keys():
    config = ClassConfig.from_dict({"toBeInherited": True, "extensionName": "EXT_x"})
    assert config.to_be_inherited
    assert not config.is_base_class
    assert config.extension_name == "EXT_x"
    assert config.to_dict() == {"toBeInherited": True, "extensionName": "EXT_x"}


def test_class_config_rejects_unknown_option():
    with pytest.raises(ConfigError, match="isAbstract"):
        ClassConfig.from_dict({"isAbstract": True})


def test_extension_config_requires_both_keys():
    assert ExtensionConfig.from_dict({"extensionName": "EXT_a", "schema": "a.json"}) == ExtensionConfig("EXT_a", "a.json")
    with pytest.raises(ConfigError):
        ExtensionConfig.from_dict({"extensionName": "EXT_a"})


def test_generator_config_defaults():
    config = GeneratorConfig()
    assert config.extensible_object_base == "CesiumUtility::ExtensibleObject"
    assert config.class_config("Anything") == ClassConfig()
    assert config.class_config(None) == ClassConfig()


def test_generator_config_from_file(config):
    assert config.class_config("Named Object").is_base_class
    assert config.class_config("EXT_node_tag glTF extension").override_name == "ExtensionNodeTag"
    assert config.extensions["Node"] == (ExtensionConfig("EXT_node_tag", "schemas/ext_node_tag.json"),)


def test_generator_config_is_immutable(config):
    with pytest.raises(TypeError):
        config.classes["Node"] = ClassConfig()


def test_generator_config_dict_round_trip(config):
    assert GeneratorConfig.from_dict(config.to_dict()) == config


def test_generator_config_errors(tmp_path):
    with pytest.raises(ConfigError, match="Unknown configuration option"):
        GeneratorConfig.from_dict({"namespace": "X"})

    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="JSON object"):
        GeneratorConfig.from_file(path)

    path.write_text("{ not json")
    with pytest.raises(ConfigError):
        GeneratorConfig.from_file(path)

    with pytest.raises(ConfigError):
        GeneratorConfig.from_file(tmp_path / "missing.json")


def test_config_file_is_plain_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"classes": {"Buffer": {"toBeInherited": True}}, "add_generation_comment": False}))
    config = GeneratorConfig.from_file(path)
    assert config.class_config("Buffer").to_be_inherited
    assert not config.add_generation_comment


@pytest.mark.parametrize(
    "d",
    [
        {"classes": {"Node": True}},
        {"classes": ["Node"]},
        {"extensions": {"Node": {"extensionName": "EXT_a", "schema": "a.json"}}},
        {"extensions": {"Node": ["EXT_a"]}},
        {"extensions": True},
    ],
)
def test_malformed_entries_are_config_errors(d):
    with pytest.raises(ConfigError):
        GeneratorConfig.from_dict(d)
