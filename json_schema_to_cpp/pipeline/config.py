"""
Configuration for the code generator pipeline.

The configuration is immutable: it is built once (usually from a JSON file)
and passed explicitly to every resolution call.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .errors import ConfigError


@dataclass(frozen=True)
class ClassConfig:
    """Per-title options for one generated class."""

    # Abstract base shape, only constructible through its concrete sibling
    to_be_inherited: bool = False

    # Whether the generated struct may be derived from
    is_base_class: bool = False

    # Name of the extension payload this class models, if any
    extension_name: str | None = None

    # Class name to use instead of the one derived from the title
    override_name: str | None = None

    # Keys as they appear in the JSON configuration file
    _JSON_KEYS = {
        "toBeInherited": "to_be_inherited",
        "isBaseClass": "is_base_class",
        "extensionName": "extension_name",
        "overrideName": "override_name",
    }

    @staticmethod
    def from_dict(d: dict) -> ClassConfig:
        """Create a class config from its JSON form."""
        if not isinstance(d, dict):
            raise ConfigError(f"Class options must be a JSON object, got {d!r}")
        kwargs = {}
        for k, v in d.items():
            if k not in ClassConfig._JSON_KEYS:
                raise ConfigError(f"Unknown class option '{k}'")
            kwargs[ClassConfig._JSON_KEYS[k]] = v
        return ClassConfig(**kwargs)

    def to_dict(self) -> dict:
        """Convert to the JSON form, omitting options left at their defaults."""
        result = {}
        for json_key, attr in ClassConfig._JSON_KEYS.items():
            value = getattr(self, attr)
            if value:
                result[json_key] = value
        return result


@dataclass(frozen=True)
class ExtensionConfig:
    """An extension schema that can be attached to an owning class."""

    extension_name: str = ""
    schema: str = ""

    @staticmethod
    def from_dict(d: dict) -> ExtensionConfig:
        if not isinstance(d, dict):
            raise ConfigError(f"Extension entry must be a JSON object, got {d!r}")
        try:
            return ExtensionConfig(extension_name=d["extensionName"], schema=d["schema"])
        except KeyError as e:
            raise ConfigError(f"Extension entry is missing {e}") from e


_NO_CLASS_CONFIG = ClassConfig()


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration options for code generation."""

    # Per-title class options
    classes: Mapping[str, ClassConfig] = field(default_factory=lambda: MappingProxyType({}))

    # Owning schema title -> extensions that can attach to it
    extensions: Mapping[str, tuple[ExtensionConfig, ...]] = field(default_factory=lambda: MappingProxyType({}))

    # Base of every class that does not inherit from another schema
    extensible_object_base: str = "CesiumUtility::ExtensibleObject"

    # Header included first by every struct header
    library_header: str = '"Library.h"'

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    def class_config(self, title: str | None) -> ClassConfig:
        """Options for ``title``; classes that are not configured get the defaults."""
        if title is None:
            return _NO_CLASS_CONFIG
        return self.classes.get(title, _NO_CLASS_CONFIG)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        kwargs = {}
        for k, v in d.items():
            if k in ("classes", "extensions") and not isinstance(v, dict):
                raise ConfigError(f"Configuration option '{k}' must be a JSON object")
            if k == "classes":
                kwargs["classes"] = MappingProxyType({title: ClassConfig.from_dict(options) for title, options in v.items()})
            elif k == "extensions":
                if not all(isinstance(entries, list) for entries in v.values()):
                    raise ConfigError("The extensions of each class must be a JSON array")
                kwargs["extensions"] = MappingProxyType({owner: tuple(ExtensionConfig.from_dict(e) for e in entries) for owner, entries in v.items()})
            elif k in ("extensible_object_base", "library_header", "add_generation_comment"):
                kwargs[k] = v
            else:
                raise ConfigError(f"Unknown configuration option '{k}'")
        return GeneratorConfig(**kwargs)

    @staticmethod
    def from_file(path: str | Path) -> GeneratorConfig:
        """Load a config from a JSON file."""
        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
        if not isinstance(d, dict):
            raise ConfigError(f"Configuration file {path} must contain a JSON object")
        return GeneratorConfig.from_dict(d)

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "classes": {title: c.to_dict() for title, c in self.classes.items()},
            "extensions": {owner: [{"extensionName": e.extension_name, "schema": e.schema} for e in entries] for owner, entries in self.extensions.items()},
            "extensible_object_base": self.extensible_object_base,
            "library_header": self.library_header,
            "add_generation_comment": self.add_generation_comment,
        }
