"""
Streaming JSON reader driven by class models.

Interprets the class models produced by the generator the way the generated
C++ handlers parse JSON, so that the parsing behavior can be exercised
without compiling anything.
"""

from .json_handler import (
    JSON_EVENTS,
    AppendSlot,
    AttributeSlot,
    IgnoreValueJsonHandler,
    IJsonHandler,
    JsonHandler,
    KeySlot,
    Slot,
)
from .json_reader import JsonReader, ReadJsonResult, read_model
from .model_handler import (
    ExtensionReaderContext,
    IExtensionJsonHandler,
    ModelExtensionJsonHandler,
    ModelJsonHandler,
    ModelObject,
)
from .object_handlers import ExtensibleObject, ExtensibleObjectJsonHandler, ExtensionsJsonHandler, ObjectJsonHandler
from .value_handlers import (
    ArrayJsonHandler,
    BoolJsonHandler,
    DictionaryJsonHandler,
    DoubleJsonHandler,
    IntegerJsonHandler,
    JsonObjectJsonHandler,
    StringJsonHandler,
)

__all__ = [
    "JSON_EVENTS",
    "AppendSlot",
    "ArrayJsonHandler",
    "AttributeSlot",
    "BoolJsonHandler",
    "DictionaryJsonHandler",
    "DoubleJsonHandler",
    "ExtensibleObject",
    "ExtensibleObjectJsonHandler",
    "ExtensionReaderContext",
    "ExtensionsJsonHandler",
    "IExtensionJsonHandler",
    "IJsonHandler",
    "IgnoreValueJsonHandler",
    "IntegerJsonHandler",
    "JsonHandler",
    "JsonObjectJsonHandler",
    "JsonReader",
    "KeySlot",
    "ModelExtensionJsonHandler",
    "ModelJsonHandler",
    "ModelObject",
    "ObjectJsonHandler",
    "ReadJsonResult",
    "Slot",
    "StringJsonHandler",
    "read_model",
]
