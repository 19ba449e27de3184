"""
Handlers driven by class models.

``ModelJsonHandler`` parses a class described by a ``ClassModel`` the same
way the generated C++ handler does: the key is matched against the class's
own dispatch table, then against each ancestor's table in turn, and finally
handed to the extensible root, which owns ``extensions``, ``extras`` and the
warning for unknown keys. The type name reported in that warning is the one
of the most derived class being parsed.
"""

from __future__ import annotations

import copy
from abc import abstractmethod
from collections.abc import Iterable
from typing import Any

from ..pipeline.analyzer.ir_nodes import ClassModel, Property, TypeKind, TypeRef
from .json_handler import AttributeSlot, IJsonHandler, JsonHandler
from .object_handlers import ExtensibleObject, ExtensibleObjectJsonHandler
from .value_handlers import (
    ArrayJsonHandler,
    BoolJsonHandler,
    DictionaryJsonHandler,
    DoubleJsonHandler,
    IntegerJsonHandler,
    JsonObjectJsonHandler,
    StringJsonHandler,
)

_SCALAR_HANDLERS = {
    TypeKind.STRING: StringJsonHandler,
    TypeKind.INTEGER: IntegerJsonHandler,
    TypeKind.NUMBER: DoubleJsonHandler,
    TypeKind.BOOLEAN: BoolJsonHandler,
    TypeKind.ANY: JsonObjectJsonHandler,
}

_ZERO_VALUES = {
    TypeKind.STRING: "",
    TypeKind.INTEGER: 0,
    TypeKind.NUMBER: 0.0,
    TypeKind.BOOLEAN: False,
}


class ModelObject(ExtensibleObject):
    """An instance of a generated class."""

    def __init__(self, type_name: str):
        super().__init__()
        self.type_name = type_name

    def __eq__(self, other):
        return isinstance(other, ModelObject) and vars(self) == vars(other)

    __hash__ = None

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if k != "type_name")
        return f"{self.type_name}({fields})"


class IExtensionJsonHandler(IJsonHandler):
    """Handler that can parse an extension into the object that owns it."""

    @abstractmethod
    def reset_extension(self, parent: IJsonHandler, owner: ExtensibleObject, extension_name: str) -> None:
        """Insert a new instance under ``extension_name`` in ``owner`` and make it the parse target."""


class ExtensionReaderContext:
    """Shared parsing context: class models and registered extensions."""

    def __init__(self, models: Iterable[ClassModel] = ()):
        self._models: dict[str, ClassModel] = {}
        self._extensions: dict[tuple[str, str], str] = {}
        for model in models:
            self.add_model(model)

    @staticmethod
    def from_result(result) -> ExtensionReaderContext:
        """Context for every class of a ``GenerationResult``, with its extensions registered."""
        context = ExtensionReaderContext(result.models)
        for registration in result.registrations:
            context.register_extension(registration.owner, registration.extension)
        return context

    def add_model(self, model: ClassModel) -> None:
        self._models[model.name] = model

    def model(self, name: str) -> ClassModel:
        try:
            return self._models[name]
        except KeyError:
            raise KeyError(f"No class model named '{name}'") from None

    def chain(self, name: str) -> list[ClassModel]:
        """``name``'s model followed by its ancestors, most derived first."""
        chain = [self.model(name)]
        while chain[-1].base_class_name is not None:
            chain.append(self.model(chain[-1].base_class_name))
        return chain

    def register_extension(self, owner: str, extension: str) -> None:
        """Let objects of class ``owner`` carry the extension modeled by class ``extension``."""
        model = self.model(extension)
        if not model.extension_name:
            raise ValueError(f"Class '{extension}' is not configured as an extension")
        self._extensions[(self.model(owner).title, model.extension_name)] = extension

    def create_extension_handler(self, object_type: str, extension_name: str) -> IExtensionJsonHandler | None:
        extension = self._extensions.get((object_type, extension_name))
        if extension is None:
            return None
        return ModelExtensionJsonHandler(self, extension)

    def create_object(self, name: str) -> ModelObject:
        """A default-constructed instance of class ``name``, ancestors' fields included."""
        chain = self.chain(name)
        obj = ModelObject(chain[0].title)
        for model in reversed(chain):
            for prop in model.materialized_properties:
                setattr(obj, prop.name, self.default_value(prop))
        return obj

    def default_value(self, prop: Property) -> Any:
        if prop.default_json is not None:
            return copy.deepcopy(prop.default_json)
        type_ref = prop.type_ref
        if type_ref is None or type_ref.is_optional:
            return None
        if type_ref.kind == TypeKind.ARRAY:
            return []
        if type_ref.kind == TypeKind.DICT:
            return {}
        if type_ref.kind == TypeKind.CLASS:
            return self.create_object(type_ref.name)
        return _ZERO_VALUES.get(type_ref.kind)

    def create_handler(self, type_ref: TypeRef) -> JsonHandler:
        """The handler that parses values of ``type_ref``."""
        if type_ref.kind == TypeKind.CLASS:
            return ModelJsonHandler(self, type_ref.name)
        if type_ref.kind == TypeKind.ARRAY:
            item = type_ref.type_args[0]
            return ArrayJsonHandler(lambda: self.create_handler(item))
        if type_ref.kind == TypeKind.DICT:
            value = type_ref.type_args[0]
            return DictionaryJsonHandler(lambda: self.create_handler(value))
        return _SCALAR_HANDLERS[type_ref.kind]()


class ModelJsonHandler(ExtensibleObjectJsonHandler):
    """Parses instances of one class model."""

    def __init__(self, context: ExtensionReaderContext, class_name: str):
        super().__init__(context)
        self._chain = context.chain(class_name)
        self.model = self._chain[0]
        # Sub-handlers are created on first use; recursive classes would never end otherwise
        self._handlers: dict[tuple[str, str], JsonHandler] = {}

    def create_object(self) -> ModelObject:
        return self.context.create_object(self.model.name)

    def read_object_key(self, key):
        assert self._object is not None
        return self.read_object_key_model(self.model.title, key, self._object)

    def read_object_key_model(self, object_type: str, key: str, obj: ModelObject):
        for model in self._chain:
            for entry in model.dispatch_table:
                if entry.key == key:
                    return self.property(key, self._handler(model, entry.property), AttributeSlot(obj, key))
        return self.read_object_key_extensible_object(object_type, key, obj)

    def _handler(self, model: ClassModel, prop: Property) -> JsonHandler:
        handler = self._handlers.get((model.name, prop.name))
        if handler is None:
            handler = self.context.create_handler(prop.type_ref)
            self._handlers[(model.name, prop.name)] = handler
        return handler


class ModelExtensionJsonHandler(ModelJsonHandler, IExtensionJsonHandler):
    """Parses an extension class into the extension collection of its owner.

    Every JSON event is the one of ``ModelJsonHandler``: an extension parses
    exactly like the class does when parsed directly.
    """

    def reset_extension(self, parent, owner, extension_name):
        obj = owner.extensions.setdefault(extension_name, self.create_object())
        self.reset(parent, obj)
