"""
Handlers for JSON objects with known keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .json_handler import AttributeSlot, JsonHandler, KeySlot, Slot
from .value_handlers import JsonObjectJsonHandler

if TYPE_CHECKING:
    from .model_handler import ExtensionReaderContext


class ExtensibleObject:
    """Root of every parsed object: holds extensions and application extras."""

    def __init__(self):
        self.extensions: dict[str, Any] = {}
        self.extras: dict[str, Any] = {}


class ObjectJsonHandler(JsonHandler):
    """Parses one JSON object, handing each key to a sub-handler."""

    def __init__(self):
        super().__init__()
        self._depth = 0
        self._current_key: str | None = None

    def reset(self, parent):
        super().reset(parent)
        self._depth = 0
        self._current_key = None

    def read_object_start(self):
        self._depth += 1
        if self._depth > 1:
            self._depth -= 1
            return super().read_object_start()
        return self

    def read_object_end(self):
        self._depth -= 1
        return self.parent

    def property(self, key: str, handler: JsonHandler, slot: Slot) -> JsonHandler:
        """Bind ``handler`` to the value of ``key``, stored into ``slot``."""
        self._current_key = key
        return handler.bind(self, slot)

    def report_warning(self, warning, context=None):
        context = list(context or [])
        if self._current_key is not None:
            context.append(f"While parsing property '{self._current_key}'")
        super().report_warning(warning, context)


class ExtensionsJsonHandler(ObjectJsonHandler):
    """Parses the ``extensions`` object of an extensible object."""

    def __init__(self, context: ExtensionReaderContext):
        super().__init__()
        self._context = context
        self._owner: ExtensibleObject | None = None
        self._object_type = ""
        self._generic = JsonObjectJsonHandler()

    def reset_owner(self, parent, owner: ExtensibleObject, object_type: str) -> None:
        self.reset(parent)
        self._owner = owner
        self._object_type = object_type

    def read_object_key(self, key):
        self._current_key = key
        handler = self._context.create_extension_handler(self._object_type, key)
        if handler is None:
            # Extensions nobody registered are kept as plain JSON
            return self._generic.bind(self, KeySlot(self._owner.extensions, key))
        handler.reset_extension(self, self._owner, key)
        return handler


class ExtensibleObjectJsonHandler(ObjectJsonHandler):
    """Root of every class handler: owns ``extensions``, ``extras`` and unknown keys."""

    def __init__(self, context: ExtensionReaderContext):
        super().__init__()
        self.context = context
        self._object: ExtensibleObject | None = None
        self._extras = JsonObjectJsonHandler()
        self._extensions: ExtensionsJsonHandler | None = None

    def reset(self, parent, obj: ExtensibleObject | None = None):
        super().reset(parent)
        self._object = obj

    def bind(self, parent, slot):
        obj = slot.get()
        if obj is None:
            obj = self.create_object()
            slot.set(obj)
        self.reset(parent, obj)
        return self

    def create_object(self) -> ExtensibleObject:
        return ExtensibleObject()

    def read_object_key(self, key):
        return self.read_object_key_extensible_object("ExtensibleObject", key, self._object)

    def read_object_key_extensible_object(self, object_type: str, key: str, obj: ExtensibleObject):
        if key == "extras":
            return self.property("extras", self._extras, AttributeSlot(obj, "extras"))
        if key == "extensions":
            if self._extensions is None:
                self._extensions = ExtensionsJsonHandler(self.context)
            self._current_key = "extensions"
            self._extensions.reset_owner(self, obj, object_type)
            return self._extensions

        self._current_key = None
        self.report_warning(f"Unknown property '{key}' on {object_type} has been ignored.")
        return self.ignore_and_continue()
