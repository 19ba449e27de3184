"""
Handlers for scalar values, generic JSON values and containers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .json_handler import AppendSlot, JsonHandler, KeySlot, Slot


class ValueJsonHandler(JsonHandler):
    """Handler that stores what it parses into a slot."""

    def __init__(self):
        super().__init__()
        self._slot: Slot | None = None

    def bind(self, parent, slot):
        self.reset(parent)
        self._slot = slot
        return self

    def _store(self, value: Any):
        self._slot.set(value)
        return self.parent


class StringJsonHandler(ValueJsonHandler):
    def read_string(self, value):
        return self._store(value)


class BoolJsonHandler(ValueJsonHandler):
    def read_bool(self, value):
        return self._store(value)


class IntegerJsonHandler(ValueJsonHandler):
    def read_int32(self, value):
        return self._store(value)

    def read_uint32(self, value):
        return self._store(value)

    def read_int64(self, value):
        return self._store(value)

    def read_uint64(self, value):
        return self._store(value)

    def read_double(self, value):
        if value.is_integer():
            return self._store(int(value))
        self.report_warning(f"A non-integer value {value} is not allowed and has been ignored.")
        return self.parent


class DoubleJsonHandler(ValueJsonHandler):
    def read_int32(self, value):
        return self._store(float(value))

    def read_uint32(self, value):
        return self._store(float(value))

    def read_int64(self, value):
        return self._store(float(value))

    def read_uint64(self, value):
        return self._store(float(value))

    def read_double(self, value):
        return self._store(value)


class JsonObjectJsonHandler(ValueJsonHandler):
    """Parses any JSON value into plain dicts, lists and scalars."""

    def __init__(self):
        super().__init__()
        self._stack: list[list | dict] = []
        self._keys: list[str | None] = []

    def bind(self, parent, slot):
        self._stack = []
        self._keys = []
        return super().bind(parent, slot)

    def _add(self, value):
        if not self._stack:
            self._slot.set(value)
            return
        container = self._stack[-1]
        if isinstance(container, list):
            container.append(value)
        else:
            container[self._keys[-1]] = value

    def _value(self, value):
        self._add(value)
        return self if self._stack else self.parent

    def read_null(self):
        return self._value(None)

    def read_bool(self, value):
        return self._value(value)

    def read_int32(self, value):
        return self._value(value)

    def read_uint32(self, value):
        return self._value(value)

    def read_int64(self, value):
        return self._value(value)

    def read_uint64(self, value):
        return self._value(value)

    def read_double(self, value):
        return self._value(value)

    def read_string(self, value):
        return self._value(value)

    def read_object_start(self):
        value: dict = {}
        self._add(value)
        self._stack.append(value)
        self._keys.append(None)
        return self

    def read_object_key(self, key):
        self._keys[-1] = key
        return self

    def read_object_end(self):
        self._stack.pop()
        self._keys.pop()
        return self if self._stack else self.parent

    def read_array_start(self):
        value: list = []
        self._add(value)
        self._stack.append(value)
        self._keys.append(None)
        return self

    def read_array_end(self):
        return self.read_object_end()


class ArrayJsonHandler(ValueJsonHandler):
    """Parses a JSON array, one element at a time, with a single item handler."""

    def __init__(self, item_handler_factory: Callable[[], JsonHandler]):
        super().__init__()
        self._item_handler_factory = item_handler_factory
        self._item_handler: JsonHandler | None = None
        self._items: list | None = None
        self._index = -1

    def bind(self, parent, slot):
        self._items = None
        self._index = -1
        return super().bind(parent, slot)

    def _item(self) -> JsonHandler:
        if self._item_handler is None:
            self._item_handler = self._item_handler_factory()
        self._index += 1
        return self._item_handler.bind(self, AppendSlot(self._items))

    def read_array_start(self):
        if self._items is not None:
            return self._item().read_array_start()
        self._items = []
        self._slot.set(self._items)
        return self

    def read_array_end(self):
        return self.parent

    def read_null(self):
        if self._items is None:
            return super().read_null()
        return self._item().read_null()

    def read_bool(self, value):
        if self._items is None:
            return super().read_bool(value)
        return self._item().read_bool(value)

    def read_int32(self, value):
        if self._items is None:
            return super().read_int32(value)
        return self._item().read_int32(value)

    def read_uint32(self, value):
        if self._items is None:
            return super().read_uint32(value)
        return self._item().read_uint32(value)

    def read_int64(self, value):
        if self._items is None:
            return super().read_int64(value)
        return self._item().read_int64(value)

    def read_uint64(self, value):
        if self._items is None:
            return super().read_uint64(value)
        return self._item().read_uint64(value)

    def read_double(self, value):
        if self._items is None:
            return super().read_double(value)
        return self._item().read_double(value)

    def read_string(self, value):
        if self._items is None:
            return super().read_string(value)
        return self._item().read_string(value)

    def read_object_start(self):
        if self._items is None:
            return super().read_object_start()
        return self._item().read_object_start()

    def report_warning(self, warning, context=None):
        context = list(context or [])
        if self._items is not None:
            context.append(f"While parsing array element {self._index}")
        super().report_warning(warning, context)


class DictionaryJsonHandler(ValueJsonHandler):
    """Parses a JSON object with arbitrary keys into a dict."""

    def __init__(self, value_handler_factory: Callable[[], JsonHandler]):
        super().__init__()
        self._value_handler_factory = value_handler_factory
        self._value_handler: JsonHandler | None = None
        self._values: dict | None = None
        self._current_key: str | None = None

    def bind(self, parent, slot):
        self._values = None
        return super().bind(parent, slot)

    def read_object_start(self):
        if self._values is not None:
            return super().read_object_start()
        self._values = {}
        self._slot.set(self._values)
        return self

    def read_object_key(self, key):
        if self._value_handler is None:
            self._value_handler = self._value_handler_factory()
        self._current_key = key
        return self._value_handler.bind(self, KeySlot(self._values, key))

    def read_object_end(self):
        return self.parent

    def report_warning(self, warning, context=None):
        context = list(context or [])
        if self._current_key is not None:
            context.append(f"While parsing dictionary key '{self._current_key}'")
        super().report_warning(warning, context)
