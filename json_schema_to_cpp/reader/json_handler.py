"""
Streaming JSON handler base classes.

A handler receives one JSON event at a time and returns the handler that
receives the next event. A handler that finishes its value returns its
parent, which is how control goes back up once a nested value is closed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Every event a handler receives, except object keys
JSON_EVENTS = (
    "read_null",
    "read_bool",
    "read_int32",
    "read_uint32",
    "read_int64",
    "read_uint64",
    "read_double",
    "read_string",
    "read_object_start",
    "read_object_end",
    "read_array_start",
    "read_array_end",
    "report_warning",
)


class Slot(ABC):
    """Destination of a parsed value."""

    @abstractmethod
    def get(self) -> Any: ...

    @abstractmethod
    def set(self, value: Any) -> None: ...


class AttributeSlot(Slot):
    """An attribute of an object."""

    def __init__(self, obj: Any, attr: str):
        self.obj = obj
        self.attr = attr

    def get(self) -> Any:
        return getattr(self.obj, self.attr, None)

    def set(self, value: Any) -> None:
        setattr(self.obj, self.attr, value)


class AppendSlot(Slot):
    """A new element at the end of a list."""

    def __init__(self, items: list):
        self.items = items

    def get(self) -> Any:
        return None

    def set(self, value: Any) -> None:
        self.items.append(value)


class KeySlot(Slot):
    """The value of one key of a dict."""

    def __init__(self, mapping: dict, key: str):
        self.mapping = mapping
        self.key = key

    def get(self) -> Any:
        return self.mapping.get(self.key)

    def set(self, value: Any) -> None:
        self.mapping[self.key] = value


class IJsonHandler(ABC):
    """Receives JSON events."""

    @abstractmethod
    def read_null(self) -> IJsonHandler | None: ...

    @abstractmethod
    def read_bool(self, value: bool) -> IJsonHandler | None: ...

    @abstractmethod
    def read_int32(self, value: int) -> IJsonHandler | None: ...

    @abstractmethod
    def read_uint32(self, value: int) -> IJsonHandler | None: ...

    @abstractmethod
    def read_int64(self, value: int) -> IJsonHandler | None: ...

    @abstractmethod
    def read_uint64(self, value: int) -> IJsonHandler | None: ...

    @abstractmethod
    def read_double(self, value: float) -> IJsonHandler | None: ...

    @abstractmethod
    def read_string(self, value: str) -> IJsonHandler | None: ...

    @abstractmethod
    def read_object_start(self) -> IJsonHandler | None: ...

    @abstractmethod
    def read_object_key(self, key: str) -> IJsonHandler | None: ...

    @abstractmethod
    def read_object_end(self) -> IJsonHandler | None: ...

    @abstractmethod
    def read_array_start(self) -> IJsonHandler | None: ...

    @abstractmethod
    def read_array_end(self) -> IJsonHandler | None: ...

    @abstractmethod
    def report_warning(self, warning: str, context: list[str] | None = None) -> None: ...


class JsonHandler(IJsonHandler):
    """Handler with a parent continuation.

    Every event is unexpected by default: it is reported as a warning and the
    value is skipped.
    """

    def __init__(self):
        self._parent: IJsonHandler | None = None
        self._ignore: IgnoreValueJsonHandler | None = None

    @property
    def parent(self) -> IJsonHandler | None:
        return self._parent

    def reset(self, parent: IJsonHandler | None) -> None:
        self._parent = parent

    def bind(self, parent: IJsonHandler, slot: Slot) -> JsonHandler:
        """Prepare to parse a value into ``slot``, then continue with ``parent``."""
        self.reset(parent)
        return self

    def ignore_and_return_to_parent(self) -> IgnoreValueJsonHandler:
        if self._ignore is None:
            self._ignore = IgnoreValueJsonHandler()
        self._ignore.reset(self.parent)
        return self._ignore

    def ignore_and_continue(self) -> IgnoreValueJsonHandler:
        if self._ignore is None:
            self._ignore = IgnoreValueJsonHandler()
        self._ignore.reset(self)
        return self._ignore

    def _unexpected(self, kind: str) -> IJsonHandler | None:
        self.report_warning(f"A {kind} value is not allowed and has been ignored.")
        return self.parent

    def read_null(self):
        return self._unexpected("null")

    def read_bool(self, value):
        return self._unexpected("boolean")

    def read_int32(self, value):
        return self._unexpected("integer")

    def read_uint32(self, value):
        return self._unexpected("integer")

    def read_int64(self, value):
        return self._unexpected("integer")

    def read_uint64(self, value):
        return self._unexpected("integer")

    def read_double(self, value):
        return self._unexpected("double")

    def read_string(self, value):
        return self._unexpected("string")

    def read_object_start(self):
        self.report_warning("An object value is not allowed and has been ignored.")
        return self.ignore_and_return_to_parent().read_object_start()

    def read_object_key(self, key):
        return None

    def read_object_end(self):
        return None

    def read_array_start(self):
        self.report_warning("An array value is not allowed and has been ignored.")
        return self.ignore_and_return_to_parent().read_array_start()

    def read_array_end(self):
        return None

    def report_warning(self, warning, context=None):
        if self.parent is not None:
            self.parent.report_warning(warning, context)


class IgnoreValueJsonHandler(JsonHandler):
    """Skips one complete value, however deeply nested."""

    def __init__(self):
        super().__init__()
        self._depth = 0

    def reset(self, parent):
        super().reset(parent)
        self._depth = 0

    def _scalar(self):
        return self.parent if self._depth == 0 else self

    def read_null(self):
        return self._scalar()

    def read_bool(self, value):
        return self._scalar()

    def read_int32(self, value):
        return self._scalar()

    def read_uint32(self, value):
        return self._scalar()

    def read_int64(self, value):
        return self._scalar()

    def read_uint64(self, value):
        return self._scalar()

    def read_double(self, value):
        return self._scalar()

    def read_string(self, value):
        return self._scalar()

    def read_object_start(self):
        self._depth += 1
        return self

    def read_object_key(self, key):
        return self

    def read_object_end(self):
        self._depth -= 1
        return self._scalar()

    def read_array_start(self):
        self._depth += 1
        return self

    def read_array_end(self):
        self._depth -= 1
        return self._scalar()
