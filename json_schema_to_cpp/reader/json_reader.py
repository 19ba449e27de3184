"""
Drives a handler chain over a JSON document.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .json_handler import IJsonHandler, JsonHandler, Slot
from .model_handler import ExtensionReaderContext, ModelJsonHandler

logger = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT64_MIN = -(2**63)
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1

_TOO_DEEP = "JSON parsing error: the document is nested too deeply."


@dataclass
class ReadJsonResult:
    """Outcome of reading one document."""

    value: Any = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class _Pairs(list):
    """Key/value pairs of a JSON object, in document order, duplicates included."""


class _ValueSlot(Slot):
    def __init__(self):
        self.value = None

    def get(self):
        return self.value

    def set(self, value):
        self.value = value


class _FinalJsonHandler(JsonHandler):
    """Parent of the root handler: collects warnings once they reach the top."""

    def __init__(self, warnings: list[str]):
        super().__init__()
        self._warnings = warnings

    def report_warning(self, warning, context=None):
        message = warning
        if context:
            message = "\n".join([warning, *context])
        logger.debug("JSON warning: %s", message)
        self._warnings.append(message)


def _events(value) -> Iterator[tuple[str, tuple]]:
    """JSON events of ``value``, with integers sized the way RapidJSON sizes them."""
    if value is None:
        yield "read_null", ()
    elif isinstance(value, bool):
        yield "read_bool", (value,)
    elif isinstance(value, int):
        if 0 <= value <= UINT32_MAX:
            yield "read_uint32", (value,)
        elif INT32_MIN <= value < 0:
            yield "read_int32", (value,)
        elif 0 <= value <= UINT64_MAX:
            yield "read_uint64", (value,)
        elif INT64_MIN <= value < 0:
            yield "read_int64", (value,)
        else:
            yield "read_double", (float(value),)
    elif isinstance(value, float):
        yield "read_double", (value,)
    elif isinstance(value, str):
        yield "read_string", (value,)
    elif isinstance(value, _Pairs):
        yield "read_object_start", ()
        for key, item in value:
            yield "read_object_key", (key,)
            yield from _events(item)
        yield "read_object_end", ()
    else:
        yield "read_array_start", ()
        for item in value:
            yield from _events(item)
        yield "read_array_end", ()


class JsonReader:
    """Reads JSON documents with streaming handlers."""

    @staticmethod
    def read(data: str | bytes, handler: JsonHandler) -> ReadJsonResult:
        """
        Parse ``data`` with ``handler`` as the root handler.

        Args:
            data: The JSON document
            handler: Handler of the root value

        Returns:
            The parsed value with the errors and warnings of the parse
        """
        result = ReadJsonResult()
        try:
            document = json.loads(data, object_pairs_hook=_Pairs)
        except ValueError as e:
            result.errors.append(f"JSON parsing error: {e}")
            return result
        except RecursionError:
            result.errors.append(_TOO_DEEP)
            return result

        slot = _ValueSlot()
        final = _FinalJsonHandler(result.warnings)
        current: IJsonHandler | None = handler.bind(final, slot)

        try:
            for event, args in _events(document):
                if current is None:
                    result.errors.append(f"Unexpected JSON event '{event}'.")
                    return result
                current = getattr(current, event)(*args)
        except RecursionError:
            result.errors.append(_TOO_DEEP)
            return result

        result.value = slot.value
        return result


def read_model(data: str | bytes, context: ExtensionReaderContext, class_name: str) -> ReadJsonResult:
    """Parse ``data`` as an instance of the class ``class_name``."""
    return JsonReader.read(data, ModelJsonHandler(context, class_name))
