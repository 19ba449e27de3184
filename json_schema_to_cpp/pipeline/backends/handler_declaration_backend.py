"""
Handler declaration backend.

Renders the streaming JSON handler class declaration of a class. A handler
dispatches object keys to the sub-handlers of its own properties and hands
unmatched keys to its base class's handler.

Extension classes also implement the generic extension handler interface. As
that interface redeclares every JSON event, the declaration overrides each of
them to forward to the base handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..analyzer.ir_nodes import ClassModel
from .base import CodeBackend


@dataclass(frozen=True)
class ForwardedEvent:
    """One JSON event the extension interface shares with the base handler."""

    name: str
    params: str = ""
    args: str = ""
    return_type: str = "IJsonHandler*"

    @property
    def returns(self) -> bool:
        return self.return_type != "void"


FORWARDED_EVENTS: tuple[ForwardedEvent, ...] = (
    ForwardedEvent("readNull"),
    ForwardedEvent("readBool", "bool b", "b"),
    ForwardedEvent("readInt32", "int32_t i", "i"),
    ForwardedEvent("readUint32", "uint32_t i", "i"),
    ForwardedEvent("readInt64", "int64_t i", "i"),
    ForwardedEvent("readUint64", "uint64_t i", "i"),
    ForwardedEvent("readDouble", "double d", "d"),
    ForwardedEvent("readString", "const std::string_view& str", "str"),
    ForwardedEvent("readObjectStart"),
    ForwardedEvent("readObjectEnd"),
    ForwardedEvent("readArrayStart"),
    ForwardedEvent("readArrayEnd"),
    ForwardedEvent(
        "reportWarning",
        "const std::string& warning, std::vector<std::string>&& context = std::vector<std::string>()",
        "warning, std::move(context)",
        "void",
    ),
)


class HandlerDeclarationBackend(CodeBackend):
    """Renders ``<Name>JsonHandler.h``."""

    TEMPLATE_NAME = "handler.h.jinja2"

    def file_name(self, model: ClassModel) -> str:
        return f"{model.reader_name}.h"

    def _prepare_context(self, model: ClassModel) -> dict[str, Any]:
        return {
            "headers": model.reader_headers,
            "forwarded_events": FORWARDED_EVENTS if model.extension_name else (),
            "reader_local_types": model.reader_local_types,
            "properties": model.materialized_properties,
        }
