"""
IR (Intermediate Representation) node definitions.

These nodes represent one analyzed and resolved schema, ready for code
generation. All references are resolved, types are determined and header
sets are deduplicated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..schema_cache import Schema


class TypeKind(Enum):
    """Kind of type in the IR."""

    STRING = "string"  # std::string
    INTEGER = "integer"  # int64_t
    NUMBER = "number"  # double
    BOOLEAN = "boolean"  # bool
    CLASS = "class"  # A generated struct
    ARRAY = "array"  # std::vector<T>
    DICT = "dict"  # std::unordered_map<std::string, T>
    ANY = "any"  # CesiumUtility::JsonValue


@dataclass(frozen=True)
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.ANY
    name: str = ""  # Class name, for CLASS types

    # Element type, for ARRAY and DICT
    type_args: tuple[TypeRef, ...] = ()

    # Whether the value is wrapped in std::optional
    is_optional: bool = False


@dataclass(frozen=True)
class Property:
    """One resolved field of a class.

    A property whose ``type`` is None was recognized but could not be mapped
    to a C++ type. It is absent from the struct and the handler, but its
    headers are still aggregated.
    """

    name: str
    brief_doc: str | None = None
    full_doc: str | None = None

    # Struct field type and handler field type
    type: str | None = None
    reader_type: str | None = None

    # Explicit initializer, already formatted as C++
    default_value: str | None = None

    # Value-initialize the field when there is no explicit default
    needs_initialization: bool = False

    headers: tuple[str, ...] = ()
    reader_headers: tuple[str, ...] = ()
    reader_headers_impl: tuple[str, ...] = ()

    local_types: tuple[str, ...] = ()
    reader_local_types: tuple[str, ...] = ()
    reader_local_types_impl: tuple[str, ...] = ()

    # Schemas this property refers to; each one is generated as its own class
    schemas: tuple[Schema, ...] = ()

    # Structural type, used by the runtime reader
    type_ref: TypeRef | None = None

    # Raw JSON default, used by the runtime reader
    default_json: Any = None

    @property
    def is_materialized(self) -> bool:
        return self.type is not None

    @property
    def needs_context(self) -> bool:
        """Whether the handler field is constructed with the parsing context."""
        return len(self.schemas) > 0


@dataclass(frozen=True)
class DispatchEntry:
    """One row of a class's key dispatch table."""

    key: str
    property: Property


@dataclass
class ClassModel:
    """A class ready to be rendered into a struct and a handler."""

    name: str = ""
    namespace: str = ""
    title: str = ""
    description: str | None = None

    # Qualified name of the base struct
    base: str = ""

    # Name of the base schema's class; None when deriving from the root object
    base_class_name: str | None = None

    # Schema of the base class, generated along with this one
    base_schema: Schema | None = None

    # Flags from the class configuration
    to_be_inherited: bool = False
    is_base_class: bool = False
    extension_name: str | None = None

    # All properties in schema declaration order, materialized or not
    properties: list[Property] = field(default_factory=list)

    # Deduplicated local type declarations
    local_types: list[str] = field(default_factory=list)
    reader_local_types: list[str] = field(default_factory=list)
    reader_local_types_impl: list[str] = field(default_factory=list)

    # Deduplicated and sorted include targets
    headers: list[str] = field(default_factory=list)
    reader_headers: list[str] = field(default_factory=list)
    reader_headers_impl: list[str] = field(default_factory=list)

    # Deduplicated schemas referenced by materialized properties
    schemas: list[Schema] = field(default_factory=list)

    @property
    def materialized_properties(self) -> list[Property]:
        return [p for p in self.properties if p.is_materialized]

    @property
    def dispatch_table(self) -> list[DispatchEntry]:
        """Keys handled by this class itself, in declaration order."""
        return [DispatchEntry(p.name, p) for p in self.materialized_properties]

    @property
    def struct_name(self) -> str:
        """Name of the emitted struct, which differs from ``name`` for spec shapes."""
        return f"{self.name}Spec" if self.to_be_inherited else self.name

    @property
    def header_name(self) -> str:
        return f'"{self.name}.h"'

    @property
    def reader_name(self) -> str:
        return f"{self.name}JsonHandler"

    @property
    def reader_header_name(self) -> str:
        return f'"{self.reader_name}.h"'
