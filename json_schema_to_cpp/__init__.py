"""JSON Schema to C++ Generator

Generates C++ structs and the streaming JSON handlers that parse them from
JSON Schema definitions, following single-parent inheritance, extensions and
recursive types. A Python reader interprets the same class models for
checking the parsing behavior of the generated handlers.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    ClassConfig,
    ClassGenerator,
    Driver,
    GeneratorConfig,
    Schema,
    SchemaCache,
    SchemaError,
    SchemaLoadError,
    generate_all,
)

__all__ = [
    "AtomicWriter",
    "ClassConfig",
    "ClassGenerator",
    "Driver",
    "GeneratorConfig",
    "Schema",
    "SchemaCache",
    "SchemaError",
    "SchemaLoadError",
    "generate_all",
]
