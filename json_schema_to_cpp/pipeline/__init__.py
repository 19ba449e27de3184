"""
Pipeline - JSON Schema to C++ struct and JSON handler generator.

This module provides a multi-phase architecture for generating C++ code from
JSON schemas:

1. Phase 1 (SchemaCache): Load schemas and resolve $ref against a context stack
2. Phase 2 (Analyzer): Resolve the base class and properties into a ClassModel
3. Phase 3 (Backends): Render the struct, the handler declaration and the
   handler implementation from the same ClassModel
4. Phase 4 (Driver): Follow dependencies across schemas and write the files
"""

from __future__ import annotations

from .config import ClassConfig, ExtensionConfig, GeneratorConfig
from .driver import Driver, GenerationResult, generate_all
from .errors import CodeWriteError, ConfigError, SchemaError, SchemaLoadError
from .generator import ClassGenerator, GeneratedClass
from .schema_cache import Schema, SchemaCache
from .writer import AtomicWriter

__all__ = [
    "AtomicWriter",
    "ClassConfig",
    "ClassGenerator",
    "CodeWriteError",
    "ConfigError",
    "Driver",
    "ExtensionConfig",
    "GeneratedClass",
    "GenerationResult",
    "GeneratorConfig",
    "Schema",
    "SchemaCache",
    "SchemaError",
    "SchemaLoadError",
    "generate_all",
]
