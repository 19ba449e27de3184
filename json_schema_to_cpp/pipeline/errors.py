"""
Exceptions raised by the generator pipeline.
"""

from __future__ import annotations


class SchemaError(Exception):
    """Base class for errors caused by the input schemas or configuration."""

    pass


class SchemaLoadError(SchemaError):
    """Raised when a schema or a $ref target cannot be loaded.

    This can happen when:
    - The referenced file does not exist or cannot be read
    - The file is not valid JSON
    - A JSON pointer fragment does not point at an object

    Loading failures are fatal: there is no partial generation mode.
    """

    def __init__(self, ref: str, reason: str):
        super().__init__(f"Cannot load schema '{ref}': {reason}")
        self.ref = ref
        self.reason = reason


class ConfigError(SchemaError):
    """Raised when the generator configuration is invalid."""

    pass


class CodeWriteError(Exception):
    """Raised when generated code cannot be written to its destination."""

    pass
